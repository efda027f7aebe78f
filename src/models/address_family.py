"""Address family model for reverse-DNS naming."""

from enum import Enum


IPV4_REVERSE_SUFFIX = ".in-addr.arpa."
IPV6_REVERSE_SUFFIX = ".ip6.arpa."


class AddressFamily(Enum):
    """IP address family with its reverse-lookup naming parameters.

    Attributes:
        suffix: Reverse-lookup domain appended to the owned labels.
        label_bits: Address bits encoded by one DNS label.
        host_labels: Labels needed to encode a full host address.
        max_zone_labels: Most labels a reverse zone name may carry.
    """

    IPV4 = 4
    IPV6 = 6

    @property
    def suffix(self) -> str:
        return IPV4_REVERSE_SUFFIX if self is AddressFamily.IPV4 else IPV6_REVERSE_SUFFIX

    @property
    def label_bits(self) -> int:
        return 8 if self is AddressFamily.IPV4 else 4

    @property
    def host_labels(self) -> int:
        return 4 if self is AddressFamily.IPV4 else 32

    @property
    def max_zone_labels(self) -> int:
        return 3 if self is AddressFamily.IPV4 else 32

    @property
    def root_zone(self) -> str:
        """Reverse-lookup domain without the leading dot."""
        return self.suffix[1:]

    @classmethod
    def from_version(cls, version: int) -> "AddressFamily":
        """Map an ipaddress version number to its family.

        Args:
            version: 4 or 6.

        Returns:
            AddressFamily: Matching family.

        Raises:
            ValueError: If version is neither 4 nor 6.
        """
        return cls(version)
