"""PTR record model."""

from dataclasses import dataclass

from src.models.rrset import ID_SEPARATOR, Record, ResourceRecordSet, split_record_id
from src.services.reverse_dns import parse_ptr_record_name, ptr_record_fqdn
from src.utils.dns_names import is_subdomain
from src.utils.ip_utils import IPAddress


PTR = "PTR"


@dataclass
class PTRRecord:
    """PTR record mapping one host address to a hostname.

    Attributes:
        ip_address: IPv4 or IPv6 host address.
        hostname: Target name of the PTR.
        ttl: Time to live in seconds.
        reverse_zone: FQDN of the zone holding the record.

    Computed Properties:
        record_name: Full PTR owner name for ip_address.
        record_id: ``<record_name>:::PTR``.
    """

    ip_address: str
    hostname: str
    ttl: int
    reverse_zone: str

    @property
    def record_name(self) -> str:
        """Full PTR owner name, e.g. "3.2.1.10.in-addr.arpa.".

        Raises:
            InvalidIPFormat: If ip_address does not parse.
        """
        return ptr_record_fqdn(self.ip_address)

    @property
    def record_id(self) -> str:
        return f"{self.record_name}{ID_SEPARATOR}{PTR}"

    def in_zone(self) -> bool:
        """Check that the record name lies inside reverse_zone."""
        return is_subdomain(self.record_name, self.reverse_zone)

    def to_rrset(self) -> ResourceRecordSet:
        """Build the REPLACE change that creates or updates this record.

        Returns:
            ResourceRecordSet: One-record PTR set.
        """
        name = self.record_name
        return ResourceRecordSet(
            name=name,
            type=PTR,
            changetype="REPLACE",
            ttl=self.ttl,
            records=[Record(name=name, type=PTR, content=self.hostname, ttl=self.ttl)],
        )

    @staticmethod
    def ip_from_record_id(record_id: str) -> IPAddress:
        """Recover the host address from a record id.

        Args:
            record_id: ``<ptr name>:::PTR`` (a bare PTR name is accepted).

        Returns:
            IPAddress: Address the PTR name encodes.

        Raises:
            ValueError: If the id is empty or names a non-PTR record.
            ReverseDNSError: If the name is not a valid PTR name.

        Examples:
            >>> PTRRecord.ip_from_record_id("3.2.1.10.in-addr.arpa.:::PTR")
            IPv4Address('10.1.2.3')
        """
        name, rtype = split_record_id(record_id)
        if rtype and rtype != PTR:
            raise ValueError(f"Record {record_id!r} is not a PTR record")
        return parse_ptr_record_name(name)
