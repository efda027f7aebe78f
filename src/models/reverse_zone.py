"""Reverse zone model."""

from dataclasses import dataclass, field
from typing import List

from src.services.reverse_dns import get_reverse_zone_name, parse_reverse_zone_name


@dataclass
class ReverseZone:
    """Reverse lookup zone declared by CIDR block.

    Attributes:
        cidr: Network the zone covers (e.g. "172.16.0.0/16").
        kind: "Master" or "Slave".
        nameservers: NS targets for the zone apex.

    Computed Properties:
        name: Zone FQDN derived from cidr (e.g. "16.172.in-addr.arpa.").
    """

    cidr: str
    kind: str = "Master"
    nameservers: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Zone FQDN for the CIDR block.

        Raises:
            InvalidCIDRFormat: If cidr does not parse.
        """
        return get_reverse_zone_name(self.cidr)

    @classmethod
    def from_zone_name(
        cls, name: str, kind: str = "Master", nameservers: List[str] | None = None
    ) -> "ReverseZone":
        """Rebuild a zone from its FQDN, as done when importing existing zones.

        Args:
            name: Zone FQDN.
            kind: Zone kind reported by the server.
            nameservers: NS targets reported by the server.

        Returns:
            ReverseZone: Zone whose cidr covers the name.

        Raises:
            ReverseDNSError: If name is not a reverse zone name.
        """
        return cls(
            cidr=parse_reverse_zone_name(name),
            kind=kind,
            nameservers=list(nameservers or []),
        )

    def to_api_payload(self) -> dict:
        """Body for creating the zone (POST /zones).

        Returns:
            dict: name, kind and nameservers.
        """
        return {
            "name": self.name,
            "kind": self.kind,
            "nameservers": list(self.nameservers),
        }
