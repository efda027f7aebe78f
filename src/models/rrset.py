"""PowerDNS record and RRset payload models."""

from dataclasses import dataclass, field
from typing import List


ID_SEPARATOR = ":::"


@dataclass
class Record:
    """Single resource record inside an RRset.

    Attributes:
        name: Owner name (FQDN).
        type: Record type, e.g. "PTR".
        content: Record data, e.g. the target hostname.
        ttl: Time to live in seconds.
        disabled: Whether the record is served.
        set_ptr: Ask the server to maintain a matching PTR (unused for PTRs).
    """

    name: str
    type: str
    content: str
    ttl: int
    disabled: bool = False
    set_ptr: bool = False

    @property
    def id(self) -> str:
        """Identifier in ``<name>:::<type>`` form."""
        return f"{self.name}{ID_SEPARATOR}{self.type}"

    def to_json(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "content": self.content,
            "ttl": self.ttl,
            "disabled": self.disabled,
            "set-ptr": self.set_ptr,
        }


@dataclass
class ResourceRecordSet:
    """Change to one RRset of a zone (PATCH /zones/{zone} body entry).

    Attributes:
        name: Owner name (FQDN).
        type: Record type.
        changetype: "REPLACE" or "DELETE".
        ttl: TTL applied to the whole set.
        records: Records replacing the set (empty for DELETE).

    Invariants:
        - changetype == "DELETE" implies records is empty.
    """

    name: str
    type: str
    changetype: str
    ttl: int = 0
    records: List[Record] = field(default_factory=list)

    @property
    def id(self) -> str:
        return f"{self.name}{ID_SEPARATOR}{self.type}"

    @classmethod
    def delete(cls, name: str, rtype: str) -> "ResourceRecordSet":
        """Build a DELETE change for an RRset.

        Args:
            name: Owner name (FQDN).
            rtype: Record type.

        Returns:
            ResourceRecordSet: Change with no records.
        """
        return cls(name=name, type=rtype, changetype="DELETE")

    def to_json(self) -> dict:
        """Serialize to the API's JSON shape.

        ``records`` is omitted when empty, as the API expects for DELETE.
        """
        payload = {
            "name": self.name,
            "type": self.type,
            "changetype": self.changetype,
            "ttl": self.ttl,
        }
        if self.records:
            payload["records"] = [record.to_json() for record in self.records]
        return payload


def split_record_id(record_id: str) -> tuple[str, str]:
    """Split a ``<name>:::<type>`` identifier.

    Args:
        record_id: Record or RRset identifier.

    Returns:
        tuple[str, str]: (name, type); type is "" when absent.

    Raises:
        ValueError: If the identifier has no name part.

    Examples:
        >>> split_record_id("3.2.1.10.in-addr.arpa.:::PTR")
        ('3.2.1.10.in-addr.arpa.', 'PTR')
    """
    name, _, rtype = record_id.partition(ID_SEPARATOR)
    if not name:
        raise ValueError(f"Invalid record id: {record_id!r}")
    return name, rtype
