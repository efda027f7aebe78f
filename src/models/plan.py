"""Plan data models.

A Plan is the planner's output: reverse zones to create, PTR RRset changes
grouped per zone, imports mapped back to CIDRs/addresses, and every entry
that was rejected.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List

from src.models.errors import ReverseDNSError
from src.models.reverse_zone import ReverseZone
from src.models.rrset import ResourceRecordSet


@dataclass
class PlanError:
    """A rejected manifest entry.

    Attributes:
        field: Manifest path of the offending value (e.g. "ptr_records[2].ip_address").
        kind: Error kind (ErrorKind value or a planner kind such as "DuplicateZone").
        message: Human-readable reason.
    """

    field: str
    kind: str
    message: str

    @classmethod
    def from_exception(cls, field_name: str, exc: ValueError, kind: str) -> "PlanError":
        """Build from a raised error, preferring its own ErrorKind.

        Args:
            field_name: Manifest path of the value.
            exc: Error raised while processing the value.
            kind: Kind used when exc carries none.
        """
        if isinstance(exc, ReverseDNSError):
            kind = exc.kind.value
        return cls(field=field_name, kind=kind, message=str(exc))

    def to_json(self) -> dict:
        return {"field": self.field, "kind": self.kind, "message": self.message}


@dataclass
class ImportedZone:
    """Existing zone mapped back to the CIDR it covers."""

    name: str
    cidr: str


@dataclass
class ImportedPTRRecord:
    """Existing PTR record mapped back to its host address."""

    zone: str
    id: str
    ip_address: str


@dataclass
class Plan:
    """Planner output.

    Attributes:
        zones: Zones to create, in manifest order.
        rrsets: PTR RRset changes (REPLACE and DELETE) keyed by zone name.
        imported_zones: Zone imports resolved to CIDRs.
        imported_ptr_records: Record imports resolved to addresses.
        errors: Rejected entries.
        generated_at: Plan creation time (UTC).

    Invariants:
        - Zone names are unique.
        - Every rrsets key is a canonical reverse zone name: a zone in
          zones or the decoded reverse_zone a PTR entry named explicitly.
        - A record name appears in at most one RRset change.
    """

    zones: List[ReverseZone] = field(default_factory=list)
    rrsets: Dict[str, List[ResourceRecordSet]] = field(default_factory=dict)
    imported_zones: List[ImportedZone] = field(default_factory=list)
    imported_ptr_records: List[ImportedPTRRecord] = field(default_factory=list)
    errors: List[PlanError] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def rrset_count(self) -> int:
        return sum(len(rrsets) for rrsets in self.rrsets.values())

    @property
    def import_count(self) -> int:
        return len(self.imported_zones) + len(self.imported_ptr_records)

    def add_rrset(self, zone_name: str, rrset: ResourceRecordSet) -> None:
        self.rrsets.setdefault(zone_name, []).append(rrset)

    def to_json(self) -> dict:
        """Serialize to JSON-compatible dict with deterministic ordering.

        Returns:
            dict: JSON-serializable representation matching plan-schema.json.
        """
        return {
            "summary": {
                "generated_at": self.generated_at.isoformat(),
                "zones": len(self.zones),
                "ptr_records": self.rrset_count,
                "imports": self.import_count,
                "errors": len(self.errors),
            },
            "zones": [
                {"cidr": zone.cidr, **zone.to_api_payload()}
                for zone in sorted(self.zones, key=lambda z: z.name)
            ],
            "rrsets": [
                {
                    "zone": zone_name,
                    "rrsets": [
                        rrset.to_json()
                        for rrset in sorted(rrsets, key=lambda r: r.name)
                    ],
                }
                for zone_name, rrsets in sorted(self.rrsets.items())
            ],
            "imports": {
                "zones": [
                    {"name": z.name, "cidr": z.cidr} for z in self.imported_zones
                ],
                "ptr_records": [
                    {"zone": r.zone, "id": r.id, "ip_address": r.ip_address}
                    for r in self.imported_ptr_records
                ],
            },
            "errors": [error.to_json() for error in self.errors],
        }
