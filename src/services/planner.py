"""Planner turning a manifest into reverse zone and PTR changes.

Each manifest entry is checked on its own; a rejected entry becomes a
PlanError and planning continues, so one run reports every problem.
"""

import time

from src.config import Config
from src.models.errors import ReverseDNSError
from src.models.plan import ImportedPTRRecord, ImportedZone, Plan, PlanError
from src.models.ptr_record import PTR, PTRRecord
from src.models.reverse_zone import ReverseZone
from src.models.rrset import ResourceRecordSet, split_record_id
from src.services.logger import (
    log_import_resolved,
    log_plan_summary,
    log_ptr_delete_planned,
    log_ptr_planned,
    log_zone_planned,
)
from src.services.manifest import Manifest
from src.services.reverse_dns import ptr_record_fqdn, validate_cidr
from src.utils.dns_names import is_subdomain, validate_dns_name


def plan_zones(manifest: Manifest, config: Config, plan: Plan) -> None:
    """Add the manifest's reverse zones to the plan.

    With config.strict_zone_cidr the CIDR must pass validate_cidr() first;
    otherwise any parseable CIDR is turned into a zone name.

    Args:
        manifest: Validated manifest.
        config: Application configuration.
        plan: Plan to extend.
    """
    seen: dict[str, str] = {}

    for i, entry in enumerate(manifest.reverse_zones):
        prefix = f"reverse_zones[{i}]"
        cidr = entry["cidr"]

        if config.strict_zone_cidr:
            cidr_errors = validate_cidr(cidr, f"{prefix}.cidr")
            if cidr_errors:
                plan.errors.extend(
                    PlanError.from_exception(e.field_name, e, e.kind.value)
                    for e in cidr_errors
                )
                continue

        nameserver_errors = []
        for j, nameserver in enumerate(entry["nameservers"]):
            try:
                validate_dns_name(nameserver, "nameserver")
            except ValueError as e:
                nameserver_errors.append(
                    PlanError.from_exception(
                        f"{prefix}.nameservers[{j}]", e, "InvalidDNSName"
                    )
                )
        if nameserver_errors:
            plan.errors.extend(nameserver_errors)
            continue

        zone = ReverseZone(
            cidr=cidr,
            kind=entry.get("kind", config.default_zone_kind),
            nameservers=list(entry["nameservers"]),
        )
        try:
            zone_name = zone.name
        except ReverseDNSError as e:
            plan.errors.append(PlanError.from_exception(f"{prefix}.cidr", e, ""))
            continue

        if zone_name in seen:
            plan.errors.append(
                PlanError(
                    field=f"{prefix}.cidr",
                    kind="DuplicateZone",
                    message=f"Zone {zone_name} is already declared by {seen[zone_name]}",
                )
            )
            continue

        seen[zone_name] = prefix
        plan.zones.append(zone)
        log_zone_planned(cidr, zone_name, zone.kind)


def find_zone_for(record_name: str, zone_names: list[str]) -> str | None:
    """Pick the most specific zone containing a record name.

    Args:
        record_name: PTR owner name.
        zone_names: Candidate zone FQDNs.

    Returns:
        str | None: Deepest matching zone, or None.

    Examples:
        >>> find_zone_for("3.2.1.10.in-addr.arpa.", ["10.in-addr.arpa.", "1.10.in-addr.arpa."])
        '1.10.in-addr.arpa.'
    """
    matches = [name for name in zone_names if is_subdomain(record_name, name)]
    if not matches:
        return None
    return max(matches, key=lambda name: name.count("."))


def _resolve_zone(
    prefix: str,
    record_name: str,
    entry: dict,
    zone_names: list[str],
    plan: Plan,
) -> str | None:
    """Find the zone an entry's PTR name belongs to.

    An explicit reverse_zone is decoded and re-encoded so that equivalent
    spellings ("010.in-addr.arpa.", upper-case nibbles) share one key.
    Without one, the deepest planned zone is used. Errors are added to the
    plan and None is returned; containment is left to the caller.
    """
    field_name = f"{prefix}.reverse_zone"
    explicit = entry.get("reverse_zone")

    if explicit is None:
        zone_name = find_zone_for(record_name, zone_names)
        if zone_name is None:
            plan.errors.append(
                PlanError(
                    field=field_name,
                    kind="ZoneNotFound",
                    message=f"No planned reverse zone contains {record_name}",
                )
            )
        return zone_name

    try:
        zone_name = ReverseZone.from_zone_name(explicit).name
    except ReverseDNSError as e:
        plan.errors.append(PlanError.from_exception(field_name, e, ""))
        return None
    return zone_name


def _outside_zone_error(field_name: str, record_name: str, zone_name: str) -> PlanError:
    return PlanError(
        field=field_name,
        kind="RecordOutsideZone",
        message=f"{record_name} is not inside zone {zone_name}",
    )


def _duplicate_error(prefix: str, record_name: str, owner: str) -> PlanError:
    return PlanError(
        field=f"{prefix}.ip_address",
        kind="DuplicateRecord",
        message=f"{record_name} is already declared by {owner}",
    )


def plan_ptr_records(
    manifest: Manifest, config: Config, plan: Plan, seen: dict[str, str]
) -> None:
    """Add the manifest's PTR records to the plan.

    A record without reverse_zone is placed into the deepest planned zone
    that contains it.

    Args:
        manifest: Validated manifest.
        config: Application configuration.
        plan: Plan to extend; its zones must already be planned.
        seen: Record names already claimed, mapped to the claiming entry.
    """
    zone_names = [zone.name for zone in plan.zones]

    for i, entry in enumerate(manifest.ptr_records):
        prefix = f"ptr_records[{i}]"
        ip_address = entry["ip_address"]

        try:
            record_name = ptr_record_fqdn(ip_address)
        except ReverseDNSError as e:
            plan.errors.append(PlanError.from_exception(f"{prefix}.ip_address", e, ""))
            continue

        try:
            validate_dns_name(entry["hostname"], "hostname")
        except ValueError as e:
            plan.errors.append(
                PlanError.from_exception(f"{prefix}.hostname", e, "InvalidDNSName")
            )
            continue

        zone_name = _resolve_zone(prefix, record_name, entry, zone_names, plan)
        if zone_name is None:
            continue

        record = PTRRecord(
            ip_address=ip_address,
            hostname=entry["hostname"],
            ttl=entry.get("ttl", config.default_ttl),
            reverse_zone=zone_name,
        )

        if not record.in_zone():
            plan.errors.append(
                _outside_zone_error(f"{prefix}.reverse_zone", record_name, zone_name)
            )
            continue

        if record_name in seen:
            plan.errors.append(_duplicate_error(prefix, record_name, seen[record_name]))
            continue

        seen[record_name] = prefix
        plan.add_rrset(zone_name, record.to_rrset())
        log_ptr_planned(ip_address, record_name, zone_name, "reverse_zone" not in entry)


def plan_ptr_deletes(manifest: Manifest, plan: Plan, seen: dict[str, str]) -> None:
    """Add DELETE changes for the manifest's deletes section.

    A name may not be both replaced and deleted in one plan.

    Args:
        manifest: Validated manifest.
        plan: Plan to extend; its zones must already be planned.
        seen: Record names already claimed, mapped to the claiming entry.
    """
    zone_names = [zone.name for zone in plan.zones]

    for i, entry in enumerate(manifest.delete_ptr_records):
        prefix = f"deletes.ptr_records[{i}]"

        try:
            record_name = ptr_record_fqdn(entry["ip_address"])
        except ReverseDNSError as e:
            plan.errors.append(PlanError.from_exception(f"{prefix}.ip_address", e, ""))
            continue

        zone_name = _resolve_zone(prefix, record_name, entry, zone_names, plan)
        if zone_name is None:
            continue

        if not is_subdomain(record_name, zone_name):
            plan.errors.append(
                _outside_zone_error(f"{prefix}.reverse_zone", record_name, zone_name)
            )
            continue

        if record_name in seen:
            plan.errors.append(_duplicate_error(prefix, record_name, seen[record_name]))
            continue

        seen[record_name] = prefix
        plan.add_rrset(zone_name, ResourceRecordSet.delete(record_name, PTR))
        log_ptr_delete_planned(entry["ip_address"], record_name, zone_name)


def plan_imports(manifest: Manifest, plan: Plan) -> None:
    """Resolve existing zones and PTR records back to CIDRs and addresses.

    Args:
        manifest: Validated manifest.
        plan: Plan to extend.
    """
    for i, zone_name in enumerate(manifest.import_zones):
        try:
            zone = ReverseZone.from_zone_name(zone_name)
        except ReverseDNSError as e:
            plan.errors.append(PlanError.from_exception(f"imports.zones[{i}]", e, ""))
            continue
        plan.imported_zones.append(ImportedZone(name=zone_name, cidr=zone.cidr))
        log_import_resolved(zone_name, zone.cidr)

    for i, entry in enumerate(manifest.import_ptr_records):
        prefix = f"imports.ptr_records[{i}]"
        try:
            ip = PTRRecord.ip_from_record_id(entry["id"])
        except ValueError as e:
            plan.errors.append(
                PlanError.from_exception(f"{prefix}.id", e, "InvalidRecordId")
            )
            continue

        try:
            zone_name = ReverseZone.from_zone_name(entry["zone"]).name
        except ReverseDNSError as e:
            plan.errors.append(PlanError.from_exception(f"{prefix}.zone", e, ""))
            continue

        record_name, _ = split_record_id(entry["id"])
        if not is_subdomain(record_name, zone_name):
            plan.errors.append(
                _outside_zone_error(f"{prefix}.zone", record_name, zone_name)
            )
            continue

        plan.imported_ptr_records.append(
            ImportedPTRRecord(zone=entry["zone"], id=entry["id"], ip_address=str(ip))
        )
        log_import_resolved(entry["id"], str(ip))


def build_plan(manifest: Manifest, config: Config) -> Plan:
    """Plan zones, PTR records, deletes and imports for a manifest.

    Args:
        manifest: Validated manifest.
        config: Application configuration.

    Returns:
        Plan: Planned changes and rejected entries.
    """
    start = time.time()
    plan = Plan()
    seen: dict[str, str] = {}

    plan_zones(manifest, config, plan)
    plan_ptr_records(manifest, config, plan, seen)
    plan_ptr_deletes(manifest, plan, seen)
    plan_imports(manifest, plan)

    log_plan_summary(
        zones=len(plan.zones),
        ptr_records=plan.rrset_count,
        imports=plan.import_count,
        errors=len(plan.errors),
        duration_sec=time.time() - start,
    )
    return plan
