"""Unit tests for the planner."""

from dataclasses import replace

from src.services.manifest import parse_manifest
from src.services.planner import build_plan, find_zone_for


def test_build_plan(sample_manifest_data, config):
    """Test a clean manifest produces zones, rrsets and imports."""
    plan = build_plan(parse_manifest(sample_manifest_data), config)

    assert plan.errors == []
    assert [zone.name for zone in plan.zones] == [
        "16.172.in-addr.arpa.",
        "8.b.d.0.1.0.0.2.ip6.arpa.",
    ]
    assert [zone.kind for zone in plan.zones] == ["Master", "Slave"]

    v4 = plan.rrsets["16.172.in-addr.arpa."]
    assert [r.name for r in v4] == ["10.1.16.172.in-addr.arpa."]
    assert v4[0].ttl == 300
    assert v4[0].records[0].content == "web.example.com."

    v6 = plan.rrsets["8.b.d.0.1.0.0.2.ip6.arpa."]
    assert v6[0].ttl == 3600  # Config default
    assert v6[0].name.endswith(".8.b.d.0.1.0.0.2.ip6.arpa.")

    assert [(z.name, z.cidr) for z in plan.imported_zones] == [
        ("1.168.192.in-addr.arpa.", "192.168.1.0/24")
    ]
    assert plan.imported_ptr_records[0].ip_address == "172.16.1.20"
    assert plan.has_errors is False


def test_default_zone_kind_from_config(config):
    """Test zones without kind take the configured default."""
    manifest = parse_manifest(
        {"reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]}]}
    )

    plan = build_plan(manifest, replace(config, default_zone_kind="Slave"))

    assert plan.zones[0].kind == "Slave"


def test_strict_mode_rejects_unaligned_cidr(config):
    """Test strict mode validates CIDRs before naming zones."""
    manifest = parse_manifest(
        {"reverse_zones": [{"cidr": "172.16.0.0/20", "nameservers": ["ns1.example.com."]}]}
    )

    plan = build_plan(manifest, config)

    assert plan.zones == []
    assert len(plan.errors) == 1
    assert plan.errors[0].field == "reverse_zones[0].cidr"
    assert plan.errors[0].kind == "UnsupportedPrefixLength"
    assert "prefix length must be 8, 16, or 24" in plan.errors[0].message


def test_permissive_mode_names_unaligned_cidr(config):
    """Test permissive mode names zones from whole owned octets."""
    manifest = parse_manifest(
        {"reverse_zones": [{"cidr": "172.16.0.0/20", "nameservers": ["ns1.example.com."]}]}
    )

    plan = build_plan(manifest, replace(config, strict_zone_cidr=False))

    assert plan.errors == []
    assert plan.zones[0].name == "16.172.in-addr.arpa."


def test_permissive_mode_still_rejects_malformed_cidr(config):
    """Test malformed CIDRs fail even without strict validation."""
    manifest = parse_manifest(
        {"reverse_zones": [{"cidr": "172.16.0.0", "nameservers": ["ns1.example.com."]}]}
    )

    plan = build_plan(manifest, replace(config, strict_zone_cidr=False))

    assert plan.errors[0].kind == "InvalidCIDRFormat"
    assert plan.errors[0].field == "reverse_zones[0].cidr"


def test_duplicate_zone(config):
    """Test two CIDRs naming the same zone are reported."""
    manifest = parse_manifest(
        {
            "reverse_zones": [
                {"cidr": "172.16.0.0/16", "nameservers": ["ns1.example.com."]},
                {"cidr": "172.16.9.0/16", "nameservers": ["ns1.example.com."]},
            ]
        }
    )

    plan = build_plan(manifest, config)

    assert len(plan.zones) == 1
    assert plan.errors[0].kind == "DuplicateZone"
    assert plan.errors[0].field == "reverse_zones[1].cidr"


def test_invalid_nameserver(config):
    """Test invalid nameserver names reject the zone."""
    manifest = parse_manifest(
        {"reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1..example.com."]}]}
    )

    plan = build_plan(manifest, config)

    assert plan.zones == []
    assert plan.errors[0].kind == "InvalidDNSName"
    assert plan.errors[0].field == "reverse_zones[0].nameservers[0]"


def test_ptr_zone_inferred_most_specific(config):
    """Test PTR records go to the deepest containing zone."""
    manifest = parse_manifest(
        {
            "reverse_zones": [
                {"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]},
                {"cidr": "10.1.2.0/24", "nameservers": ["ns1.example.com."]},
            ],
            "ptr_records": [
                {"ip_address": "10.1.2.3", "hostname": "a.example.com."},
                {"ip_address": "10.9.9.9", "hostname": "b.example.com."},
            ],
        }
    )

    plan = build_plan(manifest, config)

    assert plan.errors == []
    assert [r.name for r in plan.rrsets["2.1.10.in-addr.arpa."]] == ["3.2.1.10.in-addr.arpa."]
    assert [r.name for r in plan.rrsets["10.in-addr.arpa."]] == ["9.9.9.10.in-addr.arpa."]


def test_ptr_without_zone(config):
    """Test a PTR with no containing zone is reported."""
    manifest = parse_manifest(
        {"ptr_records": [{"ip_address": "192.0.2.1", "hostname": "a.example.com."}]}
    )

    plan = build_plan(manifest, config)

    assert plan.rrsets == {}
    assert plan.errors[0].kind == "ZoneNotFound"
    assert plan.errors[0].field == "ptr_records[0].reverse_zone"


def test_ptr_outside_explicit_zone(config):
    """Test a PTR placed into a zone that does not contain it is reported."""
    manifest = parse_manifest(
        {
            "ptr_records": [
                {
                    "ip_address": "10.1.2.3",
                    "hostname": "a.example.com.",
                    "reverse_zone": "16.172.in-addr.arpa.",
                }
            ]
        }
    )

    plan = build_plan(manifest, config)

    assert plan.errors[0].kind == "RecordOutsideZone"


def test_ptr_entry_errors(config):
    """Test bad addresses, hostnames and zones are attributed to their field."""
    manifest = parse_manifest(
        {
            "ptr_records": [
                {"ip_address": "10.1.2.300", "hostname": "a.example.com."},
                {"ip_address": "10.1.2.3", "hostname": "a..example.com."},
                {"ip_address": "10.1.2.4", "hostname": "b.example.com.", "reverse_zone": "x..arpa."},
            ]
        }
    )

    plan = build_plan(manifest, config)

    assert [(e.field, e.kind) for e in plan.errors] == [
        ("ptr_records[0].ip_address", "InvalidIPFormat"),
        ("ptr_records[1].hostname", "InvalidDNSName"),
        ("ptr_records[2].reverse_zone", "UnsupportedSuffix"),
    ]


def test_duplicate_ptr(config):
    """Test two entries for the same address are reported."""
    manifest = parse_manifest(
        {
            "reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]}],
            "ptr_records": [
                {"ip_address": "10.1.2.3", "hostname": "a.example.com."},
                {"ip_address": "::ffff:10.1.2.3", "hostname": "b.example.com."},
            ],
        }
    )

    plan = build_plan(manifest, config)

    assert plan.rrset_count == 1
    assert plan.errors[0].kind == "DuplicateRecord"
    assert plan.errors[0].field == "ptr_records[1].ip_address"


def test_import_errors(config):
    """Test unresolvable imports are reported with their kind."""
    manifest = parse_manifest(
        {
            "imports": {
                "zones": ["example.com.", "1.2.3.4.in-addr.arpa."],
                "ptr_records": [
                    {"zone": "10.in-addr.arpa.", "id": "3.2.1.10.in-addr.arpa.:::A"},
                    {"zone": "10.in-addr.arpa.", "id": "2.1.10.in-addr.arpa.:::PTR"},
                ],
            }
        }
    )

    plan = build_plan(manifest, config)

    assert [(e.field, e.kind) for e in plan.errors] == [
        ("imports.zones[0]", "UnsupportedSuffix"),
        ("imports.zones[1]", "MalformedZoneName"),
        ("imports.ptr_records[0].id", "InvalidRecordId"),
        ("imports.ptr_records[1].id", "MalformedPTRName"),
    ]


def test_find_zone_for():
    """Test zone lookup picks the deepest match."""
    zones = ["10.in-addr.arpa.", "1.10.in-addr.arpa.", "16.172.in-addr.arpa."]

    assert find_zone_for("3.2.1.10.in-addr.arpa.", zones) == "1.10.in-addr.arpa."
    assert find_zone_for("3.2.9.10.in-addr.arpa.", zones) == "10.in-addr.arpa."
    assert find_zone_for("3.2.1.11.in-addr.arpa.", zones) is None
    assert find_zone_for("3.2.1.10.in-addr.arpa.", []) is None


def test_explicit_zone_must_be_absolute_reverse_name(config):
    """Test relative or root zone names are rejected instead of grouped apart."""
    manifest = parse_manifest(
        {
            "reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]}],
            "ptr_records": [
                {"ip_address": "10.1.2.4", "hostname": "a.example.com.", "reverse_zone": "10.in-addr.arpa"},
                {"ip_address": "10.1.2.5", "hostname": "b.example.com.", "reverse_zone": "@"},
                {"ip_address": "10.1.2.6", "hostname": "c.example.com.", "reverse_zone": "."},
            ],
        }
    )

    plan = build_plan(manifest, config)

    assert plan.rrsets == {}
    assert [(e.field, e.kind) for e in plan.errors] == [
        ("ptr_records[0].reverse_zone", "UnsupportedSuffix"),
        ("ptr_records[1].reverse_zone", "UnsupportedSuffix"),
        ("ptr_records[2].reverse_zone", "UnsupportedSuffix"),
    ]


def test_root_hostname_and_nameserver_rejected(config):
    """Test "@" and "." are not accepted as PTR targets or nameservers."""
    manifest = parse_manifest(
        {
            "reverse_zones": [
                {"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]},
                {"cidr": "172.16.0.0/16", "nameservers": ["."]},
            ],
            "ptr_records": [
                {"ip_address": "10.1.2.6", "hostname": "@"},
            ],
        }
    )

    plan = build_plan(manifest, config)

    assert plan.rrsets == {}
    assert [(e.field, e.kind) for e in plan.errors] == [
        ("reverse_zones[1].nameservers[0]", "InvalidDNSName"),
        ("ptr_records[0].hostname", "InvalidDNSName"),
    ]


def test_explicit_zone_spellings_share_one_group(config):
    """Test equivalent zone spellings are grouped under the canonical name."""
    manifest = parse_manifest(
        {
            "reverse_zones": [
                {"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]},
                {"cidr": "2001:db8::/32", "nameservers": ["ns1.example.com."]},
            ],
            "ptr_records": [
                {"ip_address": "10.1.2.3", "hostname": "a.example.com."},
                {"ip_address": "10.1.2.4", "hostname": "b.example.com.", "reverse_zone": "010.in-addr.arpa."},
                {"ip_address": "2001:db8::1", "hostname": "c.example.com.", "reverse_zone": "8.B.D.0.1.0.0.2.ip6.arpa."},
            ],
        }
    )

    plan = build_plan(manifest, config)

    assert plan.errors == []
    assert sorted(plan.rrsets) == ["10.in-addr.arpa.", "8.b.d.0.1.0.0.2.ip6.arpa."]
    assert [r.name for r in plan.rrsets["10.in-addr.arpa."]] == [
        "3.2.1.10.in-addr.arpa.",
        "4.2.1.10.in-addr.arpa.",
    ]


def test_deletes(config):
    """Test delete entries become DELETE changes in their zone."""
    manifest = parse_manifest(
        {
            "reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]}],
            "deletes": {
                "ptr_records": [
                    {"ip_address": "10.1.2.3"},
                    {"ip_address": "192.0.2.1", "reverse_zone": "2.0.192.in-addr.arpa."},
                ]
            },
        }
    )

    plan = build_plan(manifest, config)

    assert plan.errors == []
    v4 = plan.rrsets["10.in-addr.arpa."][0]
    assert (v4.name, v4.changetype, v4.records) == ("3.2.1.10.in-addr.arpa.", "DELETE", [])
    assert plan.rrsets["2.0.192.in-addr.arpa."][0].changetype == "DELETE"
    assert plan.rrset_count == 2


def test_delete_errors(config):
    """Test deletes are checked like PTR records and cannot clash with them."""
    manifest = parse_manifest(
        {
            "reverse_zones": [{"cidr": "10.0.0.0/8", "nameservers": ["ns1.example.com."]}],
            "ptr_records": [{"ip_address": "10.1.2.3", "hostname": "a.example.com."}],
            "deletes": {
                "ptr_records": [
                    {"ip_address": "10.1.2.3"},
                    {"ip_address": "not-an-ip"},
                    {"ip_address": "192.0.2.1"},
                    {"ip_address": "10.1.2.4", "reverse_zone": "16.172.in-addr.arpa."},
                ]
            },
        }
    )

    plan = build_plan(manifest, config)

    assert [(e.field, e.kind) for e in plan.errors] == [
        ("deletes.ptr_records[0].ip_address", "DuplicateRecord"),
        ("deletes.ptr_records[1].ip_address", "InvalidIPFormat"),
        ("deletes.ptr_records[2].reverse_zone", "ZoneNotFound"),
        ("deletes.ptr_records[3].reverse_zone", "RecordOutsideZone"),
    ]
    assert [r.changetype for r in plan.rrsets["10.in-addr.arpa."]] == ["REPLACE"]


def test_import_record_zone_checked(config):
    """Test imported records must lie inside the zone they are imported from."""
    manifest = parse_manifest(
        {
            "imports": {
                "ptr_records": [
                    {"zone": "x", "id": "3.2.1.10.in-addr.arpa.:::PTR"},
                    {"zone": "16.172.in-addr.arpa.", "id": "3.2.1.10.in-addr.arpa.:::PTR"},
                    {"zone": "10.in-addr.arpa.", "id": "3.2.1.10.in-addr.arpa.:::PTR"},
                ]
            }
        }
    )

    plan = build_plan(manifest, config)

    assert [(e.field, e.kind) for e in plan.errors] == [
        ("imports.ptr_records[0].zone", "UnsupportedSuffix"),
        ("imports.ptr_records[1].zone", "RecordOutsideZone"),
    ]
    assert [r.ip_address for r in plan.imported_ptr_records] == ["10.1.2.3"]
