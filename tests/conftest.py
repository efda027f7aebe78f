"""pytest fixtures for testing."""

import pytest


@pytest.fixture
def config():
    """Default configuration for planner tests."""
    from src.config import Config

    return Config(
        manifest_path="manifest.yaml",
        default_ttl=3600,
        default_zone_kind="Master",
        strict_zone_cidr=True,
        output_format="json",
        verbose=False,
    )


@pytest.fixture
def sample_manifest_data():
    """Manifest mapping covering zones, PTR records and imports."""
    return {
        "reverse_zones": [
            {
                "cidr": "172.16.0.0/16",
                "nameservers": ["ns1.example.com.", "ns2.example.com."],
            },
            {
                "cidr": "2001:db8::/32",
                "kind": "Slave",
                "nameservers": ["ns1.example.com."],
            },
        ],
        "ptr_records": [
            {
                "ip_address": "172.16.1.10",
                "hostname": "web.example.com.",
                "ttl": 300,
            },
            {
                "ip_address": "2001:db8::1",
                "hostname": "v6.example.com.",
                "reverse_zone": "8.b.d.0.1.0.0.2.ip6.arpa.",
            },
        ],
        "imports": {
            "zones": ["1.168.192.in-addr.arpa."],
            "ptr_records": [
                {"zone": "16.172.in-addr.arpa.", "id": "20.1.16.172.in-addr.arpa.:::PTR"}
            ],
        },
    }


@pytest.fixture
def manifest_file(tmp_path, sample_manifest_data):
    """Sample manifest written to a YAML file."""
    import yaml

    path = tmp_path / "manifest.yaml"
    path.write_text(yaml.safe_dump(sample_manifest_data))
    return path
