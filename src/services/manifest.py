"""Manifest loading and schema validation.

The manifest is a YAML document declaring reverse zones, PTR records,
existing objects to import and PTR records to delete. It is validated
against MANIFEST_SCHEMA before anything is planned.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml
from jsonschema import ValidationError, validate


logger = logging.getLogger(__name__)


_DNS_NAME = {"type": "string", "minLength": 1, "maxLength": 255}

MANIFEST_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Reverse DNS manifest",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "reverse_zones": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["cidr", "nameservers"],
                "properties": {
                    "cidr": {"type": "string"},
                    "kind": {"enum": ["Master", "Slave"]},
                    "nameservers": {
                        "type": "array",
                        "minItems": 1,
                        "items": _DNS_NAME,
                    },
                },
            },
        },
        "ptr_records": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["ip_address", "hostname"],
                "properties": {
                    "ip_address": {"type": "string"},
                    "hostname": _DNS_NAME,
                    "ttl": {"type": "integer", "minimum": 0},
                    "reverse_zone": {"type": "string"},
                },
            },
        },
        "imports": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "zones": {"type": "array", "items": {"type": "string"}},
                "ptr_records": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": ["zone", "id"],
                        "properties": {
                            "zone": {"type": "string"},
                            "id": {"type": "string"},
                        },
                    },
                },
            },
        },
        "deletes": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "ptr_records": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": ["ip_address"],
                        "properties": {
                            "ip_address": {"type": "string"},
                            "reverse_zone": {"type": "string"},
                        },
                    },
                },
            },
        },
    },
}


class ManifestError(ValueError):
    """Manifest could not be read or does not match MANIFEST_SCHEMA."""


@dataclass
class Manifest:
    """Schema-valid manifest content.

    Attributes:
        reverse_zones: Zone entries (cidr, kind?, nameservers).
        ptr_records: PTR entries (ip_address, hostname, ttl?, reverse_zone?).
        import_zones: Existing zone names to map back to CIDRs.
        import_ptr_records: Existing record ids ({zone, id}) to map back to
            addresses.
        delete_ptr_records: PTR records to remove (ip_address, reverse_zone?).
    """

    reverse_zones: List[Dict[str, Any]] = field(default_factory=list)
    ptr_records: List[Dict[str, Any]] = field(default_factory=list)
    import_zones: List[str] = field(default_factory=list)
    import_ptr_records: List[Dict[str, str]] = field(default_factory=list)
    delete_ptr_records: List[Dict[str, str]] = field(default_factory=list)


def parse_manifest(data: Any) -> Manifest:
    """Validate loaded manifest data.

    Args:
        data: Result of YAML parsing; None (empty document) is an empty
            manifest.

    Returns:
        Manifest: Validated content.

    Raises:
        ManifestError: If data does not match MANIFEST_SCHEMA.
    """
    if data is None:
        data = {}

    try:
        validate(instance=data, schema=MANIFEST_SCHEMA)
    except ValidationError as e:
        location = "/".join(str(part) for part in e.absolute_path) or "<root>"
        raise ManifestError(f"Invalid manifest at {location}: {e.message}") from None

    imports = data.get("imports", {})
    deletes = data.get("deletes", {})
    return Manifest(
        reverse_zones=list(data.get("reverse_zones", [])),
        ptr_records=list(data.get("ptr_records", [])),
        import_zones=list(imports.get("zones", [])),
        import_ptr_records=list(imports.get("ptr_records", [])),
        delete_ptr_records=list(deletes.get("ptr_records", [])),
    )


def load_manifest(path: str | Path) -> Manifest:
    """Read and validate a YAML manifest file.

    Args:
        path: Manifest file path.

    Returns:
        Manifest: Validated content.

    Raises:
        ManifestError: If the file is missing, is not valid YAML, or does
            not match MANIFEST_SCHEMA.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(f"Cannot read manifest {path}: {e.strerror}") from None
    except yaml.YAMLError as e:
        raise ManifestError(f"Manifest {path} is not valid YAML: {e}") from None

    manifest = parse_manifest(data)
    logger.info(
        f"Loaded manifest {path}: {len(manifest.reverse_zones)} zones, "
        f"{len(manifest.ptr_records)} PTR records"
    )
    return manifest
