"""Error taxonomy for reverse-DNS name handling.

Every failure raised (or returned) by the reverse-DNS engine is a
ReverseDNSError subclass tagged with an ErrorKind, so callers can branch on
the kind without string matching.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of reverse-DNS codec failures."""

    INVALID_CIDR_FORMAT = "InvalidCIDRFormat"
    UNSUPPORTED_PREFIX_LENGTH = "UnsupportedPrefixLength"
    INVALID_IP_FORMAT = "InvalidIPFormat"
    UNSUPPORTED_SUFFIX = "UnsupportedSuffix"
    MALFORMED_PTR_NAME = "MalformedPTRName"  # Wrong label count
    INVALID_OCTET = "InvalidOctet"  # Non-numeric or > 255
    INVALID_NIBBLE = "InvalidNibble"  # Not a single hex digit
    MALFORMED_ZONE_NAME = "MalformedZoneName"  # Wrong label count or empty


class ReverseDNSError(ValueError):
    """Base error for the reverse-DNS engine.

    Attributes:
        kind: ErrorKind of the failure.
        value: Offending input (address, CIDR, name or label).
        field_name: Optional configuration field the input came from.
    """

    kind: ErrorKind

    def __init__(self, message: str, value: str = "", field_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.value = value
        self.field_name = field_name

    def to_json(self) -> dict:
        """Serialize to JSON-compatible dict.

        Returns:
            dict: kind, message and field (None when unattributed).
        """
        return {
            "kind": self.kind.value,
            "message": self.message,
            "field": self.field_name,
        }


class InvalidCIDRFormat(ReverseDNSError):
    kind = ErrorKind.INVALID_CIDR_FORMAT


class UnsupportedPrefixLength(ReverseDNSError):
    kind = ErrorKind.UNSUPPORTED_PREFIX_LENGTH


class InvalidIPFormat(ReverseDNSError):
    kind = ErrorKind.INVALID_IP_FORMAT


class UnsupportedSuffix(ReverseDNSError):
    kind = ErrorKind.UNSUPPORTED_SUFFIX


class MalformedPTRName(ReverseDNSError):
    kind = ErrorKind.MALFORMED_PTR_NAME


class InvalidOctet(ReverseDNSError):
    kind = ErrorKind.INVALID_OCTET


class InvalidNibble(ReverseDNSError):
    kind = ErrorKind.INVALID_NIBBLE


class MalformedZoneName(ReverseDNSError):
    kind = ErrorKind.MALFORMED_ZONE_NAME
