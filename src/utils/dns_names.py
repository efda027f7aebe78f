"""DNS name checks for hostnames and nameservers."""

import dns.exception
import dns.name


MAX_NAME_LENGTH = 255


def validate_dns_name(value: str, field_name: str) -> str:
    """Validate a DNS name supplied in configuration.

    Args:
        value: Name text, absolute or relative.
        field_name: Field the value came from, used in the error message.

    Returns:
        str: The value unchanged.

    Raises:
        ValueError: If the value is empty, longer than 255 characters, not
            a syntactically valid DNS name, or the root name ("." or "@").

    Examples:
        >>> validate_dns_name("ns1.example.com.", "nameservers")
        'ns1.example.com.'
    """
    if not isinstance(value, str) or not 1 <= len(value) <= MAX_NAME_LENGTH:
        raise ValueError(
            f"{field_name} must be between 1 and {MAX_NAME_LENGTH} characters"
        )

    try:
        name = dns.name.from_text(value)
    except dns.exception.DNSException as e:
        raise ValueError(f"{field_name} is not a valid DNS name: {e}") from None

    # "@" parses relative to the root origin
    if name in (dns.name.root, dns.name.empty):
        raise ValueError(f"{field_name} must not be the root name: {value!r}")

    return value


def is_subdomain(name: str, zone: str) -> bool:
    """Check whether name equals or lies below zone (case-insensitive).

    Examples:
        >>> is_subdomain("3.2.1.10.in-addr.arpa.", "1.10.in-addr.arpa.")
        True
    """
    return dns.name.from_text(name).is_subdomain(dns.name.from_text(zone))
