"""Reverse-DNS addressing engine.

Converts between IP addresses / CIDR blocks and the names used for reverse
lookup under ``in-addr.arpa.`` and ``ip6.arpa.``:

- validate_cidr: checks a CIDR against the allowed reverse-zone cut points.
- get_ptr_record_name / parse_ptr_record_name: host address <-> PTR name.
- get_reverse_zone_name / parse_reverse_zone_name: CIDR <-> zone name.

All functions are pure and safe to call from any thread.
"""

import ipaddress
import logging

from src.models.address_family import AddressFamily
from src.models.errors import (
    MalformedPTRName,
    MalformedZoneName,
    ReverseDNSError,
    UnsupportedPrefixLength,
)
from src.utils.ip_utils import (
    IPAddress,
    address_labels,
    family_of,
    nibbles_to_bytes,
    parse_cidr,
    parse_ip,
    parse_nibble,
    parse_octet,
    reverse_labels,
    split_reverse_name,
    unmap_ipv4,
)


logger = logging.getLogger(__name__)

IPV4_ZONE_PREFIX_LENGTHS = (8, 16, 24)
IPV6_MIN_ZONE_PREFIX = 4
IPV6_MAX_ZONE_PREFIX = 124


def validate_cidr(cidr: str, field_name: str = "cidr") -> list[ReverseDNSError]:
    """Validate a CIDR block for use as a reverse zone.

    IPv4 blocks must end on an octet boundary (/8, /16 or /24); IPv6 blocks
    on a nibble boundary between /4 and /124. IPv4-mapped IPv6 networks are
    held to the IPv4 rule.

    Args:
        cidr: CIDR string to check.
        field_name: Configuration field the value came from, attached to
            every returned error.

    Returns:
        list[ReverseDNSError]: Empty when the block is acceptable.

    Examples:
        >>> validate_cidr("10.0.0.0/8")
        []
        >>> [str(e) for e in validate_cidr("10.0.0.0/12")]
        ['IPv4 prefix length must be 8, 16, or 24']
    """
    try:
        network = parse_cidr(cidr)
    except ReverseDNSError as e:
        e.field_name = field_name
        logger.debug(f"Rejected {field_name}={cidr!r}: {e}")
        return [e]

    prefix = network.prefixlen
    if family_of(unmap_ipv4(network.network_address)) is AddressFamily.IPV4:
        if prefix not in IPV4_ZONE_PREFIX_LENGTHS:
            error = UnsupportedPrefixLength(
                "IPv4 prefix length must be 8, 16, or 24",
                value=cidr,
                field_name=field_name,
            )
            logger.debug(f"Rejected {field_name}={cidr!r}: {error}")
            return [error]
    elif (
        prefix % 4 != 0
        or prefix < IPV6_MIN_ZONE_PREFIX
        or prefix > IPV6_MAX_ZONE_PREFIX
    ):
        error = UnsupportedPrefixLength(
            "IPv6 prefix length must be a multiple of 4 between 4 and 124",
            value=cidr,
            field_name=field_name,
        )
        logger.debug(f"Rejected {field_name}={cidr!r}: {error}")
        return [error]

    return []


def get_ptr_record_name(ip: str) -> str:
    """Build the PTR label portion for a host address.

    The reverse suffix is not included; see ptr_record_fqdn().

    Args:
        ip: IPv4 or IPv6 address (no prefix length).

    Returns:
        str: Reversed octets (IPv4) or 32 reversed nibbles (IPv6).

    Raises:
        InvalidIPFormat: If ip is not an address.

    Examples:
        >>> get_ptr_record_name("10.1.2.3")
        '3.2.1.10'
        >>> get_ptr_record_name("2001:db8::1")[:16]
        '1.0.0.0.0.0.0.0.'
    """
    addr = unmap_ipv4(parse_ip(ip))
    return reverse_labels(address_labels(addr))


def ptr_record_fqdn(ip: str) -> str:
    """Build the fully qualified PTR name for a host address.

    Examples:
        >>> ptr_record_fqdn("10.1.2.3")
        '3.2.1.10.in-addr.arpa.'
    """
    addr = unmap_ipv4(parse_ip(ip))
    return reverse_labels(address_labels(addr)) + family_of(addr).suffix


def parse_ptr_record_name(name: str) -> IPAddress:
    """Recover the host address encoded in a PTR name.

    Args:
        name: Fully qualified PTR name, trailing dot included.

    Returns:
        IPAddress: Decoded address.

    Raises:
        UnsupportedSuffix: If name is not under in-addr.arpa. or ip6.arpa.
        MalformedPTRName: If the label count does not encode a full address.
        InvalidOctet: If an IPv4 label is not a canonical decimal octet.
        InvalidNibble: If an IPv6 label is not a single hex digit.

    Examples:
        >>> parse_ptr_record_name("3.2.1.10.in-addr.arpa.")
        IPv4Address('10.1.2.3')
    """
    family, labels = split_reverse_name(name)

    if len(labels) != family.host_labels:
        raise MalformedPTRName(
            f"invalid {_family_label(family)} PTR record name format: {name}",
            value=name,
        )

    if family is AddressFamily.IPV4:
        octets = [parse_octet(label, canonical=True) for label in reversed(labels)]
        return ipaddress.IPv4Address(bytes(octets))

    nibbles = [parse_nibble(label) for label in reversed(labels)]
    return ipaddress.IPv6Address(nibbles_to_bytes(nibbles))


def get_reverse_zone_name(cidr: str) -> str:
    """Build the reverse zone name owning a CIDR block.

    Only whole labels covered by the prefix are emitted (prefix // 8 octets
    for IPv4, prefix // 4 nibbles for IPv6). The allowed cut points are not
    enforced here; call validate_cidr() first when they matter.

    Args:
        cidr: CIDR string; host bits are masked off.

    Returns:
        str: Zone FQDN with trailing dot.

    Raises:
        InvalidCIDRFormat: If cidr is not valid CIDR notation.

    Examples:
        >>> get_reverse_zone_name("172.16.0.0/16")
        '16.172.in-addr.arpa.'
        >>> get_reverse_zone_name("2001:db8::/32")
        '8.b.d.0.1.0.0.2.ip6.arpa.'
    """
    network = parse_cidr(cidr)
    family = family_of(network.network_address)

    owned = address_labels(network.network_address)[
        : network.prefixlen // family.label_bits
    ]
    if not owned:
        return family.root_zone
    return reverse_labels(owned) + family.suffix


def parse_reverse_zone_name(name: str) -> str:
    """Recover the CIDR block a reverse zone name covers.

    Labels missing from the name are treated as zero.

    Args:
        name: Zone FQDN, trailing dot included.

    Returns:
        str: CIDR in ``network/prefix`` form, e.g. ``172.16.0.0/16``.

    Raises:
        MalformedZoneName: If the name is empty, has an empty label or has
            too many labels for its family.
        UnsupportedSuffix: If name is not under in-addr.arpa. or ip6.arpa.
        InvalidOctet: If an IPv4 label is not a decimal octet.
        InvalidNibble: If an IPv6 label is not a single hex digit.
        UnsupportedPrefixLength: If an IPv6 name implies a prefix outside
            /4../124.

    Examples:
        >>> parse_reverse_zone_name("16.172.in-addr.arpa.")
        '172.16.0.0/16'
        >>> parse_reverse_zone_name("8.b.d.0.1.0.0.2.ip6.arpa.")
        '2001:db8::/32'
    """
    if not name:
        raise MalformedZoneName("reverse zone name is empty", value="")

    family, labels = split_reverse_name(name)

    if not 1 <= len(labels) <= family.max_zone_labels or "" in labels:
        raise MalformedZoneName(
            f"invalid {_family_label(family)} reverse zone name: {name}",
            value=name,
        )

    prefix = len(labels) * family.label_bits

    if family is AddressFamily.IPV4:
        octets = [parse_octet(label) for label in reversed(labels)]
        octets += [0] * (family.host_labels - len(octets))
        network = ipaddress.IPv4Network((bytes(octets), prefix))
        return str(network)

    nibbles = [parse_nibble(label) for label in reversed(labels)]
    if prefix < IPV6_MIN_ZONE_PREFIX or prefix > IPV6_MAX_ZONE_PREFIX:
        raise UnsupportedPrefixLength(
            f"invalid IPv6 prefix length: {prefix}", value=name
        )
    nibbles += [0] * (family.host_labels - len(nibbles))
    network = ipaddress.IPv6Network((nibbles_to_bytes(nibbles), prefix))
    return str(network)


def _family_label(family: AddressFamily) -> str:
    return "IPv4" if family is AddressFamily.IPV4 else "IPv6"
