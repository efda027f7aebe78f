"""IP address utilities for reverse-DNS names.

Shared octet/nibble primitives used by the PTR and reverse-zone codecs.
"""

import ipaddress
import re

from src.models.address_family import AddressFamily
from src.models.errors import (
    InvalidCIDRFormat,
    InvalidIPFormat,
    InvalidNibble,
    InvalidOctet,
    UnsupportedSuffix,
)


IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network

_DECIMAL_LABEL = re.compile(r"[0-9]+")
_HEX_NIBBLE = re.compile(r"[0-9a-fA-F]")


def parse_ip(ip: str) -> IPAddress:
    """Parse an IPv4 or IPv6 address string.

    Scoped IPv6 addresses (``fe80::1%eth0``) and non-string input are
    rejected.

    Args:
        ip: Address in dotted-quad or RFC 4291 text form.

    Returns:
        IPAddress: Parsed address.

    Raises:
        InvalidIPFormat: If the string is not an address of either family.

    Examples:
        >>> parse_ip("10.1.2.3")
        IPv4Address('10.1.2.3')
    """
    if not isinstance(ip, str) or "%" in ip:
        raise InvalidIPFormat(f"invalid IP address: {ip}", value=str(ip))
    try:
        return ipaddress.ip_address(ip)
    except ValueError:
        raise InvalidIPFormat(f"invalid IP address: {ip}", value=ip) from None


def parse_cidr(cidr: str) -> IPNetwork:
    """Parse a CIDR string into a network with host bits masked off.

    Only ``address/prefix-length`` is accepted; bare addresses and
    netmask notation (``10.0.0.0/255.0.0.0``) are rejected.

    Args:
        cidr: CIDR string such as ``172.16.0.0/16``.

    Returns:
        IPNetwork: Parsed network.

    Raises:
        InvalidCIDRFormat: If the string is not valid CIDR notation.
    """
    if not isinstance(cidr, str) or "%" in cidr:
        raise InvalidCIDRFormat(f"invalid CIDR format: {cidr}", value=str(cidr))

    address, sep, prefix = cidr.partition("/")
    if not sep or not address or not _DECIMAL_LABEL.fullmatch(prefix):
        raise InvalidCIDRFormat(f"invalid CIDR format: {cidr}", value=cidr)

    try:
        return ipaddress.ip_network(cidr, strict=False)
    except ValueError as e:
        raise InvalidCIDRFormat(f"invalid CIDR format: {e}", value=cidr) from None


def unmap_ipv4(addr: IPAddress) -> IPAddress:
    """Return the embedded IPv4 address of an IPv4-mapped IPv6 address.

    Other addresses are returned unchanged.
    """
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def family_of(addr: IPAddress) -> AddressFamily:
    """Get the address family of a parsed address."""
    return AddressFamily.from_version(addr.version)


def address_octets(addr: IPAddress) -> list[str]:
    """Split an address into decimal octet labels, most significant first.

    Examples:
        >>> address_octets(ipaddress.ip_address("172.16.0.1"))
        ['172', '16', '0', '1']
    """
    return [str(byte) for byte in addr.packed]


def address_nibbles(addr: IPAddress) -> list[str]:
    """Split an address into lowercase hex nibble labels, most significant first.

    Examples:
        >>> address_nibbles(ipaddress.ip_address("2001:db8::"))[:8]
        ['2', '0', '0', '1', '0', 'd', 'b', '8']
    """
    return list(addr.packed.hex())


def address_labels(addr: IPAddress) -> list[str]:
    """Split an address into the labels its family uses in reverse names."""
    if family_of(addr) is AddressFamily.IPV4:
        return address_octets(addr)
    return address_nibbles(addr)


def reverse_labels(labels: list[str]) -> str:
    """Join labels in reverse order with dots.

    Examples:
        >>> reverse_labels(["10", "1", "2", "3"])
        '3.2.1.10'
    """
    return ".".join(reversed(labels))


def split_reverse_name(name: str) -> tuple[AddressFamily, list[str]]:
    """Detect the family of a reverse-lookup name and split off its labels.

    The trailing dot is required: ``10.in-addr.arpa`` is not accepted.

    Args:
        name: Fully qualified reverse name.

    Returns:
        tuple[AddressFamily, list[str]]: Family and the labels before the
            suffix, in the order they appear in the name.

    Raises:
        UnsupportedSuffix: If the name ends in neither reverse suffix.

    Examples:
        >>> split_reverse_name("16.172.in-addr.arpa.")
        (<AddressFamily.IPV4: 4>, ['16', '172'])
    """
    if isinstance(name, str):
        for family in AddressFamily:
            if name.endswith(family.suffix):
                return family, name[: -len(family.suffix)].split(".")

    raise UnsupportedSuffix(f"unsupported reverse name format: {name}", value=str(name))


def parse_octet(label: str, canonical: bool = False) -> int:
    """Parse a decimal octet label.

    Args:
        label: Label text.
        canonical: Reject leading zeros (``010``) when True.

    Returns:
        int: Octet value 0-255.

    Raises:
        InvalidOctet: If the label is not a decimal number in range.
    """
    if not _DECIMAL_LABEL.fullmatch(label) or (
        canonical and len(label) > 1 and label.startswith("0")
    ):
        raise InvalidOctet(f"invalid IPv4 octet: {label!r}", value=label)

    octet = int(label)
    if octet > 255:
        raise InvalidOctet(f"invalid IPv4 octet: {label!r}", value=label)
    return octet


def parse_nibble(label: str) -> int:
    """Parse a single hex digit label.

    Raises:
        InvalidNibble: If the label is not exactly one hex digit.
    """
    if not _HEX_NIBBLE.fullmatch(label):
        raise InvalidNibble(f"invalid IPv6 nibble: {label!r}", value=label)
    return int(label, 16)


def nibbles_to_bytes(nibbles: list[int]) -> bytes:
    """Pack nibble values (most significant first) into bytes.

    Args:
        nibbles: Even-length list of values 0-15.

    Returns:
        bytes: len(nibbles) // 2 packed bytes.
    """
    return bytes(
        (nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2)
    )
