"""
Literal IP address classification for SSRF prevention.

Answers three independent questions about a literal IP address: is it
loopback, private, or link-local. Hostnames are never resolved; a value that
is not an IP literal is "not applicable" and every check returns False.

Range checks compare octets and the leading IPv6 hextet as integers.
"""

import ipaddress
import string
from typing import List, Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_HEX_DIGITS = set(string.hexdigits)
_OCT_DIGITS = set("01234567")


def _parse_ipv4_number(part: str) -> Optional[int]:
    """Parse one dotted component the way URL hosts are parsed (dec/0x hex/0 octal)."""
    if not part:
        return None
    radix = 10
    if part[:2].lower() == "0x":
        part, radix = part[2:], 16
    elif len(part) > 1 and part.startswith("0"):
        part, radix = part[1:], 8
    if not part:
        return 0
    allowed = {10: set(string.digits), 16: _HEX_DIGITS, 8: _OCT_DIGITS}[radix]
    if not set(part) <= allowed:
        return None
    return int(part, radix)


def _parse_ipv4_host(host: str) -> Optional[ipaddress.IPv4Address]:
    """
    Parse an IPv4 host in any of the forms URL parsers canonicalize.

    Accepts "127.0.0.1" as well as "127.1", "0x7f.0.0.1", "0177.0.0.1" and
    "2130706433", all of which browsers and most HTTP stacks send to
    127.0.0.1.

    Returns:
        IPv4Address, or None if the host does not end in a number

    Raises:
        ValueError: If the host ends in a number but is not a valid IPv4
    """
    parts: List[str] = host.split(".")
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()

    last = parts[-1]
    ends_in_number = last.isascii() and (
        last.isdigit() or _parse_ipv4_number(last) is not None
    )
    if not ends_in_number:
        return None

    if len(parts) > 4:
        raise ValueError(f"Too many components in IPv4 host: {host}")

    numbers: List[int] = []
    for part in parts:
        number = _parse_ipv4_number(part)
        if number is None:
            raise ValueError(f"Invalid IPv4 component {part!r} in host: {host}")
        numbers.append(number)

    if any(n > 255 for n in numbers[:-1]):
        raise ValueError(f"IPv4 component out of range in host: {host}")
    if numbers[-1] >= 256 ** (5 - len(numbers)):
        raise ValueError(f"IPv4 address out of range: {host}")

    value = numbers[-1]
    for index, number in enumerate(numbers[:-1]):
        value += number * 256 ** (3 - index)
    return ipaddress.IPv4Address(value)


def parse_ip_literal(host: str) -> Optional[IPAddress]:
    """
    Parse a URL host as a literal IP address, without DNS.

    Args:
        host: Host component, with or without IPv6 brackets

    Returns:
        IPv4Address/IPv6Address, or None for a non-literal hostname

    Raises:
        ValueError: If the host looks numeric but is not a valid address
            (e.g. "256.1.1.1"); callers treat this as malformed input
    """
    if not isinstance(host, str) or not host:
        return None

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    if ":" in host:
        # Zone ids ("fe80::1%eth0") do not change the range
        address = host.split("%", 1)[0]
        try:
            return ipaddress.IPv6Address(address)
        except ValueError:
            return None

    return _parse_ipv4_host(host)


def ip_version(host: str) -> int:
    """Return 4 or 6 for an IP literal, 0 for anything else."""
    try:
        ip = parse_ip_literal(host)
    except ValueError:
        return 0
    return ip.version if ip is not None else 0


def normalize_ipv6(literal: str) -> str:
    """
    Normalize an IPv6 literal for comparison.

    IPv4-mapped addresses come back as "::ffff:a.b.c.d"; everything else in
    lower-case compressed form, so "0:0:0:0:0:0:0:1", "0000::0001" and "::1"
    compare equal. Unparsable input is only lower-cased.
    """
    lowered = literal.lower().strip("[]")
    try:
        ip = ipaddress.IPv6Address(lowered)
    except ValueError:
        return lowered
    if ip.ipv4_mapped is not None:
        return f"::ffff:{ip.ipv4_mapped}"
    return ip.compressed


def _coerce(ip: Union[str, IPAddress, None]) -> Optional[IPAddress]:
    if ip is None or isinstance(ip, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return ip
    try:
        return parse_ip_literal(ip)
    except ValueError:
        return None


def _first_hextet(ip: ipaddress.IPv6Address) -> int:
    return int(ip) >> 112


def _ipv4_is_loopback(ip: ipaddress.IPv4Address) -> bool:
    octets = ip.packed
    return octets[0] == 127 or int(ip) == 0


def _ipv4_is_private(ip: ipaddress.IPv4Address) -> bool:
    first, second = ip.packed[0], ip.packed[1]
    if first == 10:
        return True
    if first == 172 and 16 <= second <= 31:
        return True
    return first == 192 and second == 168


def _ipv4_is_link_local(ip: ipaddress.IPv4Address) -> bool:
    return ip.packed[0] == 169 and ip.packed[1] == 254


def is_unspecified(ip: Union[str, IPAddress, None]) -> bool:
    """True for 0.0.0.0, :: and ::ffff:0.0.0.0."""
    ip = _coerce(ip)
    if ip is None:
        return False
    if ip.version == 6 and ip.ipv4_mapped is not None:
        return int(ip.ipv4_mapped) == 0
    return int(ip) == 0


def is_loopback(ip: Union[str, IPAddress, None]) -> bool:
    """
    Loopback check.

    IPv4: 127.0.0.0/8 and 0.0.0.0 (treated as localhost-equivalent).
    IPv6: ::1, IPv4-mapped loopback, IPv4-mapped 0.0.0.0.
    """
    ip = _coerce(ip)
    if ip is None:
        return False
    if ip.version == 4:
        return _ipv4_is_loopback(ip)
    if int(ip) == 1:
        return True
    mapped = ip.ipv4_mapped
    return mapped is not None and _ipv4_is_loopback(mapped)


def is_private(ip: Union[str, IPAddress, None]) -> bool:
    """
    Private range check.

    IPv4: 10.0.0.0/8, 172.16.0.0/12, 192.168.0.0/16.
    IPv6: fc00::/7 (unique local), plus IPv4-mapped private addresses.
    """
    ip = _coerce(ip)
    if ip is None:
        return False
    if ip.version == 4:
        return _ipv4_is_private(ip)
    if _first_hextet(ip) & 0xFE00 == 0xFC00:
        return True
    mapped = ip.ipv4_mapped
    return mapped is not None and _ipv4_is_private(mapped)


def is_link_local(ip: Union[str, IPAddress, None]) -> bool:
    """
    Link-local check.

    IPv4: 169.254.0.0/16 (includes cloud metadata endpoints).
    IPv6: fe80::/10, plus IPv4-mapped link-local addresses.
    """
    ip = _coerce(ip)
    if ip is None:
        return False
    if ip.version == 4:
        return _ipv4_is_link_local(ip)
    if _first_hextet(ip) & 0xFFC0 == 0xFE80:
        return True
    mapped = ip.ipv4_mapped
    return mapped is not None and _ipv4_is_link_local(mapped)
