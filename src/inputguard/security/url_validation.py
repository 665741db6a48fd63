"""
URL validation with SSRF prevention.

Classifies the target of a URL before a server issues a request to it:
protocol allow-list, host block-list, and literal IP range checks for
localhost, loopback, private and link-local addresses.

Security considerations:
- Hostnames are never resolved. Internal DNS names pass the IP checks and
  can only be stopped with blocked_hosts.
- Hosts are canonicalized the way URL parsers do (percent-decoding, NFKC,
  numeric IPv4 forms like 2130706433) before any comparison.
- Userinfo, query, fragment and port never affect the decision.
"""

import logging
import re
import unicodedata
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel, Field, field_validator

from inputguard.errors import ErrorCode
from inputguard.logging.utilities import log_rejection
from inputguard.options import resolve_options
from inputguard.results import UrlValidationResult
from inputguard.security.ip_ranges import (
    IPAddress,
    is_link_local,
    is_loopback,
    is_private,
    is_unspecified,
    normalize_ipv6,
    parse_ip_literal,
)

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_PROTOCOLS: Tuple[str, ...] = ("http", "https")

# Schemes whose URLs always carry a host
SPECIAL_SCHEMES: FrozenSet[str] = frozenset({"http", "https", "ws", "wss", "ftp"})

# C0 controls and space, stripped from both ends like URL parsers do
_STRIP_CHARS = "".join(chr(c) for c in range(0x21))
_TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")
_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.-]*):")

# Characters that can never appear in a registered host name
_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|\x7f]")

# Ideographic and fullwidth full stops act as label separators
_DOT_EQUIVALENTS = str.maketrans({"。": ".", "．": ".", "｡": "."})


class UrlValidationOptions(BaseModel):
    """Options for validate_url(). Every check is on by default."""

    block_localhost: bool = Field(
        default=True,
        description="Block localhost, 0.0.0.0, ::, 127.0.0.0/8, ::1 and mapped forms",
    )
    block_private_ips: bool = Field(
        default=True,
        description="Block 10/8, 172.16/12, 192.168/16 and fc00::/7",
    )
    block_link_local: bool = Field(
        default=True,
        description="Block 169.254/16 and fe80::/10",
    )
    blocked_hosts: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Additional blocked hosts (case-insensitive)",
    )
    allowed_protocols: Tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_PROTOCOLS,
        description="Allowed schemes, with or without trailing ':'",
    )

    model_config = {"frozen": True}

    @field_validator("blocked_hosts", mode="before")
    @classmethod
    def normalize_hosts(cls, v: Union[str, Iterable[str]]) -> FrozenSet[str]:
        """Lower-case hosts and strip IPv6 brackets."""
        if isinstance(v, str):
            v = [v]
        return frozenset(h.strip().lower().strip("[]") for h in v if h.strip())

    @field_validator("allowed_protocols", mode="before")
    @classmethod
    def normalize_protocols(cls, v: Union[str, Iterable[str]]) -> Tuple[str, ...]:
        """Accept "https" and "https:" alike."""
        if isinstance(v, str):
            v = [v]
        return tuple(p.strip().lower().rstrip(":") for p in v if p.strip())


def _reject(
    code: ErrorCode,
    error: str,
    url: str,
    hostname: Optional[str] = None,
    ip: Optional[IPAddress] = None,
) -> UrlValidationResult:
    log_rejection(logger, "url", code, url=url, hostname=hostname)
    return UrlValidationResult(
        is_valid=False,
        error=error,
        code=code,
        hostname=hostname,
        ip=_ip_text(ip),
    )


def _ip_text(ip: Optional[IPAddress]) -> Optional[str]:
    if ip is None:
        return None
    if ip.version == 6:
        return normalize_ipv6(str(ip))
    return str(ip)


def _canonical_host(raw_host: str) -> str:
    """Percent-decode, NFKC-normalize and lower-case a host."""
    host = unquote(raw_host)
    host = unicodedata.normalize("NFKC", host).translate(_DOT_EQUIVALENTS)
    return host.lower()


def _is_localhost_name(host: str) -> bool:
    name = host.rstrip(".")
    return name == "localhost" or name.endswith(".localhost")


def validate_url(
    url: str,
    options: Union[UrlValidationOptions, Mapping, None] = None,
) -> UrlValidationResult:
    """
    Validate a URL before issuing a server-side request to it.

    Checks run in order and the first failure wins:
        1. Parse (INVALID_FORMAT)
        2. Protocol allow-list (PROTOCOL_BLOCKED)
        3. Host block-list (HOST_BLOCKED)
        4. localhost / unspecified address (LOCALHOST_BLOCKED)
        5. Loopback literal (LOOPBACK_BLOCKED)
        6. Private literal (PRIVATE_RANGE_BLOCKED)
        7. Link-local literal (LINK_LOCAL_BLOCKED)

    Args:
        url: URL to validate
        options: UrlValidationOptions, a mapping of its fields, or None

    Returns:
        UrlValidationResult with hostname and, for literal IPs, ip

    Examples:
        >>> validate_url("https://api.github.com/repos").is_valid
        True
        >>> validate_url("http://169.254.169.254/latest/meta-data").code
        <ErrorCode.LINK_LOCAL_BLOCKED: 'link_local_blocked'>
    """
    opts = resolve_options(options, UrlValidationOptions)

    if not isinstance(url, str) or not url.strip(_STRIP_CHARS):
        return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", "")

    cleaned = _TAB_OR_NEWLINE.sub("", url.strip(_STRIP_CHARS))
    scheme_match = _SCHEME.match(cleaned)
    if scheme_match and scheme_match.group(1).lower() in SPECIAL_SCHEMES:
        # Backslash is a path separator in special URLs, as HTTP clients read it
        cleaned = cleaned.replace("\\", "/")

    try:
        parsed = urlsplit(cleaned)
        parsed.port  # raises ValueError for a non-numeric or out-of-range port
        raw_host = parsed.hostname or ""
    except ValueError:
        return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", url)

    scheme = parsed.scheme.lower()
    if not scheme:
        return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", url)

    host = _canonical_host(raw_host) if raw_host else ""
    if scheme in SPECIAL_SCHEMES and not host:
        return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", url)

    ip: Optional[IPAddress] = None
    if host:
        try:
            ip = parse_ip_literal(host)
        except ValueError:
            return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", url)
        if ip is None and _FORBIDDEN_HOST_CHARS.search(host):
            return _reject(ErrorCode.INVALID_FORMAT, "Invalid URL format", url)

    if scheme not in opts.allowed_protocols:
        return _reject(
            ErrorCode.PROTOCOL_BLOCKED,
            f"Protocol '{scheme}:' is not allowed",
            url,
        )

    if not host:
        return _reject(ErrorCode.INVALID_FORMAT, "URL has no hostname", url)

    # Literal hosts are echoed in canonical form (127.1 -> 127.0.0.1)
    hostname = _ip_text(ip) if ip is not None else host

    if host in opts.blocked_hosts or hostname in opts.blocked_hosts:
        return _reject(
            ErrorCode.HOST_BLOCKED, f"Host '{hostname}' is blocked", url, hostname, ip
        )

    if opts.block_localhost:
        if _is_localhost_name(host) or (ip is not None and is_unspecified(ip)):
            return _reject(
                ErrorCode.LOCALHOST_BLOCKED,
                "Localhost access is blocked",
                url,
                hostname,
                ip,
            )
        if ip is not None and is_loopback(ip):
            mapped = ip.version == 6 and ip.ipv4_mapped is not None
            error = (
                "IPv4-mapped loopback address is blocked"
                if mapped
                else "Loopback address is blocked"
            )
            return _reject(ErrorCode.LOOPBACK_BLOCKED, error, url, hostname, ip)

    if opts.block_private_ips and ip is not None and is_private(ip):
        error = (
            "Private IP range is blocked"
            if ip.version == 4
            else "Private IPv6 range is blocked"
        )
        return _reject(ErrorCode.PRIVATE_RANGE_BLOCKED, error, url, hostname, ip)

    if opts.block_link_local and ip is not None and is_link_local(ip):
        error = (
            "Link-local address is blocked"
            if ip.version == 4
            else "Link-local IPv6 address is blocked"
        )
        return _reject(ErrorCode.LINK_LOCAL_BLOCKED, error, url, hostname, ip)

    return UrlValidationResult(
        is_valid=True,
        hostname=hostname,
        ip=_ip_text(ip),
    )
