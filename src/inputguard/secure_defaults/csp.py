"""
Content Security Policy defaults and header conversion.

The baseline allows 'unsafe-inline' for scripts and styles. That is a
compatibility compromise for existing front ends and is listed in
RELAXED_SOURCES so it stays visible; nonce- or hash-based policies should
replace it through merge_csp().
"""

import json
import logging
from typing import Any, Dict, FrozenSet, List, Mapping, TypedDict, Union

from inputguard.errors import ConfigurationError
from inputguard.logging.utilities import log_with_context

logger = logging.getLogger(__name__)

DirectiveValue = Union[List[str], bool]

# Keys contain hyphens, so only the functional form works
CSPDirectives = TypedDict(
    "CSPDirectives",
    {
        "default-src": List[str],
        "script-src": List[str],
        "style-src": List[str],
        "img-src": List[str],
        "font-src": List[str],
        "object-src": List[str],
        "connect-src": List[str],
        "frame-src": List[str],
        "frame-ancestors": List[str],
        "worker-src": List[str],
        "form-action": List[str],
        "manifest-src": List[str],
        "media-src": List[str],
        "upgrade-insecure-requests": bool,
        "block-all-mixed-content": bool,
    },
    total=False,
)

LIST_DIRECTIVES: FrozenSet[str] = frozenset(
    {
        "default-src",
        "script-src",
        "style-src",
        "img-src",
        "font-src",
        "object-src",
        "connect-src",
        "frame-src",
        "frame-ancestors",
        "worker-src",
        "form-action",
        "manifest-src",
        "media-src",
    }
)

BOOLEAN_DIRECTIVES: FrozenSet[str] = frozenset(
    {"upgrade-insecure-requests", "block-all-mixed-content"}
)

CSP_DIRECTIVE_NAMES: FrozenSet[str] = LIST_DIRECTIVES | BOOLEAN_DIRECTIVES

# Sources in the baseline that weaken XSS protection
RELAXED_SOURCES: Dict[str, List[str]] = {
    "script-src": ["'unsafe-inline'"],
    "style-src": ["'unsafe-inline'"],
}

_DEFAULT_CSP: Dict[str, List[str]] = {
    "default-src": ["'self'"],
    "script-src": ["'self'", "'unsafe-inline'"],
    "style-src": ["'self'", "'unsafe-inline'"],
    "img-src": ["'self'", "data:", "https:"],
    "font-src": ["'self'", "data:"],
    "object-src": ["'none'"],
    "connect-src": ["'self'"],
    "frame-src": ["'self'"],
    "frame-ancestors": ["'self'"],
    "worker-src": ["'self'", "blob:"],
    "form-action": ["'self'"],
    "manifest-src": ["'self'"],
    "media-src": ["'self'"],
}


def get_default_csp() -> CSPDirectives:
    """Return a fresh copy of the baseline policy; callers may mutate it."""
    return {name: list(sources) for name, sources in _DEFAULT_CSP.items()}


def merge_csp(custom: Mapping[str, DirectiveValue]) -> CSPDirectives:
    """
    Overlay custom directives on the baseline.

    Replacement is per directive: a custom "script-src" replaces the default
    list entirely, it is not appended to.
    A string value is split on whitespace like a header source list.
    """
    merged = get_default_csp()
    for name, value in (custom or {}).items():
        if isinstance(value, str):
            merged[name] = value.split()
        elif isinstance(value, (list, tuple)):
            merged[name] = list(value)
        else:
            merged[name] = value
    return merged


def csp_directives_to_string(directives: Mapping[str, DirectiveValue]) -> str:
    """
    Render directives as a Content-Security-Policy header value.

    True booleans render as the bare name, non-empty lists as "name v1 v2".
    False and empty lists are omitted.

    Example:
        >>> csp_directives_to_string({"default-src": ["'self'"], "upgrade-insecure-requests": True})
        "default-src 'self'; upgrade-insecure-requests"
    """
    parts: List[str] = []
    for name, value in directives.items():
        if value is True:
            parts.append(name)
        elif isinstance(value, (list, tuple)) and value:
            parts.append(f"{name} {' '.join(value)}")
    return "; ".join(parts)


def _warn_unknown(name: str) -> None:
    if name not in CSP_DIRECTIVE_NAMES:
        log_with_context(
            logger,
            logging.WARNING,
            f"Unknown CSP directive kept as-is: {name}",
            directive=name,
        )


def parse_csp_string(value: str) -> CSPDirectives:
    """
    Parse a Content-Security-Policy header value into directives.

    Directive names are lower-cased. A directive with no sources becomes True.
    When a directive repeats, the first occurrence wins, matching browsers.
    Unknown directives are kept and logged at WARNING.

    Args:
        value: Header value ("default-src 'self'; img-src *")

    Returns:
        Directives dict; {} for non-string or empty input
    """
    if not isinstance(value, str) or not value:
        return {}

    directives: CSPDirectives = {}
    for part in value.split(";"):
        tokens = part.split()
        if not tokens:
            continue
        name = tokens[0].lower()
        if name in directives:
            continue
        _warn_unknown(name)
        directives[name] = tokens[1:] if len(tokens) > 1 else True
    return directives


def _coerce_directives(raw: Mapping[str, Any]) -> CSPDirectives:
    directives: CSPDirectives = {}
    for name, value in raw.items():
        if not isinstance(name, str):
            raise ConfigurationError(
                "CSP directive names must be strings", context={"directive": repr(name)}
            )
        key = name.strip().lower()
        if isinstance(value, bool):
            directives[key] = value
        elif isinstance(value, str):
            directives[key] = value.split()
        elif isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            directives[key] = list(value)
        else:
            raise ConfigurationError(
                "CSP directive values must be a list of sources or a boolean",
                context={"directive": key, "type": type(value).__name__},
            )
        _warn_unknown(key)
    return directives


def parse_csp_config(value: Union[str, Mapping[str, Any]]) -> CSPDirectives:
    """
    Parse an operator-supplied CSP override.

    Accepts a JSON object string ({"script-src": ["'self'"]}), a header
    string ("script-src 'self'"), or an already-decoded mapping (from YAML).

    Raises:
        ConfigurationError: If a JSON object string is malformed or holds
            values that are neither source lists nor booleans
    """
    if isinstance(value, Mapping):
        return _coerce_directives(value)
    if not isinstance(value, str):
        raise ConfigurationError(
            "CSP configuration must be a string or mapping",
            context={"type": type(value).__name__},
        )

    stripped = value.strip()
    if not stripped.startswith("{"):
        return parse_csp_string(stripped)

    try:
        decoded = json.loads(stripped)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid CSP JSON: {e.msg}", context={"position": e.pos}
        ) from e
    if not isinstance(decoded, dict):
        raise ConfigurationError("CSP JSON must be an object")
    return _coerce_directives(decoded)
