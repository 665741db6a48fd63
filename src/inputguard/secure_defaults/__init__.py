"""
Secure defaults for browser-facing configuration.

- csp: Content Security Policy baseline, merge and header conversion
- cookies: session/general/csrf cookie profiles and advisory checks
"""

from inputguard.secure_defaults.cookies import (
    COOKIE_TYPES,
    CookieOptions,
    SecureCookieDefaults,
    apply_secure_defaults,
    get_csrf_cookie_options,
    get_secure_cookie_defaults,
    get_session_cookie_options,
    validate_cookie_options,
)
from inputguard.secure_defaults.csp import (
    BOOLEAN_DIRECTIVES,
    CSP_DIRECTIVE_NAMES,
    LIST_DIRECTIVES,
    RELAXED_SOURCES,
    CSPDirectives,
    csp_directives_to_string,
    get_default_csp,
    merge_csp,
    parse_csp_config,
    parse_csp_string,
)

__all__ = [
    "BOOLEAN_DIRECTIVES",
    "COOKIE_TYPES",
    "CSP_DIRECTIVE_NAMES",
    "CSPDirectives",
    "CookieOptions",
    "LIST_DIRECTIVES",
    "RELAXED_SOURCES",
    "SecureCookieDefaults",
    "apply_secure_defaults",
    "csp_directives_to_string",
    "get_csrf_cookie_options",
    "get_default_csp",
    "get_secure_cookie_defaults",
    "get_session_cookie_options",
    "merge_csp",
    "parse_csp_config",
    "parse_csp_string",
    "validate_cookie_options",
]
