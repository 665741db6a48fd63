"""
inputguard: validation of untrusted input and secure configuration defaults.

Validators return immutable result models and never raise for bad input:

    result = validate_url(user_url)
    if not result.is_valid:
        return reject(result.error, result.code)

Callers that prefer exceptions use result.raise_for_error().
"""

from inputguard.config import SecurityConfig, get_config, load_config, reset_config
from inputguard.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorCode,
    InputGuardError,
    InputRejectedError,
)
from inputguard.results import (
    EmailValidationResult,
    MultipleEmailValidationResult,
    PasswordValidationResult,
    PathValidationResult,
    UrlValidationResult,
    ValidationResult,
)
from inputguard.secure_defaults import (
    CookieOptions,
    CSPDirectives,
    SecureCookieDefaults,
    apply_secure_defaults,
    csp_directives_to_string,
    get_csrf_cookie_options,
    get_default_csp,
    get_secure_cookie_defaults,
    get_session_cookie_options,
    merge_csp,
    parse_csp_config,
    parse_csp_string,
    validate_cookie_options,
)
from inputguard.security import (
    EmailValidationOptions,
    PasswordValidationOptions,
    PathValidationOptions,
    UrlValidationOptions,
    is_link_local,
    is_loopback,
    is_private,
    validate_email,
    validate_multiple_emails,
    validate_password,
    validate_path,
    validate_path_within_base,
    validate_secret,
    validate_url,
)

__version__ = "0.1.0"

__all__ = [
    "CSPDirectives",
    "ConfigurationError",
    "CookieOptions",
    "EmailValidationOptions",
    "EmailValidationResult",
    "ErrorCategory",
    "ErrorCode",
    "InputGuardError",
    "InputRejectedError",
    "MultipleEmailValidationResult",
    "PasswordValidationOptions",
    "PasswordValidationResult",
    "PathValidationOptions",
    "PathValidationResult",
    "SecureCookieDefaults",
    "SecurityConfig",
    "UrlValidationOptions",
    "UrlValidationResult",
    "ValidationResult",
    "apply_secure_defaults",
    "csp_directives_to_string",
    "get_config",
    "get_csrf_cookie_options",
    "get_default_csp",
    "get_secure_cookie_defaults",
    "get_session_cookie_options",
    "is_link_local",
    "is_loopback",
    "is_private",
    "load_config",
    "merge_csp",
    "parse_csp_config",
    "parse_csp_string",
    "reset_config",
    "validate_cookie_options",
    "validate_email",
    "validate_multiple_emails",
    "validate_password",
    "validate_path",
    "validate_path_within_base",
    "validate_secret",
    "validate_url",
]
