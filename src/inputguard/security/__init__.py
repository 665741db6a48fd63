"""
Validators for untrusted input.

- ip_ranges: literal IP classification (loopback, private, link-local)
- url_validation: SSRF checks for outbound request targets
- path_validation: traversal checks against a base directory
- password_validation: password and machine-secret strength
- email_validation: structural email checks
- redaction: URL and message sanitization for logs
"""

from inputguard.security.email_validation import (
    EmailValidationOptions,
    validate_email,
    validate_multiple_emails,
)
from inputguard.security.ip_ranges import (
    ip_version,
    is_link_local,
    is_loopback,
    is_private,
    normalize_ipv6,
    parse_ip_literal,
)
from inputguard.security.password_validation import (
    PLACEHOLDER_SECRET_PATTERNS,
    WEAK_PASSWORDS,
    PasswordValidationOptions,
    validate_password,
    validate_secret,
)
from inputguard.security.path_validation import (
    PathValidationOptions,
    validate_path,
    validate_path_within_base,
)
from inputguard.security.redaction import sanitize_error_message, sanitize_url
from inputguard.security.url_validation import UrlValidationOptions, validate_url

__all__ = [
    "EmailValidationOptions",
    "PLACEHOLDER_SECRET_PATTERNS",
    "PasswordValidationOptions",
    "PathValidationOptions",
    "UrlValidationOptions",
    "WEAK_PASSWORDS",
    "ip_version",
    "is_link_local",
    "is_loopback",
    "is_private",
    "normalize_ipv6",
    "parse_ip_literal",
    "sanitize_error_message",
    "sanitize_url",
    "validate_email",
    "validate_multiple_emails",
    "validate_password",
    "validate_path",
    "validate_path_within_base",
    "validate_secret",
    "validate_url",
]
