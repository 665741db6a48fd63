"""
Structural email address validation.

Checks shape only: one @, an RFC 5322-compatible character set, a syntactic
domain, and optional domain allow/block lists. Deliverability (MX lookups,
mailbox existence) is not checked.

Raw addresses are never logged; rejections log the domain at most.
"""

import logging
import re
from typing import FrozenSet, Iterable, List, Mapping, Optional, Pattern, Union

from pydantic import BaseModel, Field, field_validator

from inputguard.errors import ErrorCode
from inputguard.logging.utilities import log_rejection
from inputguard.options import resolve_options
from inputguard.results import EmailValidationResult, MultipleEmailValidationResult

logger = logging.getLogger(__name__)

EMAIL_REGEX: Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

DEFAULT_SEPARATOR: Pattern[str] = re.compile(r"[,;]")

# RFC 5321 path limit
DEFAULT_MAX_LENGTH = 254

_DOTTED_QUAD = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


class EmailValidationOptions(BaseModel):
    """Options for validate_email()."""

    allow_multiple_at: bool = Field(
        default=False,
        description="Skip the exactly-one-@ check (the format check still applies)",
    )
    max_length: int = Field(default=DEFAULT_MAX_LENGTH, ge=1)
    blocked_domains: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Domains rejected outright (case-insensitive, exact match)",
    )
    allowed_domains: Optional[FrozenSet[str]] = Field(
        default=None,
        description="When non-empty, the only domains accepted",
    )

    model_config = {"frozen": True}

    @field_validator("blocked_domains", "allowed_domains", mode="before")
    @classmethod
    def lowercase_domains(cls, v: Union[str, Iterable[str], None]):
        if v is None:
            return v
        if isinstance(v, str):
            v = [v]
        return frozenset(d.strip().lower() for d in v if d.strip())


def _reject(
    code: ErrorCode, error: str, domain: Optional[str] = None
) -> EmailValidationResult:
    log_rejection(logger, "email", code, domain=domain)
    return EmailValidationResult(is_valid=False, error=error, code=code)


def validate_email(
    email: str,
    options: Union[EmailValidationOptions, Mapping, None] = None,
) -> EmailValidationResult:
    """
    Validate the structure of an email address.

    Args:
        email: Address to validate (surrounding whitespace is ignored)
        options: EmailValidationOptions, a mapping of its fields, or None

    Returns:
        EmailValidationResult with the trimmed email and lower-cased domain

    Examples:
        >>> validate_email(" User@Example.COM ").domain
        'example.com'
        >>> validate_email("user@localhost").code
        <ErrorCode.DOMAIN_NOT_ALLOWED_LITERAL: 'domain_not_allowed_literal'>
    """
    opts = resolve_options(options, EmailValidationOptions)

    if not isinstance(email, str) or not email:
        return _reject(ErrorCode.MISSING_INPUT, "Email is required and must be a string")

    trimmed = email.strip()

    if len(trimmed) > opts.max_length:
        return _reject(
            ErrorCode.TOO_LONG, f"Email must not exceed {opts.max_length} characters"
        )

    if not trimmed:
        return _reject(
            ErrorCode.MISSING_INPUT, "Email cannot be empty or only whitespace"
        )

    if not opts.allow_multiple_at and trimmed.count("@") != 1:
        return _reject(ErrorCode.MULTIPLE_AT, "Email must contain exactly one @ symbol")

    if not EMAIL_REGEX.match(trimmed):
        return _reject(ErrorCode.FORMAT_INVALID, "Email format is invalid")

    local_part, _, domain = trimmed.rpartition("@")
    domain = domain.lower()
    if not domain:
        return _reject(ErrorCode.MISSING_DOMAIN, "Email must have a domain")

    if domain == "localhost" or _DOTTED_QUAD.match(domain):
        return _reject(
            ErrorCode.DOMAIN_NOT_ALLOWED_LITERAL,
            "Email domain cannot be localhost or an IP address",
            domain,
        )

    if domain in opts.blocked_domains:
        return _reject(
            ErrorCode.DOMAIN_BLOCKED, f"Email domain '{domain}' is blocked", domain
        )

    if opts.allowed_domains and domain not in opts.allowed_domains:
        return _reject(
            ErrorCode.DOMAIN_NOT_ALLOWED,
            f"Email domain '{domain}' is not in the allowed list",
            domain,
        )

    if local_part.startswith(".") or local_part.endswith("."):
        return _reject(
            ErrorCode.LOCAL_PART_DOT,
            "Email local part cannot start or end with a dot",
            domain,
        )

    if ".." in local_part:
        return _reject(
            ErrorCode.LOCAL_PART_CONSECUTIVE_DOTS,
            "Email local part cannot contain consecutive dots",
            domain,
        )

    return EmailValidationResult(is_valid=True, email=trimmed, domain=domain)


def _split_addresses(emails: str, separator: Union[str, Pattern[str]]) -> List[str]:
    if isinstance(separator, str):
        segments = emails.split(separator) if separator else [emails]
    else:
        segments = separator.split(emails)
    return [s.strip() for s in segments if s.strip()]


def validate_multiple_emails(
    emails: str,
    separator: Union[str, Pattern[str]] = DEFAULT_SEPARATOR,
    options: Union[EmailValidationOptions, Mapping, None] = None,
) -> MultipleEmailValidationResult:
    """
    Validate a separated list of addresses.

    A compiled pattern splits as a regex, a plain string splits literally.
    Empty segments are dropped. The list is valid only if it holds at least
    one address and every address is valid.

    Args:
        emails: Addresses joined by separator ("a@x.com, b@y.com; c@z.com")
        separator: Separator string or compiled pattern
        options: Applied to each address

    Returns:
        MultipleEmailValidationResult
    """
    opts = resolve_options(options, EmailValidationOptions)

    if not isinstance(emails, str) or not emails:
        missing = _reject(ErrorCode.MISSING_INPUT, "Emails string is required")
        return MultipleEmailValidationResult(is_valid=False, results=(missing,))

    addresses = _split_addresses(emails, separator)
    if not addresses:
        missing = _reject(ErrorCode.MISSING_INPUT, "No email addresses found")
        return MultipleEmailValidationResult(is_valid=False, results=(missing,))

    results = tuple(validate_email(address, opts) for address in addresses)
    valid_emails = [r.email for r in results if r.is_valid]
    invalid_emails = [a for a, r in zip(addresses, results) if not r.is_valid]

    return MultipleEmailValidationResult(
        is_valid=all(r.is_valid for r in results),
        results=results,
        valid_emails=valid_emails,
        invalid_emails=invalid_emails,
    )
