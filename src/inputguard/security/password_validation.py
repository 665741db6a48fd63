"""
Password and secret strength validation.

Two audiences share the same infrastructure:
- validate_password(): human-chosen passwords (length, weak list, patterns,
  optional character-class rules, advisory warnings)
- validate_secret(): machine-generated secrets and API keys (length,
  placeholder detection, character variety)

This catches obviously weak values only. Breach-database lookups are out of
scope, and hashing accepted passwords is the caller's job.
"""

import logging
import re
from typing import AbstractSet, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, model_validator

from inputguard.errors import ErrorCode
from inputguard.logging.utilities import log_rejection
from inputguard.options import resolve_options
from inputguard.results import PasswordValidationResult

logger = logging.getLogger(__name__)

# Most common passwords, compared case-insensitively
WEAK_PASSWORDS: AbstractSet[str] = frozenset(
    p.lower()
    for p in (
        "password",
        "password123",
        "123456",
        "12345678",
        "123456789",
        "1234567890",
        "qwerty",
        "abc123",
        "password1",
        "admin",
        "admin123",
        "letmein",
        "welcome",
        "monkey",
        "dragon",
        "master",
        "sunshine",
        "princess",
        "football",
        "baseball",
        "starwars",
        "shadow",
        "michael",
        "jennifer",
        "111111",
        "000000",
        "654321",
        "superman",
        "batman",
        "trustno1",
        "password!",
        "P@ssw0rd",
        "P@ssword",
        "P@ssword1",
        "iloveyou",
        "welcome1",
        "admin1",
        "root",
        "toor",
        "pass",
        "test",
        "test123",
        "guest",
        "changeme",
        "default",
        "secret",
        "secret123",
    )
)

# Substrings that mark a secret as a placeholder or example value
PLACEHOLDER_SECRET_PATTERNS = (
    "example",
    "sample",
    "changeme",
    "replaceme",
    "your-secret-here",
    "your-key-here",
    "placeholder",
    "dummy",
    "temp",
    "temporary",
)

KEYBOARD_WALKS = ("qwerty", "asdfgh", "zxcvbn")

SEQUENCE_WINDOW = 4
RECOMMENDED_PASSWORD_LENGTH = 12
DEFAULT_SECRET_MIN_LENGTH = 32
MIN_SECRET_UNIQUE_CHARS = 10

_REPEATED_CHAR = re.compile(r"(.)\1+", re.DOTALL)
_UPPER = re.compile(r"[A-Z]")
_LOWER = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[^A-Za-z0-9]")


class PasswordValidationOptions(BaseModel):
    """Options for validate_password()."""

    min_length: int = Field(default=8, ge=1, description="Minimum length")
    max_length: int = Field(
        default=128, ge=1, description="Maximum length (bounds hashing cost)"
    )
    check_weak_passwords: bool = Field(
        default=True,
        description="Reject common values, all-digit, repeated and sequential passwords",
    )
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_digit: bool = False
    require_special_char: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_length_bounds(self):
        if self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) exceeds max_length ({self.max_length})"
            )
        return self


def _reject(code: ErrorCode, error: str, validator: str) -> PasswordValidationResult:
    log_rejection(logger, validator, code)
    return PasswordValidationResult(is_valid=False, error=error, code=code)


def _is_ascending_run(window: str) -> bool:
    if not (window.isdigit() or window.isalpha()) or not window.isascii():
        return False
    return all(ord(b) - ord(a) == 1 for a, b in zip(window, window[1:]))


def has_sequential_pattern(value: str) -> bool:
    """
    True if value contains 4 ascending consecutive digits or letters
    ("1234", "cdef") or a known keyboard walk ("qwerty").
    """
    lower = value.lower()
    for start in range(len(lower) - SEQUENCE_WINDOW + 1):
        if _is_ascending_run(lower[start : start + SEQUENCE_WINDOW]):
            return True
    return any(walk in lower for walk in KEYBOARD_WALKS)


def character_classes(value: str) -> int:
    """Count of uppercase, lowercase, digit and special classes present."""
    return sum(
        bool(pattern.search(value)) for pattern in (_UPPER, _LOWER, _DIGIT, _SPECIAL)
    )


def validate_password(
    password: str,
    options: Union[PasswordValidationOptions, Mapping, None] = None,
    weak_passwords: AbstractSet[str] = WEAK_PASSWORDS,
) -> PasswordValidationResult:
    """
    Validate password strength.

    Checks, in order: presence, length bounds, then (if check_weak_passwords)
    weak list, all digits, single repeated character, sequential patterns,
    then the enabled character-class requirements.

    Args:
        password: Candidate password
        options: PasswordValidationOptions, a mapping of its fields, or None
        weak_passwords: Lower-case weak-value corpus

    Returns:
        PasswordValidationResult; valid results may carry advisory warnings
    """
    opts = resolve_options(options, PasswordValidationOptions)

    if not isinstance(password, str) or not password:
        return _reject(
            ErrorCode.MISSING_INPUT, "Password is required and must be a string", "password"
        )

    if len(password) < opts.min_length:
        return _reject(
            ErrorCode.TOO_SHORT,
            f"Password must be at least {opts.min_length} characters long",
            "password",
        )

    if len(password) > opts.max_length:
        return _reject(
            ErrorCode.TOO_LONG,
            f"Password must not exceed {opts.max_length} characters",
            "password",
        )

    if opts.check_weak_passwords:
        if password.lower() in weak_passwords:
            return _reject(
                ErrorCode.COMMON_PASSWORD,
                "Password is too common and easily guessable",
                "password",
            )
        if password.isascii() and password.isdigit():
            return _reject(
                ErrorCode.ALL_DIGITS, "Password cannot be all numbers", "password"
            )
        if _REPEATED_CHAR.fullmatch(password):
            return _reject(
                ErrorCode.REPEATED_CHARACTER,
                "Password cannot be a repeated character",
                "password",
            )
        if has_sequential_pattern(password):
            return _reject(
                ErrorCode.SEQUENTIAL_PATTERN,
                "Password contains sequential patterns",
                "password",
            )

    requirements = (
        (opts.require_uppercase, _UPPER, ErrorCode.MISSING_UPPERCASE, "one uppercase letter"),
        (opts.require_lowercase, _LOWER, ErrorCode.MISSING_LOWERCASE, "one lowercase letter"),
        (opts.require_digit, _DIGIT, ErrorCode.MISSING_DIGIT, "one digit"),
        (opts.require_special_char, _SPECIAL, ErrorCode.MISSING_SPECIAL_CHAR, "one special character"),
    )
    for required, pattern, code, label in requirements:
        if required and not pattern.search(password):
            return _reject(code, f"Password must contain at least {label}", "password")

    warnings: List[str] = []
    if len(password) < RECOMMENDED_PASSWORD_LENGTH:
        warnings.append(
            "Consider using a longer password (12+ characters) for better security"
        )
    if character_classes(password) < 3:
        warnings.append(
            "Consider using a mix of uppercase, lowercase, numbers, and special characters"
        )

    return PasswordValidationResult(
        is_valid=True, warnings=tuple(warnings) if warnings else None
    )


def validate_secret(
    secret: str,
    min_length: int = DEFAULT_SECRET_MIN_LENGTH,
    placeholder_patterns: Iterable[str] = PLACEHOLDER_SECRET_PATTERNS,
) -> PasswordValidationResult:
    """
    Validate a machine secret (API key, signing key, token).

    No character-class rules apply; secrets are generated, not typed.

    Args:
        secret: Candidate secret
        min_length: Minimum length (default 32)
        placeholder_patterns: Case-insensitive substrings marking placeholders

    Returns:
        PasswordValidationResult
    """
    if not isinstance(secret, str) or not secret:
        return _reject(
            ErrorCode.MISSING_INPUT, "Secret is required and must be a string", "secret"
        )

    if len(secret) < min_length:
        return _reject(
            ErrorCode.TOO_SHORT,
            f"Secret must be at least {min_length} characters long",
            "secret",
        )

    lower = secret.lower()
    if any(pattern.lower() in lower for pattern in placeholder_patterns):
        return _reject(
            ErrorCode.PLACEHOLDER_VALUE,
            "Secret appears to be a placeholder or example value",
            "secret",
        )

    if _REPEATED_CHAR.fullmatch(secret):
        return _reject(
            ErrorCode.REPEATED_CHARACTER, "Secret cannot be a repeated character", "secret"
        )

    # Entropy proxy
    if len(set(secret)) < MIN_SECRET_UNIQUE_CHARS:
        return _reject(
            ErrorCode.INSUFFICIENT_VARIETY,
            "Secret lacks sufficient character variety",
            "secret",
        )

    return PasswordValidationResult(is_valid=True)


def weak_password_corpus(values: Optional[Iterable[str]] = None) -> AbstractSet[str]:
    """
    Build an immutable weak-password corpus for injection into validate_password().

    Args:
        values: Replacement values, or None for the built-in list

    Returns:
        Lower-cased frozenset
    """
    if values is None:
        return WEAK_PASSWORDS
    return frozenset(v.lower() for v in values)
