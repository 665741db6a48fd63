"""
Error taxonomy for input validation.

Provides:
- ErrorCategory enum for classifying rejections
- ErrorCode enum with one member per rejection reason
- InputGuardError hierarchy for the few places that raise
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """
    Classification of rejection reasons.

    Categories:
        MALFORMED_INPUT: Unparsable URL, non-string argument, null byte
        POLICY_VIOLATION: Protocol not allowed, host/domain blocked,
                          outside an allow-list
        NETWORK_TARGET_BLOCKED: Localhost, loopback, private or link-local
        TRAVERSAL_DETECTED: Path escapes its base directory
        WEAK_CREDENTIAL: Common value, pattern, low variety, missing class
        STRUCTURAL_INVALID: Email grammar or unusable domain
    """

    MALFORMED_INPUT = "malformed_input"
    POLICY_VIOLATION = "policy_violation"
    NETWORK_TARGET_BLOCKED = "network_target_blocked"
    TRAVERSAL_DETECTED = "traversal_detected"
    WEAK_CREDENTIAL = "weak_credential"
    STRUCTURAL_INVALID = "structural_invalid"


class ErrorCode(str, Enum):
    """Specific rejection reason returned on an invalid ValidationResult."""

    # Shared
    MISSING_INPUT = "missing_input"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"

    # URL
    INVALID_FORMAT = "invalid_format"
    PROTOCOL_BLOCKED = "protocol_blocked"
    HOST_BLOCKED = "host_blocked"
    LOCALHOST_BLOCKED = "localhost_blocked"
    LOOPBACK_BLOCKED = "loopback_blocked"
    PRIVATE_RANGE_BLOCKED = "private_range_blocked"
    LINK_LOCAL_BLOCKED = "link_local_blocked"

    # Path
    NULL_BYTE_INJECTION = "null_byte_injection"
    ABSOLUTE_PATH_REJECTED = "absolute_path_rejected"
    BASE_PATH_REQUIRED = "base_path_required"
    PATH_RESOLUTION_FAILED = "path_resolution_failed"
    TRAVERSAL_DETECTED = "traversal_detected"
    TRAVERSAL_PATTERN_DETECTED = "traversal_pattern_detected"

    # Password / secret
    COMMON_PASSWORD = "common_password"
    ALL_DIGITS = "all_digits"
    REPEATED_CHARACTER = "repeated_character"
    SEQUENTIAL_PATTERN = "sequential_pattern"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_DIGIT = "missing_digit"
    MISSING_SPECIAL_CHAR = "missing_special_char"
    PLACEHOLDER_VALUE = "placeholder_value"
    INSUFFICIENT_VARIETY = "insufficient_variety"

    # Email
    MULTIPLE_AT = "multiple_at"
    FORMAT_INVALID = "format_invalid"
    MISSING_DOMAIN = "missing_domain"
    DOMAIN_NOT_ALLOWED_LITERAL = "domain_not_allowed_literal"
    DOMAIN_BLOCKED = "domain_blocked"
    DOMAIN_NOT_ALLOWED = "domain_not_allowed"
    LOCAL_PART_DOT = "local_part_dot"
    LOCAL_PART_CONSECUTIVE_DOTS = "local_part_consecutive_dots"

    @property
    def category(self) -> ErrorCategory:
        """Category this code belongs to."""
        return _CODE_CATEGORIES[self]


_CODE_CATEGORIES: Dict[ErrorCode, ErrorCategory] = {
    ErrorCode.MISSING_INPUT: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.INVALID_FORMAT: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.NULL_BYTE_INJECTION: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.BASE_PATH_REQUIRED: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.PATH_RESOLUTION_FAILED: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.PROTOCOL_BLOCKED: ErrorCategory.POLICY_VIOLATION,
    ErrorCode.HOST_BLOCKED: ErrorCategory.POLICY_VIOLATION,
    ErrorCode.ABSOLUTE_PATH_REJECTED: ErrorCategory.POLICY_VIOLATION,
    ErrorCode.DOMAIN_BLOCKED: ErrorCategory.POLICY_VIOLATION,
    ErrorCode.DOMAIN_NOT_ALLOWED: ErrorCategory.POLICY_VIOLATION,
    ErrorCode.LOCALHOST_BLOCKED: ErrorCategory.NETWORK_TARGET_BLOCKED,
    ErrorCode.LOOPBACK_BLOCKED: ErrorCategory.NETWORK_TARGET_BLOCKED,
    ErrorCode.PRIVATE_RANGE_BLOCKED: ErrorCategory.NETWORK_TARGET_BLOCKED,
    ErrorCode.LINK_LOCAL_BLOCKED: ErrorCategory.NETWORK_TARGET_BLOCKED,
    ErrorCode.TRAVERSAL_DETECTED: ErrorCategory.TRAVERSAL_DETECTED,
    ErrorCode.TRAVERSAL_PATTERN_DETECTED: ErrorCategory.TRAVERSAL_DETECTED,
    ErrorCode.TOO_SHORT: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.COMMON_PASSWORD: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.ALL_DIGITS: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.REPEATED_CHARACTER: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.SEQUENTIAL_PATTERN: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.MISSING_UPPERCASE: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.MISSING_LOWERCASE: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.MISSING_DIGIT: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.MISSING_SPECIAL_CHAR: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.PLACEHOLDER_VALUE: ErrorCategory.WEAK_CREDENTIAL,
    ErrorCode.INSUFFICIENT_VARIETY: ErrorCategory.WEAK_CREDENTIAL,
    # Over-long input is rejected before any content check
    ErrorCode.TOO_LONG: ErrorCategory.MALFORMED_INPUT,
    ErrorCode.MULTIPLE_AT: ErrorCategory.STRUCTURAL_INVALID,
    ErrorCode.FORMAT_INVALID: ErrorCategory.STRUCTURAL_INVALID,
    ErrorCode.MISSING_DOMAIN: ErrorCategory.STRUCTURAL_INVALID,
    ErrorCode.DOMAIN_NOT_ALLOWED_LITERAL: ErrorCategory.STRUCTURAL_INVALID,
    ErrorCode.LOCAL_PART_DOT: ErrorCategory.STRUCTURAL_INVALID,
    ErrorCode.LOCAL_PART_CONSECUTIVE_DOTS: ErrorCategory.STRUCTURAL_INVALID,
}


class InputGuardError(Exception):
    """
    Base exception for inputguard errors.

    Attributes:
        message: Human-readable error description
        context: Additional context dict for debugging
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ConfigurationError(InputGuardError):
    """Invalid configuration file, environment variable or CSP override."""


class InputRejectedError(InputGuardError):
    """
    Raised by ValidationResult.raise_for_error() for callers that prefer
    exceptions over inspecting the result.

    Attributes:
        code: ErrorCode of the rejection
        result: The invalid ValidationResult
    """

    def __init__(self, message: str, code: ErrorCode, result: Any = None):
        super().__init__(message, context={"code": code.value})
        self.code = code
        self.result = result

    @property
    def category(self) -> ErrorCategory:
        return self.code.category
