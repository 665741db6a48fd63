"""
Validation result schemas.

Contains immutable Pydantic models returned by every validator. A result is
either valid (no error) or invalid (error message plus ErrorCode), never both.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from inputguard.errors import ErrorCategory, ErrorCode, InputRejectedError


class ValidationResult(BaseModel):
    """Outcome of a single validation call.

    Attributes:
        is_valid: True when the input passed every check
        error: Human-readable rejection reason (None when valid)
        code: Machine-readable rejection reason (None when valid)
    """

    is_valid: bool = Field(..., description="Whether the input passed validation")
    error: Optional[str] = Field(
        default=None, description="Rejection reason, set only when invalid"
    )
    code: Optional[ErrorCode] = Field(
        default=None, description="Rejection code, set only when invalid"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_error_matches_validity(self):
        """Error and code are present iff the result is invalid."""
        if self.is_valid and (self.error is not None or self.code is not None):
            raise ValueError("a valid result cannot carry an error")
        if not self.is_valid and (not self.error or self.code is None):
            raise ValueError("an invalid result requires an error and a code")
        return self

    @property
    def category(self) -> Optional[ErrorCategory]:
        """ErrorCategory of the rejection, None when valid."""
        return self.code.category if self.code is not None else None

    def raise_for_error(self) -> None:
        """Raise InputRejectedError if this result is invalid."""
        if not self.is_valid:
            raise InputRejectedError(self.error, self.code, result=self)


class UrlValidationResult(ValidationResult):
    """Result of validate_url().

    hostname is echoed whenever the URL had one; ip only when the host was a
    literal IP address (in canonical form).
    """

    hostname: Optional[str] = None
    ip: Optional[str] = None


class PathValidationResult(ValidationResult):
    """Result of validate_path().

    resolved_path is the path callers must use for I/O. On a traversal
    rejection it holds the unsafe resolved path for diagnostics only.
    """

    resolved_path: Optional[str] = None
    is_within_base: Optional[bool] = None


class PasswordValidationResult(ValidationResult):
    """Result of validate_password() / validate_secret().

    warnings are advisory and never affect is_valid.
    """

    warnings: Optional[Tuple[str, ...]] = None


class EmailValidationResult(ValidationResult):
    email: Optional[str] = None
    domain: Optional[str] = None


class MultipleEmailValidationResult(BaseModel):
    """Result of validate_multiple_emails().

    Attributes:
        is_valid: True only when every address is valid
        results: Per-address results in input order
        valid_emails: Trimmed addresses that passed
        invalid_emails: Trimmed input segments that failed
    """

    is_valid: bool
    results: Tuple[EmailValidationResult, ...] = ()
    valid_emails: List[str] = Field(default_factory=list)
    invalid_emails: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}
