"""Tests for result schemas and the error taxonomy."""

import pytest
from pydantic import ValidationError

from inputguard.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorCode,
    InputGuardError,
    InputRejectedError,
)
from inputguard.options import resolve_options
from inputguard.results import (
    EmailValidationResult,
    MultipleEmailValidationResult,
    PasswordValidationResult,
    UrlValidationResult,
    ValidationResult,
)
from inputguard.security.url_validation import UrlValidationOptions


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_valid(self):
        result = ValidationResult(is_valid=True)

        assert result.error is None
        assert result.code is None
        assert result.category is None

    def test_invalid(self):
        result = ValidationResult(
            is_valid=False, error="Host is blocked", code=ErrorCode.HOST_BLOCKED
        )

        assert result.category == ErrorCategory.POLICY_VIOLATION

    def test_valid_with_error_rejected(self):
        """A valid result cannot carry an error."""
        with pytest.raises(ValidationError):
            ValidationResult(is_valid=True, error="oops", code=ErrorCode.TOO_SHORT)

    def test_invalid_without_code_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResult(is_valid=False, error="missing code")

    def test_invalid_without_error_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResult(is_valid=False, code=ErrorCode.TOO_SHORT)

    def test_immutable(self):
        result = UrlValidationResult(is_valid=True, hostname="example.com")

        with pytest.raises(ValidationError):
            result.hostname = "evil.com"

    def test_code_from_string(self):
        """Codes deserialize from their string values."""
        result = ValidationResult.model_validate(
            {"is_valid": False, "error": "x", "code": "loopback_blocked"}
        )

        assert result.code is ErrorCode.LOOPBACK_BLOCKED

    def test_serialization(self):
        result = PasswordValidationResult(is_valid=True, warnings=("w1",))

        assert result.model_dump() == {
            "is_valid": True,
            "error": None,
            "code": None,
            "warnings": ("w1",),
        }


class TestRaiseForError:
    """Tests for raise_for_error()."""

    def test_raises(self):
        result = EmailValidationResult(
            is_valid=False, error="Email format is invalid", code=ErrorCode.FORMAT_INVALID
        )

        with pytest.raises(InputRejectedError, match="Email format is invalid") as exc_info:
            result.raise_for_error()

        assert exc_info.value.code == ErrorCode.FORMAT_INVALID
        assert exc_info.value.category == ErrorCategory.STRUCTURAL_INVALID
        assert exc_info.value.result is result
        assert isinstance(exc_info.value, InputGuardError)

    def test_valid_does_nothing(self):
        ValidationResult(is_valid=True).raise_for_error()


class TestMultipleEmailValidationResult:
    def test_defaults(self):
        result = MultipleEmailValidationResult(is_valid=False)

        assert result.results == ()
        assert result.valid_emails == []
        assert result.invalid_emails == []


class TestErrorTaxonomy:
    """Tests for ErrorCode and exceptions."""

    @pytest.mark.parametrize("code", list(ErrorCode))
    def test_every_code_has_category(self, code):
        assert isinstance(code.category, ErrorCategory)

    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.INVALID_FORMAT, ErrorCategory.MALFORMED_INPUT),
            (ErrorCode.PROTOCOL_BLOCKED, ErrorCategory.POLICY_VIOLATION),
            (ErrorCode.LINK_LOCAL_BLOCKED, ErrorCategory.NETWORK_TARGET_BLOCKED),
            (ErrorCode.TRAVERSAL_DETECTED, ErrorCategory.TRAVERSAL_DETECTED),
            (ErrorCode.COMMON_PASSWORD, ErrorCategory.WEAK_CREDENTIAL),
            (ErrorCode.LOCAL_PART_DOT, ErrorCategory.STRUCTURAL_INVALID),
        ],
    )
    def test_category_mapping(self, code, category):
        assert code.category == category

    def test_code_is_string(self):
        assert ErrorCode.HOST_BLOCKED == "host_blocked"

    def test_error_str_with_context(self):
        error = ConfigurationError("Invalid integer", context={"value": "x"})

        assert str(error) == "Invalid integer (value=x)"
        assert error.message == "Invalid integer"

    def test_error_str_without_context(self):
        assert str(InputGuardError("plain")) == "plain"


class TestResolveOptions:
    """Tests for resolve_options()."""

    def test_none_gives_defaults(self):
        assert resolve_options(None, UrlValidationOptions) == UrlValidationOptions()

    def test_instance_passthrough(self):
        options = UrlValidationOptions(block_localhost=False)

        assert resolve_options(options, UrlValidationOptions) is options

    def test_mapping(self):
        options = resolve_options({"block_localhost": False}, UrlValidationOptions)

        assert options.block_localhost is False
        assert options.block_private_ips is True

    def test_invalid_mapping_values(self):
        with pytest.raises(ValidationError):
            resolve_options({"block_localhost": "not-a-bool"}, UrlValidationOptions)

    def test_wrong_type(self):
        with pytest.raises(TypeError, match="UrlValidationOptions"):
            resolve_options("block", UrlValidationOptions)
