"""Tests for password and secret strength validation."""

import pytest
from pydantic import ValidationError

from inputguard.errors import ErrorCategory, ErrorCode
from inputguard.security.password_validation import (
    PLACEHOLDER_SECRET_PATTERNS,
    WEAK_PASSWORDS,
    PasswordValidationOptions,
    character_classes,
    has_sequential_pattern,
    validate_password,
    validate_secret,
    weak_password_corpus,
)

LENGTH_WARNING = "Consider using a longer password (12+ characters) for better security"
VARIETY_WARNING = (
    "Consider using a mix of uppercase, lowercase, numbers, and special characters"
)
STRONG_SECRET = "k8Jd2Lq9Zx7Vb3Nm5Wc1Rt6Yp4Hs0GfQe"


class TestWeakPasswords:
    """Checks gated by check_weak_passwords."""

    @pytest.mark.parametrize("password", ["password", "PASSWORD", "P@ssw0rd", "iloveyou", "trustno1"])
    def test_common_passwords_rejected(self, password):
        """Weak-list membership is case-insensitive."""
        result = validate_password(password)

        assert result.is_valid is False
        assert result.code == ErrorCode.COMMON_PASSWORD
        assert result.error == "Password is too common and easily guessable"
        assert result.category == ErrorCategory.WEAK_CREDENTIAL

    def test_all_digits_rejected(self):
        """Numeric-only passwords are rejected."""
        result = validate_password("98765432")

        assert result.code == ErrorCode.ALL_DIGITS
        assert result.error == "Password cannot be all numbers"

    def test_repeated_character_rejected(self):
        result = validate_password("zzzzzzzzzz")

        assert result.code == ErrorCode.REPEATED_CHARACTER
        assert result.error == "Password cannot be a repeated character"

    @pytest.mark.parametrize("password", ["xy1234zz", "abcdTrain!", "Mywxyz-99", "myqwertypass", "ZXCVBNlong"])
    def test_sequential_patterns_rejected(self, password):
        """Ascending runs and keyboard walks are rejected."""
        result = validate_password(password)

        assert result.code == ErrorCode.SEQUENTIAL_PATTERN
        assert result.error == "Password contains sequential patterns"

    def test_checks_can_be_disabled(self):
        """check_weak_passwords=False skips all pattern checks."""
        result = validate_password("password", {"check_weak_passwords": False})

        assert result.is_valid is True

    def test_injected_corpus(self):
        """A custom weak-password corpus replaces the built-in list."""
        corpus = weak_password_corpus(["Zebra!Moon42"])

        assert validate_password("zebra!moon42", weak_passwords=corpus).code == ErrorCode.COMMON_PASSWORD
        assert validate_password("password", weak_passwords=corpus).is_valid is True

    def test_builtin_corpus_is_lowercase(self):
        assert all(p == p.lower() for p in WEAK_PASSWORDS)
        assert weak_password_corpus() is WEAK_PASSWORDS


class TestLength:
    """Length bounds."""

    def test_too_short(self):
        result = validate_password("Ab1!")

        assert result.code == ErrorCode.TOO_SHORT
        assert result.error == "Password must be at least 8 characters long"

    def test_too_long(self):
        """Over-long passwords are rejected before pattern checks."""
        result = validate_password("a" * 129)

        assert result.code == ErrorCode.TOO_LONG
        assert result.error == "Password must not exceed 128 characters"

    def test_custom_minimum(self):
        result = validate_password("Xk9#mLp2", PasswordValidationOptions(min_length=12))

        assert result.code == ErrorCode.TOO_SHORT
        assert result.error == "Password must be at least 12 characters long"

    @pytest.mark.parametrize("password", ["", None, 12345678])
    def test_missing_input(self, password):
        result = validate_password(password)

        assert result.code == ErrorCode.MISSING_INPUT
        assert result.error == "Password is required and must be a string"


class TestCharacterRequirements:
    """Optional character-class rules."""

    @pytest.mark.parametrize(
        "password,option,code,label",
        [
            ("correcthorse", "require_uppercase", ErrorCode.MISSING_UPPERCASE, "one uppercase letter"),
            ("CORRECTHORSE", "require_lowercase", ErrorCode.MISSING_LOWERCASE, "one lowercase letter"),
            ("CorrectHorse", "require_digit", ErrorCode.MISSING_DIGIT, "one digit"),
            ("CorrectHorse9", "require_special_char", ErrorCode.MISSING_SPECIAL_CHAR, "one special character"),
        ],
    )
    def test_missing_class(self, password, option, code, label):
        """Each enabled requirement has its own code."""
        result = validate_password(password, {option: True})

        assert result.code == code
        assert result.error == f"Password must contain at least {label}"

    def test_all_requirements_met(self):
        options = PasswordValidationOptions(
            require_uppercase=True,
            require_lowercase=True,
            require_digit=True,
            require_special_char=True,
        )

        assert validate_password("Tr0ub4dor&3x!", options).is_valid is True


class TestWarnings:
    """Advisory warnings on accepted passwords."""

    def test_strong_password_has_no_warnings(self):
        result = validate_password("Tr0ub4dor&3x!")

        assert result.is_valid is True
        assert result.warnings is None

    def test_short_password_warns(self):
        result = validate_password("Xk9#mLp2")

        assert result.is_valid is True
        assert result.warnings == (LENGTH_WARNING,)

    def test_low_variety_warns(self):
        result = validate_password("correcthorse")

        assert result.is_valid is True
        assert result.warnings == (VARIETY_WARNING,)

    def test_both_warnings(self):
        result = validate_password("horsebatt")

        assert result.warnings == (LENGTH_WARNING, VARIETY_WARNING)


class TestOptions:
    """PasswordValidationOptions."""

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ValidationError):
            PasswordValidationOptions(min_length=20, max_length=10)

    def test_min_length_must_be_positive(self):
        with pytest.raises(ValidationError):
            PasswordValidationOptions(min_length=0)


class TestHelpers:
    """Pattern helpers."""

    @pytest.mark.parametrize("value", ["1234", "x6789", "WXYZ", "abcd", "asdfgh"])
    def test_sequential(self, value):
        assert has_sequential_pattern(value) is True

    @pytest.mark.parametrize("value", ["1357", "abce", "4321", "dcba", "abc", "12a34"])
    def test_not_sequential(self, value):
        assert has_sequential_pattern(value) is False

    def test_character_classes(self):
        assert character_classes("abc") == 1
        assert character_classes("aB3") == 3
        assert character_classes("aB3$") == 4


class TestValidateSecret:
    """Machine secret validation."""

    def test_strong_secret(self):
        result = validate_secret(STRONG_SECRET)

        assert result.is_valid is True
        assert result.warnings is None

    def test_too_short(self):
        result = validate_secret(STRONG_SECRET[:20])

        assert result.code == ErrorCode.TOO_SHORT
        assert result.error == "Secret must be at least 32 characters long"

    def test_custom_min_length(self):
        assert validate_secret(STRONG_SECRET[:16], min_length=16).is_valid is True

    @pytest.mark.parametrize(
        "secret",
        [
            "this-is-an-example-secret-value-123",
            "your-secret-here-0123456789abcdefgh",
            "ChangeMe_ChangeMe_ChangeMe_0123456789",
            "x7Kp2TEMPq9Lm4Vb8Nc1Rd6Yf3Hs0GwZe",
        ],
    )
    def test_placeholder_rejected(self, secret):
        """Placeholder substrings match case-insensitively."""
        result = validate_secret(secret)

        assert result.code == ErrorCode.PLACEHOLDER_VALUE
        assert result.error == "Secret appears to be a placeholder or example value"

    def test_repeated_character(self):
        result = validate_secret("x" * 40)

        assert result.code == ErrorCode.REPEATED_CHARACTER
        assert result.error == "Secret cannot be a repeated character"

    def test_insufficient_variety(self):
        result = validate_secret("ab" * 20)

        assert result.code == ErrorCode.INSUFFICIENT_VARIETY
        assert result.error == "Secret lacks sufficient character variety"

    def test_missing(self):
        assert validate_secret("").code == ErrorCode.MISSING_INPUT
        assert validate_secret(None).error == "Secret is required and must be a string"

    def test_injected_placeholders(self):
        """Placeholder patterns are injectable."""
        assert validate_secret(STRONG_SECRET, placeholder_patterns=["gfqe"]).code == (
            ErrorCode.PLACEHOLDER_VALUE
        )
        assert "placeholder" in PLACEHOLDER_SECRET_PATTERNS


class TestNoSecretsInLogs:
    """Rejection logs never contain the candidate value."""

    def test_password_not_logged(self, debug_logs):
        validate_password("sunshine")

        assert debug_logs.records
        assert "sunshine" not in debug_logs.text

    def test_secret_not_logged(self, debug_logs):
        validate_secret("my-dummy-secret-value-0123456789abcdef")

        assert "my-dummy-secret" not in debug_logs.text
