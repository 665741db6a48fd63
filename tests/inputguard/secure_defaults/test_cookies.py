"""Tests for secure cookie defaults."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from inputguard.secure_defaults.cookies import (
    CookieOptions,
    apply_secure_defaults,
    get_csrf_cookie_options,
    get_secure_cookie_defaults,
    get_session_cookie_options,
    validate_cookie_options,
)


class TestSecureCookieDefaults:
    """Named profiles."""

    def test_production_profiles(self):
        defaults = get_secure_cookie_defaults()

        assert defaults.session == CookieOptions(
            http_only=True, secure=True, same_site="Lax", path="/"
        )
        assert defaults.general == CookieOptions(
            http_only=False, secure=True, same_site="Lax", path="/"
        )
        assert defaults.csrf == CookieOptions(
            http_only=False, secure=True, same_site="Strict", path="/"
        )

    def test_development_not_secure(self):
        """Plain-HTTP development keeps secure off."""
        defaults = get_secure_cookie_defaults(is_production=False)

        assert defaults.session.secure is False
        assert defaults.general.secure is False
        assert defaults.csrf.secure is False

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown cookie type"):
            get_secure_cookie_defaults().profile("tracking")


class TestProfileHelpers:
    """Session and CSRF helpers."""

    def test_session_with_max_age(self):
        assert get_session_cookie_options(max_age=3600).max_age == 3600

    @pytest.mark.parametrize("max_age", [None, 0])
    def test_session_without_max_age(self, max_age):
        options = get_session_cookie_options(max_age=max_age)

        assert options.max_age is None
        assert options.http_only is True

    def test_csrf(self):
        options = get_csrf_cookie_options(is_production=False)

        assert options.same_site == "Strict"
        assert options.http_only is False
        assert options.secure is False


class TestApplySecureDefaults:
    """apply_secure_defaults()."""

    def test_fills_unset_fields(self):
        options = apply_secure_defaults({"max_age": 60}, "session")

        assert options.max_age == 60
        assert options.http_only is True
        assert options.secure is True
        assert options.same_site == "Lax"
        assert options.path == "/"

    def test_explicit_value_wins(self):
        """Explicit values override the profile, even insecure ones."""
        options = apply_secure_defaults({"secure": False}, "session")

        assert options.secure is False
        assert options.http_only is True

    def test_model_input(self):
        options = apply_secure_defaults(CookieOptions(domain="example.com"))

        assert options.domain == "example.com"
        assert options.same_site == "Lax"
        assert options.http_only is False

    def test_none_returns_profile(self):
        assert apply_secure_defaults(None, "csrf") == get_csrf_cookie_options()

    def test_expires_kept(self):
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)

        assert apply_secure_defaults({"expires": expires}).expires == expires

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            apply_secure_defaults({}, "tracking")


class TestCookieOptionsModel:
    """Field validation."""

    def test_same_site_values(self):
        with pytest.raises(ValidationError):
            CookieOptions(same_site="lax")

    def test_negative_max_age(self):
        with pytest.raises(ValidationError):
            CookieOptions(max_age=-1)


class TestValidateCookieOptions:
    """Advisory warnings."""

    def test_session_profile_clean(self):
        assert validate_cookie_options(get_session_cookie_options()) == []

    def test_general_profile_warns_http_only(self):
        warnings = validate_cookie_options(get_secure_cookie_defaults().general)

        assert len(warnings) == 1
        assert '"httpOnly"' in warnings[0]

    def test_empty_options_production(self):
        """secure, SameSite and httpOnly are all flagged."""
        warnings = validate_cookie_options(CookieOptions())

        assert len(warnings) == 3
        assert any('"secure" flag is not set in production' in w for w in warnings)
        assert any("SameSite attribute is not set" in w for w in warnings)

    def test_development_skips_production_checks(self):
        warnings = validate_cookie_options({"same_site": "Lax"}, is_production=False)

        assert warnings == []

    def test_same_site_none_without_secure(self):
        warnings = validate_cookie_options({"same_site": "None"}, is_production=False)

        assert len(warnings) == 1
        assert "SameSite=None must also have Secure" in warnings[0]

    @pytest.mark.parametrize("domain", ["*", ".example.com"])
    def test_permissive_domain(self, domain):
        options = get_session_cookie_options().model_copy(update={"domain": domain})

        warnings = validate_cookie_options(options)

        assert warnings == [
            "Cookie domain is set to a wildcard or subdomain pattern. "
            "Ensure this is intentional and necessary."
        ]

    def test_exact_domain_fine(self):
        options = get_session_cookie_options().model_copy(update={"domain": "app.example.com"})

        assert validate_cookie_options(options) == []
