"""
Secure cookie attribute profiles.

Three profiles cover the usual cases:
- session: authentication cookies, httpOnly, SameSite=Lax
- general: application cookies readable by scripts, SameSite=Lax
- csrf: double-submit tokens readable by scripts, SameSite=Strict

All profiles set secure only in production (plain HTTP development servers
would otherwise drop the cookies) and path "/".
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

SameSite = Literal["Strict", "Lax", "None"]

COOKIE_TYPES = ("session", "general", "csrf")


class CookieOptions(BaseModel):
    """Cookie attributes. Unset fields are None and left to the framework."""

    secure: Optional[bool] = Field(default=None, description="Send over HTTPS only")
    http_only: Optional[bool] = Field(
        default=None, description="Hide the cookie from JavaScript"
    )
    same_site: Optional[SameSite] = Field(
        default=None, description="Cross-site sending policy"
    )
    max_age: Optional[int] = Field(default=None, ge=0, description="Lifetime in seconds")
    expires: Optional[datetime] = None
    path: Optional[str] = None
    domain: Optional[str] = None

    model_config = {"frozen": True}


class SecureCookieDefaults(BaseModel):
    """The three named cookie profiles."""

    session: CookieOptions
    general: CookieOptions
    csrf: CookieOptions

    model_config = {"frozen": True}

    def profile(self, cookie_type: str) -> CookieOptions:
        """
        Look up a profile by name.

        Raises:
            ValueError: If cookie_type is not session, general or csrf
        """
        if cookie_type not in COOKIE_TYPES:
            raise ValueError(
                f"Unknown cookie type '{cookie_type}', expected one of {', '.join(COOKIE_TYPES)}"
            )
        return getattr(self, cookie_type)


def get_secure_cookie_defaults(is_production: bool = True) -> SecureCookieDefaults:
    return SecureCookieDefaults(
        session=CookieOptions(
            http_only=True, secure=is_production, same_site="Lax", path="/"
        ),
        general=CookieOptions(
            http_only=False, secure=is_production, same_site="Lax", path="/"
        ),
        csrf=CookieOptions(
            http_only=False, secure=is_production, same_site="Strict", path="/"
        ),
    )


def get_session_cookie_options(
    is_production: bool = True, max_age: Optional[int] = None
) -> CookieOptions:
    """Session profile, with max_age applied when given and non-zero."""
    session = get_secure_cookie_defaults(is_production).session
    if max_age:
        return session.model_copy(update={"max_age": max_age})
    return session


def get_csrf_cookie_options(is_production: bool = True) -> CookieOptions:
    return get_secure_cookie_defaults(is_production).csrf


def apply_secure_defaults(
    options: Union[CookieOptions, Mapping[str, Any], None],
    cookie_type: str = "general",
    is_production: bool = True,
) -> CookieOptions:
    """
    Fill unset cookie attributes from a profile.

    Only fields the caller explicitly set override the profile; an explicit
    value always wins, even when it is less secure.

    Args:
        options: Caller attributes (CookieOptions or a mapping of its fields)
        cookie_type: "session", "general" or "csrf"
        is_production: Selects the secure flag of the profile

    Returns:
        Merged CookieOptions

    Raises:
        ValueError: If cookie_type is unknown
    """
    base = get_secure_cookie_defaults(is_production).profile(cookie_type)
    if options is None:
        return base
    if isinstance(options, Mapping):
        options = CookieOptions(**options)
    overrides: Dict[str, Any] = {
        name: getattr(options, name) for name in options.model_fields_set
    }
    return CookieOptions(**{**base.model_dump(), **overrides})


def validate_cookie_options(
    options: Union[CookieOptions, Mapping[str, Any]],
    is_production: bool = True,
) -> List[str]:
    """
    Return advisory warnings for risky cookie attributes.

    Never fails; an empty list means nothing was flagged.
    """
    if isinstance(options, Mapping):
        options = CookieOptions(**options)

    warnings: List[str] = []

    if is_production and not options.secure:
        warnings.append(
            'Cookie "secure" flag is not set in production. '
            "Cookies will be sent over unencrypted HTTP."
        )

    if options.same_site == "None" and not options.secure:
        warnings.append(
            "Cookie with SameSite=None must also have Secure flag set. "
            "This configuration will be rejected by modern browsers."
        )

    if not options.same_site:
        warnings.append(
            'Cookie SameSite attribute is not set. Modern browsers default to "Lax", '
            "but explicit configuration is recommended."
        )

    if is_production and not options.http_only:
        warnings.append(
            'Cookie "httpOnly" flag is not set. If this is a session cookie, '
            "it may be vulnerable to XSS attacks."
        )

    if options.domain and (options.domain == "*" or options.domain.startswith(".")):
        warnings.append(
            "Cookie domain is set to a wildcard or subdomain pattern. "
            "Ensure this is intentional and necessary."
        )

    return warnings
