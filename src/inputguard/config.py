"""
Security configuration from YAML and environment variables.

Precedence (highest first):
    1. INPUTGUARD_* environment variables
    2. config.yaml file (under 'security:' key)
    3. Dataclass defaults

Example config.yaml:
    security:
      environment: production
      blocked_hosts: [metadata.internal]
      upload_base_path: /var/app/uploads
      content_security_policy:
        script-src: ["'self'"]
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from inputguard.errors import ConfigurationError
from inputguard.secure_defaults.cookies import CookieOptions, apply_secure_defaults
from inputguard.secure_defaults.csp import (
    CSPDirectives,
    csp_directives_to_string,
    merge_csp,
    parse_csp_config,
)
from inputguard.security.password_validation import PasswordValidationOptions
from inputguard.security.path_validation import PathValidationOptions
from inputguard.security.url_validation import UrlValidationOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")
CONFIG_SECTION = "security"
ENV_PREFIX = "INPUTGUARD_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge overlay into base dict."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_bool(name: str, raw: Union[str, bool]) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}", context={"value": raw})


def _parse_int(name: str, raw: Union[str, int]) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid integer for {name}", context={"value": raw}
        ) from e


def _parse_list(name: str, raw: Union[str, List[str], None]) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [item.strip() for item in raw.split(",") if item.strip()]
    if not isinstance(raw, (list, tuple, set, frozenset)):
        raise ConfigurationError(
            f"Invalid list for {name}", context={"type": type(raw).__name__}
        )
    return [str(item).strip() for item in raw if str(item).strip()]


@dataclass
class SecurityConfig:
    """Validator policy and secure defaults for one deployment.

    Load with SecurityConfig.from_env() or load_config().
    """

    # "production" enables secure cookies and production-only cookie warnings
    environment: str = "production"

    # URL / SSRF
    blocked_hosts: List[str] = field(default_factory=list)
    allowed_protocols: List[str] = field(default_factory=lambda: ["http", "https"])
    block_localhost: bool = True
    block_private_ips: bool = True
    block_link_local: bool = True

    # Paths
    upload_base_path: str = ""
    allow_absolute_paths: bool = False

    # Credentials
    password_min_length: int = 8
    password_max_length: int = 128
    secret_min_length: int = 32

    # Browser-facing defaults
    content_security_policy: Optional[Union[str, Dict[str, Any]]] = None
    cookie_domain: str = ""

    def __post_init__(self) -> None:
        if not self.allowed_protocols:
            raise ConfigurationError("allowed_protocols must not be empty")
        if self.password_min_length < 1:
            raise ConfigurationError(
                "password_min_length must be at least 1",
                context={"value": self.password_min_length},
            )
        if self.password_min_length > self.password_max_length:
            raise ConfigurationError(
                "password_min_length exceeds password_max_length",
                context={
                    "min": self.password_min_length,
                    "max": self.password_max_length,
                },
            )
        if self.secret_min_length < 1:
            raise ConfigurationError(
                "secret_min_length must be at least 1",
                context={"value": self.secret_min_length},
            )

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SecurityConfig":
        """
        Build a config from a plain dict (e.g. a YAML section).

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown security config keys", context={"keys": ", ".join(unknown)}
            )

        values = dict(data)
        for key in ("blocked_hosts", "allowed_protocols"):
            if key in values:
                values[key] = _parse_list(key, values[key])
        for key in (
            "block_localhost",
            "block_private_ips",
            "block_link_local",
            "allow_absolute_paths",
        ):
            if key in values:
                values[key] = _parse_bool(key, values[key])
        for key in ("password_min_length", "password_max_length", "secret_min_length"):
            if key in values:
                values[key] = _parse_int(key, values[key])
        return cls(**values)

    @classmethod
    def from_env(cls) -> "SecurityConfig":
        """Load configuration from environment variables over defaults.

        Optional environment variables:
            INPUTGUARD_ENVIRONMENT: production (default)
            INPUTGUARD_BLOCKED_HOSTS: comma-separated hosts
            INPUTGUARD_ALLOWED_PROTOCOLS: http,https (default)
            INPUTGUARD_BLOCK_PRIVATE_IPS: true (default)
            INPUTGUARD_UPLOAD_BASE_PATH: base directory for uploaded files
            INPUTGUARD_PASSWORD_MIN_LENGTH: 8 (default)
            INPUTGUARD_SECRET_MIN_LENGTH: 32 (default)
            INPUTGUARD_CONTENT_SECURITY_POLICY: JSON object or CSP header string
            INPUTGUARD_COOKIE_DOMAIN: cookie Domain attribute

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls.from_dict(_env_overrides())

    def url_options(self) -> UrlValidationOptions:
        return self._build(
            UrlValidationOptions,
            block_localhost=self.block_localhost,
            block_private_ips=self.block_private_ips,
            block_link_local=self.block_link_local,
            blocked_hosts=self.blocked_hosts,
            allowed_protocols=self.allowed_protocols,
        )

    def path_options(self) -> PathValidationOptions:
        return self._build(
            PathValidationOptions,
            base_path=self.upload_base_path or None,
            allow_absolute=self.allow_absolute_paths,
        )

    def password_options(self) -> PasswordValidationOptions:
        return self._build(
            PasswordValidationOptions,
            min_length=self.password_min_length,
            max_length=self.password_max_length,
        )

    def csp_directives(self) -> CSPDirectives:
        """Default CSP with the configured override merged in."""
        if not self.content_security_policy:
            return merge_csp({})
        return merge_csp(parse_csp_config(self.content_security_policy))

    def csp_header(self) -> str:
        return csp_directives_to_string(self.csp_directives())

    def cookie_options(self, cookie_type: str = "general") -> CookieOptions:
        """
        Secure cookie profile for this environment, with cookie_domain applied.

        Raises:
            ValueError: If cookie_type is unknown
        """
        overrides: Dict[str, Any] = {}
        if self.cookie_domain:
            overrides["domain"] = self.cookie_domain
        return apply_secure_defaults(
            overrides, cookie_type=cookie_type, is_production=self.is_production
        )

    @staticmethod
    def _build(model, **values):
        try:
            return model(**values)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid {model.__name__}", context={"errors": e.error_count()}
            ) from e


def _env_overrides() -> Dict[str, Any]:
    """Collect INPUTGUARD_* variables that are set, keyed by config field."""
    mapping = {
        "ENVIRONMENT": "environment",
        "BLOCKED_HOSTS": "blocked_hosts",
        "ALLOWED_PROTOCOLS": "allowed_protocols",
        "BLOCK_LOCALHOST": "block_localhost",
        "BLOCK_PRIVATE_IPS": "block_private_ips",
        "BLOCK_LINK_LOCAL": "block_link_local",
        "UPLOAD_BASE_PATH": "upload_base_path",
        "ALLOW_ABSOLUTE_PATHS": "allow_absolute_paths",
        "PASSWORD_MIN_LENGTH": "password_min_length",
        "PASSWORD_MAX_LENGTH": "password_max_length",
        "SECRET_MIN_LENGTH": "secret_min_length",
        "CONTENT_SECURITY_POLICY": "content_security_policy",
        "COOKIE_DOMAIN": "cookie_domain",
    }
    overrides: Dict[str, Any] = {}
    for suffix, key in mapping.items():
        value = os.getenv(ENV_PREFIX + suffix)
        if value is not None:
            overrides[key] = value
    return overrides


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> SecurityConfig:
    """
    Load configuration from YAML, then apply overrides and environment variables.

    Args:
        config_path: Path to YAML config file (default: ./config.yaml)
        overrides: Dict of overrides applied after the file, before env vars

    Returns:
        SecurityConfig instance

    Raises:
        ConfigurationError: If the file is invalid YAML or holds invalid values
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    data: Dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML in config file", context={"path": str(config_path)}
            ) from e
        if not isinstance(yaml_data, dict):
            raise ConfigurationError(
                "Config file must contain a mapping", context={"path": str(config_path)}
            )
        section = yaml_data.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"'{CONFIG_SECTION}' section must be a mapping",
                context={"path": str(config_path)},
            )
        data = section
        logger.debug(
            "Loaded security config file",
            extra={"config_source": str(config_path)},
        )

    data = _deep_merge(asdict(SecurityConfig()), data)
    if overrides:
        data = _deep_merge(data, overrides)
    data = _deep_merge(data, _env_overrides())

    return SecurityConfig.from_dict(data)


# Module-level cached config
_config: Optional[SecurityConfig] = None


def get_config() -> SecurityConfig:
    """Get or load the singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached config (primarily for testing)."""
    global _config
    _config = None
