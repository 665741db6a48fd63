"""
Path validation for traversal prevention.

Resolves a user-supplied path against a base directory and checks that the
canonical result stays inside it. Canonical resolution, not pattern matching,
is what neutralizes "../" sequences and mixed separators. The pattern check
used when no base directory is given is a heuristic only.

Callers must do their I/O with the returned resolved_path, never with the
original input.
"""

import logging
import os
import re
from typing import Mapping, Optional, Union

from pydantic import BaseModel, Field

from inputguard.errors import ErrorCode
from inputguard.logging.utilities import log_rejection
from inputguard.options import resolve_options
from inputguard.results import PathValidationResult

logger = logging.getLogger(__name__)

# "C:", "c:\\" style prefixes are absolute on Windows; treat them so everywhere
_DRIVE_PREFIX = re.compile(r"^[a-zA-Z]:")


class PathValidationOptions(BaseModel):
    """Options for validate_path()."""

    base_path: Optional[str] = Field(
        default=None,
        description="Directory the path must resolve within",
    )
    allow_absolute: bool = Field(
        default=False,
        description="Accept absolute user paths",
    )

    model_config = {"frozen": True}


def _reject(
    code: ErrorCode,
    error: str,
    resolved_path: Optional[str] = None,
    is_within_base: Optional[bool] = None,
    base_path: Optional[str] = None,
) -> PathValidationResult:
    log_rejection(
        logger, "path", code, base_path=base_path, resolved_path=resolved_path
    )
    return PathValidationResult(
        is_valid=False,
        error=error,
        code=code,
        resolved_path=resolved_path,
        is_within_base=is_within_base,
    )


def _to_native(path: str) -> str:
    """Treat backslashes as separators on every platform."""
    if os.sep == "/":
        return path.replace("\\", "/")
    return path


def is_absolute_path(path: str) -> bool:
    """True for POSIX roots, backslash roots and Windows drive prefixes."""
    return (
        path.startswith(("/", "\\"))
        or bool(_DRIVE_PREFIX.match(path))
        or os.path.isabs(_to_native(path))
    )


def _is_within(resolved: str, base: str) -> bool:
    resolved_cmp = os.path.normcase(resolved)
    base_cmp = os.path.normcase(base)
    prefix = base_cmp if base_cmp.endswith(os.sep) else base_cmp + os.sep
    return resolved_cmp == base_cmp or resolved_cmp.startswith(prefix)


def validate_path(
    user_path: str,
    options: Union[PathValidationOptions, Mapping, None] = None,
) -> PathValidationResult:
    """
    Validate a user-supplied path for traversal attacks.

    Args:
        user_path: Path received from an untrusted source
        options: PathValidationOptions, a mapping of its fields, or None

    Returns:
        PathValidationResult with resolved_path and is_within_base

    Examples:
        >>> validate_path("../../etc/passwd", {"base_path": "/app/data"}).code
        <ErrorCode.TRAVERSAL_DETECTED: 'traversal_detected'>
    """
    opts = resolve_options(options, PathValidationOptions)

    if not isinstance(user_path, str) or not user_path:
        return _reject(ErrorCode.MISSING_INPUT, "Path is required and must be a string")

    if "\0" in user_path:
        return _reject(ErrorCode.NULL_BYTE_INJECTION, "Path contains null byte")

    # Before base resolution: an absolute path must not slip through as "safe"
    if not opts.allow_absolute and is_absolute_path(user_path):
        return _reject(
            ErrorCode.ABSOLUTE_PATH_REJECTED, "Absolute paths are not allowed"
        )

    native_path = _to_native(user_path)

    if opts.base_path:
        try:
            canonical_base = os.path.normpath(
                os.path.abspath(_to_native(opts.base_path))
            )
            resolved = os.path.normpath(os.path.join(canonical_base, native_path))
        except (OSError, ValueError) as e:
            return _reject(
                ErrorCode.PATH_RESOLUTION_FAILED,
                f"Failed to resolve path: {e}",
                base_path=opts.base_path,
            )

        if not _is_within(resolved, canonical_base):
            return _reject(
                ErrorCode.TRAVERSAL_DETECTED,
                "Path traversal detected: resolved path is outside allowed base directory",
                resolved_path=resolved,
                is_within_base=False,
                base_path=canonical_base,
            )

        return PathValidationResult(
            is_valid=True, resolved_path=resolved, is_within_base=True
        )

    # No trust boundary given: fall back to a syntactic check
    normalized = os.path.normpath(native_path)
    posix_form = normalized.replace(os.sep, "/")
    if posix_form.startswith("..") or "/../" in posix_form:
        return _reject(
            ErrorCode.TRAVERSAL_PATTERN_DETECTED,
            "Path contains traversal patterns",
            resolved_path=normalized,
        )

    return PathValidationResult(
        is_valid=True, resolved_path=normalized, is_within_base=False
    )


def validate_path_within_base(user_path: str, base_path: str) -> PathValidationResult:
    """
    Validate that a relative path stays inside base_path.

    Convenience wrapper that always requires a base directory.
    """
    if not base_path:
        return _reject(ErrorCode.BASE_PATH_REQUIRED, "Base path is required")
    return validate_path(user_path, PathValidationOptions(base_path=base_path))
