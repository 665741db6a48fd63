"""Context variables injected into every log record."""

from contextvars import ContextVar
from typing import Dict, Optional

_component: ContextVar[Optional[str]] = ContextVar("component", default=None)
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def set_log_context(
    component: Optional[str] = None,
    request_id: Optional[str] = None,
) -> None:
    """
    Set logging context for the current thread or task.

    Only the arguments that are given are updated.

    Args:
        component: Calling component (e.g. "webhook", "upload")
        request_id: Correlation ID of the request being validated
    """
    if component is not None:
        _component.set(component)
    if request_id is not None:
        _request_id.set(request_id)


def get_log_context() -> Dict[str, Optional[str]]:
    """Return the current logging context."""
    return {
        "component": _component.get(),
        "request_id": _request_id.get(),
    }


def clear_log_context() -> None:
    """Reset all context variables."""
    _component.set(None)
    _request_id.set(None)
