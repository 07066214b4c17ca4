"""Request context management using contextvars.

Holds request-scoped values (request id, acting user) so log records written
deep inside the workflow service can be tied back to the HTTP request.

Usage:
    set_request_id("abc123")
    set_current_user("user123")
    request_id = get_request_id()
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    user_id: str | None


def set_request_id(request_id: str | None) -> None:
    """Set the request id for the current async task."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_user(user_id: str | None) -> None:
    """Set the acting user id. Call after authentication."""
    _current_user_id.set(user_id)


def get_current_user_id() -> str | None:
    return _current_user_id.get()


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(request_id=_request_id.get(), user_id=_current_user_id.get())


def clear_request_context() -> None:
    """Reset all request-scoped values (end of request, tests)."""
    _request_id.set(None)
    _current_user_id.set(None)
