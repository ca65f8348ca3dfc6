# backend/portfolio_api/utils/context.py
"""
Request-scoped correlation ID.

A ContextVar follows the request through async code and into the threadpool
FastAPI runs sync routes in, so the performance service can log with the
caller's ID without it being passed around.

Usage:
    from portfolio_api.utils.context import correlation_scope, get_correlation_id

    with correlation_scope("abc-123"):
        get_correlation_id()  # "abc-123"
    get_correlation_id()      # back to the previous value
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Return the current request's correlation ID, or None outside a request."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id_var.set(None)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    Restores the previous value on exit, so nested scopes (e.g. a script
    calling the service inside a request) do not clobber the outer ID.
    """
    token = _correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id_var.reset(token)
