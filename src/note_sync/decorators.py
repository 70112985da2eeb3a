"""Decorators for note store operations.

Provides the common policy applied to every remote operation:
- Token validation
- Error reporting through the status channel

Decorator Order:
    When combining decorators, apply in this order (outermost first):

        @report_errors   # Catches NoteSyncError from the inner function
        @require_token   # Validates the token before calling the operation
        async def operation(self, token: str, ...) -> Note:
            ...

    Decorated methods belong to objects exposing ``session``
    (with ``current_token()``) and ``status`` (a StatusChannel).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, Concatenate, ParamSpec, TypeVar

from note_sync.models import NOT_AUTHENTICATED_MESSAGE, NoteSyncError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def require_token(
    func: Callable[Concatenate[Any, str, P], Awaitable[R]],
) -> Callable[Concatenate[Any, P], Awaitable[R | None]]:
    """Decorator to validate the token before executing an operation.

    Reads the token from the owner's session manager. If a token is
    present it is passed as the first argument after ``self``.
    Otherwise the call is refused without any network request: the
    status channel reports it and None is returned.

    Usage:
        @require_token
        async def refresh(self, token: str) -> list[Note]:
            # token is automatically injected
            ...

    Args:
        func: The async method to wrap. Must accept the token after self.

    Returns:
        Wrapped method that validates the token before calling the original.
    """

    @wraps(func)
    async def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> R | None:
        token = self.session.current_token()
        if not token:
            logger.warning("%s refused: no token", func.__name__)
            self.status.set(NOT_AUTHENTICATED_MESSAGE, error=True)
            return None
        return await func(self, token, *args, **kwargs)

    return wrapper


def report_errors(
    func: Callable[Concatenate[Any, P], Awaitable[R]],
) -> Callable[Concatenate[Any, P], Awaitable[R | None]]:
    """Decorator to catch NoteSyncError and report it on the status channel.

    The wrapped operation is expected to mutate local state only after
    the server call succeeded, so a caught error leaves state untouched.
    Other exceptions are propagated.

    Args:
        func: The async method to wrap.

    Returns:
        Wrapped method returning None on failure.
    """

    @wraps(func)
    async def wrapper(self: Any, *args: P.args, **kwargs: P.kwargs) -> R | None:
        try:
            return await func(self, *args, **kwargs)
        except NoteSyncError as e:
            logger.error(
                "NoteSyncError in %s: code=%s, message=%s",
                func.__name__,
                e.code.value,
                e.message,
                exc_info=True,
            )
            self.status.set(e.message, error=True)
            return None

    return wrapper
