"""Single-slot status channel.

Holds the most recent human-readable status or error message written
by the session manager and the note store. Only the latest message
is kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

StatusListener = Callable[[str, bool], None]


class StatusChannel:
    """Last-write-wins status slot consumed by the presentation layer.

    Attributes:
        message: Latest message, None until something is written
        is_error: Whether the latest message reports a failure
    """

    def __init__(self) -> None:
        self.message: str | None = None
        self.is_error = False
        self._listeners: list[StatusListener] = []

    def set(self, message: str, *, error: bool = False) -> None:
        """Overwrite the slot and notify listeners.

        Args:
            message: Human-readable message
            error: True if the message reports a failure
        """
        self.message = message
        self.is_error = error
        for listener in list(self._listeners):
            try:
                listener(message, error)
            except Exception:
                logger.exception("Status listener %r failed", listener)

    def clear(self) -> None:
        """Empty the slot without notifying listeners."""
        self.message = None
        self.is_error = False

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener called on every write.

        Args:
            listener: Callable receiving (message, is_error)

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
