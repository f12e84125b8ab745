"""
Per-call context: cancellation, deadline and request-scoped values.

A :class:`QueryContext` is bound to every outgoing request. Customizers can
read values from it or replace it with a derived context, and the client
aborts dispatch and body reading as soon as the context is cancelled or its
deadline passes.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional

CANCELED = "context canceled"
DEADLINE_EXCEEDED = "context deadline exceeded"

_MISSING = object()


class QueryContext:
    """
    Cancellation and value carrier for one or more queries.

    Contexts form a chain: :meth:`with_value` and :meth:`with_timeout` return
    children that inherit the parent's values, deadline and cancellation.
    Cancelling a context cancels every context derived from it, never its
    ancestors.

    Examples:
        ```python
        ctx = QueryContext(timeout=5.0).with_value("request_id", "abc")

        # from another task on the same loop
        ctx.cancel()
        ```
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        *,
        parent: Optional["QueryContext"] = None,
        values: Optional[Dict[Any, Any]] = None,
    ) -> None:
        self._parent = parent
        self._values: Dict[Any, Any] = dict(values or {})
        self._deadline: Optional[float] = None
        if timeout is not None:
            self._deadline = time.monotonic() + max(0.0, timeout)
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "QueryContext":
        """Return an empty context that is never cancelled and has no deadline."""
        return cls()

    @property
    def parent(self) -> Optional["QueryContext"]:
        return self._parent

    def with_value(self, key: Any, value: Any) -> "QueryContext":
        """Return a child context carrying ``key`` -> ``value``."""
        return QueryContext(parent=self, values={key: value})

    def with_timeout(self, seconds: float) -> "QueryContext":
        """Return a child context whose deadline is at most ``seconds`` from now."""
        return QueryContext(timeout=seconds, parent=self)

    def value(self, key: Any, default: Any = None) -> Any:
        """Look ``key`` up through the chain; the nearest context wins."""
        ctx: Optional[QueryContext] = self
        while ctx is not None:
            found = ctx._values.get(key, _MISSING)
            if found is not _MISSING:
                return found
            ctx = ctx._parent
        return default

    @property
    def deadline(self) -> Optional[float]:
        """Effective deadline on the :func:`time.monotonic` clock, if any."""
        deadlines = []
        ctx: Optional[QueryContext] = self
        while ctx is not None:
            if ctx._deadline is not None:
                deadlines.append(ctx._deadline)
            ctx = ctx._parent
        return min(deadlines) if deadlines else None

    def remaining(self) -> Optional[float]:
        """Seconds until the effective deadline, ``None`` without one."""
        deadline = self.deadline
        if deadline is None:
            return None
        return max(0.0, deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        ctx: Optional[QueryContext] = self
        while ctx is not None:
            if ctx._cancelled:
                return True
            ctx = ctx._parent
        return False

    @property
    def error(self) -> Optional[str]:
        """Why the context is done, or ``None`` while it is still live."""
        if self.cancelled:
            return CANCELED
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            return DEADLINE_EXCEEDED
        return None

    def cancel(self) -> None:
        """Cancel this context and every context derived from it."""
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register ``callback`` to run when this context or an ancestor is cancelled.

        The callback runs immediately if the context is already cancelled.

        Returns:
            A function that unregisters the callback.
        """
        if self.cancelled:
            callback()
            return lambda: None

        registered: List[QueryContext] = []
        ctx: Optional[QueryContext] = self
        while ctx is not None:
            ctx._callbacks.append(callback)
            registered.append(ctx)
            ctx = ctx._parent

        def remove() -> None:
            for owner in registered:
                if callback in owner._callbacks:
                    owner._callbacks.remove(callback)

        return remove

    def __repr__(self) -> str:
        return f"QueryContext(error={self.error!r}, remaining={self.remaining()!r})"
