"""Observer primitives for the viewport view models.

The presentation layer binds to these instead of Qt signals so the
controller stays importable and testable without a Qt installation.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, Tuple, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")
Handler = Callable[..., Any]


class Signal:
    """Named list of handlers called in connection order.

    Handlers are kept in an immutable tuple that is replaced on every
    connect/disconnect, so ``emit`` iterates a stable snapshot without
    holding the lock.  A handler that raises is logged with the signal's
    name and the remaining handlers still run.
    """

    def __init__(self, name: str = "signal") -> None:
        self._name = name
        self._handlers: Tuple[Handler, ...] = ()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def connect(self, handler: Handler) -> Handler:
        """Register *handler* once; returns it so this works as a decorator."""
        with self._lock:
            if handler not in self._handlers:
                self._handlers = self._handlers + (handler,)
        return handler

    def disconnect(self, handler: Handler) -> None:
        with self._lock:
            if handler not in self._handlers:
                raise ValueError(f"{handler!r} is not connected to {self._name}")
            self._handlers = tuple(h for h in self._handlers if h != handler)

    def disconnect_all(self) -> None:
        with self._lock:
            self._handlers = ()

    def emit(self, *args: Any) -> None:
        for handler in self._handlers:
            try:
                handler(*args)
            except Exception:
                _logger.exception("Handler %r of %s failed", handler, self._name)

    def __repr__(self) -> str:
        return f"Signal({self._name!r}, handlers={len(self._handlers)})"


class ObservableProperty(Generic[T]):
    """Holds one value and emits ``changed(new, old)`` when it changes."""

    def __init__(self, initial_value: T, name: str = "property") -> None:
        self._value = initial_value
        self.changed = Signal(f"{name}.changed")

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value == self._value:
            return
        old_value, self._value = self._value, new_value
        self.changed.emit(new_value, old_value)
