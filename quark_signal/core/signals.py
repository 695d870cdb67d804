import inspect
import logging
import math
import numbers
import types
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple

from quark_signal.core.exceptions import (
    ConfigurationError,
    DispatchLimitError,
    DuplicateListenerError,
    InvalidListenerError,
    ListenerNotFoundError,
)
from quark_signal.settings import settings

logger = logging.getLogger(__name__)

_ANY_CONTEXT = object()


@dataclass(eq=False)
class ListenerRecord:
    """A registered callback with its receiver, priority and once flag."""

    callback: Callable[..., Any]
    context: Any
    priority: float = 0
    once: bool = False
    bound: bool = False
    removed: bool = False

    def matches(self, callback: Callable[..., Any], context: Any = _ANY_CONTEXT) -> bool:
        # Bound methods are rebuilt on every attribute access, so compare with ==.
        if self.callback != callback:
            return False
        return context is _ANY_CONTEXT or self.context is context

    def invoke(self, args: Tuple[Any, ...]) -> Any:
        if self.bound:
            return types.MethodType(self.callback, self.context)(*args)
        return self.callback(*args)


class Signal:
    """Synchronous signal dispatching to listeners ordered by priority.

    Listeners are kept sorted by descending priority, ties in insertion
    order. A listener returning ``False`` stops the current dispatch.
    Nested dispatches on the same signal are bounded by ``max_depth``.

    Example::

        clicked = Signal()
        clicked.add(lambda x, y: print(x, y))
        clicked.dispatch(10, 20)
    """

    def __init__(self, max_depth: Optional[int] = None) -> None:
        if max_depth is None:
            max_depth = settings.max_dispatch_depth
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ConfigurationError(
                f"max_depth must be a positive integer, got {max_depth!r}"
            )
        self.max_depth = max_depth
        self.dispatch_nb = 0
        self.depth = 0
        self._listeners: List[ListenerRecord] = []

    @property
    def listeners(self) -> Tuple[ListenerRecord, ...]:
        return tuple(self._listeners)

    def add(
        self,
        callback: Callable[..., Any],
        priority: float = 0,
        once: bool = False,
        context: Any = None,
    ) -> "Signal":
        """Register ``callback``; higher ``priority`` runs earlier.

        ``context`` defaults to the signal itself and the callback is then
        called with the dispatch arguments only. When a context is given, a
        plain function is bound to it and receives it first, the way a
        method receives ``self``. Callables that carry their own receiver
        (bound methods, callable instances, builtins) are never rebound;
        for them the context only tells registrations apart.
        """
        if not callable(callback):
            raise InvalidListenerError("Signal.add() : First argument must be a Function")
        if (
            isinstance(priority, bool)
            or not isinstance(priority, numbers.Real)
            or math.isnan(priority)
        ):
            raise InvalidListenerError(
                f"Signal.add() : Priority must be a number, got {priority!r}"
            )

        bound = context is not None and inspect.isfunction(callback)
        context = self._resolve_context(context)
        if self._get_listener_index(callback, context) != -1:
            raise DuplicateListenerError("Signal.add() : Listener already exists")

        record = ListenerRecord(
            callback=callback, context=context, priority=priority, once=once, bound=bound
        )
        # list.sort is stable, reverse=True included
        self._listeners = sorted(
            self._listeners + [record],
            key=lambda current: current.priority,
            reverse=True,
        )

        logger.debug(
            "Added listener %r (priority=%s once=%s)", callback, priority, once
        )
        return self

    def once(
        self,
        callback: Callable[..., Any],
        priority: float = 0,
        context: Any = None,
    ) -> "Signal":
        """Register ``callback`` for the next dispatch only."""
        return self.add(callback, priority=priority, once=True, context=context)

    def remove(self, callback: Callable[..., Any], context: Any = None) -> "Signal":
        if not callable(callback):
            raise InvalidListenerError("Signal.remove() : First argument must be a Function")

        index = self._get_listener_index(callback, self._resolve_context(context))
        if index == -1:
            raise ListenerNotFoundError("Signal.remove() : Listener does not exist")

        self._listeners.pop(index).removed = True
        logger.debug("Removed listener %r", callback)
        return self

    def remove_all(self) -> "Signal":
        for record in self._listeners:
            record.removed = True
        logger.debug("Removed all %s listeners", len(self._listeners))
        self._listeners = []
        return self

    def dispatch(self, *args: Any) -> "Signal":
        """Call every listener with ``args``, in priority order.

        Iterates over the listeners present on entry. Listeners removed
        meanwhile are skipped; listeners added meanwhile wait for the next
        dispatch.
        """
        self.dispatch_nb += 1
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                logger.warning(
                    "Dispatch depth %s exceeded on %r, aborting", self.max_depth, self
                )
                raise DispatchLimitError(
                    "Signal.dispatch() : Maximum dispatch limit reached (prevent infinite loop)"
                )

            for record in list(self._listeners):
                if record.removed:
                    continue
                if record.once:
                    self._listeners.remove(record)
                    record.removed = True

                if record.invoke(args) is False:
                    logger.debug("Propagation stopped by %r", record.callback)
                    break
        finally:
            self.depth -= 1

        return self

    def get_listeners_nb(self) -> int:
        return len(self._listeners)

    def get_dispatch_nb(self) -> int:
        return self.dispatch_nb

    def has(self, callback: Callable[..., Any], context: Any = _ANY_CONTEXT) -> bool:
        """Whether ``callback`` is registered, optionally for ``context``."""
        if context is not _ANY_CONTEXT:
            context = self._resolve_context(context)
        return self._get_listener_index(callback, context) != -1

    def _get_listener_index(
        self, callback: Callable[..., Any], context: Any = _ANY_CONTEXT
    ) -> int:
        for index, record in enumerate(self._listeners):
            if record.matches(callback, context):
                return index
        return -1

    def _resolve_context(self, context: Any) -> Any:
        return self if context is None else context

    # Python container sugar

    def __len__(self) -> int:
        return self.get_listeners_nb()

    def __contains__(self, callback: object) -> bool:
        return self.has(callback)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[ListenerRecord]:
        return iter(self.listeners)

    def __repr__(self) -> str:
        return (
            f"<Signal listeners={len(self._listeners)} dispatches={self.dispatch_nb}>"
        )
