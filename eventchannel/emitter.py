"""
Event emitter primitive used by every channel
"""

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Set, Union

from .config import ChannelConfig
from .logging import get_logger
from .utils import is_awaitable

logger = get_logger(__name__)


@dataclass(eq=False)
class Listener:
    """
    A single listener registration.

    Attributes:
        callback: The registered callable
        once: True if registered through once() (removed before first call)
        priority: Higher runs first; equal priorities keep registration order
    """
    callback: Callable[..., Any]
    once: bool = False
    priority: float = 0


def _close_pending(pending: Iterable[Any]) -> None:
    """Close coroutines that will never be awaited"""
    for awaitable in pending:
        if inspect.iscoroutine(awaitable):
            awaitable.close()


class EventEmitter:
    """
    Event emitter keyed by any hashable event (strings or protected keys).

    Supports priority-ordered listeners, single-fire listeners with an
    explicit once marker, and an async-aware emit.

    Usage:
        emitter = EventEmitter()

        @emitter.on("order-created")
        async def handler(order):
            ...

        await emitter.emit_async("order-created", order)
    """

    def __init__(self, config: Optional[ChannelConfig] = None):
        self.config = config or ChannelConfig()

        # event -> List[Listener], kept in invocation order
        self._listeners: Dict[Hashable, List[Listener]] = {}

        # events that already triggered the listener-limit warning
        self._warned: Set[Hashable] = set()

    @property
    def name(self) -> str:
        return self.config.name

    def on(self, event: Hashable, listener: Optional[Callable] = None, priority: Optional[float] = None):
        """
        Register a listener.

        Without a listener, returns a decorator:

            @emitter.on("state_change")
            def handler(value):
                ...

        Args:
            event: Event to listen for
            listener: Callable invoked with the emitted arguments
            priority: Higher priority listeners run first (default 0)

        Returns:
            self, or a decorator when listener is omitted
        """
        if listener is None:
            def decorator(handler: Callable):
                self._add(event, Listener(handler, once=False, priority=priority or 0))
                return handler
            return decorator

        self._add(event, Listener(listener, once=False, priority=priority or 0))
        return self

    add_listener = on

    def once(self, event: Hashable, listener: Optional[Callable] = None, priority: Optional[float] = None):
        """Register a listener that is removed before its first invocation"""
        if listener is None:
            def decorator(handler: Callable):
                self._add(event, Listener(handler, once=True, priority=priority or 0))
                return handler
            return decorator

        self._add(event, Listener(listener, once=True, priority=priority or 0))
        return self

    def off(self, event: Hashable, listener: Optional[Callable] = None) -> "EventEmitter":
        """
        Remove a listener, or every listener of the event when none is given.

        Removing a listener that is not registered is a no-op.
        """
        if listener is None:
            return self.remove_all_listeners(event)

        entries = self._listeners.get(event)
        if not entries:
            return self

        for entry in entries:
            if entry.callback == listener:
                self._discard(event, entry)
                break
        return self

    remove_listener = off

    def discard_listener(self, event: Hashable, entry: Listener) -> "EventEmitter":
        """Remove one record returned by raw_listeners(), if still registered"""
        self._discard(event, entry)
        return self

    def remove_all_listeners(self, event: Optional[Hashable] = None) -> "EventEmitter":
        """Remove all listeners for one event, or for every event"""
        if event is None:
            self._listeners.clear()
            self._warned.clear()
        else:
            self._listeners.pop(event, None)
            self._warned.discard(event)
        return self

    def listeners(self, event: Hashable) -> List[Callable]:
        """Callbacks registered for an event, in invocation order"""
        return [entry.callback for entry in self._listeners.get(event, ())]

    def raw_listeners(self, event: Hashable) -> List[Listener]:
        """Listener records (with once marker and priority) in invocation order"""
        return list(self._listeners.get(event, ()))

    def listener_count(self, event: Hashable) -> int:
        return len(self._listeners.get(event, ()))

    def event_names(self) -> List[Hashable]:
        return list(self._listeners)

    def has_listeners(self, event: Optional[Hashable] = None) -> bool:
        """Check for listeners on one event, or on any event"""
        if event is None:
            return bool(self._listeners)
        return bool(self._listeners.get(event))

    def emit(self, event: Hashable, *args: Any) -> Union[bool, "asyncio.Future"]:
        """
        Invoke every listener of an event synchronously, in order.

        Returns:
            False if nothing was listening, True if every listener was
            synchronous, otherwise a future gathering the awaitable results
            of async listeners. Async listeners need a running event loop.
        """
        entries = self._listeners.get(event)
        if not entries:
            return False

        pending = []
        try:
            for entry in list(entries):
                if entry.once:
                    self._discard(event, entry)
                result = entry.callback(*args)
                if is_awaitable(result):
                    pending.append(result)
        except BaseException:
            _close_pending(pending)
            raise

        if not pending:
            return True

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            _close_pending(pending)
            raise RuntimeError(
                f"{event!r} has async listeners; emit() must run inside an event loop"
            ) from None
        return asyncio.gather(*pending)

    async def emit_async(self, event: Hashable, *args: Any) -> List[Any]:
        """
        Invoke every listener and await the async ones concurrently.

        Returns:
            Listener results in invocation order
        """
        entries = self._listeners.get(event)
        if not entries:
            return []

        results: List[Any] = []
        awaitables: Dict[int, Any] = {}
        try:
            for entry in list(entries):
                if entry.once:
                    self._discard(event, entry)
                result = entry.callback(*args)
                if is_awaitable(result):
                    awaitables[len(results)] = result
                results.append(result)
        except BaseException:
            _close_pending(awaitables.values())
            raise

        if awaitables:
            settled = await asyncio.gather(*awaitables.values())
            for index, value in zip(awaitables, settled):
                results[index] = value
        return results

    def _add(self, event: Hashable, entry: Listener) -> None:
        entries = self._listeners.setdefault(event, [])

        index = len(entries)
        for i, existing in enumerate(entries):
            if existing.priority < entry.priority:
                index = i
                break
        entries.insert(index, entry)

        limit = self.config.max_listeners
        if limit and len(entries) > limit and event not in self._warned:
            self._warned.add(event)
            logger.warning(
                "Possible listener leak on %s: %d listeners for %r (limit %d)",
                self.name, len(entries), event, limit,
            )

    def _discard(self, event: Hashable, entry: Listener) -> None:
        entries = self._listeners.get(event)
        if not entries:
            return
        try:
            entries.remove(entry)
        except ValueError:
            return
        if not entries:
            del self._listeners[event]
            self._warned.discard(event)

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r} events={len(self._listeners)}>"
