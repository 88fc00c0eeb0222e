"""
Event channel facade

A channel wraps one emitter and refuses to detach listeners from protected
events. Everything else is passed through to the emitter unchanged.
"""

from typing import Any, Callable, Hashable, Optional

from .config import ChannelConfig
from .emitter import EventEmitter
from .logging import get_logger
from .protected import ProtectedEventRegistry, get_registry

logger = get_logger(__name__)


class EventChannel:
    """
    Emitter facade with protected-event aware removal.

    Protection is looked up in the registry on every off() call; the
    channel keeps no protection state of its own.

    Usage:
        channel = create_channel()
        key = register_protected_event("session-expired")
        channel.on(key, handler)
        channel.off(key)          # no-op, key is protected
        channel.emit(key, user)   # handler still fires
    """

    def __init__(
        self,
        emitter: Optional[EventEmitter] = None,
        registry: Optional[ProtectedEventRegistry] = None,
        config: Optional[ChannelConfig] = None,
    ):
        self.emitter = emitter if emitter is not None else EventEmitter(config=config)
        self.registry = registry if registry is not None else get_registry()

    def emit(self, event: Hashable, *args: Any):
        return self.emitter.emit(event, *args)

    def on(self, event: Hashable, listener: Optional[Callable] = None, priority: Optional[float] = None):
        return self.emitter.on(event, listener, priority=priority)

    def once(self, event: Hashable, listener: Optional[Callable] = None, priority: Optional[float] = None):
        return self.emitter.once(event, listener, priority=priority)

    def off(self, event: Hashable, listener: Optional[Callable] = None) -> EventEmitter:
        """
        Remove a listener, or all listeners of the event.

        Protected events are left untouched.

        Returns:
            The wrapped emitter
        """
        if self.registry.is_protected(event):
            logger.debug("Ignoring off() for protected event %r", event)
            return self.emitter

        if listener is not None:
            return self.emitter.off(event, listener)
        return self.emitter.remove_all_listeners(event)

    def __getattr__(self, name: str):
        # only called for attributes not found on the channel itself
        if name == "emitter":
            raise AttributeError(name)
        return getattr(self.emitter, name)

    def __repr__(self):
        return f"<{self.__class__.__name__} emitter={self.emitter!r}>"


def create_channel(
    emitter: Optional[EventEmitter] = None,
    *,
    registry: Optional[ProtectedEventRegistry] = None,
    config: Optional[ChannelConfig] = None,
) -> EventChannel:
    """
    Create a new event channel.

    Args:
        emitter: Emitter to wrap (default: a new EventEmitter)
        registry: Protected event registry (default: process-wide registry)
        config: Configuration for the new emitter when none is given

    Returns:
        EventChannel instance
    """
    return EventChannel(emitter=emitter, registry=registry, config=config)


# Process-wide default channel
default_channel = create_channel()
