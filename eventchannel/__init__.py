"""
eventchannel - Protected pub/sub event channels for Python

Event channels built on a small priority-aware emitter, adding:

- Protected Events - keys whose listeners survive off() until unregistered
- Group / Namespace Batching - on/once/off/emit across glob-matched events
- Dispatch Strategies - parallel, waterfall and series fan-out with results
- Flexible Logging - Silent by default, supports any logging framework

Optional Features (Require Installation):
- FastAPI Integration - channel dependency and lifespan events (requires fastapi)

Usage:
    from eventchannel import (
        create_channel, register_protected_event,
        on_group, emit_group_with_strategy,
    )

    channel = create_channel()
    created = register_protected_event("created", {"group": "order"})
    paid = register_protected_event("paid", {"group": "order"})

    on_group("order", lambda key, order: print(key.name, order), channel)
    channel.emit(created, {"id": 1})

    results = await emit_group_with_strategy("order", "series", {"id": 1}, channel)
"""

# Configuration
from .config import ChannelConfig, MAX_LISTENERS

# Exceptions
from .exceptions import EventChannelError, UnknownStrategyError

# Types
from .types import (
    EventMeta,
    EventHandler,
    ProtectedEventKey,
    ProtectedEvent,
    DispatchStrategy,
)

# Emitter primitive
from .emitter import EventEmitter, Listener

# Protected events
from .protected import (
    ProtectedEventRegistry,
    get_registry,
    register_protected_event,
    unregister_protected_event,
    is_protected_event,
    get_protected_event_meta,
    list_protected_events,
)

# Channels
from .channel import EventChannel, create_channel, default_channel

# Group / namespace batch operations
from .group import (
    on_group,
    on_namespace,
    once_group,
    once_namespace,
    off_group,
    off_namespace,
    off_once_group,
    off_once_namespace,
    emit_group,
    emit_namespace,
    emit_group_async,
    emit_namespace_async,
)

# Dispatch strategies
from .strategies import emit_group_with_strategy, emit_namespace_with_strategy

# Utilities
from .utils import match_pattern, is_event_emitter

# Logging Configuration
from .logging import (
    configure_logging,
    set_error_handler,
    disable_logging,
    is_logging_enabled,
)

__all__ = [
    # Configuration
    "ChannelConfig",
    "MAX_LISTENERS",

    # Exceptions
    "EventChannelError",
    "UnknownStrategyError",

    # Types
    "EventMeta",
    "EventHandler",
    "ProtectedEventKey",
    "ProtectedEvent",
    "DispatchStrategy",

    # Emitter
    "EventEmitter",
    "Listener",

    # Protected events
    "ProtectedEventRegistry",
    "get_registry",
    "register_protected_event",
    "unregister_protected_event",
    "is_protected_event",
    "get_protected_event_meta",
    "list_protected_events",

    # Channels
    "EventChannel",
    "create_channel",
    "default_channel",

    # Batch operations
    "on_group",
    "on_namespace",
    "once_group",
    "once_namespace",
    "off_group",
    "off_namespace",
    "off_once_group",
    "off_once_namespace",
    "emit_group",
    "emit_namespace",
    "emit_group_async",
    "emit_namespace_async",

    # Dispatch strategies
    "emit_group_with_strategy",
    "emit_namespace_with_strategy",

    # Utilities
    "match_pattern",
    "is_event_emitter",

    # Logging Configuration
    "configure_logging",
    "set_error_handler",
    "disable_logging",
    "is_logging_enabled",
]

__version__ = "0.1.0"
__license__ = "MIT"
