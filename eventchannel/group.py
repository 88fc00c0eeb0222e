"""
Batch operations on protected events by group or namespace

Every operation visits the registered protected events in registration
order and acts on those whose group (or namespace) matches a glob pattern.
Events without a group/namespace are never matched.
"""

import asyncio
import functools
from typing import Any, Hashable, Iterator, Optional

from .channel import create_channel
from .logging import log_error
from .protected import ProtectedEventRegistry, get_registry
from .types import EventHandler, ProtectedEventKey
from .utils import is_awaitable, match_pattern, split_emitter

GROUP = "group"
NAMESPACE = "namespace"


def matching_events(
    field: str,
    pattern: str,
    registry: Optional[ProtectedEventRegistry] = None,
) -> Iterator[ProtectedEventKey]:
    """
    Yield keys of protected events whose ``field`` matches ``pattern``.

    Args:
        field: "group" or "namespace"
        pattern: Glob pattern
        registry: Registry to search (default: process-wide registry)
    """
    registry = registry if registry is not None else get_registry()
    for record in registry.list():
        if match_pattern(record.meta.get(field), pattern):
            yield record.key


def resolve_emitter(args, emitter, registry):
    """Split off a trailing emitter, creating a fresh channel if there is none"""
    args, emitter = split_emitter(args, emitter)
    if emitter is None:
        emitter = create_channel(registry=registry)
    return args, emitter


def _report_failure(event: Hashable):
    """Build a done-callback that logs a failed fire-and-forget emission"""
    def callback(future: "asyncio.Future"):
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            log_error(__name__, exc, event=repr(event))
    return callback


def _listen(field, pattern, handler, emitter, priority, once, registry):
    register = emitter.once if once else emitter.on
    for key in matching_events(field, pattern, registry):
        listener = functools.partial(handler, key)
        if priority is not None:
            register(key, listener, priority=priority)
        else:
            register(key, listener)


def _remove_all(field, pattern, emitter, registry):
    # Goes straight to remove_all_listeners, so protection does not apply
    for key in matching_events(field, pattern, registry):
        emitter.remove_all_listeners(key)


def _remove_once(field, pattern, emitter, registry):
    for key in matching_events(field, pattern, registry):
        entries = emitter.raw_listeners(key)
        regular = [entry for entry in entries if not entry.once]
        if len(regular) == len(entries):
            continue
        emitter.remove_all_listeners(key)
        for entry in regular:
            emitter.on(key, entry.callback, priority=entry.priority)


def _emit(field, pattern, args, emitter, registry):
    args, emitter = resolve_emitter(args, emitter, registry)
    for key in matching_events(field, pattern, registry):
        result = emitter.emit(key, *args)
        if isinstance(result, asyncio.Future):
            result.add_done_callback(_report_failure(key))


async def _emit_async(field, pattern, args, emitter, registry):
    args, emitter = resolve_emitter(args, emitter, registry)
    pending = []
    try:
        for key in matching_events(field, pattern, registry):
            result = emitter.emit(key, *args)
            if is_awaitable(result):
                pending.append(result)
    except BaseException:
        for result in pending:
            if isinstance(result, asyncio.Future):
                result.add_done_callback(_report_failure(pattern))
        raise

    if pending:
        await asyncio.gather(*pending)


def on_group(
    pattern: str,
    handler: EventHandler,
    emitter,
    priority: Optional[float] = None,
    *,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    """
    Listen on every protected event whose group matches ``pattern``.

    The handler is called as ``handler(key, *args)`` so one handler can
    tell the matched events apart.

    Args:
        pattern: Group glob pattern, e.g. "user*" or "order-{created,paid}"
        handler: Callable receiving the event key and emitted arguments
        emitter: Channel or emitter to register on
        priority: Optional listener priority
    """
    _listen(GROUP, pattern, handler, emitter, priority, False, registry)


def on_namespace(
    pattern: str,
    handler: EventHandler,
    emitter,
    priority: Optional[float] = None,
    *,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    """Listen on every protected event whose namespace matches ``pattern``"""
    _listen(NAMESPACE, pattern, handler, emitter, priority, False, registry)


def once_group(
    pattern: str,
    handler: EventHandler,
    emitter,
    priority: Optional[float] = None,
    *,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    """Like on_group, but each matched event fires the handler at most once"""
    _listen(GROUP, pattern, handler, emitter, priority, True, registry)


def once_namespace(
    pattern: str,
    handler: EventHandler,
    emitter,
    priority: Optional[float] = None,
    *,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    _listen(NAMESPACE, pattern, handler, emitter, priority, True, registry)


def off_group(pattern: str, emitter, *, registry: Optional[ProtectedEventRegistry] = None) -> None:
    """
    Remove every listener of every event whose group matches ``pattern``.

    Unlike EventChannel.off(), this also clears protected events.
    """
    _remove_all(GROUP, pattern, emitter, registry)


def off_namespace(pattern: str, emitter, *, registry: Optional[ProtectedEventRegistry] = None) -> None:
    """Remove every listener of every event whose namespace matches ``pattern``"""
    _remove_all(NAMESPACE, pattern, emitter, registry)


def off_once_group(pattern: str, emitter, *, registry: Optional[ProtectedEventRegistry] = None) -> None:
    """
    Remove only the single-fire listeners of events whose group matches.

    Regular listeners are re-attached in their original order and priority.
    """
    _remove_once(GROUP, pattern, emitter, registry)


def off_once_namespace(pattern: str, emitter, *, registry: Optional[ProtectedEventRegistry] = None) -> None:
    _remove_once(NAMESPACE, pattern, emitter, registry)


def emit_group(pattern: str, *args: Any, emitter=None, registry: Optional[ProtectedEventRegistry] = None) -> None:
    """
    Emit on every protected event whose group matches ``pattern``.

    The emitter is taken from the ``emitter`` keyword or, failing that, from
    a trailing positional argument that looks like an emitter. Without one
    a fresh channel is used. Results are discarded; failures of async
    listeners are reported through the logging layer.

    Example:
        >>> emit_group("user*", payload, channel)
    """
    _emit(GROUP, pattern, args, emitter, registry)


def emit_namespace(pattern: str, *args: Any, emitter=None, registry: Optional[ProtectedEventRegistry] = None) -> None:
    """Emit on every protected event whose namespace matches ``pattern``"""
    _emit(NAMESPACE, pattern, args, emitter, registry)


async def emit_group_async(
    pattern: str,
    *args: Any,
    emitter=None,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    """
    Emit on every matching event and wait for all async listeners.

    Exceptions from listeners propagate to the caller.
    """
    await _emit_async(GROUP, pattern, args, emitter, registry)


async def emit_namespace_async(
    pattern: str,
    *args: Any,
    emitter=None,
    registry: Optional[ProtectedEventRegistry] = None,
) -> None:
    await _emit_async(NAMESPACE, pattern, args, emitter, registry)
