"""
Dispatch strategies for batch emission

- parallel: start every matched emission, then wait for all of them
- waterfall: thread a running result through the first listener of each event
- series: emit one event at a time with the original arguments
"""

import asyncio
from typing import Any, List, Optional, Union

from .exceptions import UnknownStrategyError
from .group import GROUP, NAMESPACE, resolve_emitter, matching_events
from .logging import get_logger
from .protected import ProtectedEventRegistry
from .types import DispatchStrategy
from .utils import is_awaitable

logger = get_logger(__name__)


async def _parallel(emitter, events, args) -> List[Any]:
    # gather preserves argument order, not completion order
    return list(await asyncio.gather(*(emitter.emit_async(event, *args) for event in events)))


async def _waterfall(emitter, events, args) -> List[Any]:
    result = args[0] if args else None
    results = []
    for event in events:
        entries = emitter.raw_listeners(event)
        if not entries:
            continue
        # Only the first listener of each event takes part
        first = entries[0]
        if first.once:
            emitter.discard_listener(event, first)
        stage_args = (result,) + tuple(args[1:])
        value = first.callback(*stage_args)
        if is_awaitable(value):
            value = await value
        result = value
        results.append(result)
    return results


async def _series(emitter, events, args) -> List[Any]:
    results = []
    for event in events:
        results.append(await emitter.emit_async(event, *args))
    return results


_STRATEGIES = {
    DispatchStrategy.PARALLEL: _parallel,
    DispatchStrategy.WATERFALL: _waterfall,
    DispatchStrategy.SERIES: _series,
}


def _get_strategy(strategy: Union[DispatchStrategy, str]):
    try:
        return _STRATEGIES[DispatchStrategy(strategy)]
    except ValueError:
        raise UnknownStrategyError(
            f"Unknown dispatch strategy {strategy!r}; expected one of "
            f"{', '.join(s.value for s in DispatchStrategy)}",
            strategy=strategy,
        ) from None


async def _dispatch(field, pattern, strategy, args, emitter, registry) -> List[Any]:
    run = _get_strategy(strategy)
    args, emitter = resolve_emitter(args, emitter, registry)
    events = list(matching_events(field, pattern, registry))
    logger.debug(
        "Dispatching %d event(s) matching %s %r with %s strategy",
        len(events), field, pattern, DispatchStrategy(strategy).value,
    )
    return await run(emitter, events, args)


async def emit_group_with_strategy(
    pattern: str,
    strategy: Union[DispatchStrategy, str],
    *args: Any,
    emitter=None,
    registry: Optional[ProtectedEventRegistry] = None,
) -> List[Any]:
    """
    Emit on every protected event whose group matches, using a strategy.

    Args:
        pattern: Group glob pattern
        strategy: "parallel", "waterfall" or "series"
        *args: Event arguments, optionally followed by an emitter
        emitter: Explicit emitter/channel (default: a fresh channel)

    Returns:
        parallel/series: one list of listener results per matched event,
        in registration order. waterfall: the value produced at each stage.

    Raises:
        UnknownStrategyError: strategy is not recognised

    Example:
        >>> await emit_group_with_strategy("pipeline", "waterfall", "start", channel)
        ['start-A', 'start-A-B']
    """
    return await _dispatch(GROUP, pattern, strategy, args, emitter, registry)


async def emit_namespace_with_strategy(
    pattern: str,
    strategy: Union[DispatchStrategy, str],
    *args: Any,
    emitter=None,
    registry: Optional[ProtectedEventRegistry] = None,
) -> List[Any]:
    """Same as emit_group_with_strategy, matching on namespace"""
    return await _dispatch(NAMESPACE, pattern, strategy, args, emitter, registry)
