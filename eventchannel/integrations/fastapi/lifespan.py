"""
FastAPI lifespan support for event channels
"""

from contextlib import asynccontextmanager
from typing import Optional

from ...channel import EventChannel, default_channel
from ...group import emit_namespace_async
from ...logging import get_logger
from ...protected import ProtectedEventRegistry

logger = get_logger(__name__)


def channel_lifespan(
    startup: Optional[str] = None,
    shutdown: Optional[str] = None,
    *,
    channel: Optional[EventChannel] = None,
    registry: Optional[ProtectedEventRegistry] = None,
):
    """
    Create a FastAPI lifespan that emits namespace events on startup/shutdown.

    Every protected event whose namespace matches ``startup`` is emitted
    (and awaited) with the application before it starts serving; the same
    happens for ``shutdown`` after it stops. Listener errors abort startup.

    Example:
        app = FastAPI(lifespan=channel_lifespan("app.startup", "app.shutdown"))

    Args:
        startup: Namespace glob emitted on startup (None to skip)
        shutdown: Namespace glob emitted on shutdown (None to skip)
        channel: Channel to emit on (default: the process-wide default channel)
        registry: Protected event registry (default: process-wide registry)
    """
    target = channel if channel is not None else default_channel

    @asynccontextmanager
    async def lifespan(app):
        if startup is not None:
            logger.debug("Emitting startup namespace %r", startup)
            await emit_namespace_async(startup, app, emitter=target, registry=registry)
        yield
        if shutdown is not None:
            logger.debug("Emitting shutdown namespace %r", shutdown)
            await emit_namespace_async(shutdown, app, emitter=target, registry=registry)

    return lifespan
