"""
FastAPI dependency injection utilities for event channels
"""

from typing import Callable, Optional

from ...channel import EventChannel, default_channel


def channel_dependency(channel: Optional[EventChannel] = None) -> Callable[[], EventChannel]:
    """
    Create FastAPI dependency returning an event channel.

    Example:
        from fastapi import FastAPI, Depends
        from eventchannel import create_channel
        from eventchannel.integrations.fastapi import channel_dependency

        app = FastAPI()
        orders = create_channel()

        @app.post("/orders")
        async def create_order(channel=Depends(channel_dependency(orders))):
            channel.emit(ORDER_CREATED, {"id": 1})

    Args:
        channel: Channel to inject (default: the process-wide default channel)

    Returns:
        FastAPI dependency function
    """
    target = channel if channel is not None else default_channel

    def get_channel():
        return target

    return get_channel
