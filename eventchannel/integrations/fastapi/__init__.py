"""
FastAPI / Starlette Integration for eventchannel

Available Dependencies:
- channel_dependency: inject an event channel into routes

Lifespan:
- channel_lifespan: emit namespace events when the app starts and stops

Example:
    from fastapi import FastAPI, Depends
    from eventchannel import register_protected_event
    from eventchannel.integrations.fastapi import channel_dependency, channel_lifespan

    register_protected_event("warm-cache", {"namespace": "app.startup"})

    app = FastAPI(lifespan=channel_lifespan(startup="app.startup"))

    @app.post("/orders")
    async def create_order(channel=Depends(channel_dependency())):
        ...
"""

from .dependencies import channel_dependency
from .lifespan import channel_lifespan

__all__ = [
    "channel_dependency",
    "channel_lifespan",
]
