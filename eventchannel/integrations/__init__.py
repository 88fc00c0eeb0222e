"""
Framework Integrations for eventchannel

Available integrations:
- FastAPI / Starlette (eventchannel.integrations.fastapi)
"""

__all__ = []
