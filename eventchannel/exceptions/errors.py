"""
Specific exception types raised by eventchannel.
"""

from .base import EventChannelError


class UnknownStrategyError(EventChannelError, ValueError):
    """
    Raised when a dispatch strategy name is not one of
    parallel, waterfall or series.

    Raised before any handler is invoked.
    """
    pass
