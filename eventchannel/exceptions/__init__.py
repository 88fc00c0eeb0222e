"""
Exception types for eventchannel.

The library raises very little: protection refusals, missing keys and
unmatched patterns are not errors. Handler exceptions propagate unchanged.
"""

from .base import EventChannelError
from .errors import UnknownStrategyError

__all__ = [
    "EventChannelError",
    "UnknownStrategyError",
]
