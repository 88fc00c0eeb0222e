"""
Base exception class for eventchannel.
"""

from typing import Any, Optional


class EventChannelError(Exception):
    """
    Base exception for all errors raised by eventchannel itself.

    Handler exceptions are never wrapped in this type; they propagate
    unchanged to the caller of the batch or strategy function.

    Attributes:
        message: Error message
        event: Event key or pattern involved (if any)
        metadata: Additional context information
    """

    def __init__(self, message: str, event: Optional[Any] = None, **metadata):
        super().__init__(message)
        self.event = event
        self.metadata = metadata

    def __repr__(self):
        parts = [f"{self.__class__.__name__}('{str(self)}')"]
        if self.event is not None:
            parts.append(f"event={self.event!r}")
        if self.metadata:
            parts.append(f"metadata={self.metadata!r}")
        return f"<{', '.join(parts)}>"
