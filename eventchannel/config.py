"""
Configuration classes for event channels
"""

from dataclasses import dataclass

# Default per-event listener limit before a leak warning is logged
MAX_LISTENERS = 999


@dataclass
class ChannelConfig:
    """
    Configuration for an event emitter / channel.

    Args:
        name: Name used in log records for this channel
        max_listeners: Listeners per event before a possible-leak warning
            is logged (0 disables the check)

    Example:
        >>> config = ChannelConfig(name="orders", max_listeners=50)
        >>> channel = create_channel(config=config)
    """
    name: str = "channel"
    max_listeners: int = MAX_LISTENERS

    def __post_init__(self):
        """Validate configuration"""
        if not self.name or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if self.max_listeners < 0:
            raise ValueError("max_listeners must be non-negative")
