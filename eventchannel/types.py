"""
Event keys, records and strategy types for event channels
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

# Open metadata mapping; "description", "group" and "namespace" are recognized
EventMeta = Dict[str, Any]

# Batch handlers receive the matched key followed by the emitted arguments
EventHandler = Callable[..., Union[Any, Awaitable[Any]]]

_serial = itertools.count(1)


class ProtectedEventKey:
    """
    Opaque identity token for a protected event.

    Two keys are equal only if they are the same object, so registering
    the same display name twice yields two distinct keys.
    """
    __slots__ = ("name", "serial")

    def __init__(self, name: str):
        self.name = name
        self.serial = next(_serial)

    def __repr__(self):
        return f"ProtectedEventKey({self.name!r}, #{self.serial})"

    def __str__(self):
        return f"ProtectedEventKey({self.name})"


@dataclass(frozen=True)
class ProtectedEvent:
    """Registry record for a protected event"""
    key: ProtectedEventKey
    name: str
    meta: Mapping[str, Any]

    @property
    def description(self) -> Optional[str]:
        return self.meta.get("description")

    @property
    def group(self) -> Optional[str]:
        return self.meta.get("group")

    @property
    def namespace(self) -> Optional[str]:
        return self.meta.get("namespace")

    def to_dict(self) -> dict:
        """Convert record to dictionary for logging/serialization"""
        return {
            "name": self.name,
            "serial": self.key.serial,
            "meta": dict(self.meta),
        }


class DispatchStrategy(str, Enum):
    """Fan-out policies for emit_group_with_strategy"""
    PARALLEL = "parallel"
    WATERFALL = "waterfall"
    SERIES = "series"
