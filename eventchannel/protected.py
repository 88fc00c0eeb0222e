"""
Protected event registry

Keys registered here cannot have their listeners removed through a
channel's off() until they are unregistered again.
"""

from types import MappingProxyType
from typing import Dict, Iterator, List, Optional

from .logging import get_logger
from .types import EventMeta, ProtectedEvent, ProtectedEventKey

logger = get_logger(__name__)


class ProtectedEventRegistry:
    """
    Mapping from opaque protected-event keys to their records.

    Iteration and listing follow registration order, which is the order
    batch operations and dispatch strategies visit matched events.
    """

    def __init__(self):
        # key -> record; dicts keep insertion order
        self._events: Dict[ProtectedEventKey, ProtectedEvent] = {}

    def register(self, name: str, meta: Optional[EventMeta] = None) -> ProtectedEventKey:
        """
        Register a protected event.

        Args:
            name: Display name (need not be unique)
            meta: Optional metadata; "description", "group" and "namespace"
                are recognized, other fields are kept as-is

        Returns:
            A new unique key to use as the event
        """
        key = ProtectedEventKey(name)
        self._events[key] = ProtectedEvent(
            key=key,
            name=name,
            meta=MappingProxyType(dict(meta or {})),
        )
        logger.debug("Registered protected event %r", key)
        return key

    def unregister(self, key: ProtectedEventKey) -> bool:
        """Remove a protected event. Returns False if it was not registered."""
        removed = self._events.pop(key, None) is not None
        if removed:
            logger.debug("Unregistered protected event %r", key)
        return removed

    def is_protected(self, key) -> bool:
        try:
            return key in self._events
        except TypeError:
            # unhashable keys can never be registered
            return False

    def get(self, key: ProtectedEventKey) -> Optional[ProtectedEvent]:
        return self._events.get(key)

    def get_meta(self, key: ProtectedEventKey):
        """Metadata for a key, or None if it is not registered"""
        record = self._events.get(key)
        return record.meta if record is not None else None

    def list(self, group: Optional[str] = None, namespace: Optional[str] = None) -> List[ProtectedEvent]:
        """
        List registered events, optionally filtered.

        Filters compare for exact equality (not glob patterns); when both
        are given, both must match.
        """
        records = list(self._events.values())
        if group is not None:
            records = [r for r in records if r.group == group]
        if namespace is not None:
            records = [r for r in records if r.namespace == namespace]
        return records

    def __contains__(self, key) -> bool:
        return self.is_protected(key)

    def __iter__(self) -> Iterator[ProtectedEvent]:
        return iter(list(self._events.values()))

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self):
        return f"<{self.__class__.__name__} events={len(self._events)}>"


# Process-wide registry shared by every channel
_registry = ProtectedEventRegistry()


def get_registry() -> ProtectedEventRegistry:
    """Get the process-wide protected event registry"""
    return _registry


def register_protected_event(name: str, meta: Optional[EventMeta] = None) -> ProtectedEventKey:
    """Register a protected event on the process-wide registry"""
    return _registry.register(name, meta)


def unregister_protected_event(key: ProtectedEventKey) -> bool:
    """Unregister a protected event from the process-wide registry"""
    return _registry.unregister(key)


def is_protected_event(key) -> bool:
    return _registry.is_protected(key)


def get_protected_event_meta(key: ProtectedEventKey):
    return _registry.get_meta(key)


def list_protected_events(group: Optional[str] = None, namespace: Optional[str] = None) -> List[ProtectedEvent]:
    """
    List protected events on the process-wide registry.

    Example:
        >>> list_protected_events(group="user")
    """
    return _registry.list(group=group, namespace=namespace)
