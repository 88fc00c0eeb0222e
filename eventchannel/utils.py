"""
Pattern matching and capability helpers shared by the batch operations
"""

import fnmatch
import functools
import inspect
from typing import Any, Optional, Tuple

# Capabilities an object must expose to be accepted as an emitter
EMITTER_METHODS = ("emit", "on", "once", "off")


def is_event_emitter(obj: Any) -> bool:
    """
    Check whether an object can be used as an emitter.

    True when ``emit``, ``on``, ``once`` and ``off`` are all present and
    callable. Classes are rejected even if they define those methods.
    """
    if obj is None or isinstance(obj, type):
        return False
    return all(callable(getattr(obj, method, None)) for method in EMITTER_METHODS)


def split_emitter(args: Tuple[Any, ...], emitter: Any = None):
    """
    Separate a trailing emitter from positional event arguments.

    An explicit ``emitter`` wins; otherwise the last positional argument is
    taken as the emitter when it passes ``is_event_emitter``.

    Returns:
        (args, emitter) where emitter may still be None
    """
    if emitter is None and args and is_event_emitter(args[-1]):
        return args[:-1], args[-1]
    return args, emitter


@functools.lru_cache(maxsize=256)
def expand_braces(pattern: str) -> Tuple[str, ...]:
    """
    Expand ``{a,b,c}`` alternations into separate glob patterns.

    Nested alternations are expanded recursively. A brace group without a
    top-level comma, or an unbalanced brace, is kept literally.

    Example:
        >>> expand_braces("order-{123,abc}")
        ('order-123', 'order-abc')
    """
    start = pattern.find("{")
    while start != -1:
        depth = 0
        part_start = start + 1
        options = []
        end = -1
        for i in range(start, len(pattern)):
            ch = pattern[i]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    options.append(pattern[part_start:i])
                    end = i
                    break
            elif ch == "," and depth == 1:
                options.append(pattern[part_start:i])
                part_start = i + 1

        if end == -1:
            break

        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[end + 1:]
            expanded = []
            for option in options:
                expanded.extend(expand_braces(prefix + option + suffix))
            return tuple(expanded)

        start = pattern.find("{", start + 1)

    return (pattern,)


def match_pattern(value: Optional[str], pattern: str) -> bool:
    """
    Match a group/namespace value against a glob pattern.

    Supports ``*``, ``?``, ``[...]`` and ``{a,b}`` alternation, anchored to
    the whole value and case sensitive. Missing or empty values never match.
    Values are flat labels: ``*`` also matches ``/`` and ``.``, so
    ``"user*"`` matches ``"user/admin"``. Numeric brace ranges such as
    ``{1..3}`` are not expanded and match literally.

    Args:
        value: Group or namespace from a record's metadata
        pattern: Glob pattern

    Returns:
        True if the value matches
    """
    if not value or not isinstance(value, str):
        return False
    if pattern == "*":
        return True
    return any(fnmatch.fnmatchcase(value, alt) for alt in expand_braces(pattern))


def is_awaitable(obj: Any) -> bool:
    """Check whether a listener result needs awaiting"""
    return inspect.isawaitable(obj)
