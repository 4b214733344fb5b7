"""
Fallible accessors over decoded JSON trees.

Upstream responses are plain ``dict``/``list``/scalar trees whose shape
changes between UI surfaces. Every accessor here returns ``None`` (or an
empty default) on a shape mismatch instead of raising, and the recursive
searches use an explicit stack so traversal order is document order and
stack depth does not grow with nesting.
"""

from __future__ import annotations

import math
from typing import Any, Callable

PathStep = str | int


def dig(node: Any, *path: PathStep) -> Any:
    """
    Follow ``path`` through nested dicts (str steps) and lists (int steps).

    Parameters
    ----------
    node : Any
        Root of the tree.
    *path : str | int
        Keys and indexes to follow.

    Returns
    -------
    Any
        The value at the end of the path, or None if any step does not fit.

    Examples
    --------
    >>> dig({"a": [{"b": 1}]}, "a", 0, "b")
    1
    >>> dig({"a": []}, "a", 0, "b") is None
    True
    """
    current = node
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
            if current is None:
                return None
    return current


def as_dict(value: Any) -> dict[str, Any] | None:
    """Return ``value`` if it is a dict, else None."""
    return value if isinstance(value, dict) else None


def as_list(value: Any) -> list[Any]:
    """Return ``value`` if it is a list, else an empty list."""
    return value if isinstance(value, list) else []


def as_str(value: Any) -> str | None:
    """Return ``value`` if it is a string, else None."""
    return value if isinstance(value, str) else None


def as_int(value: Any) -> int | None:
    """Return an int for numeric values or numeric strings, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def find_first(
    node: Any, predicate: Callable[[dict[str, Any]], bool]
) -> dict[str, Any] | None:
    """
    Depth-first search for the first dict matching ``predicate``.

    Dicts are tested before their children; children are visited in
    document order (dict insertion order, list order).

    Parameters
    ----------
    node : Any
        Root of the tree.
    predicate : Callable[[dict[str, Any]], bool]
        Test applied to every dict encountered.

    Returns
    -------
    dict[str, Any] | None
        The first matching dict, or None.
    """
    stack: list[Any] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if predicate(current):
                return current
            children = list(current.values())
        elif isinstance(current, list):
            children = current
        else:
            continue
        # Reversed so the first child is popped first.
        stack.extend(reversed(children))
    return None


def find_key(node: Any, key: str) -> dict[str, Any] | None:
    """
    Return the first dict stored under ``key`` anywhere in the tree.

    Examples
    --------
    >>> find_key({"x": [{"target": {"v": 1}}]}, "target")
    {'v': 1}
    """
    holder = find_first(node, lambda d: isinstance(d.get(key), dict))
    if holder is None:
        return None
    return holder[key]
