"""
Text and number extraction from rich-text nodes.

Upstream text arrives as a plain string, a ``{"simpleText": ...}`` wrapper,
a ``{"runs": [{"text": ...}, ...]}`` sequence of styled runs, or (view-model
renderers) a ``{"content": ...}`` wrapper.
"""

from __future__ import annotations

import re
from typing import Any

_NON_NUMERIC_RE = re.compile(r"[^\d,.]")


def parse_text(node: Any) -> str:
    """
    Extract the display string of a rich-text node.

    Parameters
    ----------
    node : Any
        Plain string, ``content``/``simpleText`` wrapper, ``runs`` wrapper,
        or anything else.

    Returns
    -------
    str
        The text; runs are concatenated in order with no separator. ``""``
        for None or unrecognised shapes.

    Examples
    --------
    >>> parse_text({"runs": [{"text": "Lo-fi "}, {"text": "beats"}]})
    'Lo-fi beats'
    >>> parse_text(None)
    ''
    """
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""

    content = node.get("content")
    if isinstance(content, str):
        return content

    simple_text = node.get("simpleText")
    if isinstance(simple_text, str):
        return simple_text

    runs = node.get("runs")
    if isinstance(runs, list):
        return "".join(
            run["text"]
            for run in runs
            if isinstance(run, dict) and isinstance(run.get("text"), str)
        )

    return ""


def parse_number(node: Any) -> int:
    """
    Derive an integer count from a rich-text node.

    Keeps digits, commas and periods, drops commas as thousands separators,
    and parses the remainder. Periods are kept, so abbreviated values such
    as ``"1.2K views"`` yield 0.

    Examples
    --------
    >>> parse_number({"simpleText": "1,234 views"})
    1234
    >>> parse_number("No views")
    0
    """
    text = parse_text(node)
    if not text:
        return 0

    digits = _NON_NUMERIC_RE.sub("", text).replace(",", "")
    try:
        return int(digits)
    except ValueError:
        return 0
