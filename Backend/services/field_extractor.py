"""
Deep-path lookup into parsed upstream payloads.

Upstream APIs nest the interesting collection at different depths
(``weeklyartistchart.artist``, ``payload.references.Post``,
``GoodreadsResponse.reviews[0].review``). Each source describes that
location as an extraction path: an ordered sequence of segments where a
``str`` segment is an object key and an ``int`` segment is a list index.

A path that does not resolve yields ``MISSING`` instead of raising, so
callers can degrade to "no items" or "no image" without try/except
around every lookup.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple, Union

PathSegment = Union[str, int]
ExtractionPath = Tuple[PathSegment, ...]


class _Missing:
    """Sentinel for a path that did not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def path(*segments: PathSegment) -> ExtractionPath:
    """Small constructor so call sites read like ``path("recenttracks", "track")``."""
    return tuple(segments)


def _step(node: Any, segment: PathSegment) -> Any:
    # bool is an int subclass; a True/False segment is a programming error upstream, not an index
    if isinstance(segment, int) and not isinstance(segment, bool):
        if isinstance(node, list) and -len(node) <= segment < len(node):
            return node[segment]
        return MISSING
    if isinstance(segment, str) and isinstance(node, dict):
        return node.get(segment, MISSING)
    return MISSING


def extract(tree: Any, extraction_path: Sequence[PathSegment]) -> Any:
    """
    Follow ``extraction_path`` through ``tree``.

    Returns the value reached, or ``MISSING`` when any segment is absent or
    the intermediate value has the wrong shape. An empty path means "no
    location known" and also yields ``MISSING``.
    """
    if not extraction_path:
        return MISSING
    node = tree
    for segment in extraction_path:
        node = _step(node, segment)
        if node is MISSING:
            return MISSING
    return node


def extract_list(tree: Any, extraction_path: Sequence[PathSegment]) -> List[Any]:
    """Resolve a path that should point at an array; anything else becomes ``[]``."""
    value = extract(tree, extraction_path)
    if isinstance(value, list):
        return value
    return []


def extract_mapping(tree: Any, extraction_path: Sequence[PathSegment]) -> Dict[str, Any]:
    value = extract(tree, extraction_path)
    if isinstance(value, dict):
        return value
    return {}


def extract_text(tree: Any, extraction_path: Sequence[PathSegment]) -> str | None:
    """
    Resolve a path that should end in a non-empty string.

    Empty strings count as absent: upstreams use ``""`` for "no image" just
    as often as they drop the key.
    """
    value = extract(tree, extraction_path)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None
