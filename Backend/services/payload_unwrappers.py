"""
Turn raw upstream bodies into plain Python structures.

Three transport formats are in use:

- JSON: parsed as-is.
- Guarded JSON: Medium prefixes its JSON with ``])}while(1);</x>`` so
  the body cannot be included as a script. The guard is stripped once,
  and only when it is actually there.
- XML: converted to the conventional "attributes / text node" tree:
  every child element becomes a key whose value is a list of child
  representations, attributes live under ``$`` and text under ``_``.
  Elements with neither attributes nor children collapse to their text.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any, Dict, List

from services.source_errors import PayloadShapeError

JSON_GUARD_PREFIX = "])}while(1);</x>"

XML_ATTRS_KEY = "$"
XML_TEXT_KEY = "_"


class PayloadFormat(str, Enum):
    JSON = "json"
    GUARDED_JSON = "guarded_json"
    XML = "xml"


def strip_json_guard(body: str) -> str:
    text = body.lstrip("\ufeff")
    if text.startswith(JSON_GUARD_PREFIX):
        return text[len(JSON_GUARD_PREFIX):]
    return text


def parse_json(body: str, *, source: str = "unknown") -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise PayloadShapeError(source, f"upstream body is not valid JSON: {exc}") from exc


def parse_guarded_json(body: str, *, source: str = "unknown") -> Any:
    return parse_json(strip_json_guard(body), source=source)


def _strip_ns(tag: str) -> str:
    # {http://namespace}tag -> tag
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_to_node(element: ET.Element) -> Any:
    text = (element.text or "").strip()
    children = list(element)

    if not element.attrib and not children:
        return text

    node: Dict[str, Any] = {}
    if element.attrib:
        node[XML_ATTRS_KEY] = {_strip_ns(k): v for k, v in element.attrib.items()}
    if text:
        node[XML_TEXT_KEY] = text
    for child in children:
        node.setdefault(_strip_ns(child.tag), []).append(_element_to_node(child))
    return node


def parse_xml_tree(body: str, *, source: str = "unknown") -> Dict[str, Any]:
    """
    Parse an XML document into ``{root_tag: node}``.

    The root element is not wrapped in a list; every element below it is.
    """
    try:
        root = ET.fromstring(body.strip())
    except ET.ParseError as exc:
        raise PayloadShapeError(source, f"upstream body is not valid XML: {exc}") from exc
    return {_strip_ns(root.tag): _element_to_node(root)}


def unwrap(body: str, payload_format: PayloadFormat, *, source: str = "unknown") -> Any:
    if payload_format is PayloadFormat.GUARDED_JSON:
        return parse_guarded_json(body, source=source)
    if payload_format is PayloadFormat.XML:
        return parse_xml_tree(body, source=source)
    return parse_json(body, source=source)


__all__: List[str] = [
    "JSON_GUARD_PREFIX",
    "PayloadFormat",
    "XML_ATTRS_KEY",
    "XML_TEXT_KEY",
    "parse_guarded_json",
    "parse_json",
    "parse_xml_tree",
    "strip_json_guard",
    "unwrap",
]
