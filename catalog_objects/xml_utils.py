"""ElementTree helpers shared by the XML side of the record mapper."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional
from xml.etree import ElementTree as ET


def element_children(element: ET.Element) -> List[ET.Element]:
    """Direct element children in document order (comments and PIs skipped)."""
    return [child for child in element if isinstance(child.tag, str)]


def first_element_child(element: ET.Element) -> Optional[ET.Element]:
    children = element_children(element)
    return children[0] if children else None


def element_text(element: ET.Element) -> Optional[str]:
    """Text content of an element as written, or None when it is blank."""
    text = "".join(element.itertext())
    if not text.strip():
        return None
    return text


def format_wire_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def append_text_element(parent: ET.Element, tag: str, value: Any) -> ET.Element:
    child = ET.SubElement(parent, tag)
    child.text = format_wire_value(value)
    return child


def _append_json_value(parent: ET.Element, tag: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        child = ET.SubElement(parent, tag)
        for key, item in value.items():
            _append_json_value(child, str(key), item)
    elif isinstance(value, (list, tuple)):
        # Arrays repeat the enclosing tag once per item
        for item in value:
            if isinstance(item, (list, tuple)):
                wrapper = ET.SubElement(parent, tag)
                for nested in item:
                    _append_json_value(wrapper, "array", nested)
            else:
                _append_json_value(parent, tag, item)
    else:
        append_text_element(parent, tag, value)


def json_to_xml_string(document: dict, root_tag: str) -> str:
    """
    Render a JSON object as XML text.

    Keys become child elements, array items repeat their key's tag and
    null values are dropped. This is a lossy view meant for display and
    logging; it is not read back by the XML decoders.
    """
    root = ET.Element(root_tag)
    for key, value in document.items():
        _append_json_value(root, str(key), value)
    return ET.tostring(root, encoding="unicode")
