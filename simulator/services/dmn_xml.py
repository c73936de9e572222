"""
Namespace-blind XML access for DMN documents.

DMN exports differ by vendor and schema version (DMN 1.1 through 1.5, default
namespace or a `dmn:`/`semantic:` prefix), so elements are only ever matched by
their local tag name.
"""

import xml.etree.ElementTree as ET
from typing import Optional, Union

from simulator.errors import MalformedDocumentError


def load_document(text: Union[str, bytes]) -> ET.Element:
    """Parse DMN text into an element tree and return the root element."""
    if isinstance(text, str):
        data = text.encode("utf-8")
    else:
        data = text
    if not data or not data.strip():
        raise MalformedDocumentError("Failed to parse DMN XML", "document is empty")
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedDocumentError("Failed to parse DMN XML", str(e)) from e


def local_name(tag: object) -> Optional[str]:
    """Local part of an ElementTree tag ('{ns}decision' -> 'decision'); None for comments/PIs."""
    if not isinstance(tag, str):
        return None
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[-1]
    return tag


def first_child(parent: ET.Element, name: str) -> Optional[ET.Element]:
    """First direct child element with the given local name."""
    for child in parent:
        if local_name(child.tag) == name:
            return child
    return None


def descendants(root: ET.Element, name: str) -> list[ET.Element]:
    """All elements below root (any depth, document order) with the given local name."""
    return [el for el in root.iter() if el is not root and local_name(el.tag) == name]


def text_content(element: ET.Element) -> str:
    """All text inside the element, nested elements included."""
    return "".join(element.itertext())


def child_text(parent: ET.Element, name: str) -> Optional[str]:
    """Trimmed text of the first `name` child, or None when there is no such child."""
    child = first_child(parent, name)
    if child is None:
        return None
    return text_content(child).strip()


def attr(element: ET.Element, name: str) -> str:
    """Attribute value or '' when missing."""
    return element.get(name) or ""
