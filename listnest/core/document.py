from __future__ import annotations

"""Building, reading and serializing document trees.

Documents are plain XML using the vocabulary declared in
:mod:`listnest.core.models`::

    <root>
      <list tag="ul">
        <listitem><text>Item</text></listitem>
        <listitem>
          <list tag="ul"><listitem><text>Nested</text></listitem></list>
        </listitem>
      </list>
    </root>

Whitespace-only text and comments are dropped on parse so that sibling
navigation only ever sees structural nodes.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Union

from lxml import etree as ET

from listnest.core.models import KEY_ATTR, ROOT_TAG, TEXT_TAG, DocumentContext
from listnest.core.nodes import is_list, is_list_item, is_nested_list_item

__all__ = [
    "parse_document",
    "to_xml",
    "build_list",
    "outline",
    "get_list_depth",
    "iter_text_content",
    "find_by_key",
    "find_list_item_by_text",
    "list_item_text",
]

logger = logging.getLogger(__name__)

# A list layout entry is either leaf text or a nested layout.
ListLayout = Sequence[Union[str, "ListLayout"]]


def parse_document(xml: Union[str, bytes]) -> DocumentContext:
    """Parse ``xml`` into a :class:`DocumentContext`, assigning node keys."""
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    parser = ET.XMLParser(remove_blank_text=True, remove_comments=True, remove_pis=True)
    root = ET.fromstring(xml, parser=parser)
    if root.tag != ROOT_TAG:
        logger.warning("Document root is <%s>, expected <%s>", root.tag, ROOT_TAG)
    return DocumentContext(root=root)


def to_xml(context: DocumentContext, *, with_keys: bool = False, pretty_print: bool = False) -> str:
    """Serialize the document; keys are stripped unless ``with_keys`` is set."""
    root = context.root
    if not with_keys:
        root = ET.fromstring(ET.tostring(root))
        for el in root.iter(ET.Element):
            el.attrib.pop(KEY_ATTR, None)
    return ET.tostring(root, encoding="unicode", pretty_print=pretty_print)


def build_list(context: DocumentContext, layout: ListLayout, tag: str = "ul") -> ET._Element:
    """Build a list from a Python structure.

    Strings become leaf list items holding one text node. A nested sequence
    becomes a nested-list wrapper item around a list built from it::

        build_list(ctx, ["A", ["a1", "a2"], "B"])

    is the inverse of :func:`outline`.
    """
    list_node = context.create_list(tag)
    for entry in layout:
        item = context.create_list_item()
        if isinstance(entry, str):
            item.append(context.create_text(entry))
        else:
            item.append(build_list(context, entry, tag))
        list_node.append(item)
    return list_node


def outline(list_node: ET._Element) -> List[Union[str, list]]:
    """Describe a list as nested Python lists of item texts."""
    result: List[Union[str, list]] = []
    for item in list_node:
        if is_nested_list_item(item):
            result.append(outline(item[0]))
        else:
            result.append(list_item_text(item))
    return result


def get_list_depth(node: ET._Element) -> int:
    """Number of lists enclosing ``node`` (0 outside any list)."""
    depth = 0
    parent = node.getparent()
    while parent is not None:
        if is_list(parent):
            depth += 1
        parent = parent.getparent()
    return depth


def iter_text_content(node: ET._Element) -> Iterator[str]:
    """Yield the text of every leaf ``text`` node below ``node`` in document order."""
    for el in node.iter(TEXT_TAG):
        yield el.text or ""


def list_item_text(item: ET._Element) -> str:
    """Text of a list item's own content (excluding nested lists)."""
    return "".join(el.text or "" for el in item if el.tag == TEXT_TAG)


def find_by_key(context: DocumentContext, key: str) -> Optional[ET._Element]:
    for el in context.root.iter(ET.Element):
        if el.get(KEY_ATTR) == key:
            return el
    return None


def find_list_item_by_text(context: DocumentContext, text: str) -> Optional[ET._Element]:
    """First list item whose own content reads ``text``."""
    for el in context.root.iter(ET.Element):
        if is_list_item(el) and list_item_text(el) == text:
            return el
    return None
