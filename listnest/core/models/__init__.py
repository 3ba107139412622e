from __future__ import annotations

"""Shared data structures used across the listnest core.

This package exposes the document context and the selection value object
used by services and plugins. It is intentionally free of UI / I/O code so
that the contained objects can be reused in any context (unit-tests, CLI,
editors, etc.).
"""

from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, List, Optional, Set

from lxml import etree as ET

__all__ = [
    "DocumentContext",
    "Selection",
    "ROOT_TAG",
    "LIST_TAG",
    "LIST_ITEM_TAG",
    "PARAGRAPH_TAG",
    "TEXT_TAG",
    "KEY_ATTR",
    "LIST_TYPE_ATTR",
]

ROOT_TAG = "root"
LIST_TAG = "list"
LIST_ITEM_TAG = "listitem"
PARAGRAPH_TAG = "paragraph"
TEXT_TAG = "text"

KEY_ATTR = "key"
# Attribute holding a list's kind ("ul" / "ol")
LIST_TYPE_ATTR = "tag"


@dataclass
class DocumentContext:
    """In-memory document tree plus the bookkeeping the editor needs.

    Attributes
    ----------
    root
        Root element of the document (lxml Element, tag ``root``).
    dirty_nodes
        Keys of nodes explicitly marked dirty during the current update.
    dirty_elements
        Keys of ancestors whose subtree contains a dirty node.
    metadata
        Arbitrary key/value pairs (document title, source file...).
    """

    root: Optional[ET._Element] = None
    dirty_nodes: Set[str] = field(default_factory=set)
    dirty_elements: Set[str] = field(default_factory=set)
    metadata: Dict[str, Any] = field(default_factory=dict)
    _keys: Iterator[int] = field(default_factory=lambda: count(1), repr=False)

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = ET.Element(ROOT_TAG)
        self.assign_keys(self.root)

    # ------------------------------------------------------------------
    # Node identity
    # ------------------------------------------------------------------
    def assign_key(self, node: ET._Element) -> str:
        """Give ``node`` a stable key unless it already carries one."""
        key = node.get(KEY_ATTR)
        if not key:
            key = str(next(self._keys))
            node.set(KEY_ATTR, key)
        return key

    def assign_keys(self, root: ET._Element) -> None:
        """Assign keys to ``root`` and every element below it.

        Counting resumes above the highest numeric key already present.
        When several elements share a key, the first in document order keeps
        it and the others are given fresh keys.
        """
        existing = [el.get(KEY_ATTR) for el in root.iter(ET.Element)]
        numeric = [int(k) for k in existing if k and k.isdigit()]
        if numeric:
            self._keys = count(max(numeric) + 1)
        seen: Set[str] = set()
        for el in root.iter(ET.Element):
            if el.get(KEY_ATTR) in seen:
                del el.attrib[KEY_ATTR]
            seen.add(self.assign_key(el))

    # ------------------------------------------------------------------
    # Node construction
    # ------------------------------------------------------------------
    def create_list(self, tag: str = "ul") -> ET._Element:
        node = ET.Element(LIST_TAG)
        node.set(LIST_TYPE_ATTR, tag)
        self.assign_key(node)
        return node

    def create_list_item(self) -> ET._Element:
        node = ET.Element(LIST_ITEM_TAG)
        self.assign_key(node)
        return node

    def create_text(self, text: str) -> ET._Element:
        node = ET.Element(TEXT_TAG)
        node.text = text
        self.assign_key(node)
        return node

    def create_paragraph(self, text: Optional[str] = None) -> ET._Element:
        node = ET.Element(PARAGRAPH_TAG)
        self.assign_key(node)
        if text is not None:
            node.append(self.create_text(text))
        return node

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------
    def mark_dirty(self, node: ET._Element) -> None:
        """Flag ``node`` for re-rendering and its ancestors as containing a change."""
        self.dirty_nodes.add(self.assign_key(node))
        parent = node.getparent()
        while parent is not None:
            key = self.assign_key(parent)
            if key in self.dirty_elements:
                break
            self.dirty_elements.add(key)
            parent = parent.getparent()

    def is_dirty(self, node: ET._Element) -> bool:
        return node.get(KEY_ATTR) in self.dirty_nodes

    def clear_dirty(self) -> None:
        self.dirty_nodes.clear()
        self.dirty_elements.clear()


@dataclass
class Selection:
    """Snapshot of what the user has selected.

    ``nodes`` is the ordered list of selected nodes (possibly empty, e.g. for
    a collapsed caret); ``anchor_node`` is the node the selection started in.
    """

    nodes: List[ET._Element] = field(default_factory=list)
    anchor_node: Optional[ET._Element] = None

    def get_nodes(self) -> List[ET._Element]:
        return list(self.nodes)

    def is_collapsed(self) -> bool:
        return not self.nodes
