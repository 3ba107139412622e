from __future__ import annotations

"""Resolve a selection to the list items an indent/outdent applies to."""

from typing import Iterable, List, Optional, Set

from lxml import etree as ET

from listnest.core.models import Selection
from listnest.core.nodes import is_list_item

__all__ = ["find_nearest_list_item", "get_unique_list_items", "resolve_list_items"]


def find_nearest_list_item(node: Optional[ET._Element]) -> Optional[ET._Element]:
    """Return ``node`` or its closest ancestor that is a list item, else None."""
    current = node
    while current is not None:
        if is_list_item(current):
            return current
        current = current.getparent()
    return None


def get_unique_list_items(nodes: Iterable[ET._Element]) -> List[ET._Element]:
    """Keep the list items among ``nodes``, once each, in first-seen order."""
    seen: Set[ET._Element] = set()
    unique: List[ET._Element] = []
    for node in nodes:
        if not is_list_item(node) or node in seen:
            continue
        seen.add(node)
        unique.append(node)
    return unique


def resolve_list_items(selection: Optional[Selection]) -> List[ET._Element]:
    """Return the list items targeted by ``selection``.

    A collapsed selection falls back to its anchor node. A single node is
    resolved through its ancestors, since the caret usually sits inside a
    list item's text rather than on the item itself. Several nodes are
    filtered to the list items among them.
    """
    if selection is None:
        return []
    nodes = selection.get_nodes()
    if not nodes:
        if selection.anchor_node is None:
            return []
        nodes = [selection.anchor_node]
    if len(nodes) == 1:
        nearest = find_nearest_list_item(nodes[0])
        return [nearest] if nearest is not None else []
    return get_unique_list_items(nodes)
