from __future__ import annotations

"""Node predicates and tree primitives for list structures.

Lists and list items form a strict alternation in the document tree::

    list -> listitem -> list -> listitem ...

A *nested list item* is a list item whose first child is a list; it exists
only to carry one more nesting level. The helpers here name the lxml calls
the list editing service relies on. lxml elements have a single parent, so
``append``/``addprevious``/``addnext``/``replace`` detach a node from its old
position in the same step that attaches it to the new one.
"""

from typing import Any, List, Optional

from lxml import etree as ET

from listnest.core.models import LIST_ITEM_TAG, LIST_TAG, LIST_TYPE_ATTR

__all__ = [
    "is_list",
    "is_list_item",
    "is_nested_list_item",
    "get_list_tag",
    "get_first_child",
    "get_last_child",
    "get_previous_siblings",
    "get_next_siblings",
    "is_empty",
    "is_same_node",
    "insert_before",
    "insert_after",
    "append_children",
    "remove_node",
    "replace_node",
]


def _is_element(node: Any) -> bool:
    return isinstance(node, ET._Element) and isinstance(node.tag, str)


# -------------------------------------------------------------------------
# Predicates
# -------------------------------------------------------------------------

def is_list(node: Any) -> bool:
    """Return True if ``node`` is a list container."""
    return _is_element(node) and node.tag == LIST_TAG


def is_list_item(node: Any) -> bool:
    """Return True if ``node`` is a list item."""
    return _is_element(node) and node.tag == LIST_ITEM_TAG


def is_nested_list_item(node: Any) -> bool:
    """Return True if ``node`` is a list item whose first child is a list."""
    return is_list_item(node) and is_list(get_first_child(node))


def get_list_tag(list_node: ET._Element, default: str = "ul") -> str:
    return list_node.get(LIST_TYPE_ATTR) or default


# -------------------------------------------------------------------------
# Reads
# -------------------------------------------------------------------------

def get_first_child(node: ET._Element) -> Optional[ET._Element]:
    return node[0] if len(node) else None


def get_last_child(node: ET._Element) -> Optional[ET._Element]:
    return node[-1] if len(node) else None


def get_previous_siblings(node: ET._Element) -> List[ET._Element]:
    """Siblings before ``node`` in document order (nearest last)."""
    return list(reversed(list(node.itersiblings(preceding=True))))


def get_next_siblings(node: ET._Element) -> List[ET._Element]:
    """Siblings after ``node`` in document order."""
    return list(node.itersiblings())


def is_empty(node: ET._Element) -> bool:
    return len(node) == 0


def is_same_node(a: Optional[ET._Element], b: Optional[ET._Element]) -> bool:
    """Element identity. lxml hands back the same proxy while a reference is held."""
    return a is not None and a is b


# -------------------------------------------------------------------------
# Mutations
# -------------------------------------------------------------------------

def insert_before(reference: ET._Element, node: ET._Element) -> None:
    """Move ``node`` so it sits immediately before ``reference``."""
    reference.addprevious(node)


def insert_after(reference: ET._Element, node: ET._Element) -> None:
    """Move ``node`` so it sits immediately after ``reference``."""
    reference.addnext(node)


def append_children(parent: ET._Element, nodes: List[ET._Element]) -> None:
    for node in nodes:
        parent.append(node)


def remove_node(node: ET._Element) -> None:
    parent = node.getparent()
    if parent is not None:
        parent.remove(node)


def replace_node(old: ET._Element, new: ET._Element) -> None:
    """Put ``new`` where ``old`` is and detach ``old``.

    ``new`` may currently live inside ``old``; it is moved out before
    ``old`` leaves the tree.
    """
    parent = old.getparent()
    if parent is None:
        raise ValueError("Cannot replace a node that has no parent.")
    parent.replace(old, new)
