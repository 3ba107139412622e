from __future__ import annotations

"""Service layer for indenting and outdenting nested list items.

This module provides a UI-agnostic, testable service that restructures the
list/listitem alternation of a document tree when the user changes the
nesting level of one or more list items.

Scope and guarantees:
- Operates purely in-memory on a DocumentContext, no file I/O nor UI imports.
- Targets are processed one after another in the given order; each target's
  restructuring (including dirty marking) completes before the next starts.
- A target that cannot be moved (already a nested-list wrapper, not indented,
  orphaned) is skipped on its own; the rest of the batch still runs.
- Sibling order inside every list is preserved; only grouping changes.

Examples
--------
Indent the item under the caret:

    service = ListEditingService()
    result = service.indent_selection(ctx, selection)
    if not result.success:
        print(result.message)

"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from lxml import etree as ET

from listnest.config import ConfigManager
from listnest.core.exceptions import ListStructureError
from listnest.core.models import KEY_ATTR, DocumentContext, Selection
from listnest.core.nodes import (
    append_children,
    get_first_child,
    get_last_child,
    get_list_tag,
    get_next_siblings,
    get_previous_siblings,
    insert_after,
    insert_before,
    is_empty,
    is_list,
    is_list_item,
    is_nested_list_item,
    is_same_node,
    remove_node,
    replace_node,
)
from listnest.core.selection import resolve_list_items


__all__ = ["OperationResult", "ListEditingService"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Result of a list editing operation.

    Attributes
    ----------
    success
        Whether the operation applied to at least one target. For command
        handlers this is the "handled" flag.
    message
        Human-readable summary suitable for logs or UI display.
    details
        Optional structured details for diagnostics or caller logic.
    """
    success: bool
    message: str
    details: Optional[Dict[str, Any]] = None


class ListEditingService:
    """Encapsulates indent/outdent operations on nested lists.

    Indent moves a list item one level deeper by placing it in a nested list
    next to its old position, merging with neighbouring nested lists when
    there are any. Outdent moves it one level up beside the list item that
    wraps its list, splitting that list in two when the item sits in the
    middle of it.

    Parameters
    ----------
    config : Mapping, optional
        The ``list_editing`` config section. Loaded from
        :class:`~listnest.config.ConfigManager` when omitted.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None) -> None:
        if config is None:
            config = ConfigManager().get_list_editing_config()
        self._default_tag: str = str(config.get("default_list_tag", "ul"))
        self._strict: bool = bool(config.get("strict_invariants", False))
        self._logger = logging.getLogger(f"{__name__}.ListEditingService")

    @property
    def strict(self) -> bool:
        return self._strict

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def indent_selection(self, context: DocumentContext, selection: Optional[Selection]) -> OperationResult:
        """Indent the list items targeted by ``selection``."""
        targets = resolve_list_items(selection)
        if not targets:
            logger.debug("Edit noop: indent no_list_items_in_selection")
            return OperationResult(False, "No list items selected.", {"targets": 0})
        return self.indent_list_items(context, targets)

    def outdent_selection(self, context: DocumentContext, selection: Optional[Selection]) -> OperationResult:
        """Outdent the list items targeted by ``selection``."""
        targets = resolve_list_items(selection)
        if not targets:
            logger.debug("Edit noop: outdent no_list_items_in_selection")
            return OperationResult(False, "No list items selected.", {"targets": 0})
        return self.outdent_list_items(context, targets)

    def indent_list_items(self, context: DocumentContext, list_items: Sequence[ET._Element]) -> OperationResult:
        """Indent each list item by one level, in order.

        Returns a successful result whenever at least one list item was given,
        even if every one of them turned out to be a no-op; the request has
        been consumed either way.
        """
        logger.info("Edit: indent count=%d", len(list_items))
        return self._run_batch("indent", context, list_items, self._indent_one)

    def outdent_list_items(self, context: DocumentContext, list_items: Sequence[ET._Element]) -> OperationResult:
        """Outdent each list item by one level, in order."""
        logger.info("Edit: outdent count=%d", len(list_items))
        return self._run_batch("outdent", context, list_items, self._outdent_one)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _run_batch(self, action: str, context: DocumentContext, list_items, apply_one) -> OperationResult:
        if not list_items:
            return OperationResult(False, "No list items selected.", {"targets": 0})

        moved: List[str] = []
        skipped: List[str] = []
        for item in list_items:
            key = item.get(KEY_ATTR, "")
            if apply_one(context, item):
                moved.append(key)
            else:
                skipped.append(key)

        details = {"targets": len(list_items), "moved": moved, "skipped": skipped}
        if moved:
            logger.info("Edit OK: %s moved=%d skipped=%d", action, len(moved), len(skipped))
            return OperationResult(True, f"{action.capitalize()}ed {len(moved)} list item(s).", details)
        logger.info("Edit noop: %s skipped=%d", action, len(skipped))
        return OperationResult(True, f"Nothing to {action}.", details)

    def _indent_one(self, context: DocumentContext, item: ET._Element) -> bool:
        """Move ``item`` one level deeper. Returns False if it was left in place."""
        key = item.get(KEY_ATTR)
        if is_nested_list_item(item):
            self._logger.debug("Skip indent key=%s reason=nested_wrapper", key)
            return False

        parent = item.getparent()
        previous_sibling = item.getprevious()
        next_sibling = item.getnext()
        moved = True

        if is_nested_list_item(previous_sibling) and is_nested_list_item(next_sibling):
            # Nested lists on both sides: merge all three into the previous one
            inner_list = get_first_child(previous_sibling)
            inner_list.append(item)
            append_children(inner_list, list(get_first_child(next_sibling)))
            remove_node(next_sibling)
            self._mark_children_dirty(context, inner_list)
            self._logger.debug("Indent key=%s merged into key=%s", key, previous_sibling.get(KEY_ATTR))
        elif is_nested_list_item(next_sibling):
            inner_list = get_first_child(next_sibling)
            first_child = get_first_child(inner_list)
            if first_child is not None:
                insert_before(first_child, item)
            else:
                inner_list.append(item)
            self._mark_children_dirty(context, inner_list)
            self._logger.debug("Indent key=%s prepended to key=%s", key, next_sibling.get(KEY_ATTR))
        elif is_nested_list_item(previous_sibling):
            inner_list = get_first_child(previous_sibling)
            inner_list.append(item)
            self._mark_children_dirty(context, inner_list)
            self._logger.debug("Indent key=%s appended to key=%s", key, previous_sibling.get(KEY_ATTR))
        elif is_list(parent):
            wrapper = context.create_list_item()
            inner_list = context.create_list(get_list_tag(parent, self._default_tag))
            wrapper.append(inner_list)
            # Anchor the wrapper before moving the item so it keeps the item's slot
            if previous_sibling is not None:
                insert_after(previous_sibling, wrapper)
            elif next_sibling is not None:
                insert_before(next_sibling, wrapper)
            else:
                parent.append(wrapper)
            inner_list.append(item)
            self._logger.debug("Indent key=%s wrapped in new key=%s", key, wrapper.get(KEY_ATTR))
        else:
            moved = False
            if self._strict:
                raise ListStructureError(
                    f"List item parent is <{getattr(parent, 'tag', None)}>, expected a list.",
                    node_key=key,
                )
            self._logger.debug("Skip indent key=%s reason=parent_not_list", key)

        if is_list(parent):
            self._mark_children_dirty(context, parent)
        return moved

    def _outdent_one(self, context: DocumentContext, item: ET._Element) -> bool:
        """Move ``item`` one level up. Returns False if it was left in place."""
        key = item.get(KEY_ATTR)
        if is_nested_list_item(item):
            self._logger.debug("Skip outdent key=%s reason=nested_wrapper", key)
            return False

        parent_list = item.getparent()
        grandparent_item = parent_list.getparent() if parent_list is not None else None
        great_grandparent_list = grandparent_item.getparent() if grandparent_item is not None else None
        # Without the full list -> listitem -> list chain the item is not indented
        if not (is_list(parent_list) and is_list_item(grandparent_item) and is_list(great_grandparent_list)):
            self._logger.debug("Skip outdent key=%s reason=not_indented", key)
            return False

        if is_same_node(item, get_first_child(parent_list)):
            insert_before(grandparent_item, item)
            if is_empty(parent_list):
                remove_node(grandparent_item)
            self._logger.debug("Outdent key=%s placed before key=%s", key, grandparent_item.get(KEY_ATTR))
        elif is_same_node(item, get_last_child(parent_list)):
            insert_after(grandparent_item, item)
            if is_empty(parent_list):
                remove_node(grandparent_item)
            self._logger.debug("Outdent key=%s placed after key=%s", key, grandparent_item.get(KEY_ATTR))
        else:
            # Interior item: split the list around it. Both halves are read
            # before anything moves, since moving changes the sibling links.
            tag = get_list_tag(parent_list, self._default_tag)
            preceding = get_previous_siblings(item)
            following = get_next_siblings(item)

            before_item = context.create_list_item()
            before_list = context.create_list(tag)
            before_item.append(before_list)
            append_children(before_list, preceding)

            after_item = context.create_list_item()
            after_list = context.create_list(tag)
            after_item.append(after_list)
            append_children(after_list, following)

            insert_before(grandparent_item, before_item)
            insert_after(grandparent_item, after_item)
            replace_node(grandparent_item, item)
            self._mark_children_dirty(context, before_list)
            self._mark_children_dirty(context, after_list)
            self._logger.debug(
                "Outdent key=%s split key=%s into key=%s and key=%s",
                key, grandparent_item.get(KEY_ATTR), before_item.get(KEY_ATTR), after_item.get(KEY_ATTR),
            )

        self._mark_children_dirty(context, parent_list)
        self._mark_children_dirty(context, great_grandparent_list)
        return True

    @staticmethod
    def _mark_children_dirty(context: DocumentContext, list_node: ET._Element) -> None:
        for child in list(list_node):
            context.mark_dirty(child)
