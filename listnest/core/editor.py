from __future__ import annotations

"""Minimal host editor: a document, a selection and a command dispatcher.

Commands are handled synchronously, one at a time, each inside an update
scope. Dirty state is reset when a top-level update starts, so after
``dispatch_command`` returns, ``context.dirty_nodes`` describes exactly what
that command touched.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from lxml import etree as ET

from listnest.core.commands import CommandDispatcher, CommandHandler, CommandPriority
from listnest.core.models import DocumentContext, Selection

__all__ = ["Editor"]

logger = logging.getLogger(__name__)


class Editor:
    """Owns the document tree and routes commands to registered handlers."""

    def __init__(self, context: Optional[DocumentContext] = None) -> None:
        self.context: DocumentContext = context if context is not None else DocumentContext()
        self.selection: Optional[Selection] = None
        self.dispatcher = CommandDispatcher()
        self._update_depth = 0

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def set_selection(self, selection: Optional[Selection]) -> None:
        self.selection = selection

    def select_nodes(self, nodes: Sequence[ET._Element], anchor: Optional[ET._Element] = None) -> Selection:
        """Select ``nodes``; the anchor defaults to the first of them."""
        nodes = list(nodes)
        if anchor is None and nodes:
            anchor = nodes[0]
        self.selection = Selection(nodes=nodes, anchor_node=anchor)
        return self.selection

    def collapse_to(self, node: ET._Element) -> Selection:
        """Place a collapsed caret in ``node`` (no selected nodes, anchor only)."""
        self.selection = Selection(nodes=[], anchor_node=node)
        return self.selection

    def get_selection(self) -> Optional[Selection]:
        return self.selection

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def register_command(
        self,
        command: str,
        handler: CommandHandler,
        priority: Union[str, int, CommandPriority] = CommandPriority.NORMAL,
    ) -> Callable[[], None]:
        return self.dispatcher.register(command, handler, priority)

    def dispatch_command(self, command: str, payload: Any = None) -> bool:
        """Run ``command`` through the handlers; True if one handled it."""
        with self.update():
            handled = self.dispatcher.dispatch(command, payload)
        logger.debug(
            "Command %s handled=%s dirty_nodes=%d", command, handled, len(self.context.dirty_nodes)
        )
        return handled

    @contextmanager
    def update(self) -> Iterator[DocumentContext]:
        """Scope for a batch of tree mutations."""
        if self._update_depth == 0:
            self.context.clear_dirty()
        self._update_depth += 1
        try:
            yield self.context
        finally:
            self._update_depth -= 1
