from __future__ import annotations

"""Nested list command handling for an editor.

The plugin answers the indent and outdent commands when the selection
touches list items, and lets them fall through otherwise so that lower
priority handlers (plain paragraph indentation, for example) can run.

Typical use mirrors a UI component's mount/unmount::

    with NestedListPlugin(editor):
        editor.dispatch_command(INDENT_CONTENT_COMMAND)

or, for long-lived registration, ``plugin.mount()`` and later
``plugin.unmount()``.
"""

import logging
from contextlib import ExitStack
from typing import Any, Mapping, Optional

from listnest.config import ConfigManager
from listnest.core.commands import parse_priority
from listnest.core.editor import Editor
from listnest.core.exceptions import CommandRegistrationError
from listnest.core.services.list_editing_service import ListEditingService

__all__ = ["NestedListPlugin"]

logger = logging.getLogger(__name__)


class NestedListPlugin:
    """Registers the nested list indent/outdent handler on an editor.

    Args:
        editor: Host editor to register with
        service: Editing service to delegate to (built from config if omitted)
        config: ``list_editing`` config section (read from ConfigManager if omitted)
    """

    def __init__(
        self,
        editor: Editor,
        service: Optional[ListEditingService] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if config is None:
            config = ConfigManager().get_list_editing_config()
        commands = config.get("commands") or {}
        self.editor = editor
        self.service = service if service is not None else ListEditingService(config)
        self.indent_command: str = commands.get("indent", "indent-content")
        self.outdent_command: str = commands.get("outdent", "outdent-content")
        self.priority = parse_priority(config.get("listener_priority", "low"))
        self._registrations: Optional[ExitStack] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._registrations is not None

    def mount(self) -> None:
        """Register the handler for both commands.

        If either registration fails, whatever was already registered is
        released before the error propagates.

        Raises:
            CommandRegistrationError: If already mounted or registration fails
        """
        if self._registrations is not None:
            raise CommandRegistrationError("Nested list plugin is already mounted.")
        with ExitStack() as stack:
            for command in (self.indent_command, self.outdent_command):
                unsubscribe = self.editor.register_command(command, self.handle_command, self.priority)
                stack.callback(unsubscribe)
            self._registrations = stack.pop_all()
        logger.info(
            "Nested list handler mounted for %s/%s at priority %s",
            self.indent_command, self.outdent_command, self.priority.name,
        )

    def unmount(self) -> None:
        """Remove the handler; safe to call when not mounted."""
        registrations, self._registrations = self._registrations, None
        if registrations is not None:
            registrations.close()
            logger.info("Nested list handler unmounted")

    def __enter__(self) -> "NestedListPlugin":
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # -------------------------------------------------------------------------
    # Command handling
    # -------------------------------------------------------------------------

    def handle_command(self, command: str, payload: Any = None) -> bool:
        """Return True if ``command`` was an indent/outdent applied to list items."""
        if command == self.indent_command:
            result = self.service.indent_selection(self.editor.context, self.editor.get_selection())
        elif command == self.outdent_command:
            result = self.service.outdent_selection(self.editor.context, self.editor.get_selection())
        else:
            return False
        return result.success
