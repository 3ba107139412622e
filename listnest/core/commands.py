from __future__ import annotations

"""Command dispatch with priority ordering and fallthrough.

Handlers are registered per command identifier at a priority. Dispatch calls
them from the highest priority down, in registration order within a
priority, and stops at the first handler that returns True.
"""

import logging
from enum import IntEnum
from typing import Any, Callable, Dict, List, Tuple, Union

from .exceptions import CommandRegistrationError

__all__ = [
    "CommandPriority",
    "CommandDispatcher",
    "CommandHandler",
    "INDENT_CONTENT_COMMAND",
    "OUTDENT_CONTENT_COMMAND",
    "parse_priority",
]

logger = logging.getLogger(__name__)

INDENT_CONTENT_COMMAND = "indent-content"
OUTDENT_CONTENT_COMMAND = "outdent-content"

CommandHandler = Callable[[str, Any], bool]


class CommandPriority(IntEnum):
    """Dispatch priorities; higher values run first."""

    EDITOR = 0
    LOW = 1
    NORMAL = 2
    HIGH = 3
    CRITICAL = 4


def parse_priority(value: Union[str, int, CommandPriority]) -> CommandPriority:
    """Accept a priority name (``"low"``), number or enum member."""
    if isinstance(value, CommandPriority):
        return value
    try:
        if isinstance(value, str):
            return CommandPriority[value.strip().upper()]
        return CommandPriority(int(value))
    except (KeyError, ValueError, TypeError) as e:
        raise CommandRegistrationError(f"Unknown command priority {value!r}.", cause=e)


class CommandDispatcher:
    """Ordered per-command handler lists."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Tuple[CommandPriority, int, CommandHandler]]] = {}
        self._sequence = 0

    def register(
        self,
        command: str,
        handler: CommandHandler,
        priority: Union[str, int, CommandPriority] = CommandPriority.NORMAL,
    ) -> Callable[[], None]:
        """Register ``handler`` for ``command`` and return its unsubscribe function.

        Raises:
            CommandRegistrationError: If the command, handler or priority is invalid
        """
        if not command or not isinstance(command, str):
            raise CommandRegistrationError("Command identifier must be a non-empty string.", command=command)
        if not callable(handler):
            raise CommandRegistrationError("Command handler must be callable.", command=command)
        level = parse_priority(priority)

        self._sequence += 1
        entry = (level, self._sequence, handler)
        handlers = self._handlers.setdefault(command, [])
        handlers.append(entry)
        handlers.sort(key=lambda e: (-e[0], e[1]))
        logger.debug("Registered handler for %s at priority %s", command, level.name)

        def unsubscribe() -> None:
            current = self._handlers.get(command, [])
            if entry in current:
                current.remove(entry)
                logger.debug("Unregistered handler for %s", command)
            if not current:
                self._handlers.pop(command, None)

        return unsubscribe

    def dispatch(self, command: str, payload: Any = None) -> bool:
        """Call handlers for ``command`` until one reports it handled."""
        for _level, _seq, handler in list(self._handlers.get(command, [])):
            if handler(command, payload):
                return True
        return False

    def has_handlers(self, command: str) -> bool:
        return bool(self._handlers.get(command))

    def handler_count(self, command: str) -> int:
        return len(self._handlers.get(command, []))
