from __future__ import annotations

"""Exception classes for the list editing core.

Normal indent/outdent work never raises: malformed targets are skipped one by
one. These exceptions cover the opt-in strict mode and misuse of the command
dispatcher.
"""

from typing import Optional


class ListNestError(Exception):
    """Base exception for all listnest errors."""

    def __init__(self, message: str, node_key: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.node_key = node_key
        self.cause = cause

    def __str__(self) -> str:
        if self.node_key:
            return f"[Node: {self.node_key}] {super().__str__()}"
        return super().__str__()


class ListStructureError(ListNestError):
    """Raised in strict mode when a list item breaks the List/ListItem alternation."""
    pass


class CommandRegistrationError(ListNestError):
    """Raised when a command handler cannot be registered.

    Covers empty command identifiers, unknown priorities, non-callable
    handlers and mounting a plugin twice.
    """

    def __init__(self, message: str, command: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause=cause)
        self.command = command

    def __str__(self) -> str:
        if self.command:
            return f"[Command: {self.command}] {super().__str__()}"
        return super().__str__()
