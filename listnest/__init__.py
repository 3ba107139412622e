"""Nested list indent/outdent for editable document trees.

Front-ends should depend on the public API exposed here rather than
importing internal modules directly.
"""

from .core.models import DocumentContext, Selection  # re-export for convenience
from .core.editor import Editor
from .core.plugins import NestedListPlugin
from .core.services import ListEditingService, OperationResult

__all__: list[str] = [
    "DocumentContext",
    "Editor",
    "ListEditingService",
    "NestedListPlugin",
    "OperationResult",
    "Selection",
]
