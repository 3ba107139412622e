from __future__ import annotations

"""High-level editing services.

Services are UI-agnostic and operate on a DocumentContext in place.
"""

from .list_editing_service import ListEditingService, OperationResult  # noqa: F401

__all__: list[str] = [
    "ListEditingService",
    "OperationResult",
]
