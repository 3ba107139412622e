"""Editor plugins built on the list editing core."""

from .nested_list import NestedListPlugin

__all__ = [
    "NestedListPlugin",
]
