"""Exported tree nodes and the errors raised while exporting."""

from __future__ import annotations

from dataclasses import dataclass


class ExportDone(Exception):
    """Raised by an exporter once every node has been produced."""

    def __init__(self, message: str = "export is complete") -> None:
        super().__init__(message)


class NotInitializedTreeError(Exception):
    """Raised when exporting a tree that has no backing store."""

    def __init__(
        self, message: str = "iavl/export newExporter failed to create"
    ) -> None:
        super().__init__(message)


@dataclass
class ExportNode:
    """One node of an exported tree, produced in depth-first post-order."""

    key: bytes | None = None
    value: bytes | None = None
    version: int = 0
    height: int = 0

    @property
    def is_leaf(self) -> bool:
        """Whether the node is a leaf (height zero)."""
        return self.height == 0