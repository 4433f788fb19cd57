# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IndexTree node class."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .slots import SlotIndex


class IndexTreeNode:
    """A node record stored in an Arena.

    Each node has:
    - data: The caller's payload, never inspected by the arena
    - parent: Index of the parent node, or None for a root
    - first_child / last_child: Ends of the child chain
    - previous_sibling / next_sibling: Neighbours in the sibling chain

    Links are SlotIndex values into the same arena. The node's own identity
    is the index it is stored under; the record does not know it.

    Example:
        >>> node = IndexTreeNode('foo')
        >>> node.data
        'foo'
        >>> node.parent is None
        True
    """

    __slots__ = (
        'data', 'parent', 'first_child', 'last_child',
        'previous_sibling', 'next_sibling',
    )

    def __init__(self, data: Any = None) -> None:
        self.data = data
        self.parent: SlotIndex | None = None
        self.first_child: SlotIndex | None = None
        self.last_child: SlotIndex | None = None
        self.previous_sibling: SlotIndex | None = None
        self.next_sibling: SlotIndex | None = None

    def __repr__(self) -> str:
        return (
            f"IndexTreeNode({self.data!r}, parent={self.parent!r}, "
            f"first_child={self.first_child!r}, last_child={self.last_child!r}, "
            f"previous_sibling={self.previous_sibling!r}, next_sibling={self.next_sibling!r})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, IndexTreeNode):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    @property
    def has_children(self) -> bool:
        """True if the child chain is not empty."""
        return self.first_child is not None

    def get(self) -> Any:
        """Return the payload."""
        return self.data

    def set(self, data: Any) -> Any:
        """Replace the payload and return the previous one."""
        old, self.data = self.data, data
        return old
