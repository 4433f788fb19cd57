# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal sequences over an Arena.

Each producer holds the arena and a start index and yields SlotIndex
values. Nodes are looked up through the arena on every step, so a node
removed while a sequence is being consumed raises InvalidIndexError
instead of being followed. Producers are re-iterable: every call to
iter() starts again from the start index.

Example:
    >>> arena = Arena()
    >>> root = arena.new_node('root')
    >>> a = arena.new_node('a')
    >>> arena.append_child(root, a)
    >>> list(arena.descendants(root)) == [root, a]
    True
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from .arena import Arena
    from .slots import SlotIndex


class Edge(Enum):
    """Event kind reported by Traverse and ReverseTraverse."""

    ENTER = 'enter'
    LEAVE = 'leave'


class _NodeSequence:
    """Base for sequences anchored on one node.

    The start index is validated when the sequence is created.
    """

    __slots__ = ('_arena', '_node')

    def __init__(self, arena: Arena, node: SlotIndex) -> None:
        arena.get(node)
        self._arena = arena
        self._node = node

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._node!r})"

    def __iter__(self) -> Iterator[SlotIndex]:
        raise NotImplementedError


class Ancestors(_NodeSequence):
    """Parent, grandparent, ... up to the root.

    Stops at a stale parent link, which marks a dangling root.
    """

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        current = self._arena.parent(self._node)
        while current is not None:
            yield current
            current = self._arena.parent(current)


class Children(_NodeSequence):
    """Children from first to last."""

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        arena = self._arena
        current = arena[self._node].first_child
        while current is not None:
            yield current
            current = arena[current].next_sibling


class ReverseChildren(_NodeSequence):
    """Children from last to first."""

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        arena = self._arena
        current = arena[self._node].last_child
        while current is not None:
            yield current
            current = arena[current].previous_sibling


class PrecedingSiblings(_NodeSequence):
    """Siblings before the node, nearest first."""

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        arena = self._arena
        current = arena[self._node].previous_sibling
        while current is not None:
            yield current
            current = arena[current].previous_sibling


class FollowingSiblings(_NodeSequence):
    """Siblings after the node, nearest first."""

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        arena = self._arena
        current = arena[self._node].next_sibling
        while current is not None:
            yield current
            current = arena[current].next_sibling


class TraverseRun:
    """One pass over a Traverse, holding its own position and skip flag.

    Several runs of the same Traverse advance independently, so a walker
    can be shared by readers that each prune their own pass.
    """

    __slots__ = ('_arena', '_root', '_first', '_next', '_last', '_skip', '_done')

    def __init__(self, arena: Arena, root: SlotIndex, first: str, next_: str) -> None:
        self._arena = arena
        self._root = root
        self._first = first
        self._next = next_
        self._last: tuple[Edge, SlotIndex] | None = None
        self._skip = False
        self._done = False

    def __iter__(self) -> TraverseRun:
        return self

    def skip_children(self) -> None:
        """Do not descend into the node of the last ENTER event."""
        self._skip = True

    def __next__(self) -> tuple[Edge, SlotIndex]:
        if self._done:
            raise StopIteration
        if self._last is None:
            event = (Edge.ENTER, self._root)
        else:
            event = self._advance(*self._last)
            if event is None:
                self._done = True
                raise StopIteration
        self._skip = False
        self._last = event
        return event

    def _advance(self, edge: Edge, current: SlotIndex) -> tuple[Edge, SlotIndex] | None:
        arena = self._arena
        if edge is Edge.ENTER:
            child = None if self._skip else getattr(arena[current], self._first)
            if child is None:
                return Edge.LEAVE, current
            return Edge.ENTER, child
        if current == self._root:
            return None
        node = arena[current]
        sibling = getattr(node, self._next)
        if sibling is not None:
            return Edge.ENTER, sibling
        if node.parent is not None:
            return Edge.LEAVE, node.parent
        return None


class Traverse(_NodeSequence):
    """Depth-first walk of a subtree reporting (Edge, index) events.

    Every node produces an ENTER event before its children and a LEAVE
    event after them. Each iter() call returns a fresh TraverseRun;
    calling its skip_children() right after an ENTER event prunes that
    node's children, so the next event is its LEAVE. The walk never
    leaves the subtree rooted at the start node.

    Example:
        >>> run = iter(arena.traverse(root))
        >>> for edge, node in run:
        ...     if edge is Edge.ENTER and arena.data(node) == 'hidden':
        ...         run.skip_children()
    """

    __slots__ = ()

    _first = 'first_child'
    _next = 'next_sibling'

    def __iter__(self) -> TraverseRun:
        return TraverseRun(self._arena, self._node, self._first, self._next)


class ReverseTraverse(Traverse):
    """Traverse mirrored: children are visited last to first."""

    __slots__ = ()

    _first = 'last_child'
    _next = 'previous_sibling'


class Descendants(_NodeSequence):
    """The node and all its descendants in pre-order."""

    __slots__ = ()

    def __iter__(self) -> Iterator[SlotIndex]:
        for edge, node in Traverse(self._arena, self._node):
            if edge is Edge.ENTER:
                yield node
