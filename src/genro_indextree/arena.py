# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Arena - A tree of nodes addressed by generational indices.

This module provides the Arena class, the container for IndexTreeNode
records. The arena owns every node; callers hold SlotIndex values, which
locate nodes without keeping them alive. Parent, child and sibling links
are plain indices stored in the node records, so a tree has no reference
cycles and removing a node never leaves a live object behind.

Key Features:
    - **Stale index detection**: an index to a removed node is rejected
      with InvalidIndexError, even after its slot is reused
    - **Forests**: any number of independent roots in one arena
    - **Atomic edits**: every index is validated and every cycle check
      done before the first link is touched
    - **Lazy traversals**: ancestors, children, siblings, descendants and
      an enter/leave walk with subtree pruning

Orphan policies (what remove() does with the removed node's children):
    - 'dangle': children keep their (now stale) parent link and their
      sibling chain; they are dangling roots, reachable only through
      indices the caller already holds
    - 'reparent': children take the removed node's place, in order
    - 'promote': each child becomes an independent root

Example:
    Basic usage::

        arena = Arena()
        root = arena.new_node('root')
        a = arena.new_node('a')
        b = arena.new_node('b')
        arena.append_child(root, a)
        arena.append_child(root, b)

        print([arena.data(n) for n in arena.children(root)])  # ['a', 'b']

        arena.remove_subtree(a)
        a in arena  # False
"""

from __future__ import annotations

from typing import Any, Iterator

from .config import normalise_orphans, runtime_config
from .exceptions import CycleError, SelfReferenceError
from .logging import get_logger
from .node import IndexTreeNode
from .slots import SlotIndex, SlotStore
from .traverse import (
    Ancestors,
    Children,
    Descendants,
    Edge,
    FollowingSiblings,
    PrecedingSiblings,
    ReverseChildren,
    ReverseTraverse,
    Traverse,
)

logger = get_logger('arena')


class Arena:
    """An arena of IndexTreeNode records forming one or more trees.

    Arena provides:
    - new_node(data): allocate a root node
    - arena[node] / get(node): the IndexTreeNode record
    - data(node) / set_data(node, value): payload access
    - append_child, prepend_child, insert_before, insert_after: linking
    - detach, remove, remove_subtree: unlinking and freeing
    - ancestors, children, reverse_children, preceding_siblings,
      following_siblings, descendants, traverse, reverse_traverse

    Mutating calls need exclusive access to the arena; any number of
    readers may traverse it while nothing mutates it.

    Example:
        >>> arena = Arena()
        >>> foo = arena.new_node('foo')
        >>> arena.data(foo)
        'foo'
        >>> arena.remove(foo)
        'foo'
        >>> foo in arena
        False
    """

    __slots__ = ('_store', '_orphans')

    def __init__(self, capacity: int = 0, orphans: str | None = None) -> None:
        """Initialize an Arena.

        Args:
            capacity: Number of node slots to create up front.
            orphans: Default orphan policy for remove(): 'dangle',
                'reparent' or 'promote'. If None, the value of
                GENRO_INDEXTREE_ORPHANS is used ('dangle' when unset).

        Raises:
            ValueError: If orphans is not a known policy.
        """
        self._store = SlotStore(capacity)
        self._orphans = runtime_config().orphans if orphans is None else normalise_orphans(orphans)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"Arena(count={len(self._store)}, orphans={self._orphans!r})"

    def __len__(self) -> int:
        """Return the number of nodes in the arena."""
        return len(self._store)

    def __iter__(self) -> Iterator[IndexTreeNode]:
        """Iterate over node records in storage order."""
        return self._store.iter_values()

    def __contains__(self, node: Any) -> bool:
        return self._store.contains(node)

    def __getitem__(self, node: SlotIndex) -> IndexTreeNode:
        return self._store.get(node)

    def __eq__(self, other: Any) -> bool:
        """Equal when both hold equal node records in the same storage order."""
        if not isinstance(other, Arena):
            return NotImplemented
        return self._store == other._store

    @property
    def orphans(self) -> str:
        """Default orphan policy used by remove()."""
        return self._orphans

    @property
    def capacity(self) -> int:
        return self._store.capacity

    # ==================== Node Access ====================

    def new_node(self, data: Any) -> SlotIndex:
        """Create a root node holding data and return its index."""
        return self._store.allocate(IndexTreeNode(data))

    def count(self) -> int:
        return len(self._store)

    def is_empty(self) -> bool:
        return self._store.is_empty()

    def contains(self, node: Any) -> bool:
        """True if node is the index of a live node of this arena."""
        return self._store.contains(node)

    def get(self, node: SlotIndex) -> IndexTreeNode:
        """Return the node record for node.

        Raises:
            InvalidIndexError: If node was removed or never issued,
                or is not a SlotIndex.
        """
        return self._store.get(node)

    def get_mut(self, node: SlotIndex) -> IndexTreeNode:
        """Return the node record for in-place payload changes.

        Linkage fields must only be changed through the editing methods.
        """
        return self._store.get_mut(node)

    def data(self, node: SlotIndex) -> Any:
        """Return the payload of node."""
        return self._store.get(node).data

    def set_data(self, node: SlotIndex, data: Any) -> Any:
        """Replace the payload of node and return the previous one."""
        return self._store.get_mut(node).set(data)

    def iter(self) -> Iterator[IndexTreeNode]:
        """Yield node records in storage order."""
        return self._store.iter_values()

    def iter_pairs(self) -> Iterator[tuple[SlotIndex, IndexTreeNode]]:
        """Yield (index, node record) pairs in storage order."""
        return self._store.iter_items()

    # ==================== Navigation ====================

    def parent(self, node: SlotIndex) -> SlotIndex | None:
        """Return the live parent of node, or None.

        A stale parent link (the parent was removed) counts as no parent.
        """
        parent = self._store.get(node).parent
        if parent is None or not self._store.contains(parent):
            return None
        return parent

    def is_root(self, node: SlotIndex) -> bool:
        """True if node has no live parent."""
        return self.parent(node) is None

    def is_ancestor_of(self, ancestor: SlotIndex, node: SlotIndex) -> bool:
        """True if ancestor is a proper ancestor of node."""
        self._store.get(ancestor)
        return self._has_ancestor(node, ancestor)

    def _has_ancestor(self, node: SlotIndex, ancestor: SlotIndex) -> bool:
        current = self.parent(node)
        while current is not None:
            if current == ancestor:
                return True
            current = self.parent(current)
        return False

    # ==================== Linking ====================

    def _unlink(self, index: SlotIndex, node: IndexTreeNode) -> None:
        """Take node out of its parent's child chain or its forest chain."""
        parent = self.parent(index)
        previous, following = node.previous_sibling, node.next_sibling
        if previous is not None:
            self._store[previous].next_sibling = following
        elif parent is not None:
            self._store[parent].first_child = following
        if following is not None:
            self._store[following].previous_sibling = previous
        elif parent is not None:
            self._store[parent].last_child = previous
        node.parent = None
        node.previous_sibling = None
        node.next_sibling = None

    def _check_child(self, parent: SlotIndex, child: SlotIndex) -> tuple[IndexTreeNode, IndexTreeNode]:
        parent_node = self._store.get(parent)
        child_node = self._store.get(child)
        if parent == child:
            raise CycleError(f"{child!r} cannot be its own child")
        if self._has_ancestor(parent, child):
            raise CycleError(f"{child!r} is an ancestor of {parent!r}")
        return parent_node, child_node

    def _check_sibling(self, sibling: SlotIndex, new: SlotIndex) -> tuple[IndexTreeNode, IndexTreeNode]:
        sibling_node = self._store.get(sibling)
        new_node = self._store.get(new)
        if sibling == new:
            raise SelfReferenceError(f"{new!r} cannot be its own sibling")
        if self._has_ancestor(sibling, new):
            raise CycleError(f"{new!r} is an ancestor of {sibling!r}")
        return sibling_node, new_node

    def append_child(self, parent: SlotIndex, child: SlotIndex) -> None:
        """Make child the last child of parent.

        child is detached first if it has a parent or siblings, and keeps
        its own subtree.

        Raises:
            InvalidIndexError: If either index is not live.
            CycleError: If parent is child or one of its descendants.
        """
        parent_node, child_node = self._check_child(parent, child)
        self._unlink(child, child_node)
        last = parent_node.last_child
        child_node.parent = parent
        child_node.previous_sibling = last
        if last is None:
            parent_node.first_child = child
        else:
            self._store[last].next_sibling = child
        parent_node.last_child = child

    def prepend_child(self, parent: SlotIndex, child: SlotIndex) -> None:
        """Make child the first child of parent.

        Raises:
            InvalidIndexError: If either index is not live.
            CycleError: If parent is child or one of its descendants.
        """
        parent_node, child_node = self._check_child(parent, child)
        self._unlink(child, child_node)
        first = parent_node.first_child
        child_node.parent = parent
        child_node.next_sibling = first
        if first is None:
            parent_node.last_child = child
        else:
            self._store[first].previous_sibling = child
        parent_node.first_child = child

    def insert_after(self, sibling: SlotIndex, new: SlotIndex) -> None:
        """Place new right after sibling, under sibling's parent.

        If sibling is a root, new joins it in a root-level forest chain.

        Raises:
            InvalidIndexError: If either index is not live.
            SelfReferenceError: If sibling and new are the same node.
            CycleError: If new is an ancestor of sibling.
        """
        sibling_node, new_node = self._check_sibling(sibling, new)
        self._insert_after(sibling, sibling_node, new, new_node)

    def _insert_after(
        self,
        sibling: SlotIndex,
        sibling_node: IndexTreeNode,
        new: SlotIndex,
        new_node: IndexTreeNode,
    ) -> None:
        self._unlink(new, new_node)
        parent = self.parent(sibling)
        following = sibling_node.next_sibling
        new_node.parent = parent
        new_node.previous_sibling = sibling
        new_node.next_sibling = following
        sibling_node.next_sibling = new
        if following is not None:
            self._store[following].previous_sibling = new
        elif parent is not None:
            self._store[parent].last_child = new

    def insert_before(self, sibling: SlotIndex, new: SlotIndex) -> None:
        """Place new right before sibling, under sibling's parent.

        If sibling is a root, new joins it in a root-level forest chain.

        Raises:
            InvalidIndexError: If either index is not live.
            SelfReferenceError: If sibling and new are the same node.
            CycleError: If new is an ancestor of sibling.
        """
        sibling_node, new_node = self._check_sibling(sibling, new)
        self._insert_before(sibling, sibling_node, new, new_node)

    def _insert_before(
        self,
        sibling: SlotIndex,
        sibling_node: IndexTreeNode,
        new: SlotIndex,
        new_node: IndexTreeNode,
    ) -> None:
        self._unlink(new, new_node)
        parent = self.parent(sibling)
        previous = sibling_node.previous_sibling
        new_node.parent = parent
        new_node.previous_sibling = previous
        new_node.next_sibling = sibling
        sibling_node.previous_sibling = new
        if previous is not None:
            self._store[previous].next_sibling = new
        elif parent is not None:
            self._store[parent].first_child = new

    # ==================== Unlinking ====================

    def detach(self, node: SlotIndex) -> None:
        """Take node out of its parent and sibling chain.

        node keeps its children and becomes a root. Detaching a root with
        no siblings changes nothing, except that a stale parent link of a
        dangling root is cleared.

        Raises:
            InvalidIndexError: If node is not live.
        """
        self._unlink(node, self._store.get(node))

    def remove(self, node: SlotIndex, orphans: str | None = None) -> Any:
        """Detach node, free its slot and return its payload.

        Args:
            node: The node to remove.
            orphans: Policy for node's children, overriding the arena's
                default: 'dangle', 'reparent' or 'promote'.

        Returns:
            The payload of the removed node.

        Raises:
            InvalidIndexError: If node is not live.
            ValueError: If orphans is not a known policy.
        """
        policy = self._orphans if orphans is None else normalise_orphans(orphans)
        record = self._store.get(node)
        if policy == 'reparent':
            for child in list(Children(self, node)):
                self._insert_before(node, record, child, self._store[child])
        elif policy == 'promote':
            for child in list(Children(self, node)):
                self._unlink(child, self._store[child])
        self._unlink(node, record)
        self._store.deallocate(node)
        logger.debug("removed %r (orphans=%s)", node, policy)
        return record.data

    def remove_subtree(self, node: SlotIndex) -> list[Any]:
        """Remove node and all its descendants.

        Slots are freed in post-order, children before their parent.

        Returns:
            The payloads of the removed nodes, in post-order.

        Raises:
            InvalidIndexError: If node is not live.
        """
        record = self._store.get(node)
        doomed = [index for edge, index in Traverse(self, node) if edge is Edge.LEAVE]
        self._unlink(node, record)
        payloads = [self._store.deallocate(index).data for index in doomed]
        logger.debug("removed subtree %r (%d nodes)", node, len(payloads))
        return payloads

    # ==================== Traversal ====================

    def ancestors(self, node: SlotIndex) -> Ancestors:
        """Parent up to the root, nearest first."""
        return Ancestors(self, node)

    def children(self, node: SlotIndex) -> Children:
        return Children(self, node)

    def reverse_children(self, node: SlotIndex) -> ReverseChildren:
        return ReverseChildren(self, node)

    def preceding_siblings(self, node: SlotIndex) -> PrecedingSiblings:
        return PrecedingSiblings(self, node)

    def following_siblings(self, node: SlotIndex) -> FollowingSiblings:
        return FollowingSiblings(self, node)

    def descendants(self, node: SlotIndex) -> Descendants:
        """node and its descendants in pre-order."""
        return Descendants(self, node)

    def traverse(self, node: SlotIndex) -> Traverse:
        """(Edge, index) events for a depth-first walk of node's subtree."""
        return Traverse(self, node)

    def reverse_traverse(self, node: SlotIndex) -> ReverseTraverse:
        """Like traverse(), visiting children last to first."""
        return ReverseTraverse(self, node)
