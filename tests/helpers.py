# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared helpers for IndexTree tests."""

from types import SimpleNamespace

from genro_indextree import Arena


def build_sample(arena=None):
    """Build R[A[A1, A2], B, C] and return the indices by name."""
    arena = arena if arena is not None else Arena()
    t = SimpleNamespace(arena=arena)
    for name in ('R', 'A', 'A1', 'A2', 'B', 'C'):
        setattr(t, name, arena.new_node(name))
    arena.append_child(t.R, t.A)
    arena.append_child(t.R, t.B)
    arena.append_child(t.R, t.C)
    arena.append_child(t.A, t.A1)
    arena.append_child(t.A, t.A2)
    return t


def names(arena, indices):
    return [arena.data(i) for i in indices]


def snapshot(arena):
    """Return every live node's payload and links, keyed by index."""
    return {
        index: (
            node.data, node.parent, node.first_child, node.last_child,
            node.previous_sibling, node.next_sibling,
        )
        for index, node in arena.iter_pairs()
    }


def check_links(arena):
    """Assert the linkage invariants for every live node."""
    live = dict(arena.iter_pairs())
    for index, node in live.items():
        # child chain agrees in both directions and with the parent link
        chain = []
        previous = None
        current = node.first_child
        while current is not None:
            assert current in live, f"{index!r} links to dead child {current!r}"
            child = live[current]
            assert child.parent == index
            assert child.previous_sibling == previous
            chain.append(current)
            assert len(chain) <= len(live), "child chain loops"
            previous, current = current, child.next_sibling
        assert node.last_child == previous
        assert (node.first_child is None) == (node.last_child is None)

        parent = arena.parent(index)
        if parent is not None:
            assert list(arena.children(parent)).count(index) == 1

        for link in (node.previous_sibling, node.next_sibling):
            assert link is None or link in live
        if node.next_sibling is not None:
            assert live[node.next_sibling].previous_sibling == index
        if node.previous_sibling is not None:
            assert live[node.previous_sibling].next_sibling == index

        ancestors = list(arena.ancestors(index))
        assert index not in ancestors
        assert len(ancestors) < len(live)
