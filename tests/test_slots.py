# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for SlotIndex and SlotStore."""

import pytest

from genro_indextree import InvalidIndexError, SlotIndex, SlotStore


class TestSlotIndex:
    """Tests for SlotIndex."""

    def test_fields(self):
        """Test position and generation accessors."""
        idx = SlotIndex(4, 2)
        assert idx.position == 4
        assert idx.generation == 2

    def test_equality_needs_both_fields(self):
        """Test indices are equal only when both fields match."""
        assert SlotIndex(1, 0) == SlotIndex(1, 0)
        assert SlotIndex(1, 0) != SlotIndex(1, 1)
        assert SlotIndex(1, 0) != SlotIndex(2, 0)
        assert SlotIndex(1, 0) != (1, 0)

    def test_hashable(self):
        """Test indices work as dict keys."""
        seen = {SlotIndex(1, 0): 'a'}
        assert seen[SlotIndex(1, 0)] == 'a'
        assert SlotIndex(1, 1) not in seen

    def test_repr(self):
        """Test string representation shows both fields."""
        assert repr(SlotIndex(3, 7)) == 'SlotIndex(3, gen=7)'

    def test_negative_rejected(self):
        """Test negative fields raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            SlotIndex(-1)


class TestSlotStoreBasic:
    """Basic allocate/get/deallocate tests."""

    def test_empty_store(self):
        """Test a new store is empty."""
        store = SlotStore()
        assert len(store) == 0
        assert store.is_empty()
        assert store.capacity == 0

    def test_allocate_then_get(self):
        """Test allocate followed by get returns the value."""
        store = SlotStore()
        idx = store.allocate('foo')
        assert store.get(idx) == 'foo'
        assert store[idx] == 'foo'
        assert idx == SlotIndex(0, 0)
        assert len(store) == 1

    def test_deallocate_returns_last_value(self):
        """Test deallocate returns what was last stored."""
        store = SlotStore()
        idx = store.allocate('foo')
        store[idx] = 'bar'
        assert store.deallocate(idx) == 'bar'
        assert len(store) == 0

    def test_get_mut_returns_stored_object(self):
        """Test get_mut gives the stored object for in-place changes."""
        store = SlotStore()
        idx = store.allocate([1])
        store.get_mut(idx).append(2)
        assert store.get(idx) == [1, 2]

    def test_replace_returns_previous(self):
        """Test replace swaps the value and returns the old one."""
        store = SlotStore()
        idx = store.allocate('old')
        assert store.replace(idx, 'new') == 'old'
        assert store[idx] == 'new'

    def test_contains(self):
        """Test membership of live, dead and foreign values."""
        store = SlotStore()
        idx = store.allocate('a')
        assert idx in store
        assert store.contains(idx)
        assert 'a' not in store
        assert SlotIndex(5) not in store
        store.deallocate(idx)
        assert idx not in store


class TestSlotStoreGenerations:
    """Tests for stale index detection."""

    def test_deallocated_index_rejected(self):
        """Test every access through a freed index fails."""
        store = SlotStore()
        idx = store.allocate('a')
        store.deallocate(idx)
        with pytest.raises(InvalidIndexError, match="free slot"):
            store.get(idx)
        with pytest.raises(InvalidIndexError):
            store.get_mut(idx)
        with pytest.raises(InvalidIndexError):
            store.replace(idx, 'b')
        with pytest.raises(InvalidIndexError):
            store.deallocate(idx)

    def test_reused_slot_rejects_old_index(self):
        """Test a reused position does not resolve the old index."""
        store = SlotStore()
        old = store.allocate('old')
        store.deallocate(old)
        new = store.allocate('new')
        assert new.position == old.position
        assert new.generation == old.generation + 1
        assert store[new] == 'new'
        with pytest.raises(InvalidIndexError, match="stale"):
            store.get(old)

    def test_out_of_range_rejected(self):
        """Test an index past the capacity fails."""
        store = SlotStore()
        store.allocate('a')
        with pytest.raises(InvalidIndexError, match="out of range"):
            store.get(SlotIndex(3))

    def test_non_index_rejected(self):
        """Test values that are not a SlotIndex fail with InvalidIndexError."""
        store = SlotStore()
        store.allocate('a')
        for bad in (None, 0, 'x', (0, 0)):
            with pytest.raises(InvalidIndexError, match="not a SlotIndex"):
                store.get(bad)
            with pytest.raises(InvalidIndexError):
                store.deallocate(bad)
        assert len(store) == 1

    def test_invalid_index_is_key_error(self):
        """Test InvalidIndexError can be caught as KeyError."""
        store = SlotStore()
        with pytest.raises(KeyError):
            store[SlotIndex(0)]

    def test_generation_grows_on_each_free(self):
        """Test the generation counts occupied-to-free transitions."""
        store = SlotStore()
        for expected in range(4):
            idx = store.allocate(expected)
            assert idx == SlotIndex(0, expected)
            store.deallocate(idx)


class TestSlotStoreFreeList:
    """Tests for slot reuse and growth."""

    def test_free_list_is_lifo(self):
        """Test the most recently freed slot is reused first."""
        store = SlotStore()
        a = store.allocate('a')
        store.allocate('b')
        c = store.allocate('c')
        store.deallocate(a)
        store.deallocate(c)
        assert store.allocate('x').position == c.position
        assert store.allocate('y').position == a.position
        assert store.allocate('z').position == 3
        assert store.capacity == 4

    def test_capacity_preallocates_in_order(self):
        """Test reserved slots are handed out lowest position first."""
        store = SlotStore(capacity=3)
        assert store.capacity == 3
        assert len(store) == 0
        positions = [store.allocate(n).position for n in range(3)]
        assert positions == [0, 1, 2]
        assert store.capacity == 3

    def test_reserve_keeps_earlier_free_slots(self):
        """Test slots freed before reserve() are still reused."""
        store = SlotStore()
        a = store.allocate('a')
        store.deallocate(a)
        store.reserve(2)
        positions = [store.allocate(n).position for n in range(4)]
        assert positions == [1, 2, 0, 3]

    def test_reserve_negative_rejected(self):
        """Test reserve() with a negative count raises ValueError."""
        with pytest.raises(ValueError):
            SlotStore().reserve(-1)

    def test_capacity_never_shrinks(self):
        """Test freeing slots keeps the capacity."""
        store = SlotStore()
        indices = [store.allocate(n) for n in range(5)]
        for idx in indices:
            store.deallocate(idx)
        assert store.capacity == 5
        assert store.is_empty()

    def test_clear_invalidates_everything(self):
        """Test clear() frees all slots and rejects old indices."""
        store = SlotStore()
        a = store.allocate('a')
        b = store.allocate('b')
        store.clear()
        assert len(store) == 0
        assert store.capacity == 2
        assert a not in store
        assert b not in store
        again = store.allocate('again')
        assert again == SlotIndex(0, 1)


class TestSlotStoreIteration:
    """Tests for iteration and comparison."""

    def test_iteration_skips_free_slots(self):
        """Test iteration follows storage order over occupied slots."""
        store = SlotStore()
        a = store.allocate('a')
        b = store.allocate('b')
        c = store.allocate('c')
        store.deallocate(b)
        assert list(store) == ['a', 'c']
        assert list(store.iter_indices()) == [a, c]
        assert list(store.iter_items()) == [(a, 'a'), (c, 'c')]

    def test_iteration_reports_current_generation(self):
        """Test indices yielded by iteration are live."""
        store = SlotStore()
        store.deallocate(store.allocate('a'))
        idx = store.allocate('b')
        assert list(store.iter_indices()) == [idx]

    def test_equality(self):
        """Test stores compare by values in storage order."""
        left, right = SlotStore(), SlotStore()
        for value in ('a', 'b'):
            left.allocate(value)
            right.allocate(value)
        assert left == right
        right.allocate('c')
        assert left != right
