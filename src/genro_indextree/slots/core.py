# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SlotStore - A growable slot vector addressed by generational indices.

Every slot is either occupied (a value plus a generation) or free (a link
to the next free position plus a generation). Free slots form a LIFO list
whose head the store keeps; allocation pops the head or, when the list is
empty, appends a new slot with generation 0.

Deallocating bumps the slot's generation, so any SlotIndex issued for the
previous occupant no longer matches and is rejected by every lookup, even
after the position has been handed out again.

Example:
    >>> store = SlotStore()
    >>> a = store.allocate('a')
    >>> store.deallocate(a)
    'a'
    >>> b = store.allocate('b')
    >>> b.position == a.position, b == a
    (True, False)
    >>> store.get(a)
    Traceback (most recent call last):
    ...
    genro_indextree.exceptions.InvalidIndexError: ...
"""

from __future__ import annotations

from typing import Any, Iterator

from ..exceptions import InvalidIndexError
from ..logging import get_logger
from .index import SlotIndex

logger = get_logger('slots')


class _OccupiedSlot:
    __slots__ = ('value', 'generation')

    def __init__(self, value: Any, generation: int) -> None:
        self.value = value
        self.generation = generation


class _FreeSlot:
    __slots__ = ('next_free', 'generation')

    def __init__(self, next_free: int | None, generation: int) -> None:
        self.next_free = next_free
        self.generation = generation


class SlotStore:
    """A collection of values addressed by SlotIndex.

    SlotStore provides:
    - allocate(value) / deallocate(index): take and give back ownership
    - get(index) / store[index]: validated read access
    - replace(index, value) / store[index] = value: validated write access
    - iteration over occupied slots in storage order

    Attributes:
        capacity: Total number of slots, occupied or free. Never shrinks.
    """

    __slots__ = ('_slots', '_free_head', '_len')

    def __init__(self, capacity: int = 0) -> None:
        """Initialize a SlotStore.

        Args:
            capacity: Number of free slots to create up front.
        """
        self._slots: list[_OccupiedSlot | _FreeSlot] = []
        self._free_head: int | None = None
        self._len = 0
        if capacity:
            self.reserve(capacity)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"SlotStore(len={self._len}, capacity={len(self._slots)})"

    def __len__(self) -> int:
        """Return the number of occupied slots."""
        return self._len

    def __iter__(self) -> Iterator[Any]:
        """Iterate over stored values in storage order."""
        return self.iter_values()

    def __contains__(self, index: Any) -> bool:
        return self.contains(index)

    def __getitem__(self, index: SlotIndex) -> Any:
        return self._occupied(index).value

    def __setitem__(self, index: SlotIndex, value: Any) -> None:
        self._occupied(index).value = value

    def __eq__(self, other: Any) -> bool:
        """Equal when both hold equal values in the same storage order."""
        if not isinstance(other, SlotStore):
            return NotImplemented
        if self._len != other._len:
            return False
        return all(a == b for a, b in zip(self.iter_values(), other.iter_values()))

    @property
    def capacity(self) -> int:
        return len(self._slots)

    # ==================== Validation ====================

    def _occupied(self, index: SlotIndex) -> _OccupiedSlot:
        """Return the slot index points to, if it is still the same allocation.

        Raises:
            InvalidIndexError: If the position is out of range, the slot is
                free, or the slot's generation differs from the index's.
        """
        if not isinstance(index, SlotIndex):
            raise InvalidIndexError(f"{index!r} is not a SlotIndex")
        position = index.position
        if position >= len(self._slots):
            raise InvalidIndexError(
                f"{index!r} is out of range (capacity {len(self._slots)})"
            )
        slot = self._slots[position]
        if not isinstance(slot, _OccupiedSlot):
            raise InvalidIndexError(f"{index!r} refers to a free slot")
        if slot.generation != index.generation:
            raise InvalidIndexError(
                f"{index!r} is stale (slot is at generation {slot.generation})"
            )
        return slot

    def contains(self, index: Any) -> bool:
        """True if index is a SlotIndex for a live allocation in this store."""
        if not isinstance(index, SlotIndex):
            return False
        try:
            self._occupied(index)
            return True
        except InvalidIndexError:
            return False

    # ==================== Core API ====================

    def reserve(self, additional: int) -> None:
        """Append `additional` free slots.

        The new slots are linked so that the lowest new position is handed
        out first, ahead of slots freed earlier.
        """
        if additional < 0:
            raise ValueError(f"additional must be non-negative, got {additional}")
        if additional == 0:
            return
        start = len(self._slots)
        end = start + additional
        for position in range(start, end - 1):
            self._slots.append(_FreeSlot(position + 1, 0))
        self._slots.append(_FreeSlot(self._free_head, 0))
        self._free_head = start
        logger.debug("reserved %d slots, capacity now %d", additional, end)

    def allocate(self, value: Any) -> SlotIndex:
        """Store value and return the index that addresses it.

        Reuses the head of the free list if there is one, keeping the
        generation the slot received when it was freed. Otherwise appends
        a new slot at generation 0.
        """
        position = self._free_head
        if position is None:
            position = len(self._slots)
            self._slots.append(_OccupiedSlot(value, 0))
            generation = 0
        else:
            slot = self._slots[position]
            if not isinstance(slot, _FreeSlot):
                raise RuntimeError(f"free list head {position} is occupied")
            self._free_head = slot.next_free
            generation = slot.generation
            self._slots[position] = _OccupiedSlot(value, generation)
        self._len += 1
        return SlotIndex(position, generation)

    def deallocate(self, index: SlotIndex) -> Any:
        """Free the slot index points to and return its value.

        Raises:
            InvalidIndexError: If index is not a live allocation.
        """
        slot = self._occupied(index)
        self._slots[index.position] = _FreeSlot(self._free_head, slot.generation + 1)
        self._free_head = index.position
        self._len -= 1
        return slot.value

    def get(self, index: SlotIndex) -> Any:
        """Return the value stored at index.

        Raises:
            InvalidIndexError: If index is not a live allocation.
        """
        return self._occupied(index).value

    def get_mut(self, index: SlotIndex) -> Any:
        """Return the stored object for in-place mutation.

        Same validation as get(). Callers mutating the store must hold
        exclusive access to it.
        """
        return self._occupied(index).value

    def replace(self, index: SlotIndex, value: Any) -> Any:
        """Store value at index and return the previous value.

        Raises:
            InvalidIndexError: If index is not a live allocation.
        """
        slot = self._occupied(index)
        old, slot.value = slot.value, value
        return old

    def is_empty(self) -> bool:
        return self._len == 0

    def clear(self) -> None:
        """Free every slot.

        Occupied slots get their generation bumped, so indices issued
        before the call stay invalid. Capacity is kept.
        """
        count = len(self._slots)
        for position, slot in enumerate(self._slots):
            generation = slot.generation + 1 if isinstance(slot, _OccupiedSlot) else slot.generation
            next_free = position + 1 if position + 1 < count else None
            self._slots[position] = _FreeSlot(next_free, generation)
        self._free_head = 0 if count else None
        self._len = 0

    # ==================== Iteration ====================

    def iter_items(self) -> Iterator[tuple[SlotIndex, Any]]:
        """Yield (index, value) for occupied slots in storage order."""
        for position, slot in enumerate(self._slots):
            if isinstance(slot, _OccupiedSlot):
                yield SlotIndex(position, slot.generation), slot.value

    def iter_indices(self) -> Iterator[SlotIndex]:
        """Yield indices of occupied slots in storage order."""
        for index, _value in self.iter_items():
            yield index

    def iter_values(self) -> Iterator[Any]:
        """Yield values of occupied slots in storage order."""
        for slot in self._slots:
            if isinstance(slot, _OccupiedSlot):
                yield slot.value
