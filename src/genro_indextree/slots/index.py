# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""SlotIndex - a (position, generation) locator into a SlotStore."""

from __future__ import annotations

from typing import Any


class SlotIndex:
    """Identifies one allocation in a SlotStore.

    The position selects the slot; the generation tells this allocation
    apart from every other value that ever occupied the same position.
    Two indices are equal only if both fields match.

    Example:
        >>> SlotIndex(3, 1) == SlotIndex(3, 1)
        True
        >>> SlotIndex(3, 1) == SlotIndex(3, 2)
        False
    """

    __slots__ = ('_position', '_generation')

    def __init__(self, position: int, generation: int = 0) -> None:
        if position < 0 or generation < 0:
            raise ValueError(
                f"position and generation must be non-negative, got ({position}, {generation})"
            )
        self._position = position
        self._generation = generation

    @property
    def position(self) -> int:
        """Slot position inside the store."""
        return self._position

    @property
    def generation(self) -> int:
        """Generation of the slot when this index was issued."""
        return self._generation

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SlotIndex):
            return NotImplemented
        return self._position == other._position and self._generation == other._generation

    def __hash__(self) -> int:
        return hash((self._position, self._generation))

    def __repr__(self) -> str:
        return f"SlotIndex({self._position}, gen={self._generation})"
