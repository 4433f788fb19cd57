# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Generational slot store.

This package provides the storage layer under the Arena:
- index: SlotIndex, the (position, generation) locator
- core: SlotStore, a growable slot vector with a free list

Example:
    >>> from genro_indextree.slots import SlotStore
    >>> store = SlotStore()
    >>> idx = store.allocate('foo')
    >>> store[idx]
    'foo'
    >>> store.deallocate(idx)
    'foo'
    >>> idx in store
    False
"""

from .core import SlotStore
from .index import SlotIndex

__all__ = ["SlotStore", "SlotIndex"]
