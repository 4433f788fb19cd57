# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-IndexTree - Arena-backed trees addressed by generational indices.

A lightweight, zero-dependency library providing trees whose nodes live in
an arena and are referenced by (position, generation) indices, so that a
reference to a removed node is always detected (Genro Kyō ecosystem).
"""

__version__ = "0.1.0"

from .arena import Arena
from .config import IndexTreeConfig, reset_runtime_config, runtime_config
from .exceptions import (
    CycleError,
    IndexTreeError,
    InvalidIndexError,
    SelfReferenceError,
)
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
    TraverseRun,
)

__all__ = [
    # Core classes
    "Arena",
    "IndexTreeNode",
    # Slot store
    "SlotIndex",
    "SlotStore",
    # Traversal
    "Edge",
    "Ancestors",
    "Children",
    "ReverseChildren",
    "PrecedingSiblings",
    "FollowingSiblings",
    "Descendants",
    "Traverse",
    "TraverseRun",
    "ReverseTraverse",
    # Configuration
    "IndexTreeConfig",
    "runtime_config",
    "reset_runtime_config",
    # Exceptions
    "IndexTreeError",
    "InvalidIndexError",
    "CycleError",
    "SelfReferenceError",
]
