# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IndexTree exceptions."""

from __future__ import annotations


class IndexTreeError(Exception):
    """Base exception for IndexTree errors."""

    pass


class InvalidIndexError(IndexTreeError, KeyError):
    """Raised when an index refers to a free, reused or unknown slot."""

    def __str__(self) -> str:
        # KeyError quotes its argument
        return str(self.args[0]) if self.args else ''


class CycleError(IndexTreeError, ValueError):
    """Raised when an edit would make a node its own ancestor."""

    pass


class SelfReferenceError(IndexTreeError, ValueError):
    """Raised when a node is used as its own sibling."""

    pass
