# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Runtime defaults read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

ORPHAN_POLICIES = ('dangle', 'reparent', 'promote')

_LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def _parse_log_level(raw: str | None) -> int:
    if raw is None or raw.strip() == '':
        return logging.WARNING
    value = raw.strip().upper()
    if value not in _LOG_LEVELS:
        raise ValueError(f"Unsupported log level '{raw}'. Expected one of {_LOG_LEVELS}.")
    return getattr(logging, value)


def normalise_orphans(raw: str | None) -> str:
    """Return a valid orphan policy name, 'dangle' when unset.

    Raises:
        ValueError: If the name is not a known policy.
    """
    if raw is None or raw.strip() == '':
        return 'dangle'
    value = raw.strip().lower()
    if value not in ORPHAN_POLICIES:
        raise ValueError(f"Unsupported orphan policy '{raw}'. Expected one of {ORPHAN_POLICIES}.")
    return value


@dataclass(frozen=True)
class IndexTreeConfig:
    """Process-wide defaults.

    Attributes:
        log_level: Level applied to the package loggers.
        orphans: Default policy used by Arena.remove for the removed
            node's children.
    """

    log_level: int = logging.WARNING
    orphans: str = 'dangle'

    @classmethod
    def from_env(cls) -> IndexTreeConfig:
        return cls(
            log_level=_parse_log_level(os.getenv('GENRO_INDEXTREE_LOG_LEVEL')),
            orphans=normalise_orphans(os.getenv('GENRO_INDEXTREE_ORPHANS')),
        )


@lru_cache(maxsize=None)
def runtime_config() -> IndexTreeConfig:
    """Return the cached configuration built from the environment."""
    return IndexTreeConfig.from_env()


def reset_runtime_config() -> None:
    """Drop the cached configuration so the environment is read again."""
    runtime_config.cache_clear()
