# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Package logging utilities that honour `IndexTreeConfig`."""

from __future__ import annotations

import logging

from . import config as ix_config


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger configured according to the runtime configuration."""
    logger_name = 'genro_indextree' if name is None else f'genro_indextree.{name}'
    logger = logging.getLogger(logger_name)
    logger.setLevel(ix_config.runtime_config().log_level)
    return logger
