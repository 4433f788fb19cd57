# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

import pytest

from genro_indextree import Arena, reset_runtime_config

from tests.helpers import build_sample


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch):
    """Run every test against the default environment."""
    monkeypatch.delenv('GENRO_INDEXTREE_LOG_LEVEL', raising=False)
    monkeypatch.delenv('GENRO_INDEXTREE_ORPHANS', raising=False)
    reset_runtime_config()
    yield
    reset_runtime_config()


@pytest.fixture
def tree():
    """R[A[A1, A2], B, C] in a fresh arena."""
    return build_sample(Arena())
