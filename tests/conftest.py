"""Shared pytest fixtures."""
from __future__ import annotations

from typing import Callable

import pytest

from .payloads import seal


@pytest.fixture
def sealer() -> Callable[[str], str]:
    return seal
