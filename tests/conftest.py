from __future__ import annotations

import pytest

from tests.fakes import InMemoryMenuStore


@pytest.fixture()
def store() -> InMemoryMenuStore:
    return InMemoryMenuStore()
