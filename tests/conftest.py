from __future__ import annotations

import pytest

from tests._helpers import START, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)
