from __future__ import annotations

import pytest

from fakes import FakeProvider


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider()
