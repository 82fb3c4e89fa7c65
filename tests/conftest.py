import pytest

from tests.helpers import FakeFrontend


@pytest.fixture
def fake() -> FakeFrontend:
    return FakeFrontend()
