import pytest

from helpers import SAMPLE_INPUT


@pytest.fixture
def sample_input() -> str:
    return SAMPLE_INPUT
