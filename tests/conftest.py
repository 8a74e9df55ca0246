import pytest

from neuroglow_core.config import AnimationConfig
from tests.helpers import StubRng


@pytest.fixture
def stub_rng():
    return StubRng()


@pytest.fixture
def quiet_config():
    """Config with no spontaneous input firing."""
    return AnimationConfig(input_activation_probability=0.0)
