import pytest

from propbind.core.inject import InjectorRegistry

from sample_models import Color


@pytest.fixture
def registry():
    return InjectorRegistry()


@pytest.fixture
def color():
    return Color
