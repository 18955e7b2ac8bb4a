"""Shared test fixtures."""
import pytest
import structlog

from number_mask.config import get_settings
from number_mask.formatting.number_format import NumberFormatter
from tests.factories import make_options


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def options():
    return make_options()


@pytest.fixture
def formatter(options):
    return NumberFormatter(options)


@pytest.fixture
def typing_formatter(options):
    return NumberFormatter(options).clean(False)
