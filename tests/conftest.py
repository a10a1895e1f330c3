"""
Shared pytest fixtures for the workout engine tests.
"""
import pytest

from backend.core.catalog import load_catalog
from backend.core.random_source import SeededRandomSource
from backend.settings import Settings


@pytest.fixture(scope="session")
def catalog():
    """The shipped exercise catalog (immutable, safe to share)."""
    return load_catalog()


@pytest.fixture
def rng():
    """Deterministic random source."""
    return SeededRandomSource(1234)


@pytest.fixture
def settings():
    """Test settings, isolated from .env files."""
    return Settings(environment="test", _env_file=None)
