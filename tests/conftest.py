import pytest

from frankfurter.currency_registry import CurrencyRegistry


@pytest.fixture
def registry() -> CurrencyRegistry:
    """Isolated registry seeded with the default currencies."""
    return CurrencyRegistry()


@pytest.fixture(autouse=True)
def reset_shared_registry():
    """Restore the shared registry after each test."""
    yield
    CurrencyRegistry.get_instance().reset()
