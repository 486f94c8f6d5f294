import pytest


@pytest.fixture(autouse=True)
def no_decimal_env(monkeypatch):
    """Keep a MON_DECIMAL_POINT from the shell out of the tests."""
    monkeypatch.delenv('MON_DECIMAL_POINT', raising=False)
