import pytest

from courtside.core.config import _reset_settings_cache_for_tests


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch):
    monkeypatch.setenv("OPTICODDS_API_KEY", "TEST_KEY")
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()
