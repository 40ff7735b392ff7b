import pytest

from marshalkit import reset_settings
from marshalkit.utils import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    # Every test starts from default settings and empty caches
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture()
def meeting_raw():
    return {
        "title": "Planning",
        "starts_at": "02.03.2024 10:30",
        "ends_at": "2024-03-02 11:30:00",
        "location": "B2",
    }
