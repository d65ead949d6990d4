from datetime import datetime

import pytest

from settings import Settings, get_settings, on_settings_changed


@pytest.fixture(autouse=True)
def restore_settings():
    """Every test starts and ends with the same settings"""
    previous = get_settings()
    yield
    on_settings_changed(previous)


@pytest.fixture
def short_style():
    on_settings_changed(Settings(default_timestamp_style="short"))


@pytest.fixture
def today():
    """Build a datetime for today at the given time, like short timestamps do"""

    def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
        return datetime.now().replace(hour=hour, minute=minute, second=second, microsecond=0)

    return at
