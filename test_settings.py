import pytest
from pydantic import ValidationError

from settings import Settings, get_settings, load_settings, on_settings_changed


def test_defaults(monkeypatch):
    for name in (
        "PUNCH_CLOCK_TIMESTAMP_STYLE",
        "PUNCH_CLOCK_BLOCK_TEMPLATE",
        "PUNCH_CLOCK_JOURNAL_DATE_FORMAT",
        "PUNCH_CLOCK_REFRESH_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()
    assert settings.default_timestamp_style == "long"
    assert settings.block_template == "{{{time-recorder}}}"
    assert settings.journal_date_format == "%Y-%m-%d"
    assert settings.refresh_seconds == 10


def test_load_from_environment(monkeypatch):
    monkeypatch.setenv("PUNCH_CLOCK_TIMESTAMP_STYLE", "short")
    monkeypatch.setenv("PUNCH_CLOCK_BLOCK_TEMPLATE", "{{{today}}} {{{time-recorder}}}")
    monkeypatch.setenv("PUNCH_CLOCK_REFRESH_SECONDS", "2.5")

    settings = load_settings()
    assert settings.default_timestamp_style == "short"
    assert settings.block_template == "{{{today}}} {{{time-recorder}}}"
    assert settings.refresh_seconds == 2.5


@pytest.mark.parametrize(
    "name,value",
    [
        ("PUNCH_CLOCK_TIMESTAMP_STYLE", "medium"),
        ("PUNCH_CLOCK_REFRESH_SECONDS", "0"),
        ("PUNCH_CLOCK_REFRESH_SECONDS", "soon"),
    ],
)
def test_invalid_environment(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        load_settings()


def test_settings_changed():
    new_settings = Settings(default_timestamp_style="short")
    on_settings_changed(new_settings)
    assert get_settings() is new_settings
