"""
User settings for the punch clock, read from the environment (and .env)
"""

import logging
import os

from pydantic import BaseModel, Field

from timestamps import TimestampStyle

logger = logging.getLogger(__name__)

TIME_RECORDER_PLACEHOLDER = "{{{time-recorder}}}"
TODAY_PLACEHOLDER = "{{{today}}}"


class Settings(BaseModel):
    default_timestamp_style: TimestampStyle = Field(
        "long",
        description="Use short (HH:MM) or long (ISO) timestamps by default. Use 'long' to track time across days.",
    )
    block_template: str = Field(
        TIME_RECORDER_PLACEHOLDER,
        description=(
            f"Template for a new time recorder block. {TIME_RECORDER_PLACEHOLDER} inserts the recorder, "
            f"{TODAY_PLACEHOLDER} a link to today's journal page."
        ),
    )
    journal_date_format: str = Field("%Y-%m-%d", description="strftime format of journal page names.")
    refresh_seconds: float = Field(10.0, gt=0, description="Refresh interval of a running timer view.")


_settings = Settings()


def load_settings() -> Settings:
    """Build settings from PUNCH_CLOCK_* environment variables, falling back to defaults."""
    defaults = Settings()
    return Settings(
        default_timestamp_style=os.getenv("PUNCH_CLOCK_TIMESTAMP_STYLE", defaults.default_timestamp_style),
        block_template=os.getenv("PUNCH_CLOCK_BLOCK_TEMPLATE", defaults.block_template),
        journal_date_format=os.getenv("PUNCH_CLOCK_JOURNAL_DATE_FORMAT", defaults.journal_date_format),
        refresh_seconds=os.getenv("PUNCH_CLOCK_REFRESH_SECONDS", defaults.refresh_seconds),
    )


def on_settings_changed(new_settings: Settings) -> None:
    global _settings
    logger.info("Settings changed: %s", new_settings)
    _settings = new_settings


def get_settings() -> Settings:
    return _settings
