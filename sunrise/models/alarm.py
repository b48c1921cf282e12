"""Alarm settings submitted from the setup form, and alarm-time arithmetic."""

import re

from pydantic import BaseModel, Field, field_validator

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
MINUTES_PER_DAY = 24 * 60


class AlarmSettings(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    time: str = Field(description="Wake time, 24h HH:MM")
    home: str = Field(min_length=1)
    destination: str = Field(min_length=1)
    alarm_sound: str = "classic"
    weather_location: str = ""

    @field_validator("time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        v = v.strip()
        parse_hhmm(v)
        return v

    @property
    def effective_weather_location(self) -> str:
        """Weather is looked up at home unless a location was given."""
        return self.weather_location.strip() or self.home


def parse_hhmm(value: str) -> int:
    """Parse 'HH:MM' into minutes after midnight."""
    m = _HHMM.match(value.strip())
    if m is None:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return int(m.group(1)) * 60 + int(m.group(2))


def format_hhmm(minutes: int) -> str:
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def adjust_alarm_time(alarm_time: str, delay_minutes: int) -> str:
    """Move the alarm earlier by the traffic delay, wrapping past midnight."""
    return format_hhmm(parse_hhmm(alarm_time) - max(0, delay_minutes))
