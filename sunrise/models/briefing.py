"""Briefing data models: immutable per-request snapshots."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TrafficData:
    commute_time: int  # minutes, includes delay
    delay: int  # minutes
    destination: str
    suggestion: str | None = None
    note: str | None = None
    simulated: bool = False


@dataclass(frozen=True)
class WeatherData:
    temperature: int  # Celsius
    condition: str
    location: str
    simulated: bool = False


@dataclass(frozen=True)
class NewsHeadline:
    id: str  # article URL
    title: str
    source: str


@dataclass(frozen=True)
class MotivationalQuote:
    quote: str
    author: str


@dataclass(frozen=True)
class BriefingData:
    weather: WeatherData
    traffic: TrafficData
    news: tuple[NewsHeadline, ...]
    generated_at: str


@dataclass(frozen=True)
class AlarmBriefing:
    briefing: BriefingData
    quote: MotivationalQuote
    alarm_time: str  # HH:MM as set
    adjusted_alarm_time: str  # HH:MM, moved earlier by the traffic delay


@dataclass(frozen=True)
class AddressValidation:
    is_valid: bool
    formatted_address: str | None = None


@dataclass(frozen=True)
class MusicTrack:
    name: str
    artist: str
    url: str
