"""Tests for briefing formatters."""

import json

from sunrise.models.briefing import (
    AlarmBriefing,
    BriefingData,
    MotivationalQuote,
    NewsHeadline,
    TrafficData,
    WeatherData,
)
from sunrise.reporting.formatters import (
    format_briefing_chat,
    format_briefing_json,
    format_briefing_text,
)


def _make_briefing(
    delay: int = 15, suggestion: str | None = "Leave early", note: str | None = None
) -> AlarmBriefing:
    return AlarmBriefing(
        briefing=BriefingData(
            weather=WeatherData(temperature=18, condition="Clear Skies (Simulated)", location="Tokyo"),
            traffic=TrafficData(
                commute_time=45, delay=delay, destination="1 Market St", suggestion=suggestion,
                note=note,
            ),
            news=(
                NewsHeadline(id="https://n.example.com/1", title="First", source="Wire"),
                NewsHeadline(id="https://n.example.com/2", title="Second", source="Daily"),
            ),
            generated_at="2026-10-18T05:00:00+00:00",
        ),
        quote=MotivationalQuote(quote="Onward.", author="AI Assistant"),
        alarm_time="07:00",
        adjusted_alarm_time="06:45" if delay else "07:00",
    )


class TestFormatters:
    def test_text(self):
        text = format_briefing_text(_make_briefing())
        assert "Alarm 06:45" in text
        assert "moved from 07:00" in text
        assert "18°C, Clear Skies (Simulated) in Tokyo" in text
        assert "45 min (15 min delay)" in text
        assert "Leave early" in text
        assert "- First (Wire)" in text
        assert '"Onward." - AI Assistant' in text

    def test_text_no_delay(self):
        text = format_briefing_text(_make_briefing(delay=0, suggestion=None))
        assert "moved from" not in text
        assert "Leave early" not in text

    def test_json_roundtrips(self):
        data = json.loads(format_briefing_json(_make_briefing()))
        assert data["adjusted_alarm_time"] == "06:45"
        assert data["briefing"]["traffic"]["delay"] == 15
        assert len(data["briefing"]["news"]) == 2
        assert data["quote"]["author"] == "AI Assistant"

    def test_chat(self):
        text = format_briefing_chat(_make_briefing())
        assert text.startswith("**Good Morning** | Alarm 06:45")
        assert "[First](https://n.example.com/1)" in text
        assert "15 min delay" in text
        assert "> Onward. (AI Assistant)" in text

    def test_slow_note_shown_without_suggestion(self):
        note = "Traffic is a bit slow this morning (7 min delay)."
        a = _make_briefing(delay=7, suggestion=None, note=note)
        assert note in format_briefing_text(a)
        assert f"- _{note}_" in format_briefing_chat(a)
