"""Output formatters for alarm briefings."""

import json
from dataclasses import asdict

from sunrise.models.briefing import AlarmBriefing


def format_briefing_text(a: AlarmBriefing) -> str:
    """Plain text briefing for the terminal."""
    b = a.briefing
    lines = [f"=== Good Morning | Alarm {a.adjusted_alarm_time} ==="]
    if a.adjusted_alarm_time != a.alarm_time:
        lines.append(
            f"Alarm moved from {a.alarm_time} for a {b.traffic.delay} min traffic delay"
        )
    lines.append(
        f"Weather: {b.weather.temperature}°C, {b.weather.condition} in {b.weather.location}"
    )
    lines.append(
        f"Commute to {b.traffic.destination}: {b.traffic.commute_time} min "
        f"({b.traffic.delay} min delay)"
    )
    if b.traffic.suggestion:
        lines.append(f"  {b.traffic.suggestion}")
    elif b.traffic.note:
        lines.append(f"  {b.traffic.note}")
    if b.news:
        lines.append("Headlines:")
        for h in b.news:
            lines.append(f"  - {h.title} ({h.source})")
    lines.append(f'"{a.quote.quote}" - {a.quote.author}')
    return "\n".join(lines)


def format_briefing_json(a: AlarmBriefing) -> str:
    """JSON briefing for programmatic consumption."""
    return json.dumps(asdict(a), indent=2, ensure_ascii=False)


def format_briefing_chat(a: AlarmBriefing) -> str:
    """Chat-friendly markdown briefing."""
    b = a.briefing
    lines = [
        f"**Good Morning** | Alarm {a.adjusted_alarm_time}",
        f"- Weather: {b.weather.temperature}°C, {b.weather.condition}",
        f"- Commute: {b.traffic.commute_time} min to {b.traffic.destination}"
        + (f", {b.traffic.delay} min delay" if b.traffic.delay else ""),
    ]
    if b.traffic.suggestion or b.traffic.note:
        lines.append(f"- _{b.traffic.suggestion or b.traffic.note}_")
    for h in b.news:
        lines.append(f"- [{h.title}]({h.id}) ({h.source})")
    lines.append(f"> {a.quote.quote} ({a.quote.author})")
    return "\n".join(lines)
