"""Default news queries and the fixed fallback values clients degrade to."""

from sunrise.config.schema import NewsQuery
from sunrise.models.briefing import MotivationalQuote, NewsHeadline

DEFAULT_NEWS_QUERIES: list[NewsQuery] = [
    NewsQuery(category="technology"),
    NewsQuery(category="entertainment", q="movies"),
    NewsQuery(q="Kerala"),
]

SAMPLE_HEADLINES: tuple[NewsHeadline, ...] = (
    NewsHeadline(
        id="sample://tech-ai-breakthrough",
        title="Tech Giant Announces New AI Breakthrough",
        source="Tech News",
    ),
    NewsHeadline(
        id="sample://markets-economic-data",
        title="Global Markets React to Economic Data",
        source="Finance Times",
    ),
    NewsHeadline(
        id="sample://coffee-productivity",
        title="New Study on Coffee and Productivity Released",
        source="Science Daily",
    ),
)

FALLBACK_TEMPERATURE_C = 18
FALLBACK_CONDITION = "Clear Skies (Simulated)"

DEFAULT_DESTINATION_LABEL = "Workville"
DEFAULT_LOCATION_LABEL = "Unknown"

# Generated quote was flagged non-positive
NON_POSITIVE_QUOTE = MotivationalQuote(
    quote="Every morning is a new beginning. Take a deep breath, smile, and start again.",
    author="Sunrise Navigator",
)

# Generation failed outright
GENERATION_FAILED_QUOTE = MotivationalQuote(
    quote="The secret of getting ahead is getting started.",
    author="Mark Twain",
)

GENERATED_QUOTE_AUTHOR = "AI Assistant"
