"""Prompt assembly for the creator chat assistant.

Turns the trailing window of a session plus snapshots from the dataset
provider into a single prompt string. The session keeps its full history;
only the last ``HISTORY_WINDOW`` messages are sent to the model.
"""

from typing import List

from afrisight.chat.models import ChatSession, Message
from afrisight.datasets.provider import DatasetProvider
from afrisight.utils.formatting import format_number, unique_in_order

HISTORY_WINDOW = 10

CHAT_SUGGESTIONS = [
    "Ask about music trends and artist strategies",
    "Get business market analysis and entrepreneurship advice",
    "Explore content creation and platform optimization",
    "Request cross-industry collaboration ideas",
    "Analyze monetization strategies across all verticals",
    "Get personalized insights for your creator type",
]

DATA_TYPES = ["music", "business", "content", "events"]
CONTENT_FORMATS = ["short-form", "medium-form", "long-form"]

CHAT_PROMPT_TEMPLATE = """
AFRISIGHT CREATOR AI ASSISTANT

USER TYPE: {creator_type_upper}
CONVERSATION HISTORY:
{history}

DATA OVERVIEW:
Music:
- Concerts: {concert_programs}
- Spotify Afro Tracks: {afro_tracks}
- YouTube Videos: {youtube_tracks}
Top Tracks:
{top_afro}
Top YouTube:
{top_youtube}

Business:
- Cases: {business_records}
- Market Value: ${market_value}
- Top Category: {top_category}
Top Performers:
{top_business}

Content:
- Pieces: {total_movies}
- Avg Length: {average_runtime:.1f} min
- Short: {short}, Medium: {medium}, Long: {long}

CROSS-INDUSTRY INSIGHTS:
- Music: High-energy tracks trend
- Business: Category success varies
- Content: {content_trend}

SYSTEM CAPABILITIES:
- Music, business, content, and cross-industry insights
- Trend analysis, recommendations, and strategies
- Multi-platform growth and monetization advice
- Versatility, do not rely on only the available data sources
USER QUESTION: {question}

Provide concise, actionable, data-driven insights for {creator_type} creators. \
Reference relevant data and trends. Build on previous conversation context. \
Offer endpoint suggestions for deeper analysis if needed.
"""


def format_history(messages: List[Message]) -> str:
    """Render messages as ``role: content`` lines."""
    return "\n".join(f"{m.role}: {m.content}" for m in messages)


def build_chat_prompt(
    session: ChatSession,
    datasets: DatasetProvider,
    creator_type: str,
    question: str,
) -> str:
    """Build the full chat prompt for one turn.

    Args:
        session: Session whose trailing window is included
        datasets: Source of statistics and top-N records
        creator_type: Caller's creator type from the token
        question: Latest user message

    Returns:
        Prompt string for the generative text gateway
    """
    stats = datasets.get_data_stats()
    business = datasets.business_stats()
    movies = datasets.movie_stats()
    dist = movies.runtime_distribution

    top_afro = "\n".join(
        f'{i}. "{t.name}" by {t.artist} (Popularity: {format_number(t.popularity)}, '
        f"Energy: {t.energy})"
        for i, t in enumerate(datasets.top_afro_tracks(3), start=1)
    )
    top_youtube = "\n".join(
        f'{i}. "{t.track}" by {t.artist} (Views: {format_number(t.views)})'
        for i, t in enumerate(datasets.top_youtube_tracks(3), start=1)
    )
    top_business = "\n".join(
        f"{i}. {b.product_type} (${format_number(b.total_net_sales)})"
        for i, b in enumerate(datasets.top_business_sales(3), start=1)
    )

    return CHAT_PROMPT_TEMPLATE.format(
        creator_type=creator_type,
        creator_type_upper=creator_type.upper(),
        history=format_history(session.get_recent_messages(HISTORY_WINDOW)),
        concert_programs=stats.concert_programs,
        afro_tracks=stats.spotify_afro_tracks,
        youtube_tracks=stats.spotify_youtube_tracks,
        top_afro=top_afro,
        top_youtube=top_youtube,
        business_records=business.total_records,
        market_value=format_number(business.total_net_sales),
        top_category=business.top_product_type,
        top_business=top_business,
        total_movies=movies.total_movies,
        average_runtime=movies.average_runtime,
        short=dist.short,
        medium=dist.medium,
        long=dist.long,
        content_trend="Short-form dominates" if dist.short > dist.medium else "Medium-form preferred",
        question=question,
    )


def referenced_artists(datasets: DatasetProvider, n: int = 5) -> List[str]:
    """Distinct artists among the top ``n`` Afro and YouTube tracks."""
    afro = [t.artist for t in datasets.top_afro_tracks(n)]
    youtube = [t.artist for t in datasets.top_youtube_tracks(n)]
    return unique_in_order(afro + youtube)
