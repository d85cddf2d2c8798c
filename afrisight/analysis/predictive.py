"""Prompt-driven trend, artist, genre and creator analysis.

Each ``generate_*`` method renders dataset statistics into a prompt, sends
it through the generative text gateway and, for the trend analysis, parses
the free-text answer back into labelled lists.
"""

import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from afrisight.analysis import prompts
from afrisight.analysis.models import (
    BusinessTrends,
    ContentStrategy,
    CreatorInsights,
    DataUsed,
    GenreProfile,
    MusicSummary,
    PredictiveInsights,
    TrendAnalysis,
)
from afrisight.datasets.models import SpotifyAfroTrack
from afrisight.datasets.provider import DatasetProvider
from afrisight.errors import NotFoundError
from afrisight.genai.gateway import GenerativeTextGateway
from afrisight.utils.formatting import format_number, level_label, mean, tempo_label, unique_in_order
from afrisight.utils.logger import LoggerManager

MAX_SECTION_ITEMS = 7
MIN_ITEM_LENGTH = 10
RECENT_RELEASE_CUTOFF = "2020-01-01"

_LIST_ITEM = re.compile(r"^\d+\.?\s*(.+)|^[-•*]\s*(.+)|^(.+)$")

logger = LoggerManager.get_logger("predictive_analysis")


def extract_section(text: str, start_header: str, end_header: str) -> str:
    """Text between ``start_header`` and the next ``end_header``.

    An empty ``end_header`` (or one that never follows the start) runs to
    the end of the text. Returns "" when the start header is absent.
    """
    start = text.find(start_header)
    if start == -1:
        return ""
    end = text.find(end_header, start) if end_header else len(text)
    if end == -1:
        end = len(text)
    return text[start:end].replace(start_header, "", 1).strip()


def extract_list_items(section: str) -> List[str]:
    """List entries of a section with numbering or bullet markers removed.

    Lines of ``MIN_ITEM_LENGTH`` characters or fewer (stray headers,
    markdown rules) are dropped; at most ``MAX_SECTION_ITEMS`` are kept.
    """
    items = []
    for line in section.splitlines():
        line = line.strip()
        if not line:
            continue
        match = _LIST_ITEM.match(line)
        if not match:
            continue
        item = next(g for g in match.groups() if g).strip()
        if len(item) > MIN_ITEM_LENGTH:
            items.append(item)
    return items[:MAX_SECTION_ITEMS]


def parse_trend_response(text: str) -> TrendAnalysis:
    sections = {
        field: extract_list_items(extract_section(text, start, end))
        for field, (start, end) in prompts.TREND_SECTIONS.items()
    }
    return TrendAnalysis(**sections)


def summarize_genre(tracks: Sequence[SpotifyAfroTrack], top_n: int = 10) -> GenreProfile:
    """Average audio features and top tracks (by popularity) of ``tracks``."""
    ranked = sorted(tracks, key=lambda t: t.popularity, reverse=True)
    return GenreProfile(
        tracks_analyzed=len(tracks),
        average_energy=mean([t.energy for t in tracks]),
        average_danceability=mean([t.danceability for t in tracks]),
        average_tempo=mean([t.tempo for t in tracks]),
        average_popularity=mean([t.popularity for t in tracks]),
        artists=unique_in_order(t.artist for t in tracks),
        top_tracks=ranked[:top_n],
    )


def build_genre_prompt(profile: GenreProfile) -> str:
    track_lines = "\n".join(
        f'{i}. "{t.name}" by {t.artist} - Popularity: {format_number(t.popularity)}'
        for i, t in enumerate(profile.top_tracks, start=1)
    )
    return prompts.GENRE_TRENDS_TEMPLATE.format(
        avg_energy=profile.average_energy,
        energy_label=level_label(profile.average_energy),
        avg_danceability=profile.average_danceability,
        danceability_label=level_label(profile.average_danceability),
        avg_tempo=profile.average_tempo,
        tempo_label=tempo_label(profile.average_tempo),
        avg_popularity=profile.average_popularity,
        tracks_analyzed=profile.tracks_analyzed,
        artist_count=len(profile.artists),
        top_artists=", ".join(profile.artists[:10]),
        track_lines=track_lines,
    )


class PredictiveAnalysis:
    """Builds analysis prompts from the datasets and queries the gateway.

    Attributes:
        datasets: Static dataset provider
        gateway: Generative text gateway
    """

    def __init__(self, datasets: DatasetProvider, gateway: GenerativeTextGateway):
        self.datasets = datasets
        self.gateway = gateway

    # ------------------------------------------------------------------
    # Music trends
    # ------------------------------------------------------------------

    def prepare_music_summary(self, limit: int = 100) -> MusicSummary:
        """Statistics and summary text over the top ``limit`` tracks."""
        afro = self.datasets.top_afro_tracks(limit)
        youtube = self.datasets.top_youtube_tracks(limit)

        total_views = sum(t.views for t in youtube)
        total_streams = sum(t.stream for t in youtube)
        avg_popularity = mean([t.popularity for t in afro])
        avg_energy = mean([t.energy for t in afro])
        avg_danceability = mean([t.danceability for t in afro])
        avg_tempo = mean([t.tempo for t in afro])

        afro_lines = "\n".join(
            f'{i}. "{t.name}" by {t.artist} ({t.album}) - Popularity: {format_number(t.popularity)}'
            for i, t in enumerate(afro[:10], start=1)
        )
        youtube_lines = "\n".join(
            f'{i}. "{t.track}" by {t.artist} ({t.album}) - Views: {format_number(t.views)}, '
            f"Likes: {format_number(t.likes)}"
            for i, t in enumerate(youtube[:10], start=1)
        )
        # ISO dates (or bare years) compare correctly as strings
        recent = sum(1 for t in afro if t.release_date > RECENT_RELEASE_CUTOFF)

        text = prompts.MUSIC_SUMMARY_TEMPLATE.format(
            limit=limit,
            afro_count=len(afro),
            afro_artists=", ".join(unique_in_order(t.artist for t in afro)[:10]),
            avg_popularity=avg_popularity,
            avg_energy=avg_energy,
            avg_danceability=avg_danceability,
            avg_tempo=avg_tempo,
            afro_lines=afro_lines,
            youtube_count=len(youtube),
            youtube_artists=", ".join(unique_in_order(t.artist for t in youtube)[:10]),
            total_views=format_number(total_views),
            total_streams=format_number(total_streams),
            youtube_lines=youtube_lines,
            energy_label=level_label(avg_energy),
            danceability_label=level_label(avg_danceability),
            tempo_label=tempo_label(avg_tempo),
            recent_releases=recent,
        )
        return MusicSummary(
            afro_tracks_count=len(afro),
            youtube_tracks_count=len(youtube),
            total_views=total_views,
            total_streams=total_streams,
            avg_popularity=avg_popularity,
            avg_energy=avg_energy,
            avg_danceability=avg_danceability,
            avg_tempo=avg_tempo,
            text=text,
        )

    async def generate_trend_analysis(self, limit: int = 100) -> PredictiveInsights:
        """Ask the model for a seven-section trend report and parse it.

        Args:
            limit: Number of top tracks per dataset to summarize

        Returns:
            PredictiveInsights with parsed sections and the raw response

        Raises:
            GatewayError: If the gateway call fails
        """
        summary = self.prepare_music_summary(limit)
        prompt = prompts.TREND_ANALYSIS_TEMPLATE.format(
            summary=summary.text,
            avg_danceability=summary.avg_danceability,
            avg_energy=summary.avg_energy,
            avg_tempo=summary.avg_tempo,
        )

        logger.info(
            "Sending data to AI for trend analysis",
            extra={"extra_data": {"limit": limit, "prompt_length": len(prompt)}},
        )
        response = await self.gateway.generate(prompt)

        return PredictiveInsights(
            analysis=parse_trend_response(response),
            raw_ai_response=response,
            data_used=DataUsed(
                afro_tracks_count=summary.afro_tracks_count,
                youtube_tracks_count=summary.youtube_tracks_count,
                total_views=summary.total_views,
                total_streams=summary.total_streams,
            ),
            timestamp=datetime.now(timezone.utc),
        )

    async def generate_artist_insights(self, artist: str) -> str:
        """Free-text insights for one artist.

        Raises:
            NotFoundError: If the artist is in neither music dataset
            GatewayError: If the gateway call fails
        """
        afro = self.datasets.search_afro_by_artist(artist)
        youtube = self.datasets.search_youtube_by_artist(artist)
        if not afro and not youtube:
            raise NotFoundError(f"No data found for artist: {artist}")

        afro_lines = "\n".join(
            f'- "{t.name}" ({t.album}) - Popularity: {format_number(t.popularity)}, '
            f"Energy: {t.energy:.3f}"
            for t in afro[:5]
        )
        youtube_lines = "\n".join(
            f'- "{t.track}" ({t.album}) - Views: {format_number(t.views)}, '
            f"Likes: {format_number(t.likes)}"
            for t in youtube[:5]
        )
        prompt = prompts.ARTIST_INSIGHTS_TEMPLATE.format(
            artist=artist,
            afro_count=len(afro),
            afro_lines=afro_lines,
            youtube_count=len(youtube),
            youtube_lines=youtube_lines,
        )
        return await self.gateway.generate(prompt)

    async def generate_genre_insights(self, prompt: str) -> str:
        """Send a genre prompt built by ``build_genre_prompt``."""
        return await self.gateway.generate(prompt)

    # ------------------------------------------------------------------
    # Creator, business and content analysis
    # ------------------------------------------------------------------

    def _creator_context(self, creator_type: str) -> Tuple[str, str]:
        stats = self.datasets.get_data_stats()
        business = self.datasets.business_stats()
        movies = self.datasets.movie_stats()
        dist = movies.runtime_distribution

        if creator_type in ("musician", "music"):
            afro_lines = "\n".join(
                f'{i}. "{t.name}" by {t.artist} - Popularity: {format_number(t.popularity)}'
                for i, t in enumerate(self.datasets.top_afro_tracks(5), start=1)
            )
            youtube_lines = "\n".join(
                f'{i}. "{t.track}" by {t.artist} - Views: {format_number(t.views)}'
                for i, t in enumerate(self.datasets.top_youtube_tracks(5), start=1)
            )
            context = prompts.MUSIC_CREATOR_CONTEXT.format(
                afro_tracks=stats.spotify_afro_tracks,
                youtube_tracks=stats.spotify_youtube_tracks,
                concert_programs=stats.concert_programs,
                afro_lines=afro_lines,
                youtube_lines=youtube_lines,
            )
            return context, prompts.CREATOR_FOCUS["music"]

        if creator_type in ("content", "video"):
            context = prompts.CONTENT_CREATOR_CONTEXT.format(
                total_movies=movies.total_movies,
                average_runtime=movies.average_runtime,
                short=dist.short,
                medium=dist.medium,
                long=dist.long,
                short_share=movies.share("short"),
                shortest=format_number(movies.shortest_runtime),
                longest=format_number(movies.longest_runtime),
                dominant="Short-form" if dist.short > dist.medium else "Medium-form",
            )
            return context, prompts.CREATOR_FOCUS["content"]

        if creator_type in ("business", "entrepreneur"):
            top_sales = self.datasets.top_business_sales(5)
            sales_lines = "\n".join(
                f"{i}. {b.product_type} - Net Sales: ${format_number(b.total_net_sales)}"
                for i, b in enumerate(top_sales, start=1)
            )
            context = prompts.BUSINESS_CREATOR_CONTEXT.format(
                total_records=business.total_records,
                total_net_sales=format_number(business.total_net_sales),
                average_net_sales=business.average_net_sales,
                top_product_type=business.top_product_type,
                unique_product_types=business.unique_product_types,
                sales_lines=sales_lines,
                top_sales=format_number(top_sales[0].total_net_sales) if top_sales else "0",
            )
            return context, prompts.CREATOR_FOCUS["business"]

        context = prompts.GENERAL_CREATOR_CONTEXT.format(
            afro_tracks=stats.spotify_afro_tracks,
            concert_programs=stats.concert_programs,
            total_movies=movies.total_movies,
            average_runtime=movies.average_runtime,
            total_records=business.total_records,
            total_net_sales=format_number(business.total_net_sales),
            unique_product_types=business.unique_product_types,
            content_length="shorter" if dist.short > dist.medium else "medium-length",
        )
        return context, prompts.CREATOR_FOCUS["general"]

    async def generate_creator_insights(
        self, creator_type: str = "general", focus: str = "trends"
    ) -> CreatorInsights:
        """Insights tailored to a creator vertical.

        ``creator_type`` of music/musician, content/video or
        business/entrepreneur selects a dataset; anything else gets the
        cross-industry overview.
        """
        context, specific_insights = self._creator_context(creator_type)
        prompt = prompts.CREATOR_INSIGHTS_TEMPLATE.format(
            creator_type=creator_type,
            creator_type_upper=creator_type.upper(),
            focus=focus,
            focus_upper=focus.upper(),
            context=context,
            specific_insights=specific_insights,
        )
        logger.info(f"Generating AI insights for {creator_type} creators")
        insights = await self.gateway.generate(prompt)
        return CreatorInsights(
            creator_type=creator_type,
            focus=focus,
            insights=insights,
            primary_focus=specific_insights,
        )

    async def generate_business_trends(
        self, category: str = "all", min_sales: float = 0, max_sales: float = 50000
    ) -> BusinessTrends:
        """Market analysis over the business sales dataset.

        A specific ``category`` replaces the sales-range filter with a
        product type search.
        """
        records = self.datasets.load_business_data()
        stats = self.datasets.business_stats()

        if category != "all":
            filtered = self.datasets.search_business_by_product_type(category)
            category_block = f"\nCategory Focus: {category}\nFiltered Results: {len(filtered)} businesses\n"
        else:
            filtered = self.datasets.business_sales_by_range(min_sales, max_sales)
            category_block = ""

        sales = [b.total_net_sales for b in records]
        sales_lines = "\n".join(
            f"{i}. {b.product_type} - Net Sales: ${format_number(b.total_net_sales)}"
            for i, b in enumerate(self.datasets.top_business_sales(8), start=1)
        )
        prompt = prompts.BUSINESS_TRENDS_TEMPLATE.format(
            total_records=stats.total_records,
            total_net_sales=format_number(stats.total_net_sales),
            average_net_sales=stats.average_net_sales,
            top_product_type=stats.top_product_type,
            category_block=category_block,
            sales_lines=sales_lines,
            unique_product_types=stats.unique_product_types,
            lowest=format_number(min(sales)) if sales else "0",
            highest=format_number(max(sales)) if sales else "0",
        )
        logger.info(f"Analyzing business trends for category: {category}")
        insights = await self.gateway.generate(prompt)
        return BusinessTrends(category=category, insights=insights, results_count=len(filtered))

    async def generate_content_strategy(
        self,
        content_type: str = "all",
        min_runtime: float = 0,
        max_runtime: float = 300,
    ) -> ContentStrategy:
        """Content-length strategy over the movie runtime dataset.

        ``short``, ``medium`` and ``long`` use fixed runtime bands and
        override ``min_runtime``/``max_runtime``.
        """
        stats = self.datasets.movie_stats()
        dist = stats.runtime_distribution

        band: Optional[tuple] = prompts.CONTENT_TYPES.get(content_type)
        if band:
            low, high, description = band
        else:
            low, high, description = min_runtime, max_runtime, "All Content Types"
        filtered = self.datasets.movies_by_runtime_range(low, high)

        prompt = prompts.CONTENT_STRATEGY_TEMPLATE.format(
            total_movies=stats.total_movies,
            average_runtime=stats.average_runtime,
            shortest=format_number(stats.shortest_runtime),
            longest=format_number(stats.longest_runtime),
            short=dist.short,
            medium=dist.medium,
            long=dist.long,
            short_share=stats.share("short"),
            medium_share=stats.share("medium"),
            long_share=stats.share("long"),
            type_description=description,
            type_description_lower=description.lower(),
            results_count=len(filtered),
            dominant="Short-form dominates" if dist.short > dist.medium else "Medium-form preferred",
        )
        logger.info(f"Analyzing content strategy for type: {content_type}")
        insights = await self.gateway.generate(prompt)
        return ContentStrategy(
            content_type=content_type,
            type_description=description,
            insights=insights,
            results_count=len(filtered),
        )
