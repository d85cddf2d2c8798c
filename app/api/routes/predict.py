"""Predictive analysis endpoints under /predict."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from afrisight.analysis import PredictiveAnalysis
from afrisight.analysis.predictive import build_genre_prompt, summarize_genre
from afrisight.datasets import DatasetProvider
from afrisight.errors import NotFoundError, ValidationError
from afrisight.utils.formatting import format_number, level_label, mean, tempo_label, unique_in_order
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import get_analysis, get_datasets
from app.api.errors import upstream_failure
from app.api.models import (
    ArtistMetrics,
    ArtistResponse,
    ArtistTopTracks,
    AudioFeatureProfile,
    BusinessFilters,
    BusinessPerformer,
    BusinessPerformers,
    BusinessTrendsResponse,
    ContentAnalysis,
    ContentFilters,
    ContentPerformers,
    ContentRecommendations,
    ContentStrategyResponse,
    CreatorData,
    CreatorDataContext,
    CreatorInsightsResponse,
    CreatorRecommendations,
    DataAnalyzed,
    FormatDistribution,
    FormatShare,
    GenreStatistics,
    GenreTrackOut,
    GenreTrendsResponse,
    LengthRange,
    MarketData,
    MusicData,
    MusicPerformers,
    Overview,
    PredictionReadiness,
    QuickStatsResponse,
    RawCreatorData,
    SpotifyTrackOut,
    TopPerformers,
    TrendsResponse,
    YouTubeTrackOut,
)

router = APIRouter(prefix="/predict", tags=["predict"])

logger = LoggerManager.get_logger("api.predict")

MAX_ANALYSIS_LIMIT = 100
SLOW_ANALYSIS_THRESHOLD = 75

AVAILABLE_ANALYSIS = [
    "Music trends and artist insights",
    "Business market analysis",
    "Content creation strategies",
    "Cross-industry creator insights",
    "Multi-platform growth strategies",
]

RECOMMENDED_ENDPOINTS = [
    "GET /predict/trends - Music trend analysis",
    "GET /predict/creator-insights - Multi-industry creator insights",
    "GET /predict/business-trends - Business market analysis",
    "GET /predict/content-strategy - Content creation optimization",
    "GET /predict/artist - Artist-specific insights",
]


@router.get("/quick-stats", response_model=QuickStatsResponse)
def quick_stats(datasets: DatasetProvider = Depends(get_datasets)):
    """Dataset overview and top-performer summary; no gateway call."""
    stats = datasets.get_data_stats()
    top_afro = datasets.top_afro_tracks(10)
    top_youtube = datasets.top_youtube_tracks(10)
    business = datasets.business_stats()
    movies = datasets.movie_stats()

    return QuickStatsResponse(
        overview=Overview(
            total_data_points=stats.total_data_points,
            music_data=MusicData(
                concert_programs=stats.concert_programs,
                spotify_afro_tracks=stats.spotify_afro_tracks,
                spotify_you_tube_tracks=stats.spotify_youtube_tracks,
            ),
            creator_data=CreatorData(
                business_records=stats.business_records,
                movie_records=stats.movie_records,
                total_market_value=business.total_net_sales,
                average_content_length=movies.average_runtime,
            ),
        ),
        top_performers=TopPerformers(
            music=MusicPerformers(
                total_views_top10=format_number(sum(t.views for t in top_youtube)),
                average_popularity_top10=round(mean([t.popularity for t in top_afro]), 2),
                unique_afro_artists_top10=len(unique_in_order(t.artist for t in top_afro)),
                unique_you_tube_artists_top10=len(unique_in_order(t.artist for t in top_youtube)),
            ),
            business=BusinessPerformers(
                top_category=business.top_product_type,
                average_sales=business.average_net_sales,
                unique_categories=business.unique_product_types,
            ),
            content=ContentPerformers(
                average_runtime=movies.average_runtime,
                dominant_format=movies.dominant_format,
                total_pieces=movies.total_movies,
            ),
        ),
        ready_for_prediction=PredictionReadiness(
            available_analysis=AVAILABLE_ANALYSIS,
            recommended_endpoints=RECOMMENDED_ENDPOINTS,
        ),
    )


@router.get("/trends", response_model=TrendsResponse, response_model_exclude_none=True)
async def trends(
    limit: int = Query(50, ge=1),
    include_raw_response: bool = Query(False, alias="includeRawResponse"),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Seven-section trend report over the top ``limit`` tracks (max 100)."""
    limit = min(limit, MAX_ANALYSIS_LIMIT)
    logger.info(f"Generating trend predictions for top {limit} tracks")

    with upstream_failure("Failed to generate trend predictions"):
        insights = await analysis.generate_trend_analysis(limit)

    used = insights.data_used
    return TrendsResponse(
        message=f"AI trend analysis completed using top {limit} performing tracks",
        predictions=insights.analysis,
        data_analyzed=DataAnalyzed(
            tracks_analyzed=used.afro_tracks_count + used.youtube_tracks_count,
            afro_tracks=used.afro_tracks_count,
            youtube_tracks=used.youtube_tracks_count,
            total_views=format_number(used.total_views),
            total_streams=format_number(used.total_streams),
        ),
        generated_at=insights.timestamp,
        note=(
            "Large analysis may take 60-90 seconds"
            if limit >= SLOW_ANALYSIS_THRESHOLD
            else "Analysis completed quickly"
        ),
        raw_ai_response=insights.raw_ai_response if include_raw_response else None,
    )


@router.get("/artist", response_model=ArtistResponse)
async def artist_insights(
    artist: Optional[str] = Query(None),
    datasets: DatasetProvider = Depends(get_datasets),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Insights and engagement metrics for one artist."""
    if not artist:
        raise ValidationError("Artist name is required and must be a string")

    afro = datasets.search_afro_by_artist(artist)
    youtube = datasets.search_youtube_by_artist(artist)
    if not afro and not youtube:
        raise NotFoundError(f"No data found for artist: {artist}")

    logger.info(f"Generating artist insights for: {artist}")
    with upstream_failure("Failed to generate artist insights"):
        insights = await analysis.generate_artist_insights(artist)

    total_views = sum(t.views for t in youtube)
    total_likes = sum(t.likes for t in youtube)
    engagement = round(total_likes / total_views * 100, 4) if youtube and total_views else 0

    return ArtistResponse(
        artist=artist,
        insights=insights,
        metrics=ArtistMetrics(
            spotify_tracks=len(afro),
            youtube_tracks=len(youtube),
            average_popularity=round(mean([t.popularity for t in afro]), 2),
            total_you_tube_views=format_number(total_views),
            total_you_tube_likes=format_number(total_likes),
            engagement_rate=engagement,
        ),
        top_tracks=ArtistTopTracks(
            spotify=[
                SpotifyTrackOut(
                    name=t.name,
                    album=t.album,
                    popularity=t.popularity,
                    energy=t.energy,
                    danceability=t.danceability,
                )
                for t in afro[:3]
            ],
            youtube=[
                YouTubeTrackOut(
                    title=t.track,
                    album=t.album,
                    views=format_number(t.views),
                    likes=format_number(t.likes),
                )
                for t in youtube[:3]
            ],
        ),
    )


@router.get("/genre-trends", response_model=GenreTrendsResponse)
async def genre_trends(
    min_energy: float = Query(0, alias="minEnergy"),
    max_energy: float = Query(1, alias="maxEnergy"),
    min_danceability: float = Query(0, alias="minDanceability"),
    max_danceability: float = Query(1, alias="maxDanceability"),
    min_tempo: float = Query(0, alias="minTempo"),
    max_tempo: float = Query(300, alias="maxTempo"),
    limit: int = Query(50, ge=1),
    datasets: DatasetProvider = Depends(get_datasets),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Genre prediction for Afro tracks inside the given audio-feature ranges."""
    tracks = datasets.filter_afro_by_features(
        min_energy=min_energy,
        max_energy=max_energy,
        min_danceability=min_danceability,
        max_danceability=max_danceability,
        min_tempo=min_tempo,
        max_tempo=max_tempo,
        limit=min(limit, MAX_ANALYSIS_LIMIT),
    )
    if not tracks:
        raise NotFoundError("No tracks found matching the specified audio feature criteria")

    profile = summarize_genre(tracks)
    with upstream_failure("Failed to analyze genre trends"):
        insights = await analysis.generate_genre_insights(build_genre_prompt(profile))

    return GenreTrendsResponse(
        message=f"Genre trend analysis completed for {profile.tracks_analyzed} tracks",
        audio_feature_profile=AudioFeatureProfile(
            average_energy=round(profile.average_energy, 3),
            average_danceability=round(profile.average_danceability, 3),
            average_tempo=round(profile.average_tempo, 1),
            average_popularity=round(profile.average_popularity, 2),
        ),
        insights=insights,
        statistics=GenreStatistics(
            tracks_analyzed=profile.tracks_analyzed,
            unique_artists=len(profile.artists),
            energy_level=level_label(profile.average_energy),
            danceability_level=level_label(profile.average_danceability),
            tempo_category=tempo_label(profile.average_tempo),
        ),
        top_artists=profile.artists[:10],
        top_tracks=[
            GenreTrackOut(
                name=t.name,
                artist=t.artist,
                album=t.album,
                popularity=t.popularity,
                energy=t.energy,
                danceability=t.danceability,
                tempo=t.tempo,
            )
            for t in profile.top_tracks[:5]
        ],
    )


@router.get("/creator-insights", response_model=CreatorInsightsResponse, response_model_exclude_none=True)
async def creator_insights(
    creator_type: str = Query("general", alias="type"),
    focus: str = Query("trends"),
    include_data: bool = Query(False, alias="includeData"),
    datasets: DatasetProvider = Depends(get_datasets),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Insights tailored to a creator vertical (music, content, business or general)."""
    with upstream_failure("Failed to generate creator insights"):
        result = await analysis.generate_creator_insights(creator_type, focus)

    stats = datasets.get_data_stats()
    movies = datasets.movie_stats()
    business = datasets.business_stats()

    return CreatorInsightsResponse(
        creator_type=result.creator_type,
        focus=result.focus,
        insights=result.insights,
        data_context=CreatorDataContext(
            music_tracks=stats.spotify_afro_tracks + stats.spotify_youtube_tracks,
            content_pieces=movies.total_movies,
            business_cases=business.total_records,
            concert_programs=stats.concert_programs,
        ),
        recommendations=CreatorRecommendations(primary_focus=result.primary_focus),
        generated_at=datetime.now(timezone.utc),
        raw_data=(
            RawCreatorData(music_stats=stats, movie_stats=movies, business_stats=business)
            if include_data
            else None
        ),
    )


@router.get("/business-trends", response_model=BusinessTrendsResponse)
async def business_trends(
    category: str = Query("all"),
    min_sales: float = Query(0, alias="minSales"),
    max_sales: float = Query(50000, alias="maxSales"),
    datasets: DatasetProvider = Depends(get_datasets),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Market analysis over the business sales dataset."""
    with upstream_failure("Failed to analyze business trends"):
        result = await analysis.generate_business_trends(category, min_sales, max_sales)

    stats = datasets.business_stats()
    return BusinessTrendsResponse(
        category=category,
        insights=result.insights,
        market_data=MarketData(
            total_businesses=stats.total_records,
            total_market_value=stats.total_net_sales,
            average_performance=stats.average_net_sales,
            top_category=stats.top_product_type,
            categories_analyzed=stats.unique_product_types,
        ),
        top_performers=[
            BusinessPerformer(
                category=b.product_type,
                net_sales=b.total_net_sales,
                performance=(
                    "Above Average" if b.total_net_sales > stats.average_net_sales else "Below Average"
                ),
            )
            for b in datasets.top_business_sales(5)
        ],
        filters=BusinessFilters(
            category="All Categories" if category == "all" else category,
            sales_range=f"${format_number(min_sales)} - ${format_number(max_sales)}",
            results_count=result.results_count,
        ),
    )


@router.get("/content-strategy", response_model=ContentStrategyResponse)
async def content_strategy(
    content_type: str = Query("all", alias="type"),
    min_runtime: int = Query(0, alias="minRuntime"),
    max_runtime: int = Query(300, alias="maxRuntime"),
    datasets: DatasetProvider = Depends(get_datasets),
    analysis: PredictiveAnalysis = Depends(get_analysis),
):
    """Content-length strategy over the movie runtime dataset."""
    with upstream_failure("Failed to analyze content strategy"):
        result = await analysis.generate_content_strategy(content_type, min_runtime, max_runtime)

    stats = datasets.movie_stats()
    dist = stats.runtime_distribution
    return ContentStrategyResponse(
        content_type=content_type,
        type_description=result.type_description,
        insights=result.insights,
        content_analysis=ContentAnalysis(
            total_pieces=stats.total_movies,
            average_length=stats.average_runtime,
            length_range=LengthRange(
                shortest=stats.shortest_runtime, longest=stats.longest_runtime
            ),
            distribution=FormatDistribution(
                short_form=FormatShare(count=dist.short, percentage=f"{stats.share('short'):.1f}"),
                medium_form=FormatShare(count=dist.medium, percentage=f"{stats.share('medium'):.1f}"),
                long_form=FormatShare(count=dist.long, percentage=f"{stats.share('long'):.1f}"),
            ),
        ),
        recommendations=ContentRecommendations(
            optimal_length=stats.average_runtime,
            dominant_format=stats.dominant_format,
            diversification_opportunity=(
                "long-form content" if dist.long < dist.short else "short-form content"
            ),
        ),
        filters=ContentFilters(
            runtime_range=f"{min_runtime} - {max_runtime} minutes",
            results_count=result.results_count,
        ),
    )
