"""Request and response models for FastAPI endpoints.

These Pydantic models define the API contract between clients and the
server. Every model serializes with camelCase keys and accepts either
camelCase or snake_case on input.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from afrisight.analysis.models import PredictiveInsights, TrendAnalysis
from afrisight.datasets.models import (
    BusinessStats,
    DataStats,
    MovieStats,
    SpotifyAfroTrack,
    SpotifyYouTubeTrack,
)
from afrisight.events.models import ScrapedEvent
from afrisight.users.directory import CreatorTypeCount


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(ApiModel):
    success: bool = True


class MessageResponse(SuccessResponse):
    message: str


class ErrorResponse(ApiModel):
    """Envelope for every failed request.

    Attributes:
        success: Always False
        error: Short human-readable message
        details: Upstream error text or validation details, when available
    """

    success: bool = False
    error: str
    details: Optional[str] = None


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------


class ServiceInfo(ApiModel):
    name: str
    version: str
    status: str


class HealthResponse(ApiModel):
    """Response from /health endpoint.

    Attributes:
        status: healthy, degraded or unhealthy
        datasets_loaded: Whether every bundled dataset parsed
        user_directory_ok: Whether the document store answered a ping
        session_store_ok: Whether the chat session store is available
        active_sessions: Number of chat sessions held in memory
    """

    status: Literal["healthy", "degraded", "unhealthy"]
    datasets_loaded: bool
    user_directory_ok: bool
    session_store_ok: bool
    active_sessions: int = 0


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------


class SignupRequest(ApiModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    creator_type: str


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str


# ----------------------------------------------------------------------
# Chat
# ----------------------------------------------------------------------


class ChatRequest(ApiModel):
    """Request to POST /predict/chat.

    Attributes:
        prompt: User's message
        session_id: Session to continue (a new one is created if absent)
    """

    prompt: Optional[str] = Field(None, description="User's message")
    session_id: Optional[str] = Field(None, description="Session ID (creates new if not provided)")


class DeleteSessionRequest(ApiModel):
    session_id: Optional[str] = None


class ConversationInfo(ApiModel):
    message_count: int
    session_started: datetime
    last_activity: datetime


class ChatContextInfo(ApiModel):
    user_creator_type: str
    data_points_available: int
    data_types: List[str]
    top_artists_referenced: List[str]
    business_categories_available: int
    content_formats_analyzed: List[str]


class ChatResponse(SuccessResponse):
    session_id: str
    message: str
    conversation: ConversationInfo
    context: ChatContextInfo
    suggestions: List[str]


class MessageOut(ApiModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime


class SessionInfo(ApiModel):
    message_count: int
    created_at: datetime
    last_activity: datetime


class ChatTranscriptResponse(SuccessResponse):
    session_id: str
    messages: List[MessageOut]
    session_info: SessionInfo


class SessionSummaryOut(ApiModel):
    session_id: str
    message_count: int
    last_message: Optional[str] = None
    created_at: datetime
    last_activity: datetime


class SessionListResponse(SuccessResponse):
    sessions: List[SessionSummaryOut]


# ----------------------------------------------------------------------
# Predict
# ----------------------------------------------------------------------


class MusicData(ApiModel):
    concert_programs: int
    spotify_afro_tracks: int
    spotify_you_tube_tracks: int = Field(..., alias="spotifyYouTubeTracks")


class CreatorData(ApiModel):
    business_records: int
    movie_records: int
    total_market_value: float
    average_content_length: float


class Overview(ApiModel):
    total_data_points: int
    music_data: MusicData
    creator_data: CreatorData


class MusicPerformers(ApiModel):
    total_views_top10: str = Field(..., alias="totalViewsTop10")
    average_popularity_top10: float = Field(..., alias="averagePopularityTop10")
    unique_afro_artists_top10: int = Field(..., alias="uniqueAfroArtistsTop10")
    unique_you_tube_artists_top10: int = Field(..., alias="uniqueYouTubeArtistsTop10")


class BusinessPerformers(ApiModel):
    top_category: Optional[str]
    average_sales: float
    unique_categories: int


class ContentPerformers(ApiModel):
    average_runtime: float
    dominant_format: str
    total_pieces: int


class TopPerformers(ApiModel):
    music: MusicPerformers
    business: BusinessPerformers
    content: ContentPerformers


class PredictionReadiness(ApiModel):
    data_loaded: bool = True
    ai_ready: bool = True
    suggested_analysis_limit: int = 100
    available_analysis: List[str]
    recommended_endpoints: List[str]


class QuickStatsResponse(SuccessResponse):
    overview: Overview
    top_performers: TopPerformers
    ready_for_prediction: PredictionReadiness


class DataAnalyzed(ApiModel):
    tracks_analyzed: int
    afro_tracks: int
    youtube_tracks: int
    total_views: str
    total_streams: str


class TrendsResponse(SuccessResponse):
    message: str
    predictions: TrendAnalysis
    data_analyzed: DataAnalyzed
    generated_at: datetime
    note: str
    raw_ai_response: Optional[str] = None


class ArtistMetrics(ApiModel):
    spotify_tracks: int
    youtube_tracks: int
    average_popularity: float
    total_you_tube_views: str = Field(..., alias="totalYouTubeViews")
    total_you_tube_likes: str = Field(..., alias="totalYouTubeLikes")
    engagement_rate: float


class SpotifyTrackOut(ApiModel):
    name: str
    album: str
    popularity: float
    energy: float
    danceability: float


class YouTubeTrackOut(ApiModel):
    title: str
    album: str
    views: str
    likes: str


class ArtistTopTracks(ApiModel):
    spotify: List[SpotifyTrackOut]
    youtube: List[YouTubeTrackOut]


class ArtistResponse(SuccessResponse):
    artist: str
    insights: str
    metrics: ArtistMetrics
    top_tracks: ArtistTopTracks


class AudioFeatureProfile(ApiModel):
    average_energy: float
    average_danceability: float
    average_tempo: float
    average_popularity: float


class GenreStatistics(ApiModel):
    tracks_analyzed: int
    unique_artists: int
    energy_level: str
    danceability_level: str
    tempo_category: str


class GenreTrackOut(ApiModel):
    name: str
    artist: str
    album: str
    popularity: float
    energy: float
    danceability: float
    tempo: float


class GenreTrendsResponse(SuccessResponse):
    message: str
    audio_feature_profile: AudioFeatureProfile
    insights: str
    statistics: GenreStatistics
    top_artists: List[str]
    top_tracks: List[GenreTrackOut]


class CreatorDataContext(ApiModel):
    music_tracks: int
    content_pieces: int
    business_cases: int
    concert_programs: int


class CreatorRecommendations(ApiModel):
    primary_focus: str
    data_available: bool = True
    custom_analysis: bool = True


class RawCreatorData(ApiModel):
    music_stats: DataStats
    movie_stats: MovieStats
    business_stats: BusinessStats


class CreatorInsightsResponse(SuccessResponse):
    creator_type: str
    focus: str
    insights: str
    data_context: CreatorDataContext
    recommendations: CreatorRecommendations
    generated_at: datetime
    raw_data: Optional[RawCreatorData] = None


class MarketData(ApiModel):
    total_businesses: int
    total_market_value: float
    average_performance: float
    top_category: Optional[str]
    categories_analyzed: int


class BusinessPerformer(ApiModel):
    category: str
    net_sales: float
    performance: Literal["Above Average", "Below Average"]


class BusinessFilters(ApiModel):
    category: str
    sales_range: str
    results_count: int


class BusinessTrendsResponse(SuccessResponse):
    category: str
    insights: str
    market_data: MarketData
    top_performers: List[BusinessPerformer]
    filters: BusinessFilters


class FormatShare(ApiModel):
    count: int
    percentage: str


class LengthRange(ApiModel):
    shortest: float
    longest: float


class FormatDistribution(ApiModel):
    short_form: FormatShare
    medium_form: FormatShare
    long_form: FormatShare


class ContentAnalysis(ApiModel):
    total_pieces: int
    average_length: float
    length_range: LengthRange
    distribution: FormatDistribution


class ContentRecommendations(ApiModel):
    optimal_length: float
    dominant_format: str
    diversification_opportunity: str


class ContentFilters(ApiModel):
    runtime_range: str
    results_count: int


class ContentStrategyResponse(SuccessResponse):
    content_type: str
    type_description: str
    insights: str
    content_analysis: ContentAnalysis
    recommendations: ContentRecommendations
    filters: ContentFilters


# ----------------------------------------------------------------------
# Explore and settings
# ----------------------------------------------------------------------


class CreatorOut(ApiModel):
    """Public view of an account (no password hash)."""

    id: str
    name: str
    email: str
    creator_type: str
    bio: Optional[str] = None
    age: Optional[int] = None


class Pagination(ApiModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_previous_page: bool


class CreatorFilters(ApiModel):
    creator_type: Optional[str] = None
    name: Optional[str] = None


class CreatorsPage(ApiModel):
    creators: List[CreatorOut]
    pagination: Pagination
    filters: CreatorFilters


class CreatorsResponse(SuccessResponse):
    data: CreatorsPage


class CreatorStats(ApiModel):
    total_creators: int
    by_type: List[CreatorTypeCount]


class CreatorStatsResponse(SuccessResponse):
    data: CreatorStats


class ProfileResponse(SuccessResponse):
    profile: CreatorOut


class ProfileUpdateRequest(ApiModel):
    name: Optional[str] = None
    email: Optional[str] = None
    creator_type: Optional[str] = None
    bio: Optional[str] = None
    age: Optional[int] = None


class ProfileUpdateResponse(MessageResponse):
    profile: CreatorOut
    updated_fields: List[str]


class PasswordChangeRequest(ApiModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class AccountDeleteRequest(ApiModel):
    password: Optional[str] = None
    confirm_deletion: Optional[str] = None


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------


class ScrapeData(ApiModel):
    tix_events: List[ScrapedEvent]
    luma_events: List[ScrapedEvent]
    total_events: int
    combined_events: List[ScrapedEvent]


class ScrapeSummary(ApiModel):
    tix_events_count: int
    luma_events_count: int
    total_events_count: int
    scraped_at: datetime


class ScrapeAllResponse(SuccessResponse):
    data: ScrapeData
    summary: ScrapeSummary


class EventList(ApiModel):
    """Events plus whichever filter or source fields apply to the endpoint."""

    events: List[ScrapedEvent]
    count: int
    source: Optional[str] = None
    total_scraped: Optional[int] = None
    location: Optional[str] = None
    filter: Optional[str] = None
    search_keyword: Optional[str] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    scraped_at: datetime


class EventListResponse(SuccessResponse):
    data: EventList


# ----------------------------------------------------------------------
# Data and AI
# ----------------------------------------------------------------------


class DataStatsResponse(SuccessResponse):
    data: DataStats


class AfroTracksResponse(SuccessResponse):
    data: List[SpotifyAfroTrack]
    count: int


class YouTubeTracksResponse(SuccessResponse):
    data: List[SpotifyYouTubeTrack]
    count: int


class AfroSearchResponse(SuccessResponse):
    artist: str
    tracks: List[SpotifyAfroTrack]
    count: int


class YouTubeSearchResponse(SuccessResponse):
    artist: str
    tracks: List[SpotifyYouTubeTrack]
    count: int


class TrendAnalysisRequest(ApiModel):
    limit: int = Field(100, ge=1)


class TrendAnalysisResponse(SuccessResponse):
    insights: PredictiveInsights
    message: str


class ArtistInsightsRequest(ApiModel):
    artist: Optional[str] = None


class ArtistInsightsResponse(SuccessResponse):
    artist: str
    insights: str


class PromptRequest(ApiModel):
    prompt: Optional[str] = None


class PromptResponse(SuccessResponse):
    prompt: str
    response: str
