"""Result models for the predictive analysis helpers."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from afrisight.datasets.models import SpotifyAfroTrack


class AnalysisModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrendAnalysis(AnalysisModel):
    """Seven-section breakdown parsed from the model's trend response."""

    top_genres: List[str] = Field(default_factory=list)
    emerging_artists: List[str] = Field(default_factory=list)
    popular_events: List[str] = Field(default_factory=list)
    concert_trends: List[str] = Field(default_factory=list)
    marketing_suggestions: List[str] = Field(default_factory=list)
    collaboration_ideas: List[str] = Field(default_factory=list)
    venue_recommendations: List[str] = Field(default_factory=list)


class DataUsed(AnalysisModel):
    afro_tracks_count: int
    youtube_tracks_count: int
    total_views: int
    total_streams: int


class PredictiveInsights(AnalysisModel):
    analysis: TrendAnalysis
    raw_ai_response: str
    data_used: DataUsed
    timestamp: datetime


class MusicSummary(AnalysisModel):
    """Averages over the top tracks, plus the rendered summary text."""

    afro_tracks_count: int
    youtube_tracks_count: int
    total_views: int
    total_streams: int
    avg_popularity: float
    avg_energy: float
    avg_danceability: float
    avg_tempo: float
    text: str


class GenreProfile(AnalysisModel):
    """Audio-feature profile of a filtered set of Afro tracks."""

    tracks_analyzed: int
    average_energy: float
    average_danceability: float
    average_tempo: float
    average_popularity: float
    artists: List[str]
    top_tracks: List[SpotifyAfroTrack]


class CreatorInsights(AnalysisModel):
    creator_type: str
    focus: str
    insights: str
    primary_focus: str


class BusinessTrends(AnalysisModel):
    category: str
    insights: str
    results_count: int


class ContentStrategy(AnalysisModel):
    content_type: str
    type_description: str
    insights: str
    results_count: int
