"""Raw dataset access under /api/data and /api/search."""

from fastapi import APIRouter, Depends

from afrisight.datasets import DatasetProvider
from app.api.dependencies import get_datasets
from app.api.models import (
    AfroSearchResponse,
    AfroTracksResponse,
    DataStatsResponse,
    YouTubeSearchResponse,
    YouTubeTracksResponse,
)

router = APIRouter(prefix="/api", tags=["data"])

DEFAULT_TOP_LIMIT = 10


@router.get("/data/stats", response_model=DataStatsResponse)
def data_stats(datasets: DatasetProvider = Depends(get_datasets)):
    return DataStatsResponse(data=datasets.get_data_stats())


@router.get("/data/top-afro", response_model=AfroTracksResponse)
@router.get("/data/top-afro/{limit}", response_model=AfroTracksResponse)
def top_afro(limit: int = DEFAULT_TOP_LIMIT, datasets: DatasetProvider = Depends(get_datasets)):
    """Afro tracks ordered by popularity, most popular first."""
    tracks = datasets.top_afro_tracks(limit)
    return AfroTracksResponse(data=tracks, count=len(tracks))


@router.get("/data/top-youtube", response_model=YouTubeTracksResponse)
@router.get("/data/top-youtube/{limit}", response_model=YouTubeTracksResponse)
def top_youtube(limit: int = DEFAULT_TOP_LIMIT, datasets: DatasetProvider = Depends(get_datasets)):
    """Spotify/YouTube tracks ordered by YouTube views, most viewed first."""
    tracks = datasets.top_youtube_tracks(limit)
    return YouTubeTracksResponse(data=tracks, count=len(tracks))


@router.get("/search/afro/{artist}", response_model=AfroSearchResponse)
def search_afro(artist: str, datasets: DatasetProvider = Depends(get_datasets)):
    tracks = datasets.search_afro_by_artist(artist)
    return AfroSearchResponse(artist=artist, tracks=tracks, count=len(tracks))


@router.get("/search/youtube/{artist}", response_model=YouTubeSearchResponse)
def search_youtube(artist: str, datasets: DatasetProvider = Depends(get_datasets)):
    tracks = datasets.search_youtube_by_artist(artist)
    return YouTubeSearchResponse(artist=artist, tracks=tracks, count=len(tracks))
