"""Tests for the bundled dataset provider.

These tests verify:
- Loading and normalization of irregular rows
- Top-N, search and audio feature filters
- Business and movie aggregates
"""

import json

import pytest

from afrisight.datasets import DatasetProvider


def test_data_stats_counts(datasets):
    """Record counts match the bundled files."""
    stats = datasets.get_data_stats()

    assert stats.concert_programs == 4
    assert stats.spotify_afro_tracks == 12
    assert stats.spotify_youtube_tracks == 10
    assert stats.business_records == 12
    assert stats.movie_records == 15
    assert stats.total_data_points == 53
    assert stats.model_dump(by_alias=True)["spotifyYouTubeTracks"] == 10

def test_danceability_list_uses_first_value(datasets):
    """A danceability list collapses to its first element."""
    calm_down = next(t for t in datasets.load_spotify_afro() if t.name == "Calm Down")
    assert calm_down.danceability == pytest.approx(0.801)

def test_null_fields_default_to_zero(datasets):
    """Null valence/key and missing counts become zero."""
    joha = next(t for t in datasets.load_spotify_afro() if t.name == "Joha")
    assert joha.valence == 0
    assert joha.key == 0

    asake = next(t for t in datasets.load_spotify_youtube() if t.artist == "Asake")
    assert asake.stream == 0

def test_youtube_rows_serialize_with_source_columns(datasets):
    """YouTube rows dump back to the dataset's column names."""
    row = datasets.top_youtube_tracks(1)[0].model_dump(by_alias=True)
    assert row["Artist"] == "Rema"
    assert row["Track"] == "Calm Down"
    assert row["Views"] == 512340211

def test_top_afro_tracks_by_popularity(datasets):
    """Afro tracks are ranked by popularity, highest first."""
    top = datasets.top_afro_tracks(3)
    assert [t.name for t in top] == ["Calm Down", "Last Last", "Essence"]

def test_top_youtube_tracks_by_views(datasets):
    """YouTube tracks are ranked by views, highest first."""
    top = datasets.top_youtube_tracks(2)
    assert [t.artist for t in top] == ["Rema", "CKay"]

def test_top_n_does_not_reorder_source(datasets):
    """Sorting returns a new list and leaves the loaded data untouched."""
    before = [t.name for t in datasets.load_spotify_afro()]
    datasets.top_afro_tracks(5)
    assert [t.name for t in datasets.load_spotify_afro()] == before

def test_search_by_artist_is_case_insensitive_substring(datasets):
    """Artist search matches partial, case-insensitive names."""
    assert len(datasets.search_afro_by_artist("burna")) == 2
    assert len(datasets.search_youtube_by_artist("BURNA BOY")) == 2
    assert datasets.search_afro_by_artist("Tems") == []
    assert [t.track for t in datasets.search_youtube_by_artist("tems")] == ["Free Mind"]

def test_filter_afro_by_features(datasets):
    """Feature ranges are inclusive and keep dataset order."""
    energetic = datasets.filter_afro_by_features(min_energy=0.7)
    assert [t.name for t in energetic] == ["Last Last", "Calm Down", "Terminator"]

    fast = datasets.filter_afro_by_features(min_tempo=120)
    assert {t.name for t in fast} == {"Last Last", "Ku Lo Sa", "Terminator", "Joha"}

    assert len(datasets.filter_afro_by_features(limit=2)) == 2
    assert datasets.filter_afro_by_features(min_energy=0.95) == []

def test_business_stats(datasets):
    """Totals, top category and unique product types."""
    stats = datasets.business_stats()

    assert stats.total_records == 12
    assert stats.total_net_sales == pytest.approx(37620.5)
    assert stats.average_net_sales == pytest.approx(37620.5 / 12)
    assert stats.top_product_type == "Art & Sculpture"
    assert stats.unique_product_types == 10

def test_business_queries(datasets):
    """Top sales, sales range and product type search."""
    assert datasets.top_business_sales(1)[0].total_net_sales == 12732
    in_range = datasets.business_sales_by_range(2000, 3500)
    assert {b.product_type for b in in_range} == {"Basket", "Christmas", "Jewelry", "Home Decor", "Kitchen"}
    assert len(datasets.search_business_by_product_type("jewel")) == 2

def test_movie_stats(datasets):
    """Runtime buckets: short < 90, medium 90..120, long > 120."""
    stats = datasets.movie_stats()

    assert stats.total_movies == 15
    assert stats.shortest_runtime == 82
    assert stats.longest_runtime == 169
    assert stats.average_runtime == pytest.approx(1752 / 15)
    dist = stats.runtime_distribution
    assert (dist.short, dist.medium, dist.long) == (3, 6, 6)
    assert stats.share("short") == pytest.approx(20.0)
    assert stats.dominant_format == "medium-form"

def test_movies_by_runtime_range(datasets):
    """Runtime range is inclusive on both ends."""
    assert len(datasets.movies_by_runtime_range(82, 88)) == 3

def test_empty_datasets(tmp_path):
    """Empty files give zeroed stats rather than errors."""
    for name in ("spotify_afro.json", "spotify_youtube.json", "business_sales.json", "movies.json"):
        (tmp_path / name).write_text("[]", encoding="utf-8")
    (tmp_path / "concerts.json").write_text(json.dumps({"programs": []}), encoding="utf-8")

    datasets = DatasetProvider(tmp_path)

    assert datasets.get_data_stats().total_data_points == 0
    assert datasets.business_stats().top_product_type is None
    assert datasets.movie_stats().total_movies == 0
    assert datasets.top_afro_tracks() == []

def test_missing_file_raises(tmp_path):
    """A missing dataset file propagates the OS error."""
    with pytest.raises(OSError):
        DatasetProvider(tmp_path).load_movies()
