"""Read-only views over the bundled JSON datasets.

Each dataset is loaded on first use (or eagerly through ``load_all``) and
never modified afterwards; every sorted or filtered view is a new list.
"""

import json
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter

from afrisight.datasets.models import (
    BusinessSale,
    BusinessStats,
    ConcertData,
    DataStats,
    Movie,
    MovieStats,
    RuntimeDistribution,
    SpotifyAfroTrack,
    SpotifyYouTubeTrack,
)
from afrisight.utils.logger import LoggerManager

CONCERTS_FILE = "concerts.json"
SPOTIFY_AFRO_FILE = "spotify_afro.json"
SPOTIFY_YOUTUBE_FILE = "spotify_youtube.json"
BUSINESS_FILE = "business_sales.json"
MOVIES_FILE = "movies.json"

SHORT_RUNTIME_MAX = 90
MEDIUM_RUNTIME_MAX = 120


class DatasetProvider:
    """Loads the static datasets and answers top-N, search and stats queries.

    Attributes:
        data_dir: Directory containing the JSON files
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.logger = LoggerManager.get_logger("datasets")
        self._concerts: Optional[ConcertData] = None
        self._afro: Optional[List[SpotifyAfroTrack]] = None
        self._youtube: Optional[List[SpotifyYouTubeTrack]] = None
        self._business: Optional[List[BusinessSale]] = None
        self._movies: Optional[List[Movie]] = None

    def _read(self, filename: str) -> Any:
        path = self.data_dir / filename
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(
                "Failed to load dataset",
                extra={"extra_data": {"path": str(path), "error": str(e)}},
            )
            raise

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_concert_data(self) -> ConcertData:
        if self._concerts is None:
            self._concerts = ConcertData.model_validate(self._read(CONCERTS_FILE))
            self.logger.info(f"Loaded {len(self._concerts.programs)} concert programs")
        return self._concerts

    def load_spotify_afro(self) -> List[SpotifyAfroTrack]:
        if self._afro is None:
            adapter = TypeAdapter(List[SpotifyAfroTrack])
            self._afro = adapter.validate_python(self._read(SPOTIFY_AFRO_FILE))
            self.logger.info(f"Loaded {len(self._afro)} Spotify Afro tracks")
        return self._afro

    def load_spotify_youtube(self) -> List[SpotifyYouTubeTrack]:
        if self._youtube is None:
            adapter = TypeAdapter(List[SpotifyYouTubeTrack])
            self._youtube = adapter.validate_python(self._read(SPOTIFY_YOUTUBE_FILE))
            self.logger.info(f"Loaded {len(self._youtube)} Spotify YouTube tracks")
        return self._youtube

    def load_business_data(self) -> List[BusinessSale]:
        if self._business is None:
            adapter = TypeAdapter(List[BusinessSale])
            self._business = adapter.validate_python(self._read(BUSINESS_FILE))
            self.logger.info(f"Loaded {len(self._business)} business records")
        return self._business

    def load_movies(self) -> List[Movie]:
        if self._movies is None:
            adapter = TypeAdapter(List[Movie])
            self._movies = adapter.validate_python(self._read(MOVIES_FILE))
            self.logger.info(f"Loaded {len(self._movies)} movie records")
        return self._movies

    def load_all(self) -> Dict[str, Any]:
        return {
            "concerts": self.load_concert_data(),
            "spotify_afro": self.load_spotify_afro(),
            "spotify_youtube": self.load_spotify_youtube(),
            "business": self.load_business_data(),
            "movies": self.load_movies(),
        }

    # ------------------------------------------------------------------
    # Music
    # ------------------------------------------------------------------

    def get_data_stats(self) -> DataStats:
        return DataStats(
            concert_programs=len(self.load_concert_data().programs),
            spotify_afro_tracks=len(self.load_spotify_afro()),
            spotify_youtube_tracks=len(self.load_spotify_youtube()),
            business_records=len(self.load_business_data()),
            movie_records=len(self.load_movies()),
        )

    def search_afro_by_artist(self, artist: str) -> List[SpotifyAfroTrack]:
        needle = artist.lower()
        return [t for t in self.load_spotify_afro() if needle in t.artist.lower()]

    def search_youtube_by_artist(self, artist: str) -> List[SpotifyYouTubeTrack]:
        needle = artist.lower()
        return [t for t in self.load_spotify_youtube() if needle in t.artist.lower()]

    def top_afro_tracks(self, limit: int = 10) -> List[SpotifyAfroTrack]:
        ranked = sorted(self.load_spotify_afro(), key=lambda t: t.popularity, reverse=True)
        return ranked[:max(limit, 0)]

    def top_youtube_tracks(self, limit: int = 10) -> List[SpotifyYouTubeTrack]:
        ranked = sorted(self.load_spotify_youtube(), key=lambda t: t.views, reverse=True)
        return ranked[:max(limit, 0)]

    def filter_afro_by_features(
        self,
        min_energy: float = 0,
        max_energy: float = 1,
        min_danceability: float = 0,
        max_danceability: float = 1,
        min_tempo: float = 0,
        max_tempo: float = 300,
        limit: int = 50,
    ) -> List[SpotifyAfroTrack]:
        """Afro tracks whose audio features fall inside every range (inclusive).

        Keeps dataset order and returns at most ``limit`` tracks.
        """
        matches = [
            t
            for t in self.load_spotify_afro()
            if min_energy <= t.energy <= max_energy
            and min_danceability <= t.danceability <= max_danceability
            and min_tempo <= t.tempo <= max_tempo
        ]
        return matches[:max(limit, 0)]

    # ------------------------------------------------------------------
    # Business
    # ------------------------------------------------------------------

    def top_business_sales(self, limit: int = 10) -> List[BusinessSale]:
        ranked = sorted(self.load_business_data(), key=lambda b: b.total_net_sales, reverse=True)
        return ranked[:max(limit, 0)]

    def business_sales_by_range(self, min_sales: float, max_sales: float) -> List[BusinessSale]:
        return [
            b for b in self.load_business_data() if min_sales <= b.total_net_sales <= max_sales
        ]

    def search_business_by_product_type(self, product_type: str) -> List[BusinessSale]:
        needle = product_type.lower()
        return [b for b in self.load_business_data() if needle in b.product_type.lower()]

    def business_stats(self) -> BusinessStats:
        records = self.load_business_data()
        if not records:
            return BusinessStats()

        totals: Dict[str, float] = defaultdict(float)
        for record in records:
            totals[record.product_type] += record.total_net_sales
        total_net_sales = sum(b.total_net_sales for b in records)

        return BusinessStats(
            total_records=len(records),
            total_net_sales=total_net_sales,
            average_net_sales=total_net_sales / len(records),
            top_product_type=max(totals, key=totals.get),
            unique_product_types=len(totals),
        )

    # ------------------------------------------------------------------
    # Movies
    # ------------------------------------------------------------------

    def movies_by_runtime_range(self, min_runtime: float, max_runtime: float) -> List[Movie]:
        return [m for m in self.load_movies() if min_runtime <= m.runtime <= max_runtime]

    def movie_stats(self) -> MovieStats:
        movies = self.load_movies()
        if not movies:
            return MovieStats()

        runtimes = [m.runtime for m in movies]
        distribution = RuntimeDistribution(
            short=sum(1 for r in runtimes if r < SHORT_RUNTIME_MAX),
            medium=sum(1 for r in runtimes if SHORT_RUNTIME_MAX <= r <= MEDIUM_RUNTIME_MAX),
            long=sum(1 for r in runtimes if r > MEDIUM_RUNTIME_MAX),
        )
        return MovieStats(
            total_movies=len(movies),
            average_runtime=sum(runtimes) / len(runtimes),
            shortest_runtime=min(runtimes),
            longest_runtime=max(runtimes),
            runtime_distribution=distribution,
        )
