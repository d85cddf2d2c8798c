"""Row models for the bundled JSON datasets.

Field aliases keep the original column names of each source file, so rows
serialize back to the same keys clients already know (``Artist``,
``Total Net Sales``...).
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DatasetRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class SpotifyAfroTrack(DatasetRow):
    """Track from the Spotify Afro dataset."""

    name: str
    album: str = ""
    artist: str
    release_date: str = ""
    length: float = 0
    popularity: float = 0
    danceability: float = 0
    acousticness: float = 0
    energy: float = 0
    instrumentalness: float = 0
    liveness: float = 0
    loudness: float = 0
    speechiness: float = 0
    tempo: float = 0
    time_signature: float = 0
    valence: float = 0
    key: float = 0

    @field_validator("danceability", mode="before")
    @classmethod
    def _first_danceability(cls, value: Union[float, List[float], None]) -> float:
        # Some rows store danceability as a one-element list
        if isinstance(value, list):
            return value[0] if value else 0
        return value if value is not None else 0

    @field_validator("valence", "key", mode="before")
    @classmethod
    def _default_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class SpotifyYouTubeTrack(DatasetRow):
    """Track from the combined Spotify/YouTube dataset."""

    field1: Optional[int] = Field(None, alias="FIELD1")
    artist: str = Field(..., alias="Artist")
    url_spotify: str = Field("", alias="Url_spotify")
    track: str = Field(..., alias="Track")
    album: str = Field("", alias="Album")
    album_type: str = Field("", alias="Album_type")
    uri: str = Field("", alias="Uri")
    danceability: float = Field(0, alias="Danceability")
    energy: float = Field(0, alias="Energy")
    key: float = Field(0, alias="Key")
    loudness: float = Field(0, alias="Loudness")
    speechiness: float = Field(0, alias="Speechiness")
    acousticness: float = Field(0, alias="Acousticness")
    instrumentalness: float = Field(0, alias="Instrumentalness")
    liveness: float = Field(0, alias="Liveness")
    valence: float = Field(0, alias="Valence")
    tempo: float = Field(0, alias="Tempo")
    duration_ms: float = Field(0, alias="Duration_ms")
    url_youtube: str = Field("", alias="Url_youtube")
    title: str = Field("", alias="Title")
    channel: str = Field("", alias="Channel")
    views: int = Field(0, alias="Views")
    likes: int = Field(0, alias="Likes")
    comments: int = Field(0, alias="Comments")
    description: str = Field("", alias="Description")
    licensed: bool = Field(False, alias="Licensed")
    official_video: bool = False
    stream: int = Field(0, alias="Stream")

    @field_validator("views", "likes", "comments", "stream", mode="before")
    @classmethod
    def _missing_counts(cls, value: Any) -> Any:
        return 0 if value is None else value


class Concert(DatasetRow):
    event_type: str = Field("", alias="eventType")
    location: str = Field("", alias="Location")
    venue: str = Field("", alias="Venue")
    date: str = Field("", alias="Date")
    time: str = Field("", alias="Time")


class WorkItem(DatasetRow):
    id: Optional[str] = Field(None, alias="ID")
    composer_name: Optional[str] = Field(None, alias="composerName")
    work_title: Optional[str] = Field(None, alias="workTitle")
    conductor_name: Optional[str] = Field(None, alias="conductorName")
    soloists: List[Any] = Field(default_factory=list)
    interval: Optional[str] = None


class Program(DatasetRow):
    id: str
    program_id: str = Field(..., alias="programID")
    orchestra: str = ""
    season: str = ""
    concerts: List[Concert] = Field(default_factory=list)
    works: List[WorkItem] = Field(default_factory=list)


class ConcertData(DatasetRow):
    programs: List[Program] = Field(default_factory=list)


class BusinessSale(DatasetRow):
    """Aggregated retail sales for one product type."""

    product_type: str = Field(..., alias="Product Type")
    net_quantity: float = Field(0, alias="Net Quantity")
    gross_sales: float = Field(0, alias="Gross Sales")
    discounts: float = Field(0, alias="Discounts")
    returns: float = Field(0, alias="Returns")
    total_net_sales: float = Field(0, alias="Total Net Sales")


class Movie(DatasetRow):
    title: str
    year: Optional[int] = None
    runtime: float


class DataStats(DatasetRow):
    concert_programs: int = Field(0, alias="concertPrograms")
    spotify_afro_tracks: int = Field(0, alias="spotifyAfroTracks")
    spotify_youtube_tracks: int = Field(0, alias="spotifyYouTubeTracks")
    business_records: int = Field(0, alias="businessRecords")
    movie_records: int = Field(0, alias="movieRecords")

    @property
    def total_data_points(self) -> int:
        return (
            self.concert_programs
            + self.spotify_afro_tracks
            + self.spotify_youtube_tracks
            + self.business_records
            + self.movie_records
        )


class BusinessStats(DatasetRow):
    total_records: int = Field(0, alias="totalRecords")
    total_net_sales: float = Field(0, alias="totalNetSales")
    average_net_sales: float = Field(0, alias="averageNetSales")
    top_product_type: Optional[str] = Field(None, alias="topProductType")
    unique_product_types: int = Field(0, alias="uniqueProductTypes")


class RuntimeDistribution(DatasetRow):
    short: int = 0
    medium: int = 0
    long: int = 0


class MovieStats(DatasetRow):
    total_movies: int = Field(0, alias="totalMovies")
    average_runtime: float = Field(0, alias="averageRuntime")
    shortest_runtime: float = Field(0, alias="shortestRuntime")
    longest_runtime: float = Field(0, alias="longestRuntime")
    runtime_distribution: RuntimeDistribution = Field(
        default_factory=RuntimeDistribution, alias="runtimeDistribution"
    )

    def share(self, bucket: str) -> float:
        """Percentage of movies in ``short``/``medium``/``long``."""
        if not self.total_movies:
            return 0.0
        return getattr(self.runtime_distribution, bucket) / self.total_movies * 100

    @property
    def dominant_format(self) -> str:
        dist = self.runtime_distribution
        return "short-form" if dist.short > dist.medium else "medium-form"
