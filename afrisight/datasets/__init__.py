"""Static JSON datasets (music, concerts, business sales, movies)."""

from afrisight.datasets.provider import DatasetProvider

__all__ = ["DatasetProvider"]
