"""AfriSight creator-intelligence backend."""

__version__ = "0.1.0"
