"""Prompt-driven trend and artist analysis over the music datasets."""

from afrisight.analysis.predictive import PredictiveAnalysis

__all__ = ["PredictiveAnalysis"]
