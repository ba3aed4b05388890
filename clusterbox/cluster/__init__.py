"""Clustering engines."""

from .kmeans import KMeans, TooFewPoints

__all__ = ["KMeans", "TooFewPoints"]
