"""Strength program importer and load estimator."""

__version__ = "0.1.0"
