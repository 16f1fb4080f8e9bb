"""Deckchart: chart-to-presentation workflow core."""

__version__ = "0.1.0"
