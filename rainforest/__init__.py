"""Rainforest Foods read-only catalog API."""

__version__ = "1.0.0"
