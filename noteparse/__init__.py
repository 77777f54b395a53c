"""Deterministic entity extraction for relationship notes."""

__version__ = "0.1.0"
