"""Cadence quote pricing and pricing-scheme migration core."""

__version__ = "1.0.0"
