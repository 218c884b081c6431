"""Electorate results scraper and normalizer."""

__version__ = "0.1.0"
