"""Catalog of regional bird groups and species with cached image fetching."""

__version__ = "0.1.0"
