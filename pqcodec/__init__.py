"""Compression codecs and column value decoding for Parquet-style data."""

__version__ = "0.1.0"