"""Gator - command-line RSS aggregator."""

__version__ = "0.1.0"
