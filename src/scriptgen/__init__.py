"""Competitive script and series generator."""

__version__ = "0.1.0"
