"""Adaptive business-viability scoring service."""

__version__ = "0.1.0"
