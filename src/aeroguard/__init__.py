"""Nearest air-quality station resolution backed by the WAQI API."""

__version__ = "0.1.0"
