"""Geocoin — deterministic geolocation coin-cache game engine."""

__version__ = "0.1.0"
