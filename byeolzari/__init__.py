"""Byeolzari API: OAuth sign-in, JWT sessions and zodiac reference data."""

__version__ = "0.1.0"
