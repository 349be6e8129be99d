"""Database model exports."""

from .byeol import Byeol
from .zodiac import Zodiac

__all__ = [
    "Byeol",
    "Zodiac",
]
