"""Service layer helpers."""

from .byeols import ByeolService, byeol_to_dict
from .zodiac import ZODIAC_SIGNS, ZodiacService, zodiac_to_dict

__all__ = [
    "ByeolService",
    "ZODIAC_SIGNS",
    "ZodiacService",
    "byeol_to_dict",
    "zodiac_to_dict",
]
