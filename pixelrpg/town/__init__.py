"""
Town module - inn, shop and dialogue.
"""

from pixelrpg.town.system import (
    TownSystem,
    TownResult,
    TownVisit,
    ShopListing,
)

__all__ = [
    "TownSystem",
    "TownResult",
    "TownVisit",
    "ShopListing",
]
