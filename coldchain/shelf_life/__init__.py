"""
Decay model for perishable products.

This module handles temperature regimes, spoilage risk over transit legs,
and spoilage accumulation along multi-leg routes.
"""

from .rules import ShelfLifeRules
from .decay import (
    clamp_percent,
    temperature_factor,
    hourly_spoilage_rate,
    spoilage_risk,
    quality_retention,
    remaining_shelf_life_hours,
)
from .tracker import SpoilageTracker, TransitLeg, SpoilageCheckpoint

__all__ = [
    'ShelfLifeRules',
    'clamp_percent',
    'temperature_factor',
    'hourly_spoilage_rate',
    'spoilage_risk',
    'quality_retention',
    'remaining_shelf_life_hours',
    'SpoilageTracker',
    'TransitLeg',
    'SpoilageCheckpoint',
]
