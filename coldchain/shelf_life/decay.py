"""
Decay model for perishable products in transit.

Spoilage risk is the percentage of quality lost over a transit leg. Inside
the product's safe temperature band the refrigerated hourly rate applies.
Outside it the ambient hourly rate applies, scaled by an Arrhenius-like
factor exp(excess / 10) for every degree above the safe ceiling, so the
rate roughly doubles every ~7°C.
"""

import math

from coldchain.constants import MAX_SPOILAGE_PERCENT, TEMPERATURE_EXCESS_SCALE_C
from coldchain.models.product import ProductProfile

from .rules import ShelfLifeRules


def clamp_percent(value: float) -> float:
    """Clamp a percentage to [0, 100]."""
    return min(MAX_SPOILAGE_PERCENT, max(0.0, value))


def temperature_factor(product: ProductProfile, temperature_c: float) -> float:
    """
    Rate multiplier for a temperature.

    Args:
        product: Product profile
        temperature_c: Temperature the product is held at

    Returns:
        1.0 inside the safe band, exp(max(0, T - max) / 10) outside it
    """
    if ShelfLifeRules.is_within_safe_range(product, temperature_c):
        return 1.0
    excess = max(0.0, temperature_c - product.max_temp_c)
    return math.exp(excess / TEMPERATURE_EXCESS_SCALE_C)


def hourly_spoilage_rate(product: ProductProfile, temperature_c: float) -> float:
    """Effective spoilage rate (%/hour) at a temperature, factor included."""
    if ShelfLifeRules.is_within_safe_range(product, temperature_c):
        return product.refrigerated_spoilage_rate
    return product.ambient_spoilage_rate * temperature_factor(product, temperature_c)


def spoilage_risk(product: ProductProfile, transit_hours: float, ambient_temp_c: float) -> float:
    """
    Spoilage risk accumulated over a transit leg.

    Non-decreasing in transit_hours and in the temperature excess above the
    safe ceiling. Negative durations count as zero.

    Args:
        product: Product profile
        transit_hours: Time in transit
        ambient_temp_c: Temperature the product travels at

    Returns:
        Risk percentage in [0, 100]
    """
    hours = max(0.0, transit_hours)
    return clamp_percent(hourly_spoilage_rate(product, ambient_temp_c) * hours)


def quality_retention(risk_percent: float) -> float:
    """Remaining quality (%) after a given spoilage risk."""
    return MAX_SPOILAGE_PERCENT - clamp_percent(risk_percent)


def remaining_shelf_life_hours(
    product: ProductProfile,
    elapsed_hours: float,
    temperature_c: float
) -> float:
    """
    Shelf life left after time spent at a temperature.

    Args:
        product: Product profile
        elapsed_hours: Hours already spent at temperature_c
        temperature_c: Holding temperature

    Returns:
        Remaining hours, never negative
    """
    if ShelfLifeRules.is_within_safe_range(product, temperature_c):
        shelf_life = product.refrigerated_shelf_life_hours
    else:
        shelf_life = product.ambient_shelf_life_hours / temperature_factor(product, temperature_c)
    return max(0.0, shelf_life - max(0.0, elapsed_hours))
