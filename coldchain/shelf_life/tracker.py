"""
Spoilage tracker for multi-leg routes.

This module accumulates spoilage as product moves leg by leg through the
network, recording the running risk and the shelf life left at every stop.
"""

from dataclasses import dataclass
from typing import List

from coldchain.models.product import ProductProfile

from .decay import clamp_percent, remaining_shelf_life_hours, spoilage_risk


@dataclass
class TransitLeg:
    """
    One leg of a multi-leg route.

    Attributes:
        from_id: Origin node ID
        to_id: Destination node ID
        transit_hours: Time in transit
        temperature_c: Temperature the product travels at
    """
    from_id: str
    to_id: str
    transit_hours: float
    temperature_c: float

    def __str__(self) -> str:
        return f"{self.from_id}->{self.to_id} ({self.transit_hours:.2f}h @ {self.temperature_c:g}°C)"


@dataclass
class SpoilageCheckpoint:
    """
    Product condition on arrival at a stop.

    Attributes:
        node_id: Stop reached
        leg_risk: Spoilage risk of the leg just travelled
        cumulative_risk: Risk accumulated since the origin (clamped to 100)
        elapsed_hours: Hours since leaving the origin
        remaining_shelf_life_hours: Shelf life left at the leg's temperature
    """
    node_id: str
    leg_risk: float
    cumulative_risk: float
    elapsed_hours: float
    remaining_shelf_life_hours: float


class SpoilageTracker:
    """
    Tracks spoilage through multi-leg routes.

    Leg risks add up: each leg contributes the risk of its own duration at
    its own temperature, so the running total never decreases.
    """

    def __init__(self, product: ProductProfile):
        """
        Initialize tracker.

        Args:
            product: Product being moved
        """
        self.product = product

    def track_through_route(self, legs: List[TransitLeg]) -> List[SpoilageCheckpoint]:
        """
        Track spoilage through a multi-leg route.

        Args:
            legs: Legs in travel order

        Returns:
            One checkpoint per leg, at the leg's destination

        Raises:
            ValueError: If no legs are given
        """
        if not legs:
            raise ValueError("Route must have at least one leg")

        checkpoints = []
        cumulative = 0.0
        elapsed = 0.0

        for leg in legs:
            leg_risk = spoilage_risk(self.product, leg.transit_hours, leg.temperature_c)
            cumulative = clamp_percent(cumulative + leg_risk)
            elapsed += max(0.0, leg.transit_hours)

            checkpoints.append(SpoilageCheckpoint(
                node_id=leg.to_id,
                leg_risk=leg_risk,
                cumulative_risk=cumulative,
                elapsed_hours=elapsed,
                remaining_shelf_life_hours=remaining_shelf_life_hours(
                    self.product, elapsed, leg.temperature_c
                ),
            ))

        return checkpoints
