"""Cost breakdown data models.

Data classes splitting a path's scalar cost into its components for
analysis and reporting.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable

from coldchain.models import EdgeScore


@dataclass
class PathCostBreakdown:
    """
    Cost components summed over the legs of a path.

    Attributes:
        total_cost: Sum of leg scalar costs
        distance_cost: Vehicle running cost (distance × cost per km)
        time_cost: Operational cost of time in transit
        spoilage_penalty: Cost charged for spoilage risk
        total_distance_km: Path distance
        cost_by_leg: Scalar cost per leg, keyed 'from->to'
    """
    total_cost: float = 0.0
    distance_cost: float = 0.0
    time_cost: float = 0.0
    spoilage_penalty: float = 0.0
    total_distance_km: float = 0.0
    cost_by_leg: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_scores(cls, scores: Iterable[EdgeScore]) -> "PathCostBreakdown":
        """Sum the components of scored legs."""
        breakdown = cls()
        for score in scores:
            breakdown.total_cost += score.cost
            breakdown.distance_cost += score.distance_cost
            breakdown.time_cost += score.time_cost
            breakdown.spoilage_penalty += score.spoilage_penalty
            breakdown.total_distance_km += score.distance_km
            breakdown.cost_by_leg[f"{score.from_id}->{score.to_id}"] = score.cost
        return breakdown

    @property
    def cost_per_km(self) -> float:
        """Average cost per kilometre (0 for a zero-length path)."""
        if self.total_distance_km <= 0:
            return 0.0
        return self.total_cost / self.total_distance_km

    def get_cost_proportions(self) -> Dict[str, float]:
        """
        Get the share of each component in the total cost.

        Returns:
            Dictionary with the proportion (0-1) of each component
        """
        if self.total_cost == 0:
            return {
                "distance": 0.0,
                "time": 0.0,
                "spoilage": 0.0,
            }

        return {
            "distance": self.distance_cost / self.total_cost,
            "time": self.time_cost / self.total_cost,
            "spoilage": self.spoilage_penalty / self.total_cost,
        }

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Path Cost: ₹{self.total_cost:,.2f} "
            f"(distance ₹{self.distance_cost:,.2f}, time ₹{self.time_cost:,.2f}, "
            f"spoilage ₹{self.spoilage_penalty:,.2f})"
        )
