"""
Network efficiency scoring.

Blends four 0-100 component scores into one network efficiency figure:

- Quality: 100 minus the mean worst-leg spoilage risk of the flows
- Cost: 100 minus twice the excess of cost per km over the reference
- Time: 100 minus ten points per hour of mean transit time per hop
- Utilisation: producer output as a share of visible node capacity

Every component and the blend are clamped to [0, 100]; NaN scores as 0.
"""

import math
from typing import List, Optional

from coldchain.config import EfficiencySettings
from coldchain.constants import MAX_SCORE
from coldchain.models import EfficiencyBreakdown, PathResult


def clamp_score(value: float) -> float:
    """Clamp a score to [0, 100], mapping NaN to 0."""
    if math.isnan(value):
        return 0.0
    return min(MAX_SCORE, max(0.0, value))


def quality_score(paths: List[PathResult]) -> float:
    """100 minus the mean of each path's worst-leg spoilage risk (0 without paths)."""
    if not paths:
        return 0.0
    mean_risk = sum(p.max_spoilage_risk for p in paths) / len(paths)
    return clamp_score(MAX_SCORE - mean_risk)


def cost_score(paths: List[PathResult], settings: EfficiencySettings) -> float:
    """Score the network cost per km against the reference rate (0 without paths)."""
    if not paths:
        return 0.0
    total_distance = sum(p.total_distance_km for p in paths)
    if total_distance <= 0:
        return MAX_SCORE
    cost_per_km = sum(p.total_cost for p in paths) / total_distance
    excess = cost_per_km - settings.reference_cost_per_km
    return clamp_score(MAX_SCORE - excess * settings.cost_score_slope)


def time_score(paths: List[PathResult], settings: EfficiencySettings) -> float:
    """Score the mean transit hours per hop (0 without paths)."""
    if not paths:
        return 0.0
    hops = sum(p.num_hops for p in paths)
    hours_per_hop = sum(p.total_time_hours for p in paths) / hops
    return clamp_score(MAX_SCORE - hours_per_hop * settings.time_score_slope)


def utilization_score(total_production: float, total_capacity: float) -> float:
    """Producer output as a percentage of capacity (0 without capacity)."""
    if total_capacity <= 0:
        return 0.0
    return clamp_score(total_production / total_capacity * MAX_SCORE)


def calculate_efficiency(
    paths: List[PathResult],
    total_production: float,
    total_capacity: float,
    settings: Optional[EfficiencySettings] = None
) -> EfficiencyBreakdown:
    """
    Calculate the blended network efficiency.

    Args:
        paths: One cheapest path per reachable producer/retail pair
        total_production: Sum of visible producer production rates
        total_capacity: Sum of visible node capacities
        settings: Weights and references (defaults if None)

    Returns:
        EfficiencyBreakdown with every component and the blended score
    """
    settings = settings or EfficiencySettings()
    weights = settings.weights

    quality = quality_score(paths)
    cost = cost_score(paths, settings)
    time = time_score(paths, settings)
    utilization = utilization_score(total_production, total_capacity)

    blended = (
        weights.quality * quality
        + weights.cost * cost
        + weights.time * time
        + weights.utilization * utilization
    )

    return EfficiencyBreakdown(
        quality_score=quality,
        cost_score=cost,
        time_score=time,
        utilization_score=utilization,
        score=clamp_score(blended),
    )
