"""Edge cost model and cost breakdowns."""

from .edge_cost import EdgeCostModel, EdgeEvaluation, RoutingContext
from .cost_breakdown import PathCostBreakdown

__all__ = [
    'EdgeCostModel',
    'EdgeEvaluation',
    'RoutingContext',
    'PathCostBreakdown',
]
