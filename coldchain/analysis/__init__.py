"""Network-level analysis: producer to retail flows and efficiency scoring."""

from .efficiency import (
    calculate_efficiency,
    clamp_score,
    quality_score,
    cost_score,
    time_score,
    utilization_score,
)
from .network_flow import NetworkFlowAggregator

__all__ = [
    'calculate_efficiency',
    'clamp_score',
    'quality_score',
    'cost_score',
    'time_score',
    'utilization_score',
    'NetworkFlowAggregator',
]
