"""Network route optimization engine for perishable supply chains."""

__version__ = "0.1.0"

from .config import EngineSettings, CostSettings, EfficiencySettings, EfficiencyWeights
from .engine import RouteOptimizationEngine
from .utils import CancellationToken

__all__ = [
    "EngineSettings",
    "CostSettings",
    "EfficiencySettings",
    "EfficiencyWeights",
    "RouteOptimizationEngine",
    "CancellationToken",
]
