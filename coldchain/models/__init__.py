"""Data models for the route optimization engine."""

from .node import Node, Tier, Coordinate, TIER_ORDER
from .product import ProductProfile, DAIRY_PRODUCTS
from .vehicle import VehicleProfile, VEHICLE_TYPES
from .constraints import OptimizationConstraints
from .edge import EdgeType, EdgeScore, EdgeRejection, RejectionReason
from .results import (
    PathLeg,
    PathResult,
    RouteSequence,
    FlowRecord,
    EfficiencyBreakdown,
    NetworkFlowResult,
    ValidationIssue,
    InvalidInput,
    NoPathFound,
    InsufficientNodes,
    Cancelled,
    EngineFailure,
)

__all__ = [
    # Network
    "Node",
    "Tier",
    "Coordinate",
    "TIER_ORDER",
    # Reference data
    "ProductProfile",
    "DAIRY_PRODUCTS",
    "VehicleProfile",
    "VEHICLE_TYPES",
    "OptimizationConstraints",
    # Edges
    "EdgeType",
    "EdgeScore",
    "EdgeRejection",
    "RejectionReason",
    # Results
    "PathLeg",
    "PathResult",
    "RouteSequence",
    "FlowRecord",
    "EfficiencyBreakdown",
    "NetworkFlowResult",
    # Failures
    "ValidationIssue",
    "InvalidInput",
    "NoPathFound",
    "InsufficientNodes",
    "Cancelled",
    "EngineFailure",
]
