"""Result and failure records returned across the engine boundary.

Every engine operation returns one of these models instead of raising.
Each model carries a ``kind`` discriminator and an ``ok`` property so the
dashboard can branch on success without isinstance checks, and none of
them carry human-readable messages: presenting failures is the caller's
job.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Paths
# ============================================================================

class PathLeg(BaseModel):
    """One hop of a path or sequence, with running totals up to its end."""
    from_id: str
    to_id: str
    edge_type: str
    distance_km: float = Field(..., ge=0)
    time_hours: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)
    spoilage_risk: float = Field(..., ge=0, le=100)
    cumulative_distance_km: float = Field(..., ge=0)
    cumulative_time_hours: float = Field(..., ge=0)
    cumulative_cost: float = Field(..., ge=0)
    cumulative_spoilage_risk: float = Field(..., ge=0, le=100)
    within_constraints: bool = True

    model_config = ConfigDict(frozen=True)


class PathResult(BaseModel):
    """
    A path through the tiered network.

    Attributes:
        path: Node IDs in visiting order
        legs: Per-hop scores with cumulative totals
        total_distance_km: Sum of leg distances
        total_time_hours: Sum of leg times
        total_cost: Sum of leg scalar costs
        max_spoilage_risk: Worst single-leg spoilage risk
        cumulative_spoilage_risk: Spoilage accumulated along the whole path
        is_optimal: Cost equals the minimum found for this (origin, destination)
    """
    kind: Literal["path"] = "path"
    path: List[str] = Field(..., min_length=2)
    legs: List[PathLeg] = Field(..., min_length=1)
    total_distance_km: float = Field(..., ge=0)
    total_time_hours: float = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    max_spoilage_risk: float = Field(..., ge=0, le=100)
    cumulative_spoilage_risk: float = Field(..., ge=0, le=100)
    is_optimal: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True

    @property
    def origin(self) -> str:
        """Get the origin node."""
        return self.path[0]

    @property
    def destination(self) -> str:
        """Get the destination node."""
        return self.path[-1]

    @property
    def num_hops(self) -> int:
        """Get the number of hops (edges) in the path."""
        return len(self.path) - 1

    @property
    def route_class(self) -> str:
        """'optimal' or 'suboptimal' for reporting."""
        return "optimal" if self.is_optimal else "suboptimal"

    def __str__(self) -> str:
        path_str = " -> ".join(self.path)
        return (
            f"{path_str} ({self.total_distance_km:.1f}km, {self.total_time_hours:.2f}h, "
            f"₹{self.total_cost:.0f}, {self.max_spoilage_risk:.1f}% max risk)"
        )


class RouteSequence(BaseModel):
    """
    Visiting order produced by the greedy route sequencer.

    Attributes:
        node_ids: Every visible node exactly once, in visiting order
        legs: Hops between consecutive nodes
        total_distance_km: Tour distance
        total_time_hours: Tour duration
        total_cost: Tour scalar cost
        max_spoilage_risk: Worst single-leg spoilage risk
        constraint_violations: Legs taken although they break a constraint
    """
    kind: Literal["sequence"] = "sequence"
    node_ids: List[str] = Field(..., min_length=2)
    legs: List[PathLeg]
    total_distance_km: float = Field(..., ge=0)
    total_time_hours: float = Field(..., ge=0)
    total_cost: float = Field(..., ge=0)
    max_spoilage_risk: float = Field(..., ge=0, le=100)
    constraint_violations: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True


# ============================================================================
# Network flow
# ============================================================================

class FlowRecord(BaseModel):
    """Shortest producer -> retail path with the volume it would carry."""
    source_id: str
    destination_id: str
    volume: float = Field(..., ge=0)
    path: PathResult

    model_config = ConfigDict(frozen=True)


class EfficiencyBreakdown(BaseModel):
    """Component scores of the network efficiency blend (all 0-100)."""
    quality_score: float = Field(..., ge=0, le=100)
    cost_score: float = Field(..., ge=0, le=100)
    time_score: float = Field(..., ge=0, le=100)
    utilization_score: float = Field(..., ge=0, le=100)
    score: float = Field(..., ge=0, le=100)

    model_config = ConfigDict(frozen=True)


class NetworkFlowResult(BaseModel):
    """
    Producer -> retail flows with network-wide aggregates.

    Attributes:
        flows: One record per reachable (producer, retail) pair
        total_cost: Sum of path costs
        total_time_hours: Sum of path times
        total_distance_km: Sum of path distances
        mean_spoilage_risk: Mean of each path's worst-leg spoilage risk
        total_volume: Sum of flow volumes
        reachable_pairs: Pairs with a constraint-satisfying path
        possible_pairs: producers × retailers
        efficiency: Blended 0-100 efficiency score and its components
    """
    kind: Literal["network_flow"] = "network_flow"
    flows: List[FlowRecord] = Field(default_factory=list)
    total_cost: float = Field(0.0, ge=0)
    total_time_hours: float = Field(0.0, ge=0)
    total_distance_km: float = Field(0.0, ge=0)
    mean_spoilage_risk: float = Field(0.0, ge=0, le=100)
    total_volume: float = Field(0.0, ge=0)
    reachable_pairs: int = Field(0, ge=0)
    possible_pairs: int = Field(0, ge=0)
    efficiency: EfficiencyBreakdown

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True

    @property
    def network_efficiency(self) -> float:
        """Blended efficiency score (0-100)."""
        return self.efficiency.score

    @property
    def coverage(self) -> float:
        """Share of producer/retail pairs with a path (0-1)."""
        if self.possible_pairs == 0:
            return 0.0
        return self.reachable_pairs / self.possible_pairs


# ============================================================================
# Failures
# ============================================================================

class ValidationIssue(BaseModel):
    """
    Machine-readable description of one invalid input value.

    Attributes:
        record: Index or ID of the offending record (None for singletons)
        field: Dotted field path
        code: Stable issue code (e.g. 'unknown_tier', 'greater_than_equal')
        value: Offending input value
    """
    record: Optional[Union[int, str]] = None
    field: str = ""
    code: str
    value: Any = None

    model_config = ConfigDict(frozen=True)


class InvalidInput(BaseModel):
    """Inputs rejected before any computation started."""
    kind: Literal["invalid_input"] = "invalid_input"
    issues: List[ValidationIssue] = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False

    @property
    def codes(self) -> List[str]:
        """Issue codes in reporting order."""
        return [issue.code for issue in self.issues]


class NoPathFound(BaseModel):
    """No constraint-satisfying path exists between two nodes."""
    kind: Literal["no_path_found"] = "no_path_found"
    source_id: str
    destination_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False


class InsufficientNodes(BaseModel):
    """Request needs more visible nodes than the network has."""
    kind: Literal["insufficient_nodes"] = "insufficient_nodes"
    visible_count: int = Field(..., ge=0)
    required: int = 2

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False


class Cancelled(BaseModel):
    """Computation stopped by its cancellation token."""
    kind: Literal["cancelled"] = "cancelled"
    completed_units: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False


EngineFailure = Union[InvalidInput, NoPathFound, InsufficientNodes, Cancelled]
