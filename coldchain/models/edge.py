"""Derived edge (route segment) models.

Edges are never stored: they are scored on demand between two nodes by
the edge cost model and either accepted (EdgeScore) or rejected
(EdgeRejection) against the active constraints.
"""

from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .node import Tier


class EdgeType(str, Enum):
    """Kind of leg, derived from the tiers it connects."""
    COLLECTION = "collection"        # producer -> aggregator
    TRUNK = "trunk"                  # aggregator -> processor
    DISTRIBUTION = "distribution"    # processor -> distributor
    LAST_MILE = "last_mile"          # distributor -> retail
    BYPASS = "bypass"                # forward, skipping at least one tier
    LATERAL = "lateral"              # same tier
    REVERSE = "reverse"              # to an earlier tier (sequencer only)

    @classmethod
    def between(cls, from_tier: Tier, to_tier: Tier) -> "EdgeType":
        """
        Classify the leg between two tiers.

        Args:
            from_tier: Tier of the origin node
            to_tier: Tier of the destination node

        Returns:
            EdgeType for the leg
        """
        step = to_tier.rank - from_tier.rank
        if step < 0:
            return cls.REVERSE
        if step == 0:
            return cls.LATERAL
        if step > 1:
            return cls.BYPASS
        return _ADJACENT_EDGE_TYPES[from_tier]

    def __str__(self) -> str:
        return self.value


_ADJACENT_EDGE_TYPES = {
    Tier.PRODUCER: EdgeType.COLLECTION,
    Tier.AGGREGATOR: EdgeType.TRUNK,
    Tier.PROCESSOR: EdgeType.DISTRIBUTION,
    Tier.DISTRIBUTOR: EdgeType.LAST_MILE,
}


class RejectionReason(str, Enum):
    """Why an edge was excluded from routing."""
    TIER_ORDER = "tier_order"
    SELF_LOOP = "self_loop"
    MAX_DISTANCE = "max_distance"
    MAX_DELIVERY_TIME = "max_delivery_time"
    MAX_SPOILAGE = "max_spoilage"


class EdgeScore(BaseModel):
    """
    Scored leg between two nodes.

    Attributes:
        from_id: Origin node ID
        to_id: Destination node ID
        edge_type: Kind of leg
        distance_km: Great-circle distance
        speed_kmh: Speed used to derive the transit time
        time_hours: Transit time
        transit_temperature_c: Temperature the product travels at
        spoilage_risk: Quality loss over the leg (%)
        distance_cost: distance_km × vehicle cost per km
        time_cost: time_hours × operational cost per hour
        spoilage_penalty: spoilage_risk × (possibly amplified) penalty weight
        cost: Scalar edge weight (sum of the three components)
    """
    kind: Literal["edge"] = "edge"
    from_id: str
    to_id: str
    edge_type: EdgeType
    distance_km: float = Field(..., ge=0)
    speed_kmh: float = Field(..., gt=0)
    time_hours: float = Field(..., ge=0)
    transit_temperature_c: float
    spoilage_risk: float = Field(..., ge=0, le=100)
    distance_cost: float = Field(..., ge=0)
    time_cost: float = Field(..., ge=0)
    spoilage_penalty: float = Field(..., ge=0)
    cost: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return True

    def __str__(self) -> str:
        return (
            f"{self.from_id}->{self.to_id} ({self.distance_km:.1f}km, "
            f"{self.time_hours:.2f}h, {self.spoilage_risk:.1f}%, ₹{self.cost:.0f})"
        )


class EdgeRejection(BaseModel):
    """
    Edge excluded by tier ordering or a constraint.

    A rejection is never a zero-cost edge: routing treats it as absent.

    Attributes:
        from_id: Origin node ID
        to_id: Destination node ID
        reasons: Every violated rule
        score: Measured values of the leg, when it could be scored
    """
    kind: Literal["edge_rejected"] = "edge_rejected"
    from_id: str
    to_id: str
    reasons: Tuple[RejectionReason, ...] = Field(..., min_length=1)
    score: Optional[EdgeScore] = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return False
