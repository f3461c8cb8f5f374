"""Edge cost model.

Scores a leg between two nodes by combining:
- Distance cost (distance × vehicle cost per km)
- Time cost (transit hours × operational cost per hour)
- Spoilage penalty (risk × penalty weight, amplified under temperature priority)

and rejects legs that break tier ordering or a configured constraint.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from coldchain.config import CostSettings
from coldchain.models import (
    EdgeRejection,
    EdgeScore,
    EdgeType,
    Node,
    OptimizationConstraints,
    ProductProfile,
    RejectionReason,
    VehicleProfile,
)
from coldchain.network.geo import haversine_km
from coldchain.shelf_life import ShelfLifeRules, spoilage_risk


@dataclass(frozen=True)
class RoutingContext:
    """
    Everything besides the nodes that an edge score depends on.

    Attributes:
        product: Product being moved
        vehicle: Vehicle moving it
        constraints: Limits and ambient temperature for the computation
    """
    product: ProductProfile
    vehicle: VehicleProfile
    constraints: OptimizationConstraints

    @property
    def ambient_temperature_c(self) -> float:
        return self.constraints.ambient_temperature_c


@dataclass(frozen=True)
class EdgeEvaluation:
    """Raw score of a leg together with every rule it breaks."""
    score: EdgeScore
    reasons: Tuple[RejectionReason, ...]

    @property
    def accepted(self) -> bool:
        return not self.reasons

    def as_result(self) -> Union[EdgeScore, EdgeRejection]:
        """Collapse into the accepted score or an explicit rejection."""
        if self.accepted:
            return self.score
        return EdgeRejection(
            from_id=self.score.from_id,
            to_id=self.score.to_id,
            reasons=self.reasons,
            score=self.score,
        )


class EdgeCostModel:
    """
    Calculates scalar edge weights for routing.

    The model is stateless apart from its settings: identical inputs always
    give identical outputs.

    Example:
        model = EdgeCostModel(CostSettings())
        result = model.edge_weight(farm, center, tanker, milk, 25.0, constraints)
        if result.ok:
            print(f"Leg cost: ₹{result.cost:,.2f}")
    """

    def __init__(self, settings: Optional[CostSettings] = None):
        """
        Initialize edge cost model.

        Args:
            settings: Cost weights and per-edge-type speeds (defaults if None)
        """
        self.settings = settings or CostSettings()

    def speed_for(
        self,
        edge_type: EdgeType,
        vehicle: VehicleProfile,
        use_edge_speeds: bool = True
    ) -> float:
        """
        Average speed for a leg.

        Args:
            edge_type: Kind of leg
            vehicle: Vehicle profile
            use_edge_speeds: Use the configured per-edge-type speed when present

        Returns:
            Speed in km/h
        """
        if use_edge_speeds:
            configured = self.settings.speed_for(edge_type)
            if configured is not None:
                return configured
        return vehicle.average_speed_kmh

    def transit_temperature(
        self,
        product: ProductProfile,
        vehicle: VehicleProfile,
        ambient_temp_c: float
    ) -> float:
        """
        Temperature a leg's spoilage is scored at.

        Temperature-controlled vehicles hold the product's optimal
        temperature (clamped into the vehicle's band) unless
        ``honour_vehicle_cooling`` is off; other vehicles expose the product
        to the ambient temperature.
        """
        if not self.settings.honour_vehicle_cooling:
            return ambient_temp_c
        return ShelfLifeRules.effective_transit_temperature(product, vehicle, ambient_temp_c)

    def spoilage_penalty_weight(self, constraints: OptimizationConstraints) -> float:
        """Penalty per spoilage percentage point under the given constraints."""
        weight = self.settings.spoilage_penalty_weight
        if constraints.temperature_priority:
            weight *= self.settings.temperature_priority_multiplier
        return weight

    def evaluate(
        self,
        from_node: Node,
        to_node: Node,
        vehicle: VehicleProfile,
        product: ProductProfile,
        ambient_temp_c: float,
        constraints: OptimizationConstraints,
        use_edge_speeds: bool = True,
        enforce_tier_order: bool = True
    ) -> EdgeEvaluation:
        """
        Score a leg and list every rule it breaks.

        Args:
            from_node: Origin node
            to_node: Destination node
            vehicle: Vehicle profile
            product: Product profile
            ambient_temp_c: Outside temperature
            constraints: Limits to check against
            use_edge_speeds: Use per-edge-type speeds instead of the vehicle speed
            enforce_tier_order: Reject legs pointing to an earlier tier

        Returns:
            EdgeEvaluation with the score and any rejection reasons
        """
        edge_type = EdgeType.between(from_node.tier, to_node.tier)
        distance = haversine_km(from_node.coordinate, to_node.coordinate)
        speed = self.speed_for(edge_type, vehicle, use_edge_speeds)
        time_hours = distance / speed

        transit_temp = self.transit_temperature(product, vehicle, ambient_temp_c)
        risk = spoilage_risk(product, time_hours, transit_temp)

        distance_cost = distance * vehicle.cost_per_km
        time_cost = time_hours * self.settings.operational_cost_per_hour
        penalty = risk * self.spoilage_penalty_weight(constraints)

        score = EdgeScore(
            from_id=from_node.id,
            to_id=to_node.id,
            edge_type=edge_type,
            distance_km=distance,
            speed_kmh=speed,
            time_hours=time_hours,
            transit_temperature_c=transit_temp,
            spoilage_risk=risk,
            distance_cost=distance_cost,
            time_cost=time_cost,
            spoilage_penalty=penalty,
            cost=distance_cost + time_cost + penalty,
        )

        reasons = []
        if from_node.id == to_node.id:
            reasons.append(RejectionReason.SELF_LOOP)
        if enforce_tier_order and edge_type == EdgeType.REVERSE:
            reasons.append(RejectionReason.TIER_ORDER)
        if distance > constraints.max_distance_km:
            reasons.append(RejectionReason.MAX_DISTANCE)
        if time_hours > constraints.max_delivery_time_hours:
            reasons.append(RejectionReason.MAX_DELIVERY_TIME)
        if risk > constraints.max_spoilage_percent:
            reasons.append(RejectionReason.MAX_SPOILAGE)

        return EdgeEvaluation(score=score, reasons=tuple(reasons))

    def edge_weight(
        self,
        from_node: Node,
        to_node: Node,
        vehicle: VehicleProfile,
        product: ProductProfile,
        ambient_temp_c: float,
        constraints: OptimizationConstraints,
        use_edge_speeds: bool = True
    ) -> Union[EdgeScore, EdgeRejection]:
        """
        Scalar edge weight, or an explicit rejection.

        Spoilage is scored at the ambient temperature, or at the product's
        optimal temperature on temperature-controlled vehicles (see
        transit_temperature).

        Args:
            from_node: Origin node
            to_node: Destination node
            vehicle: Vehicle profile
            product: Product profile
            ambient_temp_c: Outside temperature
            constraints: Limits to check against
            use_edge_speeds: Use per-edge-type speeds instead of the vehicle speed

        Returns:
            EdgeScore if the leg is usable, EdgeRejection otherwise
        """
        return self.evaluate(
            from_node, to_node, vehicle, product, ambient_temp_c, constraints,
            use_edge_speeds=use_edge_speeds,
        ).as_result()

    def score_in_context(
        self,
        from_node: Node,
        to_node: Node,
        context: RoutingContext,
        use_edge_speeds: bool = True,
        enforce_tier_order: bool = True
    ) -> EdgeEvaluation:
        """Evaluate a leg with the product, vehicle and constraints of a context."""
        return self.evaluate(
            from_node,
            to_node,
            context.vehicle,
            context.product,
            context.ambient_temperature_c,
            context.constraints,
            use_edge_speeds=use_edge_speeds,
            enforce_tier_order=enforce_tier_order,
        )
