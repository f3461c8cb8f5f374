"""Route optimization engine facade.

Single entry point used by the dashboard. Every operation validates its
inputs first and returns a result model or a failure model; nothing
raises across this boundary for bad records.

Usage:
    engine = RouteOptimizationEngine()
    result = engine.all_shortest_paths(
        nodes, product="whole-milk", vehicle="milk_tanker",
        constraints={"ambient_temperature_c": 28.0},
    )
    if not isinstance(result, list):
        print(result.kind)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from coldchain.analysis import NetworkFlowAggregator
from coldchain.config import EngineSettings
from coldchain.costs import EdgeCostModel, RoutingContext
from coldchain.models import (
    Cancelled,
    EdgeRejection,
    EdgeScore,
    InsufficientNodes,
    InvalidInput,
    NetworkFlowResult,
    Node,
    NoPathFound,
    OptimizationConstraints,
    PathResult,
    ProductProfile,
    RouteSequence,
    Tier,
    ValidationIssue,
    VehicleProfile,
)
from coldchain.network import GreedyRouteSequencer, ShortestPathEngine, TieredNetworkGraph
from coldchain.utils import CancellationToken
from coldchain.validation import (
    validate_constraints,
    validate_nodes,
    validate_product,
    validate_vehicle,
)

logger = logging.getLogger(__name__)

NodeInput = Iterable[Union[Node, Mapping[str, Any]]]
ProductInput = Union[ProductProfile, Mapping[str, Any], str]
VehicleInput = Union[VehicleProfile, Mapping[str, Any], str]
ConstraintsInput = Union[OptimizationConstraints, Mapping[str, Any]]


@dataclass
class PreparedRequest:
    """Validated inputs of one engine call."""
    nodes: List[Node]
    graph: TieredNetworkGraph
    context: RoutingContext


class RouteOptimizationEngine:
    """
    Facade over the routing components.

    Each call builds a fresh graph and search state from the inputs it is
    given, so one engine instance can serve concurrent callers working on
    separate snapshots.
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize engine.

        Args:
            settings: Engine settings (defaults if None)
        """
        self.settings = settings or EngineSettings()
        self.cost_model = EdgeCostModel(self.settings.costs)

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def prepare(
        self,
        nodes: NodeInput,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput
    ) -> Union[PreparedRequest, InvalidInput]:
        """
        Validate every input of a request.

        Args:
            nodes: Node records
            product: Product profile, mapping or catalogue ID
            vehicle: Vehicle profile, mapping or catalogue ID
            constraints: Constraints model or mapping

        Returns:
            PreparedRequest, or InvalidInput combining the issues of every input
        """
        validated = [
            validate_nodes(nodes),
            validate_product(product),
            validate_vehicle(vehicle),
            validate_constraints(constraints),
        ]

        issues: List[ValidationIssue] = []
        for result in validated:
            if isinstance(result, InvalidInput):
                issues.extend(result.issues)
        if issues:
            return InvalidInput(issues=issues)

        valid_nodes, valid_product, valid_vehicle, valid_constraints = validated
        return PreparedRequest(
            nodes=valid_nodes,
            graph=TieredNetworkGraph(valid_nodes),
            context=RoutingContext(
                product=valid_product,
                vehicle=valid_vehicle,
                constraints=valid_constraints,
            ),
        )

    @staticmethod
    def _parse_tier(value: Union[Tier, str], field: str) -> Union[Tier, InvalidInput]:
        try:
            return Tier.parse(value)
        except ValueError:
            return InvalidInput(issues=[ValidationIssue(field=field, code="unknown_tier", value=value)])

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def edge_weight(
        self,
        from_node: Union[Node, Mapping[str, Any]],
        to_node: Union[Node, Mapping[str, Any]],
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput
    ) -> Union[EdgeScore, EdgeRejection, InvalidInput]:
        """
        Score the leg between two nodes.

        Both nodes are validated separately, so scoring a node against
        itself is reported as a self_loop rejection.

        Returns:
            EdgeScore, EdgeRejection, or InvalidInput
        """
        first = validate_nodes([from_node])
        second = validate_nodes([to_node])
        request = self.prepare([], product, vehicle, constraints)

        issues: List[ValidationIssue] = []
        for result in (first, second, request):
            if isinstance(result, InvalidInput):
                issues.extend(result.issues)
        if issues:
            return InvalidInput(issues=issues)

        context = request.context
        return self.cost_model.edge_weight(
            first[0],
            second[0],
            context.vehicle,
            context.product,
            context.ambient_temperature_c,
            context.constraints,
        )

    def shortest_path(
        self,
        nodes: NodeInput,
        source_id: str,
        destination_id: str,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput,
        cancel_token: Optional[CancellationToken] = None
    ) -> Union[PathResult, NoPathFound, InvalidInput, Cancelled]:
        """
        Cheapest constraint-satisfying path between two nodes.

        Returns:
            PathResult, NoPathFound, InvalidInput, or Cancelled
        """
        request = self.prepare(nodes, product, vehicle, constraints)
        if isinstance(request, InvalidInput):
            return request

        finder = ShortestPathEngine(request.graph, self.cost_model, request.context, cancel_token)
        result = finder.shortest_path(source_id, destination_id)
        logger.info(f"Shortest path {source_id}->{destination_id}: {result.kind}")
        return result

    def all_shortest_paths(
        self,
        nodes: NodeInput,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput,
        source_tier: Union[Tier, str] = Tier.PRODUCER,
        destination_tier: Union[Tier, str] = Tier.RETAIL,
        alternatives_per_pair: int = 0,
        cancel_token: Optional[CancellationToken] = None
    ) -> Union[List[PathResult], InvalidInput, Cancelled]:
        """
        Cheapest paths between every node of two tiers.

        Args:
            alternatives_per_pair: Extra suboptimal paths per pair (0 for none)

        Returns:
            List of PathResults (possibly empty), InvalidInput, or Cancelled
        """
        request = self.prepare(nodes, product, vehicle, constraints)
        if isinstance(request, InvalidInput):
            return request

        tiers = []
        for value, field in ((source_tier, "source_tier"), (destination_tier, "destination_tier")):
            tier = self._parse_tier(value, field)
            if isinstance(tier, InvalidInput):
                return tier
            tiers.append(tier)
        if alternatives_per_pair < 0:
            return InvalidInput(issues=[ValidationIssue(
                field="alternatives_per_pair",
                code="greater_than_equal",
                value=alternatives_per_pair,
            )])

        finder = ShortestPathEngine(request.graph, self.cost_model, request.context, cancel_token)
        return finder.all_shortest_paths(tiers[0], tiers[1], alternatives_per_pair)

    def sequence_route(
        self,
        nodes: NodeInput,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput,
        start_node_id: Optional[str] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> Union[RouteSequence, InsufficientNodes, InvalidInput, Cancelled]:
        """
        Greedy visiting order over every visible node.

        Returns:
            RouteSequence, InsufficientNodes, InvalidInput, or Cancelled
        """
        request = self.prepare(nodes, product, vehicle, constraints)
        if isinstance(request, InvalidInput):
            return request

        sequencer = GreedyRouteSequencer(self.cost_model, request.context, cancel_token)
        return sequencer.sequence(request.nodes, start_node_id=start_node_id)

    def network_flow(
        self,
        nodes: NodeInput,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput,
        cancel_token: Optional[CancellationToken] = None
    ) -> Union[NetworkFlowResult, InsufficientNodes, InvalidInput, Cancelled]:
        """
        Producer -> retail flows with totals and efficiency score.

        Returns:
            NetworkFlowResult, InsufficientNodes, InvalidInput, or Cancelled
        """
        request = self.prepare(nodes, product, vehicle, constraints)
        if isinstance(request, InvalidInput):
            return request

        aggregator = NetworkFlowAggregator(self.settings)
        return aggregator.aggregate(request.graph, self.cost_model, request.context, cancel_token)

    def network_graph(
        self,
        nodes: NodeInput,
        product: ProductInput,
        vehicle: VehicleInput,
        constraints: ConstraintsInput
    ) -> Union[Dict[str, Any], InvalidInput]:
        """
        Nodes and accepted edges for the map view.

        Returns:
            Dictionary with 'nodes' and 'edges', or InvalidInput
        """
        request = self.prepare(nodes, product, vehicle, constraints)
        if isinstance(request, InvalidInput):
            return request

        finder = ShortestPathEngine(request.graph, self.cost_model, request.context)
        return request.graph.visualize_graph(finder.score_edge)
