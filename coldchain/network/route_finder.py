"""
Route finding and path enumeration for the tiered network.

This module provides path finding capabilities including:
- Cheapest path between two nodes (Dijkstra on the scalar edge cost)
- Cheapest paths between every pair of two tiers, with alternatives
- Enumeration of every constraint-satisfying simple path
"""

import heapq
import logging
from itertools import islice
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, Union

import networkx as nx

from coldchain.models import (
    Cancelled,
    EdgeRejection,
    EdgeScore,
    Node,
    NoPathFound,
    PathLeg,
    PathResult,
    ProductProfile,
    Tier,
)
from coldchain.shelf_life import SpoilageTracker, TransitLeg
from coldchain.utils import CancellationToken, ComputationCancelled, check_cancelled

from .graph_builder import TieredNetworkGraph

if TYPE_CHECKING:
    from coldchain.costs import EdgeCostModel, PathCostBreakdown, RoutingContext

logger = logging.getLogger(__name__)

#: Search label: (cost, hops, node ids). Lower cost wins, then fewer
#: hops, then the lexicographically smaller node id sequence.
Label = Tuple[float, int, Tuple[str, ...]]


def build_legs(
    scores: Sequence[EdgeScore],
    product: ProductProfile,
    within_constraints: Optional[Sequence[bool]] = None
) -> Tuple[List[PathLeg], float]:
    """
    Turn consecutive edge scores into legs with running totals.

    Args:
        scores: Scored legs in travel order
        product: Product being moved (for cumulative spoilage)
        within_constraints: Per-leg constraint flags (all True if None)

    Returns:
        Tuple of (legs, cumulative spoilage risk at the last stop)
    """
    tracker = SpoilageTracker(product)
    checkpoints = tracker.track_through_route([
        TransitLeg(
            from_id=score.from_id,
            to_id=score.to_id,
            transit_hours=score.time_hours,
            temperature_c=score.transit_temperature_c,
        )
        for score in scores
    ])

    legs = []
    distance = 0.0
    time_hours = 0.0
    cost = 0.0
    for i, (score, checkpoint) in enumerate(zip(scores, checkpoints)):
        distance += score.distance_km
        time_hours += score.time_hours
        cost += score.cost
        legs.append(PathLeg(
            from_id=score.from_id,
            to_id=score.to_id,
            edge_type=str(score.edge_type),
            distance_km=score.distance_km,
            time_hours=score.time_hours,
            cost=score.cost,
            spoilage_risk=score.spoilage_risk,
            cumulative_distance_km=distance,
            cumulative_time_hours=time_hours,
            cumulative_cost=cost,
            cumulative_spoilage_risk=checkpoint.cumulative_risk,
            within_constraints=True if within_constraints is None else within_constraints[i],
        ))

    return legs, checkpoints[-1].cumulative_risk


class ShortestPathEngine:
    """
    Finds minimum-cost paths through the tiered network.

    One instance is one computation over one network snapshot: edge scores
    are memoised for the lifetime of the instance, so build a new engine
    whenever nodes, product, vehicle or constraints change.

    Example:
        engine = ShortestPathEngine(graph, EdgeCostModel(), context)
        result = engine.shortest_path("farm-1", "shop-3")
        if result.ok:
            print(result)
    """

    def __init__(
        self,
        graph: TieredNetworkGraph,
        cost_model: "EdgeCostModel",
        context: "RoutingContext",
        cancel_token: Optional[CancellationToken] = None
    ):
        """
        Initialize route finder.

        Args:
            graph: Tiered network graph
            cost_model: Edge cost model
            context: Product, vehicle and constraints for this computation
            cancel_token: Optional token checked between search steps
        """
        self.graph = graph
        self.cost_model = cost_model
        self.context = context
        self.cancel_token = cancel_token
        self._edge_cache: Dict[Tuple[str, str], Union[EdgeScore, EdgeRejection]] = {}
        self._materialised: Optional[nx.DiGraph] = None
        self._units = 0

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def score_edge(self, from_node: Node, to_node: Node) -> Union[EdgeScore, EdgeRejection]:
        """Memoised edge score between two nodes."""
        key = (from_node.id, to_node.id)
        if key not in self._edge_cache:
            self._edge_cache[key] = self.cost_model.score_in_context(
                from_node, to_node, self.context
            ).as_result()
        return self._edge_cache[key]

    def _accepted_edges(self, node_id: str) -> List[EdgeScore]:
        node = self.graph.get_node(node_id)
        edges = []
        for neighbour in self.graph.neighbors(node_id):
            result = self.score_edge(node, neighbour)
            if result.ok:
                edges.append(result)
        return edges

    def materialised_graph(self) -> nx.DiGraph:
        """NetworkX graph of the accepted edges (built once per engine)."""
        if self._materialised is None:
            self._materialised = self.graph.to_networkx(self.score_edge)
        return self._materialised

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _dijkstra(self, source_id: str, target_id: Optional[str] = None) -> Dict[str, Label]:
        """
        Single-source search over accepted edges.

        Args:
            source_id: Visible source node ID
            target_id: Stop as soon as this node is settled

        Returns:
            Settled label per reached node (the source included)

        Raises:
            ComputationCancelled: If the cancel token fires
        """
        settled: Dict[str, Label] = {}
        heap: List[Label] = [(0.0, 0, (source_id,))]

        while heap:
            check_cancelled(self.cancel_token, self._units)
            cost, hops, path = heapq.heappop(heap)
            node_id = path[-1]
            if node_id in settled:
                continue
            settled[node_id] = (cost, hops, path)
            self._units += 1
            if node_id == target_id:
                break

            for edge in self._accepted_edges(node_id):
                if edge.to_id not in settled:
                    heapq.heappush(heap, (cost + edge.cost, hops + 1, path + (edge.to_id,)))

        logger.debug(f"Search from {source_id} settled {len(settled)} nodes")
        return settled

    def _path_scores(self, path: Sequence[str]) -> List[EdgeScore]:
        scores = []
        for from_id, to_id in zip(path, path[1:]):
            result = self.score_edge(self.graph.get_node(from_id), self.graph.get_node(to_id))
            if not result.ok:
                raise ValueError(f"Edge {from_id}->{to_id} is not usable: {list(result.reasons)}")
            scores.append(result)
        return scores

    def build_path_result(self, path: Sequence[str], is_optimal: bool = True) -> PathResult:
        """
        Build a PathResult from a list of node IDs.

        Args:
            path: Node IDs joined by accepted edges
            is_optimal: Whether the path is a cheapest one for its endpoints

        Returns:
            PathResult with per-leg and total figures

        Raises:
            ValueError: If consecutive nodes are not joined by an accepted edge
        """
        legs, cumulative_risk = build_legs(self._path_scores(path), self.context.product)
        last = legs[-1]
        return PathResult(
            path=list(path),
            legs=legs,
            total_distance_km=last.cumulative_distance_km,
            total_time_hours=last.cumulative_time_hours,
            total_cost=last.cumulative_cost,
            max_spoilage_risk=max(leg.spoilage_risk for leg in legs),
            cumulative_spoilage_risk=cumulative_risk,
            is_optimal=is_optimal,
        )

    def shortest_path(
        self,
        source_id: str,
        destination_id: str
    ) -> Union[PathResult, NoPathFound, Cancelled]:
        """
        Find the cheapest constraint-satisfying path between two nodes.

        Args:
            source_id: Source node ID
            destination_id: Destination node ID

        Returns:
            PathResult, NoPathFound (also for unknown, hidden or identical
            endpoints), or Cancelled
        """
        no_path = NoPathFound(source_id=source_id, destination_id=destination_id)
        if source_id == destination_id:
            return no_path
        if source_id not in self.graph or destination_id not in self.graph:
            logger.debug(f"Unknown or hidden endpoint in {source_id}->{destination_id}")
            return no_path

        self._units = 0
        try:
            settled = self._dijkstra(source_id, destination_id)
        except ComputationCancelled as e:
            logger.warning(f"Shortest path {source_id}->{destination_id} cancelled")
            return Cancelled(completed_units=e.completed_units)

        if destination_id not in settled:
            return no_path
        _, _, path = settled[destination_id]
        return self.build_path_result(path)

    def all_shortest_paths(
        self,
        source_tier: Tier,
        destination_tier: Tier,
        alternatives_per_pair: int = 0
    ) -> Union[List[PathResult], Cancelled]:
        """
        Cheapest paths between every node of two tiers.

        Args:
            source_tier: Tier of the path origins
            destination_tier: Tier of the path destinations
            alternatives_per_pair: Extra simple paths to report per pair,
                in increasing cost order

        Returns:
            PathResults grouped by source then destination in input order,
            each cheapest path followed by its alternatives. Unreachable
            pairs are omitted. Cancelled if the token fires.
        """
        if len(self.graph) < 2:
            return []

        sources = self.graph.nodes_in_tier(source_tier)
        destinations = self.graph.nodes_in_tier(destination_tier)
        results = []
        self._units = 0

        try:
            for source in sources:
                settled = self._dijkstra(source.id)
                for destination in destinations:
                    if destination.id == source.id or destination.id not in settled:
                        continue
                    min_cost, _, best_path = settled[destination.id]
                    results.append(self.build_path_result(best_path))
                    if alternatives_per_pair > 0:
                        results.extend(self._alternatives(
                            best_path, min_cost, alternatives_per_pair
                        ))
        except ComputationCancelled as e:
            logger.warning(
                f"All shortest paths {source_tier}->{destination_tier} cancelled "
                f"after {e.completed_units} settled nodes"
            )
            return Cancelled(completed_units=e.completed_units)

        logger.info(
            f"Found {len(results)} paths from {len(sources)} {source_tier} nodes "
            f"to {len(destinations)} {destination_tier} nodes"
        )
        return results

    def _alternatives(
        self,
        best_path: Tuple[str, ...],
        min_cost: float,
        limit: int
    ) -> List[PathResult]:
        """Next cheapest simple paths for a pair, excluding the best one."""
        graph = self.materialised_graph()
        candidates = nx.shortest_simple_paths(graph, best_path[0], best_path[-1], weight='weight')

        alternatives = []
        for path in islice(candidates, limit + 1):
            check_cancelled(self.cancel_token, self._units)
            if tuple(path) == best_path:
                continue
            result = self.build_path_result(path, is_optimal=False)
            if result.total_cost == min_cost:
                result = result.model_copy(update={'is_optimal': True})
            alternatives.append(result)
            if len(alternatives) == limit:
                break
        return alternatives

    def find_all_paths(
        self,
        source_id: str,
        destination_id: str,
        max_hops: Optional[int] = None
    ) -> List[PathResult]:
        """
        Find all constraint-satisfying simple paths between two nodes.

        Exhaustive: intended for small networks and for checking search
        results.

        Args:
            source_id: Source node ID
            destination_id: Destination node ID
            max_hops: Maximum number of hops (default: unlimited)

        Returns:
            PathResults sorted by (cost, hops, node ids); the cheapest ones
            are marked optimal. Empty if none exist.
        """
        if source_id == destination_id:
            return []
        if source_id not in self.graph or destination_id not in self.graph:
            return []

        paths = nx.all_simple_paths(
            self.materialised_graph(),
            source_id,
            destination_id,
            cutoff=max_hops
        )
        results = [self.build_path_result(path, is_optimal=False) for path in paths]
        if not results:
            return []

        results.sort(key=lambda r: (r.total_cost, r.num_hops, tuple(r.path)))
        min_cost = results[0].total_cost
        return [
            r.model_copy(update={'is_optimal': True}) if r.total_cost == min_cost else r
            for r in results
        ]

    def cost_breakdown(self, path: PathResult) -> "PathCostBreakdown":
        """
        Split the cost of a path found by this engine into its components.

        Args:
            path: Path result over this engine's graph

        Returns:
            PathCostBreakdown with distance, time and spoilage costs
        """
        from coldchain.costs import PathCostBreakdown

        return PathCostBreakdown.from_scores(self._path_scores(path.path))
