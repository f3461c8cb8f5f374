"""
Greedy visiting sequence over the visible nodes.

Nearest-neighbour heuristic on the scalar edge cost: fast (O(n²) edge
evaluations) and deterministic, with no optimality guarantee.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Union

from coldchain.models import (
    Cancelled,
    InsufficientNodes,
    InvalidInput,
    Node,
    RouteSequence,
    ValidationIssue,
)
from coldchain.utils import CancellationToken, ComputationCancelled, check_cancelled

from .route_finder import build_legs

if TYPE_CHECKING:
    from coldchain.costs import EdgeCostModel, EdgeEvaluation, RoutingContext

logger = logging.getLogger(__name__)


class GreedyRouteSequencer:
    """
    Orders visible nodes into a single tour by repeatedly moving to the
    cheapest unvisited node.

    Legs use the vehicle's own speed and ignore tier order. A leg that
    satisfies every constraint is always preferred; when none is left the
    cheapest leg is taken anyway and counted as a constraint violation.
    Ties go to the node listed first.
    """

    #: Sequencing needs a start node and at least one more stop
    MIN_NODES = 2

    def __init__(
        self,
        cost_model: "EdgeCostModel",
        context: "RoutingContext",
        cancel_token: Optional[CancellationToken] = None
    ):
        """
        Initialize sequencer.

        Args:
            cost_model: Edge cost model
            context: Product, vehicle and constraints
            cancel_token: Optional token checked once per step
        """
        self.cost_model = cost_model
        self.context = context
        self.cancel_token = cancel_token

    def _evaluate(self, from_node: Node, to_node: Node) -> "EdgeEvaluation":
        return self.cost_model.score_in_context(
            from_node,
            to_node,
            self.context,
            use_edge_speeds=False,
            enforce_tier_order=False,
        )

    @staticmethod
    def _cheapest(evaluations: List["EdgeEvaluation"], accepted_only: bool) -> Optional[int]:
        """Index of the cheapest evaluation (first one on ties)."""
        best = None
        for i, evaluation in enumerate(evaluations):
            if accepted_only and not evaluation.accepted:
                continue
            if best is None or evaluation.score.cost < evaluations[best].score.cost:
                best = i
        return best

    def sequence(
        self,
        nodes: Iterable[Node],
        start_node_id: Optional[str] = None
    ) -> Union[RouteSequence, InsufficientNodes, InvalidInput, Cancelled]:
        """
        Build a visiting sequence.

        Args:
            nodes: Node records in input order (hidden ones are skipped)
            start_node_id: First node to visit (default: first visible node)

        Returns:
            RouteSequence visiting every visible node once, InsufficientNodes
            for fewer than two visible nodes, InvalidInput for an unknown or
            hidden start node, or Cancelled
        """
        visible: List[Node] = []
        seen = set()
        for node in nodes:
            if node.is_visible and node.id not in seen:
                visible.append(node)
                seen.add(node.id)

        if len(visible) < self.MIN_NODES:
            return InsufficientNodes(visible_count=len(visible), required=self.MIN_NODES)

        if start_node_id is None:
            current = visible[0]
        else:
            current = next((n for n in visible if n.id == start_node_id), None)
            if current is None:
                logger.warning(f"Sequencing start node {start_node_id!r} is unknown or hidden")
                return InvalidInput(issues=[ValidationIssue(
                    field="start_node_id",
                    code="unknown_node",
                    value=start_node_id,
                )])

        unvisited = [n for n in visible if n.id != current.id]
        order = [current.id]
        chosen: List["EdgeEvaluation"] = []

        try:
            while unvisited:
                check_cancelled(self.cancel_token, len(chosen))
                evaluations = [self._evaluate(current, candidate) for candidate in unvisited]

                index = self._cheapest(evaluations, accepted_only=True)
                if index is None:
                    index = self._cheapest(evaluations, accepted_only=False)

                chosen.append(evaluations[index])
                current = unvisited.pop(index)
                order.append(current.id)
        except ComputationCancelled as e:
            logger.warning(f"Route sequencing cancelled after {e.completed_units} legs")
            return Cancelled(completed_units=e.completed_units)

        scores = [evaluation.score for evaluation in chosen]
        legs, _ = build_legs(
            scores,
            self.context.product,
            within_constraints=[evaluation.accepted for evaluation in chosen],
        )
        violations = sum(1 for evaluation in chosen if not evaluation.accepted)
        last = legs[-1]

        logger.info(
            f"Sequenced {len(order)} nodes: {last.cumulative_distance_km:.1f}km, "
            f"{violations} constraint violations"
        )

        return RouteSequence(
            node_ids=order,
            legs=legs,
            total_distance_km=last.cumulative_distance_km,
            total_time_hours=last.cumulative_time_hours,
            total_cost=last.cumulative_cost,
            max_spoilage_risk=max(score.spoilage_risk for score in scores),
            constraint_violations=violations,
        )
