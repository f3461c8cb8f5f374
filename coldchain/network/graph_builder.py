"""
Tiered network graph for the perishable supply chain.

This module builds a NetworkX directed graph from Node records. Only the
visible nodes become graph nodes; edges are not stored but derived on
demand from tier ordering, so the same graph can be routed under any
product, vehicle and constraint combination.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import networkx as nx

from coldchain.models import EdgeRejection, EdgeScore, Node, Tier, TIER_ORDER

logger = logging.getLogger(__name__)

#: Scores the leg between two nodes (see EdgeCostModel.edge_weight)
EdgeScorer = Callable[[Node, Node], Union[EdgeScore, EdgeRejection]]


class TieredNetworkGraph:
    """
    Read-only view of the visible nodes of a network snapshot.

    Candidate successors of a node are every other visible node in the same
    or a later tier; whether a candidate leg is usable is decided by the
    edge cost model, not by the graph.

    Example:
        graph = TieredNetworkGraph(nodes)
        for neighbour in graph.neighbors("farm-1"):
            print(neighbour.id, neighbour.tier)
    """

    def __init__(self, nodes: Iterable[Node]):
        """
        Build the graph from node records.

        Hidden nodes are recorded but excluded. If an ID repeats, the first
        visible record wins.

        Args:
            nodes: Node records in input order
        """
        self.graph = nx.DiGraph()
        self._nodes: Dict[str, Node] = {}
        self._by_tier: Dict[Tier, List[Node]] = {tier: [] for tier in TIER_ORDER}
        self._hidden: List[str] = []

        for node in nodes:
            if not node.is_visible:
                self._hidden.append(node.id)
                continue
            if node.id in self._nodes:
                logger.warning(f"Duplicate node id {node.id!r} ignored")
                continue

            self._nodes[node.id] = node
            self._by_tier[node.tier].append(node)
            self.graph.add_node(
                node.id,
                name=node.name,
                tier=node.tier,
                latitude=node.latitude,
                longitude=node.longitude,
                capacity=node.capacity,
                node_obj=node,
            )

        logger.debug(
            f"Built tiered graph: {len(self._nodes)} visible nodes, "
            f"{len(self._hidden)} hidden"
        )

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    @property
    def visible_nodes(self) -> List[Node]:
        """Visible nodes in input order."""
        return list(self._nodes.values())

    @property
    def hidden_node_ids(self) -> List[str]:
        """IDs of nodes excluded because they are hidden."""
        return list(self._hidden)

    def has_node(self, node_id: str) -> bool:
        """Check if a visible node with this ID exists."""
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Optional[Node]:
        """
        Get a visible node by ID.

        Args:
            node_id: Node ID

        Returns:
            Node, or None if the ID is unknown or hidden
        """
        return self._nodes.get(node_id)

    def nodes_in_tier(self, tier: Tier) -> List[Node]:
        """
        Get the visible nodes of one tier.

        Args:
            tier: Tier to select

        Returns:
            Nodes in input order
        """
        return list(self._by_tier[Tier.parse(tier)])

    def get_producer_nodes(self) -> List[Node]:
        """Get all visible producers."""
        return self.nodes_in_tier(Tier.PRODUCER)

    def get_retail_nodes(self) -> List[Node]:
        """Get all visible retail outlets."""
        return self.nodes_in_tier(Tier.RETAIL)

    def neighbors(self, node_id: str) -> List[Node]:
        """
        Candidate successors of a node.

        Args:
            node_id: Origin node ID

        Returns:
            Visible nodes in the same or a later tier, excluding the node
            itself, ordered by tier then input order. Empty for unknown or
            hidden IDs.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return []

        candidates = []
        for tier in TIER_ORDER[node.tier.rank:]:
            candidates.extend(n for n in self._by_tier[tier] if n.id != node_id)
        return candidates

    def total_capacity(self) -> float:
        """Sum of visible node capacities."""
        return sum(node.capacity for node in self._nodes.values())

    def to_networkx(self, scorer: EdgeScorer) -> nx.DiGraph:
        """
        Materialise the accepted edges as a NetworkX graph.

        Args:
            scorer: Function scoring the leg between two nodes

        Returns:
            Copy of the node graph with one edge per accepted leg. Edge
            attributes: 'weight' (scalar cost) and 'score' (EdgeScore).
        """
        materialised = self.graph.copy()
        for node in self._nodes.values():
            for neighbour in self.neighbors(node.id):
                result = scorer(node, neighbour)
                if not result.ok:
                    continue
                materialised.add_edge(
                    node.id,
                    neighbour.id,
                    weight=result.cost,
                    score=result,
                )
        return materialised

    def visualize_graph(self, scorer: EdgeScorer) -> Dict[str, Any]:
        """
        Generate graph visualization data for the map.

        Args:
            scorer: Function scoring the leg between two nodes

        Returns:
            Dictionary with 'nodes' and 'edges' for visualization
        """
        materialised = self.to_networkx(scorer)

        nodes_data = []
        for node_id, attrs in materialised.nodes(data=True):
            nodes_data.append({
                'id': node_id,
                'label': attrs.get('name', node_id),
                'tier': str(attrs['tier']),
                'lat': attrs['latitude'],
                'lng': attrs['longitude'],
            })

        edges_data = []
        for from_id, to_id, attrs in materialised.edges(data=True):
            score = attrs['score']
            edges_data.append({
                'from': from_id,
                'to': to_id,
                'type': str(score.edge_type),
                'distance_km': score.distance_km,
                'time_hours': score.time_hours,
                'spoilage_risk': score.spoilage_risk,
                'cost': score.cost,
            })

        return {
            'nodes': nodes_data,
            'edges': edges_data,
        }
