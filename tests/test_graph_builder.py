"""
Tests for the tiered network graph.
"""

import networkx as nx
import pytest

from coldchain.models import Tier
from coldchain.network import ShortestPathEngine, TieredNetworkGraph


class TestTieredNetworkGraph:
    """Tests for TieredNetworkGraph."""

    def test_hidden_nodes_excluded(self, regional_network):
        """Test hidden nodes are not part of the graph."""
        graph = TieredNetworkGraph(regional_network)
        assert len(graph) == 9
        assert "bmc-2" not in graph
        assert graph.get_node("bmc-2") is None
        assert graph.hidden_node_ids == ["bmc-2"]
        assert isinstance(graph.graph, nx.DiGraph)
        assert graph.graph.number_of_nodes() == 9
        assert graph.graph.number_of_edges() == 0

    def test_nodes_in_tier(self, regional_network):
        """Test tier selection keeps input order."""
        graph = TieredNetworkGraph(regional_network)
        assert [n.id for n in graph.nodes_in_tier(Tier.RETAIL)] == ["shop-1", "shop-2", "shop-3"]
        assert [n.id for n in graph.nodes_in_tier("aggregator")] == ["bmc-1"]
        assert [n.id for n in graph.get_producer_nodes()] == ["farm-1", "farm-2"]

    def test_neighbors_same_or_later_tier(self, regional_network):
        """Test candidate successors are ordered by tier then input order."""
        graph = TieredNetworkGraph(regional_network)
        neighbours = [n.id for n in graph.neighbors("dc-1")]
        assert neighbours == ["dc-2", "shop-1", "shop-2", "shop-3"]

    def test_neighbors_exclude_self(self, regional_network):
        """Test a node is never its own neighbour."""
        graph = TieredNetworkGraph(regional_network)
        for node in graph.visible_nodes:
            assert node.id not in [n.id for n in graph.neighbors(node.id)]

    def test_neighbors_of_unknown_node(self, regional_network):
        """Test unknown and hidden IDs have no neighbours."""
        graph = TieredNetworkGraph(regional_network)
        assert graph.neighbors("nope") == []
        assert graph.neighbors("bmc-2") == []

    def test_neighbors_never_earlier_tier(self, regional_network):
        """Test no candidate points to an earlier tier."""
        graph = TieredNetworkGraph(regional_network)
        for node in graph.visible_nodes:
            assert all(n.tier.rank >= node.tier.rank for n in graph.neighbors(node.id))

    def test_duplicate_ids_keep_first(self, node_factory):
        """Test a repeated ID keeps the first visible record."""
        graph = TieredNetworkGraph([
            node_factory("X", Tier.PRODUCER, 0.0, 0.0),
            node_factory("X", Tier.RETAIL, 1.0, 1.0),
        ])
        assert len(graph) == 1
        assert graph.get_node("X").tier == Tier.PRODUCER

    def test_empty_graph(self):
        """Test an empty node list builds an empty graph."""
        graph = TieredNetworkGraph([])
        assert len(graph) == 0
        assert graph.visible_nodes == []
        assert graph.total_capacity() == 0

    def test_total_capacity_visible_only(self, regional_network):
        """Test capacity sums skip hidden nodes."""
        graph = TieredNetworkGraph(regional_network)
        expected = sum(n.capacity for n in regional_network if n.is_visible)
        assert graph.total_capacity() == pytest.approx(expected)


class TestMaterialisedGraph:
    """Tests for to_networkx and visualize_graph."""

    def test_to_networkx_has_only_accepted_edges(self, regional_network, cost_model, chilled_context):
        """Test materialised edges are forward-only accepted legs."""
        graph = TieredNetworkGraph(regional_network)
        engine = ShortestPathEngine(graph, cost_model, chilled_context)
        materialised = graph.to_networkx(engine.score_edge)

        assert set(materialised.nodes) == {n.id for n in graph.visible_nodes}
        assert materialised.number_of_edges() > 0
        for from_id, to_id, attrs in materialised.edges(data=True):
            assert graph.get_node(to_id).tier.rank >= graph.get_node(from_id).tier.rank
            assert attrs["weight"] == attrs["score"].cost
            assert attrs["score"].ok

    def test_rejected_edges_absent(self, three_node_network, cost_model, hot_context):
        """Test legs beyond the distance limit are not materialised."""
        graph = TieredNetworkGraph(three_node_network)
        engine = ShortestPathEngine(graph, cost_model, hot_context)
        materialised = graph.to_networkx(engine.score_edge)
        assert set(materialised.edges) == {("P", "A"), ("A", "R")}

    def test_visualize_graph(self, three_node_network, cost_model, hot_context):
        """Test visualization data lists nodes and accepted edges."""
        graph = TieredNetworkGraph(three_node_network)
        engine = ShortestPathEngine(graph, cost_model, hot_context)
        data = graph.visualize_graph(engine.score_edge)

        assert [n["id"] for n in data["nodes"]] == ["P", "A", "R"]
        assert data["nodes"][0]["tier"] == "producer"
        assert len(data["edges"]) == 2
        edge = data["edges"][0]
        assert edge["from"] == "P" and edge["to"] == "A"
        assert edge["type"] == "collection"
        assert edge["distance_km"] == pytest.approx(11.12, abs=0.01)
