"""
Tests for network flow aggregation and efficiency scoring.
"""

import math
import random

import pytest

from coldchain.analysis import (
    NetworkFlowAggregator,
    calculate_efficiency,
    clamp_score,
    cost_score,
    quality_score,
    time_score,
    utilization_score,
)
from coldchain.config import EfficiencySettings, EfficiencyWeights, EngineSettings
from coldchain.costs import RoutingContext
from coldchain.models import (
    DAIRY_PRODUCTS,
    VEHICLE_TYPES,
    Cancelled,
    InsufficientNodes,
    NetworkFlowResult,
    OptimizationConstraints,
    PathLeg,
    PathResult,
)
from coldchain.network import TieredNetworkGraph
from coldchain.utils import CancellationToken


def make_path(cost, distance, hours, risk, hops=1):
    """Synthetic path result with evenly split legs."""
    ids = [f"s{i}" for i in range(hops + 1)]
    legs = []
    for i in range(hops):
        legs.append(PathLeg(
            from_id=ids[i],
            to_id=ids[i + 1],
            edge_type="lateral",
            distance_km=distance / hops,
            time_hours=hours / hops,
            cost=cost / hops,
            spoilage_risk=risk,
            cumulative_distance_km=distance * (i + 1) / hops,
            cumulative_time_hours=hours * (i + 1) / hops,
            cumulative_cost=cost * (i + 1) / hops,
            cumulative_spoilage_risk=min(100.0, risk * (i + 1)),
        ))
    return PathResult(
        path=ids,
        legs=legs,
        total_distance_km=distance,
        total_time_hours=hours,
        total_cost=cost,
        max_spoilage_risk=risk,
        cumulative_spoilage_risk=min(100.0, risk * hops),
    )


class TestEfficiencyComponents:
    """Tests for the individual efficiency components."""

    @pytest.mark.parametrize("value,expected", [
        (-5.0, 0.0),
        (0.0, 0.0),
        (42.5, 42.5),
        (100.0, 100.0),
        (250.0, 100.0),
        (float("nan"), 0.0),
        (float("inf"), 100.0),
    ])
    def test_clamp_score(self, value, expected):
        """Test scores are clamped to [0, 100] and NaN maps to 0."""
        assert clamp_score(value) == expected

    def test_components_without_paths(self):
        """Test path-based components score 0 without paths."""
        settings = EfficiencySettings()
        assert quality_score([]) == 0.0
        assert cost_score([], settings) == 0.0
        assert time_score([], settings) == 0.0

    def test_quality_score(self):
        """Test quality is 100 minus the mean worst-leg risk."""
        paths = [make_path(100, 10, 1, 2.0), make_path(100, 10, 1, 4.0)]
        assert quality_score(paths) == pytest.approx(97.0)

    def test_cost_score(self):
        """Test cost per km above the reference loses two points per rupee."""
        settings = EfficiencySettings()
        assert cost_score([make_path(250, 10, 1, 0)], settings) == pytest.approx(70.0)
        assert cost_score([make_path(50, 10, 1, 0)], settings) == pytest.approx(100.0)
        assert cost_score([make_path(1000, 10, 1, 0)], settings) == 0.0

    def test_cost_score_zero_distance(self):
        """Test flows without distance score full marks on cost."""
        assert cost_score([make_path(0, 0, 0, 0)], EfficiencySettings()) == 100.0

    def test_time_score_per_hop(self):
        """Test time is scored on hours per hop."""
        settings = EfficiencySettings()
        assert time_score([make_path(10, 10, 2.0, 0, hops=2)], settings) == pytest.approx(90.0)
        assert time_score([make_path(10, 10, 2.0, 0, hops=1)], settings) == pytest.approx(80.0)

    @pytest.mark.parametrize("production,capacity,expected", [
        (300.0, 1000.0, 30.0),
        (0.0, 1000.0, 0.0),
        (500.0, 0.0, 0.0),
        (2000.0, 1000.0, 100.0),
    ])
    def test_utilization_score(self, production, capacity, expected):
        """Test utilisation is production as a share of capacity."""
        assert utilization_score(production, capacity) == pytest.approx(expected)

    def test_blend_without_paths(self):
        """Test only utilisation contributes when nothing is reachable."""
        result = calculate_efficiency([], total_production=300.0, total_capacity=1000.0)
        assert result.utilization_score == pytest.approx(30.0)
        assert result.score == pytest.approx(6.0)

    def test_custom_weights(self):
        """Test the blend uses the configured weights."""
        settings = EfficiencySettings(weights=EfficiencyWeights(quality=1.0, cost=0.0, time=0.0, utilization=0.0))
        result = calculate_efficiency([make_path(100, 10, 1, 10.0)], 0.0, 0.0, settings)
        assert result.score == pytest.approx(90.0)

    @pytest.mark.parametrize("seed", range(10))
    def test_scores_stay_in_range(self, seed):
        """Test every component stays within [0, 100] for random inputs."""
        rng = random.Random(seed)
        paths = [
            make_path(
                cost=rng.uniform(0, 5000),
                distance=rng.uniform(0, 200),
                hours=rng.uniform(0, 20),
                risk=rng.uniform(0, 100),
                hops=rng.randint(1, 4),
            )
            for _ in range(rng.randint(1, 8))
        ]
        result = calculate_efficiency(paths, rng.uniform(0, 5000), rng.uniform(0, 5000))

        for value in result.model_dump().values():
            assert 0.0 <= value <= 100.0
            assert not math.isnan(value)


class TestNetworkFlowAggregator:
    """Tests for NetworkFlowAggregator."""

    @pytest.mark.parametrize("seed", range(10))
    def test_random_networks_score_in_range(self, seed, random_network, cost_model):
        """Test aggregation over random networks and constraints keeps every score in range."""
        rng = random.Random(seed)
        nodes = random_network(seed, size=rng.randint(2, 8))
        context = RoutingContext(
            product=rng.choice(list(DAIRY_PRODUCTS.values())),
            vehicle=rng.choice(list(VEHICLE_TYPES.values())),
            constraints=OptimizationConstraints(
                ambient_temperature_c=rng.uniform(-30.0, 70.0),
                max_distance_km=rng.uniform(1.0, 60.0),
                max_spoilage_percent=rng.uniform(0.0, 100.0),
                temperature_priority=rng.random() < 0.5,
            ),
        )
        result = NetworkFlowAggregator().aggregate(TieredNetworkGraph(nodes), cost_model, context)

        assert isinstance(result, NetworkFlowResult)
        assert result.reachable_pairs <= result.possible_pairs
        assert 0.0 <= result.mean_spoilage_risk <= 100.0
        for value in result.efficiency.model_dump().values():
            assert 0.0 <= value <= 100.0
            assert not math.isnan(value)

    def test_regional_flows(self, regional_network, cost_model, chilled_context):
        """Test every producer/retail pair gets a flow."""
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context)

        assert isinstance(result, NetworkFlowResult)
        assert result.ok
        assert result.reachable_pairs == 6
        assert result.possible_pairs == 6
        assert result.coverage == 1.0
        assert [(f.source_id, f.destination_id) for f in result.flows][:3] == [
            ("farm-1", "shop-1"), ("farm-1", "shop-2"), ("farm-1", "shop-3"),
        ]

    def test_flow_volumes(self, regional_network, cost_model, chilled_context):
        """Test volumes are min(production, demand) with the default demand."""
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context)
        volumes = {(f.source_id, f.destination_id): f.volume for f in result.flows}

        assert volumes[("farm-1", "shop-1")] == 200.0
        assert volumes[("farm-1", "shop-2")] == 600.0
        assert volumes[("farm-1", "shop-3")] == 500.0
        assert volumes[("farm-2", "shop-3")] == 300.0
        assert result.total_volume == pytest.approx(sum(volumes.values()))

    def test_default_demand_setting(self, regional_network, cost_model, chilled_context):
        """Test the default retail demand is configurable."""
        settings = EngineSettings.model_validate({"efficiency": {"default_retail_demand": 100.0}})
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator(settings).aggregate(graph, cost_model, chilled_context)
        volumes = {(f.source_id, f.destination_id): f.volume for f in result.flows}
        assert volumes[("farm-1", "shop-3")] == 100.0

    def test_totals(self, regional_network, cost_model, chilled_context):
        """Test network totals are sums over the flow paths."""
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context)
        paths = [f.path for f in result.flows]

        assert result.total_cost == pytest.approx(sum(p.total_cost for p in paths))
        assert result.total_distance_km == pytest.approx(sum(p.total_distance_km for p in paths))
        assert result.total_time_hours == pytest.approx(sum(p.total_time_hours for p in paths))
        assert result.mean_spoilage_risk == pytest.approx(
            sum(p.max_spoilage_risk for p in paths) / len(paths)
        )

    def test_utilization_counts_visible_nodes(self, regional_network, cost_model, chilled_context):
        """Test hidden capacity is left out of utilisation."""
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context)
        assert result.efficiency.utilization_score == pytest.approx(900.0 / 14100.0 * 100.0)
        assert 0.0 <= result.network_efficiency <= 100.0

    def test_unreachable_pairs(self, three_node_network, cost_model, hot_context, node_factory):
        """Test pairs without a path are counted as possible but not reachable."""
        nodes = three_node_network + [node_factory("far-shop", "retail", 1.0, 1.0)]
        result = NetworkFlowAggregator().aggregate(TieredNetworkGraph(nodes), cost_model, hot_context)

        assert result.possible_pairs == 2
        assert result.reachable_pairs == 1
        assert result.coverage == 0.5

    def test_no_producers(self, node_factory, cost_model, chilled_context):
        """Test a network without producers has no flows but still scores."""
        nodes = [
            node_factory("dc", "distributor", 0.0, 0.0, capacity=100.0),
            node_factory("shop", "retail", 0.0, 0.1),
        ]
        result = NetworkFlowAggregator().aggregate(TieredNetworkGraph(nodes), cost_model, chilled_context)

        assert result.flows == []
        assert result.possible_pairs == 0
        assert result.total_cost == 0.0
        assert result.efficiency.quality_score == 0.0

    @pytest.mark.parametrize("count", [0, 1])
    def test_insufficient_nodes(self, count, three_node_network, cost_model, chilled_context):
        """Test fewer than two visible nodes is reported."""
        graph = TieredNetworkGraph(three_node_network[:count])
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context)

        assert isinstance(result, InsufficientNodes)
        assert result.visible_count == count

    def test_cancelled(self, regional_network, cost_model, chilled_context):
        """Test cancellation passes through."""
        token = CancellationToken()
        token.cancel()
        graph = TieredNetworkGraph(regional_network)
        result = NetworkFlowAggregator().aggregate(graph, cost_model, chilled_context, token)
        assert isinstance(result, Cancelled)
