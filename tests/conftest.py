"""Pytest configuration and shared fixtures."""

import random

import pytest

from coldchain.costs import EdgeCostModel, RoutingContext
from coldchain.models import (
    VEHICLE_TYPES,
    Node,
    OptimizationConstraints,
    ProductProfile,
    Tier,
    TIER_ORDER,
    VehicleProfile,
)


def make_node(node_id, tier, latitude, longitude, **kwargs):
    """Build a node with a readable default name."""
    return Node(
        id=node_id,
        name=kwargs.pop("name", node_id.replace("-", " ").title()),
        tier=tier,
        latitude=latitude,
        longitude=longitude,
        **kwargs,
    )


def build_random_network(rng, size):
    """
    Random network of `size` nodes spread over ~30 km.

    The first node is always a producer and the last a retail outlet so
    every network has at least one pair to route.
    """
    nodes = []
    for i in range(size):
        if i == 0:
            tier = Tier.PRODUCER
        elif i == size - 1:
            tier = Tier.RETAIL
        else:
            tier = rng.choice(TIER_ORDER)

        kwargs = {"capacity": rng.uniform(0, 1000)}
        if tier == Tier.PRODUCER:
            kwargs["production_rate"] = rng.uniform(0, 800)
        elif tier == Tier.RETAIL and rng.random() < 0.7:
            kwargs["demand_rate"] = rng.uniform(0, 600)

        nodes.append(make_node(
            f"n{i:02d}",
            tier,
            12.9 + rng.uniform(0, 0.25),
            77.5 + rng.uniform(0, 0.25),
            **kwargs,
        ))
    return nodes


@pytest.fixture
def node_factory():
    """Fixture for building nodes in tests."""
    return make_node


@pytest.fixture
def random_network():
    """Fixture returning a seeded random network builder."""
    def _build(seed, size=6):
        return build_random_network(random.Random(seed), size)
    return _build


@pytest.fixture
def milk():
    """Fixture for a milk product safe between 0 and 8°C."""
    return ProductProfile(
        id="test-milk",
        name="Test Milk",
        category="milk",
        min_temp_c=0.0,
        optimal_temp_c=4.0,
        max_temp_c=8.0,
        refrigerated_spoilage_rate=0.1,
        ambient_spoilage_rate=2.0,
        refrigerated_shelf_life_hours=168.0,
        ambient_shelf_life_hours=8.0,
    )


@pytest.fixture
def tanker():
    """Fixture for an uncooled tanker (₹15/km, 40 km/h)."""
    return VehicleProfile(
        id="tanker",
        name="Tanker",
        cost_per_km=15.0,
        average_speed_kmh=40.0,
    )


@pytest.fixture
def reefer():
    """Fixture for the refrigerated truck of the reference fleet."""
    return VEHICLE_TYPES["refrigerated_truck"]


@pytest.fixture
def hot_constraints():
    """Fixture for 25°C ambient with legs capped at 15 km."""
    return OptimizationConstraints(ambient_temperature_c=25.0, max_distance_km=15.0)


@pytest.fixture
def default_constraints():
    """Fixture for 25°C ambient with default limits."""
    return OptimizationConstraints(ambient_temperature_c=25.0)


@pytest.fixture
def cost_model():
    """Fixture for the edge cost model with default settings."""
    return EdgeCostModel()


@pytest.fixture
def hot_context(milk, tanker, hot_constraints):
    """Fixture for an uncooled tanker moving milk at 25°C."""
    return RoutingContext(product=milk, vehicle=tanker, constraints=hot_constraints)


@pytest.fixture
def chilled_context(milk, reefer, default_constraints):
    """Fixture for a refrigerated truck moving milk with default limits."""
    return RoutingContext(product=milk, vehicle=reefer, constraints=default_constraints)


@pytest.fixture
def three_node_network():
    """
    Producer P (0,0), Aggregator A (0,0.1), Retail R (0,0.2).

    Consecutive nodes are ~11.1 km apart; P and R are ~22.2 km apart.
    """
    return [
        make_node("P", Tier.PRODUCER, 0.0, 0.0, production_rate=400.0, capacity=500.0),
        make_node("A", Tier.AGGREGATOR, 0.0, 0.1, capacity=1000.0),
        make_node("R", Tier.RETAIL, 0.0, 0.2, demand_rate=250.0, capacity=100.0),
    ]


@pytest.fixture
def tie_network():
    """
    Two aggregators at the same spot between a producer and a retailer.

    Both two-hop paths cost exactly the same, as does the three-hop path
    through both aggregators. 'agg-b' is listed before 'agg-a'.
    """
    return [
        make_node("P", Tier.PRODUCER, 0.0, 0.0),
        make_node("agg-b", Tier.AGGREGATOR, 0.0, 0.1),
        make_node("agg-a", Tier.AGGREGATOR, 0.0, 0.1),
        make_node("R", Tier.RETAIL, 0.0, 0.2),
    ]


@pytest.fixture
def detour_network():
    """
    Direct aggregator A and a detour aggregator B off the line P-R.

    P -> A -> R is cheapest, P -> B -> R is the next cheapest path.
    """
    return [
        make_node("P", Tier.PRODUCER, 0.0, 0.0),
        make_node("A", Tier.AGGREGATOR, 0.0, 0.1),
        make_node("B", Tier.AGGREGATOR, 0.05, 0.1),
        make_node("R", Tier.RETAIL, 0.0, 0.2),
    ]


@pytest.fixture
def regional_network():
    """Ten nodes across all five tiers around Bengaluru, one hidden."""
    return [
        make_node("farm-1", Tier.PRODUCER, 12.90, 77.50, production_rate=600.0, capacity=800.0),
        make_node("farm-2", Tier.PRODUCER, 12.95, 77.52, production_rate=300.0, capacity=400.0),
        make_node("bmc-1", Tier.AGGREGATOR, 12.93, 77.56, capacity=2000.0),
        make_node("bmc-2", Tier.AGGREGATOR, 12.98, 77.55, capacity=1500.0, is_visible=False),
        make_node("plant-1", Tier.PROCESSOR, 12.97, 77.60, capacity=5000.0),
        make_node("dc-1", Tier.DISTRIBUTOR, 13.00, 77.62, capacity=3000.0),
        make_node("dc-2", Tier.DISTRIBUTOR, 12.94, 77.65, capacity=2500.0),
        make_node("shop-1", Tier.RETAIL, 13.02, 77.64, demand_rate=200.0, capacity=150.0),
        make_node("shop-2", Tier.RETAIL, 12.96, 77.68, demand_rate=900.0, capacity=150.0),
        make_node("shop-3", Tier.RETAIL, 12.92, 77.66, capacity=100.0),
    ]
