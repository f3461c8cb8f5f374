"""
Network flow aggregation.

Routes every visible producer to every visible retail outlet along its
cheapest constraint-satisfying path and summarises the resulting flows
into network totals and an efficiency score.
"""

import logging
from typing import Optional, Union

from coldchain.config import EngineSettings
from coldchain.costs import EdgeCostModel, RoutingContext
from coldchain.models import (
    Cancelled,
    FlowRecord,
    InsufficientNodes,
    NetworkFlowResult,
    Node,
    Tier,
)
from coldchain.network import ShortestPathEngine, TieredNetworkGraph
from coldchain.utils import CancellationToken

from .efficiency import calculate_efficiency

logger = logging.getLogger(__name__)


class NetworkFlowAggregator:
    """
    Summarises producer -> retail flows over a network snapshot.

    Example:
        aggregator = NetworkFlowAggregator()
        result = aggregator.aggregate(graph, EdgeCostModel(), context)
        if result.ok:
            print(f"Efficiency: {result.network_efficiency:.1f}")
    """

    #: Flow aggregation needs at least a producer and a retail outlet
    MIN_NODES = 2

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize aggregator.

        Args:
            settings: Engine settings (defaults if None)
        """
        self.settings = settings or EngineSettings()

    def flow_volume(self, producer: Node, retailer: Node) -> float:
        """
        Volume a producer/retail pair would carry.

        Args:
            producer: Producer node (no production rate counts as 0)
            retailer: Retail node (no demand rate uses the default demand)

        Returns:
            min(production rate, demand rate)
        """
        production = producer.production_rate or 0.0
        demand = retailer.demand_rate
        if demand is None:
            demand = self.settings.efficiency.default_retail_demand
        return min(production, demand)

    def aggregate(
        self,
        graph: TieredNetworkGraph,
        cost_model: EdgeCostModel,
        context: RoutingContext,
        cancel_token: Optional[CancellationToken] = None
    ) -> Union[NetworkFlowResult, InsufficientNodes, Cancelled]:
        """
        Aggregate producer -> retail flows.

        Args:
            graph: Tiered network graph
            cost_model: Edge cost model
            context: Product, vehicle and constraints
            cancel_token: Optional cancellation token

        Returns:
            NetworkFlowResult, InsufficientNodes for fewer than two visible
            nodes, or Cancelled
        """
        if len(graph) < self.MIN_NODES:
            return InsufficientNodes(visible_count=len(graph), required=self.MIN_NODES)

        engine = ShortestPathEngine(graph, cost_model, context, cancel_token=cancel_token)
        paths = engine.all_shortest_paths(Tier.PRODUCER, Tier.RETAIL)
        if isinstance(paths, Cancelled):
            return paths

        flows = []
        for path in paths:
            producer = graph.get_node(path.origin)
            retailer = graph.get_node(path.destination)
            flows.append(FlowRecord(
                source_id=producer.id,
                destination_id=retailer.id,
                volume=self.flow_volume(producer, retailer),
                path=path,
            ))

        producers = graph.get_producer_nodes()
        retailers = graph.get_retail_nodes()
        total_production = sum(p.production_rate or 0.0 for p in producers)

        efficiency = calculate_efficiency(
            paths,
            total_production=total_production,
            total_capacity=graph.total_capacity(),
            settings=self.settings.efficiency,
        )

        mean_risk = 0.0
        if paths:
            mean_risk = sum(p.max_spoilage_risk for p in paths) / len(paths)

        result = NetworkFlowResult(
            flows=flows,
            total_cost=sum(p.total_cost for p in paths),
            total_time_hours=sum(p.total_time_hours for p in paths),
            total_distance_km=sum(p.total_distance_km for p in paths),
            mean_spoilage_risk=mean_risk,
            total_volume=sum(f.volume for f in flows),
            reachable_pairs=len(flows),
            possible_pairs=len(producers) * len(retailers),
            efficiency=efficiency,
        )

        logger.info(
            f"Network flow: {result.reachable_pairs}/{result.possible_pairs} pairs reachable, "
            f"efficiency {result.network_efficiency:.1f}"
        )
        return result
