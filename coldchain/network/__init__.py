"""
Network modelling and route finding for the tiered supply chain.

This module provides distance calculation, the tiered graph view of a
node snapshot, shortest-path search and greedy route sequencing.
"""

from .geo import haversine_km
from .graph_builder import TieredNetworkGraph, EdgeScorer
from .route_finder import ShortestPathEngine, build_legs
from .sequencer import GreedyRouteSequencer

__all__ = [
    'haversine_km',
    'TieredNetworkGraph',
    'EdgeScorer',
    'ShortestPathEngine',
    'build_legs',
    'GreedyRouteSequencer',
]
