"""Centralized constants for the route optimization engine.

This module contains the hardcoded figures used across the engine,
including geodesy, per-leg travel speeds, cost weights and the efficiency
blend. Centralizing these values keeps the dashboard modules consistent
and makes them easy to override through EngineSettings.
"""

# ============================================================================
# GEODESY
# ============================================================================

#: Mean Earth radius used by the haversine formula (km)
EARTH_RADIUS_KM = 6371.0


# ============================================================================
# DECAY MODEL
# ============================================================================

#: Degrees above the safe ceiling per e-fold of spoilage rate.
#: exp(excess / 10) roughly doubles the rate every ~7°C.
TEMPERATURE_EXCESS_SCALE_C = 10.0

#: Upper bound of any spoilage / quality-loss percentage
MAX_SPOILAGE_PERCENT = 100.0


# ============================================================================
# TRAVEL SPEEDS (km/h) PER EDGE TYPE
# ============================================================================
# Edge types missing from the speed table use the vehicle's average speed.

#: Producer -> aggregator (farm collection on local roads)
COLLECTION_SPEED_KMH = 40.0

#: Aggregator -> processor (highway trunk haul)
TRUNK_SPEED_KMH = 50.0

#: Processor -> distributor (regional distribution)
DISTRIBUTION_SPEED_KMH = 60.0

#: Distributor -> retail (urban last-mile delivery)
LAST_MILE_SPEED_KMH = 45.0


# ============================================================================
# EDGE COST MODEL
# ============================================================================

#: Operational cost of a vehicle hour (driver, handling), ₹/hour
OPERATIONAL_COST_PER_HOUR = 200.0

#: Cost charged per percentage point of spoilage risk, ₹/%
SPOILAGE_PENALTY_WEIGHT = 50.0

#: Multiplier applied to the spoilage penalty when temperature is prioritised
TEMPERATURE_PRIORITY_MULTIPLIER = 3.0


# ============================================================================
# DEFAULT OPTIMIZATION CONSTRAINTS
# ============================================================================

#: Longest single leg a vehicle is sent on (km)
DEFAULT_MAX_DISTANCE_KM = 50.0

#: Longest single leg in hours
DEFAULT_MAX_DELIVERY_TIME_HOURS = 8.0

#: Highest acceptable spoilage risk on a leg (100 - 95% quality retention)
DEFAULT_MAX_SPOILAGE_PERCENT = 5.0


# ============================================================================
# NETWORK FLOW
# ============================================================================

#: Demand assumed for retail nodes without a demand rate (units)
DEFAULT_RETAIL_DEMAND = 500.0

#: Efficiency blend weights (must sum to 1.0)
QUALITY_WEIGHT = 0.30
COST_WEIGHT = 0.25
TIME_WEIGHT = 0.25
UTILIZATION_WEIGHT = 0.20

#: Cost per km that scores a full 100 on the cost component (₹/km)
REFERENCE_COST_PER_KM = 10.0

#: Cost score points lost per ₹/km above the reference
COST_SCORE_SLOPE = 2.0

#: Time score points lost per hour spent on an average hop
TIME_SCORE_SLOPE = 10.0

#: Efficiency scores are reported on a 0-100 scale
MAX_SCORE = 100.0
