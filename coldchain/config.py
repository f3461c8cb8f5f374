"""Engine settings.

Groups the tunable figures from ``constants`` into validated pydantic
models. Defaults reproduce the dashboard's behaviour; callers override
single values with keyword arguments or load a whole mapping with
``EngineSettings.model_validate``.

Example:
    settings = EngineSettings(
        costs=CostSettings(edge_speeds={EdgeType.COLLECTION: 35.0}),
    )
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coldchain import constants
from coldchain.models.edge import EdgeType


def default_edge_speeds() -> Dict[EdgeType, float]:
    """Average speeds (km/h) for the adjacent-tier leg types."""
    return {
        EdgeType.COLLECTION: constants.COLLECTION_SPEED_KMH,
        EdgeType.TRUNK: constants.TRUNK_SPEED_KMH,
        EdgeType.DISTRIBUTION: constants.DISTRIBUTION_SPEED_KMH,
        EdgeType.LAST_MILE: constants.LAST_MILE_SPEED_KMH,
    }


class CostSettings(BaseModel):
    """
    Weights of the edge cost model.

    Attributes:
        operational_cost_per_hour: Cost of a vehicle hour (₹/hour)
        spoilage_penalty_weight: Cost per percentage point of spoilage (₹/%)
        temperature_priority_multiplier: Penalty amplification when
            temperature is prioritised
        edge_speeds: Speed per edge type; missing types use the vehicle speed
        honour_vehicle_cooling: Temperature-controlled vehicles carry the
            product at its optimal temperature; when False every leg is
            scored at the ambient temperature
    """
    operational_cost_per_hour: float = Field(constants.OPERATIONAL_COST_PER_HOUR, ge=0)
    spoilage_penalty_weight: float = Field(constants.SPOILAGE_PENALTY_WEIGHT, ge=0)
    temperature_priority_multiplier: float = Field(constants.TEMPERATURE_PRIORITY_MULTIPLIER, ge=1)
    edge_speeds: Dict[EdgeType, float] = Field(default_factory=default_edge_speeds)
    honour_vehicle_cooling: bool = True

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def speeds_positive(self) -> "CostSettings":
        """Every configured speed must be positive."""
        for edge_type, speed in self.edge_speeds.items():
            if speed <= 0:
                raise ValueError(f"Speed for {edge_type.value} must be positive, got {speed}")
        return self

    def speed_for(self, edge_type: EdgeType) -> Optional[float]:
        """Configured speed for an edge type, or None to use the vehicle speed."""
        return self.edge_speeds.get(edge_type)


class EfficiencyWeights(BaseModel):
    """Weights of the network efficiency blend (must sum to 1)."""
    quality: float = Field(constants.QUALITY_WEIGHT, ge=0, le=1)
    cost: float = Field(constants.COST_WEIGHT, ge=0, le=1)
    time: float = Field(constants.TIME_WEIGHT, ge=0, le=1)
    utilization: float = Field(constants.UTILIZATION_WEIGHT, ge=0, le=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def weights_sum_to_one(self) -> "EfficiencyWeights":
        total = self.quality + self.cost + self.time + self.utilization
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Efficiency weights must sum to 1.0, got {total:.4f}")
        return self


class EfficiencySettings(BaseModel):
    """Normalisation references for the efficiency components."""
    weights: EfficiencyWeights = Field(default_factory=EfficiencyWeights)
    reference_cost_per_km: float = Field(constants.REFERENCE_COST_PER_KM, ge=0)
    cost_score_slope: float = Field(constants.COST_SCORE_SLOPE, ge=0)
    time_score_slope: float = Field(constants.TIME_SCORE_SLOPE, ge=0)
    default_retail_demand: float = Field(constants.DEFAULT_RETAIL_DEMAND, ge=0)

    model_config = ConfigDict(frozen=True)


class EngineSettings(BaseModel):
    """All tunable engine settings."""
    costs: CostSettings = Field(default_factory=CostSettings)
    efficiency: EfficiencySettings = Field(default_factory=EfficiencySettings)

    model_config = ConfigDict(frozen=True)
