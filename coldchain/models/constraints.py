"""Optimization constraints supplied with every engine computation."""

from pydantic import BaseModel, ConfigDict, Field

from coldchain.constants import (
    DEFAULT_MAX_DELIVERY_TIME_HOURS,
    DEFAULT_MAX_DISTANCE_KM,
    DEFAULT_MAX_SPOILAGE_PERCENT,
)


class OptimizationConstraints(BaseModel):
    """
    Per-leg limits and conditions for a routing computation.

    The ambient temperature has no default: every cost computation must be
    told the temperature it runs at.

    Attributes:
        ambient_temperature_c: Outside temperature during transit (°C)
        max_distance_km: Longest acceptable leg
        max_delivery_time_hours: Longest acceptable leg duration
        max_spoilage_percent: Highest acceptable spoilage risk on a leg
        temperature_priority: Amplify the spoilage penalty in edge costs
    """
    ambient_temperature_c: float = Field(..., description="Ambient temperature (°C)", ge=-90, le=70)
    max_distance_km: float = Field(DEFAULT_MAX_DISTANCE_KM, description="Max leg distance", gt=0)
    max_delivery_time_hours: float = Field(
        DEFAULT_MAX_DELIVERY_TIME_HOURS,
        description="Max leg duration",
        gt=0
    )
    max_spoilage_percent: float = Field(
        DEFAULT_MAX_SPOILAGE_PERCENT,
        description="Max leg spoilage risk",
        ge=0,
        le=100
    )
    temperature_priority: bool = Field(False, description="Prioritise temperature over cost")

    model_config = ConfigDict(frozen=True)
