"""Vehicle profile model for transport legs."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VehicleProfile(BaseModel):
    """
    Represents a vehicle type used to move product between nodes.

    Attributes:
        id: Unique vehicle type identifier
        name: Vehicle name
        cost_per_km: Running cost per kilometre (₹/km)
        average_speed_kmh: Average travel speed
        temperature_controlled: Whether the cargo space holds a set temperature
        min_temp_c: Lowest temperature the unit can hold (controlled vehicles)
        max_temp_c: Highest temperature the unit can hold (controlled vehicles)
        capacity: Load capacity (volume units)
    """
    id: str = Field(..., min_length=1, description="Unique vehicle identifier")
    name: str = Field(..., description="Vehicle name")
    cost_per_km: float = Field(..., description="Cost per km", ge=0)
    average_speed_kmh: float = Field(..., description="Average speed in km/h", gt=0)
    temperature_controlled: bool = Field(False, description="Cargo temperature control available")
    min_temp_c: Optional[float] = Field(None, description="Lowest controllable temperature")
    max_temp_c: Optional[float] = Field(None, description="Highest controllable temperature")
    capacity: float = Field(0.0, description="Load capacity", ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_temperature_band(self) -> "VehicleProfile":
        """A controlled band must be ordered."""
        if (
            self.min_temp_c is not None
            and self.max_temp_c is not None
            and self.min_temp_c > self.max_temp_c
        ):
            raise ValueError("min_temp_c must be <= max_temp_c")
        return self

    def __str__(self) -> str:
        control = "refrigerated" if self.temperature_controlled else "ambient"
        return f"{self.name} [{control}, {self.average_speed_kmh:g} km/h, ₹{self.cost_per_km:g}/km]"


# Reference fleet offered by the dashboard vehicle selector
VEHICLE_TYPES: Dict[str, VehicleProfile] = {
    vehicle.id: vehicle
    for vehicle in (
        VehicleProfile(
            id="milk_tanker",
            name="Milk Tanker",
            cost_per_km=15.0,
            average_speed_kmh=40.0,
            temperature_controlled=False,
            capacity=2000.0,
        ),
        VehicleProfile(
            id="refrigerated_truck",
            name="Refrigerated Truck",
            cost_per_km=20.0,
            average_speed_kmh=50.0,
            temperature_controlled=True,
            min_temp_c=-20.0,
            max_temp_c=8.0,
            capacity=10000.0,
        ),
        VehicleProfile(
            id="distribution_truck",
            name="Distribution Truck",
            cost_per_km=18.0,
            average_speed_kmh=60.0,
            temperature_controlled=True,
            min_temp_c=0.0,
            max_temp_c=8.0,
            capacity=5000.0,
        ),
        VehicleProfile(
            id="delivery_van",
            name="Delivery Van",
            cost_per_km=12.0,
            average_speed_kmh=45.0,
            temperature_controlled=False,
            capacity=500.0,
        ),
    )
}
