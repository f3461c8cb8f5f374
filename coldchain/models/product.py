"""Product profile model with temperature tolerance and decay rates."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductProfile(BaseModel):
    """
    Perishable product characteristics used by the decay model.

    Business Rules:
    - Inside [min_temp_c, max_temp_c] the product spoils at the refrigerated rate
    - Outside it the ambient rate applies, scaled up above max_temp_c
    - The ambient rate is never lower than the refrigerated rate

    Attributes:
        id: Unique product identifier
        name: Product name
        category: Product family (milk, fermented, cheese, butter, frozen)
        min_temp_c: Lowest safe temperature
        optimal_temp_c: Ideal holding temperature
        max_temp_c: Safe temperature ceiling
        refrigerated_spoilage_rate: Quality loss inside the safe range (%/hour)
        ambient_spoilage_rate: Quality loss outside the safe range (%/hour)
        refrigerated_shelf_life_hours: Shelf life when kept in range
        ambient_shelf_life_hours: Shelf life at ambient temperature
    """
    id: str = Field(..., min_length=1, description="Unique product identifier")
    name: str = Field(..., description="Product name")
    category: str = Field("milk", description="Product category")
    min_temp_c: float = Field(..., description="Lowest safe temperature (°C)")
    optimal_temp_c: float = Field(..., description="Optimal temperature (°C)")
    max_temp_c: float = Field(..., description="Safe temperature ceiling (°C)")
    refrigerated_spoilage_rate: float = Field(..., description="Spoilage %/hour in range", ge=0)
    ambient_spoilage_rate: float = Field(..., description="Spoilage %/hour out of range", ge=0)
    refrigerated_shelf_life_hours: float = Field(..., description="Refrigerated shelf life", gt=0)
    ambient_shelf_life_hours: float = Field(..., description="Ambient shelf life", gt=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def check_ranges(self) -> "ProductProfile":
        """Validate the temperature band and rate ordering."""
        if not self.min_temp_c <= self.optimal_temp_c <= self.max_temp_c:
            raise ValueError(
                f"Temperatures must satisfy min_temp_c <= optimal_temp_c <= max_temp_c "
                f"(got {self.min_temp_c}, {self.optimal_temp_c}, {self.max_temp_c})"
            )
        if self.ambient_spoilage_rate < self.refrigerated_spoilage_rate:
            raise ValueError("ambient_spoilage_rate must be >= refrigerated_spoilage_rate")
        return self

    def __str__(self) -> str:
        return f"{self.name} ({self.min_temp_c:g}-{self.max_temp_c:g}°C)"


# Reference dairy catalogue used by the dashboard product selector
DAIRY_PRODUCTS: Dict[str, ProductProfile] = {
    product.id: product
    for product in (
        ProductProfile(
            id="whole-milk",
            name="Whole Milk",
            category="milk",
            min_temp_c=0.0,
            optimal_temp_c=2.0,
            max_temp_c=4.0,
            refrigerated_spoilage_rate=0.1,
            ambient_spoilage_rate=2.0,
            refrigerated_shelf_life_hours=168.0,
            ambient_shelf_life_hours=8.0,
        ),
        ProductProfile(
            id="yogurt",
            name="Yogurt",
            category="fermented",
            min_temp_c=0.0,
            optimal_temp_c=2.0,
            max_temp_c=4.0,
            refrigerated_spoilage_rate=0.05,
            ambient_spoilage_rate=1.5,
            refrigerated_shelf_life_hours=336.0,
            ambient_shelf_life_hours=12.0,
        ),
        ProductProfile(
            id="cheese",
            name="Cheese",
            category="cheese",
            min_temp_c=2.0,
            optimal_temp_c=4.0,
            max_temp_c=8.0,
            refrigerated_spoilage_rate=0.02,
            ambient_spoilage_rate=0.8,
            refrigerated_shelf_life_hours=720.0,
            ambient_shelf_life_hours=48.0,
        ),
        ProductProfile(
            id="butter",
            name="Butter",
            category="butter",
            min_temp_c=0.0,
            optimal_temp_c=3.0,
            max_temp_c=6.0,
            refrigerated_spoilage_rate=0.01,
            ambient_spoilage_rate=0.5,
            refrigerated_shelf_life_hours=1440.0,
            ambient_shelf_life_hours=72.0,
        ),
    )
}
