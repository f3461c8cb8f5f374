"""Node data model for the tiered supply chain network."""

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Tier(str, Enum):
    """Position of a facility in the supply chain (ordered)."""
    PRODUCER = "producer"
    AGGREGATOR = "aggregator"
    PROCESSOR = "processor"
    DISTRIBUTOR = "distributor"
    RETAIL = "retail"

    @property
    def rank(self) -> int:
        """Position in the canonical tier ordering (producer = 0)."""
        return _TIER_ORDER.index(self)

    @classmethod
    def parse(cls, value) -> "Tier":
        """
        Parse a tier from its name or a legacy dashboard alias.

        Args:
            value: Tier instance or string such as 'producer' or 'farm'

        Returns:
            Matching Tier

        Raises:
            ValueError: If the value names no known tier
        """
        if isinstance(value, Tier):
            return value
        key = str(value).strip().lower()
        if key in _TIER_ALIASES:
            return _TIER_ALIASES[key]
        raise ValueError(f"Unknown tier: {value!r}")

    def __str__(self) -> str:
        return self.value


_TIER_ORDER = [
    Tier.PRODUCER,
    Tier.AGGREGATOR,
    Tier.PROCESSOR,
    Tier.DISTRIBUTOR,
    Tier.RETAIL,
]

# Names used by dashboard forms and CSV imports
_TIER_ALIASES = {tier.value: tier for tier in _TIER_ORDER}
_TIER_ALIASES.update({
    "farm": Tier.PRODUCER,
    "collection_center": Tier.AGGREGATOR,
    "processing_plant": Tier.PROCESSOR,
})

TIER_ORDER = tuple(_TIER_ORDER)


class Coordinate(NamedTuple):
    """Latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float


class Node(BaseModel):
    """
    Represents a facility in the supply chain network.

    Nodes are supplied by the dashboard (forms or imports) and replaced
    whole on edit; the engine treats them as immutable inputs.

    Attributes:
        id: Unique identifier for the node
        name: Human-readable name
        tier: Supply chain tier
        latitude: GPS latitude
        longitude: GPS longitude
        capacity: Storage/handling capacity (volume units)
        production_rate: Daily production (producers only)
        demand_rate: Daily demand (retail only)
        is_visible: Hidden nodes are skipped by every engine query
    """
    id: str = Field(..., min_length=1, description="Unique node identifier")
    name: str = Field(..., description="Node name")
    tier: Tier = Field(..., description="Supply chain tier")
    latitude: float = Field(..., description="GPS latitude", ge=-90, le=90)
    longitude: float = Field(..., description="GPS longitude", ge=-180, le=180)
    capacity: float = Field(0.0, description="Capacity in volume units", ge=0)
    production_rate: Optional[float] = Field(None, description="Production rate (producer-only)", ge=0)
    demand_rate: Optional[float] = Field(None, description="Demand rate (retail-only)", ge=0)
    is_visible: bool = Field(True, description="Include node in engine queries")

    model_config = ConfigDict(frozen=True)

    @field_validator('id')
    @classmethod
    def no_whitespace_only(cls, v: str) -> str:
        """Ensure the ID is not just whitespace."""
        if not v.strip():
            raise ValueError("Node ID cannot be whitespace only")
        return v.strip()

    @field_validator('tier', mode='before')
    @classmethod
    def parse_tier(cls, v):
        """Accept legacy tier aliases."""
        return Tier.parse(v)

    @model_validator(mode='after')
    def rates_match_tier(self) -> "Node":
        """Production belongs to producers, demand to retail."""
        if self.production_rate is not None and self.tier != Tier.PRODUCER:
            raise ValueError("production_rate is only valid for producer nodes")
        if self.demand_rate is not None and self.tier != Tier.RETAIL:
            raise ValueError("demand_rate is only valid for retail nodes")
        return self

    @property
    def coordinate(self) -> Coordinate:
        """Node position as a Coordinate."""
        return Coordinate(self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"{self.name} ({self.id}) - {self.tier.value}"
