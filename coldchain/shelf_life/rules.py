"""
Temperature business rules for perishable transport.

This module contains the rules deciding which decay regime applies:
safe-band membership, the temperature a product actually travels at, and
the temperature compliance score shown on the dashboard.
"""

from coldchain.constants import MAX_SCORE
from coldchain.models.product import ProductProfile
from coldchain.models.vehicle import VehicleProfile


class ShelfLifeRules:
    """
    Business rules for temperature handling.

    This class encapsulates:
    - Safe temperature band checks
    - Transit temperature under a given vehicle
    - Temperature compliance scoring
    """

    # Compliance points lost per °C away from the optimal temperature
    COMPLIANCE_PENALTY_PER_DEGREE = 10.0

    @staticmethod
    def is_within_safe_range(product: ProductProfile, temperature_c: float) -> bool:
        """
        Check if a temperature lies inside the product's safe band.

        Args:
            product: Product profile
            temperature_c: Temperature to check

        Returns:
            True if min_temp_c <= temperature_c <= max_temp_c
        """
        return product.min_temp_c <= temperature_c <= product.max_temp_c

    @staticmethod
    def effective_transit_temperature(
        product: ProductProfile,
        vehicle: VehicleProfile,
        ambient_temp_c: float
    ) -> float:
        """
        Temperature the product experiences on a leg.

        Temperature-controlled vehicles hold the product's optimal temperature,
        clamped into the vehicle's band when it has one. Other vehicles expose
        the product to the ambient temperature.

        Args:
            product: Product profile
            vehicle: Vehicle profile
            ambient_temp_c: Outside temperature

        Returns:
            Transit temperature in °C
        """
        if not vehicle.temperature_controlled:
            return ambient_temp_c

        temperature = product.optimal_temp_c
        if vehicle.min_temp_c is not None:
            temperature = max(temperature, vehicle.min_temp_c)
        if vehicle.max_temp_c is not None:
            temperature = min(temperature, vehicle.max_temp_c)
        return temperature

    @staticmethod
    def temperature_compliance(product: ProductProfile, temperature_c: float) -> float:
        """
        Temperature compliance score (0-100).

        100 inside the safe band, otherwise 100 minus 10 points per degree
        away from the optimal temperature, floored at 0.
        """
        if ShelfLifeRules.is_within_safe_range(product, temperature_c):
            return MAX_SCORE
        deviation = abs(temperature_c - product.optimal_temp_c)
        return max(0.0, MAX_SCORE - deviation * ShelfLifeRules.COMPLIANCE_PENALTY_PER_DEGREE)
