"""Run configuration for the waste-collection simulation.

All figures are plain numbers: durations in minutes, weights in kilograms,
distances in metres, speeds in km/h and money in CZK. Bands are
``(low, high)`` pairs for uniform draws.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Tuple

Band = Tuple[float, float]

WEEK_CONSTANT = 4.34812141
TRANSFER_DELAY_BASES = ("cumulative", "street")


class ConfigurationError(ValueError):
    """Raised at setup time for an inconsistent configuration."""


@dataclass
class SimulationConfig:
    """Central configuration of one simulated collection round."""

    # Fleet
    fleet_size: int = 1
    days: int = 7
    crew_per_vehicle: int = 3
    spawn_interval: float = 1.0  # minutes between two trucks leaving the depot
    seed: Optional[int] = None

    # Durations (minutes)
    household_service: Band = (0.10, 0.35)
    sorted_handling: Band = (0.20, 0.45)
    house_transfer: Band = (0.10, 0.15)
    # "cumulative": one inter-house delay per household-service transfer made
    # so far in the whole run; "street": one per household of the street
    transfer_delay_basis: str = "cumulative"

    # Loads (kg)
    communal_load: Band = (24.0, 30.0)  # per serviced street
    sorted_load: Band = (50.0, 100.0)  # per sorted-waste container

    # Driving
    average_transfer_speed: float = 80.0  # km/h
    consumption: float = 85.0  # litres per 100 km
    consumption_spread: float = 10.0

    # Costs (CZK)
    fuel_price: float = 30.0  # per litre
    fuel_price_spread: float = 0.5
    hourly_wage: float = 55.0
    disposal_fee_per_ton: float = 1189.0
    sorted_disposal_fee_per_ton: float = 300.0
    parking_rent_per_day: float = 12000 / WEEK_CONSTANT / 7

    # Histogram of the time spent on a single street
    histogram_low: float = 0.0
    histogram_step: float = 1.0
    histogram_count: int = 15

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check the configuration, raising :class:`ConfigurationError` on the first problem."""
        for name in ("fleet_size", "days", "crew_per_vehicle", "histogram_count"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for name in ("average_transfer_speed", "histogram_step", "consumption", "fuel_price"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.spawn_interval < 0:
            raise ConfigurationError(f"spawn_interval must not be negative, got {self.spawn_interval!r}")
        for name in ("household_service", "sorted_handling", "house_transfer", "communal_load", "sorted_load"):
            low, high = getattr(self, name)
            if low < 0 or low > high:
                raise ConfigurationError(f"{name} band must satisfy 0 <= low <= high, got ({low!r}, {high!r})")
        if self.consumption_spread < 0 or self.consumption_spread > self.consumption:
            raise ConfigurationError("consumption_spread must lie between 0 and consumption")
        if self.fuel_price_spread < 0 or self.fuel_price_spread > self.fuel_price:
            raise ConfigurationError("fuel_price_spread must lie between 0 and fuel_price")
        if self.transfer_delay_basis not in TRANSFER_DELAY_BASES:
            raise ConfigurationError(
                f"transfer_delay_basis must be one of {TRANSFER_DELAY_BASES}, got {self.transfer_delay_basis!r}"
            )

    @property
    def consumption_band(self) -> Band:
        return (self.consumption - self.consumption_spread, self.consumption + self.consumption_spread)

    @property
    def fuel_price_band(self) -> Band:
        return (self.fuel_price - self.fuel_price_spread, self.fuel_price + self.fuel_price_spread)

    def as_dict(self) -> dict:
        return asdict(self)
