"""Operating-cost estimate and the textual end-of-run report."""
from __future__ import annotations

import sys
from dataclasses import asdict, dataclass
from typing import TextIO

from wastesim import dist
from wastesim.config import SimulationConfig
from wastesim.stats import CollectionStats, Histogram

KG_PER_TON = 1000.0


def meters_to_kilometers(meters: float) -> float:
    return meters / 1000.0


def minutes_to_hours(minutes: float) -> float:
    return minutes / 60.0


def kilos_to_tons(kilos: float) -> float:
    return kilos / KG_PER_TON


@dataclass
class CostReport:
    """Aggregated figures of one run and what they cost.

    ``hours`` is the summed working time of all trucks; the report prints it
    per vehicle.
    """

    fleet_size: int
    households: int
    kilometers: float
    hours: float
    communal_kg: float
    sorted_kg: float
    fuel_liters: float
    fuel_cost: float
    salary: float
    parking_rent: float
    communal_disposal: float
    sorted_disposal: float

    @property
    def total(self) -> float:
        return self.fuel_cost + self.salary + self.parking_rent + self.communal_disposal + self.sorted_disposal

    @property
    def hours_per_vehicle(self) -> float:
        return self.hours / self.fleet_size

    @classmethod
    def from_run(cls, stats: CollectionStats, config: SimulationConfig, random_state=None) -> "CostReport":
        """Price the run.

        Fuel consumption and fuel price are drawn uniformly from their
        configured bands, from the same stream as the run when
        ``random_state`` is the environment's generator.
        """
        fleet = config.fleet_size
        kilometers = meters_to_kilometers(stats.meters)
        per_vehicle_liters = kilometers * dist.make_uniform(*config.consumption_band).sample(random_state) / 100
        hours = minutes_to_hours(stats.duration)
        fuel_cost = per_vehicle_liters * dist.make_uniform(*config.fuel_price_band).sample(random_state) * fleet
        return cls(
            fleet_size=fleet,
            households=stats.households,
            kilometers=kilometers,
            hours=hours,
            communal_kg=stats.communal_kg,
            sorted_kg=stats.sorted_kg,
            fuel_liters=per_vehicle_liters * fleet,
            fuel_cost=fuel_cost,
            salary=hours * config.crew_per_vehicle * fleet * config.hourly_wage,
            parking_rent=fleet * config.parking_rent_per_day * config.days,
            communal_disposal=kilos_to_tons(stats.communal_kg) * config.disposal_fee_per_ton,
            sorted_disposal=kilos_to_tons(stats.sorted_kg) * config.sorted_disposal_fee_per_ton,
        )

    def as_dict(self) -> dict:
        data = asdict(self)
        data["total"] = self.total
        return data


def format_report(report: CostReport, histogram: Histogram | None = None) -> str:
    """Render ``report`` (and the street-duration histogram) as plain text."""
    lines = [
        f"Cars: {report.fleet_size}",
        f"Households: {report.households}",
        f"Distance: {report.kilometers:g} km",
        "",
        f"Total duration: {report.hours_per_vehicle:g} h",
        f"Total litter amount picked: {report.communal_kg:g} kg",
        f"Total sorted amount picked: {report.sorted_kg:g} kg",
        f"Total fuel consumption: {report.fuel_liters:g}l",
        "",
        f"Total fuel price: {report.fuel_cost:g} CZK",
        f"Total garbage men salary: {report.salary:g} CZK",
        f"Total parking space rent: {report.parking_rent:g} CZK",
        f"Total communal liquidation price: {report.communal_disposal:g} CZK",
        f"Total sorted liquidation price: {report.sorted_disposal:g} CZK",
        "",
        f"Total price: {report.total:g} CZK",
    ]
    text = "\n".join(lines)
    if histogram is not None:
        text += "\n\n" + histogram.output()
    return text + "\n"


def print_report(report: CostReport, histogram: Histogram | None = None, stream: TextIO | None = None):
    (stream or sys.stdout).write(format_report(report, histogram))
