"""Garbage trucks and the generator that sends them out.

A :class:`Truck` repeatedly takes the first free street from the pool, holds
it while it services the households (or drives through when there are none),
and folds the load it carried into the run statistics once the pool is
exhausted.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, NamedTuple

from wastesim import dist
from wastesim.config import SimulationConfig
from wastesim.des import Environment, Process
from wastesim.log_cfg import logger
from wastesim.stats import CollectionStats
from wastesim.streets import Street, StreetPool


def travel_duration(meters: float, speed: float) -> float:
    """Minutes needed to drive ``meters`` at ``speed`` km/h."""
    if speed <= 0:
        raise ValueError("Speed must be positive.")
    return meters / 1000.0 / speed * 60


class TruckBands(NamedTuple):
    """The distributions a truck samples from."""

    household_service: dist.uniform
    sorted_handling: dist.uniform
    house_transfer: dist.uniform
    communal_load: dist.uniform
    sorted_load: dist.uniform
    transfer_speed: dist.expon

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "TruckBands":
        return cls(
            household_service=dist.make_uniform(*config.household_service),
            sorted_handling=dist.make_uniform(*config.sorted_handling),
            house_transfer=dist.make_uniform(*config.house_transfer),
            communal_load=dist.make_uniform(*config.communal_load),
            sorted_load=dist.make_uniform(*config.sorted_load),
            transfer_speed=dist.make_expon(config.average_transfer_speed),
        )


class TruckState(Enum):
    SEEKING = "seeking"
    SERVICING = "servicing"
    TRAVELING = "traveling"
    TRANSFERRING = "transferring"
    IDLE = "idle"
    DONE = "done"


class Truck(Process):
    """A collection vehicle working through the street pool."""

    def __init__(
        self,
        env: Environment,
        name: str,
        pool: StreetPool,
        stats: CollectionStats,
        bands: TruckBands,
        transfer_delay_basis: str = "cumulative",
        log: bool = True,
    ):
        super().__init__(env, name, log)
        self.pool = pool
        self.stats = stats
        self.bands = bands
        self.transfer_delay_basis = transfer_delay_basis
        self.truck_state = TruckState.IDLE
        self.communal_kg = 0.0
        self.sorted_kg = 0.0
        self.visited: list[Street] = []

    def _transfer_draws(self, street: Street) -> int:
        if self.transfer_delay_basis == "street":
            return street.households
        return self.stats.household_transfers

    def behavior(self):
        env, rng, bands, stats = self.env, self.env.rng, self.bands, self.stats

        while True:
            self.truck_state = TruckState.SEEKING
            start = env.now
            street = self.pool.take_first_free()
            if street is None:
                break
            street.seize(self)
            self.visited.append(street)

            if not street.is_transit:
                self.truck_state = TruckState.SERVICING
                self.communal_kg += bands.communal_load.sample(rng)
                work = bands.household_service.total(street.households, rng)
                stats.duration += work
                yield self.wait(work)
                stats.household_transfers += 1
            else:
                self.truck_state = TruckState.TRAVELING
                travel = travel_duration(street.meters, bands.transfer_speed.sample(rng))
                stats.duration += travel
                yield self.wait(travel)
                stats.travel_transfers += 1

            self.truck_state = TruckState.TRANSFERRING
            stats.meters += street.meters
            transfer = bands.house_transfer.total(self._transfer_draws(street), rng)
            handling = bands.sorted_handling.total(street.sorted, rng)
            self.sorted_kg += street.sorted * bands.sorted_load.sample(rng)
            stats.duration += transfer + handling
            yield self.wait(transfer + handling)

            stats.record_street(env.now - start)
            street.release(self)
            self.truck_state = TruckState.IDLE

        self.truck_state = TruckState.DONE
        stats.add_load(self.communal_kg, self.sorted_kg)
        logger.debug("%s done at t=%g carrying %g kg communal, %g kg sorted", self, env.now, self.communal_kg, self.sorted_kg)
        self.env.log_event(
            source_type="truck",
            source_id=self.id,
            message=f"{self.name} done",
            metadata={"streets": len(self.visited), "communal_kg": self.communal_kg, "sorted_kg": self.sorted_kg},
        )


class FleetGenerator:
    """Sends ``fleet_size`` trucks out, one every ``interval`` time units.

    ``spawn(number)`` builds truck ``number`` (counting from 1); the generator
    activates it immediately. The generator itself never ends the run.
    """

    def __init__(self, env: Environment, fleet_size: int, spawn: Callable[[int], Process], interval: float = 1.0):
        if fleet_size < 1:
            raise ValueError("Fleet size must be positive.")
        self.env = env
        self.fleet_size = fleet_size
        self.spawn = spawn
        self.interval = interval
        self.spawned = 0

    def activate(self, at: float | None = None):
        return self.env.schedule_at(self._behavior, self.env.now if at is None else at)

    def _behavior(self, _event):
        self.spawned += 1
        self.spawn(self.spawned).activate()
        if self.spawned < self.fleet_size:
            self.env.schedule_at(self._behavior, self.env.now + self.interval)
