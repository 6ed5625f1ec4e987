from __future__ import annotations

import dataclasses
import sys
from typing import Iterable, List, NamedTuple, Sequence

from pandas import DataFrame

from .config import SimulationConfig
from .des import Environment
from .log_cfg import logger
from .recorder import SimulationObserver
from .report import CostReport, print_report
from .stats import CollectionStats
from .street_data import STREET_TABLE
from .streets import StreetPool, StreetRecord
from .truck import FleetGenerator, Truck, TruckBands


class SimulationResult(NamedTuple):
    env: Environment
    pool: StreetPool
    stats: CollectionStats
    trucks: List[Truck]
    report: CostReport


def simulate(
    config: SimulationConfig | None = None,
    records: Iterable[StreetRecord] | None = None,
    observers: Sequence[SimulationObserver] = (),
) -> SimulationResult:
    """Run one collection round to pool exhaustion.

    Parameters
    ----------
    config:
        Run configuration; the defaults describe one truck and the district
        of :data:`wastesim.street_data.STREET_TABLE`.

    records:
        Street table to collect, in visiting order. Defaults to
        :data:`~wastesim.street_data.STREET_TABLE`.

    observers:
        Registered on the environment before anything is scheduled.

    Returns
    -------
    SimulationResult
        The environment, pool, statistics, trucks and cost report of the run.
    """
    config = config or SimulationConfig()
    env = Environment("Waste collection", seed=config.seed)
    for observer in observers:
        env.register_observer(observer)

    pool = StreetPool.from_records(env, STREET_TABLE if records is None else records)
    stats = CollectionStats.for_pool(pool, config.histogram_low, config.histogram_step, config.histogram_count)
    bands = TruckBands.from_config(config)
    trucks: List[Truck] = []

    def spawn(number: int) -> Truck:
        truck = Truck(env, f"Car {number}", pool, stats, bands, config.transfer_delay_basis)
        trucks.append(truck)
        return truck

    FleetGenerator(env, config.fleet_size, spawn, config.spawn_interval).activate()
    env.run_until_empty()

    report = CostReport.from_run(stats, config, env.rng)
    return SimulationResult(env, pool, stats, trucks, report)


def run(
    config: SimulationConfig | None = None,
    *,
    records: Iterable[StreetRecord] | None = None,
    number_runs: int = 1,
    observers: Sequence[SimulationObserver] = (),
):
    """Run one or many replications of the collection round.

    Parameters
    ----------
    config:
        Run configuration. When it carries a seed, replication ``i`` uses
        ``seed + i`` so the replications differ but stay reproducible.

    number_runs:
        Number of independent replications.

    Returns
    -------
    SimulationResult or list[SimulationResult]
        - A single result when running once.
        - A list of results when ``number_runs > 1``.
    """
    if number_runs < 1:
        raise ValueError("number_runs must be >= 1")

    config = config or SimulationConfig()
    records = list(STREET_TABLE if records is None else records)
    if number_runs == 1:
        return simulate(config, records, observers)

    results: List[SimulationResult] = []
    for i in range(number_runs):
        seed = None if config.seed is None else config.seed + i
        replication = dataclasses.replace(config, seed=seed)
        logger.info("replication %d of %d (seed %s)", i + 1, number_runs, seed)
        results.append(simulate(replication, records, observers))
    return results


def replications_frame(results: Iterable[SimulationResult]) -> DataFrame:
    """One row per run: the statistics, the cost figures and the end time."""
    rows = []
    for i, result in enumerate(results):
        row = {"run": i + 1, "seed": result.env.seed, "end_time": result.env.now}
        row.update(result.stats.as_dict())
        row.update(result.report.as_dict())
        rows.append(row)
    return DataFrame(rows)


def main() -> int:
    """Run the default scenario and print its report."""
    result = simulate()
    print_report(result.report, result.stats.street_durations, sys.stdout)
    return 0
