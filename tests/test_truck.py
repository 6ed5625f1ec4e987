import pytest

from wastesim import des
from wastesim.config import SimulationConfig
from wastesim.recorder import TraceRecorder
from wastesim.runner import simulate
from wastesim.stats import CollectionStats
from wastesim.street_data import STREET_TABLE
from wastesim.streets import StreetPool, StreetRecord
from wastesim.truck import FleetGenerator, Truck, TruckBands, TruckState, travel_duration

SCENARIO = [
    StreetRecord(12, 750, "Dlouha"),
    StreetRecord(0, 190, "Horni zpet"),
    StreetRecord(5, 190, "Horni", 2),
]

# fixed-width bands make the service and transfer times exact
FIXED_BANDS = dict(household_service=(0.2, 0.2), house_transfer=(0.1, 0.1), sorted_handling=(0.3, 0.3))


def test_single_truck_visits_every_street_once_in_order():
    result = simulate(SimulationConfig(seed=7), SCENARIO)
    (truck,) = result.trucks

    assert [street.name for street in truck.visited] == ["Dlouha", "Horni zpet", "Horni"]
    assert truck.truck_state is TruckState.DONE
    assert truck.state is des.ProcessState.TERMINATED
    assert result.stats.household_transfers == 2
    assert result.stats.travel_transfers == 1
    assert result.pool.exhausted
    assert all(not street.busy for street in result.pool)


def test_totals_of_the_scenario():
    result = simulate(SimulationConfig(seed=7), SCENARIO)
    stats = result.stats

    assert stats.households == 17
    assert stats.meters == 750 + 190 + 190
    assert stats.meters == stats.planned_meters
    assert stats.street_durations.total() == 3
    assert 2 * 24 <= stats.communal_kg <= 2 * 30
    assert 2 * 50 <= stats.sorted_kg <= 2 * 100
    assert result.env.now == pytest.approx(stats.duration)


def test_cumulative_transfer_delay_counts_serviced_streets_so_far():
    result = simulate(SimulationConfig(seed=1, **FIXED_BANDS), SCENARIO)
    first, _, last = result.stats.street_durations.values

    # 12 households + one transfer draw (one serviced street so far)
    assert first == pytest.approx(12 * 0.2 + 1 * 0.1)
    # 5 households + two transfer draws + two sorted containers
    assert last == pytest.approx(5 * 0.2 + 2 * 0.1 + 2 * 0.3)


def test_street_transfer_delay_counts_the_street_households():
    config = SimulationConfig(seed=1, transfer_delay_basis="street", **FIXED_BANDS)
    result = simulate(config, SCENARIO)
    first, transit, last = result.stats.street_durations.values

    assert first == pytest.approx(12 * 0.2 + 12 * 0.1)
    assert last == pytest.approx(5 * 0.2 + 5 * 0.1 + 2 * 0.3)
    assert transit > 0


def test_transit_time_follows_length_and_speed():
    assert travel_duration(1000, 60) == pytest.approx(1.0)
    assert travel_duration(190, 80) == pytest.approx(0.1425)
    with pytest.raises(ValueError):
        travel_duration(100, 0)


def test_fleet_covers_every_street_exactly_once():
    recorder = TraceRecorder()
    result = simulate(SimulationConfig(fleet_size=4, seed=3), observers=[recorder])

    visited = [street for truck in result.trucks for street in truck.visited]
    assert len(visited) == len(STREET_TABLE)
    assert len({street.id for street in visited}) == len(STREET_TABLE)
    assert result.stats.street_durations.total() == len(STREET_TABLE)
    assert result.stats.streets_serviced == len(STREET_TABLE)
    assert recorder.violations == []
    assert all(truck.truck_state is TruckState.DONE for truck in result.trucks)


def test_generator_staggers_the_trucks():
    recorder = TraceRecorder()
    result = simulate(SimulationConfig(fleet_size=3, seed=3), SCENARIO, observers=[recorder])

    starts = [(time, name) for time, kind, name, _ in recorder.trace if kind == "activate"]
    assert starts == [(0, "Car 1"), (1, "Car 2"), (2, "Car 3")]
    assert len(result.trucks) == 3


def test_generator_spawns_the_configured_number_of_processes():
    env = des.Environment()
    spawned = []

    class Parked(des.Process):
        def behavior(self):
            yield self.wait(0)

    def spawn(number):
        spawned.append((number, env.now))
        return Parked(env, f"truck {number}")

    generator = FleetGenerator(env, 3, spawn, interval=2.5)
    generator.activate()
    env.run_until_empty()

    assert spawned == [(1, 0), (2, 2.5), (3, 5.0)]
    assert generator.spawned == 3
    with pytest.raises(ValueError):
        FleetGenerator(env, 0, spawn)


def test_truck_folds_its_load_only_when_done():
    env = des.Environment(seed=2)
    pool = StreetPool.from_records(env, SCENARIO)
    stats = CollectionStats.for_pool(pool)
    truck = Truck(env, "Car 1", pool, stats, TruckBands.from_config(SimulationConfig()))
    truck.activate()
    env.run(until=1)

    assert truck.truck_state is TruckState.SERVICING
    assert truck.communal_kg > 0
    assert stats.communal_kg == 0

    env.run_until_empty()
    assert stats.communal_kg == pytest.approx(truck.communal_kg)
    assert stats.sorted_kg == pytest.approx(truck.sorted_kg)
