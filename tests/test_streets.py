import pytest

from wastesim import des
from wastesim.street_data import HOUSEHOLDS_PER_TOWER_BLOCK, STREET_TABLE
from wastesim.streets import Street, StreetPool, StreetRecord


class Idle(des.Process):
    def behavior(self):
        yield self.wait(0)


RECORDS = [
    StreetRecord(12, 750, "Dlouha"),
    StreetRecord(0, 190, "Horni zpet"),
    StreetRecord(5, 190, "Horni", 2),
]


def test_pool_hands_out_streets_in_declared_order():
    env = des.Environment()
    pool = StreetPool.from_records(env, RECORDS)

    taken = [pool.take_first_free() for _ in range(3)]

    assert [street.name for street in taken] == ["Dlouha", "Horni zpet", "Horni"]
    assert pool.take_first_free() is None
    assert pool.exhausted
    assert pool.taken_count == len(pool) == 3


def test_taken_street_is_never_offered_again():
    env = des.Environment()
    pool = StreetPool.from_records(env, RECORDS)
    truck = Idle(env, "truck")

    first = pool.take_first_free()
    first.seize(truck)
    first.release(truck)

    rest = [pool.take_first_free(), pool.take_first_free()]
    assert first not in rest
    assert pool.take_first_free() is None


def test_busy_streets_are_skipped_but_stay_in_the_pool():
    env = des.Environment()
    pool = StreetPool.from_records(env, RECORDS)
    truck = Idle(env, "truck")
    pool.streets[0].seize(truck)

    assert pool.take_first_free().name == "Horni zpet"
    assert pool.remaining == 2

    pool.streets[0].release(truck)
    assert pool.take_first_free().name == "Dlouha"


def test_street_attributes_and_defaults():
    env = des.Environment()
    street = Street.from_record(env, StreetRecord(0, 71, "4473 zpet"))

    assert street.sorted == 0
    assert street.is_transit
    assert not street.busy
    with pytest.raises(ValueError):
        Street(env, -1, 10, "broken")


def test_tower_blocks_count_twelve_households():
    assert HOUSEHOLDS_PER_TOWER_BLOCK == 12
    assert StreetRecord(24, 90, "Sidliste") in STREET_TABLE
    assert StreetRecord(12, 150, "Sidliste", 8) in STREET_TABLE


def test_pool_totals_match_the_table():
    env = des.Environment()
    pool = StreetPool.from_records(env, STREET_TABLE)

    assert len(pool) == len(STREET_TABLE) == 79
    assert pool.total_households() == sum(r.households for r in STREET_TABLE)
    assert pool.total_meters() == sum(r.meters for r in STREET_TABLE)
    assert len(env.facilities) == 79
