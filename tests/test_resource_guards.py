import pytest

from wastesim import des


class Idle(des.Process):
    def behavior(self):
        yield self.wait(0)


def _setup():
    env = des.Environment()
    facility = des.Facility(env, "street")
    return env, facility, Idle(env, "a"), Idle(env, "b")


def test_seizing_a_busy_facility_raises():
    _, facility, a, b = _setup()
    facility.seize(a)

    with pytest.raises(des.ResourceBusyError):
        facility.seize(b)
    assert facility.owner is a


def test_releasing_a_free_facility_raises():
    _, facility, a, _ = _setup()

    with pytest.raises(des.ResourceBusyError):
        facility.release(a)


def test_only_the_owner_can_release():
    _, facility, a, b = _setup()
    facility.seize(a)

    with pytest.raises(des.ResourceBusyError):
        facility.release(b)

    facility.release(a)
    assert not facility.busy
    assert a.holding == []


def test_double_release_raises():
    _, facility, a, _ = _setup()
    facility.seize(a)
    facility.release(a)

    with pytest.raises(des.ResourceBusyError):
        facility.release(a)
