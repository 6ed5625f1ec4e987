"""Streets and the pool trucks draw them from.

A :class:`Street` is a :class:`~wastesim.des.Facility` carrying the static
attributes of one street segment. The :class:`StreetPool` keeps every street
of a run in an arena, in declaration order, and hands each one out exactly
once.
"""
from __future__ import annotations

from typing import Iterable, NamedTuple

from wastesim.des import Environment, Facility
from wastesim.log_cfg import logger


class StreetRecord(NamedTuple):
    """One row of the static street table."""

    households: int
    meters: int
    name: str = ""
    sorted: int = 0


class Street(Facility):
    """A street segment that one truck at a time can service or drive through.

    A street with no households is a pure transit segment (for instance the
    way back out of a dead end).
    """

    def __init__(self, env: Environment, households: int, meters: int, name: str = "", sorted: int = 0, log: bool = True):
        for label, value in (("households", households), ("meters", meters), ("sorted", sorted)):
            if value < 0:
                raise ValueError(f"Street {name!r}: {label} must not be negative")
        super().__init__(env, name, log)
        self.households = households
        self.meters = meters
        self.sorted = sorted

    @classmethod
    def from_record(cls, env: Environment, record: StreetRecord, log: bool = True) -> "Street":
        return cls(env, record.households, record.meters, record.name, record.sorted, log=log)

    @property
    def is_transit(self) -> bool:
        return self.households == 0

    def __repr__(self) -> str:
        return f"Street({self.name!r}, households={self.households}, meters={self.meters}, sorted={self.sorted})"


class StreetPool:
    """Ordered streets not yet assigned to a truck.

    The streets live in an arena indexed by position; a parallel list of
    tombstones marks the ones already taken. A taken street is never offered
    again, even after its truck releases it.
    """

    def __init__(self, streets: Iterable[Street]):
        self._streets: list[Street] = list(streets)
        self._taken: list[bool] = [False] * len(self._streets)

    @classmethod
    def from_records(cls, env: Environment, records: Iterable[StreetRecord], log: bool = True) -> "StreetPool":
        """Build the streets of ``records`` in ``env`` and pool them in order."""
        return cls(Street.from_record(env, StreetRecord(*record), log=log) for record in records)

    def __len__(self) -> int:
        return len(self._streets)

    def __iter__(self):
        return iter(self._streets)

    @property
    def streets(self) -> list[Street]:
        return list(self._streets)

    @property
    def taken_count(self) -> int:
        return sum(self._taken)

    @property
    def remaining(self) -> int:
        return len(self._streets) - self.taken_count

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def take_first_free(self) -> Street | None:
        """Remove and return the first street, in declared order, that is neither taken nor busy.

        Returns ``None`` when no such street is left.
        """
        index = next(
            (i for i, street in enumerate(self._streets) if not self._taken[i] and not street.busy),
            None,
        )
        if index is None:
            return None
        self._taken[index] = True
        street = self._streets[index]
        logger.debug("street %d %r taken at t=%g, %d left", index, street.name, street.env.now, self.remaining)
        return street

    def total_households(self) -> int:
        return sum(street.households for street in self._streets)

    def total_meters(self) -> int:
        return sum(street.meters for street in self._streets)
