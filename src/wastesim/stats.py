"""Run statistics: the duration histogram and the collection accumulator."""
from __future__ import annotations

from dataclasses import dataclass, field

import matplotlib.pyplot as plt
import numpy as np
from pandas import DataFrame


class Histogram:
    """Fixed-width histogram of recorded values.

    ``count`` buckets of width ``step`` start at ``low``; values below ``low``
    go to the underflow bucket and values at or above ``low + count * step``
    to the overflow bucket, so every recorded value is counted exactly once.
    """

    def __init__(self, name: str, low: float = 0.0, step: float = 1.0, count: int = 15):
        if step <= 0:
            raise ValueError("Histogram step must be positive.")
        if count < 1:
            raise ValueError("Histogram needs at least one bucket.")
        self.name = name
        self.low = low
        self.step = step
        self.count = count
        self.counts = np.zeros(count, dtype=int)
        self.sums = np.zeros(count, dtype=float)
        self.underflow = 0
        self.overflow = 0
        self._values: list[float] = []

    def __call__(self, value: float):
        self.record(value)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def high(self) -> float:
        return self.low + self.step * self.count

    def record(self, value: float):
        """Count ``value`` in its bucket."""
        self._values.append(value)
        if value < self.low:
            self.underflow += 1
            return
        index = int((value - self.low) // self.step)
        if index >= self.count:
            self.overflow += 1
            return
        self.counts[index] += 1
        self.sums[index] += value

    @property
    def values(self) -> np.ndarray:
        return np.asarray(self._values, dtype=float)

    def total(self) -> int:
        """Number of recorded values, under- and overflow included."""
        return int(self.counts.sum()) + self.underflow + self.overflow

    def to_frame(self) -> DataFrame:
        """
        Return one row per bucket with its bounds, count, relative frequency and value sum.
        """
        edges = self.low + self.step * np.arange(self.count + 1)
        n = len(self)
        return DataFrame(
            {
                "from": edges[:-1],
                "to": edges[1:],
                "n": self.counts,
                "rel": self.counts / n if n else np.zeros(self.count),
                "sum": self.sums,
            }
        )

    def summary(self) -> dict:
        values = self.values
        if values.size == 0:
            return {"n": 0, "min": np.nan, "max": np.nan, "mean": np.nan, "std": np.nan}
        return {
            "n": int(values.size),
            "min": float(values.min()),
            "max": float(values.max()),
            "mean": float(values.mean()),
            "std": float(values.std(ddof=1)) if values.size > 1 else 0.0,
        }

    def output(self) -> str:
        """Render the histogram as text."""
        s = self.summary()
        rule = "+" + "-" * 62 + "+"
        lines = [
            rule,
            f"| HISTOGRAM {self.name}".ljust(63) + "|",
            rule,
            f"|  n = {s['n']}   min = {s['min']:g}   max = {s['max']:g}".ljust(63) + "|",
            f"|  mean = {s['mean']:g}   std = {s['std']:g}".ljust(63) + "|",
            f"|  below {self.low:g}: {self.underflow}   from {self.high:g} up: {self.overflow}".ljust(63) + "|",
            rule,
        ]
        table = self.to_frame().to_string(index=False, float_format=lambda x: f"{x:g}")
        lines.extend(table.splitlines())
        lines.append(rule)
        return "\n".join(lines)

    def plot(self, ax=None):
        """Draw the buckets as a bar chart on ``ax`` (a new figure when omitted)."""
        if ax is None:
            _, ax = plt.subplots()
        frame = self.to_frame()
        ax.bar(frame["from"], frame["n"], width=self.step, align="edge", edgecolor="black")
        ax.set_xlabel("minutes")
        ax.set_ylabel("streets")
        ax.set_title(self.name)
        return ax


@dataclass
class CollectionStats:
    """Figures accumulated by all trucks of one run.

    Trucks mutate the instance in their own turn, so no locking is involved.
    ``households`` and ``planned_meters`` describe the street table and are
    filled in at setup; everything else starts at zero.
    """

    households: int = 0
    planned_meters: int = 0
    duration: float = 0.0  # minutes, summed over all trucks
    household_transfers: int = 0
    travel_transfers: int = 0
    meters: int = 0
    communal_kg: float = 0.0
    sorted_kg: float = 0.0
    street_durations: Histogram = field(default_factory=lambda: Histogram("Time on a single street"))

    @classmethod
    def for_pool(cls, pool, low: float = 0.0, step: float = 1.0, count: int = 15) -> "CollectionStats":
        return cls(
            households=pool.total_households(),
            planned_meters=pool.total_meters(),
            street_durations=Histogram("Time on a single street", low, step, count),
        )

    @property
    def streets_serviced(self) -> int:
        return self.household_transfers + self.travel_transfers

    def record_street(self, minutes: float):
        self.street_durations.record(minutes)

    def add_load(self, communal_kg: float, sorted_kg: float):
        """Fold the load a truck carried back to the depot into the totals."""
        self.communal_kg += communal_kg
        self.sorted_kg += sorted_kg

    def as_dict(self) -> dict:
        return {
            "households": self.households,
            "planned_meters": self.planned_meters,
            "duration": self.duration,
            "household_transfers": self.household_transfers,
            "travel_transfers": self.travel_transfers,
            "meters": self.meters,
            "communal_kg": self.communal_kg,
            "sorted_kg": self.sorted_kg,
            "streets_serviced": self.streets_serviced,
        }
