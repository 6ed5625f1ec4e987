"""Observers that follow a run through the environment's notifications.

Register an observer with :meth:`wastesim.des.Environment.register_observer`.
Observers only need to implement the callbacks they care about; the
environment skips the others.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class SimulationObserver(Protocol):  # pragma: no cover - interface only
    def on_run_started(self, env, run_id: int, start_time: float):
        ...

    def on_run_finished(self, env, run_id: int, start_time: float, end_time: float, duration: float):
        ...

    def on_process_activated(self, process, time: float):
        ...

    def on_process_resumed(self, process, time: float):
        ...

    def on_process_terminated(self, process, time: float):
        ...

    def on_facility_seized(self, process, facility, time: float):
        ...

    def on_facility_released(self, process, facility, time: float):
        ...

    def on_log_event(self, event: dict[str, Any]):
        ...


@dataclass
class TraceRecorder:
    """Records every lifecycle notification as a ``(time, kind, process, facility)`` tuple.

    Two runs driven by the same random stream produce equal traces. A seize of
    a facility the recorder still sees as held is noted in ``violations``.
    """

    trace: list[tuple] = field(default_factory=list)
    holders: dict[int, int] = field(default_factory=dict)
    violations: list[str] = field(default_factory=list)

    def on_process_activated(self, process, time):
        self.trace.append((time, "activate", process.name, None))

    def on_process_resumed(self, process, time):
        self.trace.append((time, "resume", process.name, None))

    def on_process_terminated(self, process, time):
        self.trace.append((time, "terminate", process.name, None))

    def on_facility_seized(self, process, facility, time):
        if facility.id in self.holders:
            self.violations.append(f"{facility} seized by {process} while held by process {self.holders[facility.id]}")
        self.holders[facility.id] = process.id
        self.trace.append((time, "seize", process.name, facility.id))

    def on_facility_released(self, process, facility, time):
        self.holders.pop(facility.id, None)
        self.trace.append((time, "release", process.name, facility.id))

    def times(self) -> list[float]:
        return [entry[0] for entry in self.trace]


@dataclass
class RunRecorder:
    """Snapshots a run once it finishes.

    ``run_data`` holds the environment name, the run history row, the process
    and facility counts, and a copy of the structured event log.
    """

    collect_logs: bool = True
    run_data: dict[str, Any] = field(default_factory=dict)
    _env: Any | None = None

    def on_run_started(self, env, run_id=None, start_time=None):
        self._env = env

    def on_run_finished(self, env, run_id=None, start_time=None, end_time=None, duration=None):
        self._env = env
        self.run_data = {
            "environment": {"name": env.name, "seed": env.seed},
            "run": {"run_id": run_id, "start_time": start_time, "end_time": end_time, "duration": duration},
            "processes": [
                {"id": p.id, "name": p.name, "state": p.state.value} for p in env.processes
            ],
            "facilities": [
                {"id": f.id, "name": f.name, "busy": f.busy} for f in env.facilities
            ],
            "events": list(env.event_log) if self.collect_logs else [],
        }
