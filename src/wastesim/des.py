"""Discrete event simulation primitives for the waste-collection model.

This module wraps :mod:`simpy` with a small set of helpers: an
:class:`Environment` that dispatches events in virtual time, a
:class:`Process` base class with an explicit lifecycle state, and a
:class:`Facility` that models a serially-reusable resource with an owner and
a FIFO waiting queue.

Everything runs on a single event loop. A process only gives control back to
the clock when it yields the event returned by :meth:`Process.wait` (or by
:meth:`Facility.request` when the facility is busy), so every other operation
is atomic with respect to other processes.

Example
-------
>>> env = Environment(seed=1)
>>> class Worker(Process):
...     def behavior(self):
...         yield self.wait(5)
>>> Worker(env, "worker").activate()
>>> env.run_until_empty()
>>> env.now
5
"""
from __future__ import annotations

import math
from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generator

import simpy
from numpy import append, array, diff, nansum
from numpy.random import default_rng
from pandas import DataFrame
from simpy.events import Event

from wastesim.dist import distribution
from wastesim.log_cfg import logger

if TYPE_CHECKING:  # pragma: no cover - type hinting only
    from wastesim.recorder import SimulationObserver


class SimulationError(Exception):
    """Base class for internal-consistency violations of the simulation core."""


class CausalityViolation(SimulationError):
    """Raised when an event is scheduled, or dispatched, before the current virtual time."""

    def __init__(self, requested: float, now: float):
        super().__init__(requested, now)
        self.requested = requested
        self.now = now

    def __str__(self) -> str:
        return f"cannot schedule at t={self.requested:g}, clock is already at t={self.now:g}"


class ResourceBusyError(SimulationError):
    """Raised on a seize of a busy facility or a release by a process that does not own it."""


class DoubleTerminationError(SimulationError):
    """Raised when a terminated process is activated again."""


def _sample_duration(duration: Any, random_state=None) -> float:
    """Turn a fixed number or a distribution into a non-negative duration.

    Distributions are sampled until a non-negative value is produced; fixed
    values are returned unchanged so that negative input can be rejected by
    the caller.
    """
    if isinstance(duration, distribution):
        sampled = -1.0
        while sampled < 0:
            sampled = duration.sample(random_state)
        return sampled
    return duration


class ProcessState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"


class Process:
    """A suspendable unit of behaviour driven by an :class:`Environment`.

    Subclasses implement :meth:`behavior` as a generator that yields the
    events returned by :meth:`wait`. The process is started with
    :meth:`activate` and is terminated when :meth:`behavior` returns.
    """

    # status codes for compact logging
    _status_codes = {"activate": 1, "wait": 2, "resume": 3, "seize": 4, "release": 5, "terminate": 6}

    def __init__(self, env: "Environment", name: str, log: bool = True):
        """Create a new process and register it with the environment.

        Parameters
        ----------
        env : Environment
            Simulation environment that will drive the process.
        name : str
            Human-readable name, used in logs and diagnostics.
        log : bool, optional
            When ``True``, keep a status log of lifecycle changes.
        """
        self.env = env
        self.name = name
        env.last_process_id += 1
        self.id = env.last_process_id  # pylint: disable=invalid-name
        env.process_names[self.id] = name
        env.processes.append(self)
        self.log = log
        self.state = ProcessState.IDLE
        self.holding: list["Facility"] = []
        self._activated = False
        self._simpy_process: simpy.events.Process | None = None

        # time, status_code, facility_id
        self._status_log = array([[0, 0, 0]])

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.env}, {self.name!r}, state={self.state.value})"

    def behavior(self) -> Generator[Event, Any, None]:
        """The work of the process; must be overridden by subclasses."""
        raise NotImplementedError

    @property
    def terminated(self) -> bool:
        return self.state is ProcessState.TERMINATED

    def _record(self, status: str, facility_id: int = 0):
        if self.log:
            self._status_log = append(
                self._status_log,
                [[self.env.now, self._status_codes[status], facility_id]],
                axis=0,
            )

    def activate(self, at: float | None = None) -> Event:
        """Schedule the start of :meth:`behavior` at virtual time ``at``.

        Parameters
        ----------
        at : float, optional
            Absolute virtual time of the start. Defaults to the current time.

        Raises
        ------
        DoubleTerminationError
            If the process has already terminated.
        SimulationError
            If the process was already activated.
        CausalityViolation
            If ``at`` lies before the current virtual time.
        """
        if self.state is ProcessState.TERMINATED:
            raise DoubleTerminationError(f"{self} has terminated and cannot be activated again")
        if self._activated:
            raise SimulationError(f"{self} is already active")
        when = self.env.now if at is None else at
        event = self.env.schedule_at(self._start, when)
        self._activated = True
        logger.debug("%s scheduled to start at t=%g", self, when)
        return event

    def _start(self, _event: Event):
        self._simpy_process = self.env.process(self._run())
        self.env._notify_observers("on_process_activated", process=self, time=self.env.now)

    def _run(self):
        self.state = ProcessState.RUNNING
        self._record("activate")
        logger.debug("%s running at t=%g", self, self.env.now)
        yield from self.behavior()
        self.state = ProcessState.TERMINATED
        self._record("terminate")
        logger.debug("%s terminated at t=%g", self, self.env.now)
        self.env._notify_observers("on_process_terminated", process=self, time=self.env.now)

    def _suspend(self, event: Event) -> Event:
        """Mark the process as waiting until ``event`` is processed."""
        self.state = ProcessState.WAITING
        self._record("wait")
        event.callbacks.append(self._resume)
        return event

    def _resume(self, _event: Event):
        self.state = ProcessState.RUNNING
        self._record("resume")
        self.env._notify_observers("on_process_resumed", process=self, time=self.env.now)

    def wait(self, duration: Any) -> Event:
        """Suspend the process for ``duration`` units of virtual time.

        The returned event must be yielded from :meth:`behavior`. This is the
        point where other processes may interleave.

        Parameters
        ----------
        duration : float | int | distribution
            Fixed delay or a distribution sampled from ``env.rng``.

        Raises
        ------
        SimulationError
            If the process is not running.
        CausalityViolation
            If the delay is negative.
        """
        if self.state is not ProcessState.RUNNING:
            raise SimulationError(f"{self} can only wait while running (state is {self.state.value})")
        delay = _sample_duration(duration, self.env.rng)
        if delay < 0:
            raise CausalityViolation(self.env.now + delay, self.env.now)
        return self._suspend(self.env.timeout(delay))

    def status_log(self) -> DataFrame:
        """
        Return a DataFrame with status changes (activate, wait, resume, seize, release, terminate).
        """
        df = DataFrame(data=self._status_log[1:, :], columns=["time", "status", "facility"])
        names = {code: status for status, code in self._status_codes.items()}
        df["status"] = df["status"].map(names)
        return df


class Facility:
    """A serially-reusable resource: free, or busy with exactly one owner.

    :meth:`seize` is the strict acquisition used when allocation is filtered
    upstream; it fails on a busy facility. :meth:`request` is the general
    acquisition: it queues the requester in FIFO order and resumes it when the
    facility is handed over on :meth:`release`.
    """

    def __init__(self, env: "Environment", name: str, log: bool = True):
        self.env = env
        self.name = name
        self.log = log
        env.last_facility_id += 1
        self.id = env.last_facility_id  # pylint: disable=invalid-name
        env.facility_names[self.id] = name
        env.facilities.append(self)
        self.owner: Process | None = None
        self._queue: deque[tuple[Process, Event, float]] = deque()

        # logs
        # time, in_use, queue_length
        self._status_log = array([[0, 0, 0]])
        # process_id, start_waiting, end_waiting
        self._queue_log = array([[0, 0, 0]])

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"

    def __repr__(self) -> str:
        owner = self.owner.name if self.owner is not None else None
        return f"{type(self).__name__}({self.name!r}, owner={owner!r})"

    @property
    def busy(self) -> bool:
        return self.owner is not None

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    def _log_status(self):
        if self.log:
            self._status_log = append(
                self._status_log,
                [[self.env.now, int(self.busy), self.queue_length]],
                axis=0,
            )

    def _grant(self, process: Process):
        self.owner = process
        process.holding.append(self)
        process._record("seize", self.id)
        self._log_status()
        logger.debug("%s seized %s at t=%g", process, self, self.env.now)
        self.env._notify_observers("on_facility_seized", process=process, facility=self, time=self.env.now)

    def seize(self, process: Process):
        """Take exclusive ownership of a free facility.

        Raises
        ------
        ResourceBusyError
            If the facility is already owned.
        """
        if self.busy:
            raise ResourceBusyError(f"{process} cannot seize {self}: already held by {self.owner}")
        self._grant(process)

    def request(self, process: Process) -> Event:
        """Acquire the facility, waiting in FIFO order while it is busy.

        The returned event must be yielded by ``process``; it is triggered once
        the facility belongs to ``process``. The requester is ``WAITING`` until
        then, even when the facility is granted at once.
        """
        event = self.env.event()
        if not self.busy:
            self._grant(process)
            return process._suspend(event.succeed(self))
        self._queue.append((process, event, self.env.now))
        self._log_status()
        logger.debug("%s queued for %s at t=%g (queue length %d)", process, self, self.env.now, self.queue_length)
        return process._suspend(event)

    def release(self, process: Process):
        """Give the facility up and hand it to the head of the queue, if any.

        Raises
        ------
        ResourceBusyError
            If ``process`` is not the current owner (this includes a free
            facility).
        """
        if self.owner is not process:
            if self.owner is None:
                raise ResourceBusyError(f"{process} cannot release {self}: it is not seized")
            raise ResourceBusyError(f"{process} cannot release {self}: it is held by {self.owner}")
        self.owner = None
        process.holding.remove(self)
        process._record("release", self.id)
        self._log_status()
        logger.debug("%s released %s at t=%g", process, self, self.env.now)
        self.env._notify_observers("on_facility_released", process=process, facility=self, time=self.env.now)

        if self._queue:
            waiting, event, since = self._queue.popleft()
            if self.log:
                self._queue_log = append(self._queue_log, [[waiting.id, since, self.env.now]], axis=0)
            self._grant(waiting)
            event.succeed(self)

    def status_log(self) -> DataFrame:
        """
        Return a DataFrame of the facility status over time.
        """
        return DataFrame(data=self._status_log[1:, :], columns=["time", "in_use", "queue_length"])

    def queue_log(self) -> DataFrame:
        """
        Return a DataFrame of all waiting episodes at this facility.
        """
        df = DataFrame(data=self._queue_log[1:, :], columns=["process", "start_time", "finish_time"])
        df["process"] = df["process"].map(self.env.process_names)
        df["waiting_duration"] = df["finish_time"] - df["start_time"]
        return df

    def waiting_time(self):
        """
        Return waiting durations for this facility.
        """
        a = self.queue_log()
        return a["waiting_duration"].values

    def total_time_in_use(self) -> float:
        """
        Return the total time the facility was busy, up to the current time.
        """
        l = self.status_log()
        if len(l) == 0:
            return 0.0
        t = append(l["time"].values, self.env.now)
        return float(nansum(diff(t) * l["in_use"].values))

    def average_utilization(self) -> float:
        """
        Return the share of the elapsed virtual time the facility was busy.
        """
        if self.env.now <= 0:
            return 0.0
        return self.total_time_in_use() / self.env.now


class Environment(simpy.Environment):
    """Virtual clock and event queue with observer hooks and logging helpers.

    Pending events are kept by simpy in a heap keyed by
    ``(time, priority, insertion id)``; events due at the same time are
    therefore dispatched in the order they were scheduled.
    """

    def __init__(self, name: str = "Environment", seed: int | None = None, log: bool = True):
        """Create a new simulation environment.

        Parameters
        ----------
        name : str, optional
            Label used in logs.
        seed : int, optional
            Seed of :attr:`rng`, the random stream shared by everything that
            samples inside this environment.
        log : bool, optional
            When ``True``, keep the structured :attr:`event_log`.
        """
        super().__init__()
        self.name = name
        self.seed = seed
        self.rng = default_rng(seed)
        self.log = log

        # Process/facility bookkeeping
        self.last_process_id = 0
        self.processes: list[Process] = []
        self.process_names: dict[int, str] = {}

        self.last_facility_id = 0
        self.facilities: list[Facility] = []
        self.facility_names: dict[int, str] = {}

        # Run-level bookkeeping
        self.run_number: int = 0
        self.run_history: list[dict[str, Any]] = []
        self.dispatch_times: list[float] = []

        # Environment-level event log
        self.event_log: list[dict[str, Any]] = []

        self._observers: list["SimulationObserver"] = []

    def __str__(self) -> str:
        return self.name

    # ------------------------------------------------------------------
    # Observer helpers
    # ------------------------------------------------------------------
    def register_observer(self, observer: "SimulationObserver"):
        """Register a new simulation observer."""
        self._observers.append(observer)

    def _notify_observers(self, method_name: str, **kwargs):
        """Invoke a method on all observers if they implement it."""
        for observer in self._observers:
            if hasattr(observer, method_name):
                getattr(observer, method_name)(**kwargs)

    def log_event(self, source_type: str, source_id: Any, message: str, metadata: dict | None = None):
        """Store a structured log event and forward it to observers."""
        event = {
            "time": self.now,
            "run_id": self.run_number,
            "source_type": source_type,
            "source_id": source_id,
            "message": message,
            "metadata": dict(metadata or {}),
        }
        if self.log:
            self.event_log.append(event)
        self._notify_observers("on_log_event", event=event)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def schedule_at(self, action: Callable[[Event], Any], time: float) -> Event:
        """Call ``action(event)`` when the clock reaches absolute ``time``.

        Raises
        ------
        CausalityViolation
            If ``time`` is before :attr:`now`.
        """
        if time < self.now:
            raise CausalityViolation(time, self.now)
        event = self.timeout(time - self.now)
        event.callbacks.append(action)
        return event

    def step(self):
        """Dispatch the earliest pending event, advancing the clock to its time."""
        when = self.peek()
        if not math.isinf(when):
            if self.dispatch_times and when < self.dispatch_times[-1]:
                raise CausalityViolation(when, self.dispatch_times[-1])
            self.dispatch_times.append(when)
        super().step()

    def run_until_empty(self):
        """Dispatch events until the queue is empty."""
        return self.run()

    def run(self, until: Any = None):
        """Run the simulation once, with per-run metadata.

        This wraps :meth:`simpy.Environment.run` and additionally increments
        :attr:`run_number`, stores a row in :attr:`run_history`, notifies
        observers via ``on_run_started`` / ``on_run_finished`` and logs a final
        ``"Run finished"`` event.
        """
        self.run_number += 1
        run_id = self.run_number
        start_time = self.now

        self._notify_observers("on_run_started", env=self, run_id=run_id, start_time=start_time)
        logger.info("%s: run %d started", self.name, run_id)

        result = super().run(until=until)

        end_time = self.now
        duration = end_time - start_time
        logger.info("%s: run %d finished at sim time %g after %d events", self.name, run_id, end_time, len(self.dispatch_times))

        self.run_history.append(
            {
                "run_id": run_id,
                "start_time": start_time,
                "end_time": end_time,
                "duration": duration,
                "events": len(self.dispatch_times),
            }
        )
        self.log_event(
            source_type="environment",
            source_id="run",
            message="Run finished",
            metadata={"simulation_time": end_time, "duration": duration},
        )
        self._notify_observers(
            "on_run_finished",
            env=self,
            run_id=run_id,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
        )
        return result
