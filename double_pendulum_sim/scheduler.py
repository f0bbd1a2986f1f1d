"""
Per-tick step selection.

RealTime runs one step of the measured wall-clock delta. Precision feeds the delta
into an accumulator and drains it in fixed steps, so the simulated result does not
depend on the frame rate. Catch-up after a stall is not capped.
"""

import enum
import logging
import time

logger = logging.getLogger(__name__)

# fraction of a fixed step treated as rounding noise
STEP_TOLERANCE = 1e-9


class Mode(enum.Enum):
    REAL_TIME = "real-time"
    PRECISION = "precision"


class StepScheduler:
    def __init__(self, simulation, fixed_time_step=2e-4, precision=False,
                 clock=time.perf_counter):
        self.simulation = simulation
        self.fixed_time_step = fixed_time_step
        self.mode = Mode.PRECISION if precision else Mode.REAL_TIME
        self.accumulator = 0.0
        self.clock = clock
        self.last_tick = clock()

    @property
    def precision(self):
        return self.mode is Mode.PRECISION

    def toggle(self):
        self.mode = Mode.REAL_TIME if self.precision else Mode.PRECISION
        # stale residual time from an earlier precision run is not replayed
        self.accumulator = 0.0
        logger.info("step mode: %s", self.mode.value)
        return self.mode

    def tick(self):
        """Sample the clock and advance by the time since the previous tick."""
        now = self.clock()
        elapsed = now - self.last_tick
        self.last_tick = now
        return self.on_tick(elapsed)

    def on_tick(self, elapsed):
        """Advance the simulation for ``elapsed`` seconds; returns the number of steps."""
        if not self.precision:
            self.simulation.advance(elapsed)
            return 1

        self.accumulator += elapsed
        # whole steps, tolerant of rounding in the accumulated sum
        steps = int(self.accumulator / self.fixed_time_step + STEP_TOLERANCE)
        for _ in range(steps):
            self.simulation.advance(self.fixed_time_step)
        self.accumulator = max(0.0, self.accumulator - steps * self.fixed_time_step)
        logger.debug("precision tick: %.6f s -> %d steps, %.2e s left",
                     elapsed, steps, self.accumulator)
        return steps
