"""tests/test_scheduler.py"""
import numpy as np
import pytest

from double_pendulum_sim import Mode, SimulationConfig, SimulationSet, StepScheduler

# exactly representable, so accumulator arithmetic has no rounding
STEP = 1.0 / 1024


class Recorder:
    """Stands in for a SimulationSet and records every advance"""

    def __init__(self):
        self.dts = []

    def advance(self, dt):
        self.dts.append(dt)


class FakeClock:
    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        return self.readings.pop(0)


def test_starts_in_real_time():
    scheduler = StepScheduler(Recorder())
    assert scheduler.mode is Mode.REAL_TIME
    assert scheduler.fixed_time_step == 2e-4
    assert scheduler.accumulator == 0.0


def test_real_time_single_step():
    """Real time advances once with the raw delta"""
    sim = Recorder()
    scheduler = StepScheduler(sim)
    assert scheduler.on_tick(0.016) == 1
    assert sim.dts == [0.016]


@pytest.mark.parametrize("split", [(5.5, 4.5), (0.25, 9.75), (10.0, 0.0), (0.0, 10.0)])
def test_precision_split_independence(split):
    """Deltas summing to k fixed steps run exactly k steps however they are split"""
    sim = Recorder()
    scheduler = StepScheduler(sim, fixed_time_step=STEP, precision=True)
    a, b = split
    steps = scheduler.on_tick(a * STEP) + scheduler.on_tick(b * STEP)
    assert steps == 10
    assert sim.dts == [STEP] * 10
    assert scheduler.accumulator == 0.0


@pytest.mark.parametrize("split", [(5.25, 5.25), (0.5, 10.0), (10.5, 0.0)])
def test_precision_residual(split):
    """The leftover time is the same for every split"""
    sim = Recorder()
    scheduler = StepScheduler(sim, fixed_time_step=STEP, precision=True)
    a, b = split
    scheduler.on_tick(a * STEP)
    scheduler.on_tick(b * STEP)
    assert len(sim.dts) == 10
    assert scheduler.accumulator == 0.5 * STEP


def test_precision_accumulator_bounds():
    """0 <= accumulator < fixed step after every tick"""
    sim = Recorder()
    scheduler = StepScheduler(sim, precision=True)
    for elapsed in np.random.default_rng(1).uniform(0.0, 0.05, size=100):
        scheduler.on_tick(elapsed)
        assert 0.0 <= scheduler.accumulator < scheduler.fixed_time_step


def test_precision_short_tick_runs_nothing():
    sim = Recorder()
    scheduler = StepScheduler(sim, fixed_time_step=STEP, precision=True)
    assert scheduler.on_tick(0.5 * STEP) == 0
    assert sim.dts == []


def test_precision_catch_up_is_uncapped():
    """A one second stall replays every missed step"""
    sim = Recorder()
    scheduler = StepScheduler(sim, fixed_time_step=STEP, precision=True)
    assert scheduler.on_tick(1.0) == 1024


def test_toggle():
    """Toggling flips the mode and drops residual time"""
    scheduler = StepScheduler(Recorder(), fixed_time_step=STEP, precision=True)
    scheduler.on_tick(0.5 * STEP)
    assert scheduler.toggle() is Mode.REAL_TIME
    assert scheduler.accumulator == 0.0
    assert scheduler.toggle() is Mode.PRECISION
    assert scheduler.precision


def test_tick_measures_clock():
    """tick advances by the time since the previous tick"""
    sim = Recorder()
    scheduler = StepScheduler(sim, clock=FakeClock(10.0, 10.5, 10.75))
    scheduler.tick()
    scheduler.tick()
    assert sim.dts == [0.5, 0.25]
    assert scheduler.last_tick == 10.75


def test_modes_share_the_integrator():
    """One real-time step of 2e-4 equals one precision step"""
    config = SimulationConfig(chaos_count=3)
    a, b = SimulationSet(config), SimulationSet(config)
    StepScheduler(a).on_tick(2e-4)
    StepScheduler(b, fixed_time_step=2e-4, precision=True).on_tick(2e-4)
    np.testing.assert_array_equal(a.pendulums[0].state, b.pendulums[0].state)


@pytest.mark.parametrize(
    "deltas,expected",
    [((0.001,), 5), ((0.0004, 0.0006), 5), ((0.0006, 0.0004), 5),
     ((0.0002,) * 5, 5), ((0.016,), 80), ((0.008, 0.008), 80)],
)
def test_precision_split_independence_at_default_step(deltas, expected):
    """Whole multiples of 2e-4 run the same number of steps however they arrive"""
    sim = Recorder()
    scheduler = StepScheduler(sim, precision=True)
    steps = sum(scheduler.on_tick(elapsed) for elapsed in deltas)
    assert steps == expected
    assert len(sim.dts) == expected
    assert 0.0 <= scheduler.accumulator < 1e-12
