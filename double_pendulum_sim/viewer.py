"""
Live matplotlib view of the simulation.

Keys: d = single pendulum, c = chaos population, p = toggle precision stepping.
"""

import argparse
import logging
from collections import deque

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.collections import LineCollection

from .config import SimulationConfig
from .controls import KEY_BINDINGS, InputQueue
from .simulation import CHAOS, DEFAULT, SimulationSet
from .scheduler import StepScheduler

logger = logging.getLogger(__name__)

TRAIL_COLOR = "green"


def _release_keys():
    # matplotlib binds 'c' (back) and 'p' (pan) by default
    for name in ("keymap.back", "keymap.pan"):
        plt.rcParams[name] = [k for k in plt.rcParams[name] if k not in KEY_BINDINGS]


def _segments(simulation):
    # physics y points down, matplotlib y points up
    segments = []
    for pendulum in simulation:
        x1, y1, x2, y2 = pendulum.positions()
        segments.append([(0.0, 0.0), (x1, -y1), (x2, -y2)])
    return segments


# ------------------------------------------------------------
# Interactive animation
# ------------------------------------------------------------
def build_animation(simulation, scheduler, queue, trail_length=2000, interval=16):
    """Create the figure and the per-frame callback.

    Returns ``(fig, anim, update)``; ``update`` can be called directly without a
    running event loop.
    """
    _release_keys()
    fig, ax = plt.subplots()
    reach = 1.1 * (simulation.config.top_length + simulation.config.bottom_length)
    ax.set_xlim(-reach, reach)
    ax.set_ylim(-reach, reach)
    ax.set_aspect("equal")
    ax.set_title("Double Pendulum (d: default, c: chaos, p: precision)")

    rods = LineCollection([], linewidths=1.0)
    ax.add_collection(rods)
    bobs = ax.scatter([], [], zorder=3)
    (trail_line,) = ax.plot([], [], lw=1, color=TRAIL_COLOR)
    status_text = ax.text(0.05, 0.95, "", transform=ax.transAxes)

    trail = deque(maxlen=trail_length)
    # every population switch builds a new list
    population = [simulation.pendulums]

    def on_key(event):
        if queue.push_key(event.key) is not None:
            logger.debug("key %r queued", event.key)

    fig.canvas.mpl_connect("key_press_event", on_key)

    def update(frame):
        queue.apply(simulation, scheduler)
        scheduler.tick()

        try:
            if simulation.pendulums is not population[0]:
                population[0] = simulation.pendulums
                trail.clear()

            rods.set_segments(_segments(simulation))
            rods.set_color([p.color for p in simulation])

            if simulation.mode == DEFAULT:
                points = [(x, -y) for p in simulation
                          for x, y in (p.top.position, p.bottom.position)]
                bobs.set_offsets(points)
                bobs.set_sizes([5 * p.mass for q in simulation for p in (q.top, q.bottom)])
                bobs.set_color([q.color for q in simulation for _ in range(2)])
            else:
                bobs.set_offsets([[float("nan"), float("nan")]])

            for pendulum in simulation:
                if pendulum.trail:
                    x2, y2 = pendulum.bottom.position
                    trail.append((x2, -y2))
            if trail:
                xs, ys = zip(*trail)
                trail_line.set_data(xs, ys)
            else:
                trail_line.set_data([], [])

            status_text.set_text(
                f"{simulation.mode} | {scheduler.mode.value} | t = {simulation.time:.2f} s")
        except Exception:
            logger.exception("drawing frame %s failed", frame)
        return rods, bobs, trail_line, status_text

    anim = FuncAnimation(fig, update, interval=interval, blit=False,
                         cache_frame_data=False)
    return fig, anim, update


def parse_args(argv=None):
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Live double pendulum simulation")
    parser.add_argument("--mode", choices=[DEFAULT, CHAOS], default=DEFAULT,
                        help="Initial population")
    parser.add_argument("--precision", action="store_true",
                        help="Start in fixed-step precision mode")
    parser.add_argument("--gravity", type=float, default=defaults.gravity)
    parser.add_argument("--angle", type=float, default=defaults.default_angle_deg,
                        help="Initial angle of both links in degrees")
    parser.add_argument("--chaos-count", type=int, default=defaults.chaos_count)
    parser.add_argument("--fixed-step", type=float, default=defaults.fixed_time_step,
                        help="Precision mode step in seconds")
    parser.add_argument("--trail-length", type=int, default=defaults.trail_length)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    config = SimulationConfig(
        gravity=args.gravity,
        default_angle_deg=args.angle,
        chaos_count=args.chaos_count,
        fixed_time_step=args.fixed_step,
        precision=args.precision,
        trail_length=args.trail_length,
    )
    try:
        config.validate()
    except ValueError as e:
        parser.error(str(e))
    return args, config


def main(argv=None):
    args, config = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("Keys: d = default, c = chaos, p = toggle precision")

    simulation = SimulationSet(config)
    if args.mode == CHAOS:
        simulation.set_chaos()
    scheduler = StepScheduler(simulation, fixed_time_step=config.fixed_time_step,
                              precision=config.precision)
    queue = InputQueue()

    # keep a reference to the animation or it is garbage collected
    fig, anim, update = build_animation(simulation, scheduler, queue,
                                        trail_length=config.trail_length)
    scheduler.last_tick = scheduler.clock()
    plt.show()


if __name__ == "__main__":
    main()
