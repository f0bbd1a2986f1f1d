import logging

import numpy as np

from .colors import rainbow_color
from .config import SimulationConfig
from .physics import DoublePendulum, step

logger = logging.getLogger(__name__)

DEFAULT = "default"
CHAOS = "chaos"


class SimulationSet:
    """Independent double pendulums advanced together.

    Starts in the default population. Switching population throws away every
    existing pendulum.
    """

    def __init__(self, config=None):
        self.config = config or SimulationConfig()
        self.pendulums = []
        self.mode = None
        self.time = 0.0
        self.set_default()

    def set_default(self):
        angle = np.radians(self.config.default_angle_deg)
        self.pendulums = [DoublePendulum(angle, trail=True, config=self.config)]
        self.mode = DEFAULT
        self.time = 0.0
        logger.info("default population: 1 pendulum at %.4f deg",
                    self.config.default_angle_deg)

    def set_chaos(self):
        n = self.config.chaos_count
        base = self.config.default_angle_deg
        increment = self.config.chaos_increment_deg
        self.pendulums = [
            DoublePendulum(np.radians(base + increment * i),
                           color=rainbow_color(i / n),
                           trail=False,
                           config=self.config)
            for i in range(n)
        ]
        self.mode = CHAOS
        self.time = 0.0
        logger.info("chaos population: %d pendulums from %.4f deg in steps of %g deg",
                    n, base, increment)

    def advance(self, dt):
        for pendulum in self.pendulums:
            step(pendulum, dt)
        self.time += dt

    def spread(self):
        """Standard deviation of the bottom-link angles, 0 for a single pendulum."""
        return float(np.std([p.bottom.angle for p in self.pendulums]))

    def __len__(self):
        return len(self.pendulums)

    def __iter__(self):
        return iter(self.pendulums)
