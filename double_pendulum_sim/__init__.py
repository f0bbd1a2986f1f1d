from .colors import rainbow_color
from .config import SimulationConfig
from .controls import Event, InputQueue
from .physics import (
    DoublePendulum,
    Pendulum,
    accelerations,
    deriv,
    reference_trajectory,
    step,
    total_energy,
)
from .scheduler import Mode, StepScheduler
from .simulation import CHAOS, DEFAULT, SimulationSet

__version__ = "0.1.0"
