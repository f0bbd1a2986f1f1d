"""Simulation parameters shared by the physics, the population and the scheduler."""

from dataclasses import dataclass


@dataclass
class SimulationConfig:
    """Physical and scheduling parameters of a simulation run."""
    gravity: float = 9.81
    top_mass: float = 10.0
    top_length: float = 2.0
    bottom_mass: float = 20.0
    bottom_length: float = 1.0
    default_angle_deg: float = 120.0    # shared by both links
    chaos_count: int = 1000
    chaos_increment_deg: float = 1e-4   # per chaos instance
    fixed_time_step: float = 2e-4       # 5000 Hz inner rate
    precision: bool = False
    trail_length: int = 2000            # points kept by the viewer

    def validate(self):
        for name in ("top_mass", "top_length", "bottom_mass", "bottom_length",
                     "fixed_time_step"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.chaos_count < 1:
            raise ValueError(f"chaos_count must be at least 1, got {self.chaos_count}")
        if self.trail_length < 0:
            raise ValueError(f"trail_length must not be negative, got {self.trail_length}")
        return self
