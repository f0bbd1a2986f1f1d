"""
Double pendulum physics.

Angles are measured from the downward vertical. Positions are pivot-relative with
+x to the right and +y pointing down, so a link at rest hangs at (0, length).
"""

import numpy as np
from scipy.integrate import solve_ivp

from .config import SimulationConfig

DEFAULT_COLOR = (0.0, 0.0, 1.0)


# ------------------------------------------------------------
# Exact double-pendulum equations
# ------------------------------------------------------------
def accelerations(θ1, ω1, θ2, ω2, L1, L2, m1, m2, g):
    # See https://www.myphysicslab.com/pendulum/double-pendulum-en.html
    # den vanishes for some antiparallel configurations; the singularity is physical.
    Δ = θ1 - θ2
    den = 2 * m1 + m2 - m2 * np.cos(2 * θ1 - 2 * θ2)

    α1 = (-g * (2 * m1 + m2) * np.sin(θ1)
          - m2 * g * np.sin(θ1 - 2 * θ2)
          - 2 * np.sin(Δ) * m2 * (ω2**2 * L2 + ω1**2 * L1 * np.cos(Δ))) / (L1 * den)

    α2 = (2 * np.sin(Δ) * (ω1**2 * L1 * (m1 + m2)
                           + g * (m1 + m2) * np.cos(θ1)
                           + ω2**2 * L2 * m2 * np.cos(Δ))) / (L2 * den)

    return α1, α2


def deriv(t, state, L1, L2, m1, m2, g):
    θ1, ω1, θ2, ω2 = state
    α1, α2 = accelerations(θ1, ω1, θ2, ω2, L1, L2, m1, m2, g)
    return [ω1, α1, ω2, α2]


# ------------------------------------------------------------
# State containers
# ------------------------------------------------------------
class Pendulum:
    """One rigid link with a point mass at its end."""

    def __init__(self, angle, mass, length):
        self._mass = mass
        self._length = length
        self.angle = angle
        self.velocity = 0.0
        self.acceleration = 0.0
        self.position = (length * np.sin(angle), length * np.cos(angle))

    @property
    def mass(self):
        return self._mass

    @property
    def length(self):
        return self._length

    def __repr__(self):
        return (f"Pendulum(angle={self.angle!r}, velocity={self.velocity!r}, "
                f"mass={self.mass!r}, length={self.length!r})")


class DoublePendulum:
    """A top link anchored at the pivot and a bottom link hanging from its bob.

    ``color`` and ``trail`` are presentation tags for the renderer; the integrator
    never looks at them.
    """

    def __init__(self, angle, color=DEFAULT_COLOR, trail=True, config=None):
        config = config or SimulationConfig()
        self.top = Pendulum(angle, config.top_mass, config.top_length)
        self.bottom = Pendulum(angle, config.bottom_mass, config.bottom_length)
        self.bottom.position = (self.top.position[0] + self.bottom.position[0],
                                self.top.position[1] + self.bottom.position[1])
        self.gravity = config.gravity
        self.color = color
        self.trail = trail

    @property
    def state(self):
        return np.array([self.top.angle, self.top.velocity,
                         self.bottom.angle, self.bottom.velocity])

    def positions(self):
        x1, y1 = self.top.position
        x2, y2 = self.bottom.position
        return x1, y1, x2, y2


# ------------------------------------------------------------
# Semi-implicit Euler integrator
# ------------------------------------------------------------
def step(pendulum, dt):
    """Advance both links of ``pendulum`` by ``dt`` seconds in place.

    Velocities are updated from the accelerations of the current state, then angles
    from the updated velocities. ``dt`` is not validated: a very large step is allowed
    to blow up.
    """
    top, bottom = pendulum.top, pendulum.bottom

    top.acceleration, bottom.acceleration = accelerations(
        top.angle, top.velocity, bottom.angle, bottom.velocity,
        top.length, bottom.length, top.mass, bottom.mass, pendulum.gravity)

    top.velocity += top.acceleration * dt
    bottom.velocity += bottom.acceleration * dt

    top.angle += top.velocity * dt
    bottom.angle += bottom.velocity * dt

    top.position = (top.length * np.sin(top.angle),
                    top.length * np.cos(top.angle))
    bottom.position = (top.position[0] + bottom.length * np.sin(bottom.angle),
                       top.position[1] + bottom.length * np.cos(bottom.angle))


# ------------------------------------------------------------
# Diagnostics
# ------------------------------------------------------------
def total_energy(pendulum):
    """Kinetic plus potential energy, with the pivot as the zero of height."""
    top, bottom = pendulum.top, pendulum.bottom
    L1, L2, m1, m2 = top.length, bottom.length, top.mass, bottom.mass
    θ1, ω1, θ2, ω2 = pendulum.state
    g = pendulum.gravity

    kinetic = (0.5 * m1 * (L1 * ω1)**2
               + 0.5 * m2 * ((L1 * ω1)**2 + (L2 * ω2)**2
                             + 2 * L1 * L2 * ω1 * ω2 * np.cos(θ1 - θ2)))
    # y points down, so height is -y
    y1 = L1 * np.cos(θ1)
    y2 = y1 + L2 * np.cos(θ2)
    potential = -g * (m1 * y1 + m2 * y2)
    return kinetic + potential


def reference_trajectory(pendulum, t_end, t_eval=None, rtol=1e-10, atol=1e-10):
    """Solve the same equations from the current state with RK45.

    Returns the ``solve_ivp`` result; ``sol.y`` rows are ``[θ1, ω1, θ2, ω2]``.
    Does not modify ``pendulum``.
    """
    top, bottom = pendulum.top, pendulum.bottom
    return solve_ivp(
        deriv,
        [0.0, t_end],
        pendulum.state,
        args=(top.length, bottom.length, top.mass, bottom.mass, pendulum.gravity),
        method="RK45",
        t_eval=t_eval,
        rtol=rtol,
        atol=atol,
    )
