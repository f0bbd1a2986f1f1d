import numpy as np


def rainbow_color(scalar):
    """Map ``scalar`` in [0, 1] to a fully saturated RGB triple of floats.

    Out of range input is clamped. 0 and 1 both give pure red.
    """
    scalar = float(np.clip(scalar, 0.0, 1.0))
    hue = scalar * 360.0
    h = hue / 60.0
    sector = int(np.floor(h)) % 6
    f = float(h - np.floor(h))

    # saturation = value = 1, so p = 0
    v, p, q, t = 1.0, 0.0, 1.0 - f, f

    if sector == 0:
        return (v, t, p)
    elif sector == 1:
        return (q, v, p)
    elif sector == 2:
        return (p, v, t)
    elif sector == 3:
        return (p, q, v)
    elif sector == 4:
        return (t, p, v)
    else:
        return (v, p, q)
