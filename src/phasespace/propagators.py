"""Propagators used to exercise the Breit-Wigner mapping."""

from __future__ import annotations

import mpmath as mp
import numpy as np


def breit_wigner_propagator(s, mass, width):
    """
    Squared modulus of the relativistic propagator 1 / (s - m^2 + i m Gamma).

    Accepts scalar or array `s`.
    """
    s_arr = np.asarray(s, dtype=np.float64)
    m2 = float(mass) ** 2
    mg = float(mass) * float(width)
    values = 1.0 / ((s_arr - m2) ** 2 + mg * mg)
    if values.ndim == 0:
        return float(values)
    return values


def propagator_integral(mass, width):
    """Closed form of the propagator integrated over s in [0, inf)."""
    mass = float(mass)
    width = float(width)
    return (np.pi / 2 + np.arctan(mass / width)) / (mass * width)


def propagator_integral_mp(mass, width, dps=30):
    """
    High-precision reference for `propagator_integral` using mpmath quadrature.

    The interval is split around the peak on widening scales of m * Gamma so
    the quadrature resolves narrow widths.
    """
    with mp.workdps(dps):
        m = mp.mpf(mass)
        g = mp.mpf(width)
        m2 = m * m

        def f(s):
            return 1 / ((s - m2) ** 2 + m2 * g * g)

        offsets = [-1000, -100, -10, -1, 0, 1, 10, 100, 1000]
        points = [0] + [m2 + k * m * g for k in offsets if m2 + k * m * g > 0] + [mp.inf]
        result = mp.quad(f, points)
        return float(result)


__all__ = [
    "breit_wigner_propagator",
    "propagator_integral",
    "propagator_integral_mp",
]
