"""
Breit-Wigner change of variables for a propagator's invariant mass squared.

A uniform phase-space point x in [0, 1) is mapped to

    s(x) = m * Gamma * tan(y(x)) + m^2,
    y(x) = -atan(m / Gamma) + (pi/2 + atan(m / Gamma)) * x,

with Jacobian

    ds/dx = (pi/2 + atan(m / Gamma)) * m * Gamma / cos(y(x))^2.

For a propagator |P(s)|^2 = 1 / ((s - m^2)^2 + m^2 Gamma^2) integrated over
s in [0, inf), the product ds/dx * |P(s(x))|^2 is constant in x, which removes
the resonance peak from the integrand.

No input is validated: width == 0, negative parameters or x outside [0, 1)
propagate as ordinary floating-point results (inf/nan).
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from .base import SamplingTransform
from .config import InputTag

try:
    from numba import njit
except Exception:  # pragma: no cover
    njit = None


DEFAULT_PS_POINT = "cuba::ps_points/0"


class BreitWignerPoint(NamedTuple):
    s: float
    jacobian: float


def breit_wigner_map(x, mass, width):
    """
    Apply the Breit-Wigner mapping to a scalar or array of uniform samples.

    Returns `(s, jacobian)`, as floats for scalar `x` and arrays otherwise.
    """
    mass = np.float64(mass)
    width = np.float64(width)
    x_arr = np.asarray(x, dtype=np.float64)

    angle = np.arctan(mass / width)
    range_ = np.pi / 2.0 + angle
    y = -angle + range_ * x_arr

    s = mass * width * np.tan(y) + mass * mass
    cos_y = np.cos(y)
    jacobian = range_ * mass * width / (cos_y * cos_y)

    if x_arr.ndim == 0:
        return float(s), float(jacobian)
    return s, jacobian


def _build_breit_wigner_kernel():
    """
    Build a Numba kernel for the batched mapping: x[n] -> (s[n], jacobian[n]).

    Returns a compiled function if Numba is available, otherwise returns None.
    """
    if njit is None:
        return None

    # error_model="numpy" keeps width == 0 an inf/nan result instead of raising.
    @njit(cache=True, error_model="numpy")
    def _transform(xbatch, mass, width):
        n = xbatch.shape[0]
        s = np.empty(n, dtype=np.float64)
        jacobian = np.empty(n, dtype=np.float64)

        angle = np.arctan(mass / width)
        range_ = np.pi / 2.0 + angle
        prefactor = mass * width

        for idx in range(n):
            y = -angle + range_ * xbatch[idx]
            cos_y = np.cos(y)
            s[idx] = prefactor * np.tan(y) + mass * mass
            jacobian[idx] = range_ * prefactor / (cos_y * cos_y)

        return s, jacobian

    return _transform


_breit_wigner_kernel = _build_breit_wigner_kernel()


class BreitWignerTransform(SamplingTransform):
    """
    Generate invariant masses squared distributed according to a Breit-Wigner.

    Adds one dimension to the integration. `mass` and `width` are fixed at
    construction; each `evaluate` call is independent and keeps no state.
    """

    inputs = ("ps_point",)
    outputs = ("s", "jacobian")

    def __init__(self, mass, width, ps_point=DEFAULT_PS_POINT):
        self._mass = np.float64(mass)
        self._width = np.float64(width)
        if isinstance(ps_point, str):
            ps_point = InputTag.parse(ps_point)
        self.ps_point = ps_point

    @classmethod
    def from_parameters(cls, parameters):
        """Build from a resolved `ParameterSet` holding `mass`, `width` and `ps_point`."""
        return cls(
            parameters.get("mass", type=float),
            parameters.get("width", type=float),
            parameters.get("ps_point", DEFAULT_PS_POINT),
        )

    @property
    def mass(self):
        return float(self._mass)

    @property
    def width(self):
        return float(self._width)

    def dimensions(self):
        return 1

    def evaluate(self, x):
        """Map one uniform sample `x` to `BreitWignerPoint(s, jacobian)`."""
        s, jacobian = breit_wigner_map(float(x), self._mass, self._width)
        return BreitWignerPoint(s, jacobian)

    def evaluate_batch(self, samples):
        """Vectorised `evaluate` for samples of shape (n,) or (n, 1)."""
        x = np.ascontiguousarray(samples, dtype=np.float64)
        if x.ndim > 2 or (x.ndim == 2 and x.shape[1] != 1):
            raise ValueError(f"samples must have shape (n,) or (n, 1), got {x.shape}.")
        x = x.reshape(-1)
        if _breit_wigner_kernel is not None:
            return _breit_wigner_kernel(x, float(self._mass), float(self._width))
        return breit_wigner_map(x, self._mass, self._width)

    def __repr__(self):
        return (
            f"{type(self).__name__}(mass={self.mass!r}, width={self.width!r}, "
            f"ps_point={str(self.ps_point)!r})"
        )


__all__ = [
    "BreitWignerPoint",
    "BreitWignerTransform",
    "breit_wigner_map",
    "_build_breit_wigner_kernel",
]
