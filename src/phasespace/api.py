"""Public API for integrating propagators through Breit-Wigner pipelines."""

from __future__ import annotations

import numpy as np
from joblib import Parallel, delayed

from . import defaults
from .backends import _integrate_nquad, _integrate_plain, _integrate_qmc, _integrate_vegas
from .breit_wigner import BreitWignerTransform
from .pipeline import Pipeline
from .propagators import breit_wigner_propagator

_BACKENDS = {
    "plain": _integrate_plain,
    "qmc": _integrate_qmc,
    "vegas": _integrate_vegas,
    "nquad": _integrate_nquad,
}


def integrate_pipeline(pipeline, integrand, method="qmc", **options):
    """
    Integrate `integrand(outputs) * jacobian` over the pipeline's unit hypercube.

    `integrand` receives the output record of `Pipeline.evaluate_batch` (or of
    `Pipeline.evaluate` for the "nquad" method) and returns the integrand
    values in terms of the mapped variables.
    """
    try:
        backend = _BACKENDS[method]
    except KeyError:
        raise ValueError(
            f"Unknown integration method {method!r}; expected one of {sorted(_BACKENDS)}."
        ) from None
    return backend(pipeline, integrand, **options)


def _propagator_pipeline(mass, width):
    return Pipeline({"propagator": BreitWignerTransform(mass, width, "cuba::ps_points/0")})


def _propagator_integral(mass, width, method, options):
    pipeline = _propagator_pipeline(mass, width)

    def integrand(outputs):
        return breit_wigner_propagator(outputs["propagator::s"], mass, width)

    return integrate_pipeline(pipeline, integrand, method=method, **options)


def propagator_integral_plain(mass, width, n_samples=10000, seed=None):
    """Integrate the Breit-Wigner propagator over s in [0, inf) with plain Monte Carlo."""
    return _propagator_integral(mass, width, "plain", {"n_samples": n_samples, "seed": seed})


def propagator_integral_qmc(mass, width, m=defaults.qmc_m, seed=None):
    """Integrate the Breit-Wigner propagator over s in [0, inf) with scrambled Sobol points."""
    return _propagator_integral(mass, width, "qmc", {"m": m, "seed": seed})


def propagator_integral_vegas(
    mass,
    width,
    nitn1=defaults.vegas_nitn1,
    nitn2=defaults.vegas_nitn2,
    neval=defaults.vegas_neval,
):
    """Integrate the Breit-Wigner propagator over s in [0, inf) with Vegas."""
    return _propagator_integral(
        mass, width, "vegas", {"nitn1": nitn1, "nitn2": nitn2, "neval": neval}
    )


def propagator_integral_nquad(mass, width):
    """Integrate the Breit-Wigner propagator over s in [0, inf) by quadrature."""
    return _propagator_integral(mass, width, "nquad", {})


def parallel_width_scan(mass, widths, n_jobs=4, method="qmc", **options):
    """Integrate the propagator for each width in parallel; returns the means."""
    results = Parallel(n_jobs=n_jobs, verbose=0)(
        delayed(_propagator_integral)(mass, width, method, options) for width in widths
    )
    return np.array([result.mean for result in results], dtype=np.float64)


__all__ = [
    "integrate_pipeline",
    "propagator_integral_plain",
    "propagator_integral_qmc",
    "propagator_integral_vegas",
    "propagator_integral_nquad",
    "parallel_width_scan",
]
