"""Numerical backends for pipeline integrals (plain MC, QMC, Vegas, nquad)."""

from __future__ import annotations

import warnings
from typing import NamedTuple

import numpy as np
import scipy.integrate as integrate

from . import defaults


class IntegrationResult(NamedTuple):
    mean: float
    sdev: float


def _weighted_batch(pipeline, integrand, xbatch):
    outputs = pipeline.evaluate_batch(xbatch)
    return np.asarray(integrand(outputs), dtype=np.float64) * pipeline.jacobian(outputs)


def _integrate_plain(pipeline, integrand, n_samples, seed=None):
    rng = np.random.default_rng(seed)
    samples = rng.random((int(n_samples), pipeline.dimensions()))
    values = _weighted_batch(pipeline, integrand, samples)
    return IntegrationResult(
        float(np.mean(values)),
        float(np.std(values, ddof=1) / np.sqrt(values.shape[0])),
    )


def _integrate_qmc(pipeline, integrand, m=defaults.qmc_m, seed=None, n_scrambles=4):
    """
    Randomised QMC: average over independent Owen-scrambled Sobol sequences.

    The spread of the per-sequence means gives the error estimate.
    """
    from scipy.stats import qmc

    if n_scrambles < 2:
        raise ValueError("n_scrambles must be at least 2 to estimate an error.")

    rng = np.random.default_rng(seed)
    means = np.empty(n_scrambles, dtype=np.float64)
    for k in range(n_scrambles):
        sampler = qmc.Sobol(d=pipeline.dimensions(), scramble=True, seed=rng)
        samples = sampler.random_base2(m)
        means[k] = np.mean(_weighted_batch(pipeline, integrand, samples))

    return IntegrationResult(
        float(np.mean(means)),
        float(np.std(means, ddof=1) / np.sqrt(n_scrambles)),
    )


def _integrate_vegas(
    pipeline,
    integrand,
    nitn1=defaults.vegas_nitn1,
    nitn2=defaults.vegas_nitn2,
    neval=defaults.vegas_neval,
):
    import vegas

    @vegas.lbatchintegrand
    def vegas_integrand(xbatch):
        return _weighted_batch(pipeline, integrand, np.asarray(xbatch, dtype=np.float64))

    vegas_integ = vegas.Integrator([[0, 1]] * pipeline.dimensions())
    vegas_integ(vegas_integrand, nitn=nitn1, neval=neval)
    result = vegas_integ(vegas_integrand, nitn=nitn2, neval=neval)
    iters = nitn1 + nitn2
    while result.Q <= defaults.vegas_min_q and iters <= defaults.vegas_max_iterations:
        result = vegas_integ(vegas_integrand, nitn=nitn2, neval=neval)
        iters += nitn2
    if result.Q <= defaults.vegas_min_q:
        warnings.warn(
            f"VEGAS Q stayed <= {defaults.vegas_min_q} after {iters} iterations (Q={result.Q}).",
            RuntimeWarning,
        )

    return IntegrationResult(float(result.mean), float(result.sdev))


def _integrate_nquad(pipeline, integrand, epsabs=1e-8, epsrel=1e-8, limit=100):
    def weighted(*x):
        outputs = pipeline.evaluate(x)
        return float(integrand(outputs)) * float(pipeline.jacobian(outputs))

    result, abserr = integrate.nquad(
        weighted,
        [[0.0, 1.0]] * pipeline.dimensions(),
        opts={"epsabs": epsabs, "epsrel": epsrel, "limit": limit},
    )
    return IntegrationResult(float(result), float(abserr))


__all__ = [
    "IntegrationResult",
    "_integrate_plain",
    "_integrate_qmc",
    "_integrate_vegas",
    "_integrate_nquad",
]
