"""
Default resonance parameters and integration settings.

Keeping these in one place lets scripts and tests share the same propagators
and sample sizes. Masses and widths are in GeV.
"""

from __future__ import annotations

# (mass, width) of common resonances.
W_BOSON = (80.3692, 2.085)
Z_BOSON = (91.1880, 2.4955)
TOP_QUARK = (172.57, 1.42)
HIGGS_BOSON = (125.20, 3.7e-3)

RESONANCES = {
    "W": W_BOSON,
    "Z": Z_BOSON,
    "top": TOP_QUARK,
    "higgs": HIGGS_BOSON,
}

# Sobol sample count is 2**qmc_m.
qmc_m = 13

# Vegas: nitn1 adaptation iterations, then nitn2 iterations kept in the result.
vegas_nitn1 = 3
vegas_nitn2 = 10
vegas_neval = 5e4

# Vegas keeps iterating while Q <= vegas_min_q, up to vegas_max_iterations.
vegas_min_q = 0.1
vegas_max_iterations = 20

__all__ = [
    "W_BOSON",
    "Z_BOSON",
    "TOP_QUARK",
    "HIGGS_BOSON",
    "RESONANCES",
    "qmc_m",
    "vegas_nitn1",
    "vegas_nitn2",
    "vegas_neval",
    "vegas_min_q",
    "vegas_max_iterations",
]
