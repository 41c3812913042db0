"""
Entry point for integrating a resonant propagator through the Breit-Wigner mapping.
Run from project root: python main.py
"""
import sys
from pathlib import Path

# Add src to path so imports work when run from project root (must be before imports from src)
sys.path.insert(0, str(Path(__file__).parent / "src"))


import time

import numpy as np

from phasespace import (
    parallel_width_scan,
    propagator_integral,
    propagator_integral_qmc,
    propagator_integral_vegas,
)
from phasespace.defaults import RESONANCES, W_BOSON

if __name__ == "__main__":

    mass, width = W_BOSON
    exact = propagator_integral(mass, width)
    print(f"W propagator: m={mass} GeV, Gamma={width} GeV")
    print(f"  analytic: {exact:.12e}")

    start_time = time.time()
    qmc_result = propagator_integral_qmc(mass, width, m=12, seed=42)
    end_time = time.time()
    print(f"  QMC:      {qmc_result.mean:.12e} +- {qmc_result.sdev:.2e} ({end_time - start_time:.3f} s)")

    start_time = time.time()
    vegas_result = propagator_integral_vegas(mass, width, nitn1=3, nitn2=5, neval=1e4)
    end_time = time.time()
    print(f"  Vegas:    {vegas_result.mean:.12e} +- {vegas_result.sdev:.2e} ({end_time - start_time:.3f} s)")

    for name, (res_mass, res_width) in RESONANCES.items():
        exact = propagator_integral(res_mass, res_width)
        qmc_result = propagator_integral_qmc(res_mass, res_width, m=10, seed=0)
        print(f"  {name:>6}: QMC/analytic = {qmc_result.mean / exact:.12f}")

    widths = np.linspace(0.5, 4.0, 8)
    scan = parallel_width_scan(mass, widths, n_jobs=4, m=10, seed=0)
    for g, value in zip(widths, scan):
        print(f"  Gamma={g:.2f}: {value:.6e} (analytic {propagator_integral(mass, g):.6e})")
