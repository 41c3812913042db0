"""
Public entrypoint for Breit-Wigner phase-space sampling.

Importable as a top-level module because `src/` is added to `sys.path`:

    from phasespace import BreitWignerTransform, Pipeline, propagator_integral_qmc
"""

from __future__ import annotations

from .api import (
    integrate_pipeline,
    parallel_width_scan,
    propagator_integral_nquad,
    propagator_integral_plain,
    propagator_integral_qmc,
    propagator_integral_vegas,
)
from .backends import IntegrationResult
from .base import SamplingTransform
from .breit_wigner import BreitWignerPoint, BreitWignerTransform, breit_wigner_map
from .config import PS_POINTS_SOURCE, InputTag, ParameterSet
from .pipeline import Pipeline
from .propagators import (
    breit_wigner_propagator,
    propagator_integral,
    propagator_integral_mp,
)

__all__ = [
    # transforms
    "SamplingTransform",
    "BreitWignerTransform",
    "BreitWignerPoint",
    "breit_wigner_map",
    # configuration
    "InputTag",
    "ParameterSet",
    "PS_POINTS_SOURCE",
    # composition
    "Pipeline",
    # propagators
    "breit_wigner_propagator",
    "propagator_integral",
    "propagator_integral_mp",
    # integration
    "IntegrationResult",
    "integrate_pipeline",
    "propagator_integral_plain",
    "propagator_integral_qmc",
    "propagator_integral_vegas",
    "propagator_integral_nquad",
    "parallel_width_scan",
]
