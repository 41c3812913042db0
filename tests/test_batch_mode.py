"""
Batch vs scalar mode tests for the Breit-Wigner mapping.

Primary check: the fast batch result agrees with the slow scalar result at every
point. Where Numba is installed, the compiled kernel is also compared with the
NumPy expression.
"""
import numpy as np
import pytest

from phasespace import BreitWignerTransform, Pipeline, SamplingTransform, breit_wigner_map
from phasespace.breit_wigner import _build_breit_wigner_kernel
from phasespace.defaults import RESONANCES

# Number of points: enough to stress batch vs scalar agreement without slow tests
N_POINTS = 5000

# Scalar, SIMD and compiled transcendental functions may differ by a few ulp,
# amplified near y = -pi/2 where s = m^2 + m Gamma tan(y) cancels.
RTOL = 1e-8


def _s_atol(mass):
    return 1e-6 * mass**2


def _points(n_points=None, seed=42):
    """Uniform samples in [0, 1), including the lower boundary."""
    if n_points is None:
        n_points = N_POINTS
    rng = np.random.default_rng(seed)
    points = rng.random(n_points)
    points[0] = 0.0
    return points


@pytest.mark.parametrize("name", sorted(RESONANCES))
def test_evaluate_scalar_vs_batch(name):
    """evaluate: slow scalar at each point agrees with fast batch result."""
    transform = BreitWignerTransform(*RESONANCES[name])
    points = _points()
    # Fast: single batch call
    s_batch, jac_batch = transform.evaluate_batch(points)
    assert s_batch.shape == (points.shape[0],)
    assert jac_batch.shape == (points.shape[0],)
    # Slow: scalar call at each point; must match batch
    scalar_results = np.array([transform.evaluate(x) for x in points])
    assert np.allclose(scalar_results[:, 0], s_batch, rtol=RTOL, atol=_s_atol(transform.mass))
    assert np.allclose(scalar_results[:, 1], jac_batch, rtol=RTOL)
    # (n, 1) input gives same batch
    s_col, jac_col = transform.evaluate_batch(points.reshape(-1, 1))
    assert np.allclose(s_col, s_batch)
    assert np.allclose(jac_col, jac_batch)


def test_numba_kernel_vs_numpy():
    pytest.importorskip("numba")
    kernel = _build_breit_wigner_kernel()
    assert kernel is not None
    points = _points()
    for mass, width in RESONANCES.values():
        s_kernel, jac_kernel = kernel(points, mass, width)
        s_numpy, jac_numpy = breit_wigner_map(points, mass, width)
        assert np.allclose(s_kernel, s_numpy, rtol=RTOL, atol=_s_atol(mass))
        assert np.allclose(jac_kernel, jac_numpy, rtol=RTOL)


def test_empty_batch():
    s, jacobian = BreitWignerTransform(1.0, 1.0).evaluate_batch(np.empty(0))
    assert s.shape == (0,)
    assert jacobian.shape == (0,)


def test_default_evaluate_batch_loops_over_evaluate():
    """The base-class fallback agrees with the vectorised implementation."""
    transform = BreitWignerTransform(*RESONANCES["top"])
    points = _points(200)
    s_loop, jac_loop = SamplingTransform.evaluate_batch(transform, points)
    s_batch, jac_batch = transform.evaluate_batch(points)
    assert np.allclose(s_loop, s_batch)
    assert np.allclose(jac_loop, jac_batch)


def test_pipeline_scalar_vs_batch():
    """Pipeline.evaluate at each point agrees with one Pipeline.evaluate_batch call."""
    pipeline = Pipeline(
        [
            ("w", BreitWignerTransform(*RESONANCES["W"], ps_point="cuba::ps_points/0")),
            ("top", BreitWignerTransform(*RESONANCES["top"], ps_point="cuba::ps_points/1")),
        ]
    )
    rng = np.random.default_rng(7)
    points = rng.random((500, 2))
    batch = pipeline.evaluate_batch(points)
    for i, point in enumerate(points):
        scalar = pipeline.evaluate(point)
        for key in pipeline.output_names:
            assert scalar[key] == pytest.approx(batch[key][i], rel=RTOL, abs=1e-6)
    # (ndim, n) input gives same batch
    batch_t = pipeline.evaluate_batch(points.T)
    for key in pipeline.output_names:
        assert np.allclose(batch_t[key], batch[key])


@pytest.mark.parametrize("shape", [(3, 2), (2, 2, 1)])
def test_evaluate_batch_rejects_multi_column_samples(shape):
    transform = BreitWignerTransform(1.0, 1.0)
    with pytest.raises(ValueError, match="shape"):
        transform.evaluate_batch(np.full(shape, 0.5))
