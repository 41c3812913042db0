import numpy as np
import pytest

from phasespace import BreitWignerTransform, Pipeline, SamplingTransform, breit_wigner_map
from phasespace.defaults import RESONANCES


class ShiftTransform(SamplingTransform):
    """Consumes no phase-space point; shifts an upstream output."""

    inputs = ("source",)
    outputs = ("value", "jacobian")

    def __init__(self, source, shift):
        self.source = source
        self.shift = shift

    def dimensions(self):
        return 0

    def evaluate(self, value):
        return value + self.shift, 1.0


def _two_propagators():
    return Pipeline(
        {
            "w": BreitWignerTransform(*RESONANCES["W"], ps_point="cuba::ps_points/1"),
            "z": BreitWignerTransform(*RESONANCES["Z"], ps_point="cuba::ps_points/0"),
        }
    )


def test_dimensions_sum():
    pipeline = _two_propagators()
    assert pipeline.dimensions() == 2
    assert len(pipeline) == 2
    assert [name for name, _ in pipeline] == ["w", "z"]
    assert pipeline["w"].mass == RESONANCES["W"][0]


def test_evaluate_routes_ps_points_by_tag():
    pipeline = _two_propagators()
    outputs = pipeline.evaluate([0.25, 0.75])
    assert set(outputs) == {"w::s", "w::jacobian", "z::s", "z::jacobian"}
    assert outputs["w::s"] == pytest.approx(breit_wigner_map(0.75, *RESONANCES["W"])[0])
    assert outputs["z::s"] == pytest.approx(breit_wigner_map(0.25, *RESONANCES["Z"])[0])
    assert pipeline.jacobian(outputs) == pytest.approx(outputs["w::jacobian"] * outputs["z::jacobian"])


def test_evaluate_returns_fresh_record():
    pipeline = _two_propagators()
    first = pipeline.evaluate([0.1, 0.2])
    first["w::s"] = -1.0
    second = pipeline.evaluate([0.1, 0.2])
    assert second["w::s"] != -1.0


def test_downstream_transform_reads_upstream_output():
    pipeline = Pipeline(
        [
            ("bw", BreitWignerTransform(1.0, 1.0)),
            ("shifted", ShiftTransform("bw::s", 2.0)),
        ]
    )
    assert pipeline.dimensions() == 1
    outputs = pipeline.evaluate([0.5])
    assert outputs["shifted::value"] == pytest.approx(np.sqrt(2.0) + 2.0)
    batch = pipeline.evaluate_batch(np.array([0.0, 0.5]))
    assert np.allclose(batch["shifted::value"], [2.0, np.sqrt(2.0) + 2.0])


def test_wrong_sample_length():
    with pytest.raises(ValueError, match="Expected 2"):
        _two_propagators().evaluate([0.5])
    with pytest.raises(ValueError, match="shape"):
        _two_propagators().evaluate_batch(np.zeros((4, 3)))
    with pytest.raises(ValueError, match="2D"):
        _two_propagators().evaluate_batch(np.zeros(4))


def test_invalid_composition():
    with pytest.raises(ValueError, match="at least one"):
        Pipeline([])
    with pytest.raises(ValueError, match="Duplicate"):
        Pipeline(
            [
                ("bw", BreitWignerTransform(1.0, 1.0, "cuba::ps_points/0")),
                ("bw", BreitWignerTransform(1.0, 1.0, "cuba::ps_points/1")),
            ]
        )
    with pytest.raises(ValueError, match="Invalid transform name"):
        Pipeline([("a::b", BreitWignerTransform(1.0, 1.0))])
    with pytest.raises(ValueError, match="consumed twice"):
        Pipeline(
            [
                ("a", BreitWignerTransform(1.0, 1.0)),
                ("b", BreitWignerTransform(1.0, 1.0)),
            ]
        )
    with pytest.raises(ValueError, match="outside"):
        Pipeline([("a", BreitWignerTransform(1.0, 1.0, "cuba::ps_points/1"))])
    with pytest.raises(ValueError, match="earlier transform"):
        Pipeline(
            [
                ("shifted", ShiftTransform("bw::s", 2.0)),
                ("bw", BreitWignerTransform(1.0, 1.0)),
            ]
        )
