"""
Composition of sampling transforms into one integrand-side pipeline.

Transforms are evaluated in declaration order. Inputs are resolved through
their `InputTag`s against a record that starts with the uniform phase-space
points and grows with each transform's outputs, stored as `name::output`.
Every evaluation builds and returns a fresh record; nothing is shared between
calls.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from .config import PS_POINTS_SOURCE, InputTag


class Pipeline:
    def __init__(self, transforms):
        if isinstance(transforms, Mapping):
            items = list(transforms.items())
        else:
            items = list(transforms)
        if not items:
            raise ValueError("Pipeline requires at least one transform.")

        names = []
        for name, _ in items:
            if not name or "::" in name:
                raise ValueError(f"Invalid transform name {name!r}.")
            if name in names:
                raise ValueError(f"Duplicate transform name {name!r}.")
            names.append(name)

        self._transforms = tuple(items)
        self._ndim = sum(int(transform.dimensions()) for _, transform in items)
        self._check_inputs()

    def _input_tags(self, transform):
        tags = []
        for input_name in transform.inputs:
            tag = getattr(transform, input_name)
            if isinstance(tag, str):
                tag = InputTag.parse(tag)
            tags.append(tag)
        return tags

    def _check_inputs(self):
        consumed = set()
        produced = set()
        for name, transform in self._transforms:
            for tag in self._input_tags(transform):
                if tag.key == PS_POINTS_SOURCE:
                    if tag.index is None or tag.index >= self._ndim:
                        raise ValueError(
                            f"{name}: {tag} is outside the {self._ndim}-dimensional phase space."
                        )
                    if tag.index in consumed:
                        raise ValueError(f"{name}: phase-space point {tag} is consumed twice.")
                    consumed.add(tag.index)
                elif tag.key not in produced:
                    raise ValueError(f"{name}: input {tag} is not produced by an earlier transform.")
            produced.update(f"{name}::{output}" for output in transform.outputs)

    def __len__(self):
        return len(self._transforms)

    def __iter__(self):
        return iter(self._transforms)

    def __getitem__(self, name):
        for transform_name, transform in self._transforms:
            if transform_name == name:
                return transform
        raise KeyError(name)

    def dimensions(self):
        """Total number of uniform samples consumed per evaluation."""
        return self._ndim

    @property
    def output_names(self):
        return [
            f"{name}::{output}"
            for name, transform in self._transforms
            for output in transform.outputs
        ]

    def _run(self, record, batch):
        for name, transform in self._transforms:
            args = [tag.get(record) for tag in self._input_tags(transform)]
            if batch:
                values = transform.evaluate_batch(*args)
            else:
                values = transform.evaluate(*args)
            for output, value in zip(transform.outputs, values):
                record[f"{name}::{output}"] = value
        del record[PS_POINTS_SOURCE]
        return record

    def evaluate(self, ps_points):
        """Evaluate every transform for one point of shape (dimensions(),)."""
        ps_arr = np.asarray(ps_points, dtype=np.float64).reshape(-1)
        if ps_arr.shape[0] != self._ndim:
            raise ValueError(
                f"Expected {self._ndim} phase-space points, got {ps_arr.shape[0]}."
            )
        return self._run({PS_POINTS_SOURCE: ps_arr}, batch=False)

    def evaluate_batch(self, ps_points):
        """
        Evaluate every transform for a batch of points.

        Accepts shape (n, ndim) or (ndim, n); a 1D array is accepted when
        the pipeline is one-dimensional.
        """
        ps_arr = np.asarray(ps_points, dtype=np.float64)
        if ps_arr.ndim == 1 and self._ndim == 1:
            ps_arr = ps_arr.reshape(-1, 1)
        if ps_arr.ndim != 2:
            raise ValueError("ps_points must be a 2D array.")
        if ps_arr.shape[1] != self._ndim:
            if ps_arr.shape[0] == self._ndim:
                ps_arr = ps_arr.T
            else:
                raise ValueError(
                    f"ps_points must have shape (n, {self._ndim}) or ({self._ndim}, n)."
                )
        return self._run({PS_POINTS_SOURCE: ps_arr}, batch=True)

    @staticmethod
    def jacobian(outputs):
        """Product of every `::jacobian` entry of an output record."""
        total = 1.0
        for key, value in outputs.items():
            if key.endswith("::jacobian"):
                total = total * value
        return total

    def __repr__(self):
        members = ", ".join(f"{name}={transform!r}" for name, transform in self._transforms)
        return f"Pipeline({members})"


__all__ = ["Pipeline"]
