"""Contract shared by every phase-space sampling transform."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class SamplingTransform(ABC):
    """
    Map uniform samples on [0, 1)^d to physical variables plus a Jacobian.

    Concrete transforms declare how many uniform samples they consume per
    evaluation via `dimensions()`. A host (see `phasespace.pipeline`) uses that
    count to size its sampling space and to slice the sample vector.
    """

    inputs: tuple = ()
    outputs: tuple = ()

    @abstractmethod
    def dimensions(self):
        """Number of independent uniform samples consumed per evaluation."""

    @abstractmethod
    def evaluate(self, sample):
        """Return a tuple of outputs, in the order of `outputs`."""

    def evaluate_batch(self, *inputs):
        """Evaluate batches of inputs point by point; subclasses may vectorise."""
        arrays = [np.asarray(values, dtype=np.float64) for values in inputs]
        results = [self.evaluate(*row) for row in zip(*arrays)]
        if not results:
            return tuple(np.empty(0, dtype=np.float64) for _ in self.outputs)
        return tuple(np.array(column, dtype=np.float64) for column in zip(*results))


__all__ = ["SamplingTransform"]
