"""
Named parameters and input references for phase-space transforms.

Values reach a transform already resolved: a `ParameterSet` is a read-only
mapping of names to values, and an `InputTag` names where an input is read
from, using the `module::parameter` or `module::parameter/index` notation.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

# Source of the uniform phase-space points supplied by the integrator.
PS_POINTS_SOURCE = "cuba::ps_points"

_MISSING = object()


class InputTag:
    """Reference to a value produced upstream, e.g. `cuba::ps_points/0`."""

    __slots__ = ("module", "parameter", "index")

    def __init__(self, module, parameter, index=None):
        if not module or not parameter:
            raise ValueError("InputTag requires a non-empty module and parameter.")
        if index is not None and int(index) < 0:
            raise ValueError(f"InputTag index must be non-negative, got {index}")
        self.module = module
        self.parameter = parameter
        self.index = None if index is None else int(index)

    @classmethod
    def parse(cls, tag):
        module, sep, rest = tag.partition("::")
        if not sep:
            raise ValueError(f"Invalid input tag {tag!r}: expected 'module::parameter[/index]'.")
        parameter, slash, index = rest.partition("/")
        if slash:
            if not index.isdigit():
                raise ValueError(f"Invalid input tag {tag!r}: index must be an integer.")
            return cls(module, parameter, int(index))
        return cls(module, parameter)

    @staticmethod
    def is_input_tag(value):
        if not isinstance(value, str):
            return False
        try:
            InputTag.parse(value)
        except ValueError:
            return False
        return True

    @property
    def key(self):
        return f"{self.module}::{self.parameter}"

    def get(self, record):
        """
        Resolve the tag against a record of produced values.

        For indexed tags the last axis is indexed, so a batch of shape
        (n, ndim) resolves to the column of n values.
        """
        value = record[self.key]
        if self.index is None:
            return value
        return np.asarray(value)[..., self.index]

    def __eq__(self, other):
        if not isinstance(other, InputTag):
            return NotImplemented
        return (self.module, self.parameter, self.index) == (
            other.module,
            other.parameter,
            other.index,
        )

    def __hash__(self):
        return hash((self.module, self.parameter, self.index))

    def __str__(self):
        if self.index is None:
            return self.key
        return f"{self.key}/{self.index}"

    def __repr__(self):
        return f"InputTag({str(self)!r})"


class ParameterSet(Mapping):
    """Read-only set of resolved parameters for one module."""

    def __init__(self, module_name, values=None, **kwargs):
        self.module_name = module_name
        self._values = dict(values or {}, **kwargs)

    def __getitem__(self, name):
        return self._values[name]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def get(self, name, default=_MISSING, type=None):
        if name in self._values:
            value = self._values[name]
        elif default is _MISSING:
            raise KeyError(f"Parameter {name!r} not found for module {self.module_name!r}")
        else:
            value = default
        if type is not None:
            try:
                value = type(value)
            except (TypeError, ValueError) as exc:
                raise TypeError(
                    f"Parameter {name!r} of module {self.module_name!r} "
                    f"cannot be converted to {type.__name__}: {value!r}"
                ) from exc
        return value

    def __repr__(self):
        return f"ParameterSet({self.module_name!r}, {self._values!r})"


__all__ = ["InputTag", "ParameterSet", "PS_POINTS_SOURCE"]
