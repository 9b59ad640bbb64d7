"""Pytypes for arrays, scalars and distributions."""

from typing import (
    Any,
    Callable,
    Dict,
    Optional,
    Sequence,
    Tuple,
    Type,
    Union,
)

import numpy as np

import distrax
from tensorflow_probability.substrates import jax as tfp

from chex import Array

ArrayNumpy = np.ndarray

Scalar = Union[float, int]
Numeric = Union[Array, Scalar]
Shape = Tuple[int, ...]

DistributionLike = Union[distrax.Distribution, tfp.distributions.Distribution]

__all__ = [
    "Any",
    "Array",
    "ArrayNumpy",
    "Callable",
    "Dict",
    "DistributionLike",
    "Numeric",
    "Optional",
    "Scalar",
    "Sequence",
    "Shape",
    "Tuple",
    "Type",
    "Union",
]
