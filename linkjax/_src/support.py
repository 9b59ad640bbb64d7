"""Support families of distributions and the registry that assigns them.

A support family is a small closed set of tagged values (`SupportKind`). Each
value carries only the parameters of its domain, e.g. the bounds of an
interval or the length of a simplex vector, and fully determines which link
transform applies.

The registry maps concrete distribution classes, from TensorFlow Probability
(JAX substrate) and distrax, to a factory returning their `SupportKind`:

```python
@register_support(MyDistribution)
def _my_support(d):
  return Bounded(d.low, d.high)
```

Distributions with no registered class fall back to `Real()`, i.e. the
identity link.
"""

import dataclasses
import functools
import math

from absl import logging
import numpy as np

import distrax
import jax
from tensorflow_probability.substrates import jax as tfp

from linkjax._src.typing import (Any, Callable, Dict, DistributionLike,
                                 Numeric, Optional, Type, Union)

tfd = tfp.distributions


@dataclasses.dataclass(frozen=True)
class Real:
  """The whole real line (or real vectors / matrices); identity link."""


@dataclasses.dataclass(frozen=True)
class Bounded:
  """An interval `[lower, upper]`; either bound may be infinite.

  Batched bounds registered from a distribution are stored as nested tuples,
  so that descriptors stay hashable and compare by value.
  """
  lower: Numeric = -math.inf
  upper: Numeric = math.inf


@dataclasses.dataclass(frozen=True)
class Positive:
  """The positive half-line `(0, inf)`."""


@dataclasses.dataclass(frozen=True)
class Unit:
  """The open unit interval `(0, 1)`."""


@dataclasses.dataclass(frozen=True)
class Simplex:
  """Probability vectors of length `dim`."""
  dim: int


@dataclasses.dataclass(frozen=True)
class PositiveDefinite:
  """Symmetric positive-definite matrices of shape `(dim, dim)`."""
  dim: int


@dataclasses.dataclass(frozen=True)
class PositiveVector:
  """Vectors with strictly positive entries, e.g. a multivariate log-normal."""


SupportKind = Union[Real, Bounded, Positive, Unit, Simplex, PositiveDefinite,
                    PositiveVector]

SUPPORT_KINDS = (Real, Bounded, Positive, Unit, Simplex, PositiveDefinite,
                 PositiveVector)

SupportFactory = Callable[[Any], SupportKind]


def _nested_tuple(value):
  if isinstance(value, list):
    return tuple(_nested_tuple(v) for v in value)
  return value


def _as_bound(value: Numeric) -> Any:
  """Turns concrete bounds into floats or nested tuples of floats.

  Descriptors then compare and hash by value, batched bounds included.
  Traced bounds (e.g. under `jax.grad` or `jax.jit`) are kept as they are.
  """
  if isinstance(value, jax.core.Tracer):
    return value
  value = np.asarray(value, dtype=float)
  if value.ndim == 0:
    return float(value)
  return _nested_tuple(value.tolist())


class SupportRegistry:
  """Registry linking distribution classes to their support family."""

  def __init__(self):
    self._registry: Dict[Type[Any], SupportFactory] = {}

  def register(self,
               distribution_cls: Type[Any],
               factory: Optional[SupportFactory] = None):
    """Registers a distribution class.

    Can be used as a decorator:

    ```python
    @registry.register(tfd.Beta)
    def _beta(d):
      return Unit()
    ```

    Args:
      distribution_cls: Class of the distribution. Subclasses inherit the
        registration unless they are registered themselves.
      factory: Callable taking a distribution instance and returning its
        `SupportKind`.

    Returns:
      The factory, so that the method can be used as a decorator.
    """
    if factory is None:
      return lambda fac: self.register(distribution_cls, fac)

    if not isinstance(distribution_cls, type):
      raise TypeError(
          f"Expected a distribution class, but got {distribution_cls!r}.")

    self._registry[distribution_cls] = factory
    return factory

  def __contains__(self, distribution_cls: Type[Any]) -> bool:
    return any(cls in self._registry for cls in distribution_cls.__mro__)

  def __call__(self, distribution: DistributionLike) -> SupportKind:
    """Looks up the support family of a distribution instance."""
    for cls in type(distribution).__mro__:
      factory = self._registry.get(cls)
      if factory is not None:
        return factory(distribution)
    _warn_identity_fallback(type(distribution))
    return Real()


@functools.lru_cache(maxsize=None)
def _warn_identity_fallback(distribution_cls: Type[Any]) -> None:
  logging.warning(
      "No support registered for %s; using the identity link.",
      distribution_cls.__name__)


support_of = SupportRegistry()
register_support = support_of.register


def _real(d):
  del d
  return Real()


def _positive(d):
  del d
  return Positive()


def _unit(d):
  del d
  return Unit()


def _low_high(d):
  return Bounded(_as_bound(d.low), _as_bound(d.high))


def _dirichlet(d):
  return Simplex(int(d.concentration.shape[-1]))


def _wishart(d):
  return PositiveDefinite(int(np.asarray(d.event_shape_tensor())[-1]))


for _cls in (tfd.Cauchy, tfd.Gumbel, tfd.Laplace, tfd.Logistic, tfd.Normal,
             tfd.StudentT, distrax.Gumbel, distrax.Laplace, distrax.Logistic,
             distrax.Normal):
  register_support(_cls, _real)

for _cls in (tfd.Chi, tfd.Chi2, tfd.Exponential, tfd.Gamma, tfd.HalfCauchy,
             tfd.HalfNormal, tfd.InverseGamma, tfd.InverseGaussian,
             tfd.LogNormal, tfd.Weibull, distrax.Gamma):
  register_support(_cls, _positive)

for _cls in (tfd.Beta, tfd.Kumaraswamy, distrax.Beta):
  register_support(_cls, _unit)

for _cls in (tfd.Uniform, tfd.TruncatedNormal, tfd.TruncatedCauchy,
             distrax.Uniform):
  register_support(_cls, _low_high)

for _cls in (tfd.Dirichlet, distrax.Dirichlet):
  register_support(_cls, _dirichlet)

for _cls in (tfd.WishartTriL, tfd.WishartLinearOperator):
  register_support(_cls, _wishart)


@register_support(tfd.Pareto)
def _pareto(d):
  # Support is [scale, inf).
  return Bounded(_as_bound(d.scale), math.inf)
