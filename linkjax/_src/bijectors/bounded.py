"""Link bijectors for scalar supports: intervals, half-lines, unit interval."""

import math

import numpy as np

import jax
from jax import numpy as jnp

from linkjax._src.bijectors.link_bijector import LinkBijector
from linkjax._src.typing import Array, Numeric


def _is_finite(bound: Numeric, name: str) -> bool:
  """Whether a bound is finite, uniformly over its batch.

  Traced bounds have no value to inspect and are taken to be finite.
  """
  if isinstance(bound, jax.core.Tracer):
    return True
  finite = np.isfinite(np.asarray(bound))
  if np.all(finite):
    return True
  if not np.any(finite):
    return False
  raise ValueError(
      f"`{name}` mixes finite and infinite values; the link of a batched "
      "bound requires every element to be finite or every element infinite.")


class Bounded(LinkBijector):
  """Logit / log link onto an interval `[lower, upper]`.

  Depending on which bounds are finite:

  * both: `y = logit((x - lower) / (upper - lower))`,
  * lower only: `y = log(x - lower)`,
  * upper only: `y = log(upper - x)`,
  * neither: `y = x`.
  """

  def __init__(self, lower: Numeric = -math.inf, upper: Numeric = math.inf):
    """Creates the bijector.

    Args:
      lower: Lower bound of the support, possibly `-inf`.
      upper: Upper bound of the support, possibly `inf`.
    """
    if isinstance(lower, tuple):
      lower = jnp.asarray(lower)
    if isinstance(upper, tuple):
      upper = jnp.asarray(upper)
    self._lower = lower
    self._upper = upper
    self._lower_bounded = _is_finite(lower, "lower")
    self._upper_bounded = _is_finite(upper, "upper")
    super().__init__(
        event_ndims_in=0,
        is_constant_jacobian=not (self._lower_bounded or self._upper_bounded))

  @property
  def lower(self) -> Numeric:
    return self._lower

  @property
  def upper(self) -> Numeric:
    return self._upper

  def link(self, x: Array) -> Array:
    a, b = self._lower, self._upper
    if self._lower_bounded and self._upper_bounded:
      return jax.scipy.special.logit((x - a) / (b - a))
    elif self._lower_bounded:
      return jnp.log(x - a)
    elif self._upper_bounded:
      return jnp.log(b - x)
    return x

  def invlink(self, y: Array) -> Array:
    a, b = self._lower, self._upper
    if self._lower_bounded and self._upper_bounded:
      return a + (b - a) * jax.nn.sigmoid(y)
    elif self._lower_bounded:
      return a + jnp.exp(y)
    elif self._upper_bounded:
      return b - jnp.exp(y)
    return y

  def log_det_correction(self, x: Array) -> Array:
    a, b = self._lower, self._upper
    if self._lower_bounded and self._upper_bounded:
      return jnp.log((x - a) * (b - x) / (b - a))
    elif self._lower_bounded:
      return jnp.log(x - a)
    elif self._upper_bounded:
      return jnp.log(b - x)
    return jnp.zeros_like(x)

  def same_as(self, other) -> bool:
    """Returns True if this bijector is guaranteed to be the same as `other`."""
    return (type(other) is Bounded and self._lower is other.lower and
            self._upper is other.upper)


class Positive(LinkBijector):
  """Log link onto the positive half-line."""

  def __init__(self):
    super().__init__(event_ndims_in=0)

  def link(self, x: Array) -> Array:
    return jnp.log(x)

  def invlink(self, y: Array) -> Array:
    return jnp.exp(y)

  def log_det_correction(self, x: Array) -> Array:
    return jnp.log(x)

  def same_as(self, other) -> bool:
    return type(other) is Positive


class Unit(LinkBijector):
  """Logit link onto the open unit interval."""

  def __init__(self):
    super().__init__(event_ndims_in=0)

  def link(self, x: Array) -> Array:
    return jax.scipy.special.logit(x)

  def invlink(self, y: Array) -> Array:
    return jax.nn.sigmoid(y)

  def log_det_correction(self, x: Array) -> Array:
    return jnp.log(x * (1. - x))

  def same_as(self, other) -> bool:
    return type(other) is Unit


class PositiveVector(LinkBijector):
  """Elementwise log link onto vectors with positive entries.

  Unlike `Positive`, the event is the trailing axis, so the Jacobian
  correction is summed over it.
  """

  def __init__(self):
    super().__init__(event_ndims_in=1)

  def link(self, x: Array) -> Array:
    return jnp.log(x)

  def invlink(self, y: Array) -> Array:
    return jnp.exp(y)

  def log_det_correction(self, x: Array) -> Array:
    return jnp.sum(jnp.log(x), axis=-1)

  def same_as(self, other) -> bool:
    return type(other) is PositiveVector
