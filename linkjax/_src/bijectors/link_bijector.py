"""Link bijector abstract base class."""

import abc

from distrax._src.bijectors import bijector as base
from jax import numpy as jnp

from linkjax._src.typing import Array, Tuple


def as_float(x) -> Array:
  """Converts `x` to an array, promoting integer and boolean dtypes to float."""
  x = jnp.asarray(x)
  if not jnp.issubdtype(x.dtype, jnp.floating):
    x = x.astype(float)
  return x


class LinkBijector(base.Bijector):
  """Bijector from unconstrained space onto the support of a distribution.

  Subclasses describe a support family through three maps:

  * `link(x)`: constrained point `x` to unconstrained point `y`.
  * `invlink(y)`: unconstrained point `y` back to the support.
  * `log_det_correction(x)`: `log|det J(invlink)|`, written as a function of
    the constrained point `x`. This is the term added to a log-density in the
    support to obtain the log-density of `y`.

  As a `distrax.Bijector`, `forward` is `invlink` and `inverse` is `link`, so
  that the bijector can be used to push a distribution over unconstrained
  space onto the support, as TFP's default event-space bijectors do.
  """

  @abc.abstractmethod
  def link(self, x: Array) -> Array:
    """Maps a point in the support to unconstrained space."""

  @abc.abstractmethod
  def invlink(self, y: Array) -> Array:
    """Maps an unconstrained point back to the support."""

  @abc.abstractmethod
  def log_det_correction(self, x: Array) -> Array:
    """Computes log|det J(invlink)| at the point `x = invlink(y)`."""

  def forward(self, x: Array) -> Array:
    """Computes y = f(x)."""
    return self.invlink(x)

  def inverse(self, y: Array) -> Array:
    """Computes x = f^{-1}(y)."""
    return self.link(y)

  def forward_and_log_det(self, x: Array) -> Tuple[Array, Array]:
    """Computes y = f(x) and log|det J(f)(x)|."""
    y = self.invlink(x)
    return y, self.log_det_correction(y)

  def inverse_and_log_det(self, y: Array) -> Tuple[Array, Array]:
    """Computes x = f^{-1}(y) and log|det J(f^{-1})(y)|."""
    return self.link(y), -self.log_det_correction(y)
