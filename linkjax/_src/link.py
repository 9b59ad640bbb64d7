"""Link, inverse link and transformed log-density of a distribution.

These functions select the link bijector of a distribution's support family
and apply it. Shape conventions follow the point being transformed:

* scalar supports act elementwise on arrays of any shape,
* `Simplex(K)` accepts a vector of shape (K,) or a matrix of shape (K, N)
  whose columns are independent simplex points,
* `PositiveDefinite(n)` accepts a matrix of shape (n, n) or a stack of them,
  of shape (..., n, n).
"""

import functools

from absl import logging

from jax import numpy as jnp

from linkjax._src import support as support_lib
from linkjax._src.bijectors import bounded
from linkjax._src.bijectors import log_cholesky
from linkjax._src.bijectors import stick_breaking
from linkjax._src.bijectors.link_bijector import LinkBijector
from linkjax._src.bijectors.link_bijector import as_float
from linkjax._src.errors import DimensionMismatchError
from linkjax._src.typing import Array, DistributionLike, Optional


def resolve_support(
    distribution: Optional[DistributionLike] = None,
    support: Optional[support_lib.SupportKind] = None,
) -> support_lib.SupportKind:
  """Returns `support` if given, otherwise the registered support family."""
  if support is not None:
    return support
  if isinstance(distribution, support_lib.SUPPORT_KINDS):
    return distribution
  if distribution is None:
    raise ValueError("Either `distribution` or `support` must be given.")
  return support_lib.support_of(distribution)


@functools.singledispatch
def _bijector_for_support(support, projected: bool) -> LinkBijector:
  raise TypeError(f"Unknown support family {support!r}.")


@_bijector_for_support.register
def _(support: support_lib.Real, projected: bool) -> LinkBijector:
  del support, projected
  return bounded.Bounded()


@_bijector_for_support.register
def _(support: support_lib.Bounded, projected: bool) -> LinkBijector:
  del projected
  return bounded.Bounded(support.lower, support.upper)


@_bijector_for_support.register
def _(support: support_lib.Positive, projected: bool) -> LinkBijector:
  del support, projected
  return bounded.Positive()


@_bijector_for_support.register
def _(support: support_lib.Unit, projected: bool) -> LinkBijector:
  del support, projected
  return bounded.Unit()


@_bijector_for_support.register
def _(support: support_lib.PositiveVector, projected: bool) -> LinkBijector:
  del support, projected
  return bounded.PositiveVector()


@_bijector_for_support.register
def _(support: support_lib.Simplex, projected: bool) -> LinkBijector:
  del support
  return stick_breaking.StickBreaking(projected=projected)


@_bijector_for_support.register
def _(support: support_lib.PositiveDefinite, projected: bool) -> LinkBijector:
  del support, projected
  return log_cholesky.LogCholesky()


def bijector_for(
    distribution: Optional[DistributionLike] = None,
    projected: bool = True,
    support: Optional[support_lib.SupportKind] = None,
) -> LinkBijector:
  """Link bijector of a distribution's support.

  Args:
    distribution: A TFP or distrax distribution. May be omitted when
      `support` is given.
    projected: For simplex supports, whether the last unconstrained
      coordinate is fixed to zero.
    support: Explicit support family, overriding the registry.

  Returns:
    A `LinkBijector` whose `forward` maps unconstrained space onto the
    support.
  """
  support = resolve_support(distribution, support)
  logging.debug("Using the %s link.", type(support).__name__)
  return _bijector_for_support(support, projected)


def _check_shape(support: support_lib.SupportKind, x: Array) -> None:
  """Raises if the shape of `x` does not match the support's dimension."""
  if isinstance(support, support_lib.Simplex):
    if x.ndim not in (1, 2) or x.shape[0] != support.dim:
      raise DimensionMismatchError(
          f"Expected a simplex point of shape ({support.dim},) or "
          f"({support.dim}, N), got shape {x.shape}.")
  elif isinstance(support, support_lib.PositiveDefinite):
    if x.ndim < 2 or x.shape[-2:] != (support.dim, support.dim):
      raise DimensionMismatchError(
          f"Expected a matrix of shape ({support.dim}, {support.dim}), "
          f"got shape {x.shape}.")


def link(
    distribution: DistributionLike,
    x: Array,
    projected: bool = True,
    support: Optional[support_lib.SupportKind] = None,
) -> Array:
  """Maps a point in the support of `distribution` to unconstrained space.

  Args:
    distribution: A TFP or distrax distribution, or a `SupportKind`.
    x: Point in the support. See the module docstring for shapes.
    projected: For simplex supports, whether the last unconstrained
      coordinate is fixed to zero rather than holding the residual.
    support: Explicit support family, overriding the registry.

  Returns:
    Unconstrained point with the same shape as `x`.

  Raises:
    DimensionMismatchError: if the shape of `x` does not match the support.
    NotPositiveDefiniteError: if a positive-definite point fails its Cholesky
      factorisation.
  """
  support = resolve_support(distribution, support)
  x = as_float(x)
  _check_shape(support, x)
  if isinstance(support, support_lib.Simplex):
    return stick_breaking.simplex_link(x, projected=projected)
  return bijector_for(support=support, projected=projected).link(x)


def invlink(
    distribution: DistributionLike,
    y: Array,
    projected: bool = True,
    support: Optional[support_lib.SupportKind] = None,
) -> Array:
  """Maps an unconstrained point back to the support of `distribution`.

  Args:
    distribution: A TFP or distrax distribution, or a `SupportKind`.
    y: Unconstrained point, shaped as the output of `link`.
    projected: Must match the value used in `link`.
    support: Explicit support family, overriding the registry.

  Returns:
    Point in the support with the same shape as `y`.
  """
  support = resolve_support(distribution, support)
  y = as_float(y)
  _check_shape(support, y)
  if isinstance(support, support_lib.Simplex):
    return stick_breaking.simplex_invlink(y, projected=projected)
  return bijector_for(support=support, projected=projected).invlink(y)


def logpdf_with_transform(
    distribution: DistributionLike,
    x: Array,
    transform: bool,
    support: Optional[support_lib.SupportKind] = None,
) -> Array:
  """Log-density of `x`, optionally corrected for the link transform.

  `x` is always a point in the support. With `transform=True` the result is
  the log-density of `link(x)` under the distribution pushed to
  unconstrained space, i.e. the base log-density plus the Jacobian
  correction of `invlink`.

  Args:
    distribution: A TFP or distrax distribution.
    x: Point in the support. See the module docstring for shapes.
    transform: Whether to add the Jacobian correction.
    support: Explicit support family, overriding the registry.

  Returns:
    Log-density, one value per point (e.g. per simplex column).
  """
  support = resolve_support(distribution, support)
  x = as_float(x)
  _check_shape(support, x)
  if isinstance(support, support_lib.Simplex):
    # Distributions expect the simplex on the trailing axis.
    x = x.T
  bijector = bijector_for(support=support)
  return corrected_log_prob(distribution, support, bijector, x, transform)


def corrected_log_prob(
    distribution: DistributionLike,
    support: support_lib.SupportKind,
    bijector: LinkBijector,
    x: Array,
    transform: bool,
) -> Array:
  """Base log-density of `x` plus, if `transform`, the bijector's correction.

  Events are on the trailing axes of `x`, as for `distribution.log_prob`.
  """
  if isinstance(support, support_lib.Simplex):
    # Shifted away from zero to avoid a zero density on the boundary.
    lp = distribution.log_prob(x + jnp.finfo(x.dtype).eps)
  else:
    lp = distribution.log_prob(x)
  if not transform or isinstance(support, support_lib.Real):
    return lp

  correction = bijector.log_det_correction(x)
  if isinstance(support, support_lib.PositiveDefinite):
    # Only correct densities that are not already degenerate.
    return jnp.where(jnp.isfinite(lp), lp + correction, lp)
  return lp + correction
