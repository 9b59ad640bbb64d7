"""Stick-breaking link between the probability simplex and real vectors.

A point `x` of the (K-1)-simplex is built by breaking a unit stick K-1 times:
step k breaks off a fraction `z_k` of what is left, `1 - s`, where `s` is the
mass already broken off. The link maps each fraction to the real line with a
logit, shifted by `log(K - k)` so that the uniform point maps to zero.

All ratios are kept strictly inside `(0, 1)` by an epsilon guard equal to the
machine epsilon of the working dtype, so points on the boundary of the
simplex (entries exactly 0 or 1) map to finite values. The guard biases the
result by O(eps).

The last unconstrained coordinate is either fixed to zero (`projected=True`)
or carries the residual `1 - sum(x)`.
"""

import jax
from jax import numpy as jnp

from linkjax._src.bijectors.link_bijector import LinkBijector
from linkjax._src.bijectors.link_bijector import as_float
from linkjax._src.typing import Array, Callable


def _eps(x: Array) -> Array:
  return jnp.finfo(x.dtype).eps


def _offsets(num_categories: int, dtype) -> Array:
  """Calibration offsets `log(K - k)` for k = 1, ..., K-1."""
  return jnp.log(jnp.arange(num_categories - 1, 0, -1, dtype=dtype))


def _link_vector(x: Array, projected: bool) -> Array:
  """Stick-breaking link of a single vector of shape (K,)."""
  num_categories = x.shape[-1]
  if num_categories == 1:
    return jnp.zeros_like(x) if projected else 1. - x

  eps = _eps(x)
  offsets = _offsets(num_categories, x.dtype)

  z_first = x[0] * (1. - 2. * eps) + eps
  y_first = jax.scipy.special.logit(z_first) + offsets[0]

  def step(partial_sum, inputs):
    x_prev, x_k, offset = inputs
    partial_sum = partial_sum + x_prev
    # z in [eps, 1 - eps]; x_k = 0 and partial_sum = 1 gives z close to 1.
    z = (x_k + eps) * (1. - 2. * eps) / (1. - partial_sum + eps)
    return partial_sum, jax.scipy.special.logit(z) + offset

  partial_sum, y_mid = jax.lax.scan(
      step,
      jnp.zeros((), x.dtype),
      (x[:-2], x[1:-1], offsets[1:]),
  )
  partial_sum = partial_sum + x[-2]

  if projected:
    y_last = jnp.zeros((), x.dtype)
  else:
    y_last = 1. - partial_sum - x[-1]

  return jnp.concatenate([y_first[None], y_mid, y_last[None]])


def _invlink_vector(y: Array, projected: bool) -> Array:
  """Inverse stick-breaking link of a single vector of shape (K,)."""
  num_categories = y.shape[-1]
  if num_categories == 1:
    return jnp.ones_like(y) if projected else 1. - y

  eps = _eps(y)
  offsets = _offsets(num_categories, y.dtype)

  z_first = jax.nn.sigmoid(y[0] - offsets[0])
  x_first = (z_first - eps) / (1. - 2. * eps)

  def step(carry, inputs):
    partial_sum, x_prev = carry
    y_k, offset = inputs
    z = jax.nn.sigmoid(y_k - offset)
    partial_sum = partial_sum + x_prev
    x_k = (1. - partial_sum + eps) / (1. - 2. * eps) * z - eps
    return (partial_sum, x_k), x_k

  (partial_sum, x_prev), x_mid = jax.lax.scan(
      step,
      (jnp.zeros((), y.dtype), x_first),
      (y[1:-1], offsets[1:]),
  )
  partial_sum = partial_sum + x_prev

  if projected:
    x_last = 1. - partial_sum
  else:
    # NOTE: mixes the constrained partial sum with the unconstrained residual
    # coordinate; kept to invert the non-projected link exactly.
    x_last = 1. - partial_sum - y[-1]

  return jnp.concatenate([x_first[None], x_mid, x_last[None]])


def _log_det_vector(x: Array) -> Array:
  """Log-determinant of the stick-breaking reparameterisation at (K,) `x`."""
  num_categories = x.shape[-1]
  if num_categories == 1:
    return jnp.zeros((), x.dtype)

  eps = _eps(x)

  z_first = x[0]
  log_det = jnp.log(z_first + eps) + jnp.log(1. - z_first + eps)

  def step(partial_sum, inputs):
    x_prev, x_k = inputs
    partial_sum = partial_sum + x_prev
    z = x_k / (1. - partial_sum)
    term = (
        jnp.log(z + eps) + jnp.log(1. - z + eps) +
        jnp.log(1. - partial_sum + eps))
    return partial_sum, term

  _, terms = jax.lax.scan(
      step,
      jnp.zeros((), x.dtype),
      (x[:-2], x[1:-1]),
  )
  return log_det + jnp.sum(terms)


def _over_columns(fn: Callable[[Array], Array], x: Array) -> Array:
  """Applies a per-vector map to a vector, or to each column of a matrix."""
  if x.ndim == 1:
    return fn(x)
  if x.ndim == 2:
    return jax.vmap(fn, in_axes=1, out_axes=-1)(x)
  raise ValueError(
      f"Expected a vector or a matrix of columns, got shape {x.shape}.")


def simplex_link(x: Array, projected: bool = True) -> Array:
  """Stick-breaking link of a simplex point.

  Args:
    x: Probability vector of shape (K,), or a matrix of shape (K, N) whose N
      columns are probability vectors.
    projected: If True, the last unconstrained coordinate is set to zero.
      Otherwise it holds the residual `1 - sum(x)`.

  Returns:
    Unconstrained array with the same shape as `x`.
  """
  return _over_columns(lambda v: _link_vector(v, projected), as_float(x))


def simplex_invlink(y: Array, projected: bool = True) -> Array:
  """Inverse of `simplex_link`, with the same vector / column conventions."""
  return _over_columns(lambda v: _invlink_vector(v, projected), as_float(y))


def simplex_log_det_correction(x: Array) -> Array:
  """Jacobian correction of the stick-breaking link.

  Args:
    x: Probability vector of shape (K,), or matrix of shape (K, N) of columns.

  Returns:
    Scalar, or array of shape (N,) with one correction per column.
  """
  return _over_columns(_log_det_vector, as_float(x))


def _over_batch(fn: Callable[[Array], Array], x: Array) -> Array:
  """Applies a per-vector map over all leading (batch) axes of `x`."""
  batch_shape = x.shape[:-1]
  flat = x.reshape((-1, x.shape[-1]))
  out = jax.vmap(fn)(flat)
  return out.reshape(batch_shape + out.shape[1:])


class StickBreaking(LinkBijector):
  """Stick-breaking link bijector onto the probability simplex.

  The event is the trailing axis, of size K; leading axes are batch axes.
  """

  def __init__(self, projected: bool = True):
    """Creates the bijector.

    Args:
      projected: If True, the last unconstrained coordinate is fixed to zero
        and ignored by `invlink`.
    """
    self._projected = projected
    super().__init__(event_ndims_in=1)

  @property
  def projected(self) -> bool:
    return self._projected

  def link(self, x: Array) -> Array:
    return _over_batch(lambda v: _link_vector(v, self._projected), x)

  def invlink(self, y: Array) -> Array:
    return _over_batch(lambda v: _invlink_vector(v, self._projected), y)

  def log_det_correction(self, x: Array) -> Array:
    return _over_batch(_log_det_vector, x)

  def same_as(self, other) -> bool:
    return (type(other) is StickBreaking and
            self._projected == other.projected)
