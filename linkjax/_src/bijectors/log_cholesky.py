"""Log-Cholesky link onto symmetric positive-definite matrices."""

import jax
from jax import numpy as jnp

from linkjax._src.bijectors.link_bijector import LinkBijector
from linkjax._src.errors import NotPositiveDefiniteError
from linkjax._src.typing import Array


def _set_diagonal(matrix: Array, diagonal: Array) -> Array:
  """Returns `matrix` with its diagonal replaced by `diagonal`."""
  eye = jnp.eye(matrix.shape[-1], dtype=matrix.dtype)
  old = jnp.diagonal(matrix, axis1=-2, axis2=-1)
  return matrix + (diagonal - old)[..., :, None] * eye


def cholesky_lower(x: Array) -> Array:
  """Lower Cholesky factor of `x`, raising on concrete non-PD input.

  `jnp.linalg.cholesky` reports a failed factorisation by returning NaNs. On
  concrete arrays that is turned into a `NotPositiveDefiniteError`; under
  tracing (e.g. inside `jax.jit`) values are unknown and NaNs propagate.
  """
  chol = jnp.linalg.cholesky(x)
  if not isinstance(chol, jax.core.Tracer):
    if not bool(jnp.all(jnp.isfinite(chol))):
      raise NotPositiveDefiniteError(
          f"Cholesky factorisation failed for matrix of shape {x.shape}; "
          "the input is not symmetric positive-definite.")
  return chol


class LogCholesky(LinkBijector):
  """Link between positive-definite matrices and log-Cholesky factors.

  `link(X)` is the lower Cholesky factor `L` of `X = L L^T` with its diagonal
  replaced by `log(diag(L))`. The strictly upper triangle of the result is
  zero, and is ignored by `invlink`.

  The event is the two trailing axes, of shape (n, n).
  """

  def __init__(self):
    super().__init__(event_ndims_in=2)

  def link(self, x: Array) -> Array:
    chol = cholesky_lower(x)
    diag = jnp.diagonal(chol, axis1=-2, axis2=-1)
    return _set_diagonal(chol, jnp.log(diag))

  def invlink(self, y: Array) -> Array:
    y = jnp.tril(y)
    diag = jnp.diagonal(y, axis1=-2, axis2=-1)
    chol = _set_diagonal(y, jnp.exp(diag))
    return chol @ jnp.swapaxes(chol, -2, -1)

  def log_det_correction(self, x: Array) -> Array:
    """Log-determinant of the map from log-Cholesky factors to `x`.

    With `U` the upper Cholesky factor of `x` and 1-based `i`, this is
    `sum_i (n - i + 2) log U[i, i] + n log 2`.
    """
    dim = x.shape[-1]
    # The diagonal of U = L^T is the diagonal of L.
    diag = jnp.diagonal(cholesky_lower(x), axis1=-2, axis2=-1)
    coeffs = jnp.arange(dim + 1, 1, -1, dtype=diag.dtype)
    return jnp.sum(coeffs * jnp.log(diag), axis=-1) + dim * jnp.log(2.)

  def same_as(self, other) -> bool:
    return type(other) is LogCholesky
