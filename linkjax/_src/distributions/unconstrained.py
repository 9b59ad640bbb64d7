"""Distribution viewed in the unconstrained coordinates of its link."""

import distrax
from jax import numpy as jnp

from linkjax._src import link as link_lib
from linkjax._src import support as support_lib
from linkjax._src.typing import Array, DistributionLike, Optional


class Unconstrained(distrax.Transformed):
  """Distribution pushed from its support to unconstrained space.

  The bijector is the inverse of the distribution's link bijector, so its
  `forward` is `link`. The log-density of an unconstrained point `y` is the
  log-density of `invlink(y)` plus the Jacobian correction, computed as in
  `logpdf_with_transform`.
  """

  def __init__(
      self,
      distribution: DistributionLike,
      projected: bool = True,
      support: Optional[support_lib.SupportKind] = None,
  ):
    """Creates the unconstrained view.

    Args:
      distribution: A TFP or distrax distribution over the constrained
        support.
      projected: For simplex supports, whether the last unconstrained
        coordinate is fixed to zero.
      support: Explicit support family, overriding the registry.
    """
    self._constrained = distribution
    self._support = link_lib.resolve_support(distribution, support)
    self._link_bijector = link_lib.bijector_for(
        support=self._support, projected=projected)
    super().__init__(distribution, distrax.Inverse(self._link_bijector))

  @property
  def constrained(self) -> DistributionLike:
    """The wrapped distribution over the constrained support."""
    return self._constrained

  @property
  def support(self) -> support_lib.SupportKind:
    return self._support

  def log_prob(self, value: Array) -> Array:
    """See `Distribution.log_prob`."""
    x = self._link_bijector.invlink(jnp.asarray(value))
    return link_lib.corrected_log_prob(self._constrained, self._support,
                                       self._link_bijector, x, True)
