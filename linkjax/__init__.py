"""linkjax: Link transforms between constrained supports and real space."""

__version__ = '0.1.0'

from linkjax._src.bijectors.bounded import Bounded
from linkjax._src.bijectors.bounded import Positive
from linkjax._src.bijectors.bounded import PositiveVector
from linkjax._src.bijectors.bounded import Unit
from linkjax._src.bijectors.link_bijector import LinkBijector
from linkjax._src.bijectors.log_cholesky import LogCholesky
from linkjax._src.bijectors.stick_breaking import StickBreaking
from linkjax._src.bijectors.stick_breaking import simplex_invlink
from linkjax._src.bijectors.stick_breaking import simplex_link
from linkjax._src.bijectors.stick_breaking import simplex_log_det_correction

from linkjax._src.distributions.unconstrained import Unconstrained

from linkjax._src.errors import DimensionMismatchError
from linkjax._src.errors import LinkError
from linkjax._src.errors import NotPositiveDefiniteError

from linkjax._src.link import bijector_for
from linkjax._src.link import invlink
from linkjax._src.link import link
from linkjax._src.link import logpdf_with_transform

from linkjax._src import support
from linkjax._src.support import register_support
from linkjax._src.support import support_of

__all__ = (
    'Bounded',
    'Positive',
    'PositiveVector',
    'Unit',
    'LinkBijector',
    'LogCholesky',
    'StickBreaking',
    'simplex_invlink',
    'simplex_link',
    'simplex_log_det_correction',
    'Unconstrained',
    'DimensionMismatchError',
    'LinkError',
    'NotPositiveDefiniteError',
    'bijector_for',
    'invlink',
    'link',
    'logpdf_with_transform',
    'support',
    'register_support',
    'support_of',
)
