"""Exceptions raised by link transforms."""


class LinkError(ValueError):
  """Base class for errors raised while transforming a point."""


class NotPositiveDefiniteError(LinkError):
  """The Cholesky factorisation of a supposedly positive-definite matrix failed.
  """


class DimensionMismatchError(LinkError):
  """The shape of a point does not match the dimension of its support."""
