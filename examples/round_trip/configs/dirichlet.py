"""Round-trip configuration for a Dirichlet distribution."""

import ml_collections


def get_config():
  """Get the round-trip configuration."""
  config = ml_collections.ConfigDict()

  config.distribution = 'dirichlet'
  config.concentration = (1., 2., 3., 4.)
  config.projected = True

  config.num_samples = 1000
  config.tolerance = 1e-5

  config.seed = 0

  return config
