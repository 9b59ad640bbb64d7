"""Round-trip configuration for a Beta distribution."""

import ml_collections


def get_config():
  """Get the round-trip configuration."""
  config = ml_collections.ConfigDict()

  config.distribution = 'beta'
  config.concentration = (2., 3.)
  config.projected = True

  config.num_samples = 1000
  config.tolerance = 1e-5

  config.seed = 0

  return config
