"""Round-trip configuration for a Wishart distribution."""

import ml_collections


def get_config():
  """Get the round-trip configuration."""
  config = ml_collections.ConfigDict()

  config.distribution = 'wishart'
  config.dim = 3
  config.df = 5.
  config.projected = True

  config.num_samples = 100
  config.tolerance = 1e-4

  config.seed = 0

  return config
