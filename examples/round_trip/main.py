"""Round trip of random points through the link of a distribution."""

from absl import app
from absl import flags
from absl import logging

import jax
from jax import numpy as jnp
from ml_collections import config_flags
from tensorflow_probability.substrates import jax as tfp

import linkjax

tfd = tfp.distributions

FLAGS = flags.FLAGS

config_flags.DEFINE_config_file(
    'config',
    None,
    'File path to the round-trip configuration.',
    lock_config=True)


def make_distribution(config) -> tfd.Distribution:
  """Builds the distribution named in the configuration."""
  if config.distribution == 'dirichlet':
    return tfd.Dirichlet(jnp.asarray(config.concentration))
  elif config.distribution == 'wishart':
    return tfd.WishartTriL(df=config.df, scale_tril=jnp.eye(config.dim))
  elif config.distribution == 'beta':
    return tfd.Beta(config.concentration[0], config.concentration[1])
  raise ValueError(f'Unknown distribution {config.distribution!r}.')


def round_trip(config) -> float:
  """Links and inverts `config.num_samples` points; returns the max error."""
  distribution = make_distribution(config)
  logging.info('Support of %s: %r',
               type(distribution).__name__, linkjax.support_of(distribution))

  x = distribution.sample(
      config.num_samples, seed=jax.random.PRNGKey(config.seed))
  if config.distribution == 'dirichlet':
    # One simplex point per column.
    x = x.T

  y = linkjax.link(distribution, x, projected=config.projected)
  x_back = linkjax.invlink(distribution, y, projected=config.projected)
  error = float(jnp.max(jnp.abs(x_back - x)))

  lp = linkjax.logpdf_with_transform(distribution, x, transform=True)
  logging.info('Mean log-density in unconstrained space: %.4f',
               float(jnp.mean(lp)))
  logging.info('Max round-trip error: %.3e', error)
  return error


def main(argv):
  if len(argv) > 1:
    raise app.UsageError('Too many command-line arguments.')

  error = round_trip(FLAGS.config)
  if error > FLAGS.config.tolerance:
    logging.warning('Round-trip error %.3e exceeds tolerance %.3e.', error,
                    FLAGS.config.tolerance)


if __name__ == '__main__':
  flags.mark_flags_as_required(['config'])
  app.run(main)
