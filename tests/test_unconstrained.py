"""Tests for the Unconstrained distribution view."""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np
from tensorflow_probability.substrates import jax as tfp

import linkjax
from linkjax import support

tfd = tfp.distributions


class TestUnconstrained:
    """Tests for Unconstrained."""

    def test_log_prob_matches_logpdf_with_transform(self):
        d = tfd.Gamma(2.0, 1.0)
        u = linkjax.Unconstrained(d)
        y = jnp.array([-1.0, 0.3, 1.2])
        expected = linkjax.logpdf_with_transform(d, jnp.exp(y), True)
        np.testing.assert_allclose(u.log_prob(y), expected, rtol=1e-5)

    def test_density_integrates_to_one(self):
        u = linkjax.Unconstrained(tfd.Beta(2.0, 3.0))
        y = jnp.linspace(-25.0, 25.0, 20001)
        total = jnp.trapezoid(jnp.exp(u.log_prob(y)), y)
        np.testing.assert_allclose(total, 1.0, atol=1e-3)

    def test_simplex(self):
        d = tfd.Dirichlet(jnp.array([2.0, 3.0, 4.0]))
        u = linkjax.Unconstrained(d)
        y = jnp.array([0.4, -0.2, 0.0])
        x = linkjax.invlink(d, y)
        np.testing.assert_allclose(u.log_prob(y), linkjax.logpdf_with_transform(d, x, True), rtol=1e-5)

    def test_bijector_forward_is_link(self):
        d = tfd.Beta(2.0, 3.0)
        u = linkjax.Unconstrained(d)
        x = jnp.array([0.2, 0.7])
        np.testing.assert_allclose(u.bijector.forward(x), linkjax.link(d, x), rtol=1e-6)

    def test_accessors(self):
        d = tfd.Beta(2.0, 3.0)
        u = linkjax.Unconstrained(d)
        assert u.constrained is d
        assert u.support == support.Unit()

    def test_support_override(self):
        d = tfd.Normal(1.0, 0.5)
        u = linkjax.Unconstrained(d, support=support.Positive())
        y = jnp.array(0.2)
        expected = d.log_prob(jnp.exp(y)) + y
        np.testing.assert_allclose(u.log_prob(y), expected, rtol=1e-5)
