"""Tests for the log-Cholesky positive-definite link."""

from __future__ import annotations

import math

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from linkjax import LogCholesky, NotPositiveDefiniteError


def _random_spd(dim: int, seed: int = 0) -> jnp.ndarray:
    rng = np.random.default_rng(seed)
    m = rng.normal(size=(dim, dim))
    return jnp.asarray(m @ m.T + dim * np.eye(dim), dtype=jnp.float32)


class TestLogCholesky:
    """Tests for LogCholesky."""

    def test_identity_links_to_zero(self):
        bij = LogCholesky()
        np.testing.assert_allclose(bij.link(jnp.eye(2)), jnp.zeros((2, 2)), atol=1e-7)

    def test_zero_invlinks_to_identity(self):
        bij = LogCholesky()
        np.testing.assert_allclose(bij.invlink(jnp.zeros((2, 2))), jnp.eye(2), atol=1e-7)

    def test_identity_correction(self):
        bij = LogCholesky()
        np.testing.assert_allclose(bij.log_det_correction(jnp.eye(3)), 3 * math.log(2.0), rtol=1e-6)

    @pytest.mark.parametrize("dim", [1, 2, 4])
    def test_round_trip(self, dim):
        bij = LogCholesky()
        x = _random_spd(dim, seed=dim)
        np.testing.assert_allclose(bij.invlink(bij.link(x)), x, rtol=1e-4, atol=1e-4)

    def test_link_structure(self):
        x = _random_spd(3)
        y = LogCholesky().link(x)
        chol = jnp.linalg.cholesky(x)
        np.testing.assert_array_equal(jnp.triu(y, 1), jnp.zeros((3, 3)))
        np.testing.assert_allclose(jnp.diag(y), jnp.log(jnp.diag(chol)), rtol=1e-6)
        np.testing.assert_allclose(jnp.tril(y, -1), jnp.tril(chol, -1), rtol=1e-6)

    def test_invlink_ignores_upper_triangle(self):
        bij = LogCholesky()
        y = jnp.array([[0.1, 0.0], [0.3, -0.2]])
        noisy = y.at[0, 1].set(5.0)
        np.testing.assert_allclose(bij.invlink(noisy), bij.invlink(y), rtol=1e-6)

    def test_invlink_is_symmetric_positive_definite(self):
        y = jnp.array([[0.5, 0.0, 0.0], [-1.0, 0.2, 0.0], [2.0, 0.3, -0.4]])
        x = LogCholesky().invlink(y)
        np.testing.assert_allclose(x, x.T, rtol=1e-6)
        assert jnp.all(jnp.linalg.eigvalsh(x) > 0)

    def test_batch_of_matrices(self):
        bij = LogCholesky()
        x = jnp.stack([_random_spd(2, seed=s) for s in range(3)])
        y = bij.link(x)
        assert y.shape == (3, 2, 2)
        for i in range(3):
            np.testing.assert_allclose(y[i], bij.link(x[i]), rtol=1e-6)
        assert bij.log_det_correction(x).shape == (3,)

    @pytest.mark.parametrize("dim", [1, 2, 3])
    def test_correction_matches_autodiff(self, dim):
        bij = LogCholesky()
        x = _random_spd(dim, seed=10 + dim)
        rows, cols = jnp.tril_indices(dim)

        def tril_invlink(v):
            y = jnp.zeros((dim, dim)).at[rows, cols].set(v)
            return bij.invlink(y)[rows, cols]

        v = bij.link(x)[rows, cols]
        _, expected = jnp.linalg.slogdet(jax.jacfwd(tril_invlink)(v))
        np.testing.assert_allclose(bij.log_det_correction(x), expected, rtol=1e-4, atol=1e-3)

    def test_not_positive_definite_raises(self):
        with pytest.raises(NotPositiveDefiniteError):
            LogCholesky().link(jnp.array([[1.0, 2.0], [2.0, 1.0]]))

    def test_not_positive_definite_is_a_value_error(self):
        with pytest.raises(ValueError):
            LogCholesky().link(-jnp.eye(2))

    def test_not_positive_definite_under_jit_is_nan(self):
        y = jax.jit(LogCholesky().link)(jnp.array([[1.0, 2.0], [2.0, 1.0]]))
        assert jnp.any(jnp.isnan(y))

    def test_distrax_interface(self):
        bij = LogCholesky()
        x, log_det = bij.forward_and_log_det(jnp.zeros((2, 2)))
        np.testing.assert_allclose(x, jnp.eye(2), atol=1e-7)
        np.testing.assert_allclose(log_det, 2 * math.log(2.0), rtol=1e-6)
        assert bij.event_ndims_in == 2
