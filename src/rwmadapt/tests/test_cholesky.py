import jax
import jax.numpy as jnp
jax.config.update("jax_enable_x64", True)

import pytest

from rwmadapt.adaptation.cholesky import cholesky_rank_one_update, scaled_cholesky_update
from rwmadapt.tests.distribution import make_random_cholesky

seed = 0
key = jax.random.PRNGKey(seed)
keys = jax.random.split(key, num=10)


@pytest.mark.parametrize("dim", [1, 2, 5, 10])
def test_rank_one_update_matches_dense(dim):
    L = make_random_cholesky(keys[0], dim)
    v = jax.random.normal(keys[1], shape=(dim,))

    L_new = cholesky_rank_one_update(L, v)

    expected = L @ L.T + jnp.outer(v, v)
    assert jnp.allclose(L_new @ L_new.T, expected, atol=1e-10)
    assert jnp.allclose(L_new, jnp.linalg.cholesky(expected), atol=1e-10)


def test_rank_one_update_stays_lower_triangular():
    L = make_random_cholesky(keys[2], 4)
    v = jax.random.normal(keys[3], shape=(4,))

    L_new = cholesky_rank_one_update(L, v)

    assert jnp.allclose(jnp.triu(L_new, k=1), 0.0)
    assert jnp.all(jnp.diag(L_new) > 0)


def test_zero_vector_is_identity_update():
    L = make_random_cholesky(keys[4], 3)
    assert jnp.allclose(cholesky_rank_one_update(L, jnp.zeros(3)), L)


@pytest.mark.parametrize("gamma", [0.0, 0.1, 0.5, 0.9])
def test_scaled_update_is_convex_combination(gamma):
    dim = 3
    L = make_random_cholesky(keys[5], dim)
    v = jax.random.normal(keys[6], shape=(dim,))

    L_new = scaled_cholesky_update(L, v, gamma)

    expected = (1 - gamma) * L @ L.T + gamma * jnp.outer(v, v)
    assert jnp.allclose(L_new @ L_new.T, expected, atol=1e-10)
