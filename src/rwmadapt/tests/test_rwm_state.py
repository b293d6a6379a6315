import jax
import jax.numpy as jnp
jax.config.update("jax_enable_x64", True)

import numpy as np
import pytest
from scipy.stats import kstest

from rwmadapt.rwm_state import RWMState

seed = 1234
key = jax.random.PRNGKey(seed)


def test_initial_state():
    state = RWMState(jnp.array([1.0, 2.0]), key)

    assert state.dim == 2
    assert jnp.allclose(state.x, state.y)
    assert jnp.allclose(state.u, 0.0)


def test_rejects_scalar_initial_state():
    with pytest.raises(ValueError):
        RWMState(jnp.array(1.0), key)


def test_draw_scales_innovation():
    state = RWMState(jnp.array([1.0, 2.0]), key)
    state.draw(3.0)

    assert jnp.allclose(state.y, state.x + 3.0 * state.u)


def test_draw_advances_key():
    state = RWMState(jnp.zeros(2), key)
    state.draw(1.0)
    u_first = state.u
    state.draw(1.0)

    assert not jnp.allclose(u_first, state.u)


def test_accept_moves_chain():
    state = RWMState(jnp.zeros(2), key)
    state.draw(1.0)
    state.accept()

    assert jnp.allclose(state.x, state.y)


def test_innovations_are_standard_normal():
    state = RWMState(jnp.zeros(1), key)
    draws = []
    for _ in range(500):
        state.draw(2.0)
        draws.append(float(state.y[0]) / 2.0)

    result = kstest(np.asarray(draws), 'norm')
    assert result.pvalue > 0.01, f"KS test failed with p-value {result.pvalue}"
