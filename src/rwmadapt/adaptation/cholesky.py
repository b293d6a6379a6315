"""Rank-one updates of Cholesky factors."""

import jax
import jax.numpy as jnp


@jax.jit
def cholesky_rank_one_update(L: jnp.ndarray, v: jnp.ndarray) -> jnp.ndarray:
    """Return the lower Cholesky factor of ``L @ L.T + v v^T``.

    Runs in ``O(dim**2)`` without forming the covariance matrix. ``L`` must
    have a strictly positive diagonal.

    Args:
        L (jnp.ndarray): Lower-triangular factor with shape ``(dim, dim)``.
        v (jnp.ndarray): Update vector with shape ``(dim,)``.

    Returns:
        jnp.ndarray: Updated lower-triangular factor with shape ``(dim, dim)``.
    """
    idx = jnp.arange(L.shape[0])

    def body(k, carry):
        L, v = carry
        L_kk = L[k, k]
        v_k = v[k]
        r = jnp.sqrt(L_kk**2 + v_k**2)
        c = r / L_kk
        s = v_k / L_kk

        below = idx > k
        column = jnp.where(below, (L[:, k] + s * v) / c, L[:, k])
        column = column.at[k].set(r)
        v = jnp.where(below, c * v - s * column, v)
        return L.at[:, k].set(column), v

    L, _ = jax.lax.fori_loop(0, L.shape[0], body, (L, v))
    return L


def scaled_cholesky_update(L: jnp.ndarray, v: jnp.ndarray, gamma) -> jnp.ndarray:
    """Return the factor of ``(1 - gamma) L @ L.T + gamma v v^T``.

    Args:
        L (jnp.ndarray): Lower-triangular factor with shape ``(dim, dim)``.
        v (jnp.ndarray): Update vector with shape ``(dim,)``.
        gamma (float): Weight of the new outer product, ``0 <= gamma < 1``.

    Returns:
        jnp.ndarray: Updated lower-triangular factor.
    """
    return cholesky_rank_one_update(jnp.sqrt(1.0 - gamma) * L, jnp.sqrt(gamma) * v)
