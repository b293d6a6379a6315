"""Random-walk Metropolis chain state."""

import jax
import jax.numpy as jnp

__all__ = ["RWMState"]


class RWMState(object):
    """State of a single random-walk Metropolis chain.

    The adaptation objects only touch this state through :meth:`draw`,
    :meth:`draw_factor` and by reading ``x`` and ``y``.

    Attributes:
        x (jnp.ndarray): Current position. Shape ``(dim,)``.
        y (jnp.ndarray): Latest proposal. Shape ``(dim,)``.
        u (jnp.ndarray): Standard normal innovation behind ``y``. Shape ``(dim,)``.
        key (jax.random.PRNGKey): Random number generator key, split on every draw.
    """

    def __init__(self, x0: jnp.ndarray, key: jax.random.PRNGKey):
        """Initialise the chain at ``x0``.

        Args:
            x0 (jnp.ndarray): Initial position with shape ``(dim,)``.
            key (jax.random.PRNGKey): Random number generator key.
        """
        x0 = jnp.asarray(x0)
        if x0.ndim != 1 or x0.shape[0] == 0:
            raise ValueError(f"`x0` must be a non-empty vector. Got shape {x0.shape}")
        self.x = x0
        self.y = x0
        self.u = jnp.zeros_like(x0)
        self.key = key

    @property
    def dim(self) -> int:
        return int(self.x.shape[0])

    def _innovation(self) -> jnp.ndarray:
        self.key, key_noise = jax.random.split(self.key)
        self.u = jax.random.normal(key_noise, shape=self.x.shape, dtype=self.x.dtype)
        return self.u

    def draw(self, scale) -> None:
        """Propose ``y = x + scale * u`` with ``u ~ N(0, I)``.

        Args:
            scale (float): Scalar proposal scale.
        """
        u = self._innovation()
        self.y = self.x + scale * u

    def draw_factor(self, L: jnp.ndarray, scale) -> None:
        """Propose ``y = x + scale * L @ u`` with ``u ~ N(0, I)``.

        The proposal covariance is ``scale**2 * L @ L.T``.

        Args:
            L (jnp.ndarray): Lower-triangular factor with shape ``(dim, dim)``.
            scale (float): Scalar proposal scale.
        """
        u = self._innovation()
        self.y = self.x + scale * (L @ u)

    def accept(self) -> None:
        """Move the chain to the latest proposal."""
        self.x = self.y
