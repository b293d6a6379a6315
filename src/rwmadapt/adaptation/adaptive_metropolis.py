"""Adaptive Metropolis: Robbins-Monro adaptation of the proposal covariance."""

import logging

import jax.numpy as jnp

from rwmadapt.rwm_state import RWMState
from rwmadapt.step_size import StepSize, PolynomialStepSize
from .base import AdaptState, OPTIMAL_SCALING
from .cholesky import cholesky_rank_one_update, scaled_cholesky_update

logger = logging.getLogger(__name__)


def identity_cholesky(x0: jnp.ndarray) -> jnp.ndarray:
    """Identity factor matching the dimension and dtype of ``x0``."""
    return jnp.eye(x0.shape[0], dtype=x0.dtype)


class AdaptiveMetropolis(AdaptState):
    """Adaptive Metropolis with a Cholesky-factored covariance estimate.

    Tracks a running mean ``m`` and a factor ``L`` of the running covariance
    of the visited states. Proposals have covariance ``scale**2 * L @ L.T``.

    Attributes:
        m (jnp.ndarray): Running mean estimate. Shape ``(dim,)``.
        L (jnp.ndarray): Lower-triangular covariance factor. Shape ``(dim, dim)``.
        scale (float): Fixed scalar proposal scale.
        step (StepSize): Step size sequence.
        dim (int): Dimension of the target.
    """

    supports_rb = True

    def __init__(self,
                 x0: jnp.ndarray,
                 scale: float = None,
                 step: StepSize = None,
                 L_init: jnp.ndarray = None):
        """Initialise the adaptation at ``x0``.

        Args:
            x0 (jnp.ndarray): Initial state vector; also the initial mean.
            scale (float, optional): Proposal scale. Defaults to ``2.38/sqrt(dim)``.
            step (StepSize, optional): Step size sequence. Defaults to
                ``PolynomialStepSize(0.66)``.
            L_init (jnp.ndarray, optional): Initial covariance factor. Defaults
                to the identity.
        """
        x0 = jnp.asarray(x0)
        if x0.ndim != 1 or x0.shape[0] == 0:
            raise ValueError(f"`x0` must be a non-empty vector. Got shape {x0.shape}")
        self.dim = int(x0.shape[0])

        if scale is None:
            scale = OPTIMAL_SCALING / jnp.sqrt(self.dim)
        if not scale > 0:
            raise ValueError(f"`scale` must be positive. Got {scale}")

        L = identity_cholesky(x0) if L_init is None else jnp.asarray(L_init)
        if L.shape != (self.dim, self.dim):
            raise ValueError(f"`L_init` must have shape {(self.dim, self.dim)}. Got {L.shape}")

        self.m = x0
        self.L = jnp.tril(L)
        self.scale = scale
        self.step = PolynomialStepSize() if step is None else step
        logger.debug("AdaptiveMetropolis(dim=%d, scale=%s, step=%r)",
                     self.dim, scale, self.step)

    def adapt(self, state: RWMState, alpha, k) -> None:
        """Update mean and covariance factor with the current chain position.

        The acceptance probability is not used by this rule; call after the
        accept/reject step.
        """
        gamma = self.step.get(k)
        dx = state.x - self.m
        self.m = self.m + gamma * dx
        self.L = scaled_cholesky_update(self.L, dx, gamma)

    def adapt_rb(self, state: RWMState, alpha, k) -> None:
        """Rao-Blackwellised update weighting current point and proposal by ``alpha``.

        Must be called before the accept/reject step, while ``state.x`` is
        still the current point and ``state.y`` the proposal.
        """
        gamma = self.step.get(k)
        dx = state.x - self.m
        dy = state.y - self.m
        self.m = self.m + gamma * ((1.0 - alpha) * dx + alpha * dy)
        L = scaled_cholesky_update(self.L, jnp.sqrt(1.0 - alpha) * dx, gamma)
        self.L = cholesky_rank_one_update(L, jnp.sqrt(gamma * alpha) * dy)

    def draw(self, state: RWMState) -> None:
        state.draw_factor(self.L, self.scale)

    def covariance(self) -> jnp.ndarray:
        """Current covariance estimate ``L @ L.T``."""
        return self.L @ self.L.T

    def parameters_finite(self) -> bool:
        return bool(jnp.all(jnp.isfinite(self.L)) & jnp.all(jnp.isfinite(self.m)))
