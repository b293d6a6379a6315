"""Adaptive scaling Metropolis: Robbins-Monro adaptation of a scalar proposal scale."""

import logging

import jax.numpy as jnp

from rwmadapt.rwm_state import RWMState
from rwmadapt.step_size import StepSize, PolynomialStepSize
from .base import AdaptState, ACC_TARGET_MULTIVARIATE, default_acc_target

logger = logging.getLogger(__name__)


def _check_acc_target(acc_target: float) -> None:
    if not 0.0 < acc_target < 1.0:
        raise ValueError(f"`acc_target` must lie in (0, 1). Got {acc_target}")


class AdaptiveScalingMetropolis(AdaptState):
    """Adaptive scaling Metropolis.

    The scale is stored as ``log_scale`` so the additive update
    ``log_scale += gamma_k * (alpha - acc_target)`` keeps ``scale`` positive.

    Attributes:
        log_scale (jnp.ndarray): Logarithm of the proposal scale.
        acc_target (float): Desired mean acceptance rate.
        step (StepSize): Step size sequence.
    """

    def __init__(self,
                 acc_target: float = ACC_TARGET_MULTIVARIATE,
                 scale: float = 1.0,
                 step: StepSize = None):
        """Initialise the adaptation.

        Args:
            acc_target (float): Desired mean acceptance rate. Defaults to ``0.234``.
            scale (float): Initial scale. Defaults to ``1.0``.
            step (StepSize, optional): Step size sequence. Defaults to
                ``PolynomialStepSize(0.66)``.
        """
        _check_acc_target(acc_target)
        if not scale > 0:
            raise ValueError(f"`scale` must be positive. Got {scale}")
        self.acc_target = float(acc_target)
        self.log_scale = jnp.log(scale)
        self.step = PolynomialStepSize() if step is None else step
        logger.debug("AdaptiveScalingMetropolis(acc_target=%s, scale=%s, step=%r)",
                     self.acc_target, scale, self.step)

    @classmethod
    def from_state(cls,
                   x0: jnp.ndarray,
                   acc_target: float = None,
                   scale: float = 1.0,
                   step: StepSize = None) -> "AdaptiveScalingMetropolis":
        """Construct with dimension-dependent defaults.

        Args:
            x0 (jnp.ndarray): Initial state vector, only used for its length.
            acc_target (float, optional): Desired mean acceptance rate. Defaults
                to ``0.44`` for univariate and ``0.234`` for multivariate ``x0``.
            scale (float): Initial scale. Defaults to ``1.0``.
            step (StepSize, optional): Step size sequence. Defaults to
                ``PolynomialStepSize(0.66)``.

        Returns:
            AdaptiveScalingMetropolis: The adaptation state.
        """
        x0 = jnp.atleast_1d(jnp.asarray(x0))
        if acc_target is None:
            acc_target = default_acc_target(x0.shape[0])
        return cls(acc_target, scale, step)

    @property
    def scale(self):
        return jnp.exp(self.log_scale)

    def adapt(self, state: RWMState, alpha, k) -> None:
        d_alpha = alpha - self.acc_target
        gamma = self.step.get(k)
        self.log_scale = self.log_scale + gamma * d_alpha

    def draw(self, state: RWMState) -> None:
        state.draw(jnp.exp(self.log_scale))

    def parameters_finite(self) -> bool:
        return bool(jnp.isfinite(self.log_scale))
