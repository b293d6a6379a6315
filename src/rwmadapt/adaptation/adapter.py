import logging

import jax.numpy as jnp

from rwmadapt.rwm_state import RWMState
from rwmadapt.step_size import StepSize
from .base import AdaptState, OPTIMAL_SCALING, default_acc_target
from .scaling import AdaptiveScalingMetropolis
from .adaptive_metropolis import AdaptiveMetropolis

logger = logging.getLogger(__name__)


class NoAdaptation(AdaptState):
    """No-op adaptation: random-walk Metropolis with a fixed scale."""

    supports_rb = True

    def __init__(self, scale: float = 1.0):
        if not scale > 0:
            raise ValueError(f"`scale` must be positive. Got {scale}")
        self.scale = scale

    def adapt(self, state: RWMState, alpha, k) -> None:
        """No-op: parameters are fixed."""
        pass

    def adapt_rb(self, state: RWMState, alpha, k) -> None:
        """No-op: parameters are fixed."""
        pass

    def draw(self, state: RWMState) -> None:
        state.draw(self.scale)

    def parameters_finite(self) -> bool:
        return True


class AdaptiveScalingWithinAdaptiveMetropolis(AdaptState):
    """Adaptive scaling within adaptive Metropolis.

    Couples an :class:`AdaptiveMetropolis` (shape of the proposal) with an
    :class:`AdaptiveScalingMetropolis` (overall step length). Both see the
    same ``alpha`` and ``k`` on every update but run on their own step size
    sequences. Proposals have covariance ``scale**2 * L @ L.T`` where ``L`` comes
    from ``am`` and ``scale`` from ``asm``.

    Attributes:
        am (AdaptiveMetropolis): Covariance adaptation, drawn with unit scale.
        asm (AdaptiveScalingMetropolis): Scale adaptation.
        dim (int): Dimension of the target.
    """

    supports_rb = True

    def __init__(self,
                 x0: jnp.ndarray,
                 acc_target: float = None,
                 scale: float = None,
                 step_am: StepSize = None,
                 step_asm: StepSize = None,
                 L_init: jnp.ndarray = None):
        """Initialise both adaptations from ``x0``.

        Args:
            x0 (jnp.ndarray): Initial state vector with shape ``(dim,)``.
            acc_target (float, optional): Desired mean acceptance rate. Defaults
                to ``0.44`` for univariate and ``0.234`` for multivariate ``x0``.
            scale (float, optional): Initial scale. Defaults to ``2.38/sqrt(dim)``.
            step_am (StepSize, optional): Step size sequence of the covariance
                adaptation. Defaults to ``PolynomialStepSize(0.66)``.
            step_asm (StepSize, optional): Step size sequence of the scale
                adaptation. Defaults to ``PolynomialStepSize(0.66)``.
            L_init (jnp.ndarray, optional): Initial covariance factor. Defaults
                to the identity.
        """
        x0 = jnp.asarray(x0)
        if x0.ndim != 1 or x0.shape[0] == 0:
            raise ValueError(f"`x0` must be a non-empty vector. Got shape {x0.shape}")
        self.dim = int(x0.shape[0])

        if acc_target is None:
            acc_target = default_acc_target(self.dim)
        if scale is None:
            scale = OPTIMAL_SCALING / jnp.sqrt(self.dim)

        self.asm = AdaptiveScalingMetropolis(acc_target, scale, step_asm)
        self.am = AdaptiveMetropolis(x0, scale=1.0, step=step_am, L_init=L_init)
        if self.am.dim != self.dim:
            raise ValueError(f"Covariance adaptation has dimension {self.am.dim}, expected {self.dim}")

    @property
    def acc_target(self) -> float:
        return self.asm.acc_target

    @property
    def scale(self):
        return self.asm.scale

    @property
    def L(self) -> jnp.ndarray:
        return self.am.L

    def adapt(self, state: RWMState, alpha, k) -> None:
        self.am.adapt(state, alpha, k)
        self.asm.adapt(state, alpha, k)

    def adapt_rb(self, state: RWMState, alpha, k) -> None:
        """Rao-Blackwellised covariance update followed by the plain scale update."""
        self.am.adapt_rb(state, alpha, k)
        self.asm.adapt(state, alpha, k)

    def draw(self, state: RWMState) -> None:
        state.draw_factor(self.am.L, jnp.exp(self.asm.log_scale))

    def parameters_finite(self) -> bool:
        return self.am.parameters_finite() and self.asm.parameters_finite()


ALGORITHMS = ("asm", "am", "aswam", "none")


def select_adaptation(algorithm: str, x0: jnp.ndarray, **kwargs) -> AdaptState:
    """Select an adaptation scheme by name.

    Args:
        algorithm (str): One of ``"asm"`` (adaptive scaling), ``"am"`` (adaptive
            Metropolis), ``"aswam"`` (adaptive scaling within adaptive
            Metropolis) or ``"none"`` (fixed scale).
        x0 (jnp.ndarray): Initial state vector.
        **kwargs: Keyword arguments forwarded to the chosen constructor.

    Returns:
        AdaptState: Adaptation instance configured according to ``algorithm``.

    Raises:
        ValueError: If ``algorithm`` is not recognised.
    """
    logger.debug("Selecting adaptation %r", algorithm)
    if algorithm == "asm":
        return AdaptiveScalingMetropolis.from_state(x0, **kwargs)
    elif algorithm == "am":
        return AdaptiveMetropolis(x0, **kwargs)
    elif algorithm == "aswam":
        return AdaptiveScalingWithinAdaptiveMetropolis(x0, **kwargs)
    elif algorithm == "none":
        return NoAdaptation(**kwargs)
    raise ValueError(f"Unknown adaptation algorithm. Choose between {list(ALGORITHMS)}. Got {algorithm!r}")
