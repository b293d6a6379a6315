"""Reference adaptive random-walk Metropolis loop for a single chain."""

import logging
from typing import Callable, NamedTuple

import jax
import jax.numpy as jnp
from tqdm import tqdm

from rwmadapt.rwm_state import RWMState
from rwmadapt.adaptation.base import AdaptState
from rwmadapt.adaptation.adapter import select_adaptation

__all__ = ["RWMResult", "adaptive_rwm", "log_accept_prob"]

logger = logging.getLogger(__name__)


class RWMResult(NamedTuple):
    """Output of :func:`adaptive_rwm`.

    Attributes:
        samples (jnp.ndarray): Retained chain positions. Shape ``(n // thin, dim)``.
        log_prob (jnp.ndarray): Log density at the retained positions. Shape ``(n // thin,)``.
        acceptance_rate (float): Fraction of accepted proposals over all ``n`` iterations.
        adaptation (AdaptState): The adaptation object in its final state.
    """
    samples: jnp.ndarray
    log_prob: jnp.ndarray
    acceptance_rate: float
    adaptation: AdaptState


def log_accept_prob(log_p_proposed, log_p_current):
    """Log Metropolis acceptance probability ``min(0, log_p_proposed - log_p_current)``.

    Non-finite log ratios (e.g. a proposal outside the support, or ``nan``) give
    ``-inf``, i.e. the proposal is always rejected.

    Args:
        log_p_proposed (float): Log density at the proposal.
        log_p_current (float): Log density at the current point.

    Returns:
        jnp.ndarray: Log acceptance probability, at most ``0``.
    """
    log_ratio = log_p_proposed - log_p_current
    safe_log_ratio = jnp.where(jnp.isfinite(log_ratio), log_ratio, -jnp.inf)
    return jnp.minimum(safe_log_ratio, 0.0)


def adaptive_rwm(key: jax.random.PRNGKey,
                 x0: jnp.ndarray,
                 log_p: Callable,
                 n: int,
                 algorithm: str = "aswam",
                 adaptation: AdaptState = None,
                 thin: int = 1,
                 rao_blackwellise: bool = False,
                 show_progress: bool = False) -> RWMResult:
    """Run an adaptive random-walk Metropolis chain.

    Each iteration draws a proposal from the adaptation, computes the
    acceptance probability ``alpha``, accepts or rejects, and adapts. With
    ``rao_blackwellise`` the adaptation runs ``adapt_rb`` before the
    accept/reject step; otherwise ``adapt`` runs after it.

    Args:
        key (jax.random.PRNGKey): Random number generator key.
        x0 (jnp.ndarray): Initial position with shape ``(dim,)``.
        log_p (Callable): Log density of the target (need not be normalised).
        n (int): Number of iterations.
        algorithm (str): Adaptation scheme passed to ``select_adaptation`` when
            ``adaptation`` is not given. Defaults to ``"aswam"``.
        adaptation (AdaptState, optional): Pre-built adaptation object. It is
            mutated in place.
        thin (int): Keep every ``thin`` sample. Defaults to ``1``.
        rao_blackwellise (bool): Use the Rao-Blackwellised update. Defaults to ``False``.
        show_progress (bool): Whether to display a progress bar. Defaults to ``False``.

    Returns:
        RWMResult: Retained samples, their log densities, the acceptance rate
        and the adapted adaptation object.
    """
    if n < 0:
        raise ValueError("`n` must be 0 or greater.")
    if thin < 1:
        raise ValueError("`thin` must be 1 or greater.")

    x0 = jnp.asarray(x0)
    if adaptation is None:
        adaptation = select_adaptation(algorithm, x0)
    if rao_blackwellise and not adaptation.supports_rb:
        raise ValueError(f"{type(adaptation).__name__} does not support Rao-Blackwellised adaptation")

    key_state, key_accept = jax.random.split(key)
    state = RWMState(x0, key_state)
    log_p = jax.jit(log_p)

    logger.info("Running %d iterations of adaptive RWM with %s (dim=%d)",
                n, type(adaptation).__name__, state.dim)

    keys = jax.random.split(key_accept, max(n, 1))
    log_p_x = log_p(state.x)
    accepted = 0
    samples = []
    log_probs = []

    iterations = range(1, n + 1)
    if show_progress:
        iterations = tqdm(iterations)

    for k in iterations:
        adaptation.draw(state)
        log_p_y = log_p(state.y)
        log_alpha = log_accept_prob(log_p_y, log_p_x)
        alpha = jnp.exp(log_alpha)

        if rao_blackwellise:
            adaptation.adapt_rb(state, alpha, k)

        log_u = jnp.log(jax.random.uniform(keys[k - 1], minval=1e-10, maxval=1.0))
        if log_u < log_alpha:
            state.accept()
            log_p_x = log_p_y
            accepted += 1

        if not rao_blackwellise:
            adaptation.adapt(state, alpha, k)

        if k % thin == 0:
            samples.append(state.x)
            log_probs.append(log_p_x)

    if not adaptation.parameters_finite():
        logger.warning("%s parameters are no longer finite; proposals are invalid",
                       type(adaptation).__name__)

    acceptance_rate = accepted / n if n > 0 else 0.0
    logger.info("Adaptive RWM complete, acceptance rate %.3f", acceptance_rate)

    if samples:
        samples = jnp.stack(samples)
        log_probs = jnp.stack(log_probs)
    else:
        samples = jnp.zeros((0, state.dim), dtype=x0.dtype)
        log_probs = jnp.zeros((0,), dtype=x0.dtype)

    return RWMResult(samples, log_probs, acceptance_rate, adaptation)
