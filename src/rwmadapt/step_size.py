"""Robbins-Monro step size sequences."""

import logging
from abc import ABC, abstractmethod

import jax.numpy as jnp

__all__ = ["StepSize", "PolynomialStepSize", "DEFAULT_STEP_EXPONENT"]

logger = logging.getLogger(__name__)

DEFAULT_STEP_EXPONENT = 0.66


class StepSize(ABC):
    """Abstract base class for step size sequences.

    A step size sequence ``gamma_k`` weights each adaptation increment. For the
    Robbins-Monro recursion to converge it must satisfy
    ``sum(gamma_k) = inf`` and ``sum(gamma_k**2) < inf``.
    """

    @abstractmethod
    def get(self, k) -> float:
        """Return the step size of iteration ``k``."""
        pass


class PolynomialStepSize(StepSize):
    """Polynomially decaying step size ``gamma_k = c * (k + 1)**(-eta)``.

    Attributes:
        eta (float): Decay exponent. Convergence requires ``0.5 < eta <= 1``.
        c (float): Multiplicative constant.
    """

    def __init__(self, eta: float = DEFAULT_STEP_EXPONENT, c: float = 1.0):
        """Initialise the step size sequence.

        Args:
            eta (float): Decay exponent. Defaults to ``0.66``.
            c (float): Multiplicative constant. Defaults to ``1.0``.
        """
        if eta <= 0:
            raise ValueError(f"`eta` must be positive. Got {eta}")
        if c <= 0:
            raise ValueError(f"`c` must be positive. Got {c}")
        if not 0.5 < eta <= 1:
            logger.warning(
                "PolynomialStepSize exponent %s is outside (0.5, 1]; "
                "Robbins-Monro convergence is not guaranteed", eta
            )
        self.eta = float(eta)
        self.c = float(c)

    def get(self, k) -> float:
        """Return ``c * (k + 1)**(-eta)``.

        Args:
            k (int): Iteration index, starting from 1.

        Returns:
            float: Step size of iteration ``k``.
        """
        return self.c * jnp.power(k + 1.0, -self.eta)

    def __repr__(self):
        return f"PolynomialStepSize(eta={self.eta}, c={self.c})"
