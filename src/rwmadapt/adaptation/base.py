"""Common interface of the random-walk Metropolis adaptation schemes.

Any sampler loop written against :class:`AdaptState` can drive every scheme.
"""
from abc import ABC, abstractmethod

from rwmadapt.rwm_state import RWMState

ACC_TARGET_UNIVARIATE = 0.44
ACC_TARGET_MULTIVARIATE = 0.234
OPTIMAL_SCALING = 2.38


def default_acc_target(dim: int) -> float:
    """Optimal-scaling acceptance rate for a target of dimension ``dim``."""
    return ACC_TARGET_UNIVARIATE if dim == 1 else ACC_TARGET_MULTIVARIATE


class AdaptState(ABC):
    """Abstract base class for adaptation algorithms.

    Instances are owned by a single chain; calls are not synchronised.
    """

    supports_rb = False

    @abstractmethod
    def adapt(self, state: RWMState, alpha, k) -> None:
        """Update the proposal parameters given acceptance probability ``alpha`` at iteration ``k``."""
        pass

    def adapt_rb(self, state: RWMState, alpha, k) -> None:
        """Rao-Blackwellised update, called before the accept/reject step."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support Rao-Blackwellised adaptation"
        )

    @abstractmethod
    def draw(self, state: RWMState) -> None:
        """Write a new proposal into ``state`` using the current parameters."""
        pass

    @abstractmethod
    def parameters_finite(self) -> bool:
        """Whether all adapted parameters are finite."""
        pass
