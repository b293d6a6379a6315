"""rwmadapt: adaptive scaling for random-walk Metropolis samplers in JAX."""

from .step_size import StepSize, PolynomialStepSize
from .rwm_state import RWMState
from .adaptation import (
    AdaptState,
    AdaptiveScalingMetropolis,
    AdaptiveMetropolis,
    AdaptiveScalingWithinAdaptiveMetropolis,
    NoAdaptation,
    select_adaptation,
)
from .sampler import adaptive_rwm, RWMResult
__version__ = '0.0.1'

__all__ = ["StepSize", "PolynomialStepSize", "RWMState", "AdaptState", "AdaptiveScalingMetropolis",
           "AdaptiveMetropolis", "AdaptiveScalingWithinAdaptiveMetropolis", "NoAdaptation",
           "select_adaptation", "adaptive_rwm", "RWMResult"]
