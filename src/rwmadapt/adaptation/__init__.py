from .base import AdaptState
from .scaling import AdaptiveScalingMetropolis
from .adaptive_metropolis import AdaptiveMetropolis
from .adapter import NoAdaptation, AdaptiveScalingWithinAdaptiveMetropolis, select_adaptation

__all__ = ["AdaptState", "AdaptiveScalingMetropolis", "AdaptiveMetropolis", "NoAdaptation",
           "AdaptiveScalingWithinAdaptiveMetropolis", "select_adaptation"]
