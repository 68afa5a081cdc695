"""
engine/
-------
Pacing, playback & recording layer.

    from engine import paced, Stepper, Recorder, compare
"""

from engine.stepper  import Stepper, StepperState, apaced, paced
from engine.recorder import ComparisonResult, Recorder, RunMetrics, compare, path_cost

__all__ = [
    "paced",
    "apaced",
    "Stepper",
    "StepperState",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "path_cost",
]
