"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
]
