"""
Domain models pro monopitch.
"""

from .audio import (
    SampleBuffer,
    PitchCandidate,
    FrequencyBounds,
    PitchReport,
    PitchAnalysis,
)

__all__ = [
    "SampleBuffer",
    "PitchCandidate",
    "FrequencyBounds",
    "PitchReport",
    "PitchAnalysis",
]
