"""
Domain interfaces pro monopitch.
"""

from .audio_codec import (
    IAudioDecoder,
    IPitchEstimator,
    IAudioEncoder,
    IRemuxer,
    EncoderSettings,
)

__all__ = [
    "IAudioDecoder",
    "IPitchEstimator",
    "IAudioEncoder",
    "IRemuxer",
    "EncoderSettings",
]
