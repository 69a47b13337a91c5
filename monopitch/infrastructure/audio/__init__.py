"""
Audio adaptéry - dekodér, pitch estimátory, Vorbis enkodér, Ogg remuxer.
"""

from .audio_decoder import SoundfileDecoder
from .yin_estimator import YinEstimator
from .crepe_estimator import CrepeEstimator, CREPE_AVAILABLE
from .vorbis_encoder import VorbisEncoder
from .ogg_remuxer import OggRemuxer

__all__ = [
    "SoundfileDecoder",
    "YinEstimator",
    "CrepeEstimator",
    "CREPE_AVAILABLE",
    "VorbisEncoder",
    "OggRemuxer",
]
