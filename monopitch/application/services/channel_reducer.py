"""
Channel Reducer - převod prokládaného audia na jeden kanál.
"""

import logging

import numpy as np

from monopitch.domain.errors import NoChannelsError, TooManyChannelsError
from monopitch.domain.models import SampleBuffer

logger = logging.getLogger(__name__)


def reduce_to_mono(buffer: SampleBuffer) -> SampleBuffer:
    """
    Převede mono/stereo buffer na mono.

    Mono se vrací beze změny (jako nová kopie), stereo se průměruje
    po dvojicích L/R. Sample rate zůstává.

    Raises:
        NoChannelsError: channels == 0
        TooManyChannelsError: channels > 2
    """
    if buffer.channels == 1:
        return SampleBuffer(buffer.samples.copy(), buffer.sample_rate, 1)

    if buffer.channels == 2:
        mono = buffer.samples.reshape(-1, 2).mean(axis=1, dtype=np.float32)
        logger.debug(f"Down-mixed {buffer.frames} stereo frames to mono")
        return SampleBuffer(mono, buffer.sample_rate, 1)

    if buffer.channels > 2:
        raise TooManyChannelsError(buffer.channels)

    raise NoChannelsError(buffer.channels)


def reduce(samples: np.ndarray, sample_rate: int, channel_count: int) -> SampleBuffer:
    """Varianta reduce_to_mono nad holými samples."""
    if channel_count <= 0:
        raise NoChannelsError(channel_count)
    if channel_count > 2:
        raise TooManyChannelsError(channel_count)
    return reduce_to_mono(SampleBuffer(samples, sample_rate, channel_count))
