"""
SoundfileDecoder - Dekódování audio bytů pomocí dostupných knihoven.
"""
import io
import logging
from typing import Optional

import numpy as np

from monopitch.config import AUDIO
from monopitch.domain.errors import DecodeIntegrityError
from monopitch.domain.interfaces import IAudioDecoder
from monopitch.domain.models import SampleBuffer

logger = logging.getLogger(__name__)

try:
    import soundfile as sf
    SOUNDFILE_AVAILABLE = True
except ImportError:
    SOUNDFILE_AVAILABLE = False
    logger.warning("soundfile not available")

try:
    import librosa
    LIBROSA_AVAILABLE = True
except ImportError:
    LIBROSA_AVAILABLE = False
    logger.debug("librosa not available")


class SoundfileDecoder(IAudioDecoder):
    """Dekóduje audio pomocí soundfile, librosa slouží jako záloha."""

    def decode(self, raw: bytes) -> SampleBuffer:
        """
        Dekóduje audio z paměti.

        Args:
            raw: Obsah audio souboru (wav, flac, ogg, mp3, ...)

        Returns:
            SampleBuffer s prokládanými float32 samples

        Raises:
            DecodeIntegrityError: pokud žádná knihovna audio nepřečte
        """
        errors = []

        # Pokus o soundfile
        if SOUNDFILE_AVAILABLE:
            try:
                waveform, sr = sf.read(io.BytesIO(raw), dtype='float32', always_2d=True)
                channels = waveform.shape[1]
                logger.debug(f"Decoded {len(raw)} bytes with soundfile")
                return SampleBuffer(waveform.reshape(-1), sr, channels)
            except Exception as e:
                errors.append(f"soundfile: {str(e)[:100]}")
                logger.debug(f"Soundfile failed: {e}")

        # Pokus o librosa
        if LIBROSA_AVAILABLE:
            try:
                waveform, sr = librosa.load(io.BytesIO(raw), sr=None, mono=False)
                waveform = np.asarray(waveform, dtype=np.float32)
                if waveform.ndim == 1:
                    channels = 1
                    samples = waveform
                else:
                    # librosa vrací (channels, frames)
                    channels = waveform.shape[0]
                    samples = waveform.T.reshape(-1)
                logger.debug(f"Decoded {len(raw)} bytes with librosa")
                return SampleBuffer(samples, sr, channels)
            except Exception as e:
                errors.append(f"librosa: {str(e)[:100]}")
                logger.debug(f"Librosa failed: {e}")

        # Chyba
        all_errors = "; ".join(errors) or "no decoding library available"
        logger.error(f"Failed to decode {len(raw)} bytes. Tried: {all_errors}")
        raise DecodeIntegrityError(AUDIO.Errors.DECODE_FAILED.format(error=all_errors))

    def get_audio_info(self, raw: bytes) -> Optional[dict]:
        """
        Získá informace o audiu bez dekódování celého obsahu.

        Args:
            raw: Obsah audio souboru

        Returns:
            Dict s info (duration, sample_rate, channels, frames) nebo None
        """
        if SOUNDFILE_AVAILABLE:
            try:
                info = sf.info(io.BytesIO(raw))
                return {
                    "duration": info.duration,
                    "sample_rate": info.samplerate,
                    "channels": info.channels,
                    "frames": info.frames
                }
            except Exception as e:
                logger.debug(f"Failed to get info: {e}")

        return None

    @staticmethod
    def get_supported_formats() -> list:
        """Vrátí seznam podporovaných formátů."""
        formats = []

        if SOUNDFILE_AVAILABLE:
            formats.extend(sorted(sf.available_formats().keys()))

        if LIBROSA_AVAILABLE:
            formats.extend(['MP3', 'OGG', 'M4A'])

        return sorted(set(formats))
