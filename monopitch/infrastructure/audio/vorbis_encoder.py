"""
VorbisEncoder - Streamové enkódování mono PCM do Ogg Vorbis pomocí soundfile.
"""
import io
import logging

import numpy as np
import soundfile as sf
from mutagen.ogg import error as OggError

from monopitch.config import AUDIO
from monopitch.domain.errors import EncodingFailure
from monopitch.domain.interfaces import IAudioEncoder, EncoderSettings
from .ogg_pages import restamp_serial

logger = logging.getLogger(__name__)


def quality_to_compression_level(target_quality: float) -> float:
    """
    Převede Vorbis kvalitu na compression level libsndfile.

    libsndfile používá quality = 1 - compression_level v rozsahu 0-1,
    hodnoty mimo rozsah se ořežou.
    """
    return float(np.clip(1.0 - target_quality, 0.0, 1.0))


class VorbisEncoder(IAudioEncoder):
    """
    Ogg Vorbis enkodér pro jeden výstupní stream.

    Bloky se zapisují přes encode_block(), stream se uzavře finish().
    Výstupní stránky dostanou stream serial z nastavení.
    """

    def __init__(self, settings: EncoderSettings):
        """
        Args:
            settings: Serial, komentáře, sample rate, kanály a kvalita

        Raises:
            EncodingFailure: enkodér odmítl konfiguraci
        """
        self.settings = settings
        self._validate(settings)

        self._buffer = io.BytesIO()
        self._blocks = 0
        try:
            self._file = sf.SoundFile(
                self._buffer,
                mode='w',
                samplerate=settings.sample_rate,
                channels=settings.channels,
                format=AUDIO.Encoding.FORMAT,
                subtype=AUDIO.Encoding.SUBTYPE,
                compression_level=quality_to_compression_level(settings.target_quality)
            )
            # Komentáře se musí zapsat před prvním blokem
            for key, value in settings.comments.items():
                setattr(self._file, key, str(value))
        except (sf.SoundFileError, ValueError, TypeError) as e:
            logger.error(f"Vorbis encoder rejected settings {settings}: {e}")
            raise EncodingFailure(AUDIO.Errors.ENCODER_CONFIG.format(error=e)) from e

        logger.debug(
            f"Vorbis encoder opened: {settings.sample_rate}Hz, "
            f"quality={settings.target_quality}, serial={settings.stream_serial}"
        )

    @staticmethod
    def _validate(settings: EncoderSettings) -> None:
        problems = []
        if settings.sample_rate <= 0:
            problems.append(f"sample rate must be positive, got {settings.sample_rate}")
        if settings.channels != AUDIO.Encoding.OUTPUT_CHANNELS:
            problems.append(f"only mono is supported, got {settings.channels} channels")
        if not (AUDIO.Encoding.MIN_QUALITY <= settings.target_quality <= AUDIO.Encoding.MAX_QUALITY):
            problems.append(
                f"target quality {settings.target_quality} outside "
                f"[{AUDIO.Encoding.MIN_QUALITY}, {AUDIO.Encoding.MAX_QUALITY}]"
            )
        unknown = sorted(set(settings.comments) - set(AUDIO.Encoding.COMMENT_KEYS))
        if unknown:
            problems.append(f"unsupported comment keys: {', '.join(unknown)}")

        if problems:
            raise EncodingFailure(AUDIO.Errors.ENCODER_CONFIG.format(error="; ".join(problems)))

    def encode_block(self, block: np.ndarray) -> None:
        """Zapíše blok mono samples."""
        if self._file.closed:
            raise EncodingFailure(AUDIO.Errors.ENCODER_WRITE.format(error="stream already finished"))

        try:
            self._file.write(np.asarray(block, dtype=np.float32).reshape(-1))
        except (sf.SoundFileError, ValueError) as e:
            logger.error(f"Vorbis encoder failed on block {self._blocks}: {e}")
            raise EncodingFailure(AUDIO.Errors.ENCODER_WRITE.format(error=e)) from e
        self._blocks += 1

    def finish(self) -> bytes:
        """Uzavře stream a vrátí Ogg data se správným serialem."""
        if self._file.closed:
            raise EncodingFailure(AUDIO.Errors.ENCODER_FINISH.format(error="stream already finished"))

        try:
            self._file.close()
            encoded = restamp_serial(self._buffer.getvalue(), self.settings.stream_serial)
        except (sf.SoundFileError, OggError, ValueError) as e:
            logger.error(f"Vorbis encoder failed to finish: {e}")
            raise EncodingFailure(AUDIO.Errors.ENCODER_FINISH.format(error=e)) from e

        logger.debug(f"Vorbis stream finished: {self._blocks} blocks, {len(encoded)} bytes")
        return encoded
