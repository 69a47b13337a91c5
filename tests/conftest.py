"""
Pytest configuration and shared fixtures.
"""

import io
import sys
from pathlib import Path

import numpy as np
import pytest

# Přidej root projektu do Python path (testy běží i bez instalace)
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def make_sine(
    frequency: float = 440.0,
    sample_rate: int = 44100,
    duration: float = 1.0,
    amplitude: float = 0.5
) -> np.ndarray:
    """Čistá sine wave jako float32."""
    t = np.arange(int(sample_rate * duration)) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


def make_wav_bytes(samples: np.ndarray, sample_rate: int, channels: int = 1) -> bytes:
    """Zapíše prokládané samples do WAV v paměti."""
    import soundfile as sf

    data = np.asarray(samples, dtype=np.float32).reshape(-1, channels)
    buffer = io.BytesIO()
    sf.write(buffer, data, sample_rate, format='WAV', subtype='FLOAT')
    return buffer.getvalue()


@pytest.fixture
def sine_440():
    """1s sine wave 440Hz @ 44.1kHz."""
    return make_sine(440.0, 44100, 1.0)


@pytest.fixture
def sine_factory():
    """Factory pro sine wave s libovolnými parametry."""
    return make_sine


@pytest.fixture
def wav_bytes_factory():
    """Factory pro WAV bytes (mono i prokládané stereo)."""
    return make_wav_bytes


@pytest.fixture
def mono_wav_bytes(sine_440):
    """Mono WAV 440Hz @ 44.1kHz."""
    return make_wav_bytes(sine_440, 44100, 1)


@pytest.fixture
def stereo_wav_bytes(sine_440):
    """Stereo WAV, stejná 440Hz sine v obou kanálech."""
    stereo = np.column_stack([sine_440, sine_440]).reshape(-1)
    return make_wav_bytes(stereo, 44100, 2)


@pytest.fixture
def ogg_bytes(sine_440):
    """Mono Ogg Vorbis 440Hz zakódovaný VorbisEncoderem."""
    from monopitch.domain.interfaces import EncoderSettings
    from monopitch.infrastructure.audio import VorbisEncoder

    encoder = VorbisEncoder(EncoderSettings(sample_rate=44100, stream_serial=7))
    for start in range(0, len(sine_440), 512):
        encoder.encode_block(sine_440[start:start + 512])
    return encoder.finish()
