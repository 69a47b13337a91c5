"""
Unit testy pro VorbisEncoder.
"""

import io

import pytest
import soundfile as sf

from monopitch.domain.errors import EncodingFailure
from monopitch.domain.interfaces import EncoderSettings
from monopitch.infrastructure.audio import VorbisEncoder
from monopitch.infrastructure.audio.ogg_pages import read_pages
from monopitch.infrastructure.audio.vorbis_encoder import quality_to_compression_level


def encode(samples, settings):
    encoder = VorbisEncoder(settings)
    for start in range(0, len(samples), 512):
        encoder.encode_block(samples[start:start + 512])
    return encoder.finish()


@pytest.mark.unit
class TestQualityMapping:
    """Test převodu kvality na compression level."""

    @pytest.mark.parametrize("quality,level", [
        (1.0, 0.0),
        (0.5, 0.5),
        (0.0, 1.0),
        (-0.15, 1.0),
        (2.0, 0.0),
    ])
    def test_mapping(self, quality, level):
        assert quality_to_compression_level(quality) == pytest.approx(level)


@pytest.mark.unit
class TestVorbisEncoder:
    """Testy enkódování do Ogg Vorbis."""

    def test_output_is_mono_ogg(self, sine_440):
        encoded = encode(sine_440, EncoderSettings(sample_rate=44100))

        assert encoded[:4] == b"OggS"
        info = sf.info(io.BytesIO(encoded))
        assert info.samplerate == 44100
        assert info.channels == 1
        assert info.frames == pytest.approx(len(sine_440), abs=1024)

    def test_stream_serial_is_stamped(self, sine_440):
        encoded = encode(sine_440, EncoderSettings(sample_rate=44100, stream_serial=1234))
        assert {page.serial for page in read_pages(encoded)} == {1234}

    def test_comments_written(self, sine_440):
        settings = EncoderSettings(
            sample_rate=44100,
            comments={"title": "Sine", "artist": "monopitch"}
        )
        encoded = encode(sine_440, settings)

        with sf.SoundFile(io.BytesIO(encoded)) as f:
            assert f.title == "Sine"
            assert f.artist == "monopitch"

    @pytest.mark.parametrize("settings", [
        EncoderSettings(sample_rate=0),
        EncoderSettings(sample_rate=44100, channels=2),
        EncoderSettings(sample_rate=44100, target_quality=2.5),
        EncoderSettings(sample_rate=44100, target_quality=-0.5),
        EncoderSettings(sample_rate=44100, comments={"lyrics": "la la"}),
    ])
    def test_rejected_settings(self, settings):
        with pytest.raises(EncodingFailure):
            VorbisEncoder(settings)

    def test_finish_twice_raises(self, sine_440):
        encoder = VorbisEncoder(EncoderSettings(sample_rate=44100))
        encoder.encode_block(sine_440[:512])
        encoder.finish()

        with pytest.raises(EncodingFailure):
            encoder.finish()
        with pytest.raises(EncodingFailure):
            encoder.encode_block(sine_440[:512])
