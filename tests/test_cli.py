"""
Testy CLI driveru.
"""

import io

import numpy as np
import pytest
import soundfile as sf

from monopitch.cli import build_parser, format_report, main, parse_comments
from monopitch.config import APP
from monopitch.domain.models import PitchReport


@pytest.mark.unit
class TestCliHelpers:
    """Testy pomocných funkcí CLI."""

    def test_parse_comments(self):
        assert parse_comments(["title=Song", "ARTIST=Me", "comment=a=b"]) == {
            "title": "Song",
            "artist": "Me",
            "comment": "a=b",
        }

    @pytest.mark.parametrize("value", ["title", "=x"])
    def test_parse_comments_invalid(self, value):
        with pytest.raises(ValueError):
            parse_comments([value])

    def test_defaults(self):
        args = build_parser().parse_args(["in.wav"])
        assert args.min_freq == 50.0
        assert args.max_freq == 600.0
        assert args.chunk_size == 1024
        assert args.quality == -0.15
        assert args.serial == 0
        assert not args.analyze
        assert not args.remux

    def test_format_report(self):
        text = format_report(PitchReport(81.27, 440.1, 440.0, 439.5, 441.0))
        assert "Median pitch:  440.00 Hz" in text
        assert "Chunks used:   81.27 %" in text


@pytest.mark.slow
class TestCliMain:
    """Testy celého běhu CLI."""

    def test_analyze_and_encode(self, tmp_path, mono_wav_bytes, capsys):
        source = tmp_path / "sine.wav"
        source.write_bytes(mono_wav_bytes)

        code = main([str(source), "--analyze", "--remux", "--comment", "title=Sine"])

        assert code == APP.ExitCodes.OK
        output = tmp_path / "sine.wav.ogg"
        assert output.exists()
        assert sf.info(io.BytesIO(output.read_bytes())).channels == 1
        assert "Median pitch:" in capsys.readouterr().out

    def test_explicit_output(self, tmp_path, stereo_wav_bytes):
        source = tmp_path / "in.wav"
        source.write_bytes(stereo_wav_bytes)
        target = tmp_path / "out.ogg"

        assert main([str(source), "-o", str(target), "--quality", "0.4"]) == APP.ExitCodes.OK
        assert target.exists()

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.wav")]) == APP.ExitCodes.USAGE

    def test_invalid_bounds(self, tmp_path, mono_wav_bytes):
        source = tmp_path / "sine.wav"
        source.write_bytes(mono_wav_bytes)
        assert main([str(source), "--min-freq", "700"]) == APP.ExitCodes.USAGE

    def test_decode_error(self, tmp_path):
        source = tmp_path / "broken.wav"
        source.write_bytes(b"garbage" * 20)
        assert main([str(source)]) == APP.ExitCodes.DECODE

    def test_channel_layout_error(self, tmp_path, wav_bytes_factory):
        source = tmp_path / "surround.wav"
        source.write_bytes(wav_bytes_factory(np.zeros(3000, dtype=np.float32), 8000, 3))
        assert main([str(source)]) == APP.ExitCodes.CHANNEL_LAYOUT

    def test_analysis_error(self, tmp_path, wav_bytes_factory):
        source = tmp_path / "silence.wav"
        source.write_bytes(wav_bytes_factory(np.zeros(8192, dtype=np.float32), 44100, 1))
        assert main([str(source), "--analyze"]) == APP.ExitCodes.ANALYSIS

    def test_encoding_error(self, tmp_path, mono_wav_bytes):
        source = tmp_path / "sine.wav"
        source.write_bytes(mono_wav_bytes)
        assert main([str(source), "--quality", "5"]) == APP.ExitCodes.ENCODING
