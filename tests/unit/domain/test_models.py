"""
Unit testy pro doménové modely.
"""

import math

import numpy as np
import pytest

from monopitch.domain.models import (
    SampleBuffer,
    PitchCandidate,
    FrequencyBounds,
    PitchReport,
    PitchAnalysis,
)


@pytest.mark.unit
class TestSampleBuffer:
    """Testy pro SampleBuffer value object."""

    def test_samples_converted_to_float32(self):
        """Samples se převedou na 1-D float32."""
        buffer = SampleBuffer([0, 1, 2, 3], 8000, 2)
        assert buffer.samples.dtype == np.float32
        assert buffer.samples.ndim == 1
        assert len(buffer) == 4

    def test_frames_and_duration(self):
        """Test odvozených hodnot."""
        buffer = SampleBuffer(np.zeros(44100 * 2), 44100, 2)
        assert buffer.frames == 44100
        assert buffer.duration == pytest.approx(1.0)

    def test_zero_metadata_is_representable(self):
        """Dekodér musí umět nahlásit 0 Hz / 0 kanálů."""
        buffer = SampleBuffer(np.zeros(3), 0, 0)
        assert buffer.frames == 0
        assert buffer.duration == 0.0
        assert not buffer.is_valid

    def test_length_must_match_channels(self):
        """Délka musí být násobkem počtu kanálů."""
        with pytest.raises(ValueError):
            SampleBuffer(np.zeros(5), 44100, 2)

    def test_copy_does_not_alias(self):
        """copy() vrací nezávislé pole."""
        buffer = SampleBuffer(np.ones(4), 8000, 1)
        copied = buffer.copy()
        copied.samples[0] = 5.0
        assert buffer.samples[0] == 1.0


@pytest.mark.unit
class TestFrequencyBounds:
    """Testy pro FrequencyBounds."""

    def test_contains_is_exclusive(self):
        bounds = FrequencyBounds(50.0, 600.0)
        assert bounds.contains(440.0)
        assert not bounds.contains(50.0)
        assert not bounds.contains(600.0)

    @pytest.mark.parametrize("low,high", [(0.0, 100.0), (600.0, 50.0), (100.0, 100.0), (-5.0, 10.0)])
    def test_invalid_bounds(self, low, high):
        """Test 0 < min < max."""
        with pytest.raises(ValueError):
            FrequencyBounds(low, high)


@pytest.mark.unit
class TestPitchReport:
    """Testy pro PitchReport a PitchAnalysis."""

    def test_as_dict(self):
        report = PitchReport(50.0, 220.0, 219.0, 200.0, 240.0)
        assert report.as_dict() == {
            "chunks_used": 50.0,
            "mean": 220.0,
            "median": 219.0,
            "lowest": 200.0,
            "highest": 240.0,
        }

    def test_fields_are_floats(self):
        report = PitchReport(np.float32(10), 1, 2, 3, 4)
        assert isinstance(report.chunks_used, float)
        assert isinstance(report.mean, float)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            PitchReport(math.nan, 1.0, 1.0, 1.0, 1.0)

    def test_report_is_frozen(self):
        report = PitchReport(1.0, 1.0, 1.0, 1.0, 1.0)
        with pytest.raises(AttributeError):
            report.mean = 2.0

    def test_analysis_as_dict(self):
        report = PitchReport(1.0, 100.0, 100.0, 100.0, 100.0)
        analysis = PitchAnalysis(report, (100.0,))
        assert analysis.as_dict()["frequencies"] == [100.0]
        assert analysis.as_dict()["report"]["median"] == 100.0

    def test_candidate_keeps_clarity(self):
        candidate = PitchCandidate(440.0, 0.9)
        assert candidate.clarity == 0.9
