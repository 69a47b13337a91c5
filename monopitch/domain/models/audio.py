"""
Doménové value objekty pro audio a pitch analýzu.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """
    Value object pro PCM data.

    Samples jsou float32, prokládané po kanálech (L, R, L, R, ...).
    Nulový sample_rate nebo channels je povolen, aby ho dekodér mohl
    nahlásit - odmítá ho až pipeline.
    """

    samples: np.ndarray
    sample_rate: int
    channels: int = 1

    def __post_init__(self):
        samples = np.ascontiguousarray(self.samples, dtype=np.float32).reshape(-1)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "sample_rate", int(self.sample_rate))
        object.__setattr__(self, "channels", int(self.channels))

        if self.channels > 0 and len(samples) % self.channels != 0:
            raise ValueError(
                f"Sample count {len(samples)} is not a multiple of "
                f"channel count {self.channels}"
            )

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def frames(self) -> int:
        """Počet framů (samples na kanál)."""
        if self.channels <= 0:
            return 0
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        """Délka v sekundách."""
        if self.sample_rate <= 0:
            return 0.0
        return self.frames / self.sample_rate

    @property
    def is_valid(self) -> bool:
        return self.sample_rate > 0 and self.channels > 0

    def copy(self) -> "SampleBuffer":
        return SampleBuffer(self.samples.copy(), self.sample_rate, self.channels)


@dataclass(frozen=True)
class PitchCandidate:
    """Odhad pitch pro jedno okno: frekvence (Hz) a clarity (0-1)."""

    frequency: float
    clarity: float


@dataclass(frozen=True)
class FrequencyBounds:
    """Rozsah akceptovaných frekvencí (exkluzivní na obou koncích)."""

    min_frequency: float
    max_frequency: float

    def __post_init__(self):
        if not (0 < self.min_frequency < self.max_frequency):
            raise ValueError(
                f"Invalid frequency bounds: {self.min_frequency}-{self.max_frequency} Hz "
                f"(expected 0 < min < max)"
            )

    def contains(self, frequency: float) -> bool:
        return self.min_frequency < frequency < self.max_frequency


@dataclass(frozen=True)
class PitchReport:
    """
    Souhrn pozorovaných pitch hodnot.

    chunks_used je procento chunků (po ořezu) vůči teoretickému počtu
    chunků celého audia. Orientačně: instrumentály > 1 %, řeč > 10 %
    (při rozsahu 50-600 Hz). Hodnota je záměrně "podhodnocená", prahy
    jsou kalibrované právě na tento vzorec.
    """

    chunks_used: float
    mean: float
    median: float
    lowest: float
    highest: float

    def __post_init__(self):
        for name in ("chunks_used", "mean", "median", "lowest", "highest"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ValueError(f"PitchReport.{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

    def as_dict(self) -> Dict[str, float]:
        return {
            "chunks_used": self.chunks_used,
            "mean": self.mean,
            "median": self.median,
            "lowest": self.lowest,
            "highest": self.highest,
        }


@dataclass(frozen=True)
class PitchAnalysis:
    """Report + ořezané frekvence (vzestupně) pro vizualizaci."""

    report: PitchReport
    frequencies: Tuple[float, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "report": self.report.as_dict(),
            "frequencies": list(self.frequencies),
        }
