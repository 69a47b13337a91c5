"""
Pitch Analysis - vzorkování po chuncích, filtrace, ořez extrémů a report.

Tři kroky odmítání outlierů jsou samostatné čisté funkce:

1. sample_pitch     - estimátor na každý chunk, okna bez odhadu se zahodí
2. filter_and_trim  - rozsah (min, max) exkluzivně, seřazení, ořez 10 % z obou stran
3. build_report     - mean, median, extrémy a chunks_used
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from monopitch.config import AUDIO
from monopitch.domain.errors import NoPitchCandidates
from monopitch.domain.interfaces import IPitchEstimator
from monopitch.domain.models import (
    FrequencyBounds,
    PitchAnalysis,
    PitchCandidate,
    PitchReport,
    SampleBuffer,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CHUNK PITCH SAMPLER
# =============================================================================

def sample_pitch(
    samples: np.ndarray,
    sample_rate: int,
    estimator: IPitchEstimator,
    chunk_size: int = AUDIO.Analysis.CHUNK_SIZE
) -> List[PitchCandidate]:
    """
    Rozdělí samples na nepřekrývající se okna a odhadne pitch každého z nich.

    Poslední kratší okno se analyzuje také. Prahy estimátoru jsou vypnuté,
    okna bez odhadu (None) se tiše vynechají. Pořadí odpovídá pořadí chunků.

    Args:
        samples: Mono samples
        sample_rate: Sample rate v Hz
        estimator: Estimátor pro jedno okno
        chunk_size: Velikost okna v samples

    Returns:
        Seznam PitchCandidate v pořadí chunků
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    samples = np.asarray(samples, dtype=np.float32).reshape(-1)
    candidates = []
    attempted = 0

    for start in range(0, len(samples), chunk_size):
        attempted += 1
        candidate = estimator.estimate(
            samples[start:start + chunk_size],
            sample_rate,
            AUDIO.Analysis.POWER_THRESHOLD,
            AUDIO.Analysis.CLARITY_THRESHOLD,
        )
        if candidate is not None:
            candidates.append(candidate)

    logger.debug(f"Pitch sampler: {len(candidates)}/{attempted} chunks yielded an estimate")
    return candidates


# =============================================================================
# PITCH FILTER & TRIMMER
# =============================================================================

def round_half_away(value: float) -> int:
    """Zaokrouhlení s polovinou od nuly (2.5 -> 3, ne 2 jako round())."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def filter_candidates(
    candidates: Sequence[PitchCandidate],
    min_frequency: float,
    max_frequency: float
) -> List[float]:
    """Ponechá frekvence ostře uvnitř (min, max); clarity se zatím ignoruje."""
    return [
        float(c.frequency)
        for c in candidates
        if min_frequency < c.frequency < max_frequency
    ]


def trim_outliers(
    frequencies: Sequence[float],
    ratio: float = AUDIO.Analysis.TRIM_RATIO
) -> List[float]:
    """
    Seřadí frekvence a odřízne `ratio` nejnižších a nejvyšších hodnot.

    Počet odříznutých hodnot z každé strany je round_half_away(len * ratio),
    omezený na (len - 1) // 2, takže neprázdný vstup vždy vrátí aspoň
    jednu hodnotu.

    Raises:
        NoPitchCandidates: prázdný vstup
    """
    if not frequencies:
        raise NoPitchCandidates(AUDIO.Errors.EMPTY_REPORT)

    ordered = sorted(frequencies)
    low = min(round_half_away(len(ordered) * ratio), (len(ordered) - 1) // 2)
    return ordered[low:len(ordered) - low]


def filter_and_trim(
    candidates: Sequence[PitchCandidate],
    min_frequency: float,
    max_frequency: float
) -> List[float]:
    """
    Filtrace rozsahem + ořez extrémů.

    Returns:
        Vzestupně seřazené frekvence (zhruba 80 % vyfiltrovaných)

    Raises:
        NoPitchCandidates: žádný kandidát v rozsahu
    """
    frequencies = filter_candidates(candidates, min_frequency, max_frequency)
    if not frequencies:
        raise NoPitchCandidates(AUDIO.Errors.NO_PITCH_CANDIDATES.format(
            min_frequency=min_frequency, max_frequency=max_frequency
        ))

    trimmed = trim_outliers(frequencies)
    logger.debug(
        f"Pitch filter: {len(candidates)} candidates -> {len(frequencies)} in range "
        f"-> {len(trimmed)} after trim"
    )
    return trimmed


# =============================================================================
# PITCH REPORT BUILDER
# =============================================================================

def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values))


def _median(values: Sequence[float]) -> float:
    """Medián již seřazené posloupnosti."""
    mid = len(values) // 2
    if len(values) % 2 == 0:
        return _mean(values[mid - 1:mid + 1])
    return float(values[mid])


def build_report(
    trimmed: Sequence[float],
    total_sample_count: int,
    chunk_size: int = AUDIO.Analysis.CHUNK_SIZE
) -> PitchReport:
    """
    Sestaví PitchReport z ořezaných (seřazených) frekvencí.

    chunks_used = len(trimmed) / (total_sample_count / chunk_size) * 100.
    Vzorec dělí počtem všech teoretických chunků, ne počtem vyfiltrovaných,
    a takto se musí zachovat - prahy 1 % / 10 % jsou na něj kalibrované.

    Raises:
        NoPitchCandidates: prázdný vstup
    """
    if not trimmed:
        raise NoPitchCandidates(AUDIO.Errors.EMPTY_REPORT)
    if total_sample_count <= 0 or chunk_size <= 0:
        raise ValueError(
            f"total_sample_count and chunk_size must be positive, "
            f"got {total_sample_count} and {chunk_size}"
        )

    return PitchReport(
        chunks_used=(len(trimmed) / (total_sample_count / chunk_size)) * 100.0,
        mean=_mean(trimmed),
        median=_median(trimmed),
        lowest=float(trimmed[0]),
        highest=float(trimmed[-1]),
    )


def analyze_pitch(
    samples: np.ndarray,
    sample_rate: int,
    min_frequency: float,
    max_frequency: float,
    estimator: IPitchEstimator,
    chunk_size: int = AUDIO.Analysis.CHUNK_SIZE
) -> PitchAnalysis:
    """
    Kompletní pitch analýza: sampler -> filtr a ořez -> report.

    Returns:
        PitchAnalysis s reportem a ořezanými frekvencemi

    Raises:
        NoPitchCandidates: v rozsahu není žádná frekvence
    """
    bounds = FrequencyBounds(min_frequency, max_frequency)
    candidates = sample_pitch(samples, sample_rate, estimator, chunk_size)
    trimmed = filter_and_trim(candidates, bounds.min_frequency, bounds.max_frequency)
    report = build_report(trimmed, len(samples), chunk_size)
    return PitchAnalysis(report=report, frequencies=tuple(trimmed))


class AnalysisService:
    """
    Application service pro pitch analýzu s injektovaným estimátorem.

    Kombinuje:
    - PitchEstimator: odhad pitch pro jedno okno (YIN, CREPE)
    - výchozí rozsah frekvencí a velikost chunku z konfigurace
    """

    def __init__(
        self,
        estimator: IPitchEstimator,
        bounds: Optional[FrequencyBounds] = None,
        chunk_size: int = AUDIO.Analysis.CHUNK_SIZE
    ):
        """
        Args:
            estimator: Instance YinEstimator / CrepeEstimator
            bounds: Rozsah frekvencí (default 50-600 Hz)
            chunk_size: Velikost analyzačního okna
        """
        self.estimator = estimator
        self.bounds = bounds or FrequencyBounds(
            AUDIO.Analysis.DEFAULT_MIN_FREQUENCY,
            AUDIO.Analysis.DEFAULT_MAX_FREQUENCY
        )
        self.chunk_size = chunk_size

    def analyze(self, buffer: SampleBuffer, bounds: Optional[FrequencyBounds] = None) -> PitchAnalysis:
        """
        Analyzuje mono buffer.

        Args:
            buffer: Mono SampleBuffer
            bounds: Volitelně jiný rozsah než výchozí

        Returns:
            PitchAnalysis

        Raises:
            NoPitchCandidates: v rozsahu není žádná frekvence
        """
        bounds = bounds or self.bounds
        analysis = analyze_pitch(
            buffer.samples,
            buffer.sample_rate,
            bounds.min_frequency,
            bounds.max_frequency,
            self.estimator,
            self.chunk_size,
        )

        report = analysis.report
        logger.info(
            f"Pitch analysis: mean={report.mean:.1f}Hz, median={report.median:.1f}Hz, "
            f"range={report.lowest:.1f}-{report.highest:.1f}Hz, "
            f"chunks used={report.chunks_used:.1f}%"
        )
        if report.chunks_used < AUDIO.Analysis.CHUNKS_USED_INSTRUMENTAL:
            logger.warning(
                f"Only {report.chunks_used:.2f}% of chunks were usable, "
                f"the pitch report is not credible"
            )

        return analysis
