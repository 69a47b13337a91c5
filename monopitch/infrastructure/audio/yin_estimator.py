"""
YinEstimator - YIN pitch detekce pro jedno analyzační okno.
"""
import logging
from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from monopitch.config import AUDIO
from monopitch.domain.interfaces import IPitchEstimator
from monopitch.domain.models import PitchCandidate

logger = logging.getLogger(__name__)


class YinEstimator(IPitchEstimator):
    """
    YIN pitch estimátor (de Cheveigné & Kawahara).

    Okno délky N se porovnává se sebou samým posunutým o tau, integrační
    okno je N // 2, takže nejnižší měřitelná frekvence je zhruba
    sample_rate / (N // 2).
    """

    def __init__(self, threshold: float = AUDIO.Analysis.YIN_THRESHOLD):
        """
        Args:
            threshold: Absolutní práh CMNDF pro výběr periody
        """
        self.threshold = threshold

    def estimate(
        self,
        window: np.ndarray,
        sample_rate: int,
        power_threshold: float,
        clarity_threshold: float
    ) -> Optional[PitchCandidate]:
        """
        Detekuje pitch jednoho okna.

        Args:
            window: Mono samples
            sample_rate: Sample rate v Hz
            power_threshold: Minimální součet kvadrátů signálu
            clarity_threshold: Minimální clarity (1 - CMNDF v nalezené periodě)

        Returns:
            PitchCandidate nebo None (krátké/tiché okno, žádná perioda, pod prahem)
        """
        signal = np.asarray(window, dtype=np.float64).reshape(-1)

        if len(signal) < AUDIO.Analysis.YIN_MIN_WINDOW or sample_rate <= 0:
            return None

        power = float(np.sum(signal ** 2))
        if power <= 0.0 or power < power_threshold:
            return None

        cmndf = self._cmndf(self._difference(signal))
        tau = self._absolute_threshold(cmndf)
        if tau is None:
            return None

        period = self._parabolic_interpolation(cmndf, tau)
        if period <= 0:
            return None

        clarity = float(np.clip(1.0 - cmndf[tau], 0.0, 1.0))
        if clarity < clarity_threshold:
            return None

        return PitchCandidate(frequency=float(sample_rate / period), clarity=clarity)

    @staticmethod
    def _difference(signal: np.ndarray) -> np.ndarray:
        """Difference function d(tau) pro tau = 0 .. N - N // 2."""
        integration = len(signal) // 2
        shifted = sliding_window_view(signal, integration)
        return np.sum((shifted - signal[:integration]) ** 2, axis=1)

    @staticmethod
    def _cmndf(diff: np.ndarray) -> np.ndarray:
        """Cumulative mean normalized difference function."""
        cmndf = np.ones_like(diff)
        running = np.cumsum(diff[1:])
        taus = np.arange(1, len(diff))
        with np.errstate(divide='ignore', invalid='ignore'):
            cmndf[1:] = np.where(running > 0, diff[1:] * taus / running, 1.0)
        return cmndf

    def _absolute_threshold(self, cmndf: np.ndarray) -> Optional[int]:
        """První minimum pod prahem, jinak globální minimum uvnitř rozsahu."""
        if len(cmndf) < 3:
            return None

        below = np.nonzero(cmndf[2:] < self.threshold)[0]
        if len(below):
            tau = int(below[0]) + 2
            # Sestup do lokálního minima
            while tau + 1 < len(cmndf) and cmndf[tau + 1] < cmndf[tau]:
                tau += 1
            return tau

        tau = int(np.argmin(cmndf[2:])) + 2
        if tau >= len(cmndf) - 1:
            # Minimum na okraji - perioda je delší než okno
            return None
        return tau

    @staticmethod
    def _parabolic_interpolation(cmndf: np.ndarray, tau: int) -> float:
        """Zpřesní periodu proložením paraboly sousedními body."""
        if tau <= 0 or tau >= len(cmndf) - 1:
            return float(tau)

        a, b, c = cmndf[tau - 1], cmndf[tau], cmndf[tau + 1]
        denominator = a - 2 * b + c
        # Interpolace má smysl jen v lokálním minimu (posun max. +-0.5)
        if b > a or b > c or denominator == 0:
            return float(tau)
        return float(tau + 0.5 * (a - c) / denominator)
