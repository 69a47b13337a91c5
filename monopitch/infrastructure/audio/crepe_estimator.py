"""
CrepeEstimator - CREPE-based pitch estimátor pro jedno okno.
"""
import logging
from typing import Optional

import numpy as np

from monopitch.config import AUDIO
from monopitch.domain.interfaces import IPitchEstimator
from monopitch.domain.models import PitchCandidate

logger = logging.getLogger(__name__)

try:
    import crepe
    CREPE_AVAILABLE = True
except ImportError:
    CREPE_AVAILABLE = False
    logger.debug("CREPE not available")


class CrepeEstimator(IPitchEstimator):
    """Pitch estimator using CREPE neural network."""

    def __init__(
        self,
        model_capacity: str = AUDIO.Analysis.CREPE_MODEL_CAPACITY,
        step_size: int = AUDIO.Analysis.CREPE_STEP_SIZE
    ):
        """
        Inicializuje CREPE estimátor.

        Args:
            model_capacity: Model size (tiny, small, medium, large, full)
            step_size: Step size in milliseconds

        Raises:
            ImportError: pokud crepe není nainstalovaný
        """
        if not CREPE_AVAILABLE:
            raise ImportError(
                "CREPE is not installed. Install it with: pip install monopitch[ml]"
            )
        self.model_capacity = model_capacity
        self.step_size = step_size

    def estimate(
        self,
        window: np.ndarray,
        sample_rate: int,
        power_threshold: float,
        clarity_threshold: float
    ) -> Optional[PitchCandidate]:
        """
        Detekuje pitch okna pomocí CREPE.

        Frekvence je medián CREPE framů v okně, clarity průměrná confidence.
        """
        waveform = np.asarray(window, dtype=np.float32).reshape(-1)
        if len(waveform) == 0 or sample_rate <= 0:
            return None

        if float(np.sum(waveform.astype(np.float64) ** 2)) < power_threshold:
            return None

        try:
            _, frequency, confidence, _ = crepe.predict(
                waveform,
                sample_rate,
                model_capacity=self.model_capacity,
                step_size=self.step_size,
                viterbi=False,
                verbose=0
            )
        except Exception as e:
            logger.warning(f"CREPE estimation failed: {e}")
            return None

        if len(frequency) == 0:
            return None

        detected_frequency = float(np.median(frequency))
        clarity = float(np.clip(np.mean(confidence), 0.0, 1.0))

        if detected_frequency <= 0 or clarity < clarity_threshold:
            return None

        logger.debug(f"CREPE detected: {detected_frequency:.1f}Hz, conf: {clarity:.2f}")
        return PitchCandidate(frequency=detected_frequency, clarity=clarity)
