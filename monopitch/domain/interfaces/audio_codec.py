"""
Interface pro audio kolaborátory - dekodér, pitch estimátor, enkodér, remuxer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Optional

import numpy as np

from monopitch.config import AUDIO
from monopitch.domain.models import SampleBuffer, PitchCandidate


@dataclass(frozen=True)
class EncoderSettings:
    """Konfigurace enkodéru (serial, komentáře, formát, kvalita)."""

    sample_rate: int
    channels: int = AUDIO.Encoding.OUTPUT_CHANNELS
    stream_serial: int = AUDIO.Encoding.DEFAULT_STREAM_SERIAL
    target_quality: float = AUDIO.Encoding.DEFAULT_QUALITY
    comments: Mapping[str, str] = field(default_factory=dict)


class IAudioDecoder(ABC):
    """Interface pro dekódování audio bytů na PCM."""

    @abstractmethod
    def decode(self, raw: bytes) -> SampleBuffer:
        """
        Dekóduje kontejner/kodek na prokládané float32 samples.

        Args:
            raw: Obsah audio souboru

        Returns:
            SampleBuffer (sample_rate/channels mohou být 0 u poškozeného vstupu)

        Raises:
            DecodeIntegrityError: při fatální chybě dekódování
        """
        pass

    @abstractmethod
    def get_audio_info(self, raw: bytes) -> Optional[dict]:
        """
        Získá informace o audiu bez dekódování celého obsahu.

        Args:
            raw: Obsah audio souboru

        Returns:
            Dictionary s info (duration, sample_rate, channels, frames) nebo None
        """
        pass


class IPitchEstimator(ABC):
    """
    Interface pro odhad pitch z jednoho okna.
    Konkrétní implementace: YinEstimator, CrepeEstimator.
    """

    @abstractmethod
    def estimate(
        self,
        window: np.ndarray,
        sample_rate: int,
        power_threshold: float,
        clarity_threshold: float
    ) -> Optional[PitchCandidate]:
        """
        Odhadne základní frekvenci jednoho okna.

        Args:
            window: Mono samples okna
            sample_rate: Sample rate v Hz
            power_threshold: Minimální výkon signálu (0.0 = vypnuto)
            clarity_threshold: Minimální clarity (0.0 = vypnuto)

        Returns:
            PitchCandidate nebo None pokud pitch nelze určit
        """
        pass


class IAudioEncoder(ABC):
    """
    Interface pro streamový enkodér.

    Instance odpovídá jednomu výstupnímu streamu: bloky se zapisují
    postupně a stream se musí explicitně ukončit voláním finish().
    """

    @abstractmethod
    def encode_block(self, block: np.ndarray) -> None:
        """
        Zapíše jeden blok mono samples.

        Raises:
            EncodingFailure: při chybě zápisu
        """
        pass

    @abstractmethod
    def finish(self) -> bytes:
        """
        Vyprázdní interní stav a vrátí zakódovaný stream.

        Raises:
            EncodingFailure: při chybě ukončení streamu
        """
        pass


class IRemuxer(ABC):
    """Interface pro přebalení již zakódovaného streamu."""

    @abstractmethod
    def remux(self, encoded: bytes) -> bytes:
        """
        Přebalí stream bez překódování.

        Výsledek nemusí mít přesná metadata o délce.

        Raises:
            RemuxFailure: pokud stream nejde přebalit
        """
        pass
