"""
Pipeline Service - Orchestrace decode -> mono -> [analýza] -> encode -> [remux].
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from monopitch.config import AUDIO
from monopitch.domain.errors import (
    DecodeIntegrityError,
    EncodingFailure,
    MonopitchError,
)
from monopitch.domain.interfaces import (
    EncoderSettings,
    IAudioDecoder,
    IAudioEncoder,
    IPitchEstimator,
    IRemuxer,
)
from monopitch.domain.models import FrequencyBounds, PitchAnalysis, SampleBuffer
from monopitch.infrastructure.audio import (
    OggRemuxer,
    SoundfileDecoder,
    VorbisEncoder,
    YinEstimator,
)
from .channel_reducer import reduce_to_mono
from .pitch_analysis import AnalysisService

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    DECODE = "decode"
    REDUCE = "reduce"
    ANALYZE = "analyze"
    ENCODE = "encode"
    REMUX = "remux"


class PipelinePhase(Enum):
    STARTED = "started"
    FINISHED = "finished"


@dataclass(frozen=True)
class PipelineEvent:
    """Událost o průběhu jedné fáze pipeline."""

    stage: PipelineStage
    phase: PipelinePhase
    label: str = ""
    detail: str = ""


EventCallback = Callable[[PipelineEvent], None]


def logging_listener(target: Optional[logging.Logger] = None) -> EventCallback:
    """
    Vytvoří callback, který události zapisuje do loggeru.

    Args:
        target: Logger pro záznamy (default logger tohoto modulu)

    Returns:
        Callback pro PipelineService(event_callback=...)
    """
    target = target or logger

    def listener(event: PipelineEvent) -> None:
        message = f"[{event.label or '-'}] {event.stage.value} {event.phase.value}"
        if event.detail:
            message += f": {event.detail}"
        target.info(message)

    return listener


@dataclass(frozen=True)
class PipelineOptions:
    """Nastavení jednoho běhu pipeline."""

    analyze: bool = False
    bounds: FrequencyBounds = field(default_factory=lambda: FrequencyBounds(
        AUDIO.Analysis.DEFAULT_MIN_FREQUENCY,
        AUDIO.Analysis.DEFAULT_MAX_FREQUENCY
    ))
    chunk_size: int = AUDIO.Analysis.CHUNK_SIZE
    stream_serial: int = AUDIO.Encoding.DEFAULT_STREAM_SERIAL
    comments: Mapping[str, str] = field(default_factory=dict)
    target_quality: float = AUDIO.Encoding.DEFAULT_QUALITY
    remux: bool = False
    label: str = ""


@dataclass(frozen=True)
class PipelineResult:
    """Výsledek běhu: zakódovaný stream a případná analýza."""

    encoded: bytes
    analysis: Optional[PitchAnalysis] = None


@dataclass(frozen=True)
class BatchItem:
    """Výsledek jednoho zdroje v run_batch (buď result, nebo error)."""

    label: str
    result: Optional[PipelineResult] = None
    error: Optional[MonopitchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PipelineService:
    """
    Application service pro celý převod jednoho vstupu.

    Kombinuje:
    - AudioDecoder: raw bytes -> SampleBuffer
    - channel reducer: -> mono
    - AnalysisService: pitch report (volitelně)
    - AudioEncoder: mono -> Ogg Vorbis
    - Remuxer: přebalení stránek (volitelně)
    """

    def __init__(
        self,
        decoder: IAudioDecoder,
        encoder_factory: Callable[[EncoderSettings], IAudioEncoder] = VorbisEncoder,
        remuxer: Optional[IRemuxer] = None,
        estimator: Optional[IPitchEstimator] = None,
        event_callback: Optional[EventCallback] = None
    ):
        """
        Args:
            decoder: Instance SoundfileDecoder
            encoder_factory: EncoderSettings -> enkodér (default VorbisEncoder)
            remuxer: Instance OggRemuxer (jen pro options.remux)
            estimator: Pitch estimátor (default YinEstimator)
            event_callback: Optional callback(PipelineEvent)
        """
        self.decoder = decoder
        self.encoder_factory = encoder_factory
        self.remuxer = remuxer
        self.estimator = estimator or YinEstimator()
        self.event_callback = event_callback

    def run(self, raw: bytes, options: Optional[PipelineOptions] = None) -> bytes:
        """
        Převede vstup na Ogg Vorbis.

        Returns:
            Zakódovaný (případně přebalený) stream
        """
        return self.run_with_report(raw, options).encoded

    def run_with_report(
        self,
        raw: bytes,
        options: Optional[PipelineOptions] = None
    ) -> PipelineResult:
        """
        Převede vstup a vrátí i pitch analýzu (pokud options.analyze).

        Args:
            raw: Obsah audio souboru
            options: PipelineOptions (default bez analýzy a remuxu)

        Returns:
            PipelineResult

        Raises:
            DecodeIntegrityError: dekódování selhalo nebo vrátilo 0 Hz / 0 kanálů
            UnsupportedChannelLayout: víc než 2 kanály
            NoPitchCandidates: analýza nenašla žádnou frekvenci v rozsahu
            EncodingFailure: enkódování nebo remux selhalo
        """
        options = options or PipelineOptions()
        label = options.label

        buffer = self._decode(raw, label)
        mono = self._reduce(buffer, label)

        analysis = None
        if options.analyze:
            analysis = self._analyze(mono, options)

        encoded = self._encode(mono, options)

        if options.remux:
            encoded = self._remux(encoded, label)

        logger.info(f"Pipeline finished for {label or 'input'}: {len(encoded)} bytes")
        return PipelineResult(encoded=encoded, analysis=analysis)

    def run_batch(
        self,
        sources: Sequence[Tuple[str, bytes]],
        options: Optional[PipelineOptions] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[BatchItem]:
        """
        Zpracuje batch vstupů postupně s optional progress callback.

        Chyba jednoho vstupu nepřeruší ostatní, zůstane v BatchItem.error.

        Args:
            sources: Dvojice (label, raw bytes)
            options: Společné PipelineOptions, label se přepíše
            progress_callback: Optional callback(current, total)

        Returns:
            List BatchItem ve stejném pořadí jako sources
        """
        options = options or PipelineOptions()
        items = []
        total = len(sources)

        for i, (label, raw) in enumerate(sources, 1):
            try:
                result = self.run_with_report(raw, replace(options, label=label))
                items.append(BatchItem(label=label, result=result))
            except MonopitchError as e:
                logger.error(f"Pipeline failed for {label}: {e}")
                items.append(BatchItem(label=label, error=e))

            if progress_callback:
                progress_callback(i, total)

        failed = sum(1 for item in items if not item.ok)
        logger.info(
            f"Batch complete: {total - failed} successful, "
            f"{failed} failed out of {total}"
        )
        return items

    # -------------------------------------------------------------------------
    # Fáze
    # -------------------------------------------------------------------------

    def _emit(self, stage: PipelineStage, phase: PipelinePhase, label: str, detail: str = "") -> None:
        if self.event_callback:
            self.event_callback(PipelineEvent(stage, phase, label, detail))

    def _decode(self, raw: bytes, label: str) -> SampleBuffer:
        self._emit(PipelineStage.DECODE, PipelinePhase.STARTED, label)
        try:
            buffer = self.decoder.decode(raw)
        except MonopitchError:
            raise
        except Exception as e:
            logger.error(f"Decoder failed for {label or 'input'}: {e}")
            raise DecodeIntegrityError(AUDIO.Errors.DECODE_FAILED.format(error=e)) from e

        if buffer.sample_rate <= 0 or buffer.channels <= 0:
            raise DecodeIntegrityError.bad_metadata(buffer.sample_rate, buffer.channels)

        logger.debug(
            f"Decoded {label or 'input'}: {buffer.frames} frames, "
            f"{buffer.channels} channels, {buffer.sample_rate}Hz"
        )
        self._emit(
            PipelineStage.DECODE, PipelinePhase.FINISHED, label,
            f"{buffer.channels} channels, {buffer.sample_rate}Hz, {buffer.duration:.2f}s"
        )
        return buffer

    def _reduce(self, buffer: SampleBuffer, label: str) -> SampleBuffer:
        self._emit(PipelineStage.REDUCE, PipelinePhase.STARTED, label)
        mono = reduce_to_mono(buffer)
        self._emit(PipelineStage.REDUCE, PipelinePhase.FINISHED, label, f"{len(mono)} samples")
        return mono

    def _analyze(self, mono: SampleBuffer, options: PipelineOptions) -> PitchAnalysis:
        self._emit(PipelineStage.ANALYZE, PipelinePhase.STARTED, options.label)
        service = AnalysisService(self.estimator, options.bounds, options.chunk_size)
        analysis = service.analyze(mono)
        self._emit(
            PipelineStage.ANALYZE, PipelinePhase.FINISHED, options.label,
            f"median {analysis.report.median:.1f}Hz"
        )
        return analysis

    def _encode(self, mono: SampleBuffer, options: PipelineOptions) -> bytes:
        self._emit(PipelineStage.ENCODE, PipelinePhase.STARTED, options.label)
        settings = EncoderSettings(
            sample_rate=mono.sample_rate,
            channels=AUDIO.Encoding.OUTPUT_CHANNELS,
            stream_serial=options.stream_serial,
            target_quality=options.target_quality,
            comments=dict(options.comments),
        )

        frame_size = AUDIO.Encoding.FRAME_SIZE
        try:
            encoder = self.encoder_factory(settings)
            for start in range(0, len(mono.samples), frame_size):
                encoder.encode_block(mono.samples[start:start + frame_size])
            encoded = encoder.finish()
        except MonopitchError:
            raise
        except Exception as e:
            logger.error(f"Encoder failed for {options.label or 'input'}: {e}")
            raise EncodingFailure(AUDIO.Errors.ENCODER_WRITE.format(error=e)) from e

        self._emit(PipelineStage.ENCODE, PipelinePhase.FINISHED, options.label, f"{len(encoded)} bytes")
        return encoded

    def _remux(self, encoded: bytes, label: str) -> bytes:
        self._emit(PipelineStage.REMUX, PipelinePhase.STARTED, label)
        remuxer = self.remuxer or OggRemuxer()
        try:
            remuxed = remuxer.remux(encoded)
        except MonopitchError:
            raise
        except Exception as e:
            logger.error(f"Remuxer failed for {label or 'input'}: {e}")
            raise EncodingFailure(AUDIO.Errors.REMUX_FAILED.format(error=e)) from e

        logger.debug(f"Remuxed {label or 'input'}: {len(encoded)} -> {len(remuxed)} bytes")
        self._emit(PipelineStage.REMUX, PipelinePhase.FINISHED, label, f"{len(remuxed)} bytes")
        return remuxed


def compose_to_ogg(
    raw: bytes,
    label: str = "",
    stream_serial: int = AUDIO.Encoding.DEFAULT_STREAM_SERIAL,
    target_quality: float = AUDIO.Encoding.DEFAULT_QUALITY,
    remux: bool = False,
    comments: Optional[Mapping[str, str]] = None
) -> bytes:
    """
    Jednorázový převod na mono Ogg Vorbis s výchozími adaptéry.

    Průběh se loguje přes logging_listener.
    """
    service = PipelineService(
        decoder=SoundfileDecoder(),
        encoder_factory=VorbisEncoder,
        remuxer=OggRemuxer(),
        event_callback=logging_listener(),
    )
    options = PipelineOptions(
        stream_serial=stream_serial,
        target_quality=target_quality,
        remux=remux,
        label=label,
        comments=dict(comments or {}),
    )
    return service.run(raw, options)


__all__ = [
    "PipelineStage",
    "PipelinePhase",
    "PipelineEvent",
    "PipelineOptions",
    "PipelineResult",
    "BatchItem",
    "PipelineService",
    "logging_listener",
    "compose_to_ogg",
]
