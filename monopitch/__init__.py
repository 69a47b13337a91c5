"""
monopitch - dekódování audia, převod na mono, pitch report a Ogg Vorbis výstup.

Použití:
    from monopitch import compose_to_ogg, analyze_pitch

    encoded = compose_to_ogg(raw, label="song.mp3", remux=True)
"""

from monopitch.config import __version__
from monopitch.application.services import (
    reduce_to_mono,
    reduce,
    sample_pitch,
    filter_and_trim,
    build_report,
    analyze_pitch,
    AnalysisService,
    PipelineOptions,
    PipelineResult,
    PipelineService,
    logging_listener,
    compose_to_ogg,
)
from monopitch.domain.errors import (
    MonopitchError,
    DecodeIntegrityError,
    UnsupportedChannelLayout,
    NoChannelsError,
    TooManyChannelsError,
    NoPitchCandidates,
    EncodingFailure,
    RemuxFailure,
)
from monopitch.domain.models import (
    SampleBuffer,
    PitchCandidate,
    FrequencyBounds,
    PitchReport,
    PitchAnalysis,
)

__all__ = [
    "__version__",
    "reduce_to_mono",
    "reduce",
    "sample_pitch",
    "filter_and_trim",
    "build_report",
    "analyze_pitch",
    "AnalysisService",
    "PipelineOptions",
    "PipelineResult",
    "PipelineService",
    "logging_listener",
    "compose_to_ogg",
    "MonopitchError",
    "DecodeIntegrityError",
    "UnsupportedChannelLayout",
    "NoChannelsError",
    "TooManyChannelsError",
    "NoPitchCandidates",
    "EncodingFailure",
    "RemuxFailure",
    "SampleBuffer",
    "PitchCandidate",
    "FrequencyBounds",
    "PitchReport",
    "PitchAnalysis",
]
