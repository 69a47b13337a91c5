"""
Application services - redukce kanálů, pitch analýza, pipeline.
"""

from .channel_reducer import reduce_to_mono, reduce
from .pitch_analysis import (
    sample_pitch,
    filter_candidates,
    trim_outliers,
    filter_and_trim,
    build_report,
    analyze_pitch,
    AnalysisService,
)
from .pipeline_service import (
    PipelineStage,
    PipelinePhase,
    PipelineEvent,
    PipelineOptions,
    PipelineResult,
    BatchItem,
    PipelineService,
    logging_listener,
    compose_to_ogg,
)

__all__ = [
    "reduce_to_mono",
    "reduce",
    "sample_pitch",
    "filter_candidates",
    "trim_outliers",
    "filter_and_trim",
    "build_report",
    "analyze_pitch",
    "AnalysisService",
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
