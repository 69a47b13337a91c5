"""
cli.py - monopitch - vstupní bod z příkazové řádky
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from monopitch.config import APP, AUDIO
from monopitch.application.services import (
    PipelineOptions,
    PipelineService,
    logging_listener,
)
from monopitch.domain.errors import (
    DecodeIntegrityError,
    EncodingFailure,
    NoPitchCandidates,
    UnsupportedChannelLayout,
)
from monopitch.domain.models import FrequencyBounds, PitchReport
from monopitch.infrastructure.audio import (
    CREPE_AVAILABLE,
    CrepeEstimator,
    OggRemuxer,
    SoundfileDecoder,
    VorbisEncoder,
    YinEstimator,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=APP.Info.NAME,
        description=APP.Info.DESCRIPTION,
    )

    p.add_argument("input", type=str, help="Vstupní audio soubor (wav/flac/ogg/mp3 ...)")
    p.add_argument("--output", "-o", type=str, default=None, help="Výstupní .ogg (default <input>.ogg)")

    # Analýza
    p.add_argument("--analyze", action="store_true", help="Spočítat a vypsat pitch report")
    p.add_argument("--min-freq", type=float, default=AUDIO.Analysis.DEFAULT_MIN_FREQUENCY,
                   help="Dolní mez frekvence v Hz (exkluzivní)")
    p.add_argument("--max-freq", type=float, default=AUDIO.Analysis.DEFAULT_MAX_FREQUENCY,
                   help="Horní mez frekvence v Hz (exkluzivní)")
    p.add_argument("--chunk-size", type=int, default=AUDIO.Analysis.CHUNK_SIZE,
                   help="Velikost analyzačního okna v samples")
    p.add_argument("--estimator", type=str, default="yin", choices=["yin", "crepe"],
                   help="Pitch estimátor (crepe vyžaduje extra 'ml')")

    # Enkódování
    p.add_argument("--quality", type=float, default=AUDIO.Encoding.DEFAULT_QUALITY,
                   help=f"Vorbis kvalita ({AUDIO.Encoding.MIN_QUALITY} až {AUDIO.Encoding.MAX_QUALITY})")
    p.add_argument("--serial", type=int, default=AUDIO.Encoding.DEFAULT_STREAM_SERIAL,
                   help="Ogg stream serial")
    p.add_argument("--comment", action="append", default=[], metavar="KEY=VALUE",
                   help="Vorbis komentář, lze opakovat (klíče: "
                        f"{', '.join(AUDIO.Encoding.COMMENT_KEYS)})")
    p.add_argument("--remux", action="store_true", help="Přebalit výstup do větších Ogg stránek")

    # Logging
    p.add_argument("--log-level", type=str, default=APP.Logging.DEFAULT_LEVEL,
                   choices=list(APP.Logging.LEVELS), help="Úroveň logování")
    p.add_argument("--log-file", nargs="?", const="", default=None, metavar="PATH",
                   help="Logovat i do souboru (bez cesty = platformní log adresář)")

    return p


def parse_comments(values: List[str]) -> Dict[str, str]:
    """KEY=VALUE -> dict; chybný formát vyhodí ValueError."""
    comments = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid comment '{item}', expected KEY=VALUE")
        comments[key.strip().lower()] = value
    return comments


def setup_logging(level: str, log_file: Optional[str]) -> None:
    """Nastaví root logger (jen CLI konfiguruje handlery)."""
    handlers = [logging.StreamHandler()]
    if log_file is not None:
        path = Path(log_file) if log_file else APP.Paths.get_log_file()
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level),
        format=APP.Logging.FORMAT,
        handlers=handlers,
        force=True,
    )


def format_report(report: PitchReport) -> str:
    return "\n".join([
        f"Mean pitch:    {report.mean:.2f} Hz",
        f"Median pitch:  {report.median:.2f} Hz",
        f"Lowest pitch:  {report.lowest:.2f} Hz",
        f"Highest pitch: {report.highest:.2f} Hz",
        f"Chunks used:   {report.chunks_used:.2f} %",
    ])


def main(argv: Optional[List[str]] = None) -> int:
    """Hlavní funkce CLI, vrací exit kód."""
    p = build_parser()
    args = p.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    input_path = Path(args.input).expanduser().resolve()
    output_path = (
        Path(args.output).expanduser().resolve()
        if args.output
        else APP.Paths.default_output_path(input_path)
    )

    try:
        comments = parse_comments(args.comment)
        bounds = FrequencyBounds(args.min_freq, args.max_freq)
        raw = input_path.read_bytes()
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return APP.ExitCodes.USAGE

    if args.estimator == "crepe":
        if not CREPE_AVAILABLE:
            logger.error("crepe is not installed, install the 'ml' extra or use --estimator yin")
            return APP.ExitCodes.USAGE
        estimator = CrepeEstimator()
    else:
        estimator = YinEstimator()

    service = PipelineService(
        decoder=SoundfileDecoder(),
        encoder_factory=VorbisEncoder,
        remuxer=OggRemuxer(),
        estimator=estimator,
        event_callback=logging_listener(logger),
    )
    options = PipelineOptions(
        analyze=args.analyze,
        bounds=bounds,
        chunk_size=args.chunk_size,
        stream_serial=args.serial,
        comments=comments,
        target_quality=args.quality,
        remux=args.remux,
        label=input_path.name,
    )

    try:
        result = service.run_with_report(raw, options)
    except DecodeIntegrityError as e:
        logger.error(f"Cannot decode {input_path.name}: {e}")
        return APP.ExitCodes.DECODE
    except UnsupportedChannelLayout as e:
        logger.error(f"Unsupported channel layout in {input_path.name}: {e}")
        return APP.ExitCodes.CHANNEL_LAYOUT
    except NoPitchCandidates as e:
        logger.error(f"Pitch analysis failed for {input_path.name}: {e}")
        return APP.ExitCodes.ANALYSIS
    except EncodingFailure as e:
        logger.error(f"Cannot encode {input_path.name}: {e}")
        return APP.ExitCodes.ENCODING
    except ValueError as e:
        logger.error(str(e))
        return APP.ExitCodes.USAGE

    try:
        output_path.write_bytes(result.encoded)
    except OSError as e:
        logger.error(f"Cannot write {output_path}: {e}")
        return APP.ExitCodes.USAGE

    logger.info(f"Wrote {len(result.encoded)} bytes to {output_path}")

    if result.analysis is not None:
        print(format_report(result.analysis.report))

    return APP.ExitCodes.OK


if __name__ == "__main__":
    sys.exit(main())
