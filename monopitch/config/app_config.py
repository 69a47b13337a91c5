"""
app_config.py - Obecné aplikační konstanty (logging, cesty, exit kódy)
"""

from pathlib import Path

from platformdirs import user_log_dir

from .audio_config import Encoding

# =============================================================================
# APLIKAČNÍ METADATA
# =============================================================================

class AppInfo:
    """Informace o aplikaci."""

    NAME = "monopitch"
    VERSION = "1.0.0"
    AUTHOR = "monopitch"
    DESCRIPTION = (
        "Decode audio, down-mix to mono, report pitch statistics "
        "and encode to Ogg Vorbis"
    )


# =============================================================================
# LOGGING
# =============================================================================

class LoggingConfig:
    """Logging konfigurace."""

    # Log level (použito v cli.py)
    DEFAULT_LEVEL = "INFO"
    LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

    # Log format
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # Log file (pokud je potřeba)
    LOG_FILE = "monopitch.log"


# =============================================================================
# PATHS
# =============================================================================

class Paths:
    """Cesty v aplikaci."""

    @staticmethod
    def get_log_dir() -> Path:
        """Vrátí platformně specifický adresář pro logy (vytvoří ho)."""
        return Path(user_log_dir(
            appname=AppInfo.NAME,
            appauthor=AppInfo.AUTHOR,
            ensure_exists=True
        ))

    @staticmethod
    def get_log_file() -> Path:
        """Vrátí cestu k log souboru."""
        return Paths.get_log_dir() / LoggingConfig.LOG_FILE

    @staticmethod
    def default_output_path(input_path: Path) -> Path:
        """Výstup vedle vstupu: song.mp3 -> song.mp3.ogg"""
        return input_path.with_name(input_path.name + Encoding.FILE_EXTENSION)


# =============================================================================
# EXIT KÓDY
# =============================================================================

class ExitCodes:
    """Návratové kódy CLI."""

    OK = 0
    USAGE = 1
    DECODE = 2
    CHANNEL_LAYOUT = 3
    ANALYSIS = 4
    ENCODING = 5
