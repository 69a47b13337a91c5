"""
config - Centrální konfigurace pro monopitch

Použití:
    from monopitch.config import AUDIO, APP

    # Použití konstant:
    chunk_size = AUDIO.Analysis.CHUNK_SIZE
    for block in chunks(samples, AUDIO.Encoding.FRAME_SIZE):
        ...
"""

# Import všech konfiguračních tříd pro snadný přístup
from .audio_config import (
    Analysis,
    Encoding,
    Remux,
    Errors,
)

from .app_config import (
    AppInfo,
    LoggingConfig,
    Paths,
    ExitCodes,
)


# Vytvoř namespace objekty pro kategorické použití
class AUDIO:
    """Audio konfigurace - analýza, enkódování, remux, chybové zprávy."""
    Analysis = Analysis
    Encoding = Encoding
    Remux = Remux
    Errors = Errors


class APP:
    """Aplikační konfigurace - metadata, logging, cesty."""
    Info = AppInfo
    Logging = LoggingConfig
    Paths = Paths
    ExitCodes = ExitCodes


# Version info
__version__ = AppInfo.VERSION
__all__ = [
    'AUDIO',
    'APP',
    # Individual classes (pro direct import)
    'Analysis',
    'Encoding',
    'Remux',
    'Errors',
    'AppInfo',
    'LoggingConfig',
    'Paths',
    'ExitCodes',
]
