"""
audio_config.py - Konstanty pro analýzu, enkódování a remux
"""

# =============================================================================
# PITCH ANALÝZA
# =============================================================================

class Analysis:
    """Parametry pro pitch analýzu."""

    # Velikost analyzačního okna (samples)
    CHUNK_SIZE = 1024

    # Ořez extrémů - 10% zdola a 10% shora
    TRIM_RATIO = 0.10

    # Výchozí rozsah frekvencí (lidský hlas)
    DEFAULT_MIN_FREQUENCY = 50.0  # Hz
    DEFAULT_MAX_FREQUENCY = 600.0  # Hz

    # Prahy estimátoru jsou vypnuté, filtrace probíhá až v filter_and_trim
    POWER_THRESHOLD = 0.0
    CLARITY_THRESHOLD = 0.0

    # YIN
    YIN_THRESHOLD = 0.1  # Absolutní práh pro CMNDF
    YIN_MIN_WINDOW = 4  # Kratší okna se neanalyzují

    # CREPE
    CREPE_MODEL_CAPACITY = 'tiny'  # tiny, small, medium, large, full
    CREPE_STEP_SIZE = 10  # ms

    # Orientační prahy pro chunks_used (při 50-600 Hz)
    CHUNKS_USED_INSTRUMENTAL = 1.0  # %
    CHUNKS_USED_SPEECH = 10.0  # %


# =============================================================================
# ENKÓDOVÁNÍ
# =============================================================================

class Encoding:
    """Parametry pro Ogg Vorbis enkodér."""

    # Enkodér dostává bloky pevné délky
    FRAME_SIZE = 512  # samples na jedno volání encode_block

    # Výstup je vždy mono
    OUTPUT_CHANNELS = 1

    # Cílová kvalita (nižší = větší komprese)
    MIN_QUALITY = -0.2
    MAX_QUALITY = 2.0
    DEFAULT_QUALITY = -0.15

    DEFAULT_STREAM_SERIAL = 0

    # soundfile formát
    FORMAT = 'OGG'
    SUBTYPE = 'VORBIS'
    FILE_EXTENSION = '.ogg'

    # Klíče komentářů, které umí libsndfile zapsat
    COMMENT_KEYS = (
        'title', 'copyright', 'software', 'artist', 'comment',
        'date', 'album', 'license', 'tracknumber', 'genre',
    )


# =============================================================================
# REMUX
# =============================================================================

class Remux:
    """Parametry pro přebalení Ogg streamu."""

    # Cílová velikost audio stránky v bajtech
    TARGET_PAGE_SIZE = 16384

    # Limit Ogg formátu
    MAX_LACING_VALUES = 255


# =============================================================================
# CHYBOVÉ ZPRÁVY
# =============================================================================

class Errors:
    """Šablony chybových zpráv."""

    DECODE_FAILED = "Decoding failed: {error}"
    DECODE_BAD_METADATA = (
        "Decoder reported sample_rate={sample_rate}, channels={channels}; "
        "the source is most likely broken"
    )
    NO_CHANNELS = "Audio has no channels"
    TOO_MANY_CHANNELS = "More than 2 channels are not supported (got {channels})"
    NO_PITCH_CANDIDATES = (
        "No pitch candidates between {min_frequency} Hz and {max_frequency} Hz"
    )
    EMPTY_REPORT = "Cannot build a pitch report from an empty frequency list"
    ENCODER_CONFIG = "Encoder rejected configuration: {error}"
    ENCODER_WRITE = "Encoder failed to write block: {error}"
    ENCODER_FINISH = "Encoder failed to finish stream: {error}"
    REMUX_FAILED = "Remux failed: {error}"
