"""
Doménové výjimky - taxonomie chyb pipeline.

Každá fáze má vlastní typ, aby volající rozlišil problém dekódování,
analýzy a enkódování.
"""

from typing import Optional

from monopitch.config import AUDIO


class MonopitchError(Exception):
    """Základní výjimka pro všechny chyby pipeline."""


class DecodeIntegrityError(MonopitchError):
    """Dekodér selhal nebo vrátil nulový sample rate / počet kanálů."""

    def __init__(
        self,
        message: str,
        sample_rate: Optional[int] = None,
        channels: Optional[int] = None
    ):
        super().__init__(message)
        self.sample_rate = sample_rate
        self.channels = channels

    @classmethod
    def bad_metadata(cls, sample_rate: int, channels: int) -> "DecodeIntegrityError":
        return cls(
            AUDIO.Errors.DECODE_BAD_METADATA.format(
                sample_rate=sample_rate, channels=channels
            ),
            sample_rate=sample_rate,
            channels=channels,
        )


class UnsupportedChannelLayout(MonopitchError):
    """Počet kanálů mimo {1, 2}."""

    def __init__(self, message: str, channel_count: int):
        super().__init__(message)
        self.channel_count = channel_count


class NoChannelsError(UnsupportedChannelLayout):
    """Audio nemá žádný kanál."""

    def __init__(self, channel_count: int = 0):
        super().__init__(AUDIO.Errors.NO_CHANNELS, channel_count)


class TooManyChannelsError(UnsupportedChannelLayout):
    """Audio má víc než 2 kanály."""

    def __init__(self, channel_count: int):
        super().__init__(
            AUDIO.Errors.TOO_MANY_CHANNELS.format(channels=channel_count),
            channel_count
        )


class NoPitchCandidates(MonopitchError):
    """Po filtraci nezůstala žádná použitelná frekvence."""


class EncodingFailure(MonopitchError):
    """Enkodér odmítl konfiguraci nebo selhal zápis bloku."""


class RemuxFailure(EncodingFailure):
    """Přebalení Ogg streamu selhalo."""


__all__ = [
    "MonopitchError",
    "DecodeIntegrityError",
    "UnsupportedChannelLayout",
    "NoChannelsError",
    "TooManyChannelsError",
    "NoPitchCandidates",
    "EncodingFailure",
    "RemuxFailure",
]
