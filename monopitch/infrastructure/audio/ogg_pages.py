"""
Pomocné funkce pro práci s Ogg stránkami (nad mutagen.ogg.OggPage).
"""
import io
import logging
from dataclasses import dataclass
from typing import Iterable, List

from mutagen.ogg import OggPage

logger = logging.getLogger(__name__)

# Ogg serial je unsigned 32-bit
SERIAL_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class OggPacket:
    """Paket logického streamu s granule pozicí (-1 pokud není známá)."""

    data: bytes
    granule: int = -1

    @property
    def lacing_size(self) -> int:
        """Počet lacing hodnot, které paket zabere."""
        return len(self.data) // 255 + 1


def read_pages(data: bytes) -> List[OggPage]:
    """
    Načte všechny Ogg stránky z bytů.

    Raises:
        mutagen.ogg.error: poškozená stránka
    """
    fileobj = io.BytesIO(data)
    pages = []
    while True:
        try:
            pages.append(OggPage(fileobj))
        except EOFError:
            break
    return pages


def write_pages(pages: Iterable[OggPage]) -> bytes:
    """Serializuje stránky (CRC se počítá při zápisu)."""
    return b"".join(page.write() for page in pages)


def read_packets(pages: Iterable[OggPage]) -> List[OggPacket]:
    """
    Složí pakety z posloupnosti stránek jednoho logického streamu.

    Granule pozici dostane jen poslední paket dokončený na dané stránce,
    ostatní pakety mají granule -1.

    Raises:
        ValueError: nekonzistentní pokračování paketů
    """
    packets = []
    partial = None

    for page in pages:
        chunks = list(page.packets)
        if page.continued:
            if partial is None or not chunks:
                raise ValueError(
                    f"Page {page.sequence} continues a packet that never started"
                )
            chunks[0] = partial + chunks[0]
            partial = None
        elif partial is not None:
            raise ValueError(f"Page {page.sequence} drops an unfinished packet")

        if not page.complete:
            partial = chunks.pop()

        for index, chunk in enumerate(chunks):
            granule = page.position if index == len(chunks) - 1 else -1
            packets.append(OggPacket(chunk, granule))

    if partial is not None:
        raise ValueError("Stream ends inside an unfinished packet")

    return packets


def single_serial(pages: List[OggPage]) -> int:
    """
    Vrátí serial jediného logického streamu.

    Raises:
        ValueError: prázdný vstup nebo víc logických streamů
    """
    serials = {page.serial for page in pages}
    if len(serials) != 1:
        raise ValueError(f"Expected one logical stream, found {len(serials)}")
    return serials.pop()


def restamp_serial(data: bytes, serial: int) -> bytes:
    """
    Přepíše serial všech stránek jediného logického streamu.

    Raises:
        mutagen.ogg.error, ValueError: poškozený nebo vícestreamový vstup
    """
    pages = read_pages(data)
    if not pages:
        return data
    single_serial(pages)

    serial &= SERIAL_MASK
    for page in pages:
        page.serial = serial

    logger.debug(f"Restamped {len(pages)} Ogg pages with serial {serial}")
    return write_pages(pages)
