"""
OggRemuxer - Přebalení Ogg Vorbis streamu do menšího počtu větších stránek.
"""
import logging
from typing import List

from mutagen.ogg import OggPage, error as OggError

from monopitch.config import AUDIO
from monopitch.domain.errors import RemuxFailure
from monopitch.domain.interfaces import IRemuxer
from .ogg_pages import (
    OggPacket,
    read_pages,
    read_packets,
    single_serial,
    write_pages,
)

logger = logging.getLogger(__name__)


class OggRemuxer(IRemuxer):
    """
    Přebalí pakety jednoho logického Ogg streamu bez překódování.

    Identifikační hlavička má vlastní stránku, zbylé hlavičky další
    stránky, audio pakety se slučují do stránek do velikosti
    target_page_size. Stránka končí jen na paketu se známou granule
    pozicí, takže granule zůstávají správné. Výjimkou jsou skupiny, které
    se nevejdou do jedné stránky - jejich vnitřní stránky mají granule -1.
    """

    def __init__(
        self,
        target_page_size: int = AUDIO.Remux.TARGET_PAGE_SIZE,
        header_packets: int = 3
    ):
        """
        Args:
            target_page_size: Cílová velikost audio stránky v bajtech
            header_packets: Počet hlavičkových paketů (Vorbis má 3)
        """
        self.target_page_size = target_page_size
        self.header_packets = header_packets

    def remux(self, encoded: bytes) -> bytes:
        """
        Přebalí stream.

        Args:
            encoded: Ogg stream

        Returns:
            Přebalený Ogg stream se stejným serialem a pakety

        Raises:
            RemuxFailure: poškozený vstup nebo víc logických streamů
        """
        try:
            pages = read_pages(encoded)
            serial = single_serial(pages)
            packets = read_packets(pages)
        except (OggError, ValueError) as e:
            logger.error(f"Cannot read Ogg stream for remux: {e}")
            raise RemuxFailure(AUDIO.Errors.REMUX_FAILED.format(error=e)) from e

        if len(packets) < self.header_packets:
            raise RemuxFailure(AUDIO.Errors.REMUX_FAILED.format(
                error=f"stream has {len(packets)} packets, "
                      f"expected at least {self.header_packets} headers"
            ))

        headers = packets[:self.header_packets]
        audio = packets[self.header_packets:]

        new_pages = [self._make_page([headers[0].data], 0)]
        new_pages.extend(self._pack_group([p.data for p in headers[1:]], 0))
        new_pages.extend(self._pack_audio(audio, final_granule=pages[-1].position))

        for sequence, page in enumerate(new_pages):
            page.sequence = sequence
            page.serial = serial
            page.first = sequence == 0
            page.last = sequence == len(new_pages) - 1

        try:
            remuxed = write_pages(new_pages)
        except ValueError as e:
            raise RemuxFailure(AUDIO.Errors.REMUX_FAILED.format(error=e)) from e

        logger.debug(
            f"Remuxed {len(pages)} -> {len(new_pages)} pages, "
            f"{len(encoded)} -> {len(remuxed)} bytes"
        )
        return remuxed

    def _pack_audio(self, packets: List[OggPacket], final_granule: int) -> List[OggPage]:
        """Sloučí skupiny paketů (končící známou granule) do stránek."""
        pages = []
        current: List[bytes] = []
        current_size = 0
        current_lacing = 0
        current_granule = -1

        for group, granule in self._granule_groups(packets, final_granule):
            group_size = sum(len(data) for data in group)
            group_lacing = sum(len(data) // 255 + 1 for data in group)

            if group_lacing > AUDIO.Remux.MAX_LACING_VALUES:
                if current:
                    pages.append(self._make_page(current, current_granule))
                    current, current_size, current_lacing = [], 0, 0
                pages.extend(self._pack_group(group, granule))
                continue

            fits = (
                current_size + group_size <= self.target_page_size
                and current_lacing + group_lacing <= AUDIO.Remux.MAX_LACING_VALUES
            )
            if current and not fits:
                pages.append(self._make_page(current, current_granule))
                current, current_size, current_lacing = [], 0, 0

            current.extend(group)
            current_size += group_size
            current_lacing += group_lacing
            current_granule = granule

        if current:
            pages.append(self._make_page(current, current_granule))

        return pages

    @staticmethod
    def _granule_groups(packets: List[OggPacket], final_granule: int):
        """Rozdělí pakety na skupiny ukončené paketem se známou granule."""
        group: List[bytes] = []
        for packet in packets:
            group.append(packet.data)
            if packet.granule != -1:
                yield group, packet.granule
                group = []
        if group:
            yield group, final_granule

    def _pack_group(self, group: List[bytes], granule: int) -> List[OggPage]:
        """Rozloží skupinu přes víc stránek, granule dostane jen poslední."""
        if sum(len(data) // 255 + 1 for data in group) <= AUDIO.Remux.MAX_LACING_VALUES:
            return [self._make_page(group, granule)]

        pages = OggPage.from_packets(group, default_size=self.target_page_size, wiggle_room=0)
        for page in pages:
            page.position = -1
        pages[-1].position = granule
        return pages

    @staticmethod
    def _make_page(packets: List[bytes], position: int) -> OggPage:
        page = OggPage()
        page.packets = list(packets)
        page.position = position
        return page
