"""
Unit testy pro Ogg stránky a OggRemuxer.
"""

import io

import pytest
import soundfile as sf

from monopitch.domain.errors import RemuxFailure
from monopitch.infrastructure.audio import OggRemuxer
from monopitch.infrastructure.audio.ogg_pages import (
    read_pages,
    read_packets,
    restamp_serial,
    single_serial,
)


@pytest.mark.unit
class TestOggPages:
    """Testy pomocných funkcí nad mutagen OggPage."""

    def test_read_packets_has_vorbis_headers(self, ogg_bytes):
        packets = read_packets(read_pages(ogg_bytes))

        assert packets[0].data[1:7] == b"vorbis"
        assert packets[0].data[0] == 1
        assert packets[1].data[0] == 3
        assert packets[2].data[0] == 5

    def test_restamp_serial(self, ogg_bytes):
        restamped = restamp_serial(ogg_bytes, 99)
        pages = read_pages(restamped)

        assert single_serial(pages) == 99
        assert [p.data for p in read_packets(pages)] == \
            [p.data for p in read_packets(read_pages(ogg_bytes))]

    def test_restamp_serial_masks_to_32_bits(self, ogg_bytes):
        restamped = restamp_serial(ogg_bytes, 2 ** 32 + 5)
        assert single_serial(read_pages(restamped)) == 5

    def test_restamp_empty(self):
        assert restamp_serial(b"", 3) == b""

    def test_single_serial_rejects_chained_streams(self, ogg_bytes):
        chained = ogg_bytes + restamp_serial(ogg_bytes, 8)
        with pytest.raises(ValueError):
            single_serial(read_pages(chained))


@pytest.mark.unit
class TestOggRemuxer:
    """Testy přebalení streamu."""

    def test_packets_preserved(self, ogg_bytes):
        remuxed = OggRemuxer().remux(ogg_bytes)

        before = [p.data for p in read_packets(read_pages(ogg_bytes))]
        repacked = [p.data for p in read_packets(read_pages(remuxed))]
        assert repacked == before

    def test_fewer_pages_same_serial(self, ogg_bytes):
        remuxed = OggRemuxer().remux(ogg_bytes)

        before = read_pages(ogg_bytes)
        after = read_pages(remuxed)
        assert len(after) <= len(before)
        assert single_serial(after) == 7
        assert after[0].first and after[-1].last
        assert [page.sequence for page in after] == list(range(len(after)))

    def test_identification_header_on_own_page(self, ogg_bytes):
        first = read_pages(OggRemuxer().remux(ogg_bytes))[0]
        assert len(first.packets) == 1
        assert first.position == 0

    def test_final_granule_kept(self, ogg_bytes):
        before = read_pages(ogg_bytes)
        after = read_pages(OggRemuxer().remux(ogg_bytes))
        assert after[-1].position == before[-1].position

    def test_small_pages(self, ogg_bytes):
        """I malá cílová velikost dá platný stream."""
        remuxed = OggRemuxer(target_page_size=512).remux(ogg_bytes)
        assert [p.data for p in read_packets(read_pages(remuxed))] == \
            [p.data for p in read_packets(read_pages(ogg_bytes))]

    def test_remuxed_stream_decodes(self, ogg_bytes):
        remuxed = OggRemuxer().remux(ogg_bytes)
        data, sample_rate = sf.read(io.BytesIO(remuxed), dtype='float32')
        assert sample_rate == 44100
        assert len(data) > 0

    def test_garbage_raises(self):
        with pytest.raises(RemuxFailure):
            OggRemuxer().remux(b"OggS" + b"\x00" * 100)

    def test_empty_raises(self):
        with pytest.raises(RemuxFailure):
            OggRemuxer().remux(b"")

    def test_chained_streams_raise(self, ogg_bytes):
        with pytest.raises(RemuxFailure):
            OggRemuxer().remux(ogg_bytes + restamp_serial(ogg_bytes, 8))
