# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

import io

import pytest

from dntga.exceptions import (
    ColorMapIndexError,
    FileCannotReadError,
    UnsupportedPixelFormatError,
)
from dntga.pixel_format import PixelFormat
from dntga.tga_decoder import decode, decode_file


def rows(pixels, width, size):
    stride = width * size
    return [pixels[i:i + stride] for i in range(0, len(pixels), stride)]


class TestRawDecode:
    def test_top_left_origin_is_unchanged(self, make_tga, rgb24_pixels):
        info, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels, descriptor=0x20))
        assert (info.width, info.height, info.pixel_format) == (3, 2, PixelFormat.RGB24)
        assert isinstance(pixels, bytearray)
        assert pixels == rgb24_pixels

    def test_bottom_left_origin_flips_rows(self, make_tga, rgb24_pixels):
        _, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels, descriptor=0x00))
        top, bottom = rows(rgb24_pixels, 3, 3)
        assert pixels == bottom + top

    def test_top_right_origin_flips_columns(self, make_tga, rgb24_pixels):
        _, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels, descriptor=0x30))
        assert pixels == bytes([7, 8, 9, 4, 5, 6, 1, 2, 3, 16, 17, 18, 13, 14, 15, 10, 11, 12])

    def test_bottom_right_origin_flips_both(self, make_tga, rgb24_pixels):
        _, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels, descriptor=0x10))
        assert pixels == bytes([16, 17, 18, 13, 14, 15, 10, 11, 12, 7, 8, 9, 4, 5, 6, 1, 2, 3])

    def test_argb32(self, make_tga):
        data = bytes(range(16))
        info, pixels = decode(make_tga(2, 2, 2, 32, data, descriptor=0x28))
        assert info.pixel_format is PixelFormat.ARGB32
        assert pixels == data

    def test_rgb555(self, make_tga):
        info, pixels = decode(make_tga(2, 1, 2, 16, b'\x1f\x00\xe0\x7f'))
        assert info.pixel_format is PixelFormat.RGB555
        assert pixels == b'\x1f\x00\xe0\x7f'

    @pytest.mark.parametrize("depth,pixel_format", [(8, PixelFormat.BW8), (16, PixelFormat.BW16)])
    def test_grayscale(self, make_tga, depth, pixel_format):
        data = bytes(range(4 * depth // 8))
        info, pixels = decode(make_tga(2, 2, 3, depth, data))
        assert info.pixel_format is pixel_format
        assert pixels == data

    def test_color_mapped(self, make_tga, palette24):
        data = make_tga(
            2, 2, 1, 8, bytes([3, 2, 1, 0]),
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        )
        info, pixels = decode(data)
        assert info.pixel_format is PixelFormat.RGB24
        assert len(pixels) == 12
        assert pixels == palette24[9:12] + palette24[6:9] + palette24[3:6] + palette24[0:3]

    def test_color_mapped_with_first_entry_offset(self, make_tga, palette24):
        data = make_tga(
            2, 1, 1, 8, bytes([10, 13]),
            color_map_type=1, map_first_entry=10, map_length=4, map_entry_size=24, color_map=palette24,
        )
        _, pixels = decode(data)
        assert pixels == palette24[0:3] + palette24[9:12]

    def test_color_map_index_one_past_end(self, make_tga, palette24):
        data = make_tga(
            1, 1, 1, 8, bytes([14]),
            color_map_type=1, map_first_entry=10, map_length=4, map_entry_size=24, color_map=palette24,
        )
        with pytest.raises(ColorMapIndexError):
            decode(data)

    def test_color_map_index_below_first_entry(self, make_tga, palette24):
        data = make_tga(
            1, 1, 1, 8, bytes([9]),
            color_map_type=1, map_first_entry=10, map_length=4, map_entry_size=24, color_map=palette24,
        )
        with pytest.raises(ColorMapIndexError):
            decode(data)

    def test_color_mapped_16_bit_entries(self, make_tga):
        data = make_tga(
            2, 1, 1, 8, bytes([1, 0]),
            color_map_type=1, map_length=2, map_entry_size=16, color_map=b'\x1f\x00\xe0\x03',
        )
        info, pixels = decode(data)
        assert info.pixel_format is PixelFormat.RGB555
        assert pixels == b'\xe0\x03\x1f\x00'

    def test_unused_color_map_skipped(self, make_tga, rgb24_pixels, palette24):
        data = make_tga(
            3, 2, 2, 24, rgb24_pixels,
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        )
        _, pixels = decode(data)
        assert pixels == rgb24_pixels

    def test_image_id_skipped(self, make_tga, rgb24_pixels):
        _, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels, image_id=b'made by hand'))
        assert pixels == rgb24_pixels

    def test_trailing_bytes_ignored(self, make_tga, rgb24_pixels):
        _, pixels = decode(make_tga(3, 2, 2, 24, rgb24_pixels + b'TRUEVISION-XFILE.\x00'))
        assert pixels == rgb24_pixels

    def test_unsupported_pixel_format(self, make_tga):
        with pytest.raises(UnsupportedPixelFormatError):
            decode(make_tga(1, 1, 2, 15, b'\x00\x00'))

    def test_decode_from_stream(self, make_tga, rgb24_pixels):
        stream = io.BytesIO(make_tga(3, 2, 2, 24, rgb24_pixels) + b'rest')
        _, pixels = decode(stream)
        assert pixels == rgb24_pixels
        assert stream.read() == b'rest'

    def test_decode_rejects_non_stream(self):
        with pytest.raises(TypeError):
            decode(12345)


class TestRLEDecode:
    def test_mixed_packets_span_rows(self, make_tga):
        # 3x2 RGB24: run of 4 covers row 0 and the first pixel of row 1
        a, b, c = b'\x01\x02\x03', b'\x04\x05\x06', b'\x07\x08\x09'
        rle = bytes([0x83]) + a + bytes([0x01]) + b + c
        raw = a * 4 + b + c
        _, expected = decode(make_tga(3, 2, 2, 24, raw))
        info, pixels = decode(make_tga(3, 2, 10, 24, rle))
        assert info.pixel_format is PixelFormat.RGB24
        assert pixels == expected

    def test_raw_packet_spans_rows(self, make_tga, rgb24_pixels):
        rle = bytes([0x03]) + rgb24_pixels[:12] + bytes([0x81]) + rgb24_pixels[12:15]
        raw = rgb24_pixels[:12] + rgb24_pixels[12:15] * 2
        _, pixels = decode(make_tga(3, 2, 10, 24, rle))
        _, expected = decode(make_tga(3, 2, 2, 24, raw))
        assert pixels == expected

    def test_bottom_left_rle(self, make_tga):
        rle = bytes([0x82]) + b'\x11\x11\x11' + bytes([0x82]) + b'\x22\x22\x22'
        _, pixels = decode(make_tga(3, 2, 10, 24, rle, descriptor=0x00))
        assert pixels == b'\x22' * 9 + b'\x11' * 9

    def test_packet_longer_than_image_stops_at_pixel_count(self, make_tga):
        rle = bytes([0xFF]) + b'\xab'
        info, pixels = decode(make_tga(2, 2, 11, 8, rle))
        assert info.pixel_format is PixelFormat.BW8
        assert pixels == b'\xab' * 4

    def test_raw_packet_longer_than_image(self, make_tga):
        rle = bytes([0x05]) + b'\x01\x02\x03\x04'
        _, pixels = decode(make_tga(2, 2, 11, 8, rle))
        assert pixels == b'\x01\x02\x03\x04'

    def test_max_length_packets(self, make_tga):
        rle = bytes([0xFF]) + b'\x00\x80' + bytes([0x7F]) + bytes(range(128)) * 2
        info, pixels = decode(make_tga(16, 16, 11, 16, rle))
        assert info.pixel_format is PixelFormat.BW16
        assert pixels == b'\x00\x80' * 128 + bytes(range(128)) * 2

    def test_rle_color_mapped(self, make_tga, palette24):
        rle = bytes([0x82, 1, 0x00, 3])
        data = make_tga(
            2, 2, 9, 8, rle,
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        )
        _, pixels = decode(data)
        assert pixels == palette24[3:6] * 3 + palette24[9:12]

    def test_rle_color_map_index_failure(self, make_tga, palette24):
        rle = bytes([0x83, 4])
        data = make_tga(
            2, 2, 9, 8, rle,
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        )
        with pytest.raises(ColorMapIndexError):
            decode(data)

    def test_missing_packets(self, make_tga):
        with pytest.raises(FileCannotReadError):
            decode(make_tga(2, 2, 11, 8, bytes([0x81]) + b'\x01'))


def _sample_files(make_tga, rgb24_pixels, palette24):
    return [
        make_tga(3, 2, 2, 24, rgb24_pixels, image_id=b'abc'),
        make_tga(
            2, 2, 1, 8, bytes([0, 1, 2, 3]),
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        ),
        make_tga(3, 2, 10, 24, bytes([0x82]) + b'\x01\x02\x03' + bytes([0x02]) + rgb24_pixels[:9]),
        make_tga(
            2, 2, 9, 8, bytes([0x81, 1, 0x01, 2, 3]),
            color_map_type=1, map_length=4, map_entry_size=24, color_map=palette24,
        ),
    ]


def test_truncation_at_every_offset(make_tga, rgb24_pixels, palette24):
    for data in _sample_files(make_tga, rgb24_pixels, palette24):
        decode(data)
        for size in range(len(data)):
            with pytest.raises(FileCannotReadError):
                decode(data[:size])


def test_decode_file(tmp_path, make_tga, rgb24_pixels):
    path = tmp_path / "image.tga"
    path.write_bytes(make_tga(3, 2, 2, 24, rgb24_pixels))
    info, pixels = decode_file(path)
    assert info.width == 3
    assert pixels == rgb24_pixels


def test_decode_missing_file(tmp_path):
    with pytest.raises(FileCannotReadError):
        decode_file(tmp_path / "missing.tga")
