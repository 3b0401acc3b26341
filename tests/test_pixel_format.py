# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

import pytest

from dntga.exceptions import (
    InvalidImageDimensionsError,
    UnsupportedImageTypeError,
    UnsupportedPixelFormatError,
)
from dntga.pixel_format import (
    ImageInfo,
    ImageKind,
    PixelFormat,
    bits_to_bytes,
    classify_image_type,
    pixel_size,
    resolve_pixel_format,
)


@pytest.mark.parametrize("pixel_format,expected", [
    (PixelFormat.BW8, 1),
    (PixelFormat.BW16, 2),
    (PixelFormat.RGB555, 2),
    (PixelFormat.RGB24, 3),
    (PixelFormat.ARGB32, 4),
    (3, 3),
])
def test_pixel_size(pixel_format, expected):
    assert pixel_size(pixel_format) == expected


@pytest.mark.parametrize("value", [5, 100, -1])
def test_pixel_size_rejects_unknown_format(value):
    with pytest.raises(UnsupportedPixelFormatError):
        pixel_size(value)


@pytest.mark.parametrize("bits,expected", [(8, 1), (9, 2), (15, 2), (16, 2), (24, 3), (32, 4)])
def test_bits_to_bytes(bits, expected):
    assert bits_to_bytes(bits) == expected


@pytest.mark.parametrize("image_type,pixel_depth,map_entry_size,expected", [
    (1, 8, 15, PixelFormat.RGB555),
    (1, 8, 16, PixelFormat.RGB555),
    (1, 8, 24, PixelFormat.RGB24),
    (1, 8, 32, PixelFormat.ARGB32),
    (2, 16, 0, PixelFormat.RGB555),
    (2, 24, 0, PixelFormat.RGB24),
    (2, 32, 0, PixelFormat.ARGB32),
    (3, 8, 0, PixelFormat.BW8),
    (3, 16, 0, PixelFormat.BW16),
    (9, 8, 24, PixelFormat.RGB24),
    (10, 32, 0, PixelFormat.ARGB32),
    (11, 16, 0, PixelFormat.BW16),
])
def test_resolve_pixel_format(image_type, pixel_depth, map_entry_size, expected):
    assert resolve_pixel_format(image_type, pixel_depth, map_entry_size) is expected


@pytest.mark.parametrize("image_type,pixel_depth,map_entry_size", [
    (1, 16, 24),  # only 8-bit indices
    (1, 8, 8),
    (9, 8, 12),
    (2, 8, 0),
    (2, 15, 0),
    (10, 64, 0),
    (3, 24, 0),
    (11, 32, 0),
])
def test_resolve_pixel_format_rejects(image_type, pixel_depth, map_entry_size):
    with pytest.raises(UnsupportedPixelFormatError):
        resolve_pixel_format(image_type, pixel_depth, map_entry_size)


def test_map_entry_size_ignored_for_true_color():
    assert resolve_pixel_format(2, 24, 16) is PixelFormat.RGB24


def test_classify_image_type():
    assert classify_image_type(1).kind is ImageKind.COLOR_MAPPED
    assert classify_image_type(1).rle is False
    assert classify_image_type(9).is_color_mapped
    assert classify_image_type(9).rle is True
    assert classify_image_type(10).kind is ImageKind.TRUE_COLOR
    assert classify_image_type(11).kind is ImageKind.GRAYSCALE


@pytest.mark.parametrize("image_type", [0, 4, 8, 12, 32, 255])
def test_classify_rejects_unknown_types(image_type):
    with pytest.raises(UnsupportedImageTypeError):
        classify_image_type(image_type)


def test_image_info_sizes():
    info = ImageInfo(3, 5, PixelFormat.ARGB32)
    assert info.pixel_size == 4
    assert info.pixel_count == 15
    assert info.data_size == 60


def test_image_info_coerces_format():
    assert ImageInfo(1, 1, 0).pixel_format is PixelFormat.BW8


@pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (-1, 4), (65536, 4), (4, 65536)])
def test_image_info_rejects_dimensions(width, height):
    with pytest.raises(InvalidImageDimensionsError):
        ImageInfo(width, height, PixelFormat.RGB24)
