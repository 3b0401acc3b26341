# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""Shared fixtures: build TGA files in memory."""

import struct

import pytest


def build_tga(
    width,
    height,
    image_type,
    pixel_depth,
    data=b'',
    descriptor=0x20,
    color_map_type=0,
    map_first_entry=0,
    map_length=0,
    map_entry_size=0,
    color_map=b'',
    image_id=b'',
    x_origin=0,
    y_origin=0,
):
    header = struct.pack(
        '<BBBHHBHHHHBB',
        len(image_id),
        color_map_type,
        image_type,
        map_first_entry,
        map_length,
        map_entry_size,
        x_origin,
        y_origin,
        width,
        height,
        pixel_depth,
        descriptor,
    )
    return header + image_id + color_map + data


@pytest.fixture
def make_tga():
    return build_tga


@pytest.fixture
def rgb24_pixels():
    """3x2 RGB24 image, rows top to bottom, six distinct pixels."""
    return bytes([
        1, 2, 3, 4, 5, 6, 7, 8, 9,
        10, 11, 12, 13, 14, 15, 16, 17, 18,
    ])


@pytest.fixture
def palette24():
    """Four 24-bit color map entries."""
    return bytes([
        0x00, 0x00, 0xFF,
        0x00, 0xFF, 0x00,
        0xFF, 0x00, 0x00,
        0x80, 0x80, 0x80,
    ])
