# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Pixel buffer flips

The in-memory buffer always has its origin at the upper left corner.
TGA files may store rows bottom-to-top and columns right-to-left; the
decoder uses these flips to normalize them.

Copyright 2025 DNAi inc.
"""

from dntga.pixel_format import ImageInfo
from dntga.tga_header import TGAHeader


def flip_horizontal(buffer: bytearray, info: ImageInfo) -> None:
    """Mirror every row in place (column i <-> column width - 1 - i)."""
    if not buffer:
        return
    size = info.pixel_size
    stride = info.width * size
    for row in range(0, info.height * stride, stride):
        for i in range(info.width // 2):
            left = row + i * size
            right = row + (info.width - 1 - i) * size
            buffer[left:left + size], buffer[right:right + size] = (
                buffer[right:right + size], buffer[left:left + size]
            )


def flip_vertical(buffer: bytearray, info: ImageInfo) -> None:
    """Mirror the buffer top to bottom in place (row j <-> row height - 1 - j)."""
    if not buffer:
        return
    stride = info.width * info.pixel_size
    for j in range(info.height // 2):
        top = j * stride
        bottom = (info.height - 1 - j) * stride
        buffer[top:top + stride], buffer[bottom:bottom + stride] = (
            buffer[bottom:bottom + stride], buffer[top:top + stride]
        )


def normalize_orientation(buffer: bytearray, info: ImageInfo, header: TGAHeader) -> None:
    """Flip a freshly decoded buffer so its origin is the upper left corner."""
    if header.right_to_left:
        flip_horizontal(buffer, info)
    if not header.top_to_bottom:
        flip_vertical(buffer, info)
