# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA decoder

Decodes a TGA byte stream into an ImageInfo and a row-major pixel
buffer with its origin at the upper left corner.

Pipeline: header -> pixel format -> color map -> pixel data -> flips.

Pixel data is either raw (width * height stored pixels) or run-length
encoded. RLE packets start with one byte: the high bit marks a run
packet (one pixel value repeated N times), otherwise the packet holds
N literal pixels; the low 7 bits hold N - 1. Packets may span rows.

Copyright 2025 DNAi inc.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from dntga.color_map import ColorMap, load_color_map
from dntga.exceptions import FileCannotReadError, OutOfMemoryError
from dntga.orientation import normalize_orientation
from dntga.pixel_format import ImageInfo, resolve_pixel_format
from dntga.tga_header import read_exact, read_header

logger = logging.getLogger(__name__)

RLE_RUN_FLAG = 0x80
RLE_COUNT_MASK = 0x7F

ByteSource = Union[bytes, bytearray, memoryview, BinaryIO]


class _PixelReader:
    """
    Reads stored pixels and writes canonical pixels into the output buffer.

    Color mapped pixels are 8-bit indices replaced by their color map
    entry; other pixels are copied as stored.
    """

    def __init__(self, stream: BinaryIO, stored_size: int, pixel_size: int, color_map: Optional[ColorMap]):
        self.stream = stream
        self.stored_size = stored_size
        self.pixel_size = pixel_size
        self.color_map = color_map

    def read_byte(self, what: str) -> int:
        return read_exact(self.stream, 1, what)[0]

    def read_pixel(self, buffer: bytearray, offset: int) -> None:
        """Read one stored pixel and write it at offset."""
        stored = read_exact(self.stream, self.stored_size, "pixel data")
        if self.color_map is not None:
            # Only 8-bit indices are supported
            self.color_map.resolve_into(buffer, offset, stored[0])
        else:
            buffer[offset:offset + self.pixel_size] = stored

    def read_pixels(self, buffer: bytearray, offset: int, count: int) -> int:
        """
        Read count consecutive stored pixels into buffer starting at offset.

        Returns:
            Offset just past the last written pixel
        """
        if self.color_map is None:
            size = count * self.pixel_size
            buffer[offset:offset + size] = read_exact(self.stream, size, "pixel data")
            return offset + size
        for _ in range(count):
            self.read_pixel(buffer, offset)
            offset += self.pixel_size
        return offset


def _decode_raw(reader: _PixelReader, buffer: bytearray, pixel_count: int) -> None:
    reader.read_pixels(buffer, 0, pixel_count)


def _decode_rle(reader: _PixelReader, buffer: bytearray, pixel_count: int) -> None:
    size = reader.pixel_size
    end = pixel_count * size
    offset = 0
    packets = 0

    while offset < end:
        packet = reader.read_byte("RLE packet header")
        # Never write past width * height pixels, even mid-packet
        count = min((packet & RLE_COUNT_MASK) + 1, (end - offset) // size)

        if packet & RLE_RUN_FLAG:
            reader.read_pixel(buffer, offset)
            value = bytes(buffer[offset:offset + size])
            offset += size
            if count > 1:
                buffer[offset:offset + (count - 1) * size] = value * (count - 1)
                offset += (count - 1) * size
        else:
            offset = reader.read_pixels(buffer, offset, count)
        packets += 1

    logger.debug("Decoded %d RLE packets", packets)


def allocate_buffer(size: int) -> bytearray:
    try:
        return bytearray(size)
    except MemoryError:
        raise OutOfMemoryError(f"Cannot allocate {size} bytes for pixel data")


def _as_stream(byte_source: ByteSource) -> BinaryIO:
    if isinstance(byte_source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(byte_source))
    if hasattr(byte_source, 'read'):
        return byte_source
    raise TypeError(f"Expected bytes or a readable binary stream, got {type(byte_source).__name__}")


def decode(byte_source: ByteSource) -> Tuple[ImageInfo, bytearray]:
    """
    Decode a TGA image.

    Args:
        byte_source: TGA file bytes, or a readable binary stream positioned
                     at the start of the file

    Returns:
        (ImageInfo, pixel buffer). The buffer holds width * height pixels of
        pixel_size(info.pixel_format) bytes, row-major, origin upper left.

    Raises:
        FileCannotReadError: If the stream is truncated or cannot be read
        UnsupportedColorMapTypeError: If the color map type is not 0 or 1
        NoDataError: If the image type is 0
        UnsupportedImageTypeError: If the image type is not recognized
        InvalidImageDimensionsError: If width or height is zero
        UnsupportedPixelFormatError: If the pixel format is not supported
        ColorMapIndexError: If a pixel's index is outside the color map
        OutOfMemoryError: If the pixel buffer cannot be allocated
    """
    stream = _as_stream(byte_source)

    header = read_header(stream)
    image_class = header.image_class
    pixel_format = resolve_pixel_format(header.image_type, header.pixel_depth, header.map_entry_size)
    info = ImageInfo(header.width, header.height, pixel_format)
    logger.debug(
        "Decoding %dx%d %s image (%s%s)",
        info.width, info.height, pixel_format.name,
        image_class.kind.value, ", RLE" if image_class.rle else "",
    )

    color_map = load_color_map(stream, header, image_class)

    buffer = allocate_buffer(info.data_size)
    reader = _PixelReader(stream, header.stored_pixel_size, info.pixel_size, color_map)
    if image_class.rle:
        _decode_rle(reader, buffer, info.pixel_count)
    else:
        _decode_raw(reader, buffer, info.pixel_count)

    normalize_orientation(buffer, info, header)
    return info, buffer


def decode_file(file_path: Union[str, Path]) -> Tuple[ImageInfo, bytearray]:
    """
    Decode a TGA file from disk.

    Raises:
        FileCannotReadError: If the file cannot be opened, plus everything decode() raises
    """
    try:
        f = open(file_path, 'rb')
    except OSError as e:
        raise FileCannotReadError(f"Cannot open TGA file {file_path}: {e}") from e
    with f:
        return decode(f)
