# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA header reader

This module reads and validates the fixed 18-byte TGA header and the
variable-length image ID field that follows it.

Header layout (all little-endian):
- ID length (1 byte)
- Color map type (1 byte)
- Image type (1 byte)
- Color map specification: first entry (2), length (2), entry size (1)
- Image specification: x origin (2), y origin (2), width (2), height (2),
  pixel depth (1), image descriptor (1)

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass, replace
from typing import BinaryIO

from dntga.exceptions import (
    FileCannotReadError,
    InvalidImageDimensionsError,
    NoDataError,
    UnsupportedColorMapTypeError,
)
from dntga.pixel_format import ImageClass, ImageType, bits_to_bytes, classify_image_type

logger = logging.getLogger(__name__)

HEADER_SIZE = 18
HEADER_STRUCT = struct.Struct('<BBBHHBHHHHBB')

# Image descriptor bits
DESCRIPTOR_ALPHA_MASK = 0x0F
DESCRIPTOR_RIGHT_TO_LEFT = 0x10
DESCRIPTOR_TOP_TO_BOTTOM = 0x20


def read_exact(stream: BinaryIO, size: int, what: str = "data") -> bytes:
    """
    Read exactly size bytes from stream.

    Args:
        stream: Readable binary stream
        size: Number of bytes to read
        what: Name of the block being read, for the error message

    Returns:
        The bytes read

    Raises:
        FileCannotReadError: If the stream ends early or the read fails
    """
    if size == 0:
        return b''
    try:
        data = stream.read(size)
    except OSError as e:
        raise FileCannotReadError(f"Failed to read TGA {what}: {e}") from e
    if data is None or len(data) != size:
        got = 0 if data is None else len(data)
        raise FileCannotReadError(f"Invalid TGA file: truncated {what} ({got} of {size} bytes)")
    return data


@dataclass(frozen=True)
class TGAHeader:
    """Decoded TGA header fields plus the raw image ID."""
    id_length: int
    color_map_type: int
    image_type: int
    map_first_entry: int
    map_length: int
    map_entry_size: int
    x_origin: int
    y_origin: int
    width: int
    height: int
    pixel_depth: int
    descriptor: int
    image_id: bytes = b''

    @classmethod
    def unpack(cls, data: bytes) -> 'TGAHeader':
        """Build a header from the 18 fixed bytes, without validation."""
        return cls(*HEADER_STRUCT.unpack(data))

    @property
    def image_class(self) -> ImageClass:
        return classify_image_type(self.image_type)

    @property
    def map_bytes_per_entry(self) -> int:
        return bits_to_bytes(self.map_entry_size)

    @property
    def color_map_size(self) -> int:
        """Size in bytes of the color map block."""
        return self.map_length * bits_to_bytes(self.map_entry_size)

    @property
    def stored_pixel_size(self) -> int:
        """Size in bytes of one pixel as stored in the file (index width for color mapped)."""
        return bits_to_bytes(self.pixel_depth)

    @property
    def alpha_bits(self) -> int:
        return self.descriptor & DESCRIPTOR_ALPHA_MASK

    @property
    def right_to_left(self) -> bool:
        return bool(self.descriptor & DESCRIPTOR_RIGHT_TO_LEFT)

    @property
    def top_to_bottom(self) -> bool:
        return bool(self.descriptor & DESCRIPTOR_TOP_TO_BOTTOM)

    def validate(self) -> None:
        """
        Check the header fields against the supported value sets.

        Raises:
            UnsupportedColorMapTypeError: If color map type is greater than 1
            NoDataError: If image type is 0
            UnsupportedImageTypeError: If image type is not recognized
            InvalidImageDimensionsError: If width or height is zero
        """
        if self.color_map_type > 1:
            raise UnsupportedColorMapTypeError(f"Unsupported TGA color map type: {self.color_map_type}")
        if self.image_type == ImageType.NO_DATA:
            raise NoDataError("TGA file contains no image data")
        # Raises UnsupportedImageTypeError
        classify_image_type(self.image_type)
        # 16-bit fields cannot exceed the maximum dimension
        if self.width == 0 or self.height == 0:
            raise InvalidImageDimensionsError(f"Invalid image dimensions: {self.width}x{self.height}")


def read_header(stream: BinaryIO) -> TGAHeader:
    """
    Read and validate the TGA header, then consume the image ID field.

    Args:
        stream: Readable binary stream positioned at the start of the file

    Returns:
        Validated header; image_id holds the ID field bytes

    Raises:
        FileCannotReadError: If the header or ID field is truncated
        UnsupportedColorMapTypeError, NoDataError, UnsupportedImageTypeError,
        InvalidImageDimensionsError: See TGAHeader.validate()
    """
    header = TGAHeader.unpack(read_exact(stream, HEADER_SIZE, "header"))
    logger.debug(
        "TGA header: type=%d cmap_type=%d size=%dx%d depth=%d descriptor=0x%02x",
        header.image_type, header.color_map_type, header.width, header.height,
        header.pixel_depth, header.descriptor,
    )
    header.validate()

    image_id = read_exact(stream, header.id_length, "image ID field")
    if image_id:
        header = replace(header, image_id=image_id)
    return header
