# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA writer

Encodes a pixel buffer as an uncompressed TGA: an 18-byte header
followed by the raw pixels, rows stored top-to-bottom and left-to-right.
Grayscale formats are written as image type 3, everything else as
true color image type 2. No color map, ID field or footer is written.

Copyright 2025 DNAi inc.
"""

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, Union

from dntga.exceptions import FileCannotWriteError, NoDataError
from dntga.pixel_format import ImageInfo, ImageType, PixelFormat
from dntga.tga_header import DESCRIPTOR_TOP_TO_BOTTOM, HEADER_SIZE, HEADER_STRUCT

logger = logging.getLogger(__name__)

# 8 attribute (alpha) bits
ALPHA_BITS_ARGB32 = 0x08


def build_header(info: ImageInfo) -> bytes:
    """
    Build the 18-byte header for an uncompressed image.

    Color map and origin fields are zero.
    """
    if info.pixel_format in (PixelFormat.BW8, PixelFormat.BW16):
        image_type = ImageType.GRAYSCALE
    else:
        image_type = ImageType.TRUE_COLOR

    descriptor = DESCRIPTOR_TOP_TO_BOTTOM
    if info.pixel_format == PixelFormat.ARGB32:
        descriptor |= ALPHA_BITS_ARGB32

    return HEADER_STRUCT.pack(
        0,  # ID length
        0,  # Color map type
        image_type,
        0, 0, 0,  # Color map specification
        0, 0,  # X/Y origin
        info.width,
        info.height,
        info.pixel_size * 8,
        descriptor,
    )


def _write(sink: BinaryIO, data: bytes, what: str) -> None:
    try:
        written = sink.write(data)
    except (OSError, ValueError) as e:
        raise FileCannotWriteError(f"Failed to write TGA {what}: {e}") from e
    # Raw streams may report a short write
    if written is not None and written != len(data):
        raise FileCannotWriteError(f"Failed to write TGA {what}: wrote {written} of {len(data)} bytes")


def encode(info: ImageInfo, pixels: Union[bytes, bytearray, memoryview], sink: BinaryIO) -> None:
    """
    Encode an image as an uncompressed TGA.

    Args:
        info: Image width, height and pixel format
        pixels: Row-major pixel buffer, origin upper left
        sink: Writable binary stream

    Raises:
        NoDataError: If the pixel buffer is empty or shorter than the image
        FileCannotWriteError: If any write fails or is short

    The sink is not cleaned up on failure; see TGAWriter.write_tga().
    """
    if not pixels:
        raise NoDataError("No pixel data to write")

    data_size = info.data_size
    if len(pixels) < data_size:
        raise NoDataError(f"Pixel buffer holds {len(pixels)} bytes, image needs {data_size}")

    _write(sink, build_header(info), "header")
    _write(sink, bytes(pixels[:data_size]), "pixel data")
    logger.debug(
        "Encoded %dx%d %s image (%d bytes)",
        info.width, info.height, info.pixel_format.name, HEADER_SIZE + data_size,
    )


def encode_bytes(info: ImageInfo, pixels: Union[bytes, bytearray, memoryview]) -> bytes:
    """Encode an image as uncompressed TGA file bytes."""
    buf = io.BytesIO()
    encode(info, pixels, buf)
    return buf.getvalue()


class TGAWriter:
    """
    Writes TGA files to disk.

    On failure the partially written file is removed unless
    remove_partial is False.
    """

    def __init__(self, overwrite: bool = True, remove_partial: bool = True):
        """
        Initialize TGA writer.

        Args:
            overwrite: Replace an existing file at the output path
            remove_partial: Delete the output file if writing fails
        """
        self.overwrite = overwrite
        self.remove_partial = remove_partial

    def write_tga(
        self,
        info: ImageInfo,
        pixels: Union[bytes, bytearray, memoryview],
        output_path: Union[str, Path]
    ) -> None:
        """
        Write an image to a TGA file.

        Args:
            info: Image width, height and pixel format
            pixels: Row-major pixel buffer
            output_path: Output file path

        Raises:
            NoDataError: If the pixel buffer is empty
            FileCannotWriteError: If the file cannot be created or written
        """
        if not pixels:
            raise NoDataError("No pixel data to write")

        output_path = Path(output_path)
        mode = 'wb' if self.overwrite else 'xb'
        try:
            f = open(output_path, mode)
        except OSError as e:
            raise FileCannotWriteError(f"Cannot open {output_path} for writing: {e}") from e

        try:
            with f:
                encode(info, pixels, f)
        except (FileCannotWriteError, NoDataError, OSError) as e:
            if self.remove_partial:
                self._remove(output_path)
            if isinstance(e, OSError):
                # Raised by close() when flushing buffered data fails
                raise FileCannotWriteError(f"Failed to write {output_path}: {e}") from e
            raise

    @staticmethod
    def _remove(output_path: Path) -> None:
        try:
            os.remove(output_path)
        except OSError as e:
            logger.warning("Could not remove partial output %s: %s", output_path, e)
