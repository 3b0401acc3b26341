# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA (Targa) header inspection

This module reports the header fields of a TGA file as a metadata
dictionary without decoding the pixel data. The header is reported
as stored, so files the decoder rejects can still be inspected.

Copyright 2025 DNAi inc.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import chardet

from dntga.exceptions import DNTgaError, FileCannotReadError
from dntga.pixel_format import ImageType, resolve_pixel_format
from dntga.tga_header import HEADER_SIZE, TGAHeader

IMAGE_TYPE_NAMES = {
    ImageType.NO_DATA: 'No image data',
    ImageType.COLOR_MAPPED: 'Color-mapped',
    ImageType.TRUE_COLOR: 'True-color',
    ImageType.GRAYSCALE: 'Grayscale',
    ImageType.RLE_COLOR_MAPPED: 'RLE color-mapped',
    ImageType.RLE_TRUE_COLOR: 'RLE true-color',
    ImageType.RLE_GRAYSCALE: 'RLE grayscale',
}

ORIGIN_NAMES = {
    (False, False): 'Bottom-left',
    (False, True): 'Top-left',
    (True, False): 'Bottom-right',
    (True, True): 'Top-right',
}


def decode_image_id(image_id: bytes) -> str:
    """
    Decode the image ID field as text.

    The field has no declared encoding; it is detected with chardet and
    falls back to latin-1.
    """
    image_id = image_id.rstrip(b'\x00')
    if not image_id:
        return ''
    encoding = chardet.detect(image_id).get('encoding') or 'latin-1'
    try:
        text = image_id.decode(encoding, errors='replace')
    except LookupError:
        text = image_id.decode('latin-1')
    return text.strip()


class TGAParser:
    """
    Parser for TGA header metadata.

    Reports:
    - Image type, compression and color map specification
    - Image dimensions, origin, pixel depth and descriptor bits
    - Canonical pixel format when the decoder supports it
    - Image ID field as text
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None, file_data: Optional[bytes] = None):
        """
        Initialize TGA parser.

        Args:
            file_path: Path to TGA file
            file_data: File data bytes
        """
        if file_path:
            self.file_path = Path(file_path)
            self.file_data = None
        elif file_data is not None:
            self.file_data = file_data
            self.file_path = None
        else:
            raise ValueError("Either file_path or file_data must be provided")

    def _read_prefix(self) -> bytes:
        if self.file_data is not None:
            return bytes(self.file_data[:HEADER_SIZE + 255])
        try:
            with open(self.file_path, 'rb') as f:
                # Header plus the longest possible ID field
                return f.read(HEADER_SIZE + 255)
        except OSError as e:
            raise FileCannotReadError(f"Cannot open TGA file {self.file_path}: {e}") from e

    def parse(self) -> Dict[str, Any]:
        """
        Parse TGA header metadata.

        Returns:
            Dictionary of TGA metadata

        Raises:
            FileCannotReadError: If the file is shorter than the header or
                                 its ID field
        """
        file_data = self._read_prefix()
        if len(file_data) < HEADER_SIZE:
            raise FileCannotReadError("Invalid TGA file: too short")

        header = TGAHeader.unpack(file_data[:HEADER_SIZE])
        metadata: Dict[str, Any] = {}

        metadata['TGA:IDLength'] = header.id_length
        metadata['TGA:ColorMapType'] = header.color_map_type
        metadata['TGA:ImageType'] = header.image_type
        try:
            metadata['TGA:ImageTypeName'] = IMAGE_TYPE_NAMES[ImageType(header.image_type)]
            metadata['TGA:Compression'] = 'RLE' if header.image_type >= ImageType.RLE_COLOR_MAPPED else 'None'
        except ValueError:
            metadata['TGA:ImageTypeName'] = 'Unknown'

        # Color map specification
        metadata['TGA:ColorMapStart'] = header.map_first_entry
        metadata['TGA:ColorMapLength'] = header.map_length
        metadata['TGA:ColorMapEntrySize'] = header.map_entry_size

        # Image specification
        metadata['TGA:XOrigin'] = header.x_origin
        metadata['TGA:YOrigin'] = header.y_origin
        metadata['TGA:Width'] = header.width
        metadata['TGA:Height'] = header.height
        metadata['TGA:PixelDepth'] = header.pixel_depth
        metadata['TGA:ImageDescriptor'] = header.descriptor
        metadata['TGA:AlphaBits'] = header.alpha_bits
        metadata['TGA:Origin'] = ORIGIN_NAMES[(header.right_to_left, header.top_to_bottom)]

        try:
            pixel_format = resolve_pixel_format(header.image_type, header.pixel_depth, header.map_entry_size)
            metadata['TGA:PixelFormat'] = pixel_format.name
        except DNTgaError:
            pass

        # Image ID field (optional)
        if header.id_length > 0:
            image_id = file_data[HEADER_SIZE:HEADER_SIZE + header.id_length]
            if len(image_id) < header.id_length:
                raise FileCannotReadError("Invalid TGA file: truncated image ID field")
            metadata['TGA:ImageID'] = decode_image_id(image_id)

        return metadata
