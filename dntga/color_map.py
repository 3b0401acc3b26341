# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA color map

Reads the color map block that follows the image ID field. Entries are
kept as opaque little-endian pixel values and copied into the output
buffer when a color mapped pixel is decoded.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Optional

from dntga.exceptions import ColorMapIndexError
from dntga.pixel_format import ImageClass
from dntga.tga_header import TGAHeader, read_exact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorMap:
    """
    Color map table.

    Fields:
        first_index: Index value that maps to entry 0
        entry_count: Number of entries
        bytes_per_entry: Entry size in whole bytes
        entries: entry_count * bytes_per_entry bytes, ascending index order
    """
    first_index: int
    entry_count: int
    bytes_per_entry: int
    entries: bytes

    def _entry_offset(self, index: int) -> int:
        position = index - self.first_index
        if not 0 <= position < self.entry_count:
            raise ColorMapIndexError(
                f"Color map index {index} outside "
                f"[{self.first_index}, {self.first_index + self.entry_count})"
            )
        return position * self.bytes_per_entry

    def lookup(self, index: int) -> bytes:
        """
        Get the entry for a raw pixel index.

        Raises:
            ColorMapIndexError: If index - first_index is not in [0, entry_count)
        """
        offset = self._entry_offset(index)
        return self.entries[offset:offset + self.bytes_per_entry]

    def resolve_into(self, buffer: bytearray, offset: int, index: int) -> None:
        """Write the entry for index into buffer at offset."""
        start = self._entry_offset(index)
        buffer[offset:offset + self.bytes_per_entry] = self.entries[start:start + self.bytes_per_entry]


def load_color_map(stream: BinaryIO, header: TGAHeader, image_class: ImageClass) -> Optional[ColorMap]:
    """
    Read or skip the color map block.

    For color mapped images the block is read into a ColorMap. For other
    images that still carry a color map (type 1) the block is consumed so
    the stream is positioned at the image data.

    Args:
        stream: Stream positioned just after the image ID field
        header: Validated header
        image_class: Classification of header.image_type

    Returns:
        ColorMap for color mapped images, None otherwise

    Raises:
        FileCannotReadError: If the block is truncated
    """
    map_size = header.color_map_size

    if image_class.is_color_mapped:
        entries = read_exact(stream, map_size, "color map")
        logger.debug(
            "Color map: first=%d count=%d entry_size=%d bits",
            header.map_first_entry, header.map_length, header.map_entry_size,
        )
        return ColorMap(
            first_index=header.map_first_entry,
            entry_count=header.map_length,
            bytes_per_entry=header.map_bytes_per_entry,
            entries=entries,
        )

    if header.color_map_type == 1:
        # Present but unused by this image type
        read_exact(stream, map_size, "color map")
        logger.debug("Skipped unused color map (%d bytes)", map_size)
    return None
