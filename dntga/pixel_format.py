# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGA pixel formats

This module defines the five canonical in-memory pixel formats, the
image type classification read from the header, and the rules that
turn a header's (image type, pixel depth, color map entry size) into
a pixel format.

All pixel data is little-endian. An ARGB32 pixel is stored in memory
as B G R A; an RGB555 pixel as GGGBBBBB ARRRRRGG.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from dntga.exceptions import InvalidImageDimensionsError, UnsupportedImageTypeError, UnsupportedPixelFormatError

MAX_IMAGE_DIMENSION = 65535


class PixelFormat(IntEnum):
    """Canonical in-memory pixel formats"""
    BW8 = 0  # 8-bit grayscale
    BW16 = 1  # 16-bit grayscale
    RGB555 = 2  # 16-bit color, top bit is an attribute bit
    RGB24 = 3
    ARGB32 = 4


# Pixel format sizes in bytes
PIXEL_SIZES = {
    PixelFormat.BW8: 1,
    PixelFormat.BW16: 2,
    PixelFormat.RGB555: 2,
    PixelFormat.RGB24: 3,
    PixelFormat.ARGB32: 4,
}


class ImageType(IntEnum):
    """TGA header image type field"""
    NO_DATA = 0
    COLOR_MAPPED = 1
    TRUE_COLOR = 2
    GRAYSCALE = 3
    RLE_COLOR_MAPPED = 9
    RLE_TRUE_COLOR = 10
    RLE_GRAYSCALE = 11


class ImageKind(Enum):
    """How pixel values are interpreted"""
    COLOR_MAPPED = "color_mapped"
    TRUE_COLOR = "true_color"
    GRAYSCALE = "grayscale"


@dataclass(frozen=True)
class ImageClass:
    """Classification of a header image type: pixel kind plus packet framing."""
    kind: ImageKind
    rle: bool

    @property
    def is_color_mapped(self) -> bool:
        return self.kind is ImageKind.COLOR_MAPPED


_IMAGE_CLASSES = {
    ImageType.COLOR_MAPPED: ImageClass(ImageKind.COLOR_MAPPED, False),
    ImageType.TRUE_COLOR: ImageClass(ImageKind.TRUE_COLOR, False),
    ImageType.GRAYSCALE: ImageClass(ImageKind.GRAYSCALE, False),
    ImageType.RLE_COLOR_MAPPED: ImageClass(ImageKind.COLOR_MAPPED, True),
    ImageType.RLE_TRUE_COLOR: ImageClass(ImageKind.TRUE_COLOR, True),
    ImageType.RLE_GRAYSCALE: ImageClass(ImageKind.GRAYSCALE, True),
}

# Color mapped: map entry size -> format (pixel depth must be 8)
_COLOR_MAP_FORMATS = {
    15: PixelFormat.RGB555,
    16: PixelFormat.RGB555,
    24: PixelFormat.RGB24,
    32: PixelFormat.ARGB32,
}

# True color and grayscale: pixel depth -> format
_DEPTH_FORMATS = {
    ImageKind.TRUE_COLOR: {
        16: PixelFormat.RGB555,
        24: PixelFormat.RGB24,
        32: PixelFormat.ARGB32,
    },
    ImageKind.GRAYSCALE: {
        8: PixelFormat.BW8,
        16: PixelFormat.BW16,
    },
}


def bits_to_bytes(bit_count: int) -> int:
    """Round a bit count up to whole bytes (8 -> 1, 9 -> 2, 15 -> 2)."""
    return (bit_count + 7) // 8


def to_pixel_format(value: Union[PixelFormat, int]) -> PixelFormat:
    """
    Coerce a value to PixelFormat.

    Raises:
        UnsupportedPixelFormatError: If the value is not one of the five formats
    """
    try:
        return PixelFormat(value)
    except ValueError:
        raise UnsupportedPixelFormatError(f"Unsupported pixel format: {value!r}")


def pixel_size(pixel_format: Union[PixelFormat, int]) -> int:
    """
    Get the size in bytes of one pixel in the given format.

    Args:
        pixel_format: PixelFormat member or its integer value

    Returns:
        1 for BW8, 2 for BW16 and RGB555, 3 for RGB24, 4 for ARGB32

    Raises:
        UnsupportedPixelFormatError: If the format is unknown
    """
    return PIXEL_SIZES[to_pixel_format(pixel_format)]


def classify_image_type(image_type: int) -> ImageClass:
    """
    Classify a header image type.

    Raises:
        UnsupportedImageTypeError: If image_type is not 1, 2, 3, 9, 10 or 11
    """
    try:
        return _IMAGE_CLASSES[ImageType(image_type)]
    except (ValueError, KeyError):
        raise UnsupportedImageTypeError(f"Unsupported TGA image type: {image_type}")


def resolve_pixel_format(image_type: int, pixel_depth: int, map_entry_size: int) -> PixelFormat:
    """
    Resolve the canonical pixel format from header fields.

    RLE image types resolve exactly like their uncompressed counterparts.

    Args:
        image_type: Header image type
        pixel_depth: Bits per on-disk pixel (the index width for color mapped images)
        map_entry_size: Bits per color map entry

    Returns:
        Canonical pixel format

    Raises:
        UnsupportedImageTypeError: If the image type is not recognized
        UnsupportedPixelFormatError: If the combination is not supported
    """
    image_class = classify_image_type(image_type)

    pixel_format = None
    if image_class.is_color_mapped:
        # Only 8-bit indices are supported
        if pixel_depth == 8:
            pixel_format = _COLOR_MAP_FORMATS.get(map_entry_size)
    else:
        pixel_format = _DEPTH_FORMATS[image_class.kind].get(pixel_depth)

    if pixel_format is None:
        raise UnsupportedPixelFormatError(
            f"Unsupported pixel format: image type {image_type}, "
            f"pixel depth {pixel_depth}, color map entry size {map_entry_size}"
        )
    return pixel_format


def check_dimensions(width: int, height: int) -> None:
    """
    Check that both dimensions are within 1..MAX_IMAGE_DIMENSION.

    Raises:
        InvalidImageDimensionsError: If either dimension is out of range
    """
    if not (0 < width <= MAX_IMAGE_DIMENSION and 0 < height <= MAX_IMAGE_DIMENSION):
        raise InvalidImageDimensionsError(f"Invalid image dimensions: {width}x{height}")


@dataclass(frozen=True)
class ImageInfo:
    """
    Width, height and pixel format of a decoded or blank image.

    Fields:
        width: Width in pixels, 1..65535
        height: Height in pixels, 1..65535
        pixel_format: One of the five canonical formats
    """
    width: int
    height: int
    pixel_format: PixelFormat

    def __post_init__(self):
        check_dimensions(self.width, self.height)
        object.__setattr__(self, 'pixel_format', to_pixel_format(self.pixel_format))

    @property
    def pixel_size(self) -> int:
        return PIXEL_SIZES[self.pixel_format]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def data_size(self) -> int:
        return self.width * self.height * PIXEL_SIZES[self.pixel_format]
