# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
DNTga - A 100% Pure Python TGA Codec

Decodes TGA (Truevision Targa) images into a row-major pixel buffer with
its origin at the upper left corner, and encodes pixel buffers back into
uncompressed TGA files.

Reads color-mapped, true-color and grayscale images, raw or RLE
compressed, in BW8, BW16, RGB555, RGB24 and ARGB32 pixel formats.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from dntga.exceptions import (
    DNTgaError,
    ErrorCode,
    TGAReadError,
    TGAWriteError,
    OutOfMemoryError,
    FileCannotReadError,
    FileCannotWriteError,
    NoDataError,
    UnsupportedColorMapTypeError,
    UnsupportedImageTypeError,
    UnsupportedPixelFormatError,
    InvalidImageDimensionsError,
    ColorMapIndexError,
)
from dntga.pixel_format import (
    MAX_IMAGE_DIMENSION,
    PixelFormat,
    ImageInfo,
    ImageClass,
    ImageKind,
    ImageType,
    pixel_size,
    classify_image_type,
    resolve_pixel_format,
)
from dntga.tga_header import TGAHeader, read_header
from dntga.color_map import ColorMap, load_color_map
from dntga.orientation import flip_horizontal, flip_vertical
from dntga.tga_decoder import decode, decode_file
from dntga.tga_writer import TGAWriter, encode, encode_bytes
from dntga.tga_parser import TGAParser
from dntga.image import TGAImage

__all__ = [
    "DNTgaError",
    "ErrorCode",
    "TGAReadError",
    "TGAWriteError",
    "OutOfMemoryError",
    "FileCannotReadError",
    "FileCannotWriteError",
    "NoDataError",
    "UnsupportedColorMapTypeError",
    "UnsupportedImageTypeError",
    "UnsupportedPixelFormatError",
    "InvalidImageDimensionsError",
    "ColorMapIndexError",
    "MAX_IMAGE_DIMENSION",
    "PixelFormat",
    "ImageInfo",
    "ImageClass",
    "ImageKind",
    "ImageType",
    "pixel_size",
    "classify_image_type",
    "resolve_pixel_format",
    "TGAHeader",
    "read_header",
    "ColorMap",
    "load_color_map",
    "flip_horizontal",
    "flip_vertical",
    "decode",
    "decode_file",
    "TGAWriter",
    "encode",
    "encode_bytes",
    "TGAParser",
    "TGAImage",
]
