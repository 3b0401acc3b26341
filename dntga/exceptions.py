# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for DNTga

This module defines the error codes and exceptions raised by the TGA codec.
Every exception carries the ErrorCode that TGAImage records as its status.

Copyright 2025 DNAi inc.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Status codes recorded by TGAImage after each operation"""
    NO_ERROR = 0
    OUT_OF_MEMORY = 1
    FILE_CANNOT_READ = 2
    FILE_CANNOT_WRITE = 3
    NO_DATA = 4
    UNSUPPORTED_COLOR_MAP_TYPE = 5
    UNSUPPORTED_IMAGE_TYPE = 6
    UNSUPPORTED_PIXEL_FORMAT = 7
    INVALID_IMAGE_DIMENSIONS = 8
    COLOR_MAP_INDEX_FAILED = 9


class DNTgaError(Exception):
    """
    Base exception for all DNTga errors.

    All DNTga exceptions inherit from this class, allowing
    catch-all error handling for any codec failure.
    """
    code = ErrorCode.NO_ERROR

    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class TGAReadError(DNTgaError):
    """
    Raised when a TGA stream cannot be decoded.

    Subclasses tell apart truncated input, header values outside the
    supported sets and corrupt pixel data.
    """
    pass


class TGAWriteError(DNTgaError):
    """Raised when a TGA stream cannot be encoded."""
    pass


class OutOfMemoryError(DNTgaError):
    """Raised when the pixel buffer cannot be allocated."""
    code = ErrorCode.OUT_OF_MEMORY


class FileCannotReadError(TGAReadError):
    """
    Raised on any short read against the source.

    This exception is raised when:
    - The file cannot be opened
    - The stream ends inside the header or the ID field
    - The stream ends inside the color map block
    - The stream ends before width * height pixels were decoded
    """
    code = ErrorCode.FILE_CANNOT_READ


class FileCannotWriteError(TGAWriteError):
    """Raised when the sink rejects or truncates a write."""
    code = ErrorCode.FILE_CANNOT_WRITE


class NoDataError(DNTgaError):
    """
    Raised when there is no image data.

    On decode the header declares image type 0; on encode the pixel
    buffer is empty.
    """
    code = ErrorCode.NO_DATA


class UnsupportedColorMapTypeError(TGAReadError):
    """Raised when the color map type is neither 0 nor 1."""
    code = ErrorCode.UNSUPPORTED_COLOR_MAP_TYPE


class UnsupportedImageTypeError(TGAReadError):
    """Raised when the image type is not one of 1, 2, 3, 9, 10, 11."""
    code = ErrorCode.UNSUPPORTED_IMAGE_TYPE


class UnsupportedPixelFormatError(TGAReadError):
    """
    Raised when a pixel format cannot be handled.

    This exception is raised when:
    - The header's image type, pixel depth and color map entry size
      do not map onto one of the five canonical pixel formats
    - A blank image is requested with an unknown pixel format
    """
    code = ErrorCode.UNSUPPORTED_PIXEL_FORMAT


class InvalidImageDimensionsError(TGAReadError):
    """Raised when width or height is outside 1..65535."""
    code = ErrorCode.INVALID_IMAGE_DIMENSIONS


class ColorMapIndexError(TGAReadError):
    """Raised when a pixel's color map index falls outside the color map."""
    code = ErrorCode.COLOR_MAP_INDEX_FAILED
