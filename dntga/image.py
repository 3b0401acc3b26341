# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TGAImage

This module provides the image object used by applications: a pixel
buffer together with its ImageInfo and the status of the last load,
save or create operation.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dntga.exceptions import DNTgaError, ErrorCode, NoDataError
from dntga.orientation import flip_horizontal, flip_vertical
from dntga.pixel_format import ImageInfo, PixelFormat
from dntga.tga_decoder import allocate_buffer, decode, decode_file
from dntga.tga_writer import TGAWriter, encode_bytes

logger = logging.getLogger(__name__)


class TGAImage:
    """
    A TGA image in memory.

    Pixels are stored row-major with the origin at the upper left corner,
    in the little-endian layout of the image's pixel format.

    Construction never raises for codec errors: a failed create or load
    leaves an empty buffer, no info, and the failure in last_error/error.
    Use raise_for_error() to turn the status into an exception.

    Examples:
        >>> img = TGAImage(4, 4, PixelFormat.RGB24)
        >>> img.save('blank.tga')
        >>> with TGAImage.open('blank.tga') as img:
        ...     img.flip_v()
    """

    def __init__(self, width: int, height: int, pixel_format: Union[PixelFormat, int]):
        """
        Create a blank (all zero) image.

        Args:
            width: Width in pixels, 1..65535
            height: Height in pixels, 1..65535
            pixel_format: One of the PixelFormat members
        """
        self._reset()
        try:
            info = ImageInfo(width, height, pixel_format)
            self._data = allocate_buffer(info.data_size)
            self._info = info
        except DNTgaError as e:
            self._fail("create", e)

    @classmethod
    def open(cls, file_path: Union[str, Path]) -> 'TGAImage':
        """Load an image from a TGA file; check last_error for the result."""
        image = cls.__new__(cls)
        image._reset()
        image.load(file_path)
        return image

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> 'TGAImage':
        """Decode an image from TGA file bytes; check last_error for the result."""
        image = cls.__new__(cls)
        image._reset()
        try:
            image._set(*decode(data))
        except DNTgaError as e:
            image._fail("decode", e)
        return image

    def _reset(self) -> None:
        self._data = bytearray()
        self._info: Optional[ImageInfo] = None
        self._error: Optional[DNTgaError] = None
        self.options: Dict[str, Any] = {}
        self._initialize_default_options()

    # Options

    @staticmethod
    def available_options() -> Dict[str, Dict[str, Any]]:
        """
        Return a dictionary of available options.

        Returns:
            Dictionary mapping option names to their metadata:
            {
                'OptionName': {
                    'description': 'Description of the option',
                    'type': 'bool|str|int|float',
                    'default': default_value,
                    'supported': True|False
                },
                ...
            }
        """
        return {
            'RemovePartialOutput': {
                'description': 'Delete the output file when save() fails',
                'type': 'bool',
                'default': True,
                'supported': True
            },
            'OverwriteExisting': {
                'description': 'Allow save() to replace an existing file',
                'type': 'bool',
                'default': True,
                'supported': True
            },
            'ValidateBufferSize': {
                'description': 'Check the buffer length against width * height * pixel size before saving',
                'type': 'bool',
                'default': True,
                'supported': True
            },
        }

    def _initialize_default_options(self) -> None:
        for option_name, option_info in self.available_options().items():
            if 'default' in option_info:
                self.options[option_name] = option_info['default']

    def set_option(self, option_name: str, value: Any) -> None:
        """
        Set an option value.

        Args:
            option_name: Name of the option (e.g., 'OverwriteExisting')
            value: Value to set; 'true'/'false' strings are accepted for bool options

        Raises:
            ValueError: If option name is not recognized
        """
        available = self.available_options()
        if option_name not in available:
            raise ValueError(f"Unknown option: {option_name}. Use available_options() to see valid options.")

        expected_type = available[option_name].get('type')
        if expected_type == 'bool' and not isinstance(value, bool):
            if isinstance(value, str):
                value = value.lower() in ('true', '1', 'yes', 'on')
            else:
                value = bool(value)

        self.options[option_name] = value

    def get_option(self, option_name: str, default: Any = None) -> Any:
        """Get an option value, or default if not set."""
        return self.options.get(option_name, default)

    # Status

    def _set(self, info: ImageInfo, data: bytearray) -> None:
        self._info = info
        self._data = data
        self._error = None

    def _fail(self, operation: str, error: DNTgaError) -> None:
        logger.warning("TGA %s failed: %s", operation, error)
        self._error = error

    @property
    def last_error(self) -> ErrorCode:
        """Status of the last create, load or save."""
        if self._error is None:
            return ErrorCode.NO_ERROR
        return self._error.code

    @property
    def error(self) -> Optional[DNTgaError]:
        """Exception raised by the last operation, or None."""
        return self._error

    def raise_for_error(self) -> None:
        """Raise the exception recorded by the last operation, if any."""
        if self._error is not None:
            raise self._error

    # Load / save

    def load(self, file_path: Union[str, Path]) -> bool:
        """
        Replace this image with the contents of a TGA file.

        On failure the buffer is emptied and the info cleared.

        Returns:
            True on success, False on failure (see last_error)
        """
        try:
            self._set(*decode_file(file_path))
        except DNTgaError as e:
            self._info = None
            self._data = bytearray()
            self._fail(f"load of {file_path}", e)
            return False
        logger.debug("Loaded %s", file_path)
        return True

    def save(self, file_path: Union[str, Path]) -> bool:
        """
        Save this image as an uncompressed TGA file.

        Returns:
            True on success, False on failure (see last_error)
        """
        writer = TGAWriter(
            overwrite=self.get_option('OverwriteExisting', True),
            remove_partial=self.get_option('RemovePartialOutput', True),
        )
        try:
            if self._info is None or not self._data:
                raise NoDataError("No pixel data to write")
            if self.get_option('ValidateBufferSize', True) and len(self._data) != self._info.data_size:
                raise NoDataError(
                    f"Pixel buffer holds {len(self._data)} bytes, image needs {self._info.data_size}"
                )
            writer.write_tga(self._info, self._data, file_path)
        except DNTgaError as e:
            self._fail(f"save to {file_path}", e)
            return False
        self._error = None
        return True

    def to_bytes(self) -> bytes:
        """
        Encode this image as uncompressed TGA file bytes.

        Raises:
            NoDataError: If the image has no pixel data
        """
        if self._info is None:
            raise NoDataError("No pixel data to write")
        return encode_bytes(self._info, self._data)

    # Flips

    def flip_h(self) -> None:
        """Mirror the image left to right."""
        if self._info is not None:
            flip_horizontal(self._data, self._info)

    def flip_v(self) -> None:
        """Mirror the image top to bottom."""
        if self._info is not None:
            flip_vertical(self._data, self._info)

    # Accessors

    @property
    def info(self) -> Optional[ImageInfo]:
        return self._info

    @property
    def width(self) -> int:
        return self._info.width if self._info else 0

    @property
    def height(self) -> int:
        return self._info.height if self._info else 0

    @property
    def pixel_format(self) -> Optional[PixelFormat]:
        return self._info.pixel_format if self._info else None

    @property
    def pixel_size(self) -> int:
        return self._info.pixel_size if self._info else 0

    @property
    def data(self) -> bytearray:
        """The pixel buffer itself; changes are visible to the image."""
        return self._data

    def tobytes(self) -> bytes:
        return bytes(self._data)

    def pixel_offset(self, x: int, y: int) -> int:
        """
        Byte offset of pixel (x, y).

        Coordinates are clamped to the image instead of raising.

        Raises:
            NoDataError: If the image has no pixel data
        """
        if self._info is None:
            raise NoDataError("Image has no pixel data")
        x = min(max(x, 0), self._info.width - 1)
        y = min(max(y, 0), self._info.height - 1)
        return (y * self._info.width + x) * self._info.pixel_size

    def get_pixel(self, x: int, y: int) -> memoryview:
        """Writable view of the bytes of pixel (x, y), clamped to the image."""
        offset = self.pixel_offset(x, y)
        return memoryview(self._data)[offset:offset + self._info.pixel_size]

    def set_pixel(self, x: int, y: int, value: Union[bytes, bytearray, memoryview]) -> None:
        """
        Overwrite pixel (x, y), clamped to the image.

        Raises:
            ValueError: If value is not exactly pixel_size bytes
        """
        if self._info is not None and len(value) != self._info.pixel_size:
            raise ValueError(f"Pixel value must be {self._info.pixel_size} bytes, got {len(value)}")
        offset = self.pixel_offset(x, y)
        self._data[offset:offset + len(value)] = value

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: release the pixel buffer."""
        self._data = bytearray()
        self._info = None

    def __repr__(self) -> str:
        if self._info is None:
            return f"<TGAImage empty last_error={self.last_error.name}>"
        return f"<TGAImage {self.width}x{self.height} {self._info.pixel_format.name}>"
