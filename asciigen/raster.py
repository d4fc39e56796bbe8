#!/usr/bin/env python3
"""
asciigen - Raster
=================
The immutable RGBA pixel container consumed by the conversion pipeline.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union
import os

from PIL import Image, UnidentifiedImageError
import numpy as np

from asciigen.errors import RasterError


@dataclass(frozen=True)
class Raster:
    """Interleaved RGBA bytes, row-major, top to bottom."""

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise RasterError(f"Raster dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise RasterError(
                f"Raster buffer has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def to_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixel data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Raster':
        """Build a raster from a (height, width, 4) uint8 array."""
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise RasterError(f"Expected a (height, width, 4) array, got shape {arr.shape}")
        arr = np.ascontiguousarray(arr, dtype=np.uint8)
        return cls(width=arr.shape[1], height=arr.shape[0], data=arr.tobytes())

    @classmethod
    def from_image(cls, image: Image.Image) -> 'Raster':
        """Build a raster from any PIL image, converting to RGBA."""
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        return cls(width=image.width, height=image.height, data=image.tobytes())

    @classmethod
    def from_path(cls, path: Union[str, os.PathLike]) -> 'Raster':
        """Decode an image file. Animated images yield their first frame."""
        path = Path(path)
        try:
            with Image.open(path) as image:
                image.load()
                return cls.from_image(image)
        except UnidentifiedImageError as e:
            raise RasterError(f"Cannot decode image '{path}': {e}") from e
