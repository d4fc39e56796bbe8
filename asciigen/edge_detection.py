#!/usr/bin/env python3
"""
asciigen - Edge Detection
=========================
Sobel gradient magnitude over the tone buffer.
"""

import numpy as np
from scipy import ndimage


class EdgeProcessor:
    """Replace tone values with edge strength."""

    SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
    SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

    @classmethod
    def gradients(cls, buffer: np.ndarray) -> tuple:
        """
        Horizontal and vertical Sobel responses.

        The kernels are applied as written (correlation, not flipped), so a
        dark-to-bright step from left to right gives a positive gx.

        Args:
            buffer: Tone buffer of shape (rows, columns)

        Returns:
            Tuple of (gx, gy); border cells hold padded responses and are
            only meaningful in the interior
        """
        arr = buffer.astype(np.float64)
        gx = ndimage.correlate(arr, cls.SOBEL_X, mode='nearest')
        gy = ndimage.correlate(arr, cls.SOBEL_Y, mode='nearest')
        return gx, gy

    @classmethod
    def sobel(cls, buffer: np.ndarray) -> np.ndarray:
        """
        Gradient magnitude capped at 255.

        Border cells have no full 3x3 neighbourhood and are set to 0.
        Grids narrower or shorter than three cells are all border.

        Args:
            buffer: Tone buffer of shape (rows, columns)

        Returns:
            New float64 buffer of the same shape
        """
        height, width = buffer.shape
        magnitude = np.zeros((height, width), dtype=np.float64)
        if height < 3 or width < 3:
            return magnitude

        gx, gy = cls.gradients(buffer)
        interior = np.sqrt(gx[1:-1, 1:-1] ** 2 + gy[1:-1, 1:-1] ** 2)
        magnitude[1:-1, 1:-1] = np.minimum(255.0, interior)
        return magnitude


def sobel_edges(buffer: np.ndarray) -> np.ndarray:
    """Shortcut for ``EdgeProcessor.sobel``."""
    return EdgeProcessor.sobel(buffer)
