"""Saturation scaling for the color buffer."""

import numpy as np

from asciigen.constants import LUMA_R, LUMA_G, LUMA_B


def adjust_saturation(colors: np.ndarray, saturation: float = 1.0) -> np.ndarray:
    """
    Scale each cell's chroma around its luma.

    Args:
        colors: uint8 array of shape (rows, columns, 3)
        saturation: 0 gives grayscale, 1 leaves colors untouched, >1 boosts

    Returns:
        uint8 array of the same shape (the input itself when saturation is 1.0)
    """
    if saturation == 1.0:
        return colors

    rgb = colors.astype(np.float64)
    luma = LUMA_R * rgb[:, :, 0] + LUMA_G * rgb[:, :, 1] + LUMA_B * rgb[:, :, 2]
    adjusted = luma[:, :, None] + (rgb - luma[:, :, None]) * saturation
    return np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
