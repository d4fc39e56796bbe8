#!/usr/bin/env python3
"""
asciigen - Resampler
====================
Area-average (box filter) downscaling of a raster onto the character grid.

Every output cell covers the source region
``[floor(x * xr), ceil((x + 1) * xr)) x [floor(y * yr), ceil((y + 1) * yr))``,
clamped to the source bounds. Neighbouring regions may share a source
row/column when the ratio is not an integer.
"""

import logging
import math
from typing import Tuple

import numpy as np

from asciigen.constants import CELL_ASPECT_CORRECTION, LUMA_R, LUMA_G, LUMA_B
from asciigen.raster import Raster


logger = logging.getLogger(__name__)


def grid_size(raster: Raster, columns: int) -> Tuple[int, int]:
    """Return the ``(columns, rows)`` of the character grid for a raster."""
    rows = max(1, math.floor(columns / raster.aspect_ratio * CELL_ASPECT_CORRECTION))
    return columns, rows


def _region_bounds(src: int, out: int) -> Tuple[np.ndarray, np.ndarray]:
    """Start (inclusive) and end (exclusive) source index for each output index."""
    ratio = src / out
    starts = np.array([math.floor(i * ratio) for i in range(out)], dtype=np.intp)
    ends = np.array([min(math.ceil((i + 1) * ratio), src) for i in range(out)], dtype=np.intp)
    starts = np.minimum(starts, src)
    return starts, ends


def _region_sums(raster: Raster, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-channel RGB sums and pixel counts for every output cell.

    Uses an integer summed-area table, so the sums are exact.

    Returns:
        Tuple of (sums with shape (height, width, 3), counts with shape (height, width))
    """
    rgb = raster.to_array()[:, :, :3].astype(np.int64)

    table = np.zeros((raster.height + 1, raster.width + 1, 3), dtype=np.int64)
    table[1:, 1:] = rgb.cumsum(axis=0).cumsum(axis=1)

    x0, x1 = _region_bounds(raster.width, width)
    y0, y1 = _region_bounds(raster.height, height)

    sums = (
        table[y1[:, None], x1[None, :]]
        - table[y0[:, None], x1[None, :]]
        - table[y1[:, None], x0[None, :]]
        + table[y0[:, None], x0[None, :]]
    )
    counts = (y1 - y0)[:, None] * (x1 - x0)[None, :]
    return sums, counts


def resize_luminance(raster: Raster, width: int, height: int) -> np.ndarray:
    """
    Area-average the raster into a luminance buffer.

    Args:
        raster: Source pixels
        width: Output columns
        height: Output rows

    Returns:
        float64 array of shape (height, width); empty regions are 0
    """
    sums, counts = _region_sums(raster, width, height)
    weighted = LUMA_R * sums[:, :, 0] + LUMA_G * sums[:, :, 1] + LUMA_B * sums[:, :, 2]
    safe = np.where(counts > 0, counts, 1)
    luminance = np.where(counts > 0, weighted / safe, 0.0)
    logger.debug("Resampled %dx%d luminance to %dx%d", raster.width, raster.height, width, height)
    return luminance.astype(np.float64)


def resize_color(raster: Raster, width: int, height: int) -> np.ndarray:
    """
    Area-average the raster into an RGB color buffer.

    Channel averages are rounded to the nearest integer and clamped to [0, 255].

    Returns:
        uint8 array of shape (height, width, 3)
    """
    sums, counts = _region_sums(raster, width, height)
    safe = np.where(counts > 0, counts, 1)[:, :, None]
    averages = np.where(counts[:, :, None] > 0, sums / safe, 0.0)
    return np.clip(np.rint(averages), 0, 255).astype(np.uint8)
