#!/usr/bin/env python3
"""
asciigen - Dithering
====================
Quantize the tone buffer to as many levels as the charset has glyphs.

Strategies:
- none: leave values alone, glyph mapping quantizes implicitly
- bayer: tiled 4x4 threshold matrix, no error carried between cells
- error diffusion: one raster scan pushing each cell's rounding error onto
  unvisited neighbours, weighted by a kernel
"""

from dataclasses import dataclass
from typing import Dict, Tuple, Union
import logging
import math

import numpy as np

from asciigen.constants import BAYER_MATRIX_4X4, DitherMethod


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffusionKernel:
    """Error-diffusion coefficients as ``(dx, dy, weight)`` triples."""

    name: str
    taps: Tuple[Tuple[int, int, float], ...]

    @property
    def total_weight(self) -> float:
        return sum(weight for _, _, weight in self.taps)


DIFFUSION_KERNELS: Dict[DitherMethod, DiffusionKernel] = {
    DitherMethod.SIMPLE: DiffusionKernel('simple', (
        (1, 0, 1 / 2), (0, 1, 1 / 2),
    )),
    DitherMethod.FLOYD_STEINBERG: DiffusionKernel('floyd', (
        (1, 0, 7 / 16), (-1, 1, 3 / 16), (0, 1, 5 / 16), (1, 1, 1 / 16),
    )),
    # Atkinson's footprint, weighted so no error is discarded
    DitherMethod.ATKINSON: DiffusionKernel('atkinson', (
        (1, 0, 1 / 6), (2, 0, 1 / 6),
        (-1, 1, 1 / 6), (0, 1, 1 / 6), (1, 1, 1 / 6),
        (0, 2, 1 / 6),
    )),
    DitherMethod.STUCKI: DiffusionKernel('stucki', (
        (1, 0, 8 / 42), (2, 0, 4 / 42),
        (-2, 1, 2 / 42), (-1, 1, 4 / 42), (0, 1, 8 / 42), (1, 1, 4 / 42), (2, 1, 2 / 42),
        (-2, 2, 1 / 42), (-1, 2, 2 / 42), (0, 2, 4 / 42), (1, 2, 2 / 42), (2, 2, 1 / 42),
    )),
    DitherMethod.SIERRA: DiffusionKernel('sierra', (
        (1, 0, 5 / 32), (2, 0, 3 / 32),
        (-2, 1, 2 / 32), (-1, 1, 4 / 32), (0, 1, 5 / 32), (1, 1, 4 / 32), (2, 1, 2 / 32),
        (-1, 2, 2 / 32), (0, 2, 3 / 32), (1, 2, 2 / 32),
    )),
}


def quantize(value: float, levels: int) -> float:
    """Snap a tone to the nearest of ``levels`` evenly spaced steps in [0, 255]."""
    steps = levels - 1
    # round half up
    return math.floor(value / 255 * steps + 0.5) / steps * 255


def apply_ordered(buffer: np.ndarray, levels: int) -> np.ndarray:
    """Nudge every cell by the tiled Bayer threshold, in place."""
    if levels < 2:
        return buffer

    height, width = buffer.shape
    step = 255 / (levels - 1)
    tiled = np.tile(BAYER_MATRIX_4X4, (height // 4 + 1, width // 4 + 1))[:height, :width]
    buffer += (tiled / 16 - 0.5) * step
    np.clip(buffer, 0, 255, out=buffer)
    return buffer


def apply_error_diffusion(buffer: np.ndarray, levels: int, kernel: DiffusionKernel) -> np.ndarray:
    """
    Error-diffusion dithering, in place.

    Cells are visited left to right, top to bottom. Every kernel tap points at
    a cell the scan has not reached yet, so each cell has received all of its
    error before it is quantized. Error aimed outside the grid is dropped.

    Args:
        buffer: float64 tone buffer of shape (rows, columns)
        levels: Number of output levels (charset length)
        kernel: Diffusion coefficients

    Returns:
        The same buffer
    """
    if levels < 2:
        return buffer

    height, width = buffer.shape
    taps = kernel.taps

    for y in range(height):
        for x in range(width):
            old_val = buffer[y, x]
            new_val = quantize(old_val, levels)
            buffer[y, x] = new_val
            error = old_val - new_val
            if error == 0:
                continue

            for dx, dy, weight in taps:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    buffer[ny, nx] += error * weight

    return buffer


def apply_dithering(buffer: np.ndarray, levels: int,
                    method: Union[str, DitherMethod, None] = DitherMethod.NONE) -> np.ndarray:
    """
    Dispatch to the requested strategy. Unknown selectors behave like none.

    Args:
        buffer: float64 tone buffer, modified in place
        levels: Charset length
        method: DitherMethod or its string selector

    Returns:
        The same buffer
    """
    method = DitherMethod.parse(method)
    logger.debug("Dithering %s grid with %s at %d levels", buffer.shape, method.value, levels)

    if method == DitherMethod.NONE:
        return buffer
    if method == DitherMethod.BAYER:
        return apply_ordered(buffer, levels)
    return apply_error_diffusion(buffer, levels, DIFFUSION_KERNELS[method])
