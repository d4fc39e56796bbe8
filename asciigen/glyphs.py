#!/usr/bin/env python3
"""
asciigen - Glyph Mapping
========================
Turn the final tone buffer into text, and in color mode into markup where
adjacent cells of the same color share a single span.
"""

from typing import List, Optional
import math

import numpy as np

from asciigen.constants import GLYPH_EPSILON


HTML_ESCAPES = {'<': '&lt;', '>': '&gt;', '&': '&amp;'}

SPAN_OPEN = '<span style="color:rgb({},{},{})">'
SPAN_CLOSE = '</span>'


def char_index(value: float, length: int) -> int:
    """
    Charset index for a tone value.

    255 (white) maps to index 0 and 0 (black) to ``length - 1``. Values are
    clamped to [0, 255] first and NaN counts as black.
    """
    value = float(value)
    if math.isnan(value):
        value = 0.0
    value = min(255.0, max(0.0, value))
    return math.floor(((255 - value) / 255) * (length - GLYPH_EPSILON))


def escape_glyph(char: str) -> str:
    return HTML_ESCAPES.get(char, char)


def map_rows(buffer: np.ndarray, charset: str) -> List[str]:
    """Map every cell to a glyph and return one string per row."""
    length = len(charset)
    if length == 0:
        return []

    clamped = np.clip(np.nan_to_num(buffer, nan=0.0, posinf=255.0, neginf=0.0), 0, 255)
    indices = np.floor(((255 - clamped) / 255) * (length - GLYPH_EPSILON)).astype(np.intp)
    return [''.join(charset[i] for i in row) for row in indices]


def build_text(rows: List[str]) -> str:
    """Join rows, terminating each with a newline."""
    return ''.join(row + '\n' for row in rows)


def build_markup(rows: List[str], colors: np.ndarray) -> str:
    """
    Colorized markup for the mapped rows.

    A new span opens whenever the RGB triple differs from the previous cell in
    the row; spans never cross rows. ``<``, ``>`` and ``&`` are escaped.

    Args:
        rows: Output of ``map_rows``
        colors: uint8 array of shape (rows, columns, 3)

    Returns:
        Markup text, one line per row, each ending in a newline
    """
    lines = []
    for row, color_row in zip(rows, colors):
        parts = []
        previous: Optional[tuple] = None
        for char, rgb in zip(row, color_row):
            color = (int(rgb[0]), int(rgb[1]), int(rgb[2]))
            if color != previous:
                if previous is not None:
                    parts.append(SPAN_CLOSE)
                parts.append(SPAN_OPEN.format(*color))
                previous = color
            parts.append(escape_glyph(char))
        if previous is not None:
            parts.append(SPAN_CLOSE)
        lines.append(''.join(parts) + '\n')
    return ''.join(lines)
