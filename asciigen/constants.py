#!/usr/bin/env python3
"""
asciigen - Constants
====================
Enums and fixed numeric constants shared by the conversion pipeline.
"""

from enum import Enum
from typing import Optional, Union
import logging

import numpy as np


logger = logging.getLogger(__name__)


# Monospace cells are roughly twice as tall as they are wide.
CELL_ASPECT_CORRECTION = 0.5

# Rec. 601 luma weights
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# Keeps the darkest tone from indexing past the end of the charset.
GLYPH_EPSILON = 0.01

BAYER_MATRIX_4X4 = np.array([
    [0, 8, 2, 10],
    [12, 4, 14, 6],
    [3, 11, 1, 9],
    [15, 7, 13, 5]
], dtype=np.float64)


class DitherMethod(Enum):
    """Dithering strategy applied to the tone buffer before glyph mapping."""
    NONE = 'none'
    BAYER = 'bayer'
    SIMPLE = 'simple'
    FLOYD_STEINBERG = 'floyd'
    ATKINSON = 'atkinson'
    STUCKI = 'stucki'
    SIERRA = 'sierra'

    @classmethod
    def parse(cls, value: Optional[Union[str, 'DitherMethod']]) -> 'DitherMethod':
        """Resolve a selector, falling back to NONE for anything unknown."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        name = str(value).strip().lower()
        aliases = {
            'ordered': cls.BAYER,
            'floyd_steinberg': cls.FLOYD_STEINBERG,
            'floyd-steinberg': cls.FLOYD_STEINBERG,
        }
        if name in aliases:
            return aliases[name]
        try:
            return cls(name)
        except ValueError:
            logger.debug("Unknown dither method %r, using none", value)
            return cls.NONE
