#!/usr/bin/env python3
"""
asciigen - Conversion Engine
============================
The image-to-text pipeline:

    raster -> resample -> tone adjust [-> edges] -> dither -> glyphs
                     \\-> color resample -> saturation ----------/

Each call is synchronous, allocates its own buffers and keeps no state
between calls.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional, Union
import logging

import numpy as np
from PIL import Image

from asciigen.charsets import CharacterSet
from asciigen.color import adjust_saturation
from asciigen.constants import DitherMethod
from asciigen.dither import apply_dithering
from asciigen.edge_detection import EdgeProcessor
from asciigen.glyphs import build_markup, build_text, map_rows
from asciigen.raster import Raster
from asciigen.resample import grid_size, resize_color, resize_luminance
from asciigen.tone import adjust_tone_buffer


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class AsciiOptions:
    """Settings for one conversion."""

    columns: int = 120                       # Output width in characters
    charset: str = CharacterSet.STANDARD     # Densest glyph first
    dither: Union[str, DitherMethod] = DitherMethod.NONE
    inverted: bool = False

    brightness: float = 1.0                  # 1.0 is neutral
    contrast: float = 1.0                    # 1.0 is neutral
    gamma: float = 1.0                       # 1.0 skips gamma correction
    saturation: float = 1.0                  # Color mode only

    color_mode: bool = False                 # Also build colored markup
    edge_mode: bool = False                  # Replace tone with Sobel magnitude

    def replace(self, **changes) -> 'AsciiOptions':
        return dataclasses.replace(self, **changes)

    @property
    def dither_method(self) -> DitherMethod:
        return DitherMethod.parse(self.dither)


@dataclass(frozen=True)
class ColorAsciiResult:
    """Plain text plus colored markup, produced in color mode."""
    text: str
    html: str


ConversionResult = Union[str, ColorAsciiResult]


# =============================================================================
# PIPELINE
# =============================================================================

def tone_buffer(raster: Raster, options: AsciiOptions, width: int, height: int) -> np.ndarray:
    """Resampled, tone-adjusted (and optionally edge-detected) luminance."""
    gray = resize_luminance(raster, width, height)
    tone = adjust_tone_buffer(
        gray, options.brightness, options.contrast, options.gamma, options.inverted)
    if options.edge_mode:
        tone = EdgeProcessor.sobel(tone)
    return tone


def color_buffer(raster: Raster, options: AsciiOptions, width: int, height: int) -> np.ndarray:
    """Resampled colors with saturation applied. Independent of the tone path."""
    colors = resize_color(raster, width, height)
    return adjust_saturation(colors, options.saturation)


def convert_to_ascii(raster: Raster, options: Optional[AsciiOptions] = None) -> ConversionResult:
    """
    Convert a raster to text art.

    Args:
        raster: Decoded RGBA pixels
        options: Conversion settings (defaults when None)

    Returns:
        The text grid, or a ColorAsciiResult when ``options.color_mode`` is set.
        An empty charset gives an empty result.
    """
    options = options or AsciiOptions()
    charset = options.charset
    if not charset or options.columns < 1:
        return ColorAsciiResult(text='', html='') if options.color_mode else ''

    width, height = grid_size(raster, options.columns)
    logger.debug("Converting %dx%d raster to %dx%d cells", raster.width, raster.height, width, height)

    tone = tone_buffer(raster, options, width, height)
    apply_dithering(tone, len(charset), options.dither)
    rows = map_rows(tone, charset)
    text = build_text(rows)

    if not options.color_mode:
        return text

    colors = color_buffer(raster, options, width, height)
    return ColorAsciiResult(text=text, html=build_markup(rows, colors))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def image_to_ascii(image: Image.Image,
                   columns: int = 120,
                   charset: str = 'Standard',
                   dither: Union[str, DitherMethod] = DitherMethod.NONE,
                   color_mode: bool = False,
                   **kwargs) -> ConversionResult:
    """
    Convert a PIL image to text art.

    Args:
        image: PIL Image
        columns: Output width in characters
        charset: Built-in charset name or literal glyph string
        dither: Dither selector
        color_mode: Also build colored markup
        **kwargs: Remaining AsciiOptions fields

    Returns:
        Text, or ColorAsciiResult in color mode
    """
    options = AsciiOptions(
        columns=columns,
        charset=CharacterSet.get_preset(charset),
        dither=dither,
        color_mode=color_mode,
        **kwargs
    )
    return convert_to_ascii(Raster.from_image(image), options)
