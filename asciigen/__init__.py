"""
asciigen
========

Convert images and video frames into ASCII art.

    >>> from PIL import Image
    >>> import asciigen
    >>> print(asciigen.image_to_ascii(Image.open('foo.png'), columns=80))

The pipeline resamples the image onto a character grid, adjusts tone
(brightness, contrast, gamma, inversion), optionally swaps tone for Sobel
edge strength, dithers to the charset's number of levels and maps each cell
to a glyph. In color mode it also returns markup with one span per run of
identically colored cells.
"""

import logging

from asciigen.charsets import CharacterSet, get_charset, sort_chars_by_density
from asciigen.constants import DitherMethod
from asciigen.dither import DIFFUSION_KERNELS, DiffusionKernel, apply_dithering
from asciigen.edge_detection import EdgeProcessor, sobel_edges
from asciigen.engine import AsciiOptions, ColorAsciiResult, convert_to_ascii, image_to_ascii
from asciigen.errors import AsciiGenError, FFmpegError, RasterError
from asciigen.formatters import AnsiColorFormatter, HtmlFormatter
from asciigen.presets import Presets
from asciigen.raster import Raster
from asciigen.tone import adjust_tone
from asciigen.worker import AsciiWorker


__version__ = '0.1.0'

__all__ = [
    'AsciiOptions',
    'ColorAsciiResult',
    'convert_to_ascii',
    'image_to_ascii',
    'Raster',
    'CharacterSet',
    'get_charset',
    'sort_chars_by_density',
    'DitherMethod',
    'DiffusionKernel',
    'DIFFUSION_KERNELS',
    'apply_dithering',
    'EdgeProcessor',
    'sobel_edges',
    'adjust_tone',
    'AnsiColorFormatter',
    'HtmlFormatter',
    'Presets',
    'AsciiWorker',
    'AsciiGenError',
    'RasterError',
    'FFmpegError',
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
