#!/usr/bin/env python3
"""
asciigen - Exporters
====================
Rasterize conversion output with Pillow: monochrome PNG from text, colored
PNG from markup runs, and animated GIF from a list of text frames.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging
import math
import os

from PIL import Image, ImageDraw, ImageFont

from asciigen.errors import AsciiGenError
from asciigen.formatters import iter_markup_runs


logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def load_font(font_size: int = 12, font_path: Optional[PathLike] = None):
    """Load a TrueType font, or Pillow's default font at the given size."""
    if font_path is not None:
        return ImageFont.truetype(str(font_path), font_size)
    return ImageFont.load_default(size=font_size)


def cell_metrics(font) -> Tuple[float, int]:
    """Return ``(char_width, line_height)`` used to lay out the grid."""
    ascent, descent = font.getmetrics()
    return font.getlength('M'), ascent + descent


def _canvas(columns: int, rows: int, font, padding: int, bg_color) -> Tuple[Image.Image, float, int]:
    char_width, line_height = cell_metrics(font)
    width = math.ceil(columns * char_width) + 2 * padding
    height = rows * line_height + 2 * padding
    return Image.new('RGB', (max(1, width), max(1, height)), bg_color), char_width, line_height


def text_to_image(text: str,
                  fg_color: str = '#ffffff',
                  bg_color: str = '#000000',
                  font_size: int = 12,
                  font_path: Optional[PathLike] = None,
                  padding: int = 10) -> Optional[Image.Image]:
    """
    Draw plain text art on a solid background.

    Glyphs are placed on a fixed grid so proportional fonts still line up.

    Returns:
        RGB image, or None when the text has no lines
    """
    lines = [line for line in text.split('\n') if line]
    if not lines:
        return None

    font = load_font(font_size, font_path)
    columns = max(len(line) for line in lines)
    image, char_width, line_height = _canvas(columns, len(lines), font, padding, bg_color)
    draw = ImageDraw.Draw(image)

    for y, line in enumerate(lines):
        for x, char in enumerate(line):
            if char != ' ':
                draw.text((padding + x * char_width, padding + y * line_height), char, fill=fg_color, font=font)

    return image


def markup_to_image(markup: str,
                    bg_color: str = '#000000',
                    font_size: int = 12,
                    font_path: Optional[PathLike] = None,
                    padding: int = 10) -> Optional[Image.Image]:
    """
    Draw color markup, one fill color per run.

    Returns:
        RGB image, or None when the markup has no lines
    """
    parsed = list(iter_markup_runs(markup))
    if not parsed:
        return None

    font = load_font(font_size, font_path)
    columns = max(sum(len(chars) for _, chars in runs) for runs in parsed)
    image, char_width, line_height = _canvas(columns, len(parsed), font, padding, bg_color)
    draw = ImageDraw.Draw(image)

    for y, runs in enumerate(parsed):
        x = 0
        for color, chars in runs:
            for char in chars:
                if char != ' ':
                    draw.text((padding + x * char_width, padding + y * line_height), char, fill=color, font=font)
                x += 1

    return image


def save_text(text: str, output_path: PathLike) -> Path:
    path = Path(output_path)
    path.write_text(text, encoding='utf-8')
    return path


def save_png(image: Image.Image, output_path: PathLike) -> Path:
    path = Path(output_path)
    image.save(path, format='PNG')
    return path


def frames_to_gif(frames: Sequence[str],
                  output_path: PathLike,
                  fps: int = 10,
                  fg_color: str = '#ffffff',
                  bg_color: str = '#000000',
                  font_size: int = 10,
                  font_path: Optional[PathLike] = None) -> Path:
    """
    Render text frames and encode them as a looping animated GIF.

    Args:
        frames: Text art, one string per frame, all of the same grid size
        output_path: Destination file
        fps: Playback rate

    Returns:
        The output path
    """
    if fps < 1:
        raise AsciiGenError(f"Frame rate must be at least 1 fps, got {fps}")

    images: List[Image.Image] = []
    for text in frames:
        image = text_to_image(text, fg_color, bg_color, font_size, font_path, padding=0)
        if image is not None:
            images.append(image)
    if not images:
        raise AsciiGenError("No non-empty frames to encode")

    path = Path(output_path)
    images[0].save(
        path,
        format='GIF',
        save_all=True,
        append_images=images[1:],
        duration=max(1, round(1000 / fps)),
        loop=0,
    )
    logger.debug("Wrote %d frames to %s", len(images), path)
    return path
