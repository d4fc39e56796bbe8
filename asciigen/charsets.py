#!/usr/bin/env python3
"""
asciigen - Character Sets
=========================
Named glyph ramps. Ramps run densest first: index 0 is used for the
brightest cells and the last glyph for the darkest.
"""

from typing import Dict, List, Optional

from PIL import Image, ImageDraw, ImageFont


class CharacterSet:
    """Predefined character sets for density mapping."""

    STANDARD: str = '@%#*+=-:. '
    SIMPLE: str = '#+-. '
    BLOCKS: str = '█▓▒░ '
    BINARY: str = '01 '
    MATRIX: str = '0123456789abcdef'
    EDGES: str = '/|\\- '

    PRESETS: Dict[str, str] = {
        'Standard': STANDARD,
        'Simple': SIMPLE,
        'Blocks': BLOCKS,
        'Binary': BINARY,
        'Matrix': MATRIX,
        'Edges': EDGES,
    }

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.PRESETS)

    @classmethod
    def get_preset(cls, name: str) -> str:
        """
        Resolve a charset name.

        Built-in names match case-insensitively; anything else is returned
        unchanged and used as a literal custom ramp.
        """
        if name in cls.PRESETS:
            return cls.PRESETS[name]
        for preset_name, chars in cls.PRESETS.items():
            if preset_name.lower() == name.lower():
                return chars
        return name


def get_charset(name: str) -> str:
    return CharacterSet.get_preset(name)


def glyph_density(char: str, size: int = 20, font: Optional[ImageFont.ImageFont] = None) -> int:
    """Count the lit pixels of a glyph drawn white on black."""
    if font is None:
        font = ImageFont.load_default()
    canvas = Image.new('L', (size, size), 0)
    draw = ImageDraw.Draw(canvas)
    draw.text((2, 2), char, fill=255, font=font)
    return sum(1 for pixel in canvas.getdata() if pixel > 0)


def sort_chars_by_density(chars: str, size: int = 20) -> str:
    """
    Deduplicate glyphs and order them densest first.

    Ties keep their first-seen order.
    """
    font = ImageFont.load_default()
    unique = list(dict.fromkeys(chars))
    densities = {char: glyph_density(char, size, font) for char in unique}
    return ''.join(sorted(unique, key=lambda c: -densities[c]))
