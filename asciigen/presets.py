"""Built-in option presets."""

from typing import Dict, List

from asciigen.charsets import CharacterSet
from asciigen.constants import DitherMethod
from asciigen.engine import AsciiOptions


class Presets:
    """Predefined configuration presets."""

    @staticmethod
    def photo() -> AsciiOptions:
        """Fine detail for photographs."""
        return AsciiOptions(columns=120, charset=CharacterSet.STANDARD)

    @staticmethod
    def retro() -> AsciiOptions:
        """Block shading with ordered dithering."""
        return AsciiOptions(
            columns=80,
            charset=CharacterSet.BLOCKS,
            dither=DitherMethod.BAYER,
            contrast=1.2
        )

    @staticmethod
    def minimal() -> AsciiOptions:
        return AsciiOptions(columns=100, charset=CharacterSet.SIMPLE)

    @staticmethod
    def matrix() -> AsciiOptions:
        """Inverted hex digits in color."""
        return AsciiOptions(
            columns=150,
            charset=CharacterSet.MATRIX,
            dither=DitherMethod.FLOYD_STEINBERG,
            inverted=True,
            brightness=0.8,
            contrast=1.3,
            color_mode=True
        )

    @classmethod
    def all(cls) -> Dict[str, AsciiOptions]:
        return {
            'Photo': cls.photo(),
            'Retro': cls.retro(),
            'Minimal': cls.minimal(),
            'Matrix': cls.matrix(),
        }

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.all())

    @classmethod
    def get(cls, name: str) -> AsciiOptions:
        """Look up a preset by name, case-insensitively. Raises KeyError if unknown."""
        for preset_name, options in cls.all().items():
            if preset_name.lower() == name.lower():
                return options
        raise KeyError(name)
