#!/usr/bin/env python3
"""
asciigen - Output Formatters
============================
Wrap conversion output for display: a standalone HTML page, or ANSI 24-bit
terminal colors recovered from the markup runs.
"""

from typing import Iterator, List, Optional, Tuple
import re

from asciigen.engine import ColorAsciiResult, ConversionResult


RUN_PATTERN = re.compile(r'<span style="color:rgb\((\d+),(\d+),(\d+)\)">(.*?)</span>')

Run = Tuple[Tuple[int, int, int], str]


def unescape_glyphs(text: str) -> str:
    return text.replace('&lt;', '<').replace('&gt;', '>').replace('&amp;', '&')


def escape_glyphs(text: str) -> str:
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def parse_markup_line(line: str) -> List[Run]:
    """Return the ``((r, g, b), text)`` runs of one markup line."""
    return [
        ((int(r), int(g), int(b)), unescape_glyphs(chars))
        for r, g, b, chars in RUN_PATTERN.findall(line)
    ]


def iter_markup_runs(markup: str) -> Iterator[List[Run]]:
    """Yield the runs of every non-empty markup line."""
    for line in markup.split('\n'):
        if line:
            yield parse_markup_line(line)


# =============================================================================
# ANSI COLOR OUTPUT
# =============================================================================

class AnsiColorFormatter:
    """Format colored output with ANSI escape codes for terminal display."""

    RESET = "\033[0m"

    @staticmethod
    def rgb_to_ansi_24bit(r: int, g: int, b: int, foreground: bool = True) -> str:
        """Convert RGB to a 24-bit ANSI color code (true color)."""
        code = 38 if foreground else 48
        return f"\033[{code};2;{r};{g};{b}m"

    @classmethod
    def format_markup(cls, markup: str, background: bool = False) -> str:
        """
        Convert markup runs into ANSI-colored lines.

        Args:
            markup: Markup produced in color mode
            background: Color the cell background instead of the glyph

        Returns:
            Newline-terminated lines, each ending with a reset code
        """
        lines = []
        for runs in iter_markup_runs(markup):
            output = ''.join(
                cls.rgb_to_ansi_24bit(*color, foreground=not background) + chars
                for color, chars in runs
            )
            lines.append(output + cls.RESET + '\n')
        return ''.join(lines)

    @classmethod
    def format_result(cls, result: ConversionResult, background: bool = False) -> str:
        """Colorize a color-mode result; plain text passes through."""
        if isinstance(result, ColorAsciiResult):
            return cls.format_markup(result.html, background)
        return result


# =============================================================================
# HTML OUTPUT
# =============================================================================

class HtmlFormatter:
    """Format output as a standalone HTML page."""

    @staticmethod
    def format_result(result: ConversionResult,
                      font_size: str = "10px",
                      font_family: str = "monospace",
                      background_color: str = "#000000",
                      foreground_color: str = "#ffffff",
                      line_height: float = 1.15,
                      title: Optional[str] = None) -> str:
        """
        Format a conversion result as HTML.

        Args:
            result: Plain text or ColorAsciiResult
            font_size: CSS font size
            font_family: CSS font family
            background_color: Page background
            foreground_color: Glyph color for plain text
            line_height: Line height multiplier
            title: Optional document title

        Returns:
            HTML string
        """
        if isinstance(result, ColorAsciiResult):
            body = result.html
        else:
            body = escape_glyphs(result)

        head_title = f"    <title>{escape_glyphs(title)}</title>\n" if title else ""
        return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
{head_title}    <style>
        .ascii-art {{
            font-family: {font_family};
            font-size: {font_size};
            line-height: {line_height};
            color: {foreground_color};
            background-color: {background_color};
            white-space: pre;
            display: inline-block;
            padding: 10px;
        }}
    </style>
</head>
<body>
<div class="ascii-art">
{body}</div>
</body>
</html>"""
