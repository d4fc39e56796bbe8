#!/usr/bin/env python3
"""
asciigen - Command Line Interface
=================================
"""

from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from asciigen.charsets import CharacterSet, sort_chars_by_density
from asciigen.constants import DitherMethod
from asciigen.engine import AsciiOptions, ColorAsciiResult, convert_to_ascii
from asciigen.errors import AsciiGenError
from asciigen.export import markup_to_image, save_png, save_text, text_to_image
from asciigen.formatters import AnsiColorFormatter, HtmlFormatter
from asciigen.presets import Presets
from asciigen.raster import Raster
from asciigen import video


logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='asciigen',
        description='Convert images and videos to ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                          # Print to the terminal
  %(prog)s image.png -w 80 --dither floyd     # 80 columns, Floyd-Steinberg
  %(prog)s image.png -c -o art.html           # Colored HTML page
  %(prog)s image.png --edges -o art.png       # Edge outline as PNG
  %(prog)s clip.mp4 -o clip.gif               # Video to ASCII GIF
        """
    )

    # Input/Output
    parser.add_argument('input', nargs='?', help='Input image or video file')
    parser.add_argument('-o', '--output', help='Output file (txt, html, ansi, png or gif)')

    # Options; None means "keep the preset/default value"
    parser.add_argument('--preset', choices=[name.lower() for name in Presets.names()],
                        help='Start from a built-in preset')
    parser.add_argument('-w', '--columns', type=int, help='Output width in characters')
    parser.add_argument('--charset', help='Charset name (%s) or literal glyphs, densest first'
                        % ', '.join(CharacterSet.names()))
    parser.add_argument('--sort-charset', action='store_true',
                        help='Reorder the charset glyphs by rendered density')
    parser.add_argument('-i', '--invert', action='store_true', default=None, help='Invert tones')
    parser.add_argument('--dither', choices=[method.value for method in DitherMethod],
                        help='Dithering method')
    parser.add_argument('--edges', action='store_true', default=None,
                        help='Map Sobel edge strength instead of brightness')
    parser.add_argument('-c', '--color', action='store_true', default=None,
                        help='Keep source colors')

    # Enhancement options
    parser.add_argument('--brightness', type=float, help='Brightness (1.0 is neutral)')
    parser.add_argument('--contrast', type=float, help='Contrast (1.0 is neutral)')
    parser.add_argument('--gamma', type=float, help='Gamma correction (1.0 is neutral)')
    parser.add_argument('--saturation', type=float, help='Color saturation (1.0 is neutral)')

    # Animation
    parser.add_argument('--fps', type=positive_int, default=video.DEFAULT_FPS, help='Frame rate for video/GIF output')

    # Other options
    parser.add_argument('--list-charsets', action='store_true', help='List built-in charsets and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')

    return parser


def options_from_args(args: argparse.Namespace) -> AsciiOptions:
    """Preset (or defaults) overridden by every flag that was given."""
    options = Presets.get(args.preset) if args.preset else AsciiOptions()
    overrides = {
        'columns': args.columns,
        'dither': args.dither,
        'inverted': args.invert,
        'edge_mode': args.edges,
        'color_mode': args.color,
        'brightness': args.brightness,
        'contrast': args.contrast,
        'gamma': args.gamma,
        'saturation': args.saturation,
    }
    if args.charset is not None:
        overrides['charset'] = CharacterSet.get_preset(args.charset)
    changes = {key: value for key, value in overrides.items() if value is not None}
    options = options.replace(**changes)
    if args.sort_charset:
        options = options.replace(charset=sort_chars_by_density(options.charset))
    return options


def write_output(result, output: str) -> None:
    """Save a single conversion in the format implied by the file extension."""
    ext = Path(output).suffix[1:].lower()
    text = result.text if isinstance(result, ColorAsciiResult) else result

    if ext == 'html':
        save_text(HtmlFormatter.format_result(result), output)
    elif ext == 'ansi':
        save_text(AnsiColorFormatter.format_result(result), output)
    elif ext == 'png':
        if isinstance(result, ColorAsciiResult):
            image = markup_to_image(result.html)
        else:
            image = text_to_image(text)
        if image is None:
            raise AsciiGenError("Nothing to render")
        save_png(image, output)
    else:
        save_text(text, output)


def _print_progress(done: int, total: int) -> None:
    print(f"\rConverting frames... {int(100 * done / total)}%", end='', file=sys.stderr)
    if done == total:
        print(file=sys.stderr)


def run(args: argparse.Namespace) -> int:
    options = options_from_args(args)
    logger.debug("Options: %s", options)

    if video.is_video(args.input) or (args.output or '').lower().endswith('.gif'):
        if not args.output:
            raise AsciiGenError("Video input needs an output .gif path (-o)")
        frames = video.animate(args.input, args.output, options, fps=args.fps, progress=_print_progress)
        print(f"Saved {len(frames)} frames to {args.output}")
        return 0

    raster = Raster.from_path(args.input)
    logger.debug("Loaded %s: %dx%d", args.input, raster.width, raster.height)
    result = convert_to_ascii(raster, options)

    if args.output:
        write_output(result, args.output)
        print(f"Saved to {args.output}")
    elif isinstance(result, ColorAsciiResult):
        print(AnsiColorFormatter.format_result(result), end='')
    else:
        print(result, end='')
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.list_charsets:
        for name, chars in CharacterSet.PRESETS.items():
            print(f"{name:10} {chars!r}")
        return 0

    if not args.input:
        parser.print_help()
        return 1

    try:
        return run(args)
    except (AsciiGenError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
