#!/usr/bin/env python3
"""
asciigen - Video and Animation
==============================
Decode frames from animated images (Pillow) or videos (the ``ffmpeg``
executable), run each through the converter, and optionally re-encode the
text frames as a GIF.

Every frame is converted independently; nothing is carried between frames.
"""

from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union
import logging
import os
import shutil
import subprocess
import tempfile

from PIL import Image, ImageSequence

from asciigen.engine import AsciiOptions, convert_to_ascii
from asciigen.errors import FFmpegError, RasterError
from asciigen.export import frames_to_gif
from asciigen.raster import Raster


logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]
ProgressCallback = Callable[[int, int], None]

VIDEO_EXTENSIONS = {'mp4', 'mov', 'm4v', 'webm', 'avi', 'mkv'}

DEFAULT_FPS = 10
DEFAULT_MAX_SECONDS = 10
DEFAULT_SCALE_WIDTH = 320


def run(executable: str, *args: str) -> Tuple[int, str]:
    """Run a system command and return its exit code and stderr."""
    try:
        process = subprocess.run([executable, *args], text=True, capture_output=True)
    except FileNotFoundError as e:
        raise FFmpegError(f"'{executable}' was not found on PATH") from e
    return process.returncode, process.stderr.strip('\n')


class FFmpeg:
    """Static wrappers around the ffmpeg commands used for frame extraction."""

    executable = 'ffmpeg'

    @classmethod
    def extract_frames(cls, path: str, out_pattern: str, fps: int = DEFAULT_FPS,
                       max_seconds: int = DEFAULT_MAX_SECONDS,
                       scale_width: int = DEFAULT_SCALE_WIDTH) -> None:
        code, stderr = run(
            cls.executable, '-i', path, '-t', str(max_seconds),
            '-vf', f'fps={fps},scale={scale_width}:-1', out_pattern)
        if code:
            raise FFmpegError(f"Frame extraction failed for '{path}': {stderr.splitlines()[-1] if stderr else code}")


def is_video(path: PathLike) -> bool:
    return Path(path).suffix[1:].lower() in VIDEO_EXTENSIONS


def iter_image_frames(path: PathLike) -> Iterator[Raster]:
    """Yield every frame of a (possibly animated) image as a raster."""
    try:
        with Image.open(path) as image:
            for frame in ImageSequence.Iterator(image):
                yield Raster.from_image(frame.convert('RGBA'))
    except OSError as e:
        raise RasterError(f"Cannot decode '{path}': {e}") from e


def extract_video_frames(path: PathLike, fps: int = DEFAULT_FPS,
                         max_seconds: int = DEFAULT_MAX_SECONDS,
                         scale_width: int = DEFAULT_SCALE_WIDTH) -> List[Raster]:
    """
    Decode a video into rasters via ffmpeg.

    Frames are sampled at ``fps`` from the first ``max_seconds`` seconds and
    scaled to ``scale_width`` pixels wide.
    """
    work_dir = Path(tempfile.mkdtemp(prefix='asciigen-'))
    try:
        FFmpeg.extract_frames(str(path), str(work_dir / 'frame%03d.png'), fps, max_seconds, scale_width)
        frame_paths = sorted(work_dir.glob('frame*.png'))
        logger.debug("Extracted %d frames from %s", len(frame_paths), path)
        return [Raster.from_path(frame_path) for frame_path in frame_paths]
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)


def load_frames(path: PathLike, **kwargs) -> List[Raster]:
    """Frames of a video (through ffmpeg) or of an image (through Pillow)."""
    if is_video(path):
        return extract_video_frames(path, **kwargs)
    return list(iter_image_frames(path))


def convert_frames(frames: Sequence[Raster], options: AsciiOptions,
                   progress: Optional[ProgressCallback] = None) -> List[str]:
    """
    Convert frames to text, calling ``progress(done, total)`` after each one.

    Color mode is ignored; animation output is plain text.
    """
    options = options.replace(color_mode=False)
    total = len(frames)
    results = []
    for index, frame in enumerate(frames, 1):
        results.append(convert_to_ascii(frame, options))
        logger.debug("Converted frame %d/%d", index, total)
        if progress is not None:
            progress(index, total)
    return results


def animate(path: PathLike, output_path: PathLike, options: AsciiOptions,
            fps: int = DEFAULT_FPS, progress: Optional[ProgressCallback] = None) -> List[str]:
    """
    Convert a video or animated image into an ASCII GIF.

    Returns:
        The text of every frame
    """
    frames = load_frames(path, fps=fps) if is_video(path) else load_frames(path)
    text_frames = convert_frames(frames, options, progress)
    frames_to_gif(text_frames, output_path, fps=fps)
    return text_frames
