#!/usr/bin/env python3
"""
asciigen - Errors
=================
Exceptions raised where callers hand data to the pipeline: undecodable or
malformed rasters, a missing or failing ffmpeg, invalid export settings.
"""


class AsciiGenError(Exception):
    """Base class for errors raised at the boundary of the conversion pipeline."""
    pass


class RasterError(AsciiGenError):
    pass


class FFmpegError(AsciiGenError):
    pass
