#!/usr/bin/env python3
"""
asciigen - Background Worker
============================
Run conversions off the caller's thread for interactive use.

Rapid requests are debounced: only the last request inside the delay window
is converted. A result whose request has since been superseded is dropped
instead of being delivered.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional
import logging
import threading

from asciigen.engine import AsciiOptions, ColorAsciiResult, convert_to_ascii
from asciigen.raster import Raster


logger = logging.getLogger(__name__)

Message = Dict[str, Any]

DEFAULT_DEBOUNCE = 0.1


def convert_message(raster: Raster, options: AsciiOptions) -> Message:
    """
    Run one conversion and package the outcome as a message.

    Returns:
        ``{"text": ...}``, ``{"text": ..., "html": ...}`` in color mode,
        or ``{"error": message}`` if the conversion raised
    """
    try:
        result = convert_to_ascii(raster, options)
    except Exception as e:
        logger.exception("Conversion failed")
        return {'error': str(e) or e.__class__.__name__}
    if isinstance(result, ColorAsciiResult):
        return {'text': result.text, 'html': result.html}
    return {'text': result}


class AsciiWorker:
    """
    Debounced, latest-wins conversion worker.

        >>> worker = AsciiWorker(print)
        >>> worker.request(raster, AsciiOptions(columns=80))
        >>> worker.close()
    """

    def __init__(self, on_message: Callable[[Message], None], debounce: float = DEFAULT_DEBOUNCE):
        self.on_message = on_message
        self.debounce = debounce
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='asciigen')
        self._lock = threading.Lock()
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._closed = False

    def __enter__(self) -> 'AsciiWorker':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def generation(self) -> int:
        return self._generation

    def request(self, raster: Raster, options: AsciiOptions) -> int:
        """
        Schedule a conversion after the debounce delay, replacing any pending one.

        Returns:
            The generation number of this request
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Worker is closed")
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
            if self.debounce > 0:
                self._timer = threading.Timer(self.debounce, self._dispatch, args=(generation, raster, options))
                self._timer.daemon = True
                self._timer.start()
            else:
                self._timer = None

        if self.debounce <= 0:
            self._dispatch(generation, raster, options)
        return generation

    def _dispatch(self, generation: int, raster: Raster, options: AsciiOptions) -> None:
        with self._lock:
            if generation != self._generation or self._closed:
                return
            future = self._executor.submit(convert_message, raster, options)
        future.add_done_callback(lambda f: self._deliver(generation, f))

    def _deliver(self, generation: int, future: Future) -> None:
        if generation != self._generation:
            logger.debug("Discarding result of superseded request %d", generation)
            return
        self.on_message(future.result())

    def close(self, wait: bool = True) -> None:
        """Cancel any pending request and stop the worker thread."""
        with self._lock:
            self._closed = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._executor.shutdown(wait=wait)
