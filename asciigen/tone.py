"""Brightness, contrast, gamma and inversion for luminance values."""

import math

import numpy as np


def _applies_gamma(gamma: float) -> bool:
    # Zero, negative and NaN gamma have no defined curve and are skipped.
    return gamma > 0 and gamma != 1.0


def adjust_tone(gray: float, brightness: float = 1.0, contrast: float = 1.0,
                gamma: float = 1.0, inverted: bool = False) -> float:
    """
    Adjust a single luminance value.

    Contrast pivots around 128, brightness shifts by ``(brightness - 1) * 255``,
    the result is clamped to [0, 255], gamma-corrected and optionally inverted.
    Neutral settings (1.0, 1.0, 1.0, False) return the clamped input. A NaN
    intermediate counts as black.
    """
    value = (gray - 128) * contrast + 128 + (brightness - 1.0) * 255
    if math.isnan(value):
        value = 0.0
    value = min(255.0, max(0.0, value))
    if _applies_gamma(gamma):
        value = 255 * (value / 255) ** (1.0 / gamma)
    if inverted:
        return 255 - value
    return value


def adjust_tone_buffer(buffer: np.ndarray, brightness: float = 1.0, contrast: float = 1.0,
                       gamma: float = 1.0, inverted: bool = False) -> np.ndarray:
    """Vectorized ``adjust_tone`` over a whole tone buffer. Returns a new array."""
    with np.errstate(invalid='ignore'):
        values = (buffer.astype(np.float64) - 128) * contrast + 128 + (brightness - 1.0) * 255
    values = np.clip(np.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0), 0.0, 255.0)
    if _applies_gamma(gamma):
        values = 255 * np.power(values / 255, 1.0 / gamma)
    if inverted:
        values = 255 - values
    return values
