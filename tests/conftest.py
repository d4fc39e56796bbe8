import numpy as np
import pytest

from asciigen.raster import Raster


def solid_raster(width, height, rgba=(255, 255, 255, 255)):
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[:, :] = rgba
    return Raster.from_array(arr)


def gray_row_raster(values):
    """One-pixel-high raster with R=G=B set to each value."""
    arr = np.zeros((1, len(values), 4), dtype=np.uint8)
    for x, value in enumerate(values):
        arr[0, x] = (value, value, value, 255)
    return Raster.from_array(arr)


@pytest.fixture
def white_2x2():
    return solid_raster(2, 2)


@pytest.fixture
def horizontal_gradient():
    """64x32 raster running from black on the left to white on the right."""
    arr = np.zeros((32, 64, 4), dtype=np.uint8)
    ramp = np.linspace(0, 255, 64).round().astype(np.uint8)
    arr[:, :, 0] = ramp
    arr[:, :, 1] = ramp
    arr[:, :, 2] = ramp
    arr[:, :, 3] = 255
    return Raster.from_array(arr)


@pytest.fixture
def quadrants():
    """8x8 raster with red, green, blue and white quadrants."""
    arr = np.zeros((8, 8, 4), dtype=np.uint8)
    arr[:4, :4] = (255, 0, 0, 255)
    arr[:4, 4:] = (0, 255, 0, 255)
    arr[4:, :4] = (0, 0, 255, 255)
    arr[4:, 4:] = (255, 255, 255, 255)
    return Raster.from_array(arr)
