import numpy as np

from fractals.coloring import Color
from fractals.pixels import calculate_pixels


def test_layout_from_colors():
    colors = [Color(1, 2, 3, 4), Color(5, 6, 7, 8), Color(255, 0, 128)]
    pixels = calculate_pixels(colors)
    assert len(pixels) == 4 * len(colors)
    for i, color in enumerate(colors):
        assert tuple(pixels[4 * i:4 * i + 4]) == tuple(color)


def test_layout_from_array():
    rgba = np.arange(40, dtype=np.uint8).reshape(10, 4)
    assert calculate_pixels(rgba) == bytes(range(40))


def test_empty():
    assert calculate_pixels([]) == b""
