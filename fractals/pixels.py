"""Packing of colors into an interleaved RGBA byte buffer."""

from __future__ import annotations

from typing import Iterable, Sequence, Union

import numpy as np

ColorRows = Union[np.ndarray, Sequence[Sequence[int]], Iterable[Sequence[int]]]


def calculate_pixels(colors: ColorRows) -> bytes:
    """Return ``(r, g, b, a)`` of every color as four consecutive bytes.

    Buffer offset ``4 * i`` belongs to ``colors[i]``; the raster position of a
    pixel is encoded by nothing else, so this stage never reorders.
    """

    if isinstance(colors, np.ndarray):
        rgba = colors
    else:
        rgba = np.array([tuple(color) for color in colors], dtype=np.uint8)
    if rgba.size == 0:
        return b""
    return np.ascontiguousarray(rgba, dtype=np.uint8).reshape(-1, 4).tobytes()
