"""Pixel grid to complex-plane sampling."""

from __future__ import annotations

import numpy as np

from .viewport import ViewportSnapshot


def sample_step(snapshot: ViewportSnapshot, pixel_resolution: tuple[int, int]) -> tuple[np.float64, np.float64]:
    """Complex-plane distance between horizontally and vertically adjacent pixels."""

    width, height = pixel_resolution
    x_step = np.float64(snapshot.scale[0]) * np.float64(snapshot.size[0]) / np.float64(width)
    y_step = np.float64(snapshot.scale[1]) * np.float64(snapshot.size[1]) / np.float64(height)
    return x_step, y_step


def make_complex_vector(snapshot: ViewportSnapshot, pixel_resolution: tuple[int, int]) -> np.ndarray:
    """Return the flat, row-major array of samples for ``pixel_resolution``.

    Pixel ``(n, m)`` (column ``n``, row ``m``, top-left origin) samples
    ``position + offset + (n * x_step, m * y_step)``.
    """

    width, height = (int(pixel_resolution[0]), int(pixel_resolution[1]))
    x_step, y_step = sample_step(snapshot, (width, height))

    x_origin = np.float64(snapshot.position[0]) + np.float64(snapshot.offset[0])
    y_origin = np.float64(snapshot.position[1]) + np.float64(snapshot.offset[1])

    x = x_origin + np.arange(width, dtype=np.float64) * x_step
    y = y_origin + np.arange(height, dtype=np.float64) * y_step

    X, Y = np.meshgrid(x, y)
    return (X + 1j * Y).astype(np.complex128).ravel()
