"""Iteration value to RGBA color mapping."""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

import numpy as np

from .config import DEFAULT_FALLBACK_COLOR
from .parallel import parallel_map


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


class ColorMapper:
    """Grayscale ramp ``sin(pi/2 * value / max_iterations) * 255``.

    Values are clamped to ``[0, max_iterations]`` before the ramp so smoothed
    values (which may be ``-inf`` or slightly above the cap) stay monotone.
    With ``max_iterations == 0`` the ratio is undefined and every value maps
    to ``fallback_color``.
    """

    def __init__(self, max_iterations: int, fallback_color: tuple[int, int, int, int] = DEFAULT_FALLBACK_COLOR) -> None:
        self.max_iterations = int(max_iterations)
        self.fallback_color = Color(*fallback_color)

    def calculate_color(self, value: float) -> Color:
        if self.max_iterations == 0:
            return self.fallback_color
        ratio = min(max(value / self.max_iterations, 0.0), 1.0)
        intensity = int(math.sin(math.pi / 2 * ratio) * 255)
        return Color(intensity, intensity, intensity, 255)

    def color_array(self, values: np.ndarray) -> np.ndarray:
        """Vectorized :meth:`calculate_color`, returning ``(len(values), 4)`` uint8."""

        values = np.asarray(values, dtype=np.float64)
        rgba = np.empty((values.shape[0], 4), dtype=np.uint8)
        if self.max_iterations == 0:
            rgba[:] = self.fallback_color
            return rgba
        ratio = np.clip(values / np.float64(self.max_iterations), 0.0, 1.0)
        intensity = np.sin(np.pi / 2 * ratio) * 255
        rgba[:, :3] = intensity.astype(np.uint8)[:, np.newaxis]
        rgba[:, 3] = 255
        return rgba

    def calculate_colors(self, values: np.ndarray, *, workers: Optional[int] = None) -> np.ndarray:
        """Colors for integer or smoothed iteration values, in input order."""

        values = np.asarray(values)
        if values.size == 0:
            return np.empty((0, 4), dtype=np.uint8)
        return parallel_map(self.color_array, values, np.uint8, workers=workers, vectorized=True)
