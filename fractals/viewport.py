"""Mutable viewport session and the per-frame snapshot taken from it."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import DEFAULT_MAX_ITERATIONS, DEFAULT_POSITION, DEFAULT_SIZE

Vector2 = tuple[float, float]


@dataclass(frozen=True)
class ViewportSnapshot:
    """Immutable copy of the viewport used for the duration of one render."""

    position: Vector2
    size: Vector2
    offset: Vector2
    scale: Vector2
    max_iterations: int
    image_factor: float

    def pixel_resolution(self) -> tuple[int, int]:
        """``image_factor * size`` per axis, rounded half up."""

        return (
            int(math.floor(self.image_factor * self.size[0] + 0.5)),
            int(math.floor(self.image_factor * self.size[1] + 0.5)),
        )


class ViewportState:
    """Region of the complex plane plus the pan/zoom transform applied to it.

    The setters accept any value; range checks belong to the
    configuration layer (:class:`fractals.config.EngineSettings` and
    :class:`fractals.engine.FractalEngine`).
    """

    def __init__(
        self,
        position: Vector2 = DEFAULT_POSITION,
        size: Vector2 = DEFAULT_SIZE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        image_factor: float = 1.0,
    ) -> None:
        self._position = _pair(position)
        self._size = _pair(size)
        self._offset = (0.0, 0.0)
        self._scale = (1.0, 1.0)
        self._max_iterations = int(max_iterations)
        self._image_factor = float(image_factor)

    @staticmethod
    def convert_pixel_size(pixel_resolution: tuple[int, int], factor: float) -> Vector2:
        """Complex-plane size that renders at ``pixel_resolution`` for ``factor``."""

        return (pixel_resolution[0] / factor, pixel_resolution[1] / factor)

    @property
    def position(self) -> Vector2:
        return self._position

    @property
    def size(self) -> Vector2:
        return self._size

    @property
    def offset(self) -> Vector2:
        return self._offset

    @property
    def scale(self) -> Vector2:
        return self._scale

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @property
    def image_factor(self) -> float:
        return self._image_factor

    def set_position(self, position: Vector2) -> None:
        self._position = _pair(position)

    def set_size(self, size: Vector2) -> None:
        self._size = _pair(size)

    def set_offset(self, offset: Vector2) -> None:
        self._offset = _pair(offset)

    def set_scale(self, scale: Vector2) -> None:
        self._scale = _pair(scale)

    def set_max_iterations(self, max_iterations: int) -> None:
        self._max_iterations = int(max_iterations)

    def set_image_factor(self, image_factor: float) -> None:
        self._image_factor = float(image_factor)

    def move(self, delta: Vector2) -> None:
        """Pan by ``delta`` expressed in units of the current zoom."""

        self._offset = (
            self._offset[0] + delta[0] * self._scale[0],
            self._offset[1] + delta[1] * self._scale[1],
        )

    def zoom(self, factor: float) -> None:
        """Grow (``factor > 0``) or shrink the visible region about its centre."""

        self._offset = (
            self._offset[0] - 0.5 * factor * self._size[0] * self._scale[0],
            self._offset[1] - 0.5 * factor * self._size[1] * self._scale[1],
        )
        self._scale = (
            self._scale[0] * (1.0 + factor),
            self._scale[1] * (1.0 + factor),
        )

    def increment_iterations(self) -> None:
        self._max_iterations += 1

    def decrement_iterations(self) -> None:
        if self._max_iterations > 0:
            self._max_iterations -= 1

    def snapshot(self) -> ViewportSnapshot:
        return ViewportSnapshot(
            position=self._position,
            size=self._size,
            offset=self._offset,
            scale=self._scale,
            max_iterations=self._max_iterations,
            image_factor=self._image_factor,
        )


def _pair(value: Vector2) -> Vector2:
    x, y = value
    return (float(x), float(y))
