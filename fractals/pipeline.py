"""Per-frame image generation from a viewport session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import PIL.Image

from .coloring import ColorMapper
from .config import DEFAULT_FALLBACK_COLOR
from .convergence import calculate_continuous_iterations, calculate_iterations
from .mapping import make_complex_vector
from .pixels import calculate_pixels
from .viewport import ViewportSnapshot, ViewportState


@dataclass(frozen=True)
class Frame:
    """A rendered RGBA frame; ``pixels`` is row-major with a top-left origin."""

    width: int
    height: int
    pixels: bytes

    def to_array(self) -> np.ndarray:
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.frombytes("RGBA", (self.width, self.height), self.pixels)


@dataclass(frozen=True)
class ImagePipeline:
    """Mapping, evaluation, coloring and packing for one frame.

    The pipeline holds no viewport of its own: each call snapshots the
    session it is handed, so later pan/zoom changes cannot reach a frame
    that is already being computed.
    """

    backend: str = "python"
    workers: Optional[int] = None
    continuous: bool = False
    fallback_color: tuple[int, int, int, int] = DEFAULT_FALLBACK_COLOR

    def render_snapshot(self, snapshot: ViewportSnapshot) -> Frame:
        pixel_resolution = snapshot.pixel_resolution()
        max_iterations = snapshot.max_iterations

        coordinates = make_complex_vector(snapshot, pixel_resolution)
        if self.continuous:
            values = calculate_continuous_iterations(coordinates, max_iterations,
                                                     backend=self.backend, workers=self.workers)
        else:
            values = calculate_iterations(coordinates, max_iterations,
                                          backend=self.backend, workers=self.workers)
        colors = ColorMapper(max_iterations, self.fallback_color).calculate_colors(values, workers=self.workers)
        pixels = calculate_pixels(colors)

        return Frame(width=pixel_resolution[0], height=pixel_resolution[1], pixels=pixels)

    def generate_image(self, viewport: ViewportState) -> Frame:
        return self.render_snapshot(viewport.snapshot())
