"""Engine facade for an interactive host and the host's input mapping."""

from __future__ import annotations

import math
from typing import Iterable, MutableSet, Optional

from .config import (
    ConfigurationError,
    EngineSettings,
    require_positive,
    require_positive_pair,
)
from .pipeline import Frame, ImagePipeline
from .viewport import Vector2, ViewportState

PAN_ACTIONS = {
    "up": (0.0, -1.0),
    "left": (-1.0, 0.0),
    "down": (0.0, 1.0),
    "right": (1.0, 0.0),
}
ZOOM_ACTIONS = {
    "zoom_in": -1.0,
    "zoom_out": 1.0,
}
ONE_SHOT_ACTIONS = ("more_iterations", "fewer_iterations")
ACTIONS = (*PAN_ACTIONS, *ZOOM_ACTIONS, *ONE_SHOT_ACTIONS)


class FractalEngine:
    """Owns the viewport session and renders it on request.

    This is the configuration boundary: values that would break a viewport
    invariant are rejected here with :class:`ConfigurationError` and never
    reach :class:`ImagePipeline`.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        settings = (settings or EngineSettings()).validate()
        self.settings = settings
        self.viewport = ViewportState(
            position=settings.position,
            size=settings.size,
            max_iterations=settings.max_iterations,
            image_factor=settings.image_factor,
        )
        self.pipeline = ImagePipeline(
            backend=settings.backend,
            workers=settings.workers,
            continuous=settings.continuous,
            fallback_color=settings.fallback_color,
        )

    def set_image_factor(self, factor: float) -> None:
        require_positive("image_factor", factor)
        self.viewport.set_image_factor(factor)

    def fit_to_window(self, window_pixels: int) -> None:
        """Choose the image factor so the viewport width spans ``window_pixels``."""

        self.set_image_factor(window_pixels / self.viewport.size[0])

    def set_size_for_pixels(self, pixel_resolution: tuple[int, int], factor: float) -> None:
        require_positive("factor", factor)
        size = ViewportState.convert_pixel_size(pixel_resolution, factor)
        require_positive_pair("size", size)
        self.viewport.set_size(size)

    def move(self, delta: Vector2) -> None:
        self.viewport.move(delta)

    def zoom(self, factor: float) -> None:
        if not factor > -1.0:
            raise ConfigurationError(f"zoom factor must be greater than -1, got {factor}.")
        self.viewport.zoom(factor)

    def increment_iterations(self) -> None:
        self.viewport.increment_iterations()

    def decrement_iterations(self) -> None:
        self.viewport.decrement_iterations()

    def get_max_iterations(self) -> int:
        return self.viewport.max_iterations

    def get_size(self) -> Vector2:
        return self.viewport.size

    def generate_image(self) -> Frame:
        return self.pipeline.generate_image(self.viewport)


def zoom_step(velocity: float) -> float:
    """Zoom factor that scales the viewport by ``exp(velocity)``.

    Always greater than -1, so a long frame with zoom-in held keeps the
    scale positive.
    """

    try:
        factor = math.expm1(velocity)
    except OverflowError as exc:
        raise ConfigurationError(f"zoom velocity {velocity} is too large.") from exc
    # exp underflows to 0 for very negative velocities
    return max(factor, math.nextafter(-1.0, 0.0))


def apply_input(engine: FractalEngine, held: MutableSet[str], delta_time: float, rate: float = 1.0) -> None:
    """Apply the actions a host reports as held for a frame lasting ``delta_time``.

    Pans move by ``rate * delta_time``; zooms scale the view by
    ``exp(-rate * delta_time)`` (in) or ``exp(rate * delta_time)`` (out).
    Iteration changes fire once per press: they are removed from ``held``
    after being applied. Every step is computed before the viewport is
    touched, so a rejected input leaves the engine unchanged.
    """

    unknown = set(held) - set(ACTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown action(s): {', '.join(sorted(unknown))}.")

    velocity = rate * delta_time
    if not math.isfinite(velocity):
        raise ConfigurationError(f"velocity must be finite, got {velocity}.")

    moves = [(dx * velocity, dy * velocity) for action, (dx, dy) in PAN_ACTIONS.items() if action in held]
    zooms = [zoom_step(sign * velocity) for action, sign in ZOOM_ACTIONS.items() if action in held]

    for delta in moves:
        engine.move(delta)
    for factor in zooms:
        engine.zoom(factor)

    if "more_iterations" in held:
        engine.increment_iterations()
        held.discard("more_iterations")
    if "fewer_iterations" in held:
        engine.decrement_iterations()
        held.discard("fewer_iterations")


def parse_actions(names: Iterable[str]) -> set[str]:
    """Normalize action names such as ``zoom-in`` or ``Right`` into :data:`ACTIONS`."""

    actions = set()
    for name in names:
        for part in name.split(","):
            action = part.strip().lower().replace("-", "_")
            if not action:
                continue
            if action not in ACTIONS:
                raise ConfigurationError(f"Unknown action '{part.strip()}'. Valid choices: {', '.join(ACTIONS)}.")
            actions.add(action)
    return actions
