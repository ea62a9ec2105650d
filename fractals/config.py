"""Validated configuration for the fractal engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_POSITION = (-2.0, -1.5)
DEFAULT_SIZE = (3.0, 3.0)
DEFAULT_MAX_ITERATIONS = 50
DEFAULT_FALLBACK_COLOR = (0, 0, 0, 255)

BACKENDS = ("python", "tensorflow")


class ConfigurationError(ValueError):
    """Raised when engine settings would break a viewport invariant."""


def require_positive_pair(name: str, value: tuple[float, float]) -> None:
    if len(value) != 2:
        raise ConfigurationError(f"{name} must have exactly two components.")
    if not all(component > 0 for component in value):
        raise ConfigurationError(f"{name} components must be positive, got {tuple(value)}.")


def require_positive(name: str, value: float) -> None:
    if not value > 0:
        raise ConfigurationError(f"{name} must be positive, got {value}.")


def parse_hex_color(hex_color: str) -> tuple[int, int, int, int]:
    """Parse ``#RRGGBB`` or ``#RRGGBBAA`` into an RGBA tuple of ints."""

    digits = hex_color.lstrip('#')
    if len(digits) not in (6, 8):
        raise ConfigurationError('color must be in the form #RRGGBB or #RRGGBBAA.')
    try:
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
    except ValueError as exc:
        raise ConfigurationError('color must contain only hexadecimal digits.') from exc
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)


@dataclass(frozen=True)
class EngineSettings:
    """Initial viewport and evaluation settings for a rendering session."""

    position: tuple[float, float] = DEFAULT_POSITION
    size: tuple[float, float] = DEFAULT_SIZE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    image_factor: float = 1.0
    backend: str = "python"
    workers: Optional[int] = None
    continuous: bool = False
    fallback_color: tuple[int, int, int, int] = field(default=DEFAULT_FALLBACK_COLOR)

    def validate(self) -> "EngineSettings":
        require_positive_pair("size", self.size)
        require_positive("image_factor", self.image_factor)
        if len(self.position) != 2:
            raise ConfigurationError("position must have exactly two components.")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 0:
            raise ConfigurationError(f"max_iterations must be a non-negative integer, got {self.max_iterations}.")
        if self.backend not in BACKENDS:
            raise ConfigurationError(f"Unknown backend '{self.backend}'. Valid choices: {', '.join(BACKENDS)}.")
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {self.workers}.")
        if len(self.fallback_color) != 4 or not all(0 <= channel <= 255 for channel in self.fallback_color):
            raise ConfigurationError("fallback_color must be four channels in [0, 255].")
        return self
