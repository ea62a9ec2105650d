"""Public API for the Mandelbrot fractal engine."""

from .coloring import Color, ColorMapper
from .config import ConfigurationError, EngineSettings, parse_hex_color
from .convergence import (
    calculate_continuous_iteration,
    calculate_continuous_iterations,
    calculate_iterations,
    check_convergence,
    escape_counts_tensorflow,
)
from .engine import ACTIONS, FractalEngine, apply_input, parse_actions
from .mapping import make_complex_vector
from .parallel import parallel_map
from .pipeline import Frame, ImagePipeline
from .pixels import calculate_pixels
from .viewport import ViewportSnapshot, ViewportState

__all__ = [
    "ACTIONS",
    "Color",
    "ColorMapper",
    "ConfigurationError",
    "EngineSettings",
    "FractalEngine",
    "Frame",
    "ImagePipeline",
    "ViewportSnapshot",
    "ViewportState",
    "apply_input",
    "calculate_continuous_iteration",
    "calculate_continuous_iterations",
    "calculate_iterations",
    "calculate_pixels",
    "check_convergence",
    "escape_counts_tensorflow",
    "make_complex_vector",
    "parallel_map",
    "parse_actions",
    "parse_hex_color",
]
