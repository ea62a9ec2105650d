import os
import sys
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import hashlib
import time
from argparse import ArgumentParser

import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from fractals import (
    ACTIONS,
    ConfigurationError,
    EngineSettings,
    FractalEngine,
    apply_input,
    parse_actions,
    parse_hex_color,
)


def build_parser():
    parser = ArgumentParser(description='Render Mandelbrot frames headlessly while holding navigation actions.')

    parser.add_argument('--frames', type=int,
                        dest='frames', help='number of frames to render',
                        metavar='FRAMES', default=10)

    parser.add_argument('--window', type=int,
                        dest='window', help='width in pixels the viewport should span (sets the image factor)',
                        metavar='WINDOW', default=None)

    parser.add_argument('--image-factor', type=float,
                        dest='image_factor', help='pixels per complex-plane unit; ignored when --window is given',
                        metavar='IMAGE_FACTOR', default=1.0)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='initial iteration cap of the escape test',
                        metavar='MAX_ITERATIONS', default=50)

    parser.add_argument('--x-position', type=float,
                        dest='x_position', help='real part of the top-left corner of the viewport',
                        metavar='X_POSITION', default=-2.0)

    parser.add_argument('--y-position', type=float,
                        dest='y_position', help='imaginary part of the top-left corner of the viewport',
                        metavar='Y_POSITION', default=-1.5)

    parser.add_argument('--x-size', type=float,
                        dest='x_size', help='width of the viewport in the complex plane',
                        metavar='X_SIZE', default=3.0)

    parser.add_argument('--y-size', type=float,
                        dest='y_size', help='height of the viewport in the complex plane',
                        metavar='Y_SIZE', default=3.0)

    parser.add_argument('--hold', dest='hold', action='append', metavar='ACTION', default=[],
                        help=f'Action held down on every frame. May be repeated or comma separated. Choices: {", ".join(ACTIONS)}.')

    parser.add_argument('--rate', type=float, default=1.0,
                        help='pan/zoom speed; each frame moves by rate * delta time.')

    parser.add_argument('--delta-time', type=float, dest='delta_time', default=None,
                        help='fixed frame time in seconds; by default the measured time of the previous frame is used.')

    parser.add_argument('--backend', choices=['python', 'tensorflow'], default='tensorflow',
                        help='evaluator used for the escape test.')

    parser.add_argument('--workers', type=int, default=None,
                        help='number of worker threads for the per-sample stages (default: CPU count).')

    parser.add_argument('--smooth', action='store_true',
                        help='use the continuous (smoothed) iteration value for coloring.')

    parser.add_argument('--fallback-color', type=str, dest='fallback_color', default='#000000',
                        help='Hex color used when the iteration cap is zero.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def build_engine(opt, parser: ArgumentParser) -> FractalEngine:
    try:
        settings = EngineSettings(
            position=(opt.x_position, opt.y_position),
            size=(opt.x_size, opt.y_size),
            max_iterations=opt.max_iterations,
            image_factor=opt.image_factor,
            backend=opt.backend,
            workers=opt.workers,
            continuous=bool(opt.smooth),
            fallback_color=parse_hex_color(opt.fallback_color),
        )
        engine = FractalEngine(settings)
        if opt.window is not None:
            engine.fit_to_window(opt.window)
    except ConfigurationError as exc:
        parser.error(str(exc))
    return engine


def main():
    parser = build_parser()
    opt = parser.parse_args()

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    if opt.frames < 0:
        parser.error("--frames must not be negative.")
    if opt.delta_time is not None and opt.delta_time < 0:
        parser.error("--delta-time must not be negative.")

    try:
        held = parse_actions(opt.hold)
    except ConfigurationError as exc:
        parser.error(str(exc))

    engine = build_engine(opt, parser)
    log("TensorFlow version: %s" % tf.__version__)
    log("Holding: %s" % (", ".join(sorted(held)) or "nothing"))

    frame = None
    delta_time = opt.delta_time if opt.delta_time is not None else 0.0
    clock = time.perf_counter()

    for i in range(opt.frames):
        try:
            apply_input(engine, held, delta_time, rate=opt.rate)
        except ConfigurationError as exc:
            print()
            sys.exit(f"Stopping at frame {i}: {exc}")

        frame = engine.generate_image()

        now = time.perf_counter()
        elapsed = now - clock
        clock = now
        if opt.delta_time is None:
            delta_time = elapsed

        fps = 1 / elapsed if elapsed > 0 else float('inf')
        print("frame {0} out of {1}  FPS: {2:.2f}, iterations: {3}".format(
            i, opt.frames, fps, engine.get_max_iterations()), end='\r')
        log("")
        log("  {0}x{1} pixels, size {2}".format(frame.width, frame.height, engine.get_size()))

    print()
    if frame is not None:
        digest = hashlib.sha256(frame.pixels).hexdigest()
        print(f"Last frame: {frame.width}x{frame.height}, iterations: {engine.get_max_iterations()}, sha256: {digest}")


if __name__ == '__main__':
    main()
