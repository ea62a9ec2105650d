"""Escape-time evaluation of the quadratic map ``z <- z*z + c``."""

from __future__ import annotations

import math
from functools import partial
from typing import Optional

import numpy as np
import tensorflow as tf

from .parallel import parallel_map

ESCAPE_RADIUS = 2
LN2 = math.log(2)


def check_convergence(c: complex, max_iterations: int) -> int:
    """Count iterations of ``z <- z*z + c`` (seeded with ``z = c``) before ``|z| >= 2``."""

    z = c
    iterations = 0
    while iterations < max_iterations and abs(z) < ESCAPE_RADIUS:
        z = z * z + c
        iterations += 1
    return iterations


def calculate_continuous_iteration(c: complex, max_iterations: int) -> float:
    """Smoothed iteration value.

    The correction term uses the magnitude of the sample ``c`` itself, not of
    the escaped iterate. ``c == 0`` has an infinite correction and yields
    ``-inf``.
    """

    magnitude = abs(c)
    correction = math.inf if magnitude == 0 else (LN2 / magnitude) / LN2
    return check_convergence(c, max_iterations) + 1 - correction


def _continuous_from_counts(counts: np.ndarray, samples: np.ndarray) -> np.ndarray:
    magnitude = np.abs(samples)
    with np.errstate(divide="ignore"):
        correction = (np.log(2.0) / magnitude) / np.log(2.0)
    return counts.astype(np.float64) + 1.0 - correction


@tf.function(input_signature=[
    tf.TensorSpec(shape=[None], dtype=tf.complex128),
    tf.TensorSpec(shape=[None], dtype=tf.complex128),
    tf.TensorSpec(shape=[None], dtype=tf.int64),
    tf.TensorSpec(shape=[None], dtype=tf.bool),
])
def _escape_step(zs: tf.Tensor, xs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every sample that is still bounded by one iteration."""

    zs_new = zs * zs + xs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, tf.int64)
    radius = tf.constant(ESCAPE_RADIUS, dtype=tf.float64)
    new_active = tf.logical_and(active, tf.abs(zs) < radius)
    return zs, ns, new_active


@tf.function(input_signature=[
    tf.TensorSpec(shape=[None], dtype=tf.complex128),
    tf.TensorSpec(shape=[], dtype=tf.int64),
])
def _escape_run(xs: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate all samples with a TensorFlow while loop and return the counts."""

    i = tf.constant(0, dtype=tf.int64)
    zs = tf.identity(xs)
    ns = tf.zeros_like(xs, dtype=tf.int64)
    active = tf.abs(xs) < tf.constant(ESCAPE_RADIUS, dtype=tf.float64)

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _escape_step(zs, xs, ns, active)
        return i + 1, zs, ns, active

    _, _, ns, _ = tf.while_loop(cond, body, (i, zs, ns, active))
    return ns


def escape_counts_tensorflow(samples: np.ndarray, max_iterations: int) -> np.ndarray:
    """Vectorized :func:`check_convergence` over a 1-D sample array."""

    with tf.device("/CPU:0"):
        xs = tf.convert_to_tensor(np.asarray(samples, dtype=np.complex128))
        ns = _escape_run(xs, tf.constant(max_iterations, dtype=tf.int64))
    return ns.numpy()


def _continuous_tensorflow(samples: np.ndarray, max_iterations: int) -> np.ndarray:
    return _continuous_from_counts(escape_counts_tensorflow(samples, max_iterations), samples)


def calculate_iterations(
    samples: np.ndarray,
    max_iterations: int,
    *,
    backend: str = "python",
    workers: Optional[int] = None,
) -> np.ndarray:
    """Integer escape counts for every sample, in input order."""

    if backend == "tensorflow":
        return parallel_map(partial(escape_counts_tensorflow, max_iterations=max_iterations),
                            samples, np.int64, workers=workers, vectorized=True)
    return parallel_map(partial(check_convergence, max_iterations=max_iterations),
                        samples, np.int64, workers=workers)


def calculate_continuous_iterations(
    samples: np.ndarray,
    max_iterations: int,
    *,
    backend: str = "python",
    workers: Optional[int] = None,
) -> np.ndarray:
    """Smoothed escape values for every sample, in input order."""

    if backend == "tensorflow":
        return parallel_map(partial(_continuous_tensorflow, max_iterations=max_iterations),
                            samples, np.float64, workers=workers, vectorized=True)
    return parallel_map(partial(calculate_continuous_iteration, max_iterations=max_iterations),
                        samples, np.float64, workers=workers)
