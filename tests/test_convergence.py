import math

import numpy as np
import pytest

from fractals.convergence import (
    calculate_continuous_iteration,
    calculate_continuous_iterations,
    calculate_iterations,
    check_convergence,
    escape_counts_tensorflow,
)
from fractals.mapping import make_complex_vector
from fractals.viewport import ViewportState

BACKENDS = ["python", "tensorflow"]


@pytest.mark.parametrize("c", [2, -2, 2j, complex(1.5, 1.5), complex(-3, 0.1), 100])
def test_outside_radius_does_not_iterate(c):
    assert check_convergence(c, 50) == 0


@pytest.mark.parametrize("n", [0, 1, 7, 50, 300])
def test_origin_never_escapes(n):
    assert check_convergence(0j, n) == n


def test_known_escape_counts():
    assert check_convergence(1 + 0j, 50) == 1
    assert check_convergence(complex(-1, -1.5), 50) == 1
    assert check_convergence(complex(0, 0.5), 50) == 50
    assert check_convergence(-1 + 0j, 50) == 50


def test_monotone_in_iteration_cap():
    samples = [complex(-0.75, 0.1), complex(0.3, 0.5), complex(-1.25, 0.05), complex(0.26, 0), 0.5j]
    for c in samples:
        counts = [check_convergence(c, n) for n in range(0, 120, 7)]
        assert counts == sorted(counts)
        assert all(count <= n for count, n in zip(counts, range(0, 120, 7)))


def test_continuous_iteration_uses_sample_magnitude():
    assert calculate_continuous_iteration(1 + 0j, 50) == pytest.approx(1.0)
    assert calculate_continuous_iteration(3 + 0j, 50) == pytest.approx(1 - 1 / 3)
    c = complex(0, 0.5)
    assert calculate_continuous_iteration(c, 50) == pytest.approx(50 + 1 - 1 / abs(c))


def test_continuous_iteration_at_origin():
    assert calculate_continuous_iteration(0j, 10) == -math.inf


@pytest.mark.parametrize("backend", BACKENDS)
def test_iterations_match_scalar_and_preserve_order(backend):
    viewport = ViewportState(image_factor=8.0)
    samples = make_complex_vector(viewport.snapshot(), (24, 24))
    expected = np.array([check_convergence(c, 40) for c in samples], dtype=np.int64)

    counts = calculate_iterations(samples, 40, backend=backend, workers=3)
    assert counts.dtype == np.int64
    np.testing.assert_array_equal(counts, expected)


@pytest.mark.parametrize("backend", BACKENDS)
def test_continuous_iterations(backend):
    samples = np.array([1 + 0j, 3 + 0j, 0.5j, 0j])
    values = calculate_continuous_iterations(samples, 50, backend=backend, workers=2)
    assert values[:3] == pytest.approx([1.0, 1 - 1 / 3, 51 - 2.0])
    assert values[3] == -np.inf


def test_tensorflow_kernel_edge_cases():
    counts = escape_counts_tensorflow(np.array([0j, 2 + 0j, 1 + 0j, -1 + 0j]), 25)
    assert counts.tolist() == [25, 0, 1, 25]
    assert escape_counts_tensorflow(np.array([0j, 5 + 0j]), 0).tolist() == [0, 0]
