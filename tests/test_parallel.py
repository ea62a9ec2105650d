import numpy as np
import pytest

from fractals.parallel import parallel_map


@pytest.mark.parametrize("workers", [1, 2, 8])
def test_order_is_preserved(workers):
    values = np.arange(5000)
    result = parallel_map(lambda v: v * 3 + 1, values, np.int64, workers=workers, chunk_size=97)
    np.testing.assert_array_equal(result, values * 3 + 1)


def test_vectorized_chunks():
    values = np.linspace(-1.0, 1.0, 3001)
    seen = []

    def square(chunk):
        seen.append(len(chunk))
        return chunk ** 2

    result = parallel_map(square, values, np.float64, workers=4, chunk_size=1000, vectorized=True)
    np.testing.assert_array_equal(result, values ** 2)
    assert sorted(seen) == [1, 1000, 1000, 1000]


def test_rows_per_element():
    result = parallel_map(lambda v: (v, v, v, 255), np.arange(3), np.uint8, workers=2, chunk_size=1)
    assert result.shape == (3, 4)
    assert result[2].tolist() == [2, 2, 2, 255]


def test_empty_input():
    result = parallel_map(lambda v: v, np.array([], dtype=np.complex128), np.int64)
    assert result.shape == (0,)
    assert result.dtype == np.int64
