"""
Tests for execution backends and backend dispatch.

The threaded backend must produce the same results as the serial
backend; 'auto' switches to threads only above the parallel threshold.
"""

import numpy as np
import pytest

from densematrix import Matrix, ShapeError, ValidationError
from densematrix.core.compute.tolerances import PARALLEL_THRESHOLD
from densematrix.core.protocols import ExecutionBackend
from densematrix.matrix import solvers
from densematrix.matrix.backends import SerialBackend, ThreadedBackend
from densematrix.matrix.backends.threaded import row_blocks


# ═══════════════════════════════════════════════════════════════════════
# Row blocking
# ═══════════════════════════════════════════════════════════════════════


class TestRowBlocks:

    def test_covers_every_row_once(self):
        blocks = row_blocks(10, 3)
        covered = [i for b in blocks for i in range(b.start, b.stop)]
        assert covered == list(range(10))

    def test_balanced(self):
        sizes = [b.stop - b.start for b in row_blocks(10, 3)]
        assert sizes == [4, 3, 3]

    def test_more_workers_than_rows(self):
        blocks = row_blocks(2, 8)
        assert len(blocks) == 2
        assert all(b.stop - b.start == 1 for b in blocks)


# ═══════════════════════════════════════════════════════════════════════
# Backends
# ═══════════════════════════════════════════════════════════════════════


class TestBackends:

    def test_protocol(self):
        assert isinstance(SerialBackend(), ExecutionBackend)
        assert isinstance(ThreadedBackend(2), ExecutionBackend)

    def test_names(self):
        assert SerialBackend().name == 'serial'
        assert ThreadedBackend(2).name == 'threaded'

    def test_invalid_worker_count(self):
        with pytest.raises(ValidationError):
            ThreadedBackend(0)

    @pytest.mark.parametrize("workers", [1, 2, 3, 7])
    def test_threaded_matches_serial(self, rng, workers):
        a = Matrix(rng.standard_normal((23, 11)))
        b = Matrix(rng.standard_normal((23, 11)))
        c = Matrix(rng.standard_normal((11, 5)))
        threaded = ThreadedBackend(workers)
        serial = SerialBackend()

        for op in ('add', 'subtract'):
            left = getattr(a, op)(b, backend=threaded).to_numpy()
            right = getattr(a, op)(b, backend=serial).to_numpy()
            np.testing.assert_array_equal(left, right)

        np.testing.assert_allclose(
            a.multiply(c, backend=threaded).to_numpy(),
            a.multiply(c, backend=serial).to_numpy(),
            rtol=1e-12, atol=1e-12,
        )
        np.testing.assert_array_equal(
            a.transpose(backend=threaded).to_numpy(), a.to_numpy().T
        )
        np.testing.assert_allclose(
            a.power(2, backend=threaded).to_numpy(), a.to_numpy() ** 2, rtol=1e-12
        )
        np.testing.assert_array_equal(
            a.divide(4, backend=threaded).to_numpy(),
            a.divide(4, backend=serial).to_numpy(),
        )
        np.testing.assert_array_equal(
            a.rsubtract(1, backend=threaded).to_numpy(), 1 - a.to_numpy()
        )

    def test_worker_error_propagates(self):
        def kernel(rows):
            raise RuntimeError("boom")

        out = np.empty((4, 2))
        with pytest.raises(RuntimeError, match="boom"):
            ThreadedBackend(2).fill(out, kernel)

    def test_string_choice(self, square_2x2):
        assert square_2x2.add(1, backend='serial') == square_2x2 + 1
        assert square_2x2.add(1, backend='threaded') == square_2x2 + 1

    def test_shape_checked_before_dispatch(self, square_2x2):
        with pytest.raises(ShapeError):
            square_2x2.add(Matrix([[1]]), backend='threaded')


# ═══════════════════════════════════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════════════════════════════════


class TestGetBackend:

    def test_serial(self):
        assert solvers.get_backend('serial', 10**9).name == 'serial'

    def test_auto_small_is_serial(self):
        assert solvers.get_backend('auto', PARALLEL_THRESHOLD).name == 'serial'

    def test_auto_large_is_threaded(self, monkeypatch):
        monkeypatch.setattr(solvers, '_cpu_count', lambda: 4)
        assert solvers.get_backend('auto', PARALLEL_THRESHOLD + 1).name == 'threaded'

    def test_auto_large_single_cpu_is_serial(self, monkeypatch):
        monkeypatch.setattr(solvers, '_cpu_count', lambda: 1)
        assert solvers.get_backend('auto', PARALLEL_THRESHOLD + 1).name == 'serial'

    def test_threaded_single_cpu_warns(self, monkeypatch):
        monkeypatch.setattr(solvers, '_cpu_count', lambda: 1)
        with pytest.warns(RuntimeWarning, match="single-CPU"):
            backend = solvers.get_backend('threaded', 4)
        assert backend.name == 'serial'

    def test_instance_passthrough(self):
        backend = ThreadedBackend(3)
        assert solvers.get_backend(backend, 1) is backend

    def test_unknown(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            solvers.get_backend('gpu', 1)

    def test_large_auto_result_matches_numpy(self, rng, monkeypatch):
        monkeypatch.setattr(solvers, '_cpu_count', lambda: 4)
        x = rng.standard_normal((150, 80))
        y = rng.standard_normal((150, 80))
        result = Matrix(x) + Matrix(y)
        np.testing.assert_array_equal(result.to_numpy(), x + y)
