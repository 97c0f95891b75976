"""Tests for the Gauss-Jordan linear solver."""

import sys
import unittest
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from spanlab import solve


class TestSolveSystem(unittest.TestCase):
    """Test solving for combination coefficients."""

    def test_standard_basis(self):
        coeffs = solve.solve_system([[1, 0, 0], [0, 1, 0], [0, 0, 1]], [2, 3, 4])
        np.testing.assert_allclose(coeffs, [2, 3, 4])

    def test_single_vector(self):
        coeffs = solve.solve_system([[1, 0, 0]], [2, 0, 0])
        np.testing.assert_allclose(coeffs, [2])

    def test_plane(self):
        coeffs = solve.solve_system([[1, 0, 0], [0, 1, 0]], [1, 1, 0])
        np.testing.assert_allclose(coeffs, [1, 1])

    def test_general_basis(self):
        """Coefficients come back in basis order."""
        basis = np.array([[1.0, 2.0, 0.0], [0.0, 1.0, 1.0], [1.0, 0.0, 1.0]])
        target = 2 * basis[0] - basis[1] + 3 * basis[2]

        coeffs = solve.solve_system(basis, target)
        np.testing.assert_allclose(coeffs, [2, -1, 3], atol=1e-12)
        np.testing.assert_allclose(coeffs @ basis, target, atol=1e-12)

    def test_pivot_in_later_row(self):
        """Basis vectors whose first component is zero."""
        coeffs = solve.solve_system([[0, 0, 2], [0, 3, 0]], [0, 6, -4])
        np.testing.assert_allclose(coeffs, [-2, 2])

    def test_empty_basis(self):
        coeffs = solve.solve_system([], [0, 0, 0])
        self.assertEqual(coeffs.shape, (0,))

    def test_too_many_unknowns(self):
        with pytest.raises(ValueError):
            solve.solve_system([[1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, 1]], [1, 1, 1])

    def test_inconsistent_system_raises(self):
        """A target outside the span is reported, not silently solved."""
        with pytest.raises(solve.InconsistentSystemError):
            solve.solve_system([[1, 0, 0], [0, 1, 0]], [0, 0, 1])
        with pytest.raises(solve.InconsistentSystemError):
            solve.solve_system([], [1, 0, 0])

        # Still a ValueError for callers that catch the broad type
        self.assertTrue(issubclass(solve.InconsistentSystemError, ValueError))

    def test_unchecked_inconsistent_system(self):
        """Without the check the raw read-off is returned."""
        coeffs = solve.solve_system([[1, 0, 0], [0, 1, 0]], [0, 0, 1], check=False)
        np.testing.assert_allclose(coeffs, [0, 0])

    def test_input_not_modified(self):
        basis = np.array([[0.0, 2.0, 0.0], [4.0, 0.0, 0.0]])
        target = np.array([4.0, 2.0, 0.0])
        original_basis, original_target = basis.copy(), target.copy()

        coeffs = solve.solve_system(basis, target)

        np.testing.assert_allclose(coeffs, [1, 1])
        np.testing.assert_array_equal(basis, original_basis)
        np.testing.assert_array_equal(target, original_target)


if __name__ == "__main__":
    unittest.main()
