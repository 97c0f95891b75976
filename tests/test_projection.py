"""Tests for orthogonal projection and basis-relative coordinates."""

import sys
import unittest
from pathlib import Path

import numpy as np

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from spanlab import projection


class TestProjection(unittest.TestCase):
    """Test projection onto the span, case by case on its rank."""

    def test_rank_zero(self):
        np.testing.assert_allclose(projection.get_projection([], [1, 2, 3]), [0, 0, 0])
        np.testing.assert_allclose(projection.get_projection([[0, 0, 0]], [1, 2, 3]), [0, 0, 0])

    def test_line(self):
        """The first usable direction defines the line."""
        p = projection.get_projection([[0, 0, 0], [2, 0, 0], [-4, 0, 0]], [3, 4, 5])
        np.testing.assert_allclose(p, [3, 0, 0])

        p = projection.get_projection([[1, 1, 0]], [2, 0, 7])
        np.testing.assert_allclose(p, [1, 1, 0])

    def test_plane(self):
        p = projection.get_projection([[2, 0, 0], [0, 2, 0]], [1, 1, 1])
        np.testing.assert_allclose(p, [1, 1, 0], atol=1e-12)

        # Dependent extra vectors do not change the plane
        p = projection.get_projection([[1, 0, 0], [2, 0, 0], [0, 0, 1]], [4, 5, 6])
        np.testing.assert_allclose(p, [4, 0, 6], atol=1e-12)

    def test_space(self):
        p = projection.get_projection([[1, 0, 0], [0, 1, 0], [0, 0, 1]], [2, 3, 4])
        np.testing.assert_allclose(p, [2, 3, 4])

    def test_residual_orthogonal_to_basis(self):
        """target - projection is orthogonal to every spanning vector."""
        rng = np.random.default_rng(21)
        for k in (1, 2):
            for _ in range(10):
                basis = rng.normal(size=(k, 3))
                target = rng.normal(size=3)

                residual = target - projection.get_projection(basis, target)
                for b in basis:
                    self.assertAlmostEqual(float(np.dot(residual, b)), 0.0, delta=1e-9)

    def test_projection_is_idempotent(self):
        basis = [[1, 2, 0], [0, 1, -1]]
        p = projection.get_projection(basis, [3, -1, 2])
        np.testing.assert_allclose(projection.get_projection(basis, p), p, atol=1e-12)

    def test_input_not_modified(self):
        basis = np.array([[2.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
        target = np.array([1.0, 1.0, 1.0])
        projection.get_projection(basis, target)
        np.testing.assert_array_equal(basis, [[2, 0, 0], [0, 2, 0]])
        np.testing.assert_array_equal(target, [1, 1, 1])


class TestCoordinates(unittest.TestCase):
    """Test coordinates relative to an extracted basis."""

    def test_standard_basis(self):
        coords = projection.get_coordinates([[1, 0, 0], [0, 1, 0], [0, 0, 1]], [2, 3, 4])

        np.testing.assert_allclose(coords.coefficients, [2, 3, 4])
        self.assertEqual(len(coords.basis_used), 3)

    def test_plane_uses_projection(self):
        coords = projection.get_coordinates([[2, 0, 0], [0, 2, 0]], [1, 1, 1])
        np.testing.assert_allclose(coords.coefficients, [0.5, 0.5], atol=1e-12)

    def test_dependent_vectors_skipped(self):
        coords, basis_used = projection.get_coordinates([[1, 0, 0], [2, 0, 0], [0, 1, 0]], [3, 4, 5])

        self.assertEqual(len(basis_used), 2)
        np.testing.assert_allclose(basis_used[1], [0, 1, 0])
        np.testing.assert_allclose(coords, [3, 4], atol=1e-12)

    def test_no_coordinate_system(self):
        self.assertIsNone(projection.get_coordinates([], [1, 2, 3]))
        self.assertIsNone(projection.get_coordinates([[0, 0, 0]], [1, 2, 3]))

    def test_coordinates_reconstruct_projection(self):
        """sum(c_i * b_i) equals the projection onto basis_used."""
        rng = np.random.default_rng(17)
        for n in range(1, 6):
            vs = rng.normal(size=(n, 3))
            target = rng.normal(size=3)

            coords = projection.get_coordinates(vs, target)
            combined = np.asarray(coords.coefficients) @ np.asarray(coords.basis_used)
            expected = projection.get_projection(coords.basis_used, target)
            np.testing.assert_allclose(combined, expected, atol=1e-9)

    def test_nearly_parallel_basis(self):
        """Tiny but nonzero components still give coordinates."""
        self.assertIsNone(projection.get_coordinates([[2e-6, 0, 0], [1, 4e-4, 0]], [1, 1, 1]))

        coords = projection.get_coordinates([[1, 0, 0], [1, 2e-9, 0]], [1, 1, 1])
        self.assertEqual(len(coords.basis_used), 2)
        np.testing.assert_allclose(coords.coefficients, [1 - 5e8, 5e8], rtol=1e-6)

        combined = np.asarray(coords.coefficients) @ np.asarray(coords.basis_used)
        np.testing.assert_allclose(combined, [1, 1, 0], atol=1e-6)


if __name__ == "__main__":
    unittest.main()
