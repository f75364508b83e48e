import copy
import unittest

import numpy as np

from geometry import DegenerateGeometryError
from solver import solve_linear_system


class SolverTests(unittest.TestCase):
    def test_matches_numpy_on_random_system(self):
        rng = np.random.default_rng(7)
        A = rng.normal(size=(8, 8)) + 8.0 * np.eye(8)
        B = rng.normal(size=8)
        np.testing.assert_allclose(solve_linear_system(A, B), np.linalg.solve(A, B), rtol=1e-9, atol=1e-12)

    def test_pivots_past_zero_diagonal(self):
        x = solve_linear_system([[0.0, 1.0], [1.0, 0.0]], [2.0, 3.0])
        np.testing.assert_allclose(x, [3.0, 2.0])

    def test_does_not_mutate_inputs(self):
        A = [[0.0, 2.0, 1.0], [1.0, 1.0, 0.0], [4.0, 0.0, 1.0]]
        B = [3.0, 2.0, 5.0]
        A_before, B_before = copy.deepcopy(A), list(B)
        A_arr, B_arr = np.array(A), np.array(B)

        solve_linear_system(A, B)
        solve_linear_system(A_arr, B_arr)

        self.assertEqual(A, A_before)
        self.assertEqual(B, B_before)
        np.testing.assert_array_equal(A_arr, np.array(A_before))
        np.testing.assert_array_equal(B_arr, np.array(B_before))

    def test_singular_system_raises(self):
        with self.assertRaises(DegenerateGeometryError):
            solve_linear_system([[1.0, 2.0], [2.0, 4.0]], [1.0, 2.0])

    def test_singular_system_without_tolerance_propagates_nan(self):
        x = solve_linear_system([[1.0, 2.0], [2.0, 4.0]], [1.0, 2.0], pivot_tolerance=None)
        self.assertFalse(np.all(np.isfinite(x)))

    def test_shape_mismatch(self):
        with self.assertRaises(ValueError):
            solve_linear_system(np.eye(3), [1.0, 2.0])
        with self.assertRaises(ValueError):
            solve_linear_system(np.ones((2, 3)), [1.0, 2.0])


if __name__ == "__main__":
    unittest.main()
