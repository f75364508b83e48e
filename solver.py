import logging

import numpy as np

from geometry import DegenerateGeometryError

logger = logging.getLogger(__name__)


def solve_linear_system(A, B, pivot_tolerance=1e-12):
    """ Solve A x = B by Gaussian elimination with partial pivoting.

    A and B are copied, the caller's arrays are never modified.

    pivot_tolerance is relative to the largest |A| entry. A pivot below it
    raises DegenerateGeometryError. With pivot_tolerance=None nothing is
    trapped and a singular system yields nan/inf coefficients.
    """
    M = np.array(A, dtype=np.float64)
    b = np.array(B, dtype=np.float64).ravel()
    n = M.shape[0]
    if M.ndim != 2 or M.shape != (n, n) or b.shape != (n,):
        raise ValueError(f"Expected a square system, got A{M.shape} and B{b.shape}")

    scale = np.abs(M).max() if M.size else 0.0

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for i in range(n):
            # Swap the row with the largest candidate pivot into place
            max_row = i + int(np.argmax(np.abs(M[i:, i])))
            if pivot_tolerance is not None and abs(M[max_row, i]) <= pivot_tolerance * scale:
                logger.warning("Pivot %d below tolerance (%.3g)", i, abs(M[max_row, i]))
                raise DegenerateGeometryError("Singular system while solving homography")
            if max_row != i:
                M[[i, max_row]] = M[[max_row, i]]
                b[[i, max_row]] = b[[max_row, i]]

            # Eliminate column i below the pivot
            factors = M[i + 1:, i] / M[i, i]
            M[i + 1:, i:] -= np.outer(factors, M[i, i:])
            M[i + 1:, i] = 0.0
            b[i + 1:] -= factors * b[i]

        # Back substitution
        x = np.zeros(n, dtype=np.float64)
        for i in range(n - 1, -1, -1):
            x[i] = (b[i] - M[i, i + 1:] @ x[i + 1:]) / M[i, i]

    return x
