"""Residual check and direct reference solve for the projection Poisson system."""

import numpy as np
from scipy.sparse import coo_matrix, csr_matrix
from scipy.sparse.linalg import spsolve


def build_clamped_laplacian(width, height) -> csr_matrix:
    """Assemble the operator ``A p = 4 p - sum(p_neighbours)`` with clamped neighbours.

    A neighbour that falls outside the grid is clamped back onto the cell
    itself, so it cancels one unit of the diagonal. The relaxation
    ``p = (div + sum(p_neighbours)) / 4`` has ``A p = div`` as its fixed point.

    Parameters
    ----------
    width, height : int
        Grid size.

    Returns
    -------
    A : csr_matrix (W*H, W*H)
        Cells are numbered row-major, ``k = j * W + i``.
    """
    n = width * height
    jj, ii = np.meshgrid(np.arange(height), np.arange(width), indexing="ij")
    ii = ii.ravel()
    jj = jj.ravel()
    k = jj * width + ii

    rows = [k]
    cols = [k]
    data = [np.full(n, 4.0)]
    for di, dj in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        ni = np.clip(ii + di, 0, width - 1)
        nj = np.clip(jj + dj, 0, height - 1)
        rows.append(k)
        cols.append(nj * width + ni)
        data.append(np.full(n, -1.0))

    A = coo_matrix(
        (np.concatenate(data), (np.concatenate(rows), np.concatenate(cols))),
        shape=(n, n),
    )
    return A.tocsr()


class PoissonValidator:
    """Measure how far a relaxed pressure is from solving ``A p = div``.

    Parameters
    ----------
    width, height : int
        Grid size; the operator is assembled once.
    """

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.A = build_clamped_laplacian(width, height)

    def residual(self, pressure, divergence) -> float:
        """Relative residual ``||div - A p|| / ||div||``.

        Returns 0 when the divergence is identically zero.
        """
        b = np.asarray(divergence, dtype=np.float64).ravel()
        p = np.asarray(pressure, dtype=np.float64).ravel()
        b_norm = np.linalg.norm(b)
        if b_norm == 0.0:
            return 0.0
        return float(np.linalg.norm(b - self.A @ p) / b_norm)

    def solve(self, divergence) -> np.ndarray:
        """Direct reference solve with cell 0 pinned to zero.

        The clamped operator has the constants in its null space; pinning one
        node makes the system non-singular.

        Returns
        -------
        pressure : ndarray (H, W)
        """
        b = np.asarray(divergence, dtype=np.float64).ravel().copy()
        A_p = self.A.tolil()
        A_p[0, :] = 0.0
        A_p[0, 0] = 1.0
        A_p = A_p.tocsr()
        b[0] = 0.0
        return spsolve(A_p, b).reshape(self.height, self.width)
