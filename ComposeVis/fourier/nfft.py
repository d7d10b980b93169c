"""Type-2 non-uniform FFT of pixel images with jax_finufft."""
import jax; jax.config.update('jax_enable_x64', True)
import jax_finufft
import numpy as np


class NUFFTTransformer:
    """Sample pixel images at a fixed set of (u, v) points.

    The image grid is fixed at construction; ``image_to_vis`` can then be
    called for any raster on that grid.
    """

    def __init__(self, u: np.ndarray, v: np.ndarray, nx: int, ny: int,
                 psizex: float, psizey: float, eps: float = 1e-10):
        self.nx = int(nx)
        self.ny = int(ny)
        self.psizex = float(psizex)
        self.psizey = float(psizey)
        self.eps = float(eps)
        self.x, self.y = self.phase_coords(u, v)
        # finufft mode k sits at array index k + n//2; pixel centers sit at
        # k*d + offset with offset = d/2 for even n and 0 for odd n
        offx = self.psizex * (self.nx // 2 - 0.5 * (self.nx - 1))
        offy = self.psizey * (self.ny // 2 - 0.5 * (self.ny - 1))
        self.shift = np.exp(2j * np.pi * (np.asarray(u) * offx + np.asarray(v) * offy))

    def phase_coords(self, u: np.ndarray, v: np.ndarray):
        """Phase coordinates x = 2 pi u dx, y = 2 pi v dy of the NUFFT."""
        x = 2.0 * np.pi * np.asarray(u, dtype=float) * self.psizex
        y = 2.0 * np.pi * np.asarray(v, dtype=float) * self.psizey
        return x, y

    def image_to_vis(self, data: np.ndarray) -> np.ndarray:
        """Visibilities of a (ny, nx) pixel-flux array at the stored points."""
        if data.shape != (self.ny, self.nx):
            raise ValueError(f"Image shape {data.shape} does not match plan ({self.ny}, {self.nx})")
        # modes indexed (x, y)
        grid = np.ascontiguousarray(data.T).astype(np.complex128)
        vis = jax_finufft.nufft2(grid, self.x, self.y, iflag=1, eps=self.eps)
        return np.asarray(vis) * self.shift
