import numpy as np
from scipy.stats import multivariate_normal

from random_walk_dp.kernels.generator import KernelGenerator


class NormalDistGenerator(KernelGenerator):
    def __init__(self, diffusion: float, size: int):
        """
            Kernel sampled from an isotropic bivariate normal density.

            Args:
                diffusion (float): Variance along each axis.
                size (int): Kernel width, odd and at least 3.
        """
        if diffusion <= 0:
            raise ValueError(f"Diffusion must be positive, got {diffusion}")
        self.diffusion = diffusion
        self.size = size

    def prepare(self, kernels):
        self._check_odd(self.size)
        self._single(kernels).initialize(self.size)

    def generate(self, kernels):
        kernel = self._single(kernels)
        r = self.size // 2
        offsets = np.arange(-r, r + 1)
        xs, ys = np.meshgrid(offsets, offsets, indexing="ij")
        pdf = multivariate_normal(mean=[0.0, 0.0], cov=np.eye(2) * self.diffusion)
        values = pdf.pdf(np.dstack((xs, ys)))

        kernel.probabilities = np.asarray(values, dtype=np.float64).reshape(self.size, self.size)
        kernel.probabilities = kernel.normalized().probabilities

    def name(self):
        return "nd", "Normal Distribution"
