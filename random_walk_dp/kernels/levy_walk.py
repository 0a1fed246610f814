from random_walk_dp.kernels.generator import KernelGenerator


class LevyWalkGenerator(KernelGenerator):
    """Short local steps mixed with rare long jumps along the axes.

    The kernel spans ``2 * jump_distance + 1`` cells. Weights are normalized to sum to 1.
    """

    def __init__(self, jump_distance: int = 10, local_weight: float = 0.2, jump_weight: float = 0.05):
        if jump_distance < 2:
            raise ValueError(f"Jump distance must be at least 2, got {jump_distance}")
        self.jump_distance = jump_distance
        self.local_weight = local_weight
        self.jump_weight = jump_weight

    def prepare(self, kernels):
        size = 2 * self.jump_distance + 1
        self._check_odd(size)
        self._single(kernels).initialize(size)

    def generate(self, kernels):
        kernel = self._single(kernels)
        d = self.jump_distance
        for dx, dy in [(-d, 0), (d, 0), (0, -d), (0, d)]:
            kernel.set(dx, dy, self.jump_weight)
        for dx, dy in [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]:
            kernel.set(dx, dy, self.local_weight)

        kernel.probabilities = kernel.normalized().probabilities

    def name(self):
        return "lw", "Lévy Walk"
