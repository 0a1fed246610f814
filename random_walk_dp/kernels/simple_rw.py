from random_walk_dp.kernels.generator import KernelGenerator

PROBABILITY = 0.2


class SimpleRwGenerator(KernelGenerator):
    """Equal weight for staying and each of the four orthogonal neighbours."""

    def prepare(self, kernels):
        self._single(kernels).initialize(3)

    def generate(self, kernels):
        kernel = self._single(kernels)
        for dx, dy in [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]:
            kernel.set(dx, dy, PROBABILITY)

    def name(self):
        return "srw", "Simple RW"
