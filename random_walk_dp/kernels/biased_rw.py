from random_walk_dp.data_structures.kernel import Direction
from random_walk_dp.kernels.generator import KernelGenerator


class BiasedRwGenerator(KernelGenerator):
    def __init__(self, probability: float, direction: Direction):
        """
            Biased random walk kernel.

            Args:
                probability (float): Weight of the biased direction, the remaining mass is split evenly
                    between the other four positions (including staying).
                direction (Direction): Direction the walk is pulled towards.
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must lie in [0, 1], got {probability}")
        self.probability = probability
        self.direction = Direction(direction)

    def prepare(self, kernels):
        self._single(kernels).initialize(3)

    def generate(self, kernels):
        kernel = self._single(kernels)
        rest = (1.0 - self.probability) / 4.0
        for direction in Direction:
            dx, dy = direction.offset
            kernel.set(dx, dy, self.probability if direction == self.direction else rest)

    def name(self):
        return "brw", "Biased RW"
