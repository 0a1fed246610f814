from random_walk_dp.data_structures.kernel import Direction, Kernel
from random_walk_dp.kernels.biased_rw import BiasedRwGenerator
from random_walk_dp.kernels.generator import KernelGenerator


class CorrelatedRwGenerator(KernelGenerator):
    """One kernel per last direction taken, ordered like ``Direction``.

    Each kernel favours repeating that direction with weight ``persistence``.
    """

    def __init__(self, persistence: float):
        if not 0.0 <= persistence <= 1.0:
            raise ValueError(f"Persistence must lie in [0, 1], got {persistence}")
        self.persistence = persistence

    def generates_qty(self):
        return len(Direction)

    def prepare(self, kernels):
        self._check_qty(kernels)
        for kernel in kernels:
            kernel.initialize(3)

    def generate(self, kernels):
        self._check_qty(kernels)
        north = Kernel.from_generator(BiasedRwGenerator(self.persistence, Direction.NORTH))

        for direction in (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST):
            rotated = north.copy()
            rotated.rotate(90 * int(direction))
            kernels[direction].probabilities = rotated.probabilities

        rest = (1.0 - self.persistence) / 4.0
        stay = kernels[Direction.STAY]
        for direction in Direction:
            dx, dy = direction.offset
            stay.set(dx, dy, self.persistence if direction == Direction.STAY else rest)

    def name(self):
        return "crw", "Correlated RW"
