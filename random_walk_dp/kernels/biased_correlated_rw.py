from random_walk_dp.data_structures.kernel import Direction, Kernel
from random_walk_dp.kernels.biased_rw import BiasedRwGenerator
from random_walk_dp.kernels.correlated_rw import CorrelatedRwGenerator
from random_walk_dp.kernels.generator import KernelGenerator


class BiasedCorrelatedRwGenerator(KernelGenerator):
    def __init__(self, probability: float, direction: Direction, persistence: float):
        self.probability = probability
        self.direction = Direction(direction)
        self.persistence = persistence

    def generates_qty(self):
        return len(Direction)

    def prepare(self, kernels):
        self._check_qty(kernels)
        for kernel in kernels:
            kernel.initialize(3)

    def generate(self, kernels):
        self._check_qty(kernels)
        correlated = Kernel.multiple_from_generator(CorrelatedRwGenerator(self.persistence))
        biased = Kernel.from_generator(BiasedRwGenerator(self.probability, self.direction))

        for i, kernel in enumerate(correlated):
            kernel *= biased
            kernels[i].probabilities = kernel.normalized().probabilities

    def name(self):
        return "bcrw", "Biased and correlated RW"
