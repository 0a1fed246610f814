import logging
from typing import Optional

from random_walk_dp.core.Walker import Walker
from random_walk_dp.core.WalkerHelper import WalkerHelper
from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.data_structures.walk import Walk
from random_walk_dp.kernels.levy_walk import LevyWalkGenerator

logger = logging.getLogger(__name__)


class LevyWalker(Walker):
    def __init__(self, jump_probability: float, jump_distance: int, kernel: Optional[Kernel] = None):
        """
            Lévy Walker class.

            Args:
                jump_probability (float): Probability that the long jumps are considered at a step.
                jump_distance (int): Length of a jump along the axes.
                kernel: Kernel the dynamic program was computed with, defaults to a Lévy walk kernel
                    with the same jump distance.
        """
        if not 0.0 <= jump_probability <= 1.0:
            raise ValueError(f"Jump probability must lie in [0, 1], got {jump_probability}")
        if jump_distance <= 1:
            raise ValueError(f"Jump distance must be larger than 1, got {jump_distance}")
        self.jump_probability = jump_probability
        self.jump_distance = jump_distance
        self.kernel = kernel if kernel is not None else \
            Kernel.from_generator(LevyWalkGenerator(jump_distance=jump_distance))

        d = jump_distance
        self._local = WalkerHelper.square_offsets(1)
        self._jumps = [(-d, 0), (d, 0), (0, -d), (0, d)]

    def generate_path(self, dp, to_x, to_y, time_steps, rng=None) -> Walk:
        WalkerHelper.require_simple(dp, self.name())
        WalkerHelper.validate_time_steps(dp, to_x, to_y, time_steps)
        WalkerHelper.check_target(dp.at_or(to_x, to_y, time_steps), to_x, to_y, time_steps)
        rng = WalkerHelper.rng(rng)

        def candidates(x, y, t):
            offsets = self._local
            if rng.random() < self.jump_probability:
                offsets = self._local + self._jumps
            weights = WalkerHelper.bayesian_weights(dp, self.kernel, x, y, t, offsets)

            if offsets is self._local and sum(weights) == 0.0:
                # only a jump can explain this cell
                offsets = self._local + self._jumps
                weights = WalkerHelper.bayesian_weights(dp, self.kernel, x, y, t, offsets)
            return offsets, weights

        try:
            path = WalkerHelper.sample_backwards(to_x, to_y, time_steps, candidates, rng)
        except Exception as e:
            logger.error(f"Failed to generate Lévy walk to ({to_x}, {to_y}): {e}")
            raise
        return Walk(path)

    def name(self, short=False):
        return "lw" if short else "Lévy Walker"
