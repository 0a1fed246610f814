import logging

from random_walk_dp.core.Walker import Walker
from random_walk_dp.core.WalkerHelper import WalkerHelper
from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.data_structures.walk import Walk

logger = logging.getLogger(__name__)


class MultiStepWalker(Walker):
    """Walker for kernels reaching further than one cell.

    Every cell within ``max_step_size`` (Chebyshev distance) is a possible predecessor,
    weighted by ``kernel(x - i, y - j) * P(i, j, t - 1) / P(x, y, t)``.
    """

    def __init__(self, max_step_size: int, kernel: Kernel):
        if max_step_size <= 0:
            raise ValueError(f"Invalid step size: {max_step_size}")
        self.max_step_size = max_step_size
        self.kernel = kernel
        self._offsets = WalkerHelper.square_offsets(max_step_size)

    def generate_path(self, dp, to_x, to_y, time_steps, rng=None) -> Walk:
        WalkerHelper.require_simple(dp, self.name())
        WalkerHelper.validate_time_steps(dp, to_x, to_y, time_steps)
        WalkerHelper.check_target(dp.at_or(to_x, to_y, time_steps), to_x, to_y, time_steps)

        def candidates(x, y, t):
            return self._offsets, WalkerHelper.bayesian_weights(dp, self.kernel, x, y, t, self._offsets)

        try:
            path = WalkerHelper.sample_backwards(to_x, to_y, time_steps, candidates, WalkerHelper.rng(rng))
        except Exception as e:
            logger.error(f"Failed to generate multi step walk to ({to_x}, {to_y}): {e}")
            raise
        return Walk(path)

    def name(self, short=False):
        return "msw" if short else "Multi Step Walker"
