import logging
from typing import List, Optional

from random_walk_dp.core.Walker import Walker
from random_walk_dp.core.WalkerHelper import PREDECESSOR_OFFSETS, WalkerHelper
from random_walk_dp.data_structures.kernel import Direction, Kernel
from random_walk_dp.data_structures.walk import Walk
from random_walk_dp.errors import NoPathExistsError

logger = logging.getLogger(__name__)

# index of the sampled predecessor (stay, west, north, east, south) -> variant read next
# NOTE: unlike east and west, the north and south predecessors map to the variant of
# the opposite move. Kept as is, walks sampled so far depend on it.
NEXT_VARIANT = {
    0: Direction.STAY,
    1: Direction.EAST,
    2: Direction.NORTH,
    3: Direction.WEST,
    4: Direction.SOUTH,
}


class CorrelatedWalker(Walker):
    def __init__(self, kernels: Optional[List[Kernel]] = None):
        """
            Correlated Walker class, samples walks from multi dynamic programs computed with
            one kernel per last direction (North, East, South, West, Stay).

            Args:
                kernels: Optional kernels the variants were computed with, used to weight the predecessors.
        """
        if kernels is not None and len(kernels) != len(Direction):
            raise ValueError(f"Expected {len(Direction)} kernels, got {len(kernels)}")
        self.kernels = kernels

    def _weights(self, dp, x, y, t, variant):
        weights = [dp.at_or(x + dx, y + dy, t - 1, variant) for dx, dy in PREDECESSOR_OFFSETS]
        if self.kernels is not None:
            kernel = self.kernels[variant]
            weights = [w * kernel.at_or(-dx, -dy) for w, (dx, dy) in zip(weights, PREDECESSOR_OFFSETS)]
        return weights

    def generate_path(self, dp, to_x, to_y, time_steps, rng=None) -> Walk:
        WalkerHelper.require_multi(dp, self.name(), len(Direction))
        WalkerHelper.validate_time_steps(dp, to_x, to_y, time_steps)
        for variant in range(dp.variants()):
            if dp.at_or(to_x, to_y, time_steps, variant) == 0.0:
                raise NoPathExistsError(to_x, to_y, time_steps)

        rng = WalkerHelper.rng(rng)
        path = []
        x, y = to_x, to_y
        variant = Direction.STAY

        try:
            for t in range(time_steps, 0, -1):
                path.append((x, y))
                index = WalkerHelper.weighted_choice(self._weights(dp, x, y, t, variant), rng, (x, y), t)
                dx, dy = PREDECESSOR_OFFSETS[index]
                x += dx
                y += dy
                variant = NEXT_VARIANT[index]
        except Exception as e:
            logger.error(f"Failed to generate correlated walk to ({to_x}, {to_y}): {e}")
            raise

        return Walk(WalkerHelper.finish_path(path, (x, y)))

    def name(self, short=False):
        return "cw" if short else "Correlated Walker"
