import logging
from typing import Dict

import numpy as np

from random_walk_dp.core.Walker import Walker
from random_walk_dp.core.WalkerHelper import WalkerHelper
from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.data_structures.walk import Walk

logger = logging.getLogger(__name__)


class LandCoverWalker(Walker):
    def __init__(self, max_step_sizes: Dict[int, int], land_cover, kernel: Kernel):
        """
            Land Cover Walker class, the step radius depends on the land cover of the current cell.

            Args:
                max_step_sizes: Maximum step radius per land cover class.
                land_cover: Land cover classes of the dynamic program's grid, indexed [x][y] with the
                    origin at [T][T] (see ``land_cover_adapter.land_cover_window``).
                kernel: Kernel the dynamic program was computed with.
        """
        self.max_step_sizes = dict(max_step_sizes)
        self.land_cover = np.asarray(land_cover, dtype=np.int64)
        self.kernel = kernel

        if self.land_cover.ndim != 2 or self.land_cover.shape[0] != self.land_cover.shape[1] \
                or self.land_cover.shape[0] % 2 == 0:
            raise ValueError(f"Land cover must be a square grid of odd size, got {self.land_cover.shape}")
        unknown = set(np.unique(self.land_cover).tolist()) - set(self.max_step_sizes)
        if unknown:
            raise ValueError(f"No maximum step size for land cover classes {sorted(unknown)}")

        self._offsets = {cover: WalkerHelper.square_offsets(size) for cover, size in self.max_step_sizes.items()}

    def _cover_at(self, x: int, y: int) -> int:
        half = self.land_cover.shape[0] // 2
        return int(self.land_cover[x + half, y + half])

    def generate_path(self, dp, to_x, to_y, time_steps, rng=None) -> Walk:
        WalkerHelper.require_simple(dp, self.name())
        WalkerHelper.validate_time_steps(dp, to_x, to_y, time_steps)
        if self.land_cover.shape != (dp.grid_size, dp.grid_size):
            raise ValueError(f"Land cover of shape {self.land_cover.shape} does not match the dynamic program "
                             f"grid {dp.grid_size}x{dp.grid_size}")
        WalkerHelper.check_target(dp.at_or(to_x, to_y, time_steps), to_x, to_y, time_steps)

        def candidates(x, y, t):
            offsets = self._offsets[self._cover_at(x, y)]
            return offsets, WalkerHelper.bayesian_weights(dp, self.kernel, x, y, t, offsets)

        try:
            path = WalkerHelper.sample_backwards(to_x, to_y, time_steps, candidates, WalkerHelper.rng(rng))
        except Exception as e:
            logger.error(f"Failed to generate land cover walk to ({to_x}, {to_y}): {e}")
            raise
        return Walk(path)

    def name(self, short=False):
        return "lcw" if short else "Land Cover Walker"
