import logging
from typing import Optional

from random_walk_dp.core.Walker import Walker
from random_walk_dp.core.WalkerHelper import PREDECESSOR_OFFSETS, WalkerHelper
from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.data_structures.walk import Walk

logger = logging.getLogger(__name__)


class StandardWalker(Walker):
    def __init__(self, kernel: Optional[Kernel] = None):
        """
            Standard Walker class.

            Args:
                kernel: Optional kernel the dynamic program was computed with. Predecessors are then taken
                    from the whole kernel support and weighted by the kernel. Without a kernel the
                    predecessors are the cell itself and its four orthogonal neighbours, weighted by
                    their forward probability only.
        """
        self.kernel = kernel

    def _candidates(self, dp):
        if self.kernel is None:
            def candidates(x, y, t):
                return PREDECESSOR_OFFSETS, [dp.at_or(x + dx, y + dy, t - 1) for dx, dy in PREDECESSOR_OFFSETS]
        else:
            offsets = [(-dx, -dy) for dx, dy in self.kernel.offsets()]

            def candidates(x, y, t):
                return offsets, [dp.at_or(x + dx, y + dy, t - 1) * self.kernel.at(-dx, -dy) for dx, dy in offsets]
        return candidates

    def generate_path(self, dp, to_x, to_y, time_steps, rng=None) -> Walk:
        WalkerHelper.require_simple(dp, self.name())
        WalkerHelper.validate_time_steps(dp, to_x, to_y, time_steps)
        WalkerHelper.check_target(dp.at_or(to_x, to_y, time_steps), to_x, to_y, time_steps)

        try:
            path = WalkerHelper.sample_backwards(to_x, to_y, time_steps, self._candidates(dp),
                                                 WalkerHelper.rng(rng))
        except Exception as e:
            logger.error(f"Failed to generate walk to ({to_x}, {to_y}): {e}")
            raise
        return Walk(path)

    def name(self, short=False):
        return "sw" if short else "Standard Walker"
