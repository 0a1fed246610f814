import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from random_walk_dp.data_structures.walk import Walk
from random_walk_dp.dp.base import DynamicProgram

logger = logging.getLogger(__name__)


class Walker(ABC):
    """Samples walks from the origin to a target through a computed dynamic program.

    Every call draws from its own random generator (a fresh ``default_rng()`` unless
    one is passed), so walkers can be shared between threads.
    """

    @abstractmethod
    def generate_path(self, dp: DynamicProgram, to_x: int, to_y: int, time_steps: int,
                      rng: Optional[np.random.Generator] = None) -> Walk:
        ...

    def generate_paths(self, dp: DynamicProgram, qty: int, to_x: int, to_y: int, time_steps: int,
                       rng: Optional[np.random.Generator] = None) -> List[Walk]:
        return [self.generate_path(dp, to_x, to_y, time_steps, rng) for _ in range(qty)]

    @abstractmethod
    def name(self, short: bool = False) -> str:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
