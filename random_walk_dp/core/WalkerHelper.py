import logging
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from random_walk_dp.dp.base import DynamicProgram, DynamicProgramType
from random_walk_dp.errors import (
    InconsistentPathError,
    NoPathExistsError,
    RandomDistributionError,
    RequiresMultiDynamicProgramError,
    RequiresSingleDynamicProgramError,
)

logger = logging.getLogger(__name__)

# stay, west, north, east, south
PREDECESSOR_OFFSETS: List[Tuple[int, int]] = [(0, 0), (-1, 0), (0, -1), (1, 0), (0, 1)]


class WalkerHelper:
    """Helper class for the backward sampling shared by all walkers."""

    @staticmethod
    def rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
        return rng if rng is not None else np.random.default_rng()

    @staticmethod
    def require_simple(dp: DynamicProgram, walker: str) -> None:
        if dp.kind != DynamicProgramType.SIMPLE:
            raise RequiresSingleDynamicProgramError(walker)

    @staticmethod
    def require_multi(dp: DynamicProgram, walker: str, variants: Optional[int] = None) -> None:
        if dp.kind != DynamicProgramType.MULTI:
            raise RequiresMultiDynamicProgramError(walker, variants)
        if variants is not None and dp.variants() != variants:
            raise RequiresMultiDynamicProgramError(walker, variants)

    @staticmethod
    def validate_time_steps(dp: DynamicProgram, to_x: int, to_y: int, time_steps: int) -> None:
        """Negative time steps are invalid, time steps beyond the table have no mass anywhere."""
        if time_steps < 0:
            raise ValueError(f"Invalid time steps: {time_steps}")
        if time_steps > dp.time_limit:
            raise NoPathExistsError(to_x, to_y, time_steps)

    @staticmethod
    def check_target(mass: float, to_x: int, to_y: int, time_steps: int) -> None:
        if mass == 0.0:
            raise NoPathExistsError(to_x, to_y, time_steps)

    @staticmethod
    def square_offsets(radius: int) -> List[Tuple[int, int]]:
        return [(dx, dy) for dx in range(-radius, radius + 1) for dy in range(-radius, radius + 1)]

    @staticmethod
    def weighted_choice(weights: Sequence[float], rng: np.random.Generator,
                        position: Tuple[int, int], t: int) -> int:
        """Draw an index with probability proportional to its weight.

        Raises:
            InconsistentPathError: all weights are zero
            RandomDistributionError: a weight is negative or not finite
        """
        weights = np.asarray(weights, dtype=np.float64)
        if weights.size == 0 or not np.isfinite(weights).all() or (weights < 0).any():
            raise RandomDistributionError(f"Invalid weights at {position}, t={t}: {weights}")

        cumulative = np.cumsum(weights)
        total = cumulative[-1]
        if total == 0.0:
            raise InconsistentPathError(position[0], position[1], t)
        if not np.isfinite(total):
            raise RandomDistributionError(f"Weights at {position}, t={t} do not sum to a finite value")

        index = int(np.searchsorted(cumulative, rng.random() * total, side="right"))
        return min(index, int(np.flatnonzero(weights)[-1]))

    @staticmethod
    def bayesian_weights(dp, kernel, x: int, y: int, t: int,
                         offsets: Sequence[Tuple[int, int]]) -> List[float]:
        """``kernel(x - i, y - j) * P(i, j, t - 1) / P(x, y, t)`` for every predecessor ``(i, j) = (x, y) + offset``."""
        current = dp.at_or(x, y, t)
        if current == 0.0:
            raise InconsistentPathError(x, y, t)
        return [kernel.at_or(-dx, -dy) * dp.at_or(x + dx, y + dy, t - 1) / current for dx, dy in offsets]

    @staticmethod
    def finish_path(path: List[Tuple[int, int]], origin: Tuple[int, int]) -> List[Tuple[int, int]]:
        """Reverse a backward sampled path and put the reached origin in front."""
        path.reverse()
        path.insert(0, origin)
        return path

    @staticmethod
    def sample_backwards(to_x: int, to_y: int, time_steps: int, candidates: Callable,
                         rng: np.random.Generator) -> List[Tuple[int, int]]:
        """Walk back from the target to ``t = 0``.

        Args:
            to_x: Target X coordinate
            to_y: Target Y coordinate
            time_steps: Time step of the target
            candidates: ``candidates(x, y, t)`` returning predecessor offsets and their weights
            rng: Random generator used for every draw

        Returns:
            list of ``time_steps + 1`` points, origin first
        """
        path = []
        x, y = to_x, to_y
        for t in range(time_steps, 0, -1):
            path.append((x, y))
            offsets, weights = candidates(x, y, t)
            dx, dy = offsets[WalkerHelper.weighted_choice(weights, rng, (x, y), t)]
            x += dx
            y += dy
        return WalkerHelper.finish_path(path, (x, y))
