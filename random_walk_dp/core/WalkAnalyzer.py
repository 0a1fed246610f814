import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from random_walk_dp.data_structures.kernel import Direction
from random_walk_dp.data_structures.walk import Walk
from random_walk_dp.errors import InvalidWalkError, WalkTooShortError

logger = logging.getLogger(__name__)

MOVES = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


class WalkKind(Enum):
    SIMPLE_RW = "simple"
    BIASED_RW = "biased"
    CORRELATED_RW = "correlated"


@dataclass
class AnalysisThresholds:
    biased: float = 0.25
    correlated: float = 0.5


@dataclass
class AnalysisResult:
    kind: WalkKind
    direction: Optional[Direction] = None
    value: Optional[float] = None


class WalkAnalyzer:
    """Guess which kernel family produced a walk of unit steps.

    A walk is biased if one move direction makes up at least ``thresholds.biased`` of
    its steps, correlated if at least ``thresholds.correlated`` of consecutive steps repeat
    the previous move, and simple otherwise.
    """

    def __init__(self, walk: Walk, thresholds: Optional[AnalysisThresholds] = None):
        self.walk = walk if isinstance(walk, Walk) else Walk(walk)
        self.thresholds = thresholds if thresholds is not None else AnalysisThresholds()
        self.directional_biases = {direction: 0.0 for direction in Direction}
        self.persistence = 0.0

    def _steps(self):
        steps = []
        for i in range(1, len(self.walk)):
            (x0, y0), (x1, y1) = self.walk[i - 1], self.walk[i]
            try:
                steps.append(Direction.from_offset(x1 - x0, y1 - y0))
            except ValueError:
                raise InvalidWalkError(i, (x1 - x0, y1 - y0)) from None
        return steps

    def analyze(self) -> AnalysisResult:
        if len(self.walk) < 2:
            raise WalkTooShortError(len(self.walk))

        steps = self._steps()
        for direction in Direction:
            self.directional_biases[direction] = steps.count(direction) / len(steps)

        repeats = sum(1 for prev, cur in zip(steps, steps[1:]) if prev == cur and cur in MOVES)
        self.persistence = repeats / (len(steps) - 1) if len(steps) > 1 else 0.0

        direction = max(MOVES, key=lambda d: self.directional_biases[d])
        if self.directional_biases[direction] >= self.thresholds.biased:
            result = AnalysisResult(WalkKind.BIASED_RW, direction, self.directional_biases[direction])
        elif self.persistence >= self.thresholds.correlated:
            result = AnalysisResult(WalkKind.CORRELATED_RW, value=self.persistence)
        else:
            result = AnalysisResult(WalkKind.SIMPLE_RW)

        logger.info(f"Analyzed walk of {len(self.walk)} points: {result.kind.value}")
        return result
