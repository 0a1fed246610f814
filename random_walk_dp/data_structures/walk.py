import math
from typing import Iterable, Iterator, List, Tuple

import numpy as np
import pandas as pd
import shapely
from shapely.geometry import LineString

Point = Tuple[int, int]


class Walk:
    """Ordered sequence of integer grid points, origin first and target last."""

    def __init__(self, points: Iterable[Point] = ()):
        self.points: List[Point] = [(int(x), int(y)) for x, y in points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return Walk(self.points[item])
        return self.points[item]

    def __eq__(self, other) -> bool:
        if isinstance(other, Walk):
            return self.points == other.points
        if isinstance(other, (list, tuple)):
            return self.points == [tuple(p) for p in other]
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Walk({self.points})"

    def is_empty(self) -> bool:
        return not self.points

    def translate(self, by: Point) -> "Walk":
        bx, by_ = by
        return Walk((x + bx, y + by_) for x, y in self.points)

    def scale(self, by: Point) -> "Walk":
        sx, sy = by
        return Walk((x * sx, y * sy) for x, y in self.points)

    def rotate(self, degrees: float) -> "Walk":
        """Rotate all points around the origin and snap them back onto the grid."""
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        return Walk((round(x * cos - y * sin), round(y * cos + x * sin)) for x, y in self.points)

    def _line(self) -> LineString:
        if not self.points:
            raise ValueError("Empty walk has no geometry")
        coords = self.points if len(self.points) > 1 else self.points * 2
        return LineString(coords)

    def frechet_distance(self, other: "Walk") -> float:
        """Discrete Fréchet distance between the two walks' vertex sequences."""
        return float(shapely.frechet_distance(self._line(), other._line()))

    def directness_deviation(self) -> float:
        """Fréchet distance between the walk and the straight line from its start to its end."""
        straight = LineString([self.points[0], self.points[-1]]) if self.points else None
        return float(shapely.frechet_distance(self._line(), straight))

    def to_numpy(self) -> np.ndarray:
        return np.array(self.points, dtype=np.int64).reshape(-1, 2)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.to_numpy(), columns=["x", "y"])
