import logging
from typing import List, Optional

import pandas as pd

from random_walk_dp.core.Walker import Walker
from random_walk_dp.data_structures.walk import Walk
from random_walk_dp.dp.base import DynamicProgram
from random_walk_dp.errors import (
    NoDatasetSetError,
    NoDynamicProgramSetError,
    NoTimeStepsSetError,
    NoWalkerSetError,
)

logger = logging.getLogger(__name__)


def rw_between(df: pd.DataFrame, dp: DynamicProgram, walker: Walker, from_idx: int, to_idx: int,
               time_steps: int, x_col: str = "x", y_col: str = "y", rng=None) -> Walk:
    """Generate one walk between two rows of a dataset of grid points.

    The dynamic program is centred on the origin, so the target is moved relative to
    the start point and the walk is moved back afterwards.
    """
    if not (0 <= from_idx < len(df) and 0 <= to_idx < len(df)):
        raise IndexError(f"Point indices ({from_idx}, {to_idx}) out of bounds for dataset of {len(df)} points")

    from_x, from_y = int(df[x_col].iloc[from_idx]), int(df[y_col].iloc[from_idx])
    to_x, to_y = int(df[x_col].iloc[to_idx]), int(df[y_col].iloc[to_idx])

    walk = walker.generate_path(dp, to_x - from_x, to_y - from_y, time_steps, rng)
    return walk.translate((from_x, from_y))


class DatasetWalksBuilder:
    """Generate walks between consecutive points of a dataset.

    The dataset is a DataFrame with integer grid coordinates (``x``/``y`` by default). The
    number of time steps per segment is either fixed, derived from a time column or from
    the Manhattan distance of the two points.
    """

    def __init__(self):
        self._df: Optional[pd.DataFrame] = None
        self._x_col = "x"
        self._y_col = "y"
        self._dp: Optional[DynamicProgram] = None
        self._walker: Optional[Walker] = None
        self._from = 0
        self._to: Optional[int] = None
        self._count = 1
        self._time_steps = None
        self._rng = None

    def dataset(self, df: pd.DataFrame, x_col: str = "x", y_col: str = "y") -> "DatasetWalksBuilder":
        missing = [c for c in (x_col, y_col) if c not in df.columns]
        if missing:
            raise ValueError(f"Dataset is missing the columns {missing}")
        self._df = df.reset_index(drop=True)
        self._x_col, self._y_col = x_col, y_col
        return self

    def dp(self, dp: DynamicProgram) -> "DatasetWalksBuilder":
        self._dp = dp
        return self

    def walker(self, walker: Walker) -> "DatasetWalksBuilder":
        self._walker = walker
        return self

    def from_index(self, index: int) -> "DatasetWalksBuilder":
        self._from = index
        return self

    def to_index(self, index: int) -> "DatasetWalksBuilder":
        self._to = index
        return self

    def count(self, count: int) -> "DatasetWalksBuilder":
        if count <= 0:
            raise ValueError(f"Invalid walk count: {count}")
        self._count = count
        return self

    def rng(self, rng) -> "DatasetWalksBuilder":
        self._rng = rng
        return self

    def time_steps(self, time_steps: int) -> "DatasetWalksBuilder":
        self._time_steps = ("fixed", time_steps)
        return self

    def time_steps_by_time(self, step_seconds: float, time_col: str = "time") -> "DatasetWalksBuilder":
        """One time step per ``step_seconds`` between the timestamps of two points."""
        if step_seconds <= 0:
            raise ValueError(f"Invalid time step length: {step_seconds}")
        self._time_steps = ("time", step_seconds, time_col)
        return self

    def time_steps_by_dist(self, multiplier: float) -> "DatasetWalksBuilder":
        """``multiplier`` time steps per unit of Manhattan distance between two points."""
        self._time_steps = ("distance", multiplier)
        return self

    def _segment_time_steps(self, i: int) -> int:
        policy = self._time_steps
        if policy[0] == "fixed":
            return policy[1]
        if policy[0] == "time":
            _, step_seconds, time_col = policy
            times = pd.to_datetime(self._df[time_col])
            diff = (times.iloc[i + 1] - times.iloc[i]).total_seconds()
            return int(diff / step_seconds)

        xs, ys = self._df[self._x_col], self._df[self._y_col]
        dist = abs(int(xs.iloc[i + 1]) - int(xs.iloc[i])) + abs(int(ys.iloc[i + 1]) - int(ys.iloc[i]))
        return int(dist * policy[1])

    def _validate(self) -> None:
        if self._df is None:
            raise NoDatasetSetError()
        if self._dp is None:
            raise NoDynamicProgramSetError()
        if self._walker is None:
            raise NoWalkerSetError()
        if self._time_steps is None:
            raise NoTimeStepsSetError()

    def build(self) -> List[Walk]:
        self._validate()
        to = self._to if self._to is not None else len(self._df) - 1

        walks = []
        for i in range(self._from, to):
            time_steps = self._segment_time_steps(i)
            for _ in range(self._count):
                try:
                    walks.append(rw_between(self._df, self._dp, self._walker, i, i + 1, time_steps,
                                            self._x_col, self._y_col, self._rng))
                except Exception as e:
                    logger.error(f"Could not generate walk between points {i} and {i + 1}: {e}")
                    raise
            logger.info(f"Generated {self._count} walk(s) between points {i} and {i + 1}, {time_steps} time steps")
        return walks

    def build_dataframe(self, time_col: Optional[str] = None) -> pd.DataFrame:
        """Like ``build``, but returns one row per walk point.

        Columns are ``segment``, ``walk``, ``step``, ``x`` and ``y``. With ``time_col`` the
        timestamps of each segment's points are interpolated between its two observations.
        """
        walks = self.build()
        to = self._to if self._to is not None else len(self._df) - 1
        frames = []
        index = 0
        for i in range(self._from, to):
            for k in range(self._count):
                seg_df = walks[index].to_dataframe()
                index += 1
                seg_df.insert(0, "step", range(len(seg_df)))
                seg_df.insert(0, "walk", k)
                seg_df.insert(0, "segment", i)
                if time_col is not None:
                    start, end = pd.to_datetime(self._df[time_col].iloc[[i, i + 1]])
                    seg_df[time_col] = pd.date_range(start=start, end=end, periods=len(seg_df)).to_list()
                frames.append(seg_df)

        if not frames:
            return pd.DataFrame(columns=["segment", "walk", "step", "x", "y"])
        return pd.concat(frames, ignore_index=True)
