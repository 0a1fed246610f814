import numpy as np
import pandas as pd
import pytest

from random_walk_dp.core.DatasetWalksBuilder import DatasetWalksBuilder, rw_between
from random_walk_dp.core.StandardWalker import StandardWalker
from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.dp.builder import DynamicProgramBuilder
from random_walk_dp.errors import (
    NoDatasetSetError,
    NoDynamicProgramSetError,
    NoTimeStepsSetError,
    NoWalkerSetError,
)
from random_walk_dp.kernels.simple_rw import SimpleRwGenerator


@pytest.fixture(scope="module")
def dp():
    dp = DynamicProgramBuilder().simple().time_limit(10) \
        .kernel(Kernel.from_generator(SimpleRwGenerator())).build()
    dp.compute()
    return dp


@pytest.fixture
def df():
    return pd.DataFrame({
        "x": [0, 2, 3],
        "y": [0, 1, 3],
        "time": pd.date_range("2024-01-01 12:00", periods=3, freq="10min"),
    })


def builder(df, dp):
    return DatasetWalksBuilder().dataset(df).dp(dp).walker(StandardWalker()) \
        .rng(np.random.default_rng(42))


def test_rw_between(df, dp):
    walk = rw_between(df, dp, StandardWalker(), 1, 2, 5, rng=np.random.default_rng(1))
    assert len(walk) == 6
    assert walk[0] == (2, 1)
    assert walk[-1] == (3, 3)


def test_rw_between_out_of_range(df, dp):
    with pytest.raises(IndexError):
        rw_between(df, dp, StandardWalker(), 0, 3, 5)


def test_fixed_time_steps(df, dp):
    walks = builder(df, dp).time_steps(5).count(2).build()
    assert len(walks) == 4
    for walk in walks[:2]:
        assert len(walk) == 6
        assert walk[0] == (0, 0) and walk[-1] == (2, 1)
    for walk in walks[2:]:
        assert walk[0] == (2, 1) and walk[-1] == (3, 3)


def test_time_steps_by_dist(df, dp):
    walks = builder(df, dp).time_steps_by_dist(2).build()
    assert [len(walk) for walk in walks] == [7, 7]


def test_time_steps_by_time(df, dp):
    walks = builder(df, dp).time_steps_by_time(60).build()
    assert [len(walk) for walk in walks] == [11, 11]


def test_index_range(df, dp):
    walks = builder(df, dp).time_steps(5).from_index(1).to_index(2).build()
    assert len(walks) == 1
    assert walks[0][0] == (2, 1)


def test_build_dataframe(df, dp):
    result = builder(df, dp).time_steps_by_time(60).build_dataframe(time_col="time")
    assert list(result.columns) == ["segment", "walk", "step", "x", "y", "time"]
    assert len(result) == 22
    first = result[result["segment"] == 0]
    assert first["time"].iloc[0] == df["time"].iloc[0]
    assert first["time"].iloc[-1] == df["time"].iloc[1]
    assert first["step"].tolist() == list(range(11))


def test_missing_options(df, dp):
    with pytest.raises(NoDatasetSetError):
        DatasetWalksBuilder().dp(dp).walker(StandardWalker()).time_steps(5).build()
    with pytest.raises(NoDynamicProgramSetError):
        DatasetWalksBuilder().dataset(df).walker(StandardWalker()).time_steps(5).build()
    with pytest.raises(NoWalkerSetError):
        DatasetWalksBuilder().dataset(df).dp(dp).time_steps(5).build()
    with pytest.raises(NoTimeStepsSetError):
        DatasetWalksBuilder().dataset(df).dp(dp).walker(StandardWalker()).build()


def test_invalid_options(df):
    with pytest.raises(ValueError):
        DatasetWalksBuilder().dataset(df, x_col="lon")
    with pytest.raises(ValueError):
        DatasetWalksBuilder().count(0)
    with pytest.raises(ValueError):
        DatasetWalksBuilder().time_steps_by_time(0)
