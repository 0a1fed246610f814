import numpy as np
import pytest

from random_walk_dp.data_structures.kernel import Direction, Kernel
from random_walk_dp.dp.builder import DynamicProgramBuilder
from random_walk_dp.kernels.biased_correlated_rw import BiasedCorrelatedRwGenerator
from random_walk_dp.kernels.levy_walk import LevyWalkGenerator
from random_walk_dp.kernels.normal_dist import NormalDistGenerator
from random_walk_dp.kernels.simple_rw import SimpleRwGenerator


def build_pair(builder_factory):
    serial = builder_factory().build()
    parallel = builder_factory().build()
    serial.compute()
    return serial, parallel


@pytest.mark.parametrize("generator", [SimpleRwGenerator(), NormalDistGenerator(1.5, 5),
                                       LevyWalkGenerator(jump_distance=3)])
def test_parallel_matches_serial(generator):
    kernel = Kernel.from_generator(generator)

    def factory():
        return DynamicProgramBuilder().simple().time_limit(12).kernel(kernel) \
            .add_rect_barrier((2, -4), (3, 4)).add_single_barrier((-5, -5))

    serial, parallel = build_pair(factory)
    parallel.compute_parallel()
    assert np.array_equal(serial.table, parallel.table)
    assert serial == parallel


def test_parallel_matches_serial_multi():
    kernels = Kernel.multiple_from_generator(BiasedCorrelatedRwGenerator(0.4, Direction.EAST, 0.6))

    def factory():
        return DynamicProgramBuilder().multi().time_limit(9).kernels(kernels).add_single_barrier((1, 1))

    serial, parallel = build_pair(factory)
    parallel.compute_parallel(workers=2)
    assert np.array_equal(serial.table, parallel.table)


@pytest.mark.parametrize("time_limit", [0, 1, 2])
def test_parallel_small_grids(time_limit):
    kernel = Kernel.from_generator(SimpleRwGenerator())

    def factory():
        return DynamicProgramBuilder().simple().time_limit(time_limit).kernel(kernel)

    serial, parallel = build_pair(factory)
    parallel.compute_parallel()
    assert np.array_equal(serial.table, parallel.table)
    assert parallel.at(0, 0, 0) == 1.0


def test_parallel_recompute():
    kernel = Kernel.from_generator(SimpleRwGenerator())
    dp = DynamicProgramBuilder().simple().time_limit(6).kernel(kernel).build()
    dp.compute_parallel()
    first = dp.table.copy()
    dp.compute_parallel()
    assert np.array_equal(first, dp.table)
