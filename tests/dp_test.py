import numpy as np
import pytest

from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.dp.base import DynamicProgramType, convolve_region, tile_bounds
from random_walk_dp.dp.builder import DynamicProgramBuilder
from random_walk_dp.dp.multi import MultiDynamicProgram
from random_walk_dp.dp.simple import SimpleDynamicProgram
from random_walk_dp.kernels.correlated_rw import CorrelatedRwGenerator
from random_walk_dp.kernels.simple_rw import SimpleRwGenerator


def simple_dp(time_limit, **kwargs):
    builder = DynamicProgramBuilder().simple().time_limit(time_limit) \
        .kernel(Kernel.from_generator(SimpleRwGenerator()))
    for key, value in kwargs.items():
        getattr(builder, key)(value)
    return builder.build()


def test_simple_rw_one_step():
    dp = simple_dp(1)
    assert isinstance(dp, SimpleDynamicProgram)
    assert dp.kind == DynamicProgramType.SIMPLE
    dp.compute()

    assert dp.at(0, 0, 0) == 1.0
    for x, y in [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]:
        assert dp.at(x, y, 1) == pytest.approx(0.2)
    assert dp.at(1, 1, 1) == 0.0


def test_uncomputed_table_is_zero():
    dp = simple_dp(3)
    assert not dp.table.any()


def test_mass_is_conserved_without_barriers():
    dp = simple_dp(6)
    dp.compute()
    for t in range(dp.time_limit + 1):
        assert dp.table[t].sum() == pytest.approx(1.0)


def test_mass_only_reaches_manhattan_distance():
    dp = simple_dp(5)
    dp.compute()
    assert dp.at(2, 1, 3) > 0.0
    assert dp.at(2, 2, 3) == 0.0


def test_apply_kernel_at():
    field_probabilities = np.ones((21, 21))
    field_probabilities[10][10] = 0.75
    dp = simple_dp(10, field_probabilities=field_probabilities)

    dp.set(0, 0, 0, 0.5)
    dp.set(-1, 0, 0, 0.5)
    dp.apply_kernel_at(0, 0, 1)

    assert dp.at(0, 0, 1) == pytest.approx(0.15)


def test_apply_kernel_at_first_step_rejected():
    dp = simple_dp(2)
    with pytest.raises(IndexError):
        dp.apply_kernel_at(0, 0, 0)


def test_barrier_stays_empty():
    dp = DynamicProgramBuilder().simple().time_limit(10) \
        .kernel(Kernel.from_generator(SimpleRwGenerator())) \
        .add_single_barrier((1, 0)) \
        .add_rect_barrier((-3, -3), (-2, 2)) \
        .build()
    dp.compute()

    for t in range(1, 11):
        assert dp.at(1, 0, t) == 0.0
        for x in (-3, -2):
            for y in range(-3, 3):
                assert dp.at(x, y, t) == 0.0
    assert dp.at(2, 0, 10) > 0.0


def test_destination_masking():
    field_probabilities = np.ones((5, 5))
    field_probabilities[3][2] = 0.5  # (1, 0)
    dp = simple_dp(2, field_probabilities=field_probabilities)
    dp.compute()

    assert dp.at(1, 0, 1) == pytest.approx(0.1)
    # mass leaving the damped cell is not damped a second time
    assert dp.at(2, 0, 2) == pytest.approx(0.1 * 0.2)


def test_at_bounds():
    dp = simple_dp(2)
    dp.compute()
    with pytest.raises(IndexError):
        dp.at(3, 0, 1)
    with pytest.raises(IndexError):
        dp.at(0, 0, 3)
    with pytest.raises(IndexError):
        dp.at(0, -3, 1)
    assert dp.at_or(3, 0, 1) == 0.0
    assert dp.at_or(0, 0, -1, 0.5) == 0.5
    assert dp.at_or(0, 0, 1) == pytest.approx(0.2)
    assert dp.limits() == (-2, 2)


def test_field_probabilities_is_a_copy():
    dp = simple_dp(2)
    mask = dp.field_probabilities()
    mask[:] = 0.0
    assert dp.field_probabilities().min() == 1.0
    assert dp.field_types() is None


def test_recompute_from_scratch():
    dp = simple_dp(4)
    dp.compute()
    first = dp.table.copy()
    dp.set(0, 0, 2, 99.0)
    dp.compute()
    assert np.array_equal(first, dp.table)


def test_table_is_read_only():
    dp = simple_dp(2)
    with pytest.raises(ValueError):
        dp.table[0, 0, 0] = 1.0


def test_to_string():
    dp = simple_dp(1)
    dp.compute()
    rows = dp.to_string(1).splitlines()
    assert rows == ["0 0.2 0", "0.2 0.2 0.2", "0 0.2 0"]


def test_timing_callback():
    calls = []
    dp = simple_dp(3, timing_callback=lambda label, seconds: calls.append((label, seconds)))
    dp.compute()
    dp.compute_parallel()
    assert [label for label, _ in calls] == ["compute", "compute_parallel"]
    assert all(seconds >= 0 for _, seconds in calls)


def test_equality():
    a = simple_dp(3)
    b = simple_dp(3)
    a.compute()
    assert a != b
    b.compute()
    assert a == b
    assert a != simple_dp(4)


def test_multi_variants_follow_their_kernels():
    kernels = Kernel.multiple_from_generator(CorrelatedRwGenerator(0.5))
    dp = DynamicProgramBuilder().multi().time_limit(3).kernels(kernels).build()
    assert isinstance(dp, MultiDynamicProgram)
    assert dp.variants() == 5
    dp.compute()

    for variant, kernel in enumerate(kernels):
        assert dp.at(0, 0, 0, variant) == 1.0
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                assert dp.at(dx, dy, 1, variant) == pytest.approx(kernel.at(dx, dy))
        assert dp.table[3, variant].sum() == pytest.approx(1.0)


def test_multi_shared_mask():
    kernels = Kernel.multiple_from_generator(CorrelatedRwGenerator(0.5))
    dp = DynamicProgramBuilder().multi().time_limit(4).kernels(kernels) \
        .add_single_barrier((0, -1)).build()
    dp.compute()
    for variant in range(5):
        for t in range(1, 5):
            assert dp.at(0, -1, t, variant) == 0.0


def test_multi_access():
    kernels = Kernel.multiple_from_generator(CorrelatedRwGenerator(0.5))
    dp = DynamicProgramBuilder().multi().time_limit(2).kernels(kernels).build()
    dp.set(1, 1, 1, 3, 0.4)
    assert dp.at(1, 1, 1, 3) == 0.4
    assert dp.at_or(1, 1, 1, 5) == 0.0
    with pytest.raises(IndexError):
        dp.at(0, 0, 0, 5)
    with pytest.raises(ValueError):
        dp.to_string(0)
    assert len(dp.to_string(0, 2).splitlines()) == 5


def test_convolve_region_clips_edges():
    prev = np.zeros((3, 3))
    prev[0, 1] = 1.0
    kernel = Kernel.from_generator(SimpleRwGenerator())
    result = convolve_region(prev, kernel, np.ones((3, 3)), 0, 3, 0, 3)
    assert result.sum() == pytest.approx(0.8)
    assert result[0, 1] == pytest.approx(0.2)


def test_tile_bounds():
    assert tile_bounds(21) == [(0, 7), (7, 14), (14, 21)]
    assert tile_bounds(1) == [(0, 0), (0, 0), (0, 1)]
