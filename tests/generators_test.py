import pytest

from random_walk_dp.data_structures.kernel import Direction, Kernel, kernel_literal
from random_walk_dp.errors import NotEnoughKernelsError, OneKernelRequiredError, SizeNotOddError
from random_walk_dp.kernels.biased_correlated_rw import BiasedCorrelatedRwGenerator
from random_walk_dp.kernels.biased_rw import BiasedRwGenerator
from random_walk_dp.kernels.correlated_rw import CorrelatedRwGenerator
from random_walk_dp.kernels.levy_walk import LevyWalkGenerator
from random_walk_dp.kernels.normal_dist import NormalDistGenerator
from random_walk_dp.kernels.simple_rw import SimpleRwGenerator


def test_simple_rw():
    kernel = Kernel.from_generator(SimpleRwGenerator())
    assert kernel.size == 3
    for dx, dy in [(0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)]:
        assert kernel.at(dx, dy) == 0.2
    for dx, dy in [(-1, -1), (1, -1), (-1, 1), (1, 1)]:
        assert kernel.at(dx, dy) == 0.0
    assert kernel.sum() == pytest.approx(1.0)


def test_biased_rw():
    kernel = Kernel.from_generator(BiasedRwGenerator(0.5, Direction.NORTH))
    assert kernel.at(0, -1) == 0.5
    for direction in (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.STAY):
        assert kernel.at(*direction.offset) == 0.125
    assert kernel.sum() == pytest.approx(1.0)


def test_biased_rw_invalid_probability():
    with pytest.raises(ValueError):
        BiasedRwGenerator(1.5, Direction.EAST)


def test_correlated_rw():
    kernels = Kernel.multiple_from_generator(CorrelatedRwGenerator(0.5))

    expected = [
        kernel_literal([0.0, 0.5, 0.0,
                        0.125, 0.125, 0.125,
                        0.0, 0.125, 0.0]),
        kernel_literal([0.0, 0.125, 0.0,
                        0.125, 0.125, 0.5,
                        0.0, 0.125, 0.0]),
        kernel_literal([0.0, 0.125, 0.0,
                        0.125, 0.125, 0.125,
                        0.0, 0.5, 0.0]),
        kernel_literal([0.0, 0.125, 0.0,
                        0.5, 0.125, 0.125,
                        0.0, 0.125, 0.0]),
        kernel_literal([0.0, 0.125, 0.0,
                        0.125, 0.5, 0.125,
                        0.0, 0.125, 0.0]),
    ]
    assert len(kernels) == 5
    for kernel, correct in zip(kernels, expected):
        assert kernel == correct


def test_correlated_rw_matches_biased_rw():
    kernels = Kernel.multiple_from_generator(CorrelatedRwGenerator(0.7))
    for direction in Direction:
        assert kernels[direction].probabilities == pytest.approx(
            Kernel.from_generator(BiasedRwGenerator(0.7, direction)).probabilities)


def test_correlated_rw_wrong_kernel_count():
    generator = CorrelatedRwGenerator(0.5)
    with pytest.raises(NotEnoughKernelsError):
        generator.prepare([Kernel(), Kernel()])


def test_biased_correlated_rw():
    kernels = Kernel.multiple_from_generator(BiasedCorrelatedRwGenerator(0.5, Direction.NORTH, 0.5))
    assert len(kernels) == 5

    north = kernels[Direction.NORTH]
    assert north.at(0, -1) == pytest.approx(0.8)
    for direction in (Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.STAY):
        assert north.at(*direction.offset) == pytest.approx(0.05)

    for kernel in kernels:
        assert kernel.sum() == pytest.approx(1.0)


def test_levy_walk():
    kernel = Kernel.from_generator(LevyWalkGenerator())
    assert kernel.size == 21
    assert kernel.sum() == pytest.approx(1.0)
    assert kernel.at(10, 0) == pytest.approx(0.05 / 1.2)
    assert kernel.at(0, -10) == pytest.approx(0.05 / 1.2)
    assert kernel.at(0, 0) == pytest.approx(0.2 / 1.2)
    assert kernel.at(5, 0) == 0.0


def test_levy_walk_custom_distance():
    kernel = Kernel.from_generator(LevyWalkGenerator(jump_distance=4))
    assert kernel.size == 9
    assert kernel.at(-4, 0) > 0.0


def test_normal_dist():
    kernel = Kernel.from_generator(NormalDistGenerator(2.0, 9))
    assert kernel.size == 9
    assert kernel.sum() == pytest.approx(1.0)
    assert kernel.at(0, 0) == kernel.probabilities.max()
    assert kernel.at(2, 1) == pytest.approx(kernel.at(-2, -1))
    assert kernel.at(2, 1) == pytest.approx(kernel.at(1, 2))
    assert kernel.at(1, 0) > kernel.at(2, 0)


def test_normal_dist_even_size():
    with pytest.raises(SizeNotOddError):
        Kernel.from_generator(NormalDistGenerator(1.0, 4))


@pytest.mark.parametrize("size", [1, 0, -3])
def test_normal_dist_too_small(size):
    with pytest.raises(SizeNotOddError):
        Kernel.from_generator(NormalDistGenerator(1.0, size))


def test_single_kernel_generator_rejects_lists():
    with pytest.raises(OneKernelRequiredError):
        SimpleRwGenerator().prepare([Kernel(), Kernel()])
