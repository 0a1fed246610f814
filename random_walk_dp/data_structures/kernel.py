import logging
import math
from enum import IntEnum
from typing import Iterable, List, Tuple

import numpy as np

from random_walk_dp.errors import (
    KernelLiteralError,
    KernelRotationError,
    KernelSizeMismatchError,
    NotEnoughKernelsError,
    OneKernelRequiredError,
    SizeEvenError,
)

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    """Step directions. The value doubles as the variant index of direction-aware kernels."""
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3
    STAY = 4

    @property
    def offset(self) -> Tuple[int, int]:
        return _DIRECTION_OFFSETS[self]

    @classmethod
    def from_offset(cls, dx: int, dy: int) -> "Direction":
        for direction, offset in _DIRECTION_OFFSETS.items():
            if offset == (dx, dy):
                return direction
        raise ValueError(f"({dx}, {dy}) is not a unit step")


# y grows downwards, as in the land cover rasters
_DIRECTION_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.STAY: (0, 0),
}


class Kernel:
    """Odd-sized square matrix of one-step transition probabilities.

    Values are stored as ``probabilities[x][y]`` and addressed by their offset
    from the centre cell, so ``at(0, 0)`` is the probability of staying.
    """

    def __init__(self, name: Tuple[str, str] = ("ck", "Custom Kernel")):
        self.probabilities = np.zeros((0, 0), dtype=np.float64)
        self._name = tuple(name)

    @classmethod
    def try_new(cls, size: int, name: Tuple[str, str] = ("ck", "Custom Kernel")) -> "Kernel":
        kernel = cls(name)
        kernel.initialize(size)
        return kernel

    @classmethod
    def placeholder(cls) -> "Kernel":
        """Zeroed 3x3 kernel standing in for kernels that were not persisted."""
        return cls.try_new(3, ("ph", "Placeholder"))

    @staticmethod
    def from_generator(generator) -> "Kernel":
        qty = generator.generates_qty()
        if qty != 1:
            raise OneKernelRequiredError(generator.name()[1], qty)

        kernels = [Kernel(generator.name())]
        generator.prepare(kernels)
        generator.generate(kernels)
        return kernels[0]

    @staticmethod
    def multiple_from_generator(generator) -> List["Kernel"]:
        qty = generator.generates_qty()
        kernels = [Kernel(generator.name()) for _ in range(qty)]
        generator.prepare(kernels)
        generator.generate(kernels)

        if len(kernels) != qty:
            raise NotEnoughKernelsError(generator.name()[1], qty, len(kernels))
        return kernels

    def initialize(self, size: int) -> None:
        if size % 2 == 0:
            raise SizeEvenError(size)
        self.probabilities = np.zeros((size, size), dtype=np.float64)

    @property
    def size(self) -> int:
        return self.probabilities.shape[0]

    @property
    def radius(self) -> int:
        return self.size // 2

    def contains(self, dx: int, dy: int) -> bool:
        r = self.radius
        return -r <= dx <= r and -r <= dy <= r and self.size > 0

    def set(self, dx: int, dy: int, val: float) -> None:
        if not self.contains(dx, dy):
            raise IndexError(f"Offset ({dx}, {dy}) outside kernel of size {self.size}")
        self.probabilities[self.radius + dx, self.radius + dy] = val

    def at(self, dx: int, dy: int) -> float:
        if not self.contains(dx, dy):
            raise IndexError(f"Offset ({dx}, {dy}) outside kernel of size {self.size}")
        return float(self.probabilities[self.radius + dx, self.radius + dy])

    def at_or(self, dx: int, dy: int, default: float = 0.0) -> float:
        if not self.contains(dx, dy):
            return default
        return float(self.probabilities[self.radius + dx, self.radius + dy])

    def offsets(self) -> List[Tuple[int, int]]:
        """Offsets with a non-zero weight, x-major."""
        r = self.radius
        xs, ys = np.nonzero(self.probabilities)
        return [(int(x) - r, int(y) - r) for x, y in zip(xs, ys)]

    def rotate(self, degrees: int) -> None:
        """Rotate clockwise (y pointing down) by a multiple of 90 degrees."""
        if degrees % 90 != 0:
            raise KernelRotationError(degrees)
        # [x][y] storage turns a counter-clockwise array rotation into a clockwise grid rotation
        self.probabilities = np.ascontiguousarray(np.rot90(self.probabilities, k=(degrees // 90) % 4))

    def sum(self) -> float:
        return float(self.probabilities.sum())

    def normalized(self) -> "Kernel":
        kernel = self.copy()
        total = kernel.sum()
        if total > 0:
            kernel.probabilities /= total
        return kernel

    def copy(self) -> "Kernel":
        kernel = Kernel(self._name)
        kernel.probabilities = self.probabilities.copy()
        return kernel

    def name(self, short: bool = False) -> str:
        return self._name[0] if short else self._name[1]

    def _check_same_size(self, other: "Kernel") -> None:
        if self.size != other.size:
            raise KernelSizeMismatchError(self.size, other.size)

    def __mul__(self, other: "Kernel") -> "Kernel":
        if not isinstance(other, Kernel):
            return NotImplemented
        self._check_same_size(other)
        kernel = self.copy()
        kernel.probabilities *= other.probabilities
        return kernel

    def __imul__(self, other: "Kernel") -> "Kernel":
        if not isinstance(other, Kernel):
            return NotImplemented
        self._check_same_size(other)
        self.probabilities *= other.probabilities
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Kernel):
            return NotImplemented
        return self.probabilities.shape == other.probabilities.shape and \
            bool(np.array_equal(self.probabilities, other.probabilities))

    __hash__ = None

    def __repr__(self) -> str:
        rows = [self.name()]
        for y in range(self.size):
            rows.append("| " + " ".join(f"{self.probabilities[x, y]:g}" for x in range(self.size)) + " |")
        return "\n".join(rows)


def kernel_literal(values: Iterable[float], name: Tuple[str, str] = ("ck", "Custom Kernel")) -> Kernel:
    """Build a kernel from n*n values given row by row (rows are y, columns are x).

    Nested rows are accepted as well, they are flattened first.

    Raises:
        KernelLiteralError: if the number of values is not a perfect square
        SizeEvenError: if the resulting size is even
    """
    flat = np.asarray(list(values), dtype=np.float64).ravel()
    size = math.isqrt(flat.size)
    if size * size != flat.size:
        raise KernelLiteralError(flat.size)

    kernel = Kernel.try_new(size, name)
    kernel.probabilities = flat.reshape(size, size).T.copy()
    return kernel
