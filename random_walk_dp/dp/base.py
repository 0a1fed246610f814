import logging
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from random_walk_dp.data_structures.kernel import Kernel

logger = logging.getLogger(__name__)

TimingCallback = Callable[[str, float], None]

# tiles per axis used by compute_parallel
TILES_PER_AXIS = 3


class DynamicProgramType(Enum):
    SIMPLE = "simple"
    MULTI = "multi"


def tile_bounds(size: int, parts: int = TILES_PER_AXIS) -> List[Tuple[int, int]]:
    """Split ``range(size)`` into ``parts`` contiguous, possibly empty, chunks."""
    edges = [i * size // parts for i in range(parts + 1)]
    return [(edges[i], edges[i + 1]) for i in range(parts)]


def field_probabilities_from_types(field_types: np.ndarray, type_probabilities: Dict[int, float],
                                   default: float = 1.0) -> np.ndarray:
    """Map a grid of integer field type ids to field probabilities."""
    field_types = np.asarray(field_types, dtype=np.int64)
    probabilities = np.full(field_types.shape, default, dtype=np.float64)
    for field_type, probability in type_probabilities.items():
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability of field type {field_type} must lie in [0, 1], got {probability}")
        probabilities[field_types == field_type] = probability
    return probabilities


def convolve_region(prev: np.ndarray, kernel: Kernel, field: np.ndarray,
                    x0: int, x1: int, y0: int, y1: int) -> np.ndarray:
    """Propagate ``prev`` one step into the cells ``[x0, x1) x [y0, y1)``.

    Computes ``field[x, y] * sum(prev[x - dx, y - dy] * kernel(dx, dy))`` for every
    cell of the region. Sources outside the grid are dropped. Offsets are always
    accumulated in the same order, so any tiling of the grid yields identical bits.
    """
    n_x, n_y = prev.shape
    r = kernel.radius
    acc = np.zeros((x1 - x0, y1 - y0), dtype=np.float64)

    for dx, dy in kernel.offsets():
        weight = kernel.probabilities[r + dx, r + dy]
        sx0, sx1 = max(x0 - dx, 0), min(x1 - dx, n_x)
        sy0, sy1 = max(y0 - dy, 0), min(y1 - dy, n_y)
        if sx0 >= sx1 or sy0 >= sy1:
            continue
        acc[sx0 + dx - x0:sx1 + dx - x0, sy0 + dy - y0:sy1 + dy - y0] += prev[sx0:sx1, sy0:sy1] * weight

    return acc * field[x0:x1, y0:y1]


class DynamicProgram(ABC):
    """Time indexed occupancy probabilities on the grid ``[-T, T]^2``.

    The table is seeded with all mass at the origin at ``t = 0`` and filled by
    ``compute`` or ``compute_parallel``. Both recompute from scratch.
    """
    kind: DynamicProgramType

    def __init__(self, time_limit: int, field_probabilities: np.ndarray,
                 field_types: Optional[np.ndarray] = None,
                 timing_callback: Optional[TimingCallback] = None):
        self.time_limit = time_limit
        self._field_probabilities = np.asarray(field_probabilities, dtype=np.float64)
        self._field_types = None if field_types is None else np.asarray(field_types, dtype=np.int64)
        # mapping the field types were resolved with, checked again before saving them
        self.type_probabilities: Optional[Dict[int, float]] = None
        self.type_default = 1.0
        self.timing_callback = timing_callback
        self._table = np.zeros(self._table_shape(), dtype=np.float64)

    @property
    def grid_size(self) -> int:
        return 2 * self.time_limit + 1

    @property
    def table(self) -> np.ndarray:
        """Raw table, read-only view. Logical coordinates are shifted by ``time_limit``."""
        view = self._table.view()
        view.flags.writeable = False
        return view

    @abstractmethod
    def _table_shape(self) -> Tuple[int, ...]:
        ...

    @abstractmethod
    def _layers(self) -> List[Tuple[Kernel, Tuple[int, ...]]]:
        """Kernel and table index prefix (after time) of every variant."""

    def limits(self) -> Tuple[int, int]:
        return -self.time_limit, self.time_limit

    def field_probabilities(self) -> np.ndarray:
        return self._field_probabilities.copy()

    def field_types(self) -> Optional[np.ndarray]:
        return None if self._field_types is None else self._field_types.copy()

    def in_range(self, x: int, y: int, t: int) -> bool:
        T = self.time_limit
        return -T <= x <= T and -T <= y <= T and 0 <= t <= T

    def _check_range(self, x: int, y: int, t: int) -> None:
        if not self.in_range(x, y, t):
            raise IndexError(f"({x}, {y}, t={t}) outside dynamic program with time limit {self.time_limit}")

    def _reset(self) -> None:
        self._table.fill(0.0)
        for _, prefix in self._layers():
            self._table[(0,) + prefix + (self.time_limit, self.time_limit)] = 1.0

    def _apply_kernel_at(self, x: int, y: int, t: int, kernel: Kernel, prefix: Tuple[int, ...]) -> None:
        self._check_range(x, y, t)
        if t == 0:
            raise IndexError("Kernels can only be applied from t=1 onwards")
        ix, iy = x + self.time_limit, y + self.time_limit
        value = convolve_region(self._table[(t - 1,) + prefix], kernel, self._field_probabilities,
                                ix, ix + 1, iy, iy + 1)
        self._table[(t,) + prefix + (ix, iy)] = value[0, 0]

    def _report(self, label: str, seconds: float) -> None:
        logger.info(f"{label} finished in {seconds:.3f}s (time limit {self.time_limit})")
        if self.timing_callback is not None:
            self.timing_callback(label, seconds)

    def compute(self) -> None:
        start = time.perf_counter()
        self._reset()
        n = self.grid_size
        for t in range(1, self.time_limit + 1):
            for kernel, prefix in self._layers():
                self._table[(t,) + prefix] = convolve_region(
                    self._table[(t - 1,) + prefix], kernel, self._field_probabilities, 0, n, 0, n)
        self._report("compute", time.perf_counter() - start)

    def _compute_tile(self, t: int, x_bounds: Tuple[int, int], y_bounds: Tuple[int, int]):
        (x0, x1), (y0, y1) = x_bounds, y_bounds
        results = []
        for kernel, prefix in self._layers():
            prev = self._table[(t - 1,) + prefix].view()
            prev.flags.writeable = False
            results.append((prefix, convolve_region(prev, kernel, self._field_probabilities, x0, x1, y0, y1)))
        return x_bounds, y_bounds, results

    def compute_parallel(self, workers: Optional[int] = None) -> None:
        """Like ``compute``, but every time step is split into a 3x3 grid of tiles
        computed by a thread pool. Step ``t`` starts only once all tiles of ``t - 1``
        have been merged, and the result is identical to ``compute``.
        """
        start = time.perf_counter()
        self._reset()
        bounds = tile_bounds(self.grid_size)
        tiles = [(bx, by) for bx in bounds for by in bounds if bx[0] < bx[1] and by[0] < by[1]]

        with ThreadPoolExecutor(max_workers=workers or TILES_PER_AXIS ** 2) as executor:
            for t in range(1, self.time_limit + 1):
                futures = [executor.submit(self._compute_tile, t, bx, by) for bx, by in tiles]
                for future in as_completed(futures):
                    (x0, x1), (y0, y1), results = future.result()
                    for prefix, values in results:
                        self._table[(t,) + prefix + (slice(x0, x1), slice(y0, y1))] = values

        self._report("compute_parallel", time.perf_counter() - start)

    def to_string(self, t: int, variant: Optional[int] = None) -> str:
        """Render one time slice with one row per y coordinate."""
        layer = self._slice(t, variant)
        return "\n".join(" ".join(f"{layer[x, y]:g}" for x in range(self.grid_size))
                         for y in range(self.grid_size))

    def print(self, t: int, variant: Optional[int] = None) -> None:
        print(self.to_string(t, variant))

    @abstractmethod
    def _slice(self, t: int, variant: Optional[int]) -> np.ndarray:
        ...

    def __eq__(self, other) -> bool:
        if not isinstance(other, DynamicProgram):
            return NotImplemented
        return self.kind == other.kind and self.time_limit == other.time_limit and \
            bool(np.array_equal(self._table, other._table))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(time_limit={self.time_limit})"
