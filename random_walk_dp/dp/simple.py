from typing import Dict, Optional

import numpy as np

from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.dp import store
from random_walk_dp.dp.base import DynamicProgram, DynamicProgramType, TimingCallback


class SimpleDynamicProgram(DynamicProgram):
    """Single table driven by one kernel, shape ``(T+1, 2T+1, 2T+1)``."""
    kind = DynamicProgramType.SIMPLE

    def __init__(self, time_limit: int, kernel: Kernel, field_probabilities: np.ndarray,
                 field_types: Optional[np.ndarray] = None,
                 timing_callback: Optional[TimingCallback] = None):
        self.kernel = kernel
        super().__init__(time_limit, field_probabilities, field_types, timing_callback)

    def _table_shape(self):
        n = 2 * self.time_limit + 1
        return self.time_limit + 1, n, n

    def _layers(self):
        return [(self.kernel, ())]

    def _slice(self, t, variant):
        if variant is not None:
            raise ValueError("Simple dynamic programs have no variants")
        return self._table[t]

    def at(self, x: int, y: int, t: int) -> float:
        self._check_range(x, y, t)
        return float(self._table[t, x + self.time_limit, y + self.time_limit])

    def at_or(self, x: int, y: int, t: int, default: float = 0.0) -> float:
        if not self.in_range(x, y, t):
            return default
        return float(self._table[t, x + self.time_limit, y + self.time_limit])

    def set(self, x: int, y: int, t: int, val: float) -> None:
        self._check_range(x, y, t)
        self._table[t, x + self.time_limit, y + self.time_limit] = val

    def apply_kernel_at(self, x: int, y: int, t: int) -> None:
        self._apply_kernel_at(x, y, t, self.kernel, ())

    def save(self, path, field_types: bool = False) -> None:
        store.save_dp(self, path, field_types)

    @classmethod
    def load(cls, path, type_probabilities: Optional[Dict[int, float]] = None,
             default: float = 1.0) -> "SimpleDynamicProgram":
        """Restore a table written by ``save``. The kernel is replaced by a placeholder.

        Args:
            path: File written by ``save``
            type_probabilities: Field type to probability mapping, required when the file
                was saved with ``field_types=True``
            default: Probability of field types missing from ``type_probabilities``
        """
        data = store.load_dp(path, multi=False, typed=type_probabilities is not None)
        field_probabilities, field_types = store.field_mask(data, type_probabilities, default)

        dp = cls(data.time_limit, Kernel.placeholder(), field_probabilities, field_types)
        dp._table = data.table
        if field_types is not None:
            dp.type_probabilities = dict(type_probabilities)
            dp.type_default = default
        return dp
