from typing import Dict, List, Optional

import numpy as np

from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.dp import store
from random_walk_dp.dp.base import DynamicProgram, DynamicProgramType, TimingCallback


class MultiDynamicProgram(DynamicProgram):
    """One table per kernel variant, shape ``(T+1, V, 2T+1, 2T+1)``.

    Every variant is propagated with its own kernel. All variants share the field mask.
    """
    kind = DynamicProgramType.MULTI

    def __init__(self, time_limit: int, kernels: List[Kernel], field_probabilities: np.ndarray,
                 field_types: Optional[np.ndarray] = None,
                 timing_callback: Optional[TimingCallback] = None):
        self.kernels = list(kernels)
        super().__init__(time_limit, field_probabilities, field_types, timing_callback)

    def _table_shape(self):
        n = 2 * self.time_limit + 1
        return self.time_limit + 1, len(self.kernels), n, n

    def _layers(self):
        return [(kernel, (v,)) for v, kernel in enumerate(self.kernels)]

    def _slice(self, t, variant):
        if variant is None:
            raise ValueError("A variant is required for multi dynamic programs")
        return self._table[t, variant]

    def variants(self) -> int:
        return len(self.kernels)

    def _check_variant(self, variant: int) -> None:
        if not 0 <= variant < self.variants():
            raise IndexError(f"Variant {variant} outside [0, {self.variants()})")

    def at(self, x: int, y: int, t: int, variant: int) -> float:
        self._check_range(x, y, t)
        self._check_variant(variant)
        return float(self._table[t, variant, x + self.time_limit, y + self.time_limit])

    def at_or(self, x: int, y: int, t: int, variant: int, default: float = 0.0) -> float:
        if not self.in_range(x, y, t) or not 0 <= variant < self.variants():
            return default
        return float(self._table[t, variant, x + self.time_limit, y + self.time_limit])

    def set(self, x: int, y: int, t: int, variant: int, val: float) -> None:
        self._check_range(x, y, t)
        self._check_variant(variant)
        self._table[t, variant, x + self.time_limit, y + self.time_limit] = val

    def apply_kernel_at(self, x: int, y: int, t: int, variant: int) -> None:
        self._check_variant(variant)
        self._apply_kernel_at(x, y, t, self.kernels[variant], (variant,))

    def save(self, path, field_types: bool = False) -> None:
        store.save_dp(self, path, field_types)

    @classmethod
    def load(cls, path, type_probabilities: Optional[Dict[int, float]] = None,
             default: float = 1.0) -> "MultiDynamicProgram":
        data = store.load_dp(path, multi=True, typed=type_probabilities is not None)
        field_probabilities, field_types = store.field_mask(data, type_probabilities, default)

        kernels = [Kernel.placeholder() for _ in range(data.variants)]
        dp = cls(data.time_limit, kernels, field_probabilities, field_types)
        dp._table = data.table
        if field_types is not None:
            dp.type_probabilities = dict(type_probabilities)
            dp.type_default = default
        return dp
