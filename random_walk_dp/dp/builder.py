import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.dp.base import DynamicProgram, DynamicProgramType, TimingCallback, \
    field_probabilities_from_types
from random_walk_dp.dp.multi import MultiDynamicProgram
from random_walk_dp.dp.simple import SimpleDynamicProgram
from random_walk_dp.errors import (
    BarrierOutOfRangeError,
    ConflictingFieldSpecificationError,
    MultipleKernelsForSimpleError,
    NoKernelSetError,
    NoKernelsSetError,
    NoTimeLimitSetError,
    NoTypeSetError,
    SingleKernelForMultiError,
    WrongSizeOfFieldProbabilitiesError,
    WrongSizeOfFieldTypesError,
)

logger = logging.getLogger(__name__)


class DynamicProgramBuilder:
    """Collects the options of a dynamic program and validates them in ``build``.

    Example::

        dp = DynamicProgramBuilder().simple().time_limit(100) \\
            .kernel(Kernel.from_generator(SimpleRwGenerator())) \\
            .add_single_barrier((5, 5)) \\
            .build()
        dp.compute()
    """

    def __init__(self):
        self._type: Optional[DynamicProgramType] = None
        self._time_limit: Optional[int] = None
        self._kernel: Optional[Kernel] = None
        self._kernels: Optional[List[Kernel]] = None
        self._field_probabilities: Optional[np.ndarray] = None
        self._field_types: Optional[np.ndarray] = None
        self._type_probabilities: Dict[int, float] = {}
        self._type_default = 1.0
        self._barriers: List[Tuple[int, int]] = []
        self._timing_callback: Optional[TimingCallback] = None

    def simple(self) -> "DynamicProgramBuilder":
        self._type = DynamicProgramType.SIMPLE
        return self

    def multi(self) -> "DynamicProgramBuilder":
        self._type = DynamicProgramType.MULTI
        return self

    def with_type(self, dp_type: DynamicProgramType) -> "DynamicProgramBuilder":
        self._type = DynamicProgramType(dp_type)
        return self

    def time_limit(self, time_limit: int) -> "DynamicProgramBuilder":
        if time_limit < 0:
            raise ValueError(f"Invalid time limit: {time_limit}")
        self._time_limit = int(time_limit)
        return self

    def kernel(self, kernel: Kernel) -> "DynamicProgramBuilder":
        self._kernel = kernel
        return self

    def kernels(self, kernels: List[Kernel]) -> "DynamicProgramBuilder":
        self._kernels = list(kernels)
        return self

    def field_probabilities(self, field_probabilities) -> "DynamicProgramBuilder":
        """Per cell probabilities in ``[0, 1]``, indexed ``[x][y]`` with the origin at ``[T][T]``."""
        self._field_probabilities = np.array(field_probabilities, dtype=np.float64)
        return self

    def field_types(self, field_types, type_probabilities: Dict[int, float],
                    default: float = 1.0) -> "DynamicProgramBuilder":
        """Integer field type ids (e.g. land cover classes), mapped to probabilities at build time."""
        self._field_types = np.array(field_types, dtype=np.int64)
        self._type_probabilities = dict(type_probabilities)
        self._type_default = default
        return self

    def add_single_barrier(self, point: Tuple[int, int]) -> "DynamicProgramBuilder":
        self._barriers.append((int(point[0]), int(point[1])))
        return self

    def add_rect_barrier(self, start: Tuple[int, int], end: Tuple[int, int]) -> "DynamicProgramBuilder":
        """Barrier covering the rectangle between ``start`` and ``end``, both inclusive."""
        (x0, y0), (x1, y1) = start, end
        for x in range(min(x0, x1), max(x0, x1) + 1):
            for y in range(min(y0, y1), max(y0, y1) + 1):
                self._barriers.append((x, y))
        return self

    def timing_callback(self, callback: TimingCallback) -> "DynamicProgramBuilder":
        """Called with a label and the duration in seconds after every computation."""
        self._timing_callback = callback
        return self

    def _field_mask(self, time_limit: int) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        n = 2 * time_limit + 1

        if self._field_probabilities is not None and self._field_types is not None:
            raise ConflictingFieldSpecificationError()

        field_types = None
        if self._field_probabilities is not None:
            if self._field_probabilities.shape != (n, n):
                raise WrongSizeOfFieldProbabilitiesError(n, self._field_probabilities.shape)
            if ((self._field_probabilities < 0) | (self._field_probabilities > 1)).any():
                raise ValueError("Field probabilities must lie in [0, 1]")
            field_probabilities = self._field_probabilities.copy()
        elif self._field_types is not None:
            if self._field_types.shape != (n, n):
                raise WrongSizeOfFieldTypesError(n, self._field_types.shape)
            field_types = self._field_types.copy()
            field_probabilities = field_probabilities_from_types(field_types, self._type_probabilities,
                                                                 self._type_default)
        else:
            field_probabilities = np.ones((n, n), dtype=np.float64)

        for x, y in self._barriers:
            if not (-time_limit <= x <= time_limit and -time_limit <= y <= time_limit):
                raise BarrierOutOfRangeError((x, y), time_limit)
            field_probabilities[x + time_limit, y + time_limit] = 0.0

        return field_probabilities, field_types

    def build(self) -> DynamicProgram:
        if self._time_limit is None:
            raise NoTimeLimitSetError()
        if self._type is None:
            raise NoTypeSetError()

        field_probabilities, field_types = self._field_mask(self._time_limit)

        if self._type == DynamicProgramType.SIMPLE:
            if self._kernels is not None:
                raise MultipleKernelsForSimpleError()
            if self._kernel is None:
                raise NoKernelSetError()
            dp = SimpleDynamicProgram(self._time_limit, self._kernel, field_probabilities, field_types,
                                      self._timing_callback)
        elif self._type == DynamicProgramType.MULTI:
            if self._kernel is not None:
                raise SingleKernelForMultiError()
            if not self._kernels:
                raise NoKernelsSetError()
            dp = MultiDynamicProgram(self._time_limit, self._kernels, field_probabilities, field_types,
                                     self._timing_callback)
        else:
            raise NoTypeSetError()

        if field_types is not None:
            dp.type_probabilities = dict(self._type_probabilities)
            dp.type_default = self._type_default

        logger.info(f"Built {dp!r}")
        return dp
