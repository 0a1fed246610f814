from abc import ABC, abstractmethod
from typing import List, Tuple

from random_walk_dp.data_structures.kernel import Kernel
from random_walk_dp.errors import NotEnoughKernelsError, OneKernelRequiredError, SizeNotOddError


class KernelGenerator(ABC):
    """Two-phase kernel construction: ``prepare`` sizes the kernels, ``generate`` fills them.

    Callers create ``generates_qty()`` empty kernels and hand the list to both phases,
    see ``Kernel.from_generator`` and ``Kernel.multiple_from_generator``.
    """

    @abstractmethod
    def prepare(self, kernels: List[Kernel]) -> None:
        ...

    @abstractmethod
    def generate(self, kernels: List[Kernel]) -> None:
        ...

    def generates_qty(self) -> int:
        return 1

    @abstractmethod
    def name(self) -> Tuple[str, str]:
        ...

    def _single(self, kernels: List[Kernel]) -> Kernel:
        if len(kernels) != 1:
            raise OneKernelRequiredError(self.name()[1], len(kernels))
        return kernels[0]

    def _check_qty(self, kernels: List[Kernel]) -> None:
        if len(kernels) != self.generates_qty():
            raise NotEnoughKernelsError(self.name()[1], self.generates_qty(), len(kernels))

    @staticmethod
    def _check_odd(size: int) -> None:
        if size < 3 or size % 2 == 0:
            raise SizeNotOddError(size)
