"""Exception types raised by random_walk_dp.

Configuration problems derive from ValueError, problems while sampling a walk
from a computed table derive from RuntimeError and persistence problems from
IOError, so callers can catch them at whatever granularity they need.
"""


# --------------------------------------------------
# Kernels
# --------------------------------------------------
class KernelError(ValueError):
    pass


class SizeEvenError(KernelError):
    def __init__(self, size: int):
        super().__init__(f"Kernel size must be odd, got {size}")
        self.size = size


class KernelSizeMismatchError(KernelError):
    def __init__(self, left: int, right: int):
        super().__init__(f"Kernel sizes differ: {left} vs {right}")
        self.left = left
        self.right = right


class KernelRotationError(KernelError):
    def __init__(self, degrees: int):
        super().__init__(f"Kernels can only be rotated by multiples of 90 degrees, got {degrees}")
        self.degrees = degrees


class KernelLiteralError(KernelError):
    def __init__(self, count: int):
        super().__init__(f"Kernel literal needs a square number of values, got {count}")
        self.count = count


class KernelGeneratorError(ValueError):
    pass


class OneKernelRequiredError(KernelGeneratorError):
    def __init__(self, name: str, qty: int):
        super().__init__(f"Generator '{name}' produces {qty} kernels, exactly one is required")


class NotEnoughKernelsError(KernelGeneratorError):
    def __init__(self, name: str, expected: int, got: int):
        super().__init__(f"Generator '{name}' declared {expected} kernels but produced {got}")


class SizeNotOddError(KernelGeneratorError):
    def __init__(self, size: int):
        super().__init__(f"Generator size must be odd and at least 3, got {size}")
        self.size = size


# --------------------------------------------------
# Dynamic program builder
# --------------------------------------------------
class DynamicProgramBuilderError(ValueError):
    pass


class NoTimeLimitSetError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("No time limit set")


class NoTypeSetError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("No dynamic program type set, call simple() or multi()")


class NoKernelSetError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("Simple dynamic programs need a kernel")


class NoKernelsSetError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("Multi dynamic programs need a non-empty list of kernels")


class MultipleKernelsForSimpleError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("A list of kernels was given for a simple dynamic program, use kernel()")


class SingleKernelForMultiError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("A single kernel was given for a multi dynamic program, use kernels()")


class WrongSizeOfFieldProbabilitiesError(DynamicProgramBuilderError):
    def __init__(self, expected: int, shape: tuple):
        super().__init__(f"Field probabilities must be {expected}x{expected}, got "
                         f"{'x'.join(str(s) for s in shape)}")
        self.expected = expected
        self.shape = shape


class WrongSizeOfFieldTypesError(DynamicProgramBuilderError):
    def __init__(self, expected: int, shape: tuple):
        super().__init__(f"Field types must be {expected}x{expected}, got "
                         f"{'x'.join(str(s) for s in shape)}")
        self.expected = expected
        self.shape = shape


class ConflictingFieldSpecificationError(DynamicProgramBuilderError):
    def __init__(self):
        super().__init__("Field probabilities and field types cannot both be set")


class BarrierOutOfRangeError(DynamicProgramBuilderError):
    def __init__(self, point: tuple, time_limit: int):
        super().__init__(f"Barrier {point} lies outside [-{time_limit}, {time_limit}]^2")
        self.point = point


# --------------------------------------------------
# Persistence
# --------------------------------------------------
class DynamicProgramStoreError(IOError):
    pass


# --------------------------------------------------
# Walkers
# --------------------------------------------------
class WalkerError(RuntimeError):
    pass


class NoPathExistsError(WalkerError):
    def __init__(self, x: int, y: int, t: int):
        super().__init__(f"No path exists to ({x}, {y}) in {t} time steps")
        self.target = (x, y)
        self.time_steps = t


class InconsistentPathError(WalkerError):
    def __init__(self, x: int, y: int, t: int):
        super().__init__(f"All predecessor weights are zero at ({x}, {y}), t={t}")
        self.position = (x, y)
        self.t = t


class RandomDistributionError(WalkerError):
    pass


class WrongDynamicProgramShapeError(WalkerError):
    pass


class RequiresSingleDynamicProgramError(WrongDynamicProgramShapeError):
    def __init__(self, walker: str):
        super().__init__(f"{walker} requires a simple (single table) dynamic program")


class RequiresMultiDynamicProgramError(WrongDynamicProgramShapeError):
    def __init__(self, walker: str, variants: int = None):
        msg = f"{walker} requires a multi dynamic program"
        if variants is not None:
            msg += f" with {variants} variants"
        super().__init__(msg)


# --------------------------------------------------
# Walk analysis and batch building
# --------------------------------------------------
class WalkAnalyzerError(ValueError):
    pass


class WalkTooShortError(WalkAnalyzerError):
    def __init__(self, length: int):
        super().__init__(f"Walk needs at least two points to be analyzed, got {length}")


class InvalidWalkError(WalkAnalyzerError):
    def __init__(self, index: int, step: tuple):
        super().__init__(f"Step {index} {step} is not a unit step")
        self.index = index
        self.step = step


class DatasetWalksBuilderError(ValueError):
    pass


class NoDatasetSetError(DatasetWalksBuilderError):
    def __init__(self):
        super().__init__("No dataset set")


class NoDynamicProgramSetError(DatasetWalksBuilderError):
    def __init__(self):
        super().__init__("No dynamic program set")


class NoWalkerSetError(DatasetWalksBuilderError):
    def __init__(self):
        super().__init__("No walker set")


class NoTimeStepsSetError(DatasetWalksBuilderError):
    def __init__(self):
        super().__init__("No time step policy set")
