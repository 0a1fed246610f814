# random_walk_dp/__init__.py
# --------------------------------------------------
# Data structures
# --------------------------------------------------
from .data_structures.kernel import Direction, Kernel, kernel_literal
from .data_structures.walk import Walk

# --------------------------------------------------
# Kernel generators
# --------------------------------------------------
from .kernels.generator import KernelGenerator
from .kernels.simple_rw import SimpleRwGenerator
from .kernels.biased_rw import BiasedRwGenerator
from .kernels.correlated_rw import CorrelatedRwGenerator
from .kernels.biased_correlated_rw import BiasedCorrelatedRwGenerator
from .kernels.levy_walk import LevyWalkGenerator
from .kernels.normal_dist import NormalDistGenerator

# --------------------------------------------------
# Dynamic programs
# --------------------------------------------------
from .dp.base import DynamicProgram, DynamicProgramType
from .dp.simple import SimpleDynamicProgram
from .dp.multi import MultiDynamicProgram
from .dp.builder import DynamicProgramBuilder

# --------------------------------------------------
# Walkers
# --------------------------------------------------
from .core.Walker import Walker
from .core.StandardWalker import StandardWalker
from .core.CorrelatedWalker import CorrelatedWalker
from .core.MultiStepWalker import MultiStepWalker
from .core.LevyWalker import LevyWalker
from .core.LandCoverWalker import LandCoverWalker

# --------------------------------------------------
# Analysis / datasets
# --------------------------------------------------
from .core.WalkAnalyzer import AnalysisResult, AnalysisThresholds, WalkAnalyzer, WalkKind
from .core.DatasetWalksBuilder import DatasetWalksBuilder, rw_between

# --------------------------------------------------
# Errors
# --------------------------------------------------
from .errors import *

# --------------------------------------------------
# Define __all__ for clean public API
# --------------------------------------------------
__all__ = [
    # Data structures
    "Direction",
    "Kernel",
    "kernel_literal",
    "Walk",

    # Kernel generators
    "KernelGenerator",
    "SimpleRwGenerator",
    "BiasedRwGenerator",
    "CorrelatedRwGenerator",
    "BiasedCorrelatedRwGenerator",
    "LevyWalkGenerator",
    "NormalDistGenerator",

    # Dynamic programs
    "DynamicProgram",
    "DynamicProgramType",
    "SimpleDynamicProgram",
    "MultiDynamicProgram",
    "DynamicProgramBuilder",

    # Walkers
    "Walker",
    "StandardWalker",
    "CorrelatedWalker",
    "MultiStepWalker",
    "LevyWalker",
    "LandCoverWalker",

    # Analysis / datasets
    "WalkAnalyzer",
    "AnalysisThresholds",
    "AnalysisResult",
    "WalkKind",
    "DatasetWalksBuilder",
    "rw_between",

    # Errors
    "KernelError",
    "KernelGeneratorError",
    "DynamicProgramBuilderError",
    "DynamicProgramStoreError",
    "WalkerError",
    "NoPathExistsError",
    "InconsistentPathError",
    "RandomDistributionError",
    "WrongDynamicProgramShapeError",
]
