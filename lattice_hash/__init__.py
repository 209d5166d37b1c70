from .core.config import HashConfig, SampleMode, load_config
from .core.errors import LatticeHashError, ValidationError, PositionsError, PipelineStateError
from .numerics.small_xxhash import SmallXXHash
from .numerics.space_trs import SpaceTRS
from .pipeline import HashPipeline, HashResult, PipelineState, compute_hashes

__all__ = [
    "HashConfig",
    "SampleMode",
    "load_config",
    "LatticeHashError",
    "ValidationError",
    "PositionsError",
    "PipelineStateError",
    "SmallXXHash",
    "SpaceTRS",
    "HashPipeline",
    "HashResult",
    "PipelineState",
    "compute_hashes",
]
