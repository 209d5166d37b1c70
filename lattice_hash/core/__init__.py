# ========================
# file: lattice_hash/core/__init__.py
# ========================
from .errors import LatticeHashError, ValidationError, PositionsError, PipelineStateError

__all__ = [
    "LatticeHashError",
    "ValidationError",
    "PositionsError",
    "PipelineStateError",
]
