# ========================
# file: lattice_hash/core/errors.py
# ========================
class LatticeHashError(Exception):
    """Base error for the hashing pipeline."""


class ValidationError(LatticeHashError):
    """Raised when a configuration fails validation."""


class PositionsError(ValidationError):
    """Raised when generated sample positions do not match the grid."""


class PipelineStateError(LatticeHashError):
    """Raised when a result is read before compute()."""
