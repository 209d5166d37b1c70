# ========================
# file: lattice_hash/core/validators.py
# ========================
from __future__ import annotations
import math
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .errors import ValidationError, PositionsError

I32_MIN = -(2 ** 31)
I32_MAX = 2 ** 31 - 1
MIN_RESOLUTION = 1
MAX_RESOLUTION = 512
MAX_VERTICAL_OFFSET = 2.0


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValidationError(msg)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _check_vec3(value: Any, name: str, allow_scalar: bool) -> None:
    arr = np.asarray(value, dtype=object)
    if arr.ndim == 0:
        _require(allow_scalar, f"{name} must have 3 components")
        items = [value]
    else:
        _require(arr.shape == (3,), f"{name} must have 3 components, got shape {arr.shape}")
        items = list(value)
    for x in items:
        _require(
            isinstance(x, (int, float, np.integer, np.floating)) and not isinstance(x, bool),
            f"{name} components must be numbers",
        )
        _require(math.isfinite(float(x)), f"{name} components must be finite")


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Validation of a config dict before any allocation.

    Raises ValidationError on the first failing check.
    """
    # imported here: shapes and config both import this module
    from .config import SampleMode
    from ..shapes import SHAPES

    seed = cfg.get("seed")
    _require(_is_int(seed), "seed must be an integer")
    _require(I32_MIN <= int(seed) <= I32_MAX, f"seed must fit in int32, got {seed}")

    res = cfg.get("resolution")
    _require(_is_int(res), "resolution must be an integer")
    _require(
        MIN_RESOLUTION <= int(res) <= MAX_RESOLUTION,
        f"resolution must be in [{MIN_RESOLUTION}, {MAX_RESOLUTION}], got {res}",
    )

    mode = cfg.get("mode")
    valid_modes = {m.value for m in SampleMode}
    _require(
        isinstance(mode, str) and mode in valid_modes,
        f"mode must be one of {sorted(valid_modes)}, got {mode!r}",
    )

    shape = cfg.get("shape")
    _require(isinstance(shape, str) and shape in SHAPES, f"unknown shape {shape!r}; known: {sorted(SHAPES)}")

    offset = cfg.get("vertical_offset", 0.0)
    _require(
        isinstance(offset, (int, float)) and not isinstance(offset, bool),
        "vertical_offset must be a number",
    )
    _require(
        -MAX_VERTICAL_OFFSET <= float(offset) <= MAX_VERTICAL_OFFSET,
        f"vertical_offset must be in [-{MAX_VERTICAL_OFFSET}, {MAX_VERTICAL_OFFSET}]",
    )

    domain = cfg.get("domain", {})
    _require(isinstance(domain, dict), "domain must be a mapping")
    _check_vec3(domain.get("translation", (0.0, 0.0, 0.0)), "domain.translation", allow_scalar=False)
    _check_vec3(domain.get("rotation", (0.0, 0.0, 0.0)), "domain.rotation", allow_scalar=False)
    _check_vec3(domain.get("scale", 8.0), "domain.scale", allow_scalar=True)


def validate_positions(
    positions: Any, normals: Optional[Any], resolution: int
) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """Проверяет вывод генератора позиций: форма (R*R, 3), только конечные значения."""
    count = int(resolution) * int(resolution)
    pos = np.array(positions, dtype=np.float32, copy=True, order="C")
    if pos.shape != (count, 3):
        raise PositionsError(f"positions must have shape ({count}, 3), got {pos.shape}")
    if not np.all(np.isfinite(pos)):
        raise PositionsError("positions contain NaN/Inf")

    nrm = None
    if normals is not None:
        nrm = np.array(normals, dtype=np.float32, copy=True, order="C")
        if nrm.shape != (count, 3):
            raise PositionsError(f"normals must have shape ({count}, 3), got {nrm.shape}")
    return pos, nrm
