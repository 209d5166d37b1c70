# ======================================================================
# Файл: lattice_hash/shapes.py
# Назначение: Генераторы позиций и нормалей сэмплов на поверхностях.
#             Каждая фигура: fn(resolution) -> (positions, normals),
#             обе формы (R*R, 3), float32, в порядке индексов сетки.
# ======================================================================
from __future__ import annotations
import math
from typing import Callable, Dict, Tuple

import numpy as np

from .core.errors import ValidationError
from .numerics.grid_sampler import grid_uv

F32 = np.float32

ShapeFn = Callable[[int], Tuple[np.ndarray, np.ndarray]]

# реестр
SHAPES: Dict[str, ShapeFn] = {}


def register_shape(name: str):
    def _wrap(fn: ShapeFn) -> ShapeFn:
        SHAPES[name] = fn
        return fn
    return _wrap


def get_shape(name: str) -> ShapeFn:
    try:
        return SHAPES[name]
    except KeyError:
        raise ValidationError(f"unknown shape {name!r}; known: {sorted(SHAPES)}") from None


def _uv01(resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    uv = grid_uv(resolution).astype(np.float64) + 0.5
    return uv[:, 0], uv[:, 1]


@register_shape("plane")
def plane(resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    uv = grid_uv(resolution)
    n = uv.shape[0]
    positions = np.zeros((n, 3), dtype=F32)
    positions[:, 0] = uv[:, 0]
    positions[:, 2] = uv[:, 1]
    normals = np.zeros((n, 3), dtype=F32)
    normals[:, 1] = 1.0
    return positions, normals


@register_shape("sphere")
def sphere(resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    """UV-сфера радиуса 0.5 с центром в нуле."""
    u, v = _uv01(resolution)
    r = 0.5
    s = r * np.sin(math.pi * v)
    positions = np.stack([
        s * np.sin(2.0 * math.pi * u),
        r * np.cos(math.pi * v),
        s * np.cos(2.0 * math.pi * u),
    ], axis=1)
    normals = positions / r
    return positions.astype(F32), normals.astype(F32)


@register_shape("torus")
def torus(resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    r1, r2 = 0.375, 0.125
    u, v = _uv01(resolution)
    su, cu = np.sin(2.0 * math.pi * u), np.cos(2.0 * math.pi * u)
    sv, cv = np.sin(2.0 * math.pi * v), np.cos(2.0 * math.pi * v)
    s = r1 + r2 * cv
    positions = np.stack([s * su, r2 * sv, s * cu], axis=1)
    normals = np.stack([cv * su, sv, cv * cu], axis=1)
    return positions.astype(F32), normals.astype(F32)
