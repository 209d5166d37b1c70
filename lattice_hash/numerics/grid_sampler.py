# lattice_hash/numerics/grid_sampler.py
from __future__ import annotations
import numpy as np
from numba import njit

F32 = np.float32

# Защита floor() от ошибок округления на точных границах строк.
# Номер строки считается во float64: точен для всех R <= 512.
INDEX_EPS = 0.00001


@njit(inline='always', cache=True)
def _row_of(i: int, resolution: int) -> float:
    return np.floor(np.float64(i) * (1.0 / resolution) + 0.00001)

@njit(inline='always', cache=True)
def index_to_cell(i: int, resolution: int):
    """Линейный индекс -> целочисленная клетка (u, v), сетка центрирована на нуле."""
    v = int(_row_of(i, resolution))
    half = resolution // 2
    u = i - resolution * v - half
    v -= half
    return u, v

@njit(inline='always', cache=True)
def index_to_uv(i: int, resolution: int):
    """Линейный индекс -> непрерывные координаты единичного квадрата [-0.5, 0.5)."""
    inv_r = F32(1.0) / F32(resolution)
    vf = F32(_row_of(i, resolution))
    uf = inv_r * (F32(i) - F32(resolution) * vf + F32(0.5)) - F32(0.5)
    vf = inv_r * (vf + F32(0.5)) - F32(0.5)
    return uf, vf


# --- Векторизованные версии для всей сетки ---

def _rows(i: np.ndarray, r: int) -> np.ndarray:
    return np.floor(i.astype(np.float64) * (1.0 / r) + INDEX_EPS)


def grid_cells(resolution: int) -> np.ndarray:
    """(R*R, 2) int32: клетки (u, v) в режиме центрированных индексов."""
    r = int(resolution)
    i = np.arange(r * r, dtype=np.int64)
    v = _rows(i, r).astype(np.int64)
    u = i - r * v - r // 2
    v = v - r // 2
    return np.stack([u, v], axis=1).astype(np.int32)


def grid_uv(resolution: int) -> np.ndarray:
    """(R*R, 2) float32: непрерывные (u_f, v_f) для каждой клетки."""
    r = int(resolution)
    idx = np.arange(r * r, dtype=np.int64)
    i = idx.astype(F32)
    inv_r = F32(1.0) / F32(r)
    vf = _rows(idx, r).astype(F32)
    uf = inv_r * (i - F32(r) * vf + F32(0.5)) - F32(0.5)
    vf = inv_r * (vf + F32(0.5)) - F32(0.5)
    return np.stack([uf, vf], axis=1).astype(F32)


def grid_plane_points(resolution: int) -> np.ndarray:
    """(R*R, 3) float32: точки (u_f, 0, v_f) параметрической плоскости."""
    uv = grid_uv(resolution)
    pts = np.zeros((uv.shape[0], 3), dtype=F32)
    pts[:, 0] = uv[:, 0]
    pts[:, 2] = uv[:, 1]
    return pts
