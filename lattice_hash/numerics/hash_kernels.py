# lattice_hash/numerics/hash_kernels.py
from __future__ import annotations
import numpy as np
from numba import njit, prange

from .small_xxhash import _hash_seed, _hash_eat, _hash_avalanche
from .grid_sampler import index_to_cell, index_to_uv
from .space_trs import _apply_trs

F32 = np.float32

# Все ядра: одна строка сетки (R клеток) на итерацию prange.
# Каждая клетка читает только свой индекс и пишет только свой слот.


@njit(cache=True, fastmath=True, parallel=True)
def hash_index_centered(seed: int, resolution: int) -> np.ndarray:
    out = np.empty(resolution * resolution, dtype=np.uint32)
    base = _hash_seed(seed)
    for row in prange(resolution):
        start = np.int64(row) * resolution
        for col in range(resolution):
            i = start + col
            u, v = index_to_cell(i, resolution)
            out[i] = _hash_avalanche(_hash_eat(_hash_eat(base, u), v))
    return out


@njit(cache=True, fastmath=True, parallel=True)
def hash_index_plane(seed: int, resolution: int, domain_trs: np.ndarray) -> np.ndarray:
    out = np.empty(resolution * resolution, dtype=np.uint32)
    base = _hash_seed(seed)
    for row in prange(resolution):
        start = np.int64(row) * resolution
        for col in range(resolution):
            i = start + col
            uf, vf = index_to_uv(i, resolution)
            px, py, pz = _apply_trs(domain_trs, uf, F32(0.0), vf)
            u = int(np.floor(px))
            v = int(np.floor(pz))
            out[i] = _hash_avalanche(_hash_eat(_hash_eat(base, u), v))
    return out


@njit(cache=True, fastmath=True, parallel=True)
def hash_positions(
        seed: int,
        resolution: int,
        positions: np.ndarray,
        object_trs: np.ndarray,
        domain_trs: np.ndarray
) -> np.ndarray:
    """
    Хэш по внешним позициям: domain * (object * p), затем floor.
    Порядок осей: x, z (горизонтальная плоскость), затем y (вертикаль).
    """
    out = np.empty(resolution * resolution, dtype=np.uint32)
    base = _hash_seed(seed)
    for row in prange(resolution):
        start = np.int64(row) * resolution
        for col in range(resolution):
            i = start + col
            wx, wy, wz = _apply_trs(object_trs, positions[i, 0], positions[i, 1], positions[i, 2])
            px, py, pz = _apply_trs(domain_trs, wx, wy, wz)
            u = int(np.floor(px))
            v = int(np.floor(pz))
            w = int(np.floor(py))
            out[i] = _hash_avalanche(_hash_eat(_hash_eat(_hash_eat(base, u), v), w))
    return out
