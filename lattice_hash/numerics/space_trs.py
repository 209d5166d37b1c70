# ======================================================================
# Файл: lattice_hash/numerics/space_trs.py
# Назначение: Доменная трансформация (scale -> rotate -> translate) в виде
#             аффинной матрицы 3x4 и её применение к точкам.
# ======================================================================
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np
from numba import njit
from scipy.spatial.transform import Rotation

F32 = np.float32

Vec3 = Tuple[float, float, float]

IDENTITY_3X4 = np.array([
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
], dtype=F32)
IDENTITY_3X4.flags.writeable = False


def _as_vec3(value: Union[float, Vec3], name: str) -> Vec3:
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 0:
        arr = np.repeat(arr, 3)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a scalar or 3 components, got shape {arr.shape}")
    return float(arr[0]), float(arr[1]), float(arr[2])


def as_affine_3x4(matrix) -> np.ndarray:
    """Приводит матрицу 3x4 или 4x4 (берутся верхние 3 строки) к float32 (3, 4)."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape == (4, 4):
        m = m[:3, :]
    if m.shape != (3, 4):
        raise ValueError(f"affine matrix must be 3x4 or 4x4, got shape {m.shape}")
    if not np.all(np.isfinite(m)):
        raise ValueError("affine matrix contains NaN/Inf")
    return np.ascontiguousarray(m, dtype=F32)


@dataclass(frozen=True)
class SpaceTRS:
    """
    Настраиваемое аффинное пространство домена.

    rotation: углы Эйлера в градусах, применяются в порядке Z, X, Y.
    scale: скаляр (равномерный) или три компоненты.
    По умолчанию: равномерный масштаб 8, без поворота и сдвига.
    """
    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Union[float, Vec3] = 8.0

    @property
    def scale3(self) -> Vec3:
        return _as_vec3(self.scale, "scale")

    @property
    def matrix(self) -> np.ndarray:
        """T * R * S, верхние три строки, float32."""
        rx, ry, rz = _as_vec3(self.rotation, "rotation")
        rot = Rotation.from_euler("zxy", [rz, rx, ry], degrees=True).as_matrix()
        m = np.zeros((3, 4), dtype=np.float64)
        m[:, :3] = rot * np.asarray(self.scale3, dtype=np.float64)[np.newaxis, :]
        m[:, 3] = _as_vec3(self.translation, "translation")
        return m.astype(F32)

    def apply(self, points) -> np.ndarray:
        return apply_affine(self.matrix, points)

    def to_dict(self) -> dict:
        scale = self.scale if np.ndim(self.scale) == 0 else list(self.scale3)
        return {
            "translation": list(_as_vec3(self.translation, "translation")),
            "rotation": list(_as_vec3(self.rotation, "rotation")),
            "scale": scale,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SpaceTRS":
        scale = data.get("scale", 8.0)
        return cls(
            translation=_as_vec3(data.get("translation", 0.0), "translation"),
            rotation=_as_vec3(data.get("rotation", 0.0), "rotation"),
            scale=float(scale) if np.ndim(scale) == 0 else _as_vec3(scale, "scale"),
        )


def apply_affine(matrix, points) -> np.ndarray:
    """
    transformed = M * (x, y, z, 1) для одной точки (3,) или массива (N, 3).
    Считается в float32, как и в ядрах.
    """
    m = as_affine_3x4(matrix)
    p = np.asarray(points, dtype=F32)
    single = p.ndim == 1
    p = np.atleast_2d(p)
    if p.shape[-1] != 3:
        raise ValueError(f"points must have shape (..., 3), got {p.shape}")
    out = p @ m[:, :3].T + m[:, 3]
    out = out.astype(F32, copy=False)
    return out[0] if single else out


@njit(inline='always', cache=True)
def _apply_trs(m, x, y, z):
    px = m[0, 0] * x + m[0, 1] * y + m[0, 2] * z + m[0, 3]
    py = m[1, 0] * x + m[1, 1] * y + m[1, 2] * z + m[1, 3]
    pz = m[2, 0] * x + m[2, 1] * y + m[2, 2] * z + m[2, 3]
    return px, py, pz
