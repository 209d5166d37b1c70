# lattice_hash/numerics/small_xxhash.py
from __future__ import annotations
from dataclasses import dataclass
from numba import njit

# Простые числа xxHash32
PRIME_A = 0x9E3779B1
PRIME_B = 0x85EBCA77
PRIME_C = 0xC2B2AE3D
PRIME_D = 0x27D4EB2F
PRIME_E = 0x165667B1

U32_MASK = 0xFFFFFFFF


@njit(inline='always', cache=True)
def _u32(x: int) -> int: return x & U32_MASK

@njit(inline='always', cache=True)
def _mul32(a: int, b: int) -> int:
    # 32x32 -> младшие 32 бита, по половинкам b: без переполнения int64
    a = a & U32_MASK
    lo = a * (b & 0xFFFF)
    hi = ((a * (b >> 16)) & 0xFFFF) << 16
    return (lo + hi) & U32_MASK

@njit(inline='always', cache=True)
def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & U32_MASK

@njit(inline='always', cache=True)
def _hash_seed(seed: int) -> int:
    return _u32(_u32(seed) + PRIME_E)

@njit(inline='always', cache=True)
def _hash_eat(acc: int, data: int) -> int:
    acc = _u32(acc + _mul32(data, PRIME_C))
    return _mul32(_rotl32(acc, 17), PRIME_D)

@njit(inline='always', cache=True)
def _hash_eat_byte(acc: int, data: int) -> int:
    acc = _u32(acc + _mul32(data & 0xFF, PRIME_E))
    return _mul32(_rotl32(acc, 11), PRIME_A)

@njit(inline='always', cache=True)
def _hash_avalanche(acc: int) -> int:
    v = acc ^ (acc >> 15)
    v = _mul32(v, PRIME_B)
    v ^= v >> 13
    v = _mul32(v, PRIME_C)
    v ^= v >> 16
    return v


@dataclass(frozen=True)
class SmallXXHash:
    """
    Урезанный xxHash32 над одним 32-битным словом.

    Значение неизменяемо: каждый eat() возвращает новый хэш, поэтому один и тот же
    засеянный экземпляр можно безопасно раздавать по потокам.
    Финализация (avalanche) выполняется только при чтении через as_u32().
    """
    accumulator: int

    @classmethod
    def seed(cls, seed: int) -> "SmallXXHash":
        return cls(_hash_seed(int(seed)))

    def eat(self, data: int) -> "SmallXXHash":
        return SmallXXHash(_hash_eat(self.accumulator, int(data)))

    def eat_byte(self, data: int) -> "SmallXXHash":
        return SmallXXHash(_hash_eat_byte(self.accumulator, int(data)))

    def as_u32(self) -> int:
        return int(_hash_avalanche(self.accumulator))

    def __int__(self) -> int:
        return self.as_u32()
