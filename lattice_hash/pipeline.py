# ======================================================================
# Файл: lattice_hash/pipeline.py
# Назначение: Параллельный конвейер хэширования сетки R x R.
#   Idle --compute()--> Computed; любое изменение настроек -> Idle.
# ======================================================================
from __future__ import annotations
import concurrent.futures
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Tuple

import numpy as np

from .core.config import HashConfig, SampleMode, validate_config
from .core.errors import PipelineStateError, ValidationError
from .core.validators import validate_positions
from .numerics.hash_kernels import hash_index_centered, hash_index_plane, hash_positions
from .numerics.space_trs import IDENTITY_3X4, as_affine_3x4
from .shapes import get_shape
from .utils.diag import diag_array

logger = logging.getLogger(__name__)

# fn(resolution) -> positions | (positions, normals)
PositionSource = Callable[[int], Any]


class PipelineState(str, Enum):
    IDLE = "idle"
    COMPUTED = "computed"


@dataclass(frozen=True)
class HashResult:
    """
    Результат одного compute(). Все массивы только для чтения.
    positions/normals передаются потребителю без изменений (None в индексных режимах),
    в локальных координатах; object_transform (3x4) ставит их в мир при отрисовке.
    """
    config: HashConfig
    hashes: np.ndarray
    positions: Optional[np.ndarray] = None
    normals: Optional[np.ndarray] = None
    object_transform: np.ndarray = field(default_factory=lambda: IDENTITY_3X4)

    @property
    def display_config(self) -> Tuple[float, float, float]:
        return self.config.display_config

    def __len__(self) -> int:
        return int(self.hashes.shape[0])


def _freeze(arr: Optional[np.ndarray]) -> Optional[np.ndarray]:
    if arr is not None:
        arr.flags.writeable = False
    return arr


def _split_source_output(raw: Any) -> Tuple[Any, Any]:
    if isinstance(raw, tuple):
        if len(raw) != 2:
            raise ValidationError(f"position source must return positions or (positions, normals), got {len(raw)} items")
        return raw
    return raw, None


class HashPipeline:
    """
    Конвейер: координата клетки -> (доменная трансформация) -> floor ->
    SmallXXHash.seed(seed).eat(u).eat(v)[.eat(w)] -> uint32.

    - Режим выбирается конфигом (SampleMode), четыре варианта, одно ядро на источник координат.
    - В позиционных режимах генератор позиций запускается как отдельная задача в пуле
      потоков, хэширование ждёт её завершения целиком (один барьер).
    - Каждый compute() выделяет новые массивы: ранее выданные результаты не меняются,
      потребитель может дочитывать их параллельно со следующим расчётом.
    """

    def __init__(
        self,
        config: Optional[HashConfig] = None,
        *,
        object_transform=None,
        position_source: Optional[PositionSource] = None,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        self._config = config if config is not None else HashConfig()
        validate_config(self._config)
        self._object_trs = self._coerce_object_transform(object_transform)
        self._position_source = position_source
        self._executor = executor
        self._result: Optional[HashResult] = None

    # ---------------------------------------------------------------- state

    @property
    def state(self) -> PipelineState:
        return PipelineState.COMPUTED if self._result is not None else PipelineState.IDLE

    @property
    def config(self) -> HashConfig:
        return self._config

    @property
    def object_transform(self) -> np.ndarray:
        return self._object_trs.copy()

    @property
    def result(self) -> HashResult:
        if self._result is None:
            raise PipelineStateError("no hashes for the current configuration; call compute() first")
        return self._result

    def invalidate(self) -> None:
        if self._result is not None:
            logger.debug("Configuration changed -> state IDLE")
        self._result = None

    # ---------------------------------------------------------- configuration

    def configure(self, **changes: Any) -> HashConfig:
        """Меняет поля конфига (с валидацией) и сбрасывает результат."""
        self._config = self._config.replace(**changes)
        self.invalidate()
        return self._config

    def set_config(self, config: HashConfig) -> None:
        validate_config(config)
        self._config = config
        self.invalidate()

    def set_object_transform(self, matrix) -> None:
        self._object_trs = self._coerce_object_transform(matrix)
        self.invalidate()

    def set_position_source(self, source: Optional[PositionSource]) -> None:
        self._position_source = source
        self.invalidate()

    @staticmethod
    def _coerce_object_transform(matrix) -> np.ndarray:
        if matrix is None:
            return IDENTITY_3X4.copy()
        try:
            return as_affine_3x4(matrix)
        except ValueError as e:
            raise ValidationError(f"object_transform: {e}") from e

    # ---------------------------------------------------------------- compute

    def _generate_positions(self, cfg: HashConfig) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        source = self._position_source or get_shape(cfg.shape)
        if self._executor is not None:
            raw = self._executor.submit(source, cfg.resolution).result()
        else:
            with concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="positions") as ex:
                raw = ex.submit(source, cfg.resolution).result()
        positions, normals = _split_source_output(raw)
        return validate_positions(positions, normals, cfg.resolution)

    def compute(self) -> HashResult:
        cfg = self._config
        validate_config(cfg)
        t0 = time.perf_counter()
        mode = SampleMode(cfg.mode)
        logger.debug(f"compute: mode={mode.value}, seed={cfg.seed}, resolution={cfg.resolution}")

        positions = normals = None
        if mode.uses_positions:
            positions, normals = self._generate_positions(cfg)
            domain = cfg.domain.matrix if mode.uses_domain else IDENTITY_3X4.copy()
            hashes = hash_positions(cfg.seed, cfg.resolution, positions, self._object_trs, domain)
        elif mode is SampleMode.INDEX_PLANE:
            hashes = hash_index_plane(cfg.seed, cfg.resolution, cfg.domain.matrix)
        else:
            hashes = hash_index_centered(cfg.seed, cfg.resolution)

        diag_array(hashes, name="hashes")
        self._result = HashResult(
            config=cfg,
            hashes=_freeze(hashes),
            positions=_freeze(positions),
            normals=_freeze(normals),
            object_transform=_freeze(self._object_trs.copy()),
        )
        logger.info(
            f"Hashed {cfg.cell_count} cells ({mode.value}) in {(time.perf_counter() - t0) * 1000:.1f} ms"
        )
        return self._result


def compute_hashes(config: Optional[HashConfig] = None, **kwargs: Any) -> HashResult:
    """Разовый расчёт без сохранения конвейера."""
    return HashPipeline(config, **kwargs).compute()
