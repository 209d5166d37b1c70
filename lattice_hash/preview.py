# ======================================================================
# Файл: lattice_hash/preview.py
# Назначение: Декодирование хэшей в цвет/смещение так же, как это делает
#             шейдер визуализации, и сохранение превью сетки в PNG.
# ======================================================================
from __future__ import annotations
import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def hash_to_rgb(hashes: np.ndarray) -> np.ndarray:
    """Байты 0, 1, 2 хэша -> R, G, B в [0, 1]. Форма (N, 3), float32."""
    h = np.asarray(hashes, dtype=np.uint32)
    rgb = np.stack([h & 255, (h >> 8) & 255, (h >> 16) & 255], axis=-1)
    return (rgb.astype(np.float32) / np.float32(255.0))


def hash_to_offset(hashes: np.ndarray, display_config: Tuple[float, float, float]) -> np.ndarray:
    """Старший байт -> вертикальное смещение экземпляра: ((h >> 24)/255 - 0.5) * offset/R."""
    h = np.asarray(hashes, dtype=np.uint32)
    scale = np.float32(display_config[2])
    return ((h >> 24).astype(np.float32) / np.float32(255.0) - np.float32(0.5)) * scale


def hashes_to_image(hashes: np.ndarray, resolution: int, cell_px: int = 4) -> Image.Image:
    r = int(resolution)
    if hashes.shape[0] != r * r:
        raise ValueError(f"expected {r * r} hashes for resolution {r}, got {hashes.shape[0]}")
    rgb8 = np.rint(hash_to_rgb(hashes) * 255.0).astype(np.uint8).reshape(r, r, 3)
    # строка v=0 внизу, как у плоскости в 3D-виде
    img = Image.fromarray(rgb8[::-1].copy())
    if cell_px > 1:
        img = img.resize((r * cell_px, r * cell_px), Image.Resampling.NEAREST)
    return img


def save_preview_png(result, path: Union[str, Path], cell_px: int = 4) -> Path:
    """Сохраняет PNG-превью HashResult: одна клетка сетки = cell_px x cell_px пикселей."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = hashes_to_image(result.hashes, result.config.resolution, cell_px=cell_px)
    img.save(path)
    logger.info(f"Preview saved: {path} ({img.width}x{img.height})")
    return path
