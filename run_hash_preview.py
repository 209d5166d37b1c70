# run_hash_preview.py
"""
Считает хэши сетки по конфигу и сохраняет PNG-превью.
Запуск: python run_hash_preview.py [config.json] [out.png]
"""
import logging
import sys
from pathlib import Path

from lattice_hash import HashPipeline, load_config
from lattice_hash.preview import save_preview_png
from lattice_hash.setup_logging import setup_logging

# --- НАСТРОЙКИ ---
ARTIFACTS_ROOT = Path(__file__).resolve().parent / "artifacts"
CELL_PX = 8

logger = logging.getLogger(__name__)


def run_hash_preview(config_path: str | None = None, out_path: str | None = None) -> Path:
    config = load_config(config_path)
    pipeline = HashPipeline(config)
    result = pipeline.compute()

    if out_path is None:
        out_path = ARTIFACTS_ROOT / "hash_preview" / f"{config.mode.value}_{config.seed}_{config.resolution}.png"
    return save_preview_png(result, out_path, cell_px=CELL_PX)


if __name__ == "__main__":
    setup_logging(level=logging.INFO)
    args = sys.argv[1:]
    cfg_arg = args[0] if len(args) > 0 else None
    out_arg = args[1] if len(args) > 1 else None
    path = run_hash_preview(cfg_arg, out_arg)
    logger.info(f"--- Готово: {path} ---")
