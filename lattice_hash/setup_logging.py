import logging
import sys
from pathlib import Path


def setup_logging(level: int = logging.DEBUG, log_dir: str | Path = "logs"):
    """
    Логирование для скриптов хэширования (run_hash_preview.py).

    Пишет в stdout и в <log_dir>/lattice_hash.log (файл перезаписывается при
    каждом запуске). Логгер пакета получает level, шум JIT-компилятора numba
    и Pillow срезается до WARNING, чтобы в DEBUG оставались тайминги compute()
    и статистика массивов из diag_array.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / "lattice_hash.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode="w", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # убирает старые хендлеры, чтобы не было дублей
    )

    logging.getLogger("lattice_hash").setLevel(level)
    # JIT-компиляция numba очень многословна на DEBUG
    logging.getLogger("numba").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
