# ==============================================================================
# Файл: tests/test_setup_logging.py
# Назначение: Тесты настройки логирования скриптов.
# ==============================================================================
import logging
import shutil
import tempfile
import unittest

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from lattice_hash.setup_logging import setup_logging


class TestSetupLogging(unittest.TestCase):

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_writes_log_file_and_quiets_jit(self):
        log_dir = self.tmp / "logs"
        setup_logging(logging.INFO, log_dir=log_dir)
        logging.getLogger("lattice_hash.pipeline").info("hashed 16 cells")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = log_dir / "lattice_hash.log"
        self.assertTrue(log_file.exists())
        self.assertIn("hashed 16 cells", log_file.read_text(encoding="utf-8"))
        self.assertEqual(logging.getLogger("lattice_hash").level, logging.INFO)
        self.assertEqual(logging.getLogger("numba").level, logging.WARNING)
        self.assertEqual(logging.getLogger("PIL").level, logging.WARNING)

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(logging.DEBUG, log_dir=self.tmp)
        setup_logging(logging.DEBUG, log_dir=self.tmp)
        self.assertEqual(len(logging.getLogger().handlers), 2)


if __name__ == '__main__':
    unittest.main()
