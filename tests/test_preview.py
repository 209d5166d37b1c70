# ==============================================================================
# Файл: tests/test_preview.py
# Назначение: Тесты декодирования хэшей в цвет/смещение и PNG-превью.
# ==============================================================================
import os
import tempfile
import unittest
import numpy as np
from PIL import Image

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from lattice_hash import HashConfig, SampleMode, compute_hashes
from lattice_hash.preview import hash_to_rgb, hash_to_offset, hashes_to_image, save_preview_png


class TestPreview(unittest.TestCase):

    def test_hash_to_rgb_uses_low_bytes(self):
        rgb = hash_to_rgb(np.array([0x00FF8040, 0xFF000000], dtype=np.uint32))
        np.testing.assert_allclose(rgb[0], [0x40 / 255.0, 0x80 / 255.0, 1.0], atol=1e-7)
        np.testing.assert_array_equal(rgb[1], [0.0, 0.0, 0.0])

    def test_hash_to_offset_uses_high_byte(self):
        display = (4.0, 0.25, 0.25)
        off = hash_to_offset(np.array([0xFF000000, 0x00FFFFFF], dtype=np.uint32), display)
        np.testing.assert_allclose(off, [0.125, -0.125], atol=1e-7)

    def test_image_layout(self):
        hashes = np.zeros(4, dtype=np.uint32)
        hashes[0] = 0x000000FF  # клетка (0, 0): красная, внизу слева
        img = hashes_to_image(hashes, 2, cell_px=1)
        self.assertEqual(img.size, (2, 2))
        self.assertEqual(img.getpixel((0, 1)), (255, 0, 0))
        self.assertEqual(img.getpixel((0, 0)), (0, 0, 0))
        with self.assertRaises(ValueError):
            hashes_to_image(hashes, 3)

    def test_save_preview_png(self):
        result = compute_hashes(HashConfig(seed=1, resolution=8, mode=SampleMode.INDEX_CENTERED))
        with tempfile.TemporaryDirectory() as tmp:
            path = save_preview_png(result, os.path.join(tmp, "sub", "preview.png"), cell_px=3)
            self.assertTrue(path.exists())
            with Image.open(path) as img:
                self.assertEqual(img.size, (24, 24))
                self.assertEqual(img.mode, "RGB")


if __name__ == '__main__':
    unittest.main()
