"""
Tests for still image loading and snapshot saving
"""

import numpy as np
import pytest
from PIL import Image

from measurelib.frame_source import StillImageSource, load_image, save_image


@pytest.fixture
def png_path(tmp_path):
    frame = np.zeros((30, 40, 3), dtype=np.uint8)
    frame[:, :20] = (200, 200, 200)
    path = tmp_path / "frame.png"
    Image.fromarray(frame).save(path)
    return str(path)


def test_load_png(png_path):
    frame = load_image(png_path)
    assert frame.shape == (30, 40, 3)
    assert tuple(frame[0, 0]) == (200, 200, 200)
    assert tuple(frame[0, 39]) == (0, 0, 0)


def test_still_source_serves_copies(png_path):
    source = StillImageSource(png_path)
    source.open()
    assert source.is_open

    first = source.read()
    first[:] = 0
    second = source.read()
    assert second.any()

    source.close()
    assert not source.is_open
    assert source.read() is None


def test_still_source_missing_file(tmp_path):
    source = StillImageSource(str(tmp_path / "missing.png"))
    with pytest.raises(RuntimeError):
        source.open()


def test_save_snapshot(tmp_path):
    frame = np.full((10, 12, 3), 90, dtype=np.uint8)
    path = tmp_path / "snap.png"
    save_image(frame, str(path))

    with Image.open(path) as saved:
        assert saved.size == (12, 10)
        assert np.array(saved.convert('RGB'))[0, 0].tolist() == [90, 90, 90]
