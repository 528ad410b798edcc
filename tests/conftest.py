"""Test configuration and fixtures"""

import io
import os
import tempfile
from pathlib import Path

import pytest
from mutagen.id3 import APIC, ID3
from PIL import Image


def image_bytes(width: int, height: int, fmt: str = "PNG", noise: bool = False) -> bytes:
    """Encode a width x height image. Noise makes PNGs practically incompressible."""
    if noise:
        image = Image.frombytes("RGB", (width, height), os.urandom(width * height * 3))
    else:
        image = Image.new("RGB", (width, height), color=(120, 30, 200))
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def write_mp3(path: Path, *covers: bytes, picture_type: int = 3) -> Path:
    """Write an ID3-tagged file holding the given covers as APIC frames."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    if covers:
        tags = ID3()
        for index, data in enumerate(covers):
            tags.add(APIC(
                encoding=3,
                mime="image/png",
                type=picture_type,
                desc=f"cover {index}",
                data=data,
            ))
        tags.save(str(path))
    return path


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def make_mp3(temp_dir):
    """Factory writing MP3 files below temp_dir"""
    def _make(relative: str, *covers: bytes, picture_type: int = 3) -> Path:
        return write_mp3(temp_dir / relative, *covers, picture_type=picture_type)
    return _make


@pytest.fixture
def square_cover():
    return image_bytes(300, 300)


@pytest.fixture
def small_cover():
    return image_bytes(200, 200)


@pytest.fixture
def make_cover():
    """Factory returning encoded image bytes"""
    return image_bytes
