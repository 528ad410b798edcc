"""Test artwork decoding and size measurement"""

import pytest
from PIL import Image

from art_size_reader.audit.probe import decode_image, probe_image, reencoded_size_kb
from art_size_reader.core.exceptions import ImageProbeError


class TestProbe:
    """Test Pillow based probing"""

    @pytest.mark.parametrize("fmt", ["PNG", "JPEG"])
    def test_dimensions(self, make_cover, fmt):
        cover = probe_image(make_cover(320, 240, fmt))

        assert cover.width == 320
        assert cover.height == 240
        assert cover.format == fmt
        assert cover.dimensions == "320x240"
        assert cover.size_kb is None

    def test_garbage_is_rejected(self):
        with pytest.raises(ImageProbeError):
            decode_image(b"definitely not an image")

    def test_truncated_image_is_rejected(self, make_cover):
        data = make_cover(200, 200, "PNG", noise=True)

        with pytest.raises(ImageProbeError):
            decode_image(data[: len(data) // 2])

    def test_decompression_bomb_is_rejected(self, make_cover, monkeypatch):
        # 200x200 is more than twice the lowered pixel limit
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(ImageProbeError) as exc_info:
            decode_image(make_cover(200, 200, "PNG"))
        assert "DecompressionBombError" in exc_info.value.message

    def test_reencoded_size(self, make_cover):
        # 200x200 RGB noise does not compress: roughly 117 kB as PNG
        with decode_image(make_cover(200, 200, "PNG", noise=True)) as image:
            size_kb = reencoded_size_kb(image)

        assert 100 <= size_kb <= 130

    def test_reencoded_size_rounds_down(self, make_cover):
        with decode_image(make_cover(8, 8, "PNG")) as image:
            assert reencoded_size_kb(image) == 0
