"""
Artwork decoding for art-size-reader.

Decodes embedded cover bytes with Pillow to obtain the pixel dimensions,
and optionally measures how large the image is once re-encoded in its own
format. The re-encoded size is what the size limit is compared against,
so covers stored with bloated metadata (thumbnails, ICC profiles, comment
blocks) are judged on their pixel content.
"""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from art_size_reader.core.exceptions import ImageProbeError


@dataclass(frozen=True)
class CoverImage:
    """
    Decoded cover artwork of one audio file.

    Attributes:
        data: Raw payload as found in the tag.
        width: Width in pixels.
        height: Height in pixels.
        format: Pillow format name (JPEG, PNG, ...), if detected.
        size_kb: Re-encoded size in whole kilobytes. Only measured when a
                 size limit is configured.
    """

    data: bytes
    width: int
    height: int
    format: str | None = None
    size_kb: int | None = None

    @property
    def dimensions(self) -> str:
        return f"{self.width}x{self.height}"


def decode_image(data: bytes) -> Image.Image:
    """
    Decode raw artwork bytes.

    The caller owns the returned image and should close it (it can be used
    as a context manager).

    Raises:
        ImageProbeError: If Pillow cannot identify or fully decode the data.
    """
    try:
        image = Image.open(BytesIO(data))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageProbeError(
            f"{e} ({type(e).__name__})",
            details={"original_error": repr(e)}
        ) from e

    try:
        image.load()
    except (Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        image.close()
        raise ImageProbeError(
            f"{e} ({type(e).__name__})",
            details={"original_error": repr(e)}
        ) from e

    return image


def reencoded_size_kb(image: Image.Image) -> int:
    """
    Save the image in its own format and return the size in kB.

    The byte count is shifted down by 10 bits, so the result is rounded
    down to whole kilobytes.

    Raises:
        ImageProbeError: If the image cannot be re-encoded.
    """
    output = BytesIO()
    try:
        image.save(output, format=image.format)
    except (OSError, ValueError, KeyError) as e:
        raise ImageProbeError(
            f"{e} ({type(e).__name__})",
            details={"format": image.format, "original_error": repr(e)}
        ) from e
    return len(output.getvalue()) >> 10


def probe_image(data: bytes) -> CoverImage:
    """
    Decode artwork bytes into a CoverImage without measuring its size.

    Raises:
        ImageProbeError: If the data cannot be decoded.
    """
    with decode_image(data) as image:
        return CoverImage(data=data, width=image.width, height=image.height, format=image.format)
