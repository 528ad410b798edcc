"""
Embedded cover extraction for art-size-reader.

Opens the ID3v2 tag of an MP3 file with mutagen and returns the attached
pictures (APIC frames). Pictures whose declared type is "not a picture"
are skipped, everything else counts as cover artwork. Only the tag is
parsed; the audio stream is never decoded.

A file without any ID3 tag simply has no cover. A file whose tag exists
but cannot be read raises ExtractionError, which the walker reports for
that file before moving on.

Usage:
    from art_size_reader.audit.extractor import extract_pictures

    pictures = extract_pictures(Path("song.mp3"))
    if pictures:
        first = pictures[0].data
"""

from dataclasses import dataclass
from pathlib import Path

from mutagen import MutagenError
from mutagen.id3 import APIC, ID3, ID3NoHeaderError

from art_size_reader.core.exceptions import ExtractionError
from art_size_reader.core.logger import get_logger

logger = get_logger(__name__)


# Picture type that marks an attachment which is not artwork
NOT_A_PICTURE = 0xFF


@dataclass(frozen=True)
class EmbeddedPicture:
    """
    One picture attached to an audio file's tag.

    Attributes:
        data: Raw image payload as stored in the tag.
        type: Declared picture type (3 = front cover, see mutagen.id3.PictureType).
        mime: Declared MIME type, may be empty or wrong.
        desc: Free-text description of the picture.
    """

    data: bytes
    type: int
    mime: str = ""
    desc: str = ""


def extract_pictures(path: Path) -> list[EmbeddedPicture]:
    """
    Read every embedded picture from an MP3 file's ID3v2 tag.

    Args:
        path: Audio file to open.

    Returns:
        Pictures in tag order, excluding "not a picture" attachments.
        Empty if the file carries no tag or no picture.

    Raises:
        ExtractionError: If the file or its tag cannot be read.
    """
    try:
        tags = ID3(str(path))
    except ID3NoHeaderError:
        logger.debug(f"No ID3 tag in {path}")
        return []
    except (MutagenError, OSError) as e:
        raise ExtractionError(
            f"Could not read tags: {e}",
            details={"file_path": str(path), "original_error": repr(e)}
        ) from e

    pictures = []
    for frame in tags.getall("APIC"):
        if not isinstance(frame, APIC) or int(frame.type) == NOT_A_PICTURE:
            continue
        pictures.append(
            EmbeddedPicture(
                data=bytes(frame.data),
                type=int(frame.type),
                mime=frame.mime or "",
                desc=frame.desc or "",
            )
        )

    return pictures
