"""
Cover audit pipeline for art-size-reader.

Modules:
    extractor   - Read embedded pictures from ID3 tags (mutagen)
    probe       - Decode artwork and measure its re-encoded size (Pillow)
    constraints - Evaluate covers against the enabled checks
    reporter    - Route violations to console, logfile and playlist
    walker      - Enumerate audio files and drive the pipeline per file
"""

from art_size_reader.audit.constraints import Check, ConstraintSet, Violation
from art_size_reader.audit.extractor import EmbeddedPicture, extract_pictures
from art_size_reader.audit.probe import CoverImage, decode_image, probe_image, reencoded_size_kb
from art_size_reader.audit.reporter import Reporter
from art_size_reader.audit.walker import (
    FileResult,
    FileStatus,
    RunSummary,
    Walker,
    analyze_file,
    enumerate_directories,
    iter_audio_files,
)

__all__ = [
    "Check",
    "ConstraintSet",
    "Violation",
    "EmbeddedPicture",
    "extract_pictures",
    "CoverImage",
    "decode_image",
    "probe_image",
    "reencoded_size_kb",
    "Reporter",
    "FileResult",
    "FileStatus",
    "RunSummary",
    "Walker",
    "analyze_file",
    "enumerate_directories",
    "iter_audio_files",
]
