"""
art-size-reader: Audit embedded cover artwork of MP3 collections.

Scans a single MP3 file or a whole directory tree, extracts the embedded
cover of every file and reports covers that break the configured rules:

    - minimum resolution (e.g. at least 500x500)
    - maximum resolution (e.g. at most 1500x1500)
    - square aspect ratio
    - maximum re-encoded size in kB

Files are never modified. Findings go to the console, and optionally to
a logfile and to a playlist of offending files.

Architecture:
    core/   - Configuration, exceptions, logging, progress, playlist
    audit/  - Extraction, decoding, constraint checks, reporting, traversal
    cli.py  - Command-line interface

Usage:
    Command Line:
        artsize -i ~/Music -t 500x500
        artsize -i ~/Music -t 500x500 -r -s 800 -l audit.log -p broken.m3u

    Python API:
        from art_size_reader import ConfigBuilder, Reporter, Walker

        config = ConfigBuilder(target_path="~/Music", threshold="500x500").build()
        with config:
            reporter = Reporter(logfile=config.logfile, playlist=config.playlist)
            summary = Walker(config, reporter).run()

Dependencies:
    - mutagen: ID3 tag reading
    - Pillow: Artwork decoding and re-encoding
    - rich-click: CLI framework
    - tqdm: Progress line
    - pyyaml: Option defaults file parsing
"""

__version__ = "1.0.0"
__author__ = "art-size-reader"
__license__ = "MIT"

from art_size_reader.audit import Reporter, RunSummary, Violation, Walker
from art_size_reader.core import (
    ArtSizeReaderError,
    ConfigBuilder,
    ConfigError,
    ParseError,
    PathNotFound,
    PipelineConfig,
    get_logger,
    setup_logging,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ConfigBuilder",
    "PipelineConfig",
    "setup_logging",
    "get_logger",
    # Exceptions
    "ArtSizeReaderError",
    "ConfigError",
    "ParseError",
    "PathNotFound",
    # Audit
    "Reporter",
    "RunSummary",
    "Violation",
    "Walker",
]
