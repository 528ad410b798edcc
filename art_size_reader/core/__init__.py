"""
Core module for art-size-reader.

This module provides the foundational components used by the audit:
    - exceptions: Error taxonomy (fatal configuration vs. per-file errors)
    - config: Option parsing, validation and the immutable PipelineConfig
    - logger: Logging setup compatible with the progress line
    - progress: Progress counters and in-place progress rendering
    - playlist: Append-only playlist sink

Usage:
    from art_size_reader.core import (
        ConfigBuilder, PipelineConfig,
        setup_logging, get_logger,
        ConfigError, ParseError, PathNotFound
    )
"""

from art_size_reader.core.config import (
    ConfigBuilder,
    PipelineConfig,
    Resolution,
    load_defaults,
    parse_resolution,
)
from art_size_reader.core.exceptions import (
    ArtSizeReaderError,
    ConfigError,
    ExtractionError,
    ImageProbeError,
    OutputError,
    ParseError,
    PathNotFound,
)
from art_size_reader.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)
from art_size_reader.core.playlist import Playlist
from art_size_reader.core.progress import ProgressLine, RunProgress

__all__ = [
    # Config
    "ConfigBuilder",
    "PipelineConfig",
    "Resolution",
    "load_defaults",
    "parse_resolution",
    # Exceptions
    "ArtSizeReaderError",
    "ConfigError",
    "PathNotFound",
    "ParseError",
    "OutputError",
    "ExtractionError",
    "ImageProbeError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
    # Outputs
    "Playlist",
    "ProgressLine",
    "RunProgress",
]
