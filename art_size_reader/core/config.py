"""
Run configuration for art-size-reader.

This module turns raw user input (CLI flags, optionally seeded from a YAML
defaults file) into a validated, immutable PipelineConfig.

The configuration contains:
    - Target path (single MP3 file or directory)
    - Minimum and maximum resolution thresholds (WIDTHxHEIGHT)
    - Square ratio check flag
    - Maximum re-encoded artwork size in kB
    - Optional logfile and playlist outputs

Validation is all-or-nothing: ConfigBuilder.build() either returns a ready
to run PipelineConfig or raises a ConfigError naming the first invalid
field. The logfile and playlist are opened during build(), so an unwritable
output is reported before any audio file is touched.

Example defaults file (passed with --config):
    threshold: "500x500"
    max_threshold: "1500x1500"
    ratio: true
    size: 800
    logfile: "~/artsize.log"
    playlist: null
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

import yaml

from art_size_reader.core.exceptions import (
    ConfigError,
    OutputError,
    ParseError,
    PathNotFound,
)
from art_size_reader.core.logger import get_logger
from art_size_reader.core.playlist import Playlist

logger = get_logger(__name__)


_RESOLUTION_PATTERN = re.compile(r"^\s*(\d+)\s*x\s*(\d+)\s*$", re.ASCII)

# Keys accepted in the YAML defaults file
DEFAULT_KEYS = ("threshold", "max_threshold", "ratio", "size", "logfile", "playlist")


@dataclass(frozen=True)
class Resolution:
    """A (width, height) pair in pixels."""

    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def parse_resolution(text: str) -> Resolution:
    """
    Parse a WIDTHxHEIGHT string.

    Args:
        text: Resolution string, e.g. "300x300".

    Returns:
        Resolution with width and height in that order.

    Raises:
        ParseError: If the string is not two non-negative integers
                    separated by 'x'.
    """
    match = _RESOLUTION_PATTERN.match(text) if isinstance(text, str) else None
    if match is None:
        raise ParseError(
            f"Can not parse resolution {text}, must be in format e.g.: 300x300",
            details={"value": text}
        )
    return Resolution(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True)
class PipelineConfig:
    """
    Validated configuration for one audit run.

    Created by ConfigBuilder.build() and treated as immutable. An unset
    optional field (None) means the corresponding check or output is
    disabled.

    Attributes:
        target_path: Existing MP3 file or directory to scan.
        min_threshold: Minimum acceptable artwork resolution.
        max_threshold: Maximum acceptable artwork resolution.
        check_ratio: Require width == height.
        max_size_kb: Maximum acceptable re-encoded artwork size in kB.
        logfile: Open stream receiving violation lines instead of the console.
        logfile_path: Resolved path of the logfile, for display.
        playlist: Playlist receiving the paths of violating files.
    """

    target_path: Path
    min_threshold: Resolution | None = None
    max_threshold: Resolution | None = None
    check_ratio: bool = False
    max_size_kb: float | None = None
    logfile: TextIO | None = field(default=None, compare=False, repr=False)
    logfile_path: Path | None = None
    playlist: Playlist | None = field(default=None, compare=False, repr=False)

    @property
    def is_noop(self) -> bool:
        """True when neither a minimum threshold nor a size limit is set."""
        return self.min_threshold is None and self.max_size_kb is None

    def close(self) -> None:
        """Close the logfile and playlist. Safe to call multiple times."""
        if self.playlist is not None:
            self.playlist.close()
        if self.logfile is not None and not self.logfile.closed:
            self.logfile.close()

    def __enter__(self) -> "PipelineConfig":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


@dataclass
class ConfigBuilder:
    """
    Collects raw configuration values and validates them together.

    Values may be assigned directly or through the chained with_* setters.
    Nothing is validated until build() is called.

    Example:
        config = (
            ConfigBuilder()
            .to_read("~/Music")
            .with_threshold("500x500")
            .with_ratio(True)
            .build()
        )
    """

    target_path: str | None = None
    threshold: str | None = None
    max_threshold: str | None = None
    ratio: bool = False
    size: float | str | None = None
    logfile: str | None = None
    playlist: str | None = None

    def to_read(self, target_path: str | Path) -> "ConfigBuilder":
        self.target_path = str(target_path)
        return self

    def with_threshold(self, threshold: str) -> "ConfigBuilder":
        self.threshold = threshold
        return self

    def with_max_threshold(self, max_threshold: str) -> "ConfigBuilder":
        self.max_threshold = max_threshold
        return self

    def with_ratio(self, ratio: bool) -> "ConfigBuilder":
        self.ratio = ratio
        return self

    def with_size(self, size: float | str | None) -> "ConfigBuilder":
        self.size = size
        return self

    def with_logfile(self, logfile: str | Path) -> "ConfigBuilder":
        self.logfile = str(logfile)
        return self

    def with_playlist(self, playlist: str | Path) -> "ConfigBuilder":
        self.playlist = str(playlist)
        return self

    def apply_defaults(self, defaults: dict[str, Any]) -> "ConfigBuilder":
        """
        Fill unset values from a defaults mapping (see load_defaults()).

        Values already set on the builder take precedence.
        """
        if self.threshold is None:
            self.threshold = defaults.get("threshold")
        if self.max_threshold is None:
            self.max_threshold = defaults.get("max_threshold")
        if not self.ratio:
            self.ratio = bool(defaults.get("ratio", False))
        if self.size is None:
            self.size = defaults.get("size")
        if self.logfile is None:
            self.logfile = defaults.get("logfile")
        if self.playlist is None:
            self.playlist = defaults.get("playlist")
        return self

    @property
    def has_checks(self) -> bool:
        """True when at least a minimum threshold or a size limit is given."""
        return self.threshold is not None or self.size is not None

    def build(self) -> PipelineConfig:
        """
        Validate every collected value and return a PipelineConfig.

        Returns:
            PipelineConfig with the logfile and playlist already opened.

        Raises:
            PathNotFound: If the target path does not exist.
            ParseError: If a threshold string is malformed.
            ConfigError: If the size limit is not a positive number.
            OutputError: If the logfile or playlist cannot be opened.

        Behavior:
            1. Validate the target path
            2. Parse minimum and maximum thresholds
            3. Validate the size limit
            4. Open the logfile (append mode)
            5. Open the playlist (append mode), closing the logfile on failure
        """
        target = _validate_target_path(self.target_path)

        min_threshold = None
        if self.threshold is not None:
            min_threshold = parse_resolution(self.threshold)
            logger.info(f"Threshold enabled, selected value: {min_threshold}")

        if self.ratio:
            logger.info("Checking for 1:1 ratio is enabled.")

        max_size_kb = None
        if self.size is not None:
            max_size_kb = _validate_size(self.size)
            logger.info(f"File size threshold enabled, reporting files above {max_size_kb} kB")

        max_threshold = None
        if self.max_threshold is not None:
            max_threshold = parse_resolution(self.max_threshold)
            logger.info(f"Maximum threshold enabled, selected value: {max_threshold}")

        logfile = None
        logfile_path = None
        if self.logfile is not None:
            logfile_path = _validate_output_path(self.logfile, "logfile")
            logfile = _open_logfile(logfile_path)
            logger.info(f"Logging enabled, writing log to: {logfile_path}")

        playlist = None
        if self.playlist is not None:
            try:
                playlist_path = _validate_output_path(self.playlist, "playlist")
                playlist = Playlist(playlist_path)
            except ConfigError:
                if logfile is not None:
                    logfile.close()
                raise
            logger.info(f"Playlist enabled, writing to {playlist_path}")

        return PipelineConfig(
            target_path=target,
            min_threshold=min_threshold,
            max_threshold=max_threshold,
            check_ratio=self.ratio,
            max_size_kb=max_size_kb,
            logfile=logfile,
            logfile_path=logfile_path,
            playlist=playlist,
        )


def load_defaults(config_path: Path) -> dict[str, Any]:
    """
    Load option defaults from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Dictionary restricted to DEFAULT_KEYS. Missing keys are absent.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid YAML,
                     not a mapping, or contains unknown keys or bad types.
    """
    if not config_path.is_file():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    unknown = sorted(set(raw_config) - set(DEFAULT_KEYS))
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(map(str, unknown))}",
            details={"file_path": str(config_path), "keys": unknown}
        )

    defaults: dict[str, Any] = {}
    for key, value in raw_config.items():
        if value is None:
            continue
        if key == "ratio":
            if not isinstance(value, bool):
                raise ConfigError(
                    "'ratio' must be true or false",
                    details={"field": key, "value": value}
                )
        elif key == "size":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(
                    "'size' must be a number of kilobytes",
                    details={"field": key, "value": value}
                )
        elif not isinstance(value, str):
            raise ConfigError(
                f"'{key}' must be a string",
                details={"field": key, "value": value}
            )
        defaults[key] = value

    return defaults


def _validate_target_path(target_path: str | None) -> Path:
    """
    Check that the target exists as a file or directory.

    Raises:
        PathNotFound: If the path is missing or neither file nor directory.
    """
    if not target_path:
        raise PathNotFound(
            "No target path given",
            details={"field": "target_path"}
        )

    path = Path(target_path).expanduser()

    if path.is_dir():
        logger.info(f"Analyzing file(s) in {path}")
    elif path.is_file():
        logger.info(f"Analyzing file {path}")
    else:
        raise PathNotFound(
            f"Invalid target path: {target_path}",
            details={"field": "target_path", "path": target_path}
        )

    return path


def _validate_size(size: float | str) -> float:
    """
    Convert the size limit to a positive float.

    Raises:
        ConfigError: If the value is not a number or not positive.
    """
    try:
        value = float(size)
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Can not parse size limit {size}, must be a number of kilobytes",
            details={"field": "size", "value": size}
        ) from e

    if not value > 0:
        raise ConfigError(
            f"Size limit must be positive, got {size}",
            details={"field": "size", "value": size}
        )

    return value


def _validate_output_path(raw_path: str, field_name: str) -> Path:
    """
    Resolve an output path and check that its parent directory exists.

    Raises:
        OutputError: If the parent directory does not exist.
    """
    path = Path(raw_path).expanduser().resolve()

    if not path.parent.is_dir():
        raise OutputError(
            f"Invalid {field_name} path: {raw_path}",
            details={"field": field_name, "path": raw_path}
        )

    return path


def _open_logfile(path: Path) -> TextIO:
    """
    Open the logfile in append mode with line buffering.

    Raises:
        OutputError: If the file cannot be opened.
    """
    try:
        return open(path, "a", encoding="utf-8", buffering=1)
    except OSError as e:
        raise OutputError(
            f"Could not create logfile: {e.strerror or e} ({type(e).__name__})",
            details={"field": "logfile", "path": str(path), "original_error": str(e)}
        ) from e
