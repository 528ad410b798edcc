"""
Traversal and per-file pipeline for art-size-reader.

This module drives an audit run:

    Walker -> extract_pictures -> decode_image -> ConstraintSet -> Reporter

Traversal:
    A single file target is analyzed directly. A directory target is
    expanded into the list of all accessible directories below it (the
    root first, then depth first, entries sorted by name). Directories that
    cannot be listed are skipped so one bad subtree never stops the scan.
    MP3 files are then listed one directory at a time, in name order.
    The number of candidates is counted before the first file is analyzed,
    which gives the progress line its total.

Per-file outcome:
    Every file ends up in one FileResult:
        OK        - cover satisfies all checks
        VIOLATION - no cover, or at least one check failed
        ERROR     - tags or artwork could not be read
    Errors are reported and counted, never raised to the caller.

Usage:
    with builder.build() as config:
        reporter = Reporter(logfile=config.logfile, playlist=config.playlist)
        summary = Walker(config, reporter).run()
        print(f"{summary.violations} of {summary.scanned} files need attention")
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

from art_size_reader.audit.constraints import ConstraintSet, Violation
from art_size_reader.audit.extractor import extract_pictures
from art_size_reader.audit.probe import CoverImage, decode_image, reencoded_size_kb
from art_size_reader.audit.reporter import Reporter
from art_size_reader.core.config import PipelineConfig
from art_size_reader.core.exceptions import ArtSizeReaderError, ImageProbeError
from art_size_reader.core.logger import get_logger

logger = get_logger(__name__)


# File suffixes analyzed in directory scans (compared lowercase)
AUDIO_EXTENSIONS = frozenset({".mp3"})


class FileStatus(Enum):
    OK = "ok"
    VIOLATION = "violation"
    ERROR = "error"


@dataclass
class FileResult:
    """
    Outcome of analyzing one audio file.

    Attributes:
        path: The analyzed file.
        status: OK, VIOLATION or ERROR.
        violation: The failed checks, when status is VIOLATION.
        error: Reason the file could not be analyzed, when status is ERROR.
        diagnostics: Non-fatal problems noticed along the way.
    """

    path: Path
    status: FileStatus = FileStatus.OK
    violation: Violation | None = None
    error: str | None = None
    diagnostics: list[str] = field(default_factory=list)


@dataclass
class RunSummary:
    """
    Statistics of one audit run.

    Attributes:
        scanned: Files analyzed.
        violations: Files reported with at least one violation.
        errors: Files that could not be analyzed.
        noop: True if the run had no check to perform.
    """

    scanned: int = 0
    violations: int = 0
    errors: int = 0
    noop: bool = False

    @property
    def success(self) -> bool:
        return not self.noop

    def record(self, result: FileResult) -> None:
        self.scanned += 1
        if result.status is FileStatus.VIOLATION:
            self.violations += 1
        elif result.status is FileStatus.ERROR:
            self.errors += 1


def is_audio_file(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in AUDIO_EXTENSIONS


def enumerate_directories(root: Path) -> Iterator[Path]:
    """
    Lazily yield root and every accessible directory below it.

    Directories are yielded depth first with siblings in name order.
    Symlinked directories are not followed. A directory that cannot be
    listed (permission denied, name too long, removed during the scan) is
    still yielded if it was reached, but nothing below it is.

    The walk keeps its own stack, so the depth of the tree is not bounded
    by the interpreter's recursion limit.

    Args:
        root: Directory to start from.

    Yields:
        Directory paths, root first.
    """
    pending = [root]

    while pending:
        directory = pending.pop()
        yield directory

        try:
            with os.scandir(directory) as entries:
                subdirectories = sorted(
                    (entry for entry in entries if _is_real_directory(entry)),
                    key=lambda entry: entry.name
                )
        except OSError as e:
            logger.debug(f"Skipping inaccessible directory {directory}: {e}")
            continue

        # Reversed so the first name is popped next
        pending.extend(Path(entry.path) for entry in reversed(subdirectories))


def _is_real_directory(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def list_audio_files(directory: Path) -> list[Path]:
    """
    Audio files directly inside one directory, sorted by name.

    Returns an empty list if the directory cannot be listed.
    """
    try:
        with os.scandir(directory) as entries:
            names = sorted(
                entry.name for entry in entries
                if is_audio_file(entry.name) and _is_regular_file(entry)
            )
    except OSError as e:
        logger.debug(f"Skipping inaccessible directory {directory}: {e}")
        return []

    return [directory / name for name in names]


def _is_regular_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def iter_audio_files(directories: Iterable[Path]) -> Iterator[Path]:
    """Lazily yield the audio files of each directory, one directory at a time."""
    for directory in directories:
        yield from list_audio_files(directory)


def count_audio_files(directories: Iterable[Path]) -> int:
    return sum(len(list_audio_files(directory)) for directory in directories)


def analyze_file(path: Path, constraints: ConstraintSet) -> FileResult:
    """
    Run the cover pipeline on a single audio file.

    Args:
        path: Audio file to analyze.
        constraints: Checks to apply.

    Returns:
        FileResult describing the outcome. Recoverable problems (unreadable
        tags, undecodable artwork) are captured in the result, not raised.

    Behavior:
        1. Extract embedded pictures; none at all is a "No cover found." violation
        2. Decode the first picture; failure makes the file an ERROR
        3. If a size limit is set, measure the re-encoded size; failure
           is recorded as a diagnostic and the remaining checks still run
        4. Evaluate all checks and collect the violation, if any
    """
    result = FileResult(path=path)

    try:
        pictures = extract_pictures(path)
    except ArtSizeReaderError as e:
        result.status = FileStatus.ERROR
        result.error = e.message
        return result

    if not pictures:
        result.status = FileStatus.VIOLATION
        result.violation = Violation.no_cover(path)
        return result

    data = pictures[0].data
    try:
        image = decode_image(data)
    except ImageProbeError as e:
        result.status = FileStatus.ERROR
        result.error = f"Could not read artwork: {e.message}"
        return result

    with image:
        size_kb = None
        if constraints.measures_size:
            try:
                size_kb = reencoded_size_kb(image)
            except ImageProbeError as e:
                result.diagnostics.append(
                    f"Could not get image size from file {path}, Reason: {e.message}"
                )
        cover = CoverImage(
            data=data,
            width=image.width,
            height=image.height,
            format=image.format,
            size_kb=size_kb,
        )

    violation = constraints.evaluate(path, cover)
    if violation is not None:
        result.status = FileStatus.VIOLATION
        result.violation = violation

    return result


class Walker:
    """
    Runs an audit over the configured target.

    Attributes:
        config: Validated run configuration.
        reporter: Output routing for violations, errors and progress.
        constraints: Checks derived from the configuration.
    """

    def __init__(self, config: PipelineConfig, reporter: Reporter) -> None:
        self.config = config
        self.reporter = reporter
        self.constraints = ConstraintSet.from_config(config)

    def run(self) -> RunSummary:
        """
        Analyze the target file or every audio file below the target directory.

        Returns:
            RunSummary with scanned, violation and error counts.
        """
        summary = RunSummary()

        if self.config.is_noop:
            logger.warning("Neither a threshold nor a size limit is set, nothing to check")
            summary.noop = True
            return summary

        target = self.config.target_path

        if target.is_file():
            summary.record(self._process(target))
            return summary

        directories = list(enumerate_directories(target))
        total = count_audio_files(directories)
        logger.debug(f"Found {total} audio files in {len(directories)} directories")

        self.reporter.start_progress(total)
        try:
            for path in iter_audio_files(directories):
                summary.record(self._process(path))
                self.reporter.advance()
        finally:
            self.reporter.finish()

        return summary

    def _process(self, path: Path) -> FileResult:
        try:
            result = analyze_file(path, self.constraints)
        except Exception as e:
            logger.debug(f"Unexpected failure while analyzing {path}", exc_info=True)
            result = FileResult(
                path=path,
                status=FileStatus.ERROR,
                error=f"Unhandled exception while reading tags: {e} ({type(e).__name__})",
            )

        for line in result.diagnostics:
            self.reporter.diagnostic(line)

        if result.status is FileStatus.VIOLATION:
            self.reporter.report(result.violation)
        elif result.status is FileStatus.ERROR:
            self.reporter.error(path, result.error)

        return result
