"""
Cover constraints for art-size-reader.

A ConstraintSet holds the checks enabled for a run and evaluates decoded
covers against them. Failed checks produce message fragments that are
joined into a single line per file:

    /music/a.mp3: Artwork file size is 812 kB. Artwork image size is 1400x1200

Checks run independently and every failing check contributes, in this
fixed order:
    1. Size limit:    "Artwork file size is {kb} kB."
    2. Min threshold, max threshold and ratio share one fragment,
       "Artwork image size is WxH", emitted once if any of them fails.

The text does not say whether a dimension fragment means too small, too
large or not square. Violation.checks carries that distinction for
callers that need it.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from art_size_reader.audit.probe import CoverImage
from art_size_reader.core.config import PipelineConfig, Resolution


NO_COVER_MESSAGE = "No cover found."


class Check(Enum):
    """Individual check that a cover can fail."""

    NO_COVER = "no_cover"
    SIZE_LIMIT = "size_limit"
    MIN_THRESHOLD = "min_threshold"
    MAX_THRESHOLD = "max_threshold"
    RATIO = "ratio"


@dataclass
class Violation:
    """
    Reasons a file's cover failed one or more checks.

    Attributes:
        path: The audio file.
        fragments: Message fragments in check order.
        checks: Every check that failed.
    """

    path: Path
    fragments: list[str] = field(default_factory=list)
    checks: set[Check] = field(default_factory=set)

    @property
    def message(self) -> str:
        return " ".join(self.fragments)

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

    @classmethod
    def no_cover(cls, path: Path) -> "Violation":
        return cls(path=path, fragments=[NO_COVER_MESSAGE], checks={Check.NO_COVER})


@dataclass(frozen=True)
class ConstraintSet:
    """
    Checks enabled for a run.

    An unset (None) threshold or size limit disables that check.

    Attributes:
        min_threshold: Covers smaller in either dimension fail.
        max_threshold: Covers larger in either dimension fail.
        check_ratio: Covers that are not square fail.
        max_size_kb: Covers whose re-encoded size exceeds this fail.
    """

    min_threshold: Resolution | None = None
    max_threshold: Resolution | None = None
    check_ratio: bool = False
    max_size_kb: float | None = None

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "ConstraintSet":
        return cls(
            min_threshold=config.min_threshold,
            max_threshold=config.max_threshold,
            check_ratio=config.check_ratio,
            max_size_kb=config.max_size_kb,
        )

    @property
    def measures_size(self) -> bool:
        """True when covers need their re-encoded size measured."""
        return self.max_size_kb is not None

    def failed_dimension_checks(self, cover: CoverImage) -> set[Check]:
        failed = set()

        if self.min_threshold is not None:
            if cover.width < self.min_threshold.width or cover.height < self.min_threshold.height:
                failed.add(Check.MIN_THRESHOLD)

        if self.max_threshold is not None:
            if cover.width > self.max_threshold.width or cover.height > self.max_threshold.height:
                failed.add(Check.MAX_THRESHOLD)

        if self.check_ratio and cover.width != cover.height:
            failed.add(Check.RATIO)

        return failed

    def evaluate(self, path: Path, cover: CoverImage) -> Violation | None:
        """
        Evaluate a decoded cover against every enabled check.

        Args:
            path: The audio file the cover belongs to.
            cover: Decoded cover. size_kb is ignored when it was not measured.

        Returns:
            A Violation listing every failed check, or None if the cover
            satisfies all of them.
        """
        violation = Violation(path=path)

        if self.max_size_kb is not None and cover.size_kb is not None:
            if cover.size_kb > self.max_size_kb:
                violation.fragments.append(f"Artwork file size is {cover.size_kb} kB.")
                violation.checks.add(Check.SIZE_LIMIT)

        failed = self.failed_dimension_checks(cover)
        if failed:
            violation.fragments.append(f"Artwork image size is {cover.dimensions}")
            violation.checks.update(failed)

        return violation if violation.checks else None
