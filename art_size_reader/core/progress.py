"""
Progress accounting and rendering for art-size-reader.

RunProgress holds the counters of one run: the total number of candidate
files, computed once before iteration starts, and the number of files
processed so far. ProgressLine renders those counters as a single line on
the interactive console, rewritten in place after every file:

    12 of 240 (5%) finished.

Rendering is done by tqdm with a custom bar format, so messages written
through tqdm.write() on the same stream (violation lines, log records)
erase the line first and let it be redrawn underneath.

Usage:
    with ProgressLine(total=240, stream=sys.stdout) as progress:
        for path in files:
            analyze(path)
            progress.advance()
"""

import sys
from dataclasses import dataclass
from typing import TextIO

from tqdm import tqdm


# Line rendered after each processed file
PROGRESS_FORMAT = "{n_fmt} of {total_fmt} ({percentage:.0f}%) finished."


@dataclass
class RunProgress:
    """
    Counters for one run.

    Attributes:
        total: Number of candidate files found before iteration.
        done: Number of files processed so far. Only ever increases.
    """

    total: int = 0
    done: int = 0

    def advance(self) -> int:
        """Count one more processed file and return the new count."""
        self.done += 1
        return self.done


class ProgressLine:
    """
    In-place progress line backed by tqdm.

    Refresh throttling is disabled (mininterval=0, miniters=1) so the line
    is redrawn after every file, as the counters promise.

    Attributes:
        progress: The RunProgress counters being rendered.
        stream: Console stream the line is drawn on.
    """

    def __init__(self, total: int, stream: TextIO | None = None) -> None:
        self.progress = RunProgress(total=total)
        self.stream = stream if stream is not None else sys.stdout
        self._bar: tqdm | None = None

    def __enter__(self) -> "ProgressLine":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        """Create the tqdm bar. Nothing is drawn for an empty run."""
        if self._bar is None and self.progress.total > 0:
            self._bar = tqdm(
                total=self.progress.total,
                file=self.stream,
                bar_format=PROGRESS_FORMAT,
                mininterval=0,
                miniters=1,
                dynamic_ncols=False,
                leave=True,
            )

    def advance(self) -> None:
        """Count one processed file and redraw the line."""
        self.progress.advance()
        if self._bar is not None:
            self._bar.update(1)

    def stop(self) -> None:
        """Close the bar, leaving the final line on screen."""
        if self._bar is not None:
            self._bar.close()
            self._bar = None
