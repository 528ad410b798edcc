"""
Result reporting for art-size-reader.

The Reporter owns two independent output targets:
    - console: interactive stream, always shows the progress line
    - logfile: optional stream that receives violation and error lines
               instead of the console

When no logfile is configured, violation lines are written to the console
through tqdm.write(), which erases the progress line, prints the violation
and lets the progress line be redrawn below it. With a logfile, violation
lines go to the file while the progress line keeps updating on the
console untouched.

Each violation is written as one complete line. Files with violations are
also appended to the playlist, if one is configured. Per-file errors are
written like violations but never reach the playlist.
"""

import sys
from typing import TextIO

from tqdm import tqdm

from art_size_reader.audit.constraints import Violation
from art_size_reader.core.playlist import Playlist
from art_size_reader.core.progress import ProgressLine


class Reporter:
    """
    Routes audit output to the console, logfile and playlist.

    Attributes:
        console: Interactive stream for progress (and violations without logfile).
        logfile: Optional stream for violation and error lines.
        playlist: Optional playlist receiving violating file paths.
    """

    def __init__(
        self,
        console: TextIO | None = None,
        logfile: TextIO | None = None,
        playlist: Playlist | None = None
    ) -> None:
        self.console = console if console is not None else sys.stdout
        self.logfile = logfile
        self.playlist = playlist
        self._progress: ProgressLine | None = None

    def report(self, violation: Violation | None) -> None:
        """
        Emit a violation line and record the file in the playlist.

        Args:
            violation: The violation to report. None or an empty violation
                       emits nothing.
        """
        if violation is None or not violation.fragments:
            return

        self._write_line(str(violation))

        if self.playlist is not None:
            self.playlist.write(violation.path)

    def error(self, path, reason: str) -> None:
        """Emit a per-file error line. Errors are not playlisted."""
        self._write_line(f"{path}: {reason}")

    def diagnostic(self, line: str) -> None:
        """Emit a free-form diagnostic line through the violation sink."""
        self._write_line(line)

    def start_progress(self, total: int) -> None:
        """Begin rendering the progress line for a run of `total` files."""
        self.finish()
        self._progress = ProgressLine(total=total, stream=self.console)
        self._progress.start()

    def advance(self) -> None:
        """Count one processed file. Does nothing without an active progress line."""
        if self._progress is not None:
            self._progress.advance()

    def finish(self) -> None:
        """Stop rendering progress, leaving the last line on screen."""
        if self._progress is not None:
            self._progress.stop()

    def _write_line(self, line: str) -> None:
        if self.logfile is not None:
            self.logfile.write(f"{line}\n")
        else:
            tqdm.write(line, file=self.console)
