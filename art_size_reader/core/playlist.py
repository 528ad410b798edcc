"""
Append-only playlist sink.

Every audio file that fails at least one check is appended to the playlist
as a bare path, one per line, so the offending files can be opened directly
in a player or tag editor.

Usage:
    playlist = Playlist(Path("~/broken_covers.m3u").expanduser())
    playlist.write("/music/album/01-track.mp3")
    playlist.close()
"""

from pathlib import Path
from typing import TextIO

from art_size_reader.core.exceptions import OutputError


class Playlist:
    """
    Playlist file opened once for the duration of a run.

    The file is opened in append mode with line buffering, so each entry
    is written as one complete line and existing entries are preserved.

    Attributes:
        path: Absolute path of the playlist file.
    """

    def __init__(self, path: Path) -> None:
        """
        Open (or create) the playlist file.

        Args:
            path: Location of the playlist. The parent directory must exist.

        Raises:
            OutputError: If the file cannot be opened for appending.
        """
        self.path = path
        try:
            self._file: TextIO | None = open(path, "a", encoding="utf-8", buffering=1)
        except OSError as e:
            raise OutputError(
                f"Could not create playlist: {e.strerror or e} ({type(e).__name__})",
                details={"field": "playlist", "path": str(path), "original_error": str(e)}
            ) from e

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, file_path: str | Path) -> None:
        """Append one audio file path as a single line."""
        if self._file is None:
            raise ValueError("Playlist is closed")
        self._file.write(f"{file_path}\n")

    def close(self) -> None:
        """Close the playlist. Safe to call multiple times."""
        if self._file is not None:
            self._file.close()
            self._file = None
