"""Test output routing"""

import io
from pathlib import Path

from art_size_reader.audit.constraints import Violation
from art_size_reader.audit.reporter import Reporter
from art_size_reader.core.playlist import Playlist


def violation(path="/music/a.mp3", *fragments):
    return Violation(path=Path(path), fragments=list(fragments or ["No cover found."]))


class TestReporter:
    """Test console, logfile and playlist sinks"""

    def test_console_only(self):
        console = io.StringIO()
        reporter = Reporter(console=console)

        reporter.report(violation())

        assert console.getvalue() == "/music/a.mp3: No cover found.\n"

    def test_nothing_to_report(self):
        console = io.StringIO()
        reporter = Reporter(console=console)

        reporter.report(None)
        reporter.report(Violation(path=Path("/music/a.mp3")))

        assert console.getvalue() == ""

    def test_logfile_receives_violations(self):
        console = io.StringIO()
        logfile = io.StringIO()
        reporter = Reporter(console=console, logfile=logfile)

        reporter.report(violation("/music/a.mp3", "Artwork image size is 200x200"))

        assert logfile.getvalue() == "/music/a.mp3: Artwork image size is 200x200\n"
        assert console.getvalue() == ""

    def test_progress_stays_on_console_with_logfile(self):
        console = io.StringIO()
        logfile = io.StringIO()
        reporter = Reporter(console=console, logfile=logfile)

        reporter.start_progress(2)
        reporter.report(violation())
        reporter.advance()
        reporter.advance()
        reporter.finish()

        assert "2 of 2 (100%) finished." in console.getvalue()
        assert "finished" not in logfile.getvalue()
        assert logfile.getvalue() == "/music/a.mp3: No cover found.\n"

    def test_violation_erases_progress_line(self):
        console = io.StringIO()
        reporter = Reporter(console=console)

        reporter.start_progress(2)
        reporter.advance()
        reporter.report(violation())
        reporter.advance()
        reporter.finish()

        output = console.getvalue()
        line_start = output.index("/music/a.mp3: No cover found.\n")
        assert output[line_start - 1] == "\r"
        assert "1 of 2 (50%) finished." in output
        assert "2 of 2 (100%) finished." in output

    def test_playlist_gets_bare_path(self, temp_dir):
        playlist = Playlist(temp_dir / "broken.m3u")
        reporter = Reporter(console=io.StringIO(), playlist=playlist)

        reporter.report(violation("/music/a.mp3"))
        reporter.report(violation("/music/b.mp3", "Artwork file size is 80 kB."))
        playlist.close()

        assert (temp_dir / "broken.m3u").read_text(encoding="utf-8") == "/music/a.mp3\n/music/b.mp3\n"

    def test_errors_are_not_playlisted(self, temp_dir):
        console = io.StringIO()
        playlist = Playlist(temp_dir / "broken.m3u")
        reporter = Reporter(console=console, playlist=playlist)

        reporter.error(Path("/music/c.mp3"), "Could not read artwork: broken")
        playlist.close()

        assert console.getvalue() == "/music/c.mp3: Could not read artwork: broken\n"
        assert (temp_dir / "broken.m3u").read_text(encoding="utf-8") == ""

    def test_playlist_appends_across_runs(self, temp_dir):
        path = temp_dir / "broken.m3u"
        path.write_text("/music/old.mp3\n", encoding="utf-8")

        playlist = Playlist(path)
        Reporter(console=io.StringIO(), playlist=playlist).report(violation("/music/new.mp3"))
        playlist.close()

        assert path.read_text(encoding="utf-8") == "/music/old.mp3\n/music/new.mp3\n"
