"""Test progress accounting"""

import io

from art_size_reader.core.progress import ProgressLine, RunProgress


class TestRunProgress:
    """Test the counters"""

    def test_advance_is_monotonic(self):
        progress = RunProgress(total=3)

        assert [progress.advance() for _ in range(3)] == [1, 2, 3]
        assert progress.done == 3


class TestProgressLine:
    """Test rendering"""

    def test_line_after_each_file(self):
        stream = io.StringIO()

        with ProgressLine(total=3, stream=stream) as line:
            for _ in range(3):
                line.advance()

        output = stream.getvalue()
        assert "\r1 of 3 (33%) finished." in output
        assert "\r2 of 3 (67%) finished." in output
        assert "\r3 of 3 (100%) finished." in output
        assert line.progress.done == 3

    def test_empty_run_draws_nothing(self):
        stream = io.StringIO()

        with ProgressLine(total=0, stream=stream) as line:
            line.advance()

        assert stream.getvalue() == ""
