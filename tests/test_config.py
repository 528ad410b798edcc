"""Test option parsing and configuration building"""

import pytest

from art_size_reader.core.config import (
    ConfigBuilder,
    Resolution,
    load_defaults,
    parse_resolution,
)
from art_size_reader.core.exceptions import (
    ConfigError,
    OutputError,
    ParseError,
    PathNotFound,
)


class TestParseResolution:
    """Test WIDTHxHEIGHT parsing"""

    @pytest.mark.parametrize("text, expected", [
        ("300x300", Resolution(300, 300)),
        ("1920x1080", Resolution(1920, 1080)),
        ("0x0", Resolution(0, 0)),
        (" 500 x 400 ", Resolution(500, 400)),
    ])
    def test_valid_resolutions(self, text, expected):
        """Width comes first, height second"""
        assert parse_resolution(text) == expected

    @pytest.mark.parametrize("text", [
        "300",
        "300x",
        "x300",
        "300y300",
        "-300x300",
        "300x300x300",
        "3.5x300",
        "abcxdef",
        "640X480",
        "３００x３００",
        "٣٠٠x٣٠٠",
        "",
    ])
    def test_invalid_resolutions(self, text):
        """Anything else is a parse error naming the input"""
        with pytest.raises(ParseError) as exc_info:
            parse_resolution(text)
        assert text in exc_info.value.message

    def test_parse_error_is_fatal(self):
        with pytest.raises(ParseError) as exc_info:
            parse_resolution("big")
        assert exc_info.value.fatal is True
        assert isinstance(exc_info.value, ConfigError)

    def test_resolution_str(self):
        assert str(Resolution(500, 400)) == "500x400"


class TestConfigBuilder:
    """Test ConfigBuilder validation"""

    def test_build_directory_target(self, temp_dir):
        config = ConfigBuilder(target_path=str(temp_dir), threshold="300x300").build()

        assert config.target_path == temp_dir
        assert config.min_threshold == Resolution(300, 300)
        assert config.max_threshold is None
        assert config.check_ratio is False
        assert config.max_size_kb is None
        assert config.logfile is None
        assert config.playlist is None
        assert not config.is_noop

    def test_chained_setters(self, temp_dir):
        config = (
            ConfigBuilder()
            .to_read(temp_dir)
            .with_threshold("100x100")
            .with_max_threshold("900x900")
            .with_ratio(True)
            .with_size("12.5")
            .build()
        )

        assert config.min_threshold == Resolution(100, 100)
        assert config.max_threshold == Resolution(900, 900)
        assert config.check_ratio is True
        assert config.max_size_kb == 12.5

    def test_missing_target(self, temp_dir):
        with pytest.raises(PathNotFound):
            ConfigBuilder(target_path=str(temp_dir / "missing"), threshold="1x1").build()

    def test_no_target(self):
        with pytest.raises(PathNotFound):
            ConfigBuilder(threshold="1x1").build()

    def test_target_error_reported_before_threshold_error(self, temp_dir):
        """An invalid target makes threshold validity moot"""
        builder = ConfigBuilder(
            target_path=str(temp_dir / "missing"),
            threshold="garbage",
            max_threshold="garbage",
        )
        with pytest.raises(PathNotFound):
            builder.build()

    def test_bad_max_threshold(self, temp_dir):
        with pytest.raises(ParseError) as exc_info:
            ConfigBuilder(target_path=str(temp_dir), threshold="1x1", max_threshold="1000").build()
        assert "1000" in exc_info.value.message

    @pytest.mark.parametrize("size", [0, -5, "abc"])
    def test_bad_size(self, temp_dir, size):
        with pytest.raises(ConfigError):
            ConfigBuilder(target_path=str(temp_dir), size=size).build()

    def test_noop_without_threshold_or_size(self, temp_dir):
        builder = ConfigBuilder(target_path=str(temp_dir), ratio=True, max_threshold="10x10")
        assert not builder.has_checks

        config = builder.build()
        assert config.is_noop

    def test_size_alone_is_enough(self, temp_dir):
        builder = ConfigBuilder(target_path=str(temp_dir), size=10)
        assert builder.has_checks
        assert not builder.build().is_noop

    def test_logfile_opened_in_append_mode(self, temp_dir):
        logfile = temp_dir / "audit.log"
        logfile.write_text("previous run\n", encoding="utf-8")

        config = ConfigBuilder(
            target_path=str(temp_dir), threshold="1x1", logfile=str(logfile)
        ).build()
        with config:
            config.logfile.write("this run\n")

        assert logfile.read_text(encoding="utf-8") == "previous run\nthis run\n"
        assert config.logfile_path == logfile.resolve()

    def test_logfile_directory_must_exist(self, temp_dir):
        with pytest.raises(OutputError):
            ConfigBuilder(
                target_path=str(temp_dir),
                threshold="1x1",
                logfile=str(temp_dir / "nope" / "audit.log"),
            ).build()

    def test_playlist_created_at_build_time(self, temp_dir):
        playlist = temp_dir / "broken.m3u"

        config = ConfigBuilder(
            target_path=str(temp_dir), threshold="1x1", playlist=str(playlist)
        ).build()

        assert playlist.exists()
        config.close()
        assert config.playlist.closed

    def test_playlist_failure_closes_logfile(self, temp_dir, monkeypatch):
        logfile = temp_dir / "audit.log"
        opened = []

        import art_size_reader.core.config as config_module
        real_open_logfile = config_module._open_logfile

        def tracking_open(path):
            stream = real_open_logfile(path)
            opened.append(stream)
            return stream

        monkeypatch.setattr(config_module, "_open_logfile", tracking_open)

        with pytest.raises(OutputError):
            ConfigBuilder(
                target_path=str(temp_dir),
                threshold="1x1",
                logfile=str(logfile),
                playlist=str(temp_dir / "nope" / "broken.m3u"),
            ).build()

        assert len(opened) == 1
        assert opened[0].closed

    def test_close_is_idempotent(self, temp_dir):
        config = ConfigBuilder(
            target_path=str(temp_dir),
            threshold="1x1",
            logfile=str(temp_dir / "a.log"),
            playlist=str(temp_dir / "b.m3u"),
        ).build()
        config.close()
        config.close()


class TestDefaults:
    """Test YAML option defaults"""

    def test_load_defaults(self, temp_dir):
        path = temp_dir / "artsize.yaml"
        path.write_text(
            'threshold: "500x500"\n'
            "ratio: true\n"
            "size: 800\n"
            "playlist: null\n",
            encoding="utf-8",
        )

        defaults = load_defaults(path)

        assert defaults == {"threshold": "500x500", "ratio": True, "size": 800}

    def test_empty_file(self, temp_dir):
        path = temp_dir / "artsize.yaml"
        path.write_text("", encoding="utf-8")
        assert load_defaults(path) == {}

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError):
            load_defaults(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "artsize.yaml"
        path.write_text("threshold: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_defaults(path)

    def test_not_a_mapping(self, temp_dir):
        path = temp_dir / "artsize.yaml"
        path.write_text("- 500x500\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_defaults(path)

    def test_unknown_key(self, temp_dir):
        path = temp_dir / "artsize.yaml"
        path.write_text("treshold: 500x500\n", encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_defaults(path)
        assert "treshold" in exc_info.value.message

    @pytest.mark.parametrize("content", [
        "ratio: yes please\n",
        "size: big\n",
        "threshold: 500\n",
    ])
    def test_bad_types(self, temp_dir, content):
        path = temp_dir / "artsize.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_defaults(path)

    def test_explicit_values_win(self, temp_dir):
        builder = ConfigBuilder(target_path=str(temp_dir), threshold="100x100")
        builder.apply_defaults({"threshold": "500x500", "size": 300, "ratio": True})

        assert builder.threshold == "100x100"
        assert builder.size == 300
        assert builder.ratio is True
