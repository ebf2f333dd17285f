"""Unit tests for the main entry point.

Tests the main() function including:
- CLI argument parsing and text/file input resolution
- Configuration loading with priority (CLI > env > config)
- Text and JSON output
- Exit code handling
"""

import json
from unittest.mock import patch

import pytest

from transcription_diff.config.environment import EnvironmentConfig
from transcription_diff.config.exceptions import ConfigurationError
from transcription_diff.config.models import AppConfig, LoggingConfig
from transcription_diff.main import build_parser, load_runtime_config, main


@pytest.fixture
def clean_cwd(mock_env_vars, tmp_path):
    """Run from an empty directory so no config.yaml is picked up."""
    mock_env_vars.chdir(tmp_path)
    return tmp_path


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    def test_log_level_priority(self):
        """Test log level priority: CLI > env > config."""
        app_config = AppConfig(logging=LoggingConfig(level="ERROR", format="json"))

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig(log_level="INFO"))
            _, env_config = load_runtime_config(None, "DEBUG")
        assert env_config.log_level == "DEBUG"

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig(log_level="INFO"))
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_level == "INFO"

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig())
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_level == "ERROR"

    def test_log_format_priority(self):
        """Test log format priority: env > config."""
        app_config = AppConfig(logging=LoggingConfig(format="json"))

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig(log_format="key-value"))
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_format == "key-value"

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (app_config, EnvironmentConfig())
            _, env_config = load_runtime_config(None, None)
        assert env_config.log_format == "json"

    def test_config_path_is_passed_through(self, tmp_path):
        config_file = tmp_path / "config.yaml"

        with patch("transcription_diff.main.load_config") as mock_load:
            mock_load.return_value = (AppConfig(), EnvironmentConfig())
            load_runtime_config(config_file, None)

        mock_load.assert_called_once_with(config_file)


class TestParser:
    """Test suite for CLI argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["cat", "cut"])

        assert args.reference == "cat"
        assert args.user_text == "cut"
        assert args.output_format == "text"
        assert args.html is False
        assert args.config is None
        assert args.log_level is None

    def test_invalid_format_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["cat", "cut", "--format", "xml"])

        assert exc_info.value.code == 2


class TestMain:
    """Test suite for main()."""

    def test_text_output(self, clean_cwd, capsys):
        exit_code = main(["Cat", "cut"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Accuracy: 67%" in captured.out
        assert "Diff:      c[a->u]t" in captured.out

    def test_json_output(self, clean_cwd, capsys):
        exit_code = main(["hello", "hell", "--format", "json"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert payload["accuracy"] == 80
        assert payload["edit_distance"] == 1
        assert payload["diffs"][-1]["kind"] == "delete"
        assert payload["counts"]["delete"] == 1

    def test_html_output(self, clean_cwd, capsys):
        exit_code = main(["cat", "cut", "--html"])

        assert exit_code == 0
        assert "<del>a</del><ins>u</ins>" in capsys.readouterr().out

    def test_html_output_escapes_learner_markup(self, clean_cwd, capsys):
        exit_code = main(["a", "a<script>", "--html"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "<ins>&lt;script&gt;</ins>" in out
        assert "<script>" not in out

    def test_perfect_match(self, clean_cwd, capsys):
        exit_code = main(["  Hello   World ", "hello world"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Accuracy: 100%" in captured.out
        assert "Perfect match!" in captured.out

    def test_file_inputs(self, clean_cwd, capsys):
        reference_file = clean_cwd / "reference.txt"
        user_file = clean_cwd / "user.txt"
        reference_file.write_text("The quick brown fox\n", encoding="utf-8")
        user_file.write_text("the quick brown fox", encoding="utf-8")

        exit_code = main(
            ["--reference-file", str(reference_file), "--user-file", str(user_file)]
        )

        assert exit_code == 0
        assert "Accuracy: 100%" in capsys.readouterr().out

    def test_reference_file_with_inline_user_text(self, clean_cwd, capsys):
        reference_file = clean_cwd / "reference.txt"
        reference_file.write_text("cat", encoding="utf-8")

        exit_code = main(["--reference-file", str(reference_file), "cut"])

        assert exit_code == 0
        assert "Accuracy: 67%" in capsys.readouterr().out

    def test_reference_file_with_two_positionals(self, clean_cwd, tmp_path):
        reference_file = tmp_path / "reference.txt"
        reference_file.write_text("cat", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["--reference-file", str(reference_file), "cut", "extra"])

        assert exc_info.value.code == 2

    def test_inline_and_file_user_text(self, clean_cwd, tmp_path):
        user_file = tmp_path / "user.txt"
        user_file.write_text("cut", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["cat", "cut", "--user-file", str(user_file)])

        assert exc_info.value.code == 2

    def test_missing_user_text(self, clean_cwd):
        with pytest.raises(SystemExit) as exc_info:
            main(["cat"])

        assert exc_info.value.code == 2

    def test_missing_input_file(self, clean_cwd, capsys):
        exit_code = main(["cat", "--user-file", str(clean_cwd / "missing.txt")])

        assert exit_code == 1
        assert "Could not read input" in capsys.readouterr().err

    def test_transcript_too_long(self, clean_cwd, capsys):
        clean_cwd.joinpath("config.yaml").write_text(
            "comparison:\n  max_transcript_length: 3\n", encoding="utf-8"
        )

        exit_code = main(["hello", "hello"])

        assert exit_code == 1
        assert "Invalid input" in capsys.readouterr().err

    def test_env_limit_override(self, clean_cwd, mock_env_vars, capsys):
        mock_env_vars.setenv("MAX_TRANSCRIPT_LENGTH", "2")

        exit_code = main(["cat", "cat"])

        assert exit_code == 1
        assert "Invalid input" in capsys.readouterr().err

    def test_empty_user_text_rejected_when_disallowed(self, clean_cwd, capsys):
        clean_cwd.joinpath("config.yaml").write_text(
            "comparison:\n  allow_empty_user_text: false\n", encoding="utf-8"
        )

        exit_code = main(["cat", "   "])

        assert exit_code == 1
        assert "empty" in capsys.readouterr().err

    def test_empty_user_text_allowed_by_default(self, clean_cwd, capsys):
        exit_code = main(["cat", ""])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Accuracy: 0%" in captured.out
        assert "Missed: 3  Extra: 0  Wrong: 0" in captured.out

    def test_missing_config_file(self, clean_cwd, capsys):
        exit_code = main(["cat", "cut", "--config", str(clean_cwd / "nonexistent.yaml")])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err

    @patch("transcription_diff.main.load_runtime_config")
    def test_configuration_error(self, mock_load_config, clean_cwd):
        """Test main() handles ConfigurationError gracefully."""
        mock_load_config.side_effect = ConfigurationError(
            "Config file not found",
            suggestions=["Create config.yaml"],
        )

        assert main(["cat", "cut"]) == 1

    @patch("transcription_diff.main.configure_logging")
    @patch("transcription_diff.main.load_runtime_config")
    def test_log_level_override(self, mock_load_config, mock_configure_logging, clean_cwd):
        """Test that --log-level is passed to load_runtime_config."""
        mock_load_config.return_value = (
            AppConfig(),
            EnvironmentConfig(log_level="DEBUG", log_format="json"),
        )

        exit_code = main(["cat", "cut", "--log-level", "DEBUG"])

        assert exit_code == 0
        call_args = mock_load_config.call_args[0]
        assert call_args[1] == "DEBUG"
        mock_configure_logging.assert_called_once_with(
            level="DEBUG", format_type="json", environment="local"
        )
