"""Command-line entry point for comparing a transcription with its reference."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from transcription_diff.alignment.comparer import TranscriptionComparer
from transcription_diff.alignment.exceptions import TranscriptValidationError
from transcription_diff.alignment.utils import build_comparison_payload, format_feedback_text
from transcription_diff.config.environment import EnvironmentConfig
from transcription_diff.config.exceptions import ConfigurationError
from transcription_diff.config.loader import load_config
from transcription_diff.config.models import AppConfig, RenderConfig
from transcription_diff.logging import get_logger
from transcription_diff.logging.config import configure_logging
from transcription_diff.logging.context import log_context

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level and format.

    Log level priority: CLI > environment > config file.
    Log format priority: environment > config file.

    Args:
        config_path: Path to configuration file (None to use defaults/lookup)
        log_level_override: Log level from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with log_level and log_format set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcription-diff",
        description="Compare a typed transcription with its reference transcript",
    )
    parser.add_argument("reference", nargs="?", help="Reference transcript text")
    parser.add_argument("user_text", nargs="?", help="Learner transcription text")
    parser.add_argument(
        "--reference-file",
        type=Path,
        help="Read the reference transcript from a UTF-8 file",
    )
    parser.add_argument(
        "--user-file",
        type=Path,
        help="Read the learner transcription from a UTF-8 file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Render diff markers as HTML tags instead of the configured text markers",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def _resolve_text(
    parser: argparse.ArgumentParser, inline: Optional[str], path: Optional[Path], name: str
) -> str:
    """Return inline text or the contents of path; exactly one must be given."""
    if inline is not None and path is not None:
        parser.error(f"give the {name} either inline or with --{name.replace('_', '-')}-file, not both")
    if path is not None:
        return path.read_text(encoding="utf-8")
    if inline is None:
        parser.error(f"missing {name}")
    return inline


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the transcription-diff command.

    Returns:
        Exit code (0 for success, 1 for configuration, validation or I/O errors).
        Usage errors exit with status 2 through argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # With --reference-file, a single positional is the user text
    reference_inline = args.reference
    user_inline = args.user_text
    if args.reference_file is not None:
        if args.user_text is not None:
            parser.error("too many positional arguments when --reference-file is given")
        reference_inline, user_inline = None, args.reference

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        reference = _resolve_text(parser, reference_inline, args.reference_file, "reference")
        user_text = _resolve_text(parser, user_inline, args.user_file, "user")

        render_config = RenderConfig.html() if args.html else app_config.render
        comparer = TranscriptionComparer(app_config.comparison)

        with log_context(command="compare"):
            comparison = comparer.compare(reference, user_text)

        if args.output_format == "json":
            print(json.dumps(build_comparison_payload(comparison), ensure_ascii=False, indent=2))
        else:
            print(format_feedback_text(comparison, render_config))

        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "cli.config_error", "error_type": "ConfigurationError"},
        )
        return 1
    except TranscriptValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Could not read input: {e}", file=sys.stderr)
        logger.error(
            "Failed to read input file",
            extra={"event": "cli.input_error", "error": str(e)},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
