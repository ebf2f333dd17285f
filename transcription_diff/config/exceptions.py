"""Custom exceptions for configuration management."""

from typing import List, Optional


class ConfigurationError(Exception):
    """Raised when a config file or environment variable is unusable.

    ``str(error)`` is the full report shown by the CLI::

        Configuration validation failed

        Validation Errors:
          1. Invalid type for 'comparison -> max_transcript_length': expected int, got 'lots'

        Suggestions:
          - Review config.example.yaml for correct format
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        super().__init__(self.report())

    def report(self) -> str:
        lines = [self.message]

        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))

        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(lines)
