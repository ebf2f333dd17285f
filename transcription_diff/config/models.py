"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class ComparisonConfig(BaseModel):
    """Input governance and alignment settings for transcript comparisons."""

    max_transcript_length: int = Field(
        5000,
        ge=1,
        le=100000,
        description="Maximum normalized length of either transcript (characters)",
    )
    allow_empty_user_text: bool = Field(
        True, description="Accept a blank learner transcription (scores against an empty string)"
    )
    match_first: bool = Field(
        False,
        description=(
            "Always record a match for equal characters instead of letting an "
            "equal-cost delete or insert win the tie-break"
        ),
    )


class RenderConfig(BaseModel):
    """Markers used when rendering diff segments as text."""

    match_start: str = Field("", description="Inserted before matched text")
    match_end: str = Field("", description="Inserted after matched text")
    delete_start: str = Field("[-", description="Inserted before reference text the learner missed")
    delete_end: str = Field("-]", description="Inserted after reference text the learner missed")
    insert_start: str = Field("{+", description="Inserted before extra learner text")
    insert_end: str = Field("+}", description="Inserted after extra learner text")
    replace_start: str = Field("[", description="Inserted before a replaced character pair")
    replace_separator: str = Field("->", description="Separates reference and learner text")
    replace_end: str = Field("]", description="Inserted after a replaced character pair")
    escape_html: bool = Field(
        False, description="HTML-escape transcript text placed between the markers"
    )

    @classmethod
    def html(cls) -> "RenderConfig":
        """Preset that wraps segments in HTML tags for email or web feedback."""
        return cls(
            match_start='<span class="match">',
            match_end="</span>",
            delete_start="<del>",
            delete_end="</del>",
            insert_start="<ins>",
            insert_end="</ins>",
            replace_start="<del>",
            replace_separator="</del><ins>",
            replace_end="</ins>",
            escape_html=True,
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the transcription diff engine."""

    comparison: ComparisonConfig = Field(
        default_factory=ComparisonConfig, description="Comparison settings"
    )
    render: RenderConfig = Field(default_factory=RenderConfig, description="Rendering markers")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @model_validator(mode="after")
    def validate_render_markers(self):
        """Reject marker schemes where missed and extra text look identical."""
        render = self.render
        if (
            (render.delete_start or render.delete_end)
            and render.delete_start == render.insert_start
            and render.delete_end == render.insert_end
        ):
            raise ValueError(
                "render.delete_* and render.insert_* markers must differ so that "
                "missed and extra characters can be told apart"
            )
        return self
