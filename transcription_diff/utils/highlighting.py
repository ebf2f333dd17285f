"""Rendering utilities for diff segments.

Turns the ordered DiffSegment list into marked-up text for feedback:
plain text for terminals and logs, or HTML via RenderConfig.html().
"""

from typing import List, Optional, Sequence

from markupsafe import escape

from transcription_diff.config.models import RenderConfig
from transcription_diff.domain.models import DiffKind, DiffSegment


def _escape(text: str, config: RenderConfig) -> str:
    return str(escape(text)) if config.escape_html else text


def group_segments(segments: Sequence[DiffSegment]) -> List[DiffSegment]:
    """Merge adjacent error segments of the same kind.

    The engine emits one segment per deleted, inserted or replaced
    character; for display, runs like three inserted characters read better
    as one span. Match segments are already merged by the engine.

    Args:
        segments: Ordered diff segments

    Returns:
        New list with same-kind neighbours merged

    Example:
        >>> [s.user_text for s in group_segments(diff("hello", "helloo!"))]
        ['hello', 'o!']
    """
    grouped: List[DiffSegment] = []

    for segment in segments:
        if grouped:
            previous = grouped[-1]
            if (
                previous.kind == segment.kind
                and previous.kind != DiffKind.MATCH
                and previous.end_index == segment.start_index
            ):
                grouped[-1] = DiffSegment(
                    kind=segment.kind,
                    reference_text=previous.reference_text + segment.reference_text,
                    user_text=previous.user_text + segment.user_text,
                    start_index=previous.start_index,
                    end_index=segment.end_index,
                )
                continue
        grouped.append(segment)

    return grouped


def render_diff(
    segments: Sequence[DiffSegment], render_config: Optional[RenderConfig] = None
) -> str:
    """Render segments inline, wrapping each kind with its markers.

    With the default markers:
    - matches are plain text
    - missed reference text is wrapped as [-x-]
    - extra learner text is wrapped as {+x+}
    - replacements are shown as [x->y]

    With escape_html set (as in RenderConfig.html()), transcript text is
    HTML-escaped; the markers themselves are emitted as given.

    Args:
        segments: Ordered diff segments
        render_config: Marker scheme (defaults to RenderConfig())

    Returns:
        Rendered text

    Example:
        >>> render_diff(diff("cat", "cut"))
        'c[a->u]t'
    """
    config = render_config or RenderConfig()
    parts = []

    for segment in group_segments(segments):
        reference_text = _escape(segment.reference_text, config)
        user_text = _escape(segment.user_text, config)

        if segment.kind == DiffKind.MATCH:
            parts.append(f"{config.match_start}{reference_text}{config.match_end}")
        elif segment.kind == DiffKind.DELETE:
            parts.append(f"{config.delete_start}{reference_text}{config.delete_end}")
        elif segment.kind == DiffKind.INSERT:
            parts.append(f"{config.insert_start}{user_text}{config.insert_end}")
        else:
            parts.append(
                f"{config.replace_start}{reference_text}"
                f"{config.replace_separator}{user_text}{config.replace_end}"
            )

    return "".join(parts)


def render_reference_line(
    segments: Sequence[DiffSegment], render_config: Optional[RenderConfig] = None
) -> str:
    """Render the reference with missed and wrongly typed characters marked.

    Inserted learner text does not appear on this line.
    """
    config = render_config or RenderConfig()
    parts = []

    for segment in group_segments(segments):
        text = _escape(segment.reference_text, config)
        if segment.kind == DiffKind.MATCH:
            parts.append(text)
        elif segment.kind in (DiffKind.DELETE, DiffKind.REPLACE):
            parts.append(f"{config.delete_start}{text}{config.delete_end}")

    return "".join(parts)


def render_user_line(
    segments: Sequence[DiffSegment], render_config: Optional[RenderConfig] = None
) -> str:
    """Render the learner text with extra and wrongly typed characters marked.

    Missed reference text does not appear on this line.
    """
    config = render_config or RenderConfig()
    parts = []

    for segment in group_segments(segments):
        text = _escape(segment.user_text, config)
        if segment.kind == DiffKind.MATCH:
            parts.append(text)
        elif segment.kind in (DiffKind.INSERT, DiffKind.REPLACE):
            parts.append(f"{config.insert_start}{text}{config.insert_end}")

    return "".join(parts)


def truncate_text(text: str, max_length: int = 500, suffix: str = "...") -> str:
    """Truncate text to maximum length, adding suffix if truncated.

    Tries to break at word boundaries for cleaner truncation.

    Args:
        text: Text to truncate
        max_length: Maximum length (including suffix)
        suffix: Suffix to add if truncated (default: ...)

    Returns:
        Truncated text with suffix if needed

    Example:
        >>> truncate_text("This is a very long text that needs truncating", max_length=30)
        'This is a very long text...'
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)

    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]

    # Only break at a space if it is not too far back
    last_space = truncated.rfind(" ")
    if last_space > truncate_at * 0.8:
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix
