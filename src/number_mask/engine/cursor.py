"""Caret placement across a re-mask.

Offsets are tracked as a distance from the end of the text: separators that
appear or disappear in the integer part sit to the left of the caret, so
measuring from the right keeps the caret next to the same digit.
"""

from __future__ import annotations

from number_mask.models.options import Options


def position_from_end(text: str, cursor: int | None) -> int:
    """Distance from *cursor* to the end of *text*; ``None`` means the caret is at the end."""
    if cursor is None:
        return 0
    return len(text) - max(0, min(cursor, len(text)))


def restore_cursor(
    masked: str,
    from_end: int,
    options: Options,
    *,
    padding: int = 0,
    trimmed: int = 0,
) -> int:
    """Start-based caret offset in *masked*, never inside the prefix or suffix.

    *trimmed* characters cut from the end of the number only move the caret
    when they were to its right. *padding* characters appended to the number
    always land to the right of the caret.
    """
    suffix = len(options.suffix)
    if trimmed:
        from_end -= min(max(from_end - suffix, 0), trimmed)
    from_end = max(from_end, suffix) + padding
    position = len(masked) - from_end
    if options.prefix:
        position = max(position, len(options.prefix))
    return max(0, min(position, len(masked)))
