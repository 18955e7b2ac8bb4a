"""Keydown policy for a masked numeric field.

Only four situations get special treatment; every other key is left to the
host's default text editing and then reaches the engine as an input edit.
"""

from __future__ import annotations

from number_mask.engine.cursor import position_from_end
from number_mask.models.edit import KeyAction, KeyPolicy
from number_mask.models.options import Options
from number_mask.utils.logging import get_logger

logger = get_logger(__name__)

BACKSPACE = "Backspace"
MINUS_KEYS = frozenset({"-", "Subtract"})
PERIOD_KEYS = frozenset({".", "Decimal"})


def strip_affixes(text: str, options: Options) -> str:
    """*text* with every occurrence of the prefix and suffix removed."""
    for affix in (options.prefix, options.suffix):
        if affix:
            text = text.replace(affix, "")
    return text


def decide_key(text: str, key: str, cursor: int, options: Options) -> KeyPolicy:
    """Apply the keydown decision table; *cursor* is measured from the start of *text*."""
    cursor = max(0, min(cursor, len(text)))

    if key == options.decimal or key in PERIOD_KEYS:
        if options.decimal in strip_affixes(text, options):
            logger.debug("key_suppressed", key=key, reason="second_decimal")
            return KeyPolicy(action=KeyAction.SUPPRESS)
    elif key in MINUS_KEYS and not options.negatives_allowed:
        logger.debug("key_suppressed", key=key, reason="negative_not_allowed", min=options.min)
        return KeyPolicy(action=KeyAction.SUPPRESS)
    elif key == BACKSPACE and cursor > 0:
        before = text[cursor - 1]
        # the prefix wins over a separator that also ends it ("R$ " with " ")
        after_prefix = bool(options.prefix) and cursor <= len(options.prefix) and text.startswith(options.prefix)
        if after_prefix or before == "-":
            return KeyPolicy(action=KeyAction.CLEAR, text="", cursor_from_end=0)
        if options.separator and before == options.separator:
            # the separator and the digit it follows go as one unit
            edited = text[:max(0, cursor - 2)] + text[cursor:]
            return KeyPolicy(
                action=KeyAction.DELETE_GROUP,
                text=edited,
                cursor_from_end=position_from_end(text, cursor),
            )

    return KeyPolicy(action=KeyAction.ALLOW)
