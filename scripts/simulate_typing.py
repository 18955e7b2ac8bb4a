#!/usr/bin/env python3
"""Type a string into a masked field one key at a time and print each state."""
import json
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from number_mask.config import get_settings
from number_mask.engine.edit import bind_field, handle_edit
from number_mask.models.edit import EditRequest, Trigger
from number_mask.utils.logging import setup_logging


def main(keys: str, options_json: str | None = None) -> None:
    """Feed *keys* through the engine; ``<`` stands for Backspace."""
    settings = get_settings()
    setup_logging(settings.log_level, json_output=False)

    overrides = json.loads(options_json) if options_json else {}
    state = bind_field(settings.default_options(**overrides))
    text, cursor = state.masked, len(state.masked)
    print(f"bound: {text!r}")
    print("-" * 50)

    for ch in keys:
        key = "Backspace" if ch == "<" else ch
        from_end = len(text) - cursor
        down = handle_edit(state, EditRequest(trigger=Trigger.KEYDOWN, text=text, key=key, cursor_from_end=from_end))
        if down.suppress_default:
            if down.cursor is not None:
                text, cursor = down.masked, down.cursor
            print(f"{key!r:>12} -> {text!r} ({down.key_action})")
            continue

        if key == "Backspace":
            raw = text[:max(0, cursor - 1)] + text[cursor:]
        else:
            raw = text[:cursor] + key + text[cursor:]
        result = handle_edit(state, EditRequest(trigger=Trigger.INPUT, text=raw, cursor_from_end=from_end))
        text, cursor = result.masked, result.cursor
        caret = text[:cursor] + "|" + text[cursor:]
        print(f"{key!r:>12} -> {caret!r} unmasked={result.unmasked_value!r}")

    committed = handle_edit(state, EditRequest(trigger=Trigger.BLUR, text=text))
    print("-" * 50)
    print(f"blur: {committed.masked!r} unmasked={committed.unmasked_value!r} notify={committed.notify}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/simulate_typing.py <keys> [options-json]")
        sys.exit(1)

    main(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)
