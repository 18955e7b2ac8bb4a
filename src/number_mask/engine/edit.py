"""Edit engine: one synchronous transaction per user action.

``handle_edit`` is the single entry point used by binding layers. It
dispatches on the request's trigger and short-circuits requests that carry the
engine's own ``Origin.FACADE`` marker, so applying a result back to a live
field (which may fire another notification) never loops.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from number_mask.config import get_settings
from number_mask.engine.cursor import restore_cursor
from number_mask.engine.keys import decide_key
from number_mask.formatting.number_format import NumberFormatter, Value
from number_mask.models.edit import EditRequest, EditResult, NotifyKind, Origin, Trigger
from number_mask.models.options import FieldPhase, FieldState, Options
from number_mask.utils.logging import get_logger

logger = get_logger(__name__)


def _phase_for(unmasked: str, committed: bool) -> FieldPhase:
    if not any(ch.isdigit() for ch in unmasked):
        return FieldPhase.EMPTY
    return FieldPhase.COMMITTED if committed else FieldPhase.TYPING


def _accept(state: FieldState, masked: str, phase: FieldPhase) -> None:
    state.old_value = masked
    state.masked = masked
    # always the committed reading of the display, even mid-typing
    state.unmasked_value = NumberFormatter(state.options).unformat(masked)
    state.phase = phase


def clamp(unmasked: str, options: Options, formatter: NumberFormatter) -> str:
    """Clamp a committed numeric string into ``[min, max]``; absent values pass through."""
    if not unmasked:
        return unmasked
    try:
        number = Decimal(unmasked)
    except InvalidOperation:
        return unmasked
    if options.max is not None and number > Decimal(str(options.max)):
        logger.info("value_clamped", bound="max", value=unmasked, limit=options.max)
        return formatter.unformat(options.max)
    if options.min is not None and number < Decimal(str(options.min)):
        logger.info("value_clamped", bound="min", value=unmasked, limit=options.min)
        return formatter.unformat(options.min)
    return unmasked


def bind_field(options: Options | None = None, value: Value = None) -> FieldState:
    """Create the state for a newly bound field and format its initial value."""
    options = options or get_settings().default_options()
    formatter = NumberFormatter(options)
    unmasked = formatter.unformat(value)
    state = FieldState(options=options)
    _accept(state, formatter.format(unmasked), _phase_for(unmasked, committed=True))
    logger.debug("field_bound", masked=state.masked, phase=state.phase)
    return state


def on_input(state: FieldState, raw_text: str, cursor_from_end: int = 0) -> EditResult:
    """Re-mask *raw_text* as typed, without clamping, keeping the caret beside the same digit."""
    options = state.options
    formatter = NumberFormatter(options)
    shaped = formatter.clean(False).reformat(raw_text)
    masked = shaped.text
    cursor = restore_cursor(
        masked, cursor_from_end, options, padding=shaped.padding, trimmed=shaped.trimmed
    )

    if masked == state.old_value:
        return EditResult(masked=masked, unmasked_value=state.unmasked_value, cursor=cursor)

    _accept(state, masked, _phase_for(formatter.unformat(raw_text), committed=False))
    logger.debug("input_masked", raw=raw_text, masked=masked, cursor=cursor)
    return EditResult(
        masked=masked,
        unmasked_value=state.unmasked_value,
        cursor=cursor,
        notify=NotifyKind.INPUT,
    )


def on_blur(state: FieldState, raw_text: str) -> EditResult:
    """Commit: force a full reformat in commit mode and clamp into the bounds."""
    options = state.options
    formatter = NumberFormatter(options)
    unmasked = clamp(formatter.unformat(raw_text), options, formatter)
    masked = formatter.format(unmasked)
    changed = masked != state.old_value

    _accept(state, masked, _phase_for(unmasked, committed=True))
    logger.debug("value_committed", masked=masked, changed=changed)
    return EditResult(
        masked=masked,
        unmasked_value=state.unmasked_value,
        cursor=restore_cursor(masked, 0, options),
        notify=NotifyKind.CHANGE if changed else None,
    )


def on_keydown(state: FieldState, text: str, key: str, cursor_from_end: int = 0) -> EditResult:
    """Run the keydown policy; text the engine rewrites itself goes through ``on_input``."""
    cursor = len(text) - min(cursor_from_end, len(text))
    policy = decide_key(text, key, cursor, state.options)
    if policy.text is None:
        return EditResult(
            masked=state.masked,
            unmasked_value=state.unmasked_value,
            suppress_default=policy.suppress_default,
            key_action=policy.action,
        )

    logger.debug("key_rewrote_text", key=key, action=policy.action, text=policy.text)
    result = on_input(state, policy.text, policy.cursor_from_end)
    return result.model_copy(update={"suppress_default": True, "key_action": policy.action})


def set_value(state: FieldState, value: Value) -> EditResult:
    """The bound model value changed programmatically; reformat without clamping."""
    formatter = NumberFormatter(state.options)
    unmasked = formatter.unformat(value)
    masked = formatter.format(unmasked)
    if masked == state.old_value:
        return EditResult(masked=masked, unmasked_value=state.unmasked_value)

    _accept(state, masked, _phase_for(unmasked, committed=True))
    return EditResult(masked=masked, unmasked_value=state.unmasked_value, notify=NotifyKind.INPUT)


def handle_edit(state: FieldState, request: EditRequest) -> EditResult:
    """Dispatch one edit transaction on *state*."""
    if request.origin is Origin.FACADE:
        logger.debug("edit_skipped", trigger=request.trigger)
        return EditResult(masked=state.masked, unmasked_value=state.unmasked_value, skipped=True)

    match request.trigger:
        case Trigger.INPUT:
            return on_input(state, request.text, request.cursor_from_end)
        case Trigger.BLUR:
            return on_blur(state, request.text)
        case Trigger.KEYDOWN:
            return on_keydown(state, request.text, request.key or "", request.cursor_from_end)
        case Trigger.MODEL:
            return set_value(state, request.value)
    raise ValueError(f"Unknown trigger: {request.trigger}")
