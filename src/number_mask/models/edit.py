"""Edit transaction request/result models.

One ``EditRequest`` describes one user action (keystroke, paste, blur) or a
value pushed from the bound model. ``handle_edit`` turns it into an
``EditResult`` that the binding layer applies back to the field.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class Trigger(StrEnum):
    INPUT = "input"
    BLUR = "blur"
    KEYDOWN = "keydown"
    MODEL = "model"


class Origin(StrEnum):
    """Who produced the notification that led to this request."""

    USER = "user"
    FACADE = "facade"


class NotifyKind(StrEnum):
    INPUT = "input"
    CHANGE = "change"


class KeyAction(StrEnum):
    ALLOW = "allow"
    SUPPRESS = "suppress"
    DELETE_GROUP = "delete_group"
    CLEAR = "clear"


class KeyPolicy(BaseModel):
    """Outcome of the keydown decision table.

    ``text`` is set only when the engine rewrote the field itself
    (``DELETE_GROUP`` and ``CLEAR``); that text must then go through the input
    step like any other edit.
    """

    action: KeyAction = KeyAction.ALLOW
    text: str | None = None
    cursor_from_end: int = 0

    @property
    def suppress_default(self) -> bool:
        return self.action is not KeyAction.ALLOW


class EditRequest(BaseModel):
    trigger: Trigger
    text: str = ""
    cursor_from_end: int = Field(default=0, ge=0)
    key: str | None = None
    value: float | int | Decimal | str | None = None
    origin: Origin = Origin.USER


class EditResult(BaseModel):
    """What the caller writes back to the field.

    ``cursor`` is measured from the start of ``masked``; ``None`` means the
    caret should be left where it is.
    """

    masked: str
    unmasked_value: str
    cursor: int | None = None
    notify: NotifyKind | None = None
    suppress_default: bool = False
    key_action: KeyAction | None = None
    skipped: bool = False

    @property
    def should_notify(self) -> bool:
        return self.notify is not None

    @property
    def cursor_from_end(self) -> int | None:
        if self.cursor is None:
            return None
        return len(self.masked) - self.cursor
