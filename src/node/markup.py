"""Reply markup: keyboards and reply controls attached to sent messages."""

from __future__ import annotations

from typing import Any

from src.node.parameters import NodeParameters

_KEYBOARD_KEYS = {
    "inlineKeyboard": "inline_keyboard",
    "replyKeyboard": "keyboard",
}
_VERBATIM_OPTIONS = ("forceReply", "replyKeyboardRemove")


class ReplyMarkupError(ValueError):
    pass


def _keyboard_rows(keyboard: dict[str, Any]) -> list[list[dict[str, Any]]]:
    """Flatten the form's ``rows[].row.buttons[]`` shape into button rows.

    Rows without buttons are skipped. A button is its label plus any of its
    additional fields, copied verbatim.
    """
    rows: list[list[dict[str, Any]]] = []
    for entry in keyboard.get("rows") or []:
        row = entry.get("row") or {}
        buttons = row.get("buttons")
        if buttons is None:
            continue
        send_row = []
        for button in buttons:
            send_button: dict[str, Any] = {"text": button.get("text", "")}
            send_button.update(button.get("additionalFields") or {})
            send_row.append(send_button)
        rows.append(send_row)
    return rows


def build_reply_markup(parameters: NodeParameters) -> dict[str, Any] | None:
    """Build the ``reply_markup`` object selected by ``replyMarkup``.

    Returns None when no markup is selected.
    """
    option = parameters.get("replyMarkup")
    if option == "none":
        return None

    if option in _KEYBOARD_KEYS:
        markup: dict[str, Any] = {
            _KEYBOARD_KEYS[option]: _keyboard_rows(parameters.get(option) or {}),
        }
        if option == "replyKeyboard":
            markup.update(parameters.get("replyKeyboardOptions") or {})
        return markup

    if option in _VERBATIM_OPTIONS:
        return dict(parameters.get(option) or {})

    raise ReplyMarkupError(f'The reply markup "{option}" is not known!')
