"""Small ModalScreen dialogs: info, confirmation and new group."""

from __future__ import annotations

from typing import Iterable, Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from ridgeline.tui.models import WidgetIds
from ridgeline.tui.shared import validate_group_name


class InfoModal(ModalScreen[None]):
    """Message box for errors the user has to acknowledge (Enter/Esc closes)."""

    def __init__(self, message: str, *, title: str = "Info") -> None:
        super().__init__()
        self._title = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id=WidgetIds.INFO_MODAL):
            yield Static(self._title, classes="title error")
            yield Static(self.message)
            yield Static("Enter/Esc: close", classes="muted")

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key in ("escape", "enter"):
            self.dismiss(None)
            event.stop()


class ConfirmModal(ModalScreen[bool]):
    """
    Yes/no question for a destructive action.

    Focus starts on the "keep" button, so Enter alone never confirms; `y` or
    the confirm button does. `n` and Esc answer no.
    """

    AUTO_FOCUS = f"#{WidgetIds.CONFIRM_NO_BTN}"

    BINDINGS = [
        Binding("y", "answer(True)", "Yes"),
        Binding("n", "answer(False)", "No"),
        Binding("escape", "answer(False)", "No", show=False),
    ]

    def __init__(
        self,
        message: str,
        *,
        title: str = "Confirm",
        confirm_label: str = "Yes",
        cancel_label: str = "No",
    ) -> None:
        super().__init__()
        self._title = title
        self._message = message
        self._confirm_label = confirm_label
        self._cancel_label = cancel_label

    def compose(self) -> ComposeResult:
        with Vertical(id=WidgetIds.CONFIRM_MODAL):
            yield Static(self._title, classes="title")
            yield Static(self._message)
            with Horizontal():
                yield Button(self._confirm_label, variant="error", id=WidgetIds.CONFIRM_YES_BTN)
                yield Button(self._cancel_label, id=WidgetIds.CONFIRM_NO_BTN)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == WidgetIds.CONFIRM_YES_BTN)

    def action_answer(self, yes: bool) -> None:
        self.dismiss(yes)

class NewGroupModal(ModalScreen[Optional[str]]):
    """Modal dialog for naming a new group, with validation."""

    def __init__(self, *, existing_titles: Iterable[str] = ()) -> None:
        super().__init__()
        self._existing = [str(t) for t in existing_titles]
        self.error_message: str = ""

    def compose(self) -> ComposeResult:
        with Vertical(id=WidgetIds.NEW_GROUP_MODAL):
            yield Static("Create New Group", classes="title")
            yield Input(placeholder="Group name", id=WidgetIds.NEW_GROUP_INPUT)
            yield Static("", id=WidgetIds.NEW_GROUP_ERROR, classes="error")
            with Horizontal():
                yield Button("Create", variant="primary", id=WidgetIds.CREATE_BTN)
                yield Button("Cancel", id=WidgetIds.CANCEL_BTN)

    def on_mount(self) -> None:
        self.query_one(f"#{WidgetIds.NEW_GROUP_INPUT}", Input).focus()

    def _submit(self, value: str) -> None:
        ok, err = validate_group_name(value, self._existing)
        if not ok:
            self.error_message = err or ""
            self.query_one(f"#{WidgetIds.NEW_GROUP_ERROR}", Static).update(self.error_message)
            return
        self.dismiss(value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == WidgetIds.CREATE_BTN:
            self._submit(self.query_one(f"#{WidgetIds.NEW_GROUP_INPUT}", Input).value)
        else:
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == WidgetIds.NEW_GROUP_INPUT:
            self._submit(event.value)

    def on_key(self, event) -> None:  # type: ignore[override]
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
