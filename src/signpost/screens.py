"""Textual screens for pushed destinations, modal slots and overlays.

Screens never close themselves. A dismissal gesture is reported to the
navigation state through its bindings, and the router pops the screen once
the state says it is gone.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Static

from .destination import Destination
from .state import (
    Alert,
    AlertButton,
    ButtonRole,
    ConfirmationDialog,
    DialogAction,
    ModalPresentation,
    ModalSlot,
    NavigationState,
)


def button_variant(role: ButtonRole | None) -> str:
    """Textual button variant for a button role."""
    if role is ButtonRole.DESTRUCTIVE:
        return "error"
    if role is ButtonRole.CANCEL:
        return "default"
    return "primary"


class DismissGestureMixin:
    """Turns the dismiss key into a dismissal report."""

    dismiss_key: str = "escape"

    def on_key(self, event: Key) -> None:
        if event.key == self.dismiss_key:
            event.stop()
            event.prevent_default()
            self.report_dismissal()

    def report_dismissal(self) -> None:
        raise NotImplementedError


class DestinationScreen(DismissGestureMixin, Screen):
    """A destination pushed on the navigation stack."""

    DEFAULT_CSS = """
    DestinationScreen {
        layout: vertical;
    }

    #destination-title {
        width: 100%;
        height: 1;
        background: $primary-background;
        text-style: bold;
        padding: 0 1;
    }

    #destination-body {
        height: 1fr;
    }
    """

    def __init__(
        self,
        navigation: NavigationState,
        destination: Destination,
        dismiss_key: str = "escape",
    ) -> None:
        super().__init__()
        self.navigation = navigation
        self.destination = destination
        self.dismiss_key = dismiss_key

    def compose(self) -> ComposeResult:
        yield Static(self.destination.title, id="destination-title")
        with Vertical(id="destination-body"):
            yield self.destination.view()

    def report_dismissal(self) -> None:
        """Back gesture: pop the top of the stack."""
        self.navigation.binding("path").dismiss()


class _ModalSlotMixin(DismissGestureMixin):
    """Shared state for screens that render a modal slot."""

    modal_slot: ModalSlot

    def _init_slot(
        self,
        navigation: NavigationState,
        presentation: ModalPresentation,
        dismiss_key: str,
    ) -> None:
        self.navigation = navigation
        self.presentation = presentation
        self.dismiss_key = dismiss_key

    @property
    def destination(self) -> Destination:
        return self.presentation.destination

    def report_dismissal(self) -> None:
        self.navigation.binding(self.modal_slot.value).set(None)


class SheetScreen(_ModalSlotMixin, ModalScreen):
    """A destination presented as a sheet over the current screen."""

    modal_slot = ModalSlot.SHEET

    DEFAULT_CSS = """
    SheetScreen {
        align: center bottom;
    }

    #sheet-container {
        background: $surface;
        border: tall $primary;
        padding: 0 1;
    }

    #sheet-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def __init__(
        self,
        navigation: NavigationState,
        presentation: ModalPresentation,
        width: str = "80%",
        height: str = "70%",
        dismiss_key: str = "escape",
    ) -> None:
        super().__init__()
        self._init_slot(navigation, presentation, dismiss_key)
        self._container_width = width
        self._container_height = height

    def compose(self) -> ComposeResult:
        with Vertical(id="sheet-container"):
            yield Static(self.destination.title, id="sheet-title")
            yield self.destination.view()

    def on_mount(self) -> None:
        container = self.query_one("#sheet-container", Vertical)
        container.styles.width = self._container_width
        container.styles.height = self._container_height


class PopoverScreen(_ModalSlotMixin, ModalScreen):
    """A destination presented as a small popover."""

    modal_slot = ModalSlot.POPOVER

    DEFAULT_CSS = """
    PopoverScreen {
        align: center middle;
    }

    #popover-container {
        background: $surface;
        border: round $accent;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        navigation: NavigationState,
        presentation: ModalPresentation,
        width: str = "50",
        height: str = "auto",
        dismiss_key: str = "escape",
    ) -> None:
        super().__init__()
        self._init_slot(navigation, presentation, dismiss_key)
        self._container_width = width
        self._container_height = height

    def compose(self) -> ComposeResult:
        with Vertical(id="popover-container"):
            yield self.destination.view()

    def on_mount(self) -> None:
        container = self.query_one("#popover-container", Vertical)
        container.styles.width = self._container_width
        container.styles.height = self._container_height


class FullScreenCoverScreen(_ModalSlotMixin, Screen):
    """A destination covering the whole terminal."""

    modal_slot = ModalSlot.FULL_SCREEN_COVER

    DEFAULT_CSS = """
    #cover-title {
        width: 100%;
        height: 1;
        background: $primary-background;
        text-style: bold;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        navigation: NavigationState,
        presentation: ModalPresentation,
        dismiss_key: str = "escape",
    ) -> None:
        super().__init__()
        self._init_slot(navigation, presentation, dismiss_key)

    def compose(self) -> ComposeResult:
        yield Static(self.destination.title, id="cover-title")
        yield self.destination.view()


class AlertScreen(DismissGestureMixin, ModalScreen):
    """An alert with a title, an optional message and its buttons."""

    DEFAULT_CSS = """
    AlertScreen {
        align: center middle;
    }

    #alert-container {
        width: 60;
        height: auto;
        background: $surface;
        border: thick $warning;
        padding: 1 2;
    }

    #alert-title {
        text-align: center;
        text-style: bold;
    }

    #alert-message {
        margin-top: 1;
        text-align: center;
    }

    #alert-buttons {
        margin-top: 1;
        height: 3;
        align: center middle;
    }

    #alert-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, navigation: NavigationState, alert: Alert, dismiss_key: str = "escape") -> None:
        super().__init__()
        self.navigation = navigation
        self.alert = alert
        self.dismiss_key = dismiss_key
        self._alert_buttons: dict[str, AlertButton] = {}

    def compose(self) -> ComposeResult:
        with Vertical(id="alert-container"):
            yield Static(self.alert.title, id="alert-title", markup=False)
            if self.alert.message:
                yield Static(self.alert.message, id="alert-message", markup=False)
            with Horizontal(id="alert-buttons"):
                if not self.alert.buttons:
                    yield Button("OK", id="alert-ok", variant="primary")
                for index, button in enumerate(self.alert.buttons):
                    button_id = f"alert-button-{index}"
                    self._alert_buttons[button_id] = button
                    yield Button(button.title, id=button_id, variant=button_variant(button.role))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button = self._alert_buttons.get(event.button.id or "")
        if button is None:
            self.report_dismissal()
        else:
            self.navigation.invoke_alert_button(button)

    def report_dismissal(self) -> None:
        self.navigation.binding("alert").set(None)


class ConfirmationDialogScreen(DismissGestureMixin, ModalScreen):
    """A confirmation dialog offering a list of actions."""

    DEFAULT_CSS = """
    ConfirmationDialogScreen {
        align: center bottom;
    }

    #dialog-container {
        width: 60;
        height: auto;
        background: $surface;
        border: tall $primary;
        padding: 1 2;
        margin-bottom: 1;
    }

    #dialog-title {
        text-align: center;
        text-style: bold;
    }

    #dialog-message {
        margin-top: 1;
        text-align: center;
        color: $text-muted;
    }

    #dialog-container Button {
        width: 100%;
        margin-top: 1;
    }
    """

    def __init__(
        self,
        navigation: NavigationState,
        dialog: ConfirmationDialog,
        dismiss_key: str = "escape",
    ) -> None:
        super().__init__()
        self.navigation = navigation
        self.dialog = dialog
        self.dismiss_key = dismiss_key
        self._dialog_actions: dict[str, DialogAction] = {}

    def compose(self) -> ComposeResult:
        with Vertical(id="dialog-container"):
            yield Static(self.dialog.title, id="dialog-title", markup=False)
            if self.dialog.message:
                yield Static(self.dialog.message, id="dialog-message", markup=False)
            for index, action in enumerate(self.dialog.actions):
                action_id = f"dialog-action-{index}"
                self._dialog_actions[action_id] = action
                yield Button(action.title, id=action_id, variant=button_variant(action.role))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        action = self._dialog_actions.get(event.button.id or "")
        if action is not None:
            self.navigation.invoke_dialog_action(action)

    def report_dismissal(self) -> None:
        self.navigation.binding("confirmation_dialog").set(None)
