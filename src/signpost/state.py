"""Navigation state: the push stack, modal slots and overlays."""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableSequence, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, TypeVar
from uuid import uuid4

from .bindings import BINDABLE_FIELDS, StateBinding
from .destination import Destination

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Destination)

Listener = Callable[[str], None]


class ModalSlot(Enum):
    """The three independent modal presentation slots."""

    SHEET = "sheet"
    FULL_SCREEN_COVER = "full_screen_cover"
    POPOVER = "popover"


class ButtonRole(Enum):
    """Semantic role of an alert button or dialog action."""

    DESTRUCTIVE = "destructive"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ModalPresentation(Generic[D]):
    """A destination shown in a modal slot, with an optional dismissal callback."""

    destination: D
    on_dismiss: Callable[[], None] | None = field(default=None, compare=False)

    @property
    def id(self) -> str:
        return self.destination.id


def _new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True, eq=False)
class DialogAction:
    """A button offered by a confirmation dialog.

    Each instance has its own identity, so two actions with the same title
    are still different actions.
    """

    title: str
    action: Callable[[], None]
    role: ButtonRole | None = None
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True, eq=False)
class ConfirmationDialog:
    """Title, optional message and actions of an active confirmation dialog."""

    title: str
    message: str | None = None
    actions: tuple[DialogAction, ...] = ()
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True, eq=False)
class AlertButton:
    """A button shown on an alert."""

    title: str
    action: Callable[[], None] | None = None
    role: ButtonRole | None = None
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True, eq=False)
class Alert:
    """An alert payload. With no buttons the alert offers a single OK."""

    title: str
    message: str | None = None
    buttons: tuple[AlertButton, ...] = ()
    id: str = field(default_factory=_new_id)


class NavigationPath(MutableSequence, Generic[D]):
    """The push stack, as a mutable sequence that reports its changes.

    Index 0 is the oldest push and the last element is the visible top.
    Every mutation calls ``on_change`` once.
    """

    def __init__(self, items: Iterable[D] = (), on_change: Callable[[], None] | None = None) -> None:
        self._items: list[D] = list(items)
        self._on_change = on_change

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def __getitem__(self, index):
        # Slices come back as plain lists, detached from the stack.
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._items[index] = list(value)
        else:
            self._items[index] = value
        self._changed()

    def __delitem__(self, index) -> None:
        del self._items[index]
        self._changed()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __contains__(self, value) -> bool:
        return value in self._items

    def insert(self, index: int, value: D) -> None:
        self._items.insert(index, value)
        self._changed()

    def extend(self, values: Iterable[D]) -> None:
        values = list(values)
        if values:
            self._items.extend(values)
            self._changed()

    def clear(self) -> None:
        if self._items:
            self._items.clear()
            self._changed()

    def remove_all(self, predicate: Callable[[D], bool]) -> int:
        """Remove every destination matching ``predicate``. Returns the count removed."""
        kept = [item for item in self._items if not predicate(item)]
        removed = len(self._items) - len(kept)
        if removed:
            self._items[:] = kept
            self._changed()
        return removed

    def replace(self, items: Iterable[D]) -> None:
        """Replace the whole stack."""
        self._items[:] = list(items)
        self._changed()

    @property
    def top(self) -> D | None:
        """The visible stack top, or None when the root is showing."""
        return self._items[-1] if self._items else None

    def __eq__(self, other) -> bool:
        if isinstance(other, NavigationPath):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"NavigationPath({self._items!r})"


class NavigationState(Generic[D]):
    """Where the user currently is, for one UI session.

    Holds the push stack, three independent modal slots and the alert and
    confirmation dialog overlays. Every operation is a silent no-op when
    there is nothing to do, since dismissals from the UI can race each other.
    Callbacks run synchronously and may call back into the state.
    """

    def __init__(self, path: Iterable[D] = ()) -> None:
        self._path: NavigationPath[D] = NavigationPath(path, on_change=self._path_changed)
        self._modals: dict[ModalSlot, ModalPresentation[D] | None] = {
            slot: None for slot in ModalSlot
        }
        self._alert: Alert | None = None
        self._confirmation_dialog: ConfirmationDialog | None = None
        self._listeners: list[Listener] = []

    # Observation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(field_name)`` after each change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, field_name: str) -> None:
        for listener in list(self._listeners):
            listener(field_name)

    def _path_changed(self) -> None:
        logger.debug("Path is now %d deep", len(self._path))
        self._notify("path")

    # Push stack

    @property
    def path(self) -> NavigationPath[D]:
        return self._path

    @path.setter
    def path(self, destinations: Iterable[D]) -> None:
        self.set_path(destinations)

    def push(self, destination: D) -> None:
        """Push a destination on top of the stack."""
        logger.debug("Push %s", destination.id)
        self._path.append(destination)

    def pop(self) -> None:
        """Remove the top destination. Does nothing at the root."""
        if not self._path:
            logger.debug("Pop ignored, already at root")
            return
        self._path.pop()

    def pop_to_root(self) -> None:
        """Remove every pushed destination."""
        self._path.clear()

    def set_path(self, destinations: Iterable[D]) -> None:
        """Replace the push stack wholesale."""
        self._path.replace(destinations)

    # Modal slots

    @property
    def sheet(self) -> ModalPresentation[D] | None:
        return self._modals[ModalSlot.SHEET]

    @property
    def full_screen_cover(self) -> ModalPresentation[D] | None:
        return self._modals[ModalSlot.FULL_SCREEN_COVER]

    @property
    def popover(self) -> ModalPresentation[D] | None:
        return self._modals[ModalSlot.POPOVER]

    def modal(self, slot: ModalSlot | str) -> ModalPresentation[D] | None:
        """Current occupant of a modal slot."""
        return self._modals[ModalSlot(slot)]

    def present(
        self,
        slot: ModalSlot | str,
        destination: D,
        on_dismiss: Callable[[], None] | None = None,
    ) -> None:
        """Show ``destination`` in a modal slot.

        A previous occupant is replaced and its dismissal callback is not
        called.
        """
        self._put_modal(ModalSlot(slot), ModalPresentation(destination, on_dismiss))

    def _put_modal(self, slot: ModalSlot, presentation: ModalPresentation[D]) -> None:
        previous = self._modals[slot]
        if previous is not None:
            logger.debug("Replacing %s in %s", previous.id, slot.value)
        logger.debug("Present %s as %s", presentation.id, slot.value)
        self._modals[slot] = presentation
        self._notify(slot.value)

    def dismiss(self, slot: ModalSlot | str) -> None:
        """Clear a modal slot, then run its dismissal callback once."""
        slot = ModalSlot(slot)
        presentation = self._modals[slot]
        if presentation is None:
            logger.debug("Dismiss ignored, %s is empty", slot.value)
            return
        logger.debug("Dismiss %s from %s", presentation.id, slot.value)
        self._modals[slot] = None
        try:
            self._notify(slot.value)
        finally:
            if presentation.on_dismiss is not None:
                presentation.on_dismiss()

    def present_sheet(self, destination: D, on_dismiss: Callable[[], None] | None = None) -> None:
        self.present(ModalSlot.SHEET, destination, on_dismiss)

    def present_full_screen_cover(
        self, destination: D, on_dismiss: Callable[[], None] | None = None
    ) -> None:
        self.present(ModalSlot.FULL_SCREEN_COVER, destination, on_dismiss)

    def present_popover(self, destination: D, on_dismiss: Callable[[], None] | None = None) -> None:
        self.present(ModalSlot.POPOVER, destination, on_dismiss)

    def dismiss_sheet(self) -> None:
        self.dismiss(ModalSlot.SHEET)

    def dismiss_full_screen_cover(self) -> None:
        self.dismiss(ModalSlot.FULL_SCREEN_COVER)

    def dismiss_popover(self) -> None:
        self.dismiss(ModalSlot.POPOVER)

    # Alert

    @property
    def alert(self) -> Alert | None:
        return self._alert

    def show_alert(self, alert: Alert) -> None:
        """Show an alert, replacing any alert already showing."""
        logger.debug("Show alert %r", alert.title)
        self._alert = alert
        self._notify("alert")

    def clear_alert(self) -> None:
        if self._alert is None:
            return
        logger.debug("Clear alert %r", self._alert.title)
        self._alert = None
        self._notify("alert")

    def invoke_alert_button(self, button: AlertButton) -> None:
        """Run an alert button's action, then close the alert.

        An alert shown by the action itself is closed too. Ignored when the
        button does not belong to the alert showing now.
        """
        alert = self._alert
        if alert is None or button not in alert.buttons:
            logger.debug("Alert button %r ignored, alert is gone", button.title)
            return
        try:
            if button.action is not None:
                button.action()
        finally:
            self.clear_alert()

    # Confirmation dialog

    @property
    def confirmation_dialog(self) -> ConfirmationDialog | None:
        return self._confirmation_dialog

    def show_confirmation_dialog(
        self,
        title: str,
        message: str | None = None,
        actions: Sequence[DialogAction] = (),
    ) -> None:
        """Show a confirmation dialog, replacing any dialog already showing."""
        self._put_dialog(ConfirmationDialog(title, message, tuple(actions)))

    def _put_dialog(self, dialog: ConfirmationDialog) -> None:
        logger.debug("Show confirmation dialog %r with %d action(s)", dialog.title, len(dialog.actions))
        self._confirmation_dialog = dialog
        self._notify("confirmation_dialog")

    def dismiss_confirmation_dialog(self) -> None:
        """Close the dialog without running any action."""
        if self._confirmation_dialog is None:
            return
        logger.debug("Dismiss confirmation dialog %r", self._confirmation_dialog.title)
        self._confirmation_dialog = None
        self._notify("confirmation_dialog")

    def invoke_dialog_action(self, action: DialogAction) -> None:
        """Run one of the active dialog's actions, then close the dialog.

        The dialog closes whatever the action's role, including a dialog the
        action showed itself. Ignored when the action is not part of the
        dialog showing now.
        """
        dialog = self._confirmation_dialog
        if dialog is None or action not in dialog.actions:
            logger.debug("Dialog action %r ignored, dialog is gone", action.title)
            return
        logger.debug("Invoke dialog action %r", action.title)
        try:
            action.action()
        finally:
            self.dismiss_confirmation_dialog()

    # Bindings

    def binding(self, name: str) -> StateBinding:
        """Two-way binding for one field, for use by a rendering layer."""
        if name not in BINDABLE_FIELDS:
            raise KeyError(name)
        if name == "path":
            return StateBinding(name, lambda: self._path, self.set_path)
        if name == "alert":
            return StateBinding(name, lambda: self._alert, self._set_alert)
        if name == "confirmation_dialog":
            return StateBinding(name, lambda: self._confirmation_dialog, self._set_dialog)

        slot = ModalSlot(name)

        def set_modal(value: ModalPresentation[D] | None) -> None:
            if value is None:
                self.dismiss(slot)
            else:
                self._put_modal(slot, value)

        return StateBinding(name, lambda: self._modals[slot], set_modal)

    def _set_alert(self, value: Alert | None) -> None:
        if value is None:
            self.clear_alert()
        else:
            self.show_alert(value)

    def _set_dialog(self, value: ConfirmationDialog | None) -> None:
        if value is None:
            self.dismiss_confirmation_dialog()
        else:
            self._put_dialog(value)

    def __repr__(self) -> str:
        occupied = [slot.value for slot, item in self._modals.items() if item is not None]
        return (
            f"NavigationState(path={[d.id for d in self._path]}, modals={occupied}, "
            f"alert={self._alert is not None}, dialog={self._confirmation_dialog is not None})"
        )
