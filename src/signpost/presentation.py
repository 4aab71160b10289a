"""Derive what is currently visible from a navigation state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .state import ModalSlot, NavigationState


class LayerKind(Enum):
    """Kinds of layers, listed bottom to top."""

    PUSH = "push"
    FULL_SCREEN_COVER = "full_screen_cover"
    SHEET = "sheet"
    POPOVER = "popover"
    ALERT = "alert"
    CONFIRMATION_DIALOG = "confirmation_dialog"

    @property
    def slot(self) -> ModalSlot | None:
        """The modal slot this kind renders, if it is a modal kind."""
        try:
            return ModalSlot(self.value)
        except ValueError:
            return None


# Modal slots are stacked in this order when several are occupied.
MODAL_ORDER = (LayerKind.FULL_SCREEN_COVER, LayerKind.SHEET, LayerKind.POPOVER)


@dataclass(frozen=True)
class Layer:
    """One entry of the visible stack above the root view.

    ``key`` identifies the layer across renders: two layers with the same
    key show the same thing and need not be rebuilt.
    """

    kind: LayerKind
    key: str
    payload: Any


def visible_layers(state: NavigationState) -> list[Layer]:
    """Ordered layers to draw above the root, bottom first."""
    layers = [
        Layer(LayerKind.PUSH, f"push:{index}:{destination.id}", destination)
        for index, destination in enumerate(state.path)
    ]

    for kind in MODAL_ORDER:
        presentation = state.modal(kind.slot)
        if presentation is not None:
            layers.append(Layer(kind, f"{kind.value}:{presentation.id}", presentation))

    if state.alert is not None:
        layers.append(Layer(LayerKind.ALERT, f"alert:{state.alert.id}", state.alert))

    dialog = state.confirmation_dialog
    if dialog is not None:
        layers.append(Layer(LayerKind.CONFIRMATION_DIALOG, f"confirmation_dialog:{dialog.id}", dialog))

    return layers


def top_layer(state: NavigationState) -> Layer | None:
    """The layer the user sees on top, or None when the root is showing."""
    layers = visible_layers(state)
    return layers[-1] if layers else None


def common_prefix(current: list[Layer], desired: list[Layer]) -> int:
    """Number of leading layers two stacks share by key."""
    count = 0
    for old, new in zip(current, desired):
        if old.key != new.key:
            break
        count += 1
    return count
