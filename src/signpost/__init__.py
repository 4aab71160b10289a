"""Navigation state for Textual applications."""

from .bindings import StateBinding
from .config import RouterConfig
from .destination import Destination
from .presentation import Layer, LayerKind, top_layer, visible_layers
from .router import RouterApp, run_app
from .state import (
    Alert,
    AlertButton,
    ButtonRole,
    ConfirmationDialog,
    DialogAction,
    ModalPresentation,
    ModalSlot,
    NavigationPath,
    NavigationState,
)

__all__ = [
    "Alert",
    "AlertButton",
    "ButtonRole",
    "ConfirmationDialog",
    "Destination",
    "DialogAction",
    "Layer",
    "LayerKind",
    "ModalPresentation",
    "ModalSlot",
    "NavigationPath",
    "NavigationState",
    "RouterApp",
    "RouterConfig",
    "StateBinding",
    "run_app",
    "top_layer",
    "visible_layers",
]
