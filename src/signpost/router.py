"""Textual app that renders a navigation state as a screen stack."""

from __future__ import annotations

import logging
from typing import Callable

from textual.app import App, ComposeResult
from textual.screen import Screen
from textual.widget import Widget
from textual.widgets import Static

from .config import RouterConfig
from .log import configure_logging
from .presentation import Layer, LayerKind, common_prefix, visible_layers
from .screens import (
    AlertScreen,
    ConfirmationDialogScreen,
    DestinationScreen,
    FullScreenCoverScreen,
    PopoverScreen,
    SheetScreen,
)
from .state import NavigationState

logger = logging.getLogger(__name__)


class RouterApp(App):
    """Keeps Textual's screen stack in step with a navigation state.

    The root content sits on the default screen. Above it the app pushes one
    screen per visible layer. After every state change the layers both
    stacks share are kept, and the rest are popped and pushed again.
    Only screens the router pushed are ever popped: while another screen
    sits on top, updates wait until that screen is popped.
    Widgets reach the state through ``self.app.navigation``.
    """

    TITLE = "signpost"

    CSS = """
    #root-view {
        width: 100%;
        height: 1fr;
        content-align: center middle;
    }
    """

    def __init__(
        self,
        navigation: NavigationState | None = None,
        content: Callable[[NavigationState], Widget] | None = None,
        config: RouterConfig | None = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else RouterConfig()
        self.navigation = navigation if navigation is not None else NavigationState()
        self._root_content = content
        self._router_screens: list[tuple[Layer, Screen]] = []
        self._unsubscribe: Callable[[], None] | None = None
        self._reconciling = False
        self._reconcile_pending = False
        self._reconcile_deferred = False

    def compose(self) -> ComposeResult:
        if self._root_content is not None:
            yield self._root_content(self.navigation)
        else:
            yield Static(self.TITLE, id="root-view")

    def on_mount(self) -> None:
        """Start following the navigation state."""
        self._unsubscribe = self.navigation.subscribe(self._on_navigation_changed)
        self.reconcile()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def layers(self) -> list[Layer]:
        """Layers currently pushed above the root, bottom first."""
        return [layer for layer, _ in self._router_screens]

    @property
    def reconcile_deferred(self) -> bool:
        """Whether a screen the router did not push is holding back an update."""
        return self._reconcile_deferred

    def pop_screen(self):
        await_pop = super().pop_screen()
        if self._reconcile_deferred and not self._reconciling and self._unsubscribe is not None:
            self.reconcile()
        return await_pop

    def _on_navigation_changed(self, field_name: str) -> None:
        logger.debug("Navigation changed: %s", field_name)
        self.reconcile()

    def reconcile(self) -> None:
        """Bring the pushed screens in line with the navigation state."""
        if self._reconciling:
            # A screen callback changed the state mid-update; go round again.
            self._reconcile_pending = True
            return
        self._reconciling = True
        try:
            while True:
                self._reconcile_pending = False
                self._apply(visible_layers(self.navigation))
                if not self._reconcile_pending:
                    break
        finally:
            self._reconciling = False

    def _router_top(self) -> Screen:
        """The screen that should be on top if nothing else was pushed."""
        if self._router_screens:
            return self._router_screens[-1][1]
        return self.screen_stack[0]

    def _apply(self, desired: list[Layer]) -> None:
        keep = common_prefix(self.layers, desired)
        if keep == len(self._router_screens) == len(desired):
            self._reconcile_deferred = False
            return

        if self.screen is not self._router_top():
            # Someone else's screen (a help modal, the command palette) is on
            # top. Only our own screens are touched, so wait until it closes.
            logger.debug("Deferring update under %s", type(self.screen).__name__)
            self._reconcile_deferred = True
            return
        self._reconcile_deferred = False

        while len(self._router_screens) > keep:
            layer, _ = self._router_screens.pop()
            logger.debug("Pop screen for %s", layer.key)
            super().pop_screen()

        for layer in desired[keep:]:
            logger.debug("Push screen for %s", layer.key)
            screen = self.build_screen(layer)
            self.push_screen(screen)
            self._router_screens.append((layer, screen))

    def build_screen(self, layer: Layer) -> Screen:
        """Create the screen that renders one layer."""
        dismiss_key = self.config.dismiss_key
        if layer.kind is LayerKind.PUSH:
            return DestinationScreen(self.navigation, layer.payload, dismiss_key)
        if layer.kind is LayerKind.SHEET:
            return SheetScreen(
                self.navigation,
                layer.payload,
                width=self.config.sheet.width,
                height=self.config.sheet.height,
                dismiss_key=dismiss_key,
            )
        if layer.kind is LayerKind.POPOVER:
            return PopoverScreen(
                self.navigation,
                layer.payload,
                width=self.config.popover.width,
                height=self.config.popover.height,
                dismiss_key=dismiss_key,
            )
        if layer.kind is LayerKind.FULL_SCREEN_COVER:
            return FullScreenCoverScreen(self.navigation, layer.payload, dismiss_key)
        if layer.kind is LayerKind.ALERT:
            return AlertScreen(self.navigation, layer.payload, dismiss_key)
        return ConfirmationDialogScreen(self.navigation, layer.payload, dismiss_key)


def run_app(
    navigation: NavigationState | None = None,
    content: Callable[[NavigationState], Widget] | None = None,
    config: RouterConfig | None = None,
) -> None:
    """Run a router app with logging set up from ``config``."""
    config = config if config is not None else RouterConfig.load()
    configure_logging(config)
    app = RouterApp(navigation, content, config)
    app.run()
