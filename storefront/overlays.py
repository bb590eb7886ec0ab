"""Overlay (modal) visibility controller."""

from __future__ import annotations

import logging
from typing import Callable

from textual.app import App
from textual.screen import ModalScreen

logger = logging.getLogger(__name__)

FormFactory = Callable[[], ModalScreen]


class OverlayController:
    """Tracks which overlay is visible and pushes/pops the matching modal screens.

    Owned by the composition root and handed to whoever needs to open or close
    overlays. Forms are registered by name and built fresh on every show.
    """

    def __init__(self, app: App | None = None, forms: dict[str, FormFactory] | None = None) -> None:
        self.app = app
        self._forms: dict[str, FormFactory] = dict(forms or {})
        self.initialized = False
        self.visible: str | None = None

    def attach(self, app: App) -> None:
        self.app = app

    def register_form(self, name: str, factory: FormFactory) -> None:
        self._forms[name] = factory

    def initialize(self) -> None:
        """Enable overlays. Runs once; later calls are ignored."""
        if self.initialized:
            logger.debug("overlay controller already initialized")
            return
        self.initialized = True
        self.visible = None
        logger.debug(f"overlay controller initialized forms={sorted(self._forms)}")

    def show_form(self, name: str) -> None:
        """Hide whatever overlay is open and show the named form."""
        if not self.initialized:
            raise RuntimeError("Overlay controller used before initialize()")
        factory = self._forms[name]

        self.hide_all_overlays()
        if self.app is not None:
            self.app.push_screen(factory())
        self.visible = name
        logger.debug(f"overlay shown name={name}")

    def hide_all_overlays(self) -> None:
        if self.app is not None:
            while len(self.app.screen_stack) > 1 and isinstance(self.app.screen, ModalScreen):
                self.app.pop_screen()
        if self.visible is not None:
            logger.debug(f"overlay hidden name={self.visible}")
        self.visible = None
