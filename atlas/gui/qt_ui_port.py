"""UIPort adapter over the Qt widgets."""

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from atlas.core.config import Category
from atlas.core.errors import UISurfaceMissing
from atlas.gui.info_panel_widget import InfoPanelWidget
from atlas.gui.toggle_bar import CategoryToggleBar

logger = logging.getLogger(__name__)


class QtUIPort(QObject):
    """UIPort for the Qt main window.

    Called from the event loop thread. Writes reach the widgets via queued
    signals; panel, indicator and viewport state are mirrored here so reads
    never touch a widget from the wrong thread.
    """

    title_changed = pyqtSignal(str)
    content_cleared = pyqtSignal()
    content_appended = pyqtSignal(str)
    panel_active_changed = pyqtSignal(bool)
    indicator_changed = pyqtSignal(str, bool)

    def __init__(self, info_panel: InfoPanelWidget, toggle_bar: CategoryToggleBar, viewport_width: int = 0):
        """
        Initialize UI port.

        Args:
            info_panel: Panel providing the title and content slots
            toggle_bar: Toggle bar providing the category indicators
            viewport_width: Initial window width in logical pixels

        Raises:
            UISurfaceMissing: If the panel slots are absent
        """
        super().__init__()
        if info_panel is None or toggle_bar is None:
            raise UISurfaceMissing("Info panel and toggle bar are required")

        self._panel_active = False
        self._indicators = {name: False for name in toggle_bar.buttons}
        self._viewport_width = viewport_width

        self.title_changed.connect(info_panel.set_title)
        self.content_cleared.connect(info_panel.clear_content)
        self.content_appended.connect(info_panel.append_content)
        self.panel_active_changed.connect(info_panel.set_active)
        self.indicator_changed.connect(toggle_bar.set_active)

    def set_viewport_width(self, width: int) -> None:
        """Record the current window width (called from the GUI thread on resize)."""
        self._viewport_width = width

    def set_title(self, html: str) -> None:
        self.title_changed.emit(html)

    def clear_content(self) -> None:
        self.content_cleared.emit()

    def append_content(self, html: str) -> None:
        self.content_appended.emit(html)

    def is_panel_active(self) -> bool:
        return self._panel_active

    def toggle_panel(self) -> None:
        self._panel_active = not self._panel_active
        self.panel_active_changed.emit(self._panel_active)

    def _indicator_name(self, category: Category) -> str:
        name = f"{Category(category).value}-toggle"
        if name not in self._indicators:
            raise UISurfaceMissing(f"No toggle indicator '{name}'")
        return name

    def toggle_indicator(self, category: Category) -> None:
        name = self._indicator_name(category)
        self._indicators[name] = not self._indicators[name]
        self.indicator_changed.emit(Category(category).value, self._indicators[name])

    def is_indicator_active(self, category: Category) -> bool:
        return self._indicators[self._indicator_name(category)]

    def viewport_width(self) -> int:
        return self._viewport_width
