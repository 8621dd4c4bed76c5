"""Category toggle buttons."""

from PyQt6.QtCore import pyqtSignal, pyqtSlot
from PyQt6.QtWidgets import QGridLayout, QPushButton, QWidget

from atlas.core.config import CATEGORIES, Category

TOGGLE_STYLE = """
QPushButton { padding: 4px 8px; }
QPushButton[toggleActive="true"] { background-color: #2e7d32; color: white; font-weight: bold; }
"""


class CategoryToggleBar(QWidget):
    """One button per category, addressed as ``{category}-toggle``.

    Clicking only requests a toggle; the active look changes when the
    controller confirms it through set_active().
    """

    toggle_requested = pyqtSignal(str)  # category key

    def __init__(self, parent=None):
        """Initialize toggle bar."""
        super().__init__(parent)
        self.buttons: dict[str, QPushButton] = {}
        self.setStyleSheet(TOGGLE_STYLE)
        self.init_ui()

    def init_ui(self):
        """Initialize the UI."""
        layout = QGridLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        for index, (key, config) in enumerate(CATEGORIES.items()):
            button = QPushButton(config.display_name)
            button.setObjectName(f"{key.value}-toggle")
            button.setProperty("toggleActive", False)
            button.setToolTip(f"Show or hide {config.display_name.lower()}")
            button.clicked.connect(lambda _checked, k=key.value: self.toggle_requested.emit(k))
            layout.addWidget(button, index // 3, index % 3)
            self.buttons[button.objectName()] = button

        self.setLayout(layout)

    def button_for(self, category: Category) -> QPushButton | None:
        """Get the indicator button of a category, if present."""
        return self.buttons.get(f"{Category(category).value}-toggle")

    @pyqtSlot(str, bool)
    def set_active(self, category: str, active: bool):
        """Restyle a category's indicator."""
        button = self.button_for(Category(category))
        if button is None:
            return
        button.setProperty("toggleActive", active)
        button.style().unpolish(button)
        button.style().polish(button)
