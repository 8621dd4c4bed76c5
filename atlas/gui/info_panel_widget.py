"""Info panel widget showing details of the selected location or kingdom."""

from PyQt6.QtCore import Qt, pyqtSignal, pyqtSlot
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QTextBrowser, QVBoxLayout


class InfoPanelWidget(QFrame):
    """Panel with a title slot and a content slot.

    Links in the content open in the system browser.
    """

    close_requested = pyqtSignal()

    def __init__(self, parent=None):
        """Initialize info panel widget."""
        super().__init__(parent)
        self.setObjectName("info-container")
        self._content_html: list[str] = []
        self.init_ui()
        self.set_active(False)

    def init_ui(self):
        """Initialize the UI."""
        layout = QVBoxLayout()
        layout.setContentsMargins(5, 5, 5, 5)

        top_row = QHBoxLayout()
        self.title_label = QLabel()
        self.title_label.setObjectName("info-title")
        self.title_label.setTextFormat(Qt.TextFormat.RichText)
        self.title_label.setWordWrap(True)
        top_row.addWidget(self.title_label, 1)

        self.close_button = QPushButton("✕")
        self.close_button.setFixedSize(24, 24)
        self.close_button.setToolTip("Hide info panel")
        self.close_button.clicked.connect(self.close_requested.emit)
        top_row.addWidget(self.close_button, 0, Qt.AlignmentFlag.AlignTop)
        layout.addLayout(top_row)

        self.content_browser = QTextBrowser()
        self.content_browser.setObjectName("info-content")
        self.content_browser.setOpenExternalLinks(True)
        layout.addWidget(self.content_browser, 1)

        self.setLayout(layout)

    @pyqtSlot(str)
    def set_title(self, html: str):
        self.title_label.setText(html)

    @pyqtSlot()
    def clear_content(self):
        self._content_html.clear()
        self.content_browser.clear()

    @pyqtSlot(str)
    def append_content(self, html: str):
        self._content_html.append(html)
        self.content_browser.setHtml("".join(self._content_html))

    @pyqtSlot(bool)
    def set_active(self, active: bool):
        """Show or hide the panel (the info-active state)."""
        self.setVisible(active)
