"""Main application window."""

import logging
from typing import Optional

from PyQt6 import QtGui
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from atlas.cli import create_api_client
from atlas.core.context import AtlasContext
from atlas.core.loader import LoadResult
from atlas.gui.async_runner import AsyncLoopThread
from atlas.gui.info_panel_widget import InfoPanelWidget
from atlas.gui.map_widget import MapWidget, QtMapSurface
from atlas.gui.qt_ui_port import QtUIPort
from atlas.gui.toggle_bar import CategoryToggleBar
from atlas.models.search_entry import SearchCorpusEntry
from atlas.models.settings import AtlasSettings

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 10


class MainWindow(QMainWindow):
    """Main application window."""

    data_loaded = pyqtSignal(object)  # LoadResult

    def __init__(self, settings: AtlasSettings):
        """
        Initialize main window.

        Args:
            settings: Runtime settings
        """
        super().__init__()
        self.settings = settings
        self.search_index = None

        self.loop_thread = AsyncLoopThread()
        self.loop_thread.task_failed.connect(self.on_task_failed)
        self.data_loaded.connect(self.on_data_loaded)

        self.init_ui()

        self.api = create_api_client(settings)
        self.map_surface = QtMapSurface(self.map_widget)
        self.ui_port = QtUIPort(self.info_panel, self.toggle_bar, viewport_width=self.width())
        self.context = AtlasContext(
            self.api,
            self.map_surface,
            self.ui_port,
            icon_base_url=settings.icon_base_url,
            thousands_sep=settings.thousands_separator,
        )

        self.map_widget.feature_clicked.connect(self.on_feature_clicked)
        self.toggle_bar.toggle_requested.connect(self.on_toggle_requested)
        self.info_panel.close_requested.connect(self.on_toggle_info)

        self.loop_thread.start()
        self.status_bar.showMessage("Loading map data...")
        self.loop_thread.submit(self._load(), "Loading map data")

    def init_ui(self):
        """Initialize the UI."""
        self._create_menu_bar()

        self.setWindowTitle("Atlas Viewer")
        self.setGeometry(100, 100, 1200, 800)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout()

        # Left side: Map widget (70% width)
        self.map_widget = MapWidget(self.settings)
        self.map_widget.setMinimumWidth(600)
        main_layout.addWidget(self.map_widget, 7)

        # Right side: toggles, search and info panel (30% width)
        side_layout = QVBoxLayout()

        side_layout.addWidget(QLabel("<b>Layers</b>"))
        self.toggle_bar = CategoryToggleBar()
        side_layout.addWidget(self.toggle_bar)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search locations and kingdoms...")
        self.search_edit.setEnabled(False)
        self.search_edit.textChanged.connect(self._on_search_text_changed)
        side_layout.addWidget(self.search_edit)

        self.search_results = QListWidget()
        self.search_results.setVisible(False)
        self.search_results.itemActivated.connect(self._on_search_result_activated)
        self.search_results.itemClicked.connect(self._on_search_result_activated)
        side_layout.addWidget(self.search_results)

        self.info_panel = InfoPanelWidget()
        side_layout.addWidget(self.info_panel, 1)
        side_layout.addStretch(0)

        side_widget = QWidget()
        side_widget.setLayout(side_layout)
        side_widget.setMaximumWidth(500)
        main_layout.addWidget(side_widget, 3)

        central_widget.setLayout(main_layout)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

    def _create_menu_bar(self):
        """Create the menu bar with View menu."""
        menubar = self.menuBar()
        view_menu = menubar.addMenu("&View")

        info_action = QAction("Toggle &Info Panel", self)
        info_action.setShortcut(QKeySequence("Ctrl+I"))
        info_action.setStatusTip("Show or hide the info panel")
        info_action.triggered.connect(self.on_toggle_info)
        view_menu.addAction(info_action)

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        view_menu.addAction(quit_action)

    async def _load(self):
        """Open the API session and load all categories (runs on the loop thread)."""
        await self.api.__aenter__()
        result = await self.context.load_map_data()
        self.data_loaded.emit(result)

    def on_data_loaded(self, result: LoadResult):
        """Enable search once the corpus exists."""
        self.search_index = result.search
        self.search_edit.setEnabled(True)
        self.status_bar.showMessage(f"Loaded {len(result.corpus):,} locations and kingdoms")

    def on_task_failed(self, message: str):
        """
        Report a failed load or interaction.

        Args:
            message: Error message
        """
        self.status_bar.showMessage(message)
        if self.search_index is None:
            QMessageBox.critical(self, "Load Error", f"Failed to load map data:\n{message}")

    def on_feature_clicked(self, layer_key: str, feature_id: str):
        """Dispatch a map click to the context on the loop thread."""
        self.loop_thread.submit(
            self.context.handle_feature_click(layer_key, feature_id), f"Showing {layer_key} {feature_id}"
        )

    def on_toggle_requested(self, category: str):
        """Toggle a category layer on the loop thread."""
        self.loop_thread.submit_call(self.context.toggle_layer, category, description=f"Toggling {category}")

    def on_toggle_info(self):
        """Toggle the info panel on the loop thread."""
        self.loop_thread.submit_call(self.context.toggle_info, description="Toggling info panel")

    def _on_search_text_changed(self, text: str):
        """Show matching corpus entries."""
        self.search_results.clear()
        results = self.search_index.search(text, limit=SEARCH_RESULT_LIMIT) if self.search_index else []
        for entry in results:
            label = f"{entry.name} ({entry.type})" if entry.type else entry.name
            item = QListWidgetItem(label)
            item.setData(Qt.ItemDataRole.UserRole, entry)
            self.search_results.addItem(item)
        self.search_results.setVisible(bool(results))

    def _on_search_result_activated(self, item: QListWidgetItem):
        """Show the selected search result."""
        entry: SearchCorpusEntry = item.data(Qt.ItemDataRole.UserRole)
        self.search_results.setVisible(False)
        self.loop_thread.submit(self.context.show_search_result(entry), f"Showing {entry.name}")

    def resizeEvent(self, a0: Optional[QtGui.QResizeEvent]) -> None:
        """Track the viewport width for the info panel's auto-reveal."""
        super().resizeEvent(a0)
        if hasattr(self, "ui_port"):
            self.ui_port.set_viewport_width(self.width())

    def closeEvent(self, a0: Optional[QtGui.QCloseEvent]) -> None:
        """
        Handle window close event.

        Args:
            a0: Close event
        """
        event = a0  # Reassign for readability
        future = self.loop_thread.submit(self.api.close(), "Closing API session")
        try:
            future.result(timeout=5)
        except Exception as e:
            logger.warning(f"Error closing API session: {e}")
        self.loop_thread.stop()
        if event:
            event.accept()
