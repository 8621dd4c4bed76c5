"""Leaflet map widget and its MapSurface adapter."""

import json
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from PyQt6.QtCore import QObject, QUrl, pyqtSignal, pyqtSlot
from PyQt6.QtWebChannel import QWebChannel
from PyQt6.QtWebEngineCore import QWebEngineSettings
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from atlas.core.config import MAP_MAX_BOUNDS
from atlas.models.feature import LocationFeature, RegionFeature
from atlas.models.ports import FeatureRenderer
from atlas.models.settings import AtlasSettings

logger = logging.getLogger(__name__)

TEMPLATE_PATH = Path(__file__).parent.parent / "resources" / "map_template.html"


class MapBridge(QObject):
    """Bridge for JavaScript to Python communication."""

    feature_clicked = pyqtSignal(str, str)  # layer key, feature id

    @pyqtSlot(str, str)
    def on_feature_click(self, layer_key: str, feature_id: str):
        """
        Receive a feature click from JavaScript.

        Args:
            layer_key: Category of the clicked layer
            feature_id: Id of the clicked feature
        """
        self.feature_clicked.emit(layer_key, feature_id)


class MapWidget(QWidget):
    """Widget displaying the Leaflet map."""

    feature_clicked = pyqtSignal(str, str)  # layer key, feature id

    def __init__(self, settings: AtlasSettings):
        """
        Initialize map widget.

        Args:
            settings: Runtime settings with tile URL and initial view
        """
        super().__init__()
        self.settings = settings
        self.bridge = MapBridge()
        self.bridge.feature_clicked.connect(self.feature_clicked.emit)
        self._page_ready = False
        self._pending_scripts: list[str] = []
        self.init_ui()

    def init_ui(self):
        """Initialize the UI."""
        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.web_view = QWebEngineView()

        settings = self.web_view.page().settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, True)
        # Allow local HTML to fetch remote tiles and icons
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True)

        # Set up web channel for JS communication
        self.channel = QWebChannel()
        self.channel.registerObject("bridge", self.bridge)
        self.web_view.page().setWebChannel(self.channel)
        self.web_view.loadFinished.connect(self._on_load_finished)

        layout.addWidget(self.web_view)
        self.setLayout(layout)

        self.create_map()

    def create_map(self):
        """Render the map template and load it in the web view."""
        with open(TEMPLATE_PATH, "r", encoding="utf-8") as f:
            template = f.read()

        view = self.settings.map
        html = template.replace("MAP_LAT", str(view.center[0]))
        html = html.replace("MAP_LON", str(view.center[1]))
        html = html.replace("MAP_ZOOM", str(view.zoom))
        html = html.replace("MAP_MIN_ZOOM", str(view.min_zoom))
        html = html.replace("MAP_MAX_ZOOM", str(view.max_zoom))
        html = html.replace("MAP_MAX_BOUNDS", json.dumps(MAP_MAX_BOUNDS))
        html = html.replace("TILE_URL", json.dumps(self.settings.tile_url))

        with tempfile.NamedTemporaryFile(mode="w", suffix=".html", delete=False, encoding="utf-8") as f:
            f.write(html)
            temp_path = f.name

        self.web_view.setUrl(QUrl.fromLocalFile(temp_path))

    def _on_load_finished(self, ok: bool):
        """Flush scripts queued while the page was loading."""
        if not ok:
            logger.error("Map page failed to load")
            return
        self._page_ready = True
        pending, self._pending_scripts = self._pending_scripts, []
        for script in pending:
            self.web_view.page().runJavaScript(script)
        logger.debug(f"Map page ready, ran {len(pending)} queued scripts")

    @pyqtSlot(str)
    def run_script(self, script: str):
        """Run JavaScript on the map page, queueing it until the page is ready."""
        if self._page_ready:
            self.web_view.page().runJavaScript(script)
        else:
            self._pending_scripts.append(script)


@dataclass(frozen=True)
class QtLayer:
    """Handle of a layer group living in the Leaflet page."""

    key: str


def _feature_to_geojson(feature: LocationFeature | RegionFeature, renderer: FeatureRenderer) -> dict:
    """Serialize a feature plus its marker spec for the map page."""
    if isinstance(feature, LocationFeature):
        geometry: dict[str, Any] = {"type": "Point", "coordinates": list(feature.coordinates)}
    else:
        geometry = feature.geometry

    properties: dict[str, Any] = {"id": feature.id, "name": feature.name}
    marker = renderer.render_point(feature)
    if marker is not None:
        properties["marker"] = {
            "iconUrl": marker.icon_url,
            "iconSize": list(marker.icon_size),
            "title": marker.title,
            "popup": marker.popup,
        }
    return {"type": "Feature", "id": feature.id, "geometry": geometry, "properties": properties}


class QtMapSurface(QObject):
    """MapSurface adapter that drives the Leaflet page.

    Methods may be called from the event loop thread; scripts are delivered
    to the map widget through a queued signal.
    """

    script_requested = pyqtSignal(str)

    def __init__(self, map_widget: MapWidget):
        super().__init__()
        self.script_requested.connect(map_widget.run_script)

    def _call(self, function: str, *args: Any) -> None:
        arguments = ", ".join(json.dumps(a) for a in args)
        self.script_requested.emit(f"atlasMap.{function}({arguments});")

    def build_layer(
        self, key: str, features: Sequence[LocationFeature | RegionFeature], renderer: FeatureRenderer
    ) -> QtLayer:
        collection = {
            "type": "FeatureCollection",
            "features": [_feature_to_geojson(f, renderer) for f in features],
        }
        self._call("createLayer", key, collection)
        logger.debug(f"Built map layer {key} with {len(features)} features")
        return QtLayer(key=key)

    def add_layer(self, layer: QtLayer) -> None:
        self._call("showLayer", layer.key)

    def remove_layer(self, layer: QtLayer) -> None:
        self._call("hideLayer", layer.key)

    def reset_style(self, layer: QtLayer, feature_id: str) -> None:
        self._call("resetFeatureStyle", layer.key, feature_id)

    def set_style(self, layer: QtLayer, feature_id: str, style: dict[str, Any]) -> None:
        self._call("setFeatureStyle", layer.key, feature_id, style)

    def bring_to_front(self, layer: QtLayer, feature_id: str) -> None:
        self._call("bringFeatureToFront", layer.key, feature_id)
