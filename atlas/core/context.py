"""Application context owning all atlas state."""

import logging
from typing import Any

from atlas.core.config import ICON_BASE_URL, THOUSANDS_SEPARATOR, Category
from atlas.core.errors import PreconditionViolation
from atlas.core.highlight import HighlightState
from atlas.core.info_panel import EntityType, InfoPanelController
from atlas.core.layers import LayerRegistry, VisibilityToggle
from atlas.core.loader import AsyncLoader, LoadResult, SearchFactory
from atlas.core.search import SearchIndex
from atlas.models.ports import DataApi, MapSurface, UIPort
from atlas.models.search_entry import SearchCorpusEntry

logger = logging.getLogger(__name__)


class AtlasContext:
    """Owns the registry, highlight and panel state and is handed to every
    feature interaction.

    All methods must run on one event loop; that loop is the only writer of
    the registry and the highlight state.
    """

    def __init__(
        self,
        api: DataApi,
        map_surface: MapSurface,
        ui: UIPort,
        search_factory: SearchFactory = SearchIndex,
        icon_base_url: str = ICON_BASE_URL,
        thousands_sep: str = THOUSANDS_SEPARATOR,
    ):
        """
        Initialize context.

        Args:
            api: Data API collaborator
            map_surface: Map rendering collaborator
            ui: UI surface collaborator
            search_factory: Builds the search collaborator from the final corpus
            icon_base_url: Base URL for category marker icons
            thousands_sep: Grouping separator for region sizes in the info panel
        """
        self.api = api
        self.map = map_surface
        self.ui = ui
        self.registry = LayerRegistry()
        self.toggle = VisibilityToggle(self.registry, map_surface, ui)
        self.highlight = HighlightState(self.registry, map_surface)
        self.info_panel = InfoPanelController(api, ui, thousands_sep=thousands_sep)
        self.loader = AsyncLoader(
            api, map_surface, self.registry, self.toggle, search_factory=search_factory, icon_base_url=icon_base_url
        )

    async def load_map_data(self) -> LoadResult:
        """Load all categories and apply default visibility."""
        return await self.loader.load_all()

    @property
    def corpus(self) -> tuple[SearchCorpusEntry, ...]:
        """Get the search corpus (empty until loaded)."""
        return self.loader.result.corpus if self.loader.result else ()

    @property
    def search(self) -> Any:
        """Get the search collaborator.

        Raises:
            PreconditionViolation: If map data is not loaded yet
        """
        if self.loader.result is None:
            raise PreconditionViolation("Search is not available before map data is loaded")
        return self.loader.result.search

    def toggle_layer(self, category: Category | str) -> bool:
        """Toggle a category's layer and indicator."""
        return self.toggle.toggle_layer(category)

    def toggle_info(self) -> None:
        """Show or hide the info panel."""
        self.info_panel.toggle_info()

    async def handle_feature_click(self, layer_key: Category | str, feature_id: str) -> None:
        """
        Dispatch a click on a rendered feature to its layer's renderer.

        Args:
            layer_key: Category of the clicked layer
            feature_id: Id of the clicked feature

        Raises:
            PreconditionViolation: If the layer or feature is unknown
        """
        entry = self.registry.get(layer_key)
        feature = entry.get_feature(str(feature_id))
        await entry.renderer.on_feature_interaction(self, feature)

    async def show_search_result(self, entry: SearchCorpusEntry) -> None:
        """
        Show a search result: kingdoms are highlighted, locations clear the highlight.

        Args:
            entry: Selected corpus entry
        """
        if entry.is_kingdom:
            region = self.registry.get(Category.BOUNDARY).get_feature(entry.id)
            self.highlight.set_highlighted_region(region)
            await self.info_panel.show_info(entry.name, entry.id, EntityType.REGIONS)
        else:
            self.highlight.set_highlighted_region(None)
            await self.info_panel.show_info(entry.name, entry.id, EntityType.LOCATION)
