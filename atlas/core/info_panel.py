"""Info panel population from asynchronous detail lookups."""

import asyncio
import logging
from enum import Enum

from atlas.core.config import INFO_PANEL_MIN_WIDTH, THOUSANDS_SEPARATOR
from atlas.models.ports import DataApi, UIPort
from atlas.utils.panel_html import castles_html, size_html, summary_html, title_html

logger = logging.getLogger(__name__)


async def _cancel_lookups(lookups: list[asyncio.Future]) -> None:
    """Cancel unfinished lookups and wait until they have stopped."""
    for lookup in lookups:
        lookup.cancel()
    await asyncio.gather(*lookups, return_exceptions=True)


class EntityType(str, Enum):
    """Kind of entity shown in the info panel."""

    REGIONS = "regions"
    LOCATION = "location"


class InfoPanelController:
    """Composes detail lookups into panel content and manages panel visibility."""

    def __init__(
        self,
        api: DataApi,
        ui: UIPort,
        min_width: int = INFO_PANEL_MIN_WIDTH,
        thousands_sep: str = THOUSANDS_SEPARATOR,
    ):
        """
        Initialize info panel controller.

        Args:
            api: Data API used for detail lookups
            ui: UI surface holding the panel
            min_width: Viewport width above which the panel auto-reveals
            thousands_sep: Grouping separator for the size line
        """
        self.api = api
        self.ui = ui
        self.min_width = min_width
        self.thousands_sep = thousands_sep
        # Incremented per show_info call; only the newest request may render
        self.generation = 0

    async def show_info(self, name: str, entity_id: str, entity_type: EntityType | str) -> bool:
        """
        Show details for a region or location.

        Region lookups (size, castle count, details) are issued concurrently
        and appended in that fixed order once all have resolved. A response
        that was superseded by a newer call while in flight is discarded.

        Args:
            name: Display name for the panel title
            entity_id: Region or location id
            entity_type: "regions" or "location"

        Returns:
            True if the content was rendered, False if it was discarded as stale

        Raises:
            DataFetchError: If any lookup of a current (not superseded) request
                fails; the remaining lookups are cancelled first
            ValueError: If entity_type is unknown
        """
        entity_type = EntityType(entity_type)
        self.generation += 1
        generation = self.generation

        self.ui.set_title(title_html(name))
        self.ui.clear_content()

        if entity_type is EntityType.REGIONS:
            lookups = [
                asyncio.ensure_future(self.api.get_region_size(entity_id)),
                asyncio.ensure_future(self.api.get_castle_count(entity_id)),
                asyncio.ensure_future(self.api.get_region_details(entity_id)),
            ]
        else:
            lookups = [asyncio.ensure_future(self.api.get_location_details(entity_id))]

        try:
            results = await asyncio.gather(*lookups)
        except Exception as e:
            await _cancel_lookups(lookups)
            if generation != self.generation:
                logger.debug(f"Discarding stale error for {name}: {e}")
                return False
            raise

        if entity_type is EntityType.REGIONS:
            size, castles, details = results
            fragments = [size_html(size, self.thousands_sep), castles_html(castles)]
        else:
            (details,) = results
            fragments = []

        if generation != self.generation:
            logger.debug(f"Discarding stale info for {name} (generation {generation} != {self.generation})")
            return False

        fragments.append(summary_html(details))
        for fragment in fragments:
            self.ui.append_content(fragment)

        # Show info panel if hidden, and on desktop
        if not self.ui.is_panel_active() and self.ui.viewport_width() > self.min_width:
            self.toggle_info()

        return True

    def toggle_info(self) -> None:
        """Show or hide the info panel."""
        self.ui.toggle_panel()
