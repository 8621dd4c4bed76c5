"""Sequential startup loading of all map categories."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from atlas.core.config import CATEGORIES, ICON_BASE_URL, POINT_CATEGORIES, Category
from atlas.core.errors import DataFetchError, PreconditionViolation
from atlas.core.layers import LayerEntry, LayerRegistry, VisibilityToggle
from atlas.core.renderers import LocationRenderer, RegionRenderer
from atlas.core.search import SearchIndex
from atlas.models.feature import LocationFeature, RegionFeature, parse_locations, parse_regions
from atlas.models.ports import DataApi, MapSurface
from atlas.models.search_entry import SearchCorpusEntry

logger = logging.getLogger(__name__)

SearchFactory = Callable[[Sequence[SearchCorpusEntry]], Any]


def _index_by_id(
    features: Sequence[LocationFeature | RegionFeature], category: Category
) -> dict[str, LocationFeature | RegionFeature]:
    """Index a layer's features by id; the first feature wins on duplicate ids."""
    indexed: dict[str, LocationFeature | RegionFeature] = {}
    for feature in features:
        if feature.id in indexed:
            logger.warning(
                f"Duplicate {category.value} feature id {feature.id!r}: "
                f"clicks resolve to {indexed[feature.id].name!r}, not {feature.name!r}"
            )
            continue
        indexed[feature.id] = feature
    return indexed


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a completed load."""

    corpus: tuple[SearchCorpusEntry, ...]
    search: Any
    feature_counts: dict[Category, int]


class AsyncLoader:
    """Loads every category into the layer registry and builds the search corpus.

    Categories load strictly one after another so the corpus order is
    deterministic: castle, city, town, ruin, landmark, then boundaries.
    """

    def __init__(
        self,
        api: DataApi,
        map_surface: MapSurface,
        registry: LayerRegistry,
        toggle: VisibilityToggle,
        search_factory: SearchFactory = SearchIndex,
        icon_base_url: str = ICON_BASE_URL,
    ):
        self.api = api
        self.map = map_surface
        self.registry = registry
        self.toggle = toggle
        self.search_factory = search_factory
        self.icon_base_url = icon_base_url
        self.result: LoadResult | None = None

    async def load_all(self) -> LoadResult:
        """
        Load all categories, build the corpus and apply default visibility.

        Layers are staged and registered only after every fetch succeeded, so
        a failure leaves the registry empty.

        Returns:
            LoadResult with the immutable corpus and the search collaborator

        Raises:
            DataFetchError: If any fetch fails or returns malformed features
            PreconditionViolation: If called after a completed load
        """
        if self.result is not None:
            raise PreconditionViolation("Map data already loaded")

        staged: list[LayerEntry] = []
        corpus: list[SearchCorpusEntry] = []
        counts: dict[Category, int] = {}

        for category in POINT_CATEGORIES:
            icon_url = CATEGORIES[category].icon_url(self.icon_base_url)
            raw = await self.api.get_locations(category)
            try:
                features = parse_locations(raw, category, icon_url)
            except ValueError as e:
                raise DataFetchError(f"Malformed {category.value} features: {e}") from e

            renderer = LocationRenderer(icon_url)
            layer = self.map.build_layer(category.value, features, renderer)
            staged.append(
                LayerEntry(
                    category=category,
                    layer=layer,
                    renderer=renderer,
                    features=_index_by_id(features, category),
                )
            )
            corpus.extend(SearchCorpusEntry.from_location(f) for f in features)
            counts[category] = len(features)
            logger.info(f"Loaded {len(features)} {category.value} features")

        raw = await self.api.get_political_boundaries()
        try:
            regions = parse_regions(raw)
        except ValueError as e:
            raise DataFetchError(f"Malformed boundary features: {e}") from e

        corpus.extend(SearchCorpusEntry.from_region(r) for r in regions)
        renderer = RegionRenderer()
        layer = self.map.build_layer(Category.BOUNDARY.value, regions, renderer)
        staged.append(
            LayerEntry(
                category=Category.BOUNDARY,
                layer=layer,
                renderer=renderer,
                features=_index_by_id(regions, Category.BOUNDARY),
            )
        )
        counts[Category.BOUNDARY] = len(regions)
        logger.info(f"Loaded {len(regions)} boundary features")

        self.registry.register_all(staged)

        frozen_corpus = tuple(corpus)
        search = self.search_factory(frozen_corpus)
        self.result = LoadResult(corpus=frozen_corpus, search=search, feature_counts=counts)

        for category, config in CATEGORIES.items():
            if config.default_visible:
                self.toggle.toggle_layer(category)

        logger.info(f"Map data loaded: {len(frozen_corpus)} searchable entries")
        return self.result
