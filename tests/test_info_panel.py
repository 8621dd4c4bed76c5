"""Tests for info panel population, auto-reveal and click dispatch."""

import asyncio

import pytest

from atlas.core.config import Category
from atlas.core.context import AtlasContext
from atlas.core.errors import DataFetchError, PreconditionViolation
from atlas.core.info_panel import EntityType, InfoPanelController
from atlas.headless import HeadlessUI
from atlas.models.search_entry import SearchCorpusEntry
from tests.fakes import FakeDataApi


def test_region_issues_three_lookups(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)

    assert asyncio.run(controller.show_info("The North", "101", EntityType.REGIONS)) is True

    assert fake_api.calls == [
        ("get_region_size", "101"),
        ("get_castle_count", "101"),
        ("get_region_details", "101"),
    ]


def test_region_content_order(fake_api, ui):
    """Size, castles and summary are appended in that order."""
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("The North", "101", "regions"))

    assert ui.title == "<h1>The North</h1>"
    assert len(ui.content) == 3
    assert ui.content[0] == "<div>Size: 7,500 km^2 (estimate)</div>"
    assert ui.content[1] == "<div>Castles: 12</div>"
    assert "About region 101" in ui.content[2]
    assert 'href="https://example.org/region/101"' in ui.content[2]


def test_content_order_independent_of_completion_order(ui):
    """Slow size lookup still renders first."""
    api = FakeDataApi(delays={"size": 0.05})
    controller = InfoPanelController(api, ui)
    asyncio.run(controller.show_info("The Reach", "102", EntityType.REGIONS))

    assert ui.content[0].startswith("<div>Size:")
    assert ui.content[1].startswith("<div>Castles:")


def test_location_issues_one_lookup(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("King's Landing", "3", EntityType.LOCATION))

    assert fake_api.calls == [("get_location_details", "3")]
    assert ui.title == "<h1>King&#x27;s Landing</h1>"
    assert len(ui.content) == 1
    assert "About location 3" in ui.content[0]


def test_read_more_link_opens_isolated(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("Oldtown", "4", EntityType.LOCATION))

    link = ui.content_html
    assert 'target="_blank"' in link
    assert 'rel="noopener noreferrer"' in link
    assert "Read More..." in link


def test_previous_content_is_replaced(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("The North", "101", EntityType.REGIONS))
    asyncio.run(controller.show_info("Oldtown", "4", EntityType.LOCATION))

    assert ui.title == "<h1>Oldtown</h1>"
    assert "About region" not in ui.content_html


@pytest.mark.parametrize("width, revealed", [(1280, True), (601, True), (600, False), (375, False)])
def test_auto_reveal_depends_on_width(fake_api, width, revealed):
    """The hidden panel is revealed only on viewports wider than 600."""
    ui = HeadlessUI(width=width)
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("Dorne", "103", EntityType.REGIONS))

    assert ui.is_panel_active() is revealed


def test_active_panel_stays_open(fake_api, ui):
    ui.panel_active = True
    controller = InfoPanelController(fake_api, ui)
    asyncio.run(controller.show_info("Dorne", "103", EntityType.REGIONS))

    assert ui.is_panel_active() is True


def test_stale_response_is_discarded(ui):
    """A slower earlier request may not overwrite a newer one."""
    api = FakeDataApi()
    controller = InfoPanelController(api, ui)

    async def scenario():
        api.delays["region_details"] = 0.1
        first = asyncio.create_task(controller.show_info("The North", "101", EntityType.REGIONS))
        # Let the first request reach its slow lookup before answering fast
        await asyncio.sleep(0.02)
        api.delays["region_details"] = 0
        second = await controller.show_info("Dorne", "103", EntityType.REGIONS)
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is False
    assert second is True
    assert ui.title == "<h1>Dorne</h1>"
    assert "About region 103" in ui.content_html
    assert "About region 101" not in ui.content_html
    assert len(ui.content) == 3


def test_lookup_failure_propagates(ui):
    api = FakeDataApi(fail=["castles"])
    controller = InfoPanelController(api, ui)

    with pytest.raises(DataFetchError):
        asyncio.run(controller.show_info("The North", "101", EntityType.REGIONS))
    assert ui.content == []
    assert ui.is_panel_active() is False


def test_failed_lookup_cancels_remaining_lookups(ui):
    """No lookup keeps running after a region request failed."""
    api = FakeDataApi(fail=["size"], delays={"region_details": 0.05})
    controller = InfoPanelController(api, ui)

    async def scenario():
        with pytest.raises(DataFetchError):
            await controller.show_info("The North", "101", EntityType.REGIONS)
        return [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]

    assert asyncio.run(scenario()) == []


def test_stale_failure_is_discarded(ui):
    """A superseded request that fails does not raise."""
    api = FakeDataApi(fail=["region_details"], delays={"region_details": 0.1})
    controller = InfoPanelController(api, ui)

    async def scenario():
        first = asyncio.create_task(controller.show_info("The North", "101", EntityType.REGIONS))
        await asyncio.sleep(0.02)
        second = await controller.show_info("Oldtown", "4", EntityType.LOCATION)
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is False
    assert second is True
    assert ui.title == "<h1>Oldtown</h1>"
    assert "About location 4" in ui.content_html


def test_unknown_entity_type(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)
    with pytest.raises(ValueError):
        asyncio.run(controller.show_info("X", "1", "dragons"))


def test_toggle_info(fake_api, ui):
    controller = InfoPanelController(fake_api, ui)
    controller.toggle_info()
    assert ui.is_panel_active() is True
    controller.toggle_info()
    assert ui.is_panel_active() is False


def test_click_region_highlights_and_shows_region(loaded_context, fake_api, map_surface, ui):
    fake_api.calls.clear()
    asyncio.run(loaded_context.handle_feature_click("boundary", "102"))

    assert loaded_context.highlight.selected.name == "The Reach"
    assert map_surface.layers["boundary"].styles == {"102": {"color": "red"}}
    assert ui.title == "<h1>The Reach</h1>"
    assert [call[0] for call in fake_api.calls] == ["get_region_size", "get_castle_count", "get_region_details"]


def test_click_location_clears_highlight(loaded_context, fake_api, map_surface, ui):
    asyncio.run(loaded_context.handle_feature_click("boundary", "101"))
    fake_api.calls.clear()

    asyncio.run(loaded_context.handle_feature_click(Category.CASTLE, "1"))

    assert loaded_context.highlight.selected is None
    assert map_surface.layers["boundary"].styles == {}
    assert ui.title == "<h1>Winterfell</h1>"
    assert fake_api.calls == [("get_location_details", "1")]


def test_click_unknown_feature(loaded_context):
    with pytest.raises(PreconditionViolation):
        asyncio.run(loaded_context.handle_feature_click("city", "999"))


def test_show_search_result_for_kingdom(loaded_context, ui):
    entry = next(e for e in loaded_context.corpus if e.name == "Dorne")
    asyncio.run(loaded_context.show_search_result(entry))

    assert loaded_context.highlight.selected.id == "103"
    assert ui.title == "<h1>Dorne</h1>"
    assert len(ui.content) == 3


def test_show_search_result_for_location(loaded_context, fake_api, ui):
    loaded_context.highlight.set_highlighted_region(loaded_context.registry.get("boundary").get_feature("101"))
    entry = SearchCorpusEntry(name="Harrenhal", type="Ruin", id="6")
    asyncio.run(loaded_context.show_search_result(entry))

    assert loaded_context.highlight.selected is None
    assert fake_api.calls[-1] == ("get_location_details", "6")
    assert len(ui.content) == 1
    assert "About location 6" in ui.content[0]


def test_region_size_uses_configured_separator(fake_api, map_surface, ui):
    context = AtlasContext(fake_api, map_surface, ui, thousands_sep=" ")
    asyncio.run(context.load_map_data())

    asyncio.run(context.handle_feature_click("boundary", "101"))

    assert ui.content[0] == "<div>Size: 7 500 km^2 (estimate)</div>"
