"""CLI mode: headless loading and search against the data API."""

import asyncio
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from atlas.core.api_client import AtlasApiClient
from atlas.core.config import CATEGORIES
from atlas.core.context import AtlasContext
from atlas.core.errors import AtlasError
from atlas.headless import HeadlessMapSurface, HeadlessUI
from atlas.models.settings import AtlasSettings

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> dict:
    """
    Load YAML settings file.

    Args:
        config_path: Path to YAML settings file

    Returns:
        Settings dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If settings file doesn't exist
        yaml.YAMLError: If settings file is invalid YAML
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file) as f:
        config = yaml.safe_load(f)

    return config or {}


def validate_config(config: dict) -> AtlasSettings:
    """
    Validate settings using the Pydantic schema.

    Args:
        config: Settings dictionary

    Returns:
        Validated settings

    Raises:
        ValueError: If settings are invalid
    """
    if not isinstance(config, dict):
        raise ValueError("Configuration validation failed: top level must be a mapping")
    try:
        return AtlasSettings.model_validate(config)
    except ValidationError as e:
        # Convert Pydantic errors to ValueError for consistency
        raise ValueError(f"Configuration validation failed:\n{e}") from e


def load_settings(config_path: str | None = None) -> AtlasSettings:
    """Load and validate settings, or return defaults when no path is given."""
    if config_path is None:
        return AtlasSettings()
    return validate_config(load_config(config_path))


def create_api_client(settings: AtlasSettings) -> AtlasApiClient:
    """Create a data API client from settings."""
    return AtlasApiClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
    )


async def load_headless(settings: AtlasSettings) -> AtlasContext:
    """
    Run the full startup load with in-memory map and UI adapters.

    Returns:
        Loaded context

    Raises:
        DataFetchError: If any fetch fails
    """
    async with create_api_client(settings) as api:
        context = AtlasContext(
            api,
            HeadlessMapSurface(),
            HeadlessUI(),
            icon_base_url=settings.icon_base_url,
            thousands_sep=settings.thousands_separator,
        )
        await context.load_map_data()
    return context


def print_load_summary(context: AtlasContext, console: Console | None = None) -> None:
    """Print per-category feature counts and visibility."""
    console = console or Console()
    counts = context.loader.result.feature_counts if context.loader.result else {}
    visible = context.registry.visible_categories()

    table = Table(title="Atlas layers")
    table.add_column("Category")
    table.add_column("Features", justify="right")
    table.add_column("Visible")
    for category, config in CATEGORIES.items():
        table.add_row(config.display_name, f"{counts.get(category, 0):,}", "yes" if category in visible else "no")
    console.print(table)
    console.print(f"Searchable entries: {len(context.corpus):,}")


def run_load(config_path: str | None = None) -> int:
    """
    Load all map data headlessly and print a summary.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        settings = load_settings(config_path)
        logger.info(f"Loading map data from: {settings.api_base_url}")
        context = asyncio.run(load_headless(settings))
        print_load_summary(context)
        return 0
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in config file: {e}")
        return 1
    except AtlasError as e:
        logger.error(f"Load failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


def run_search(query: str, config_path: str | None = None, limit: int = 10) -> int:
    """
    Load all map data headlessly and print entries matching a query.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        settings = load_settings(config_path)
        context = asyncio.run(load_headless(settings))
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in config file: {e}")
        return 1
    except AtlasError as e:
        logger.error(f"Load failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    results = context.search.search(query, limit=limit)
    console = Console()
    if not results:
        console.print(f"No matches for '{query}'")
        return 0

    table = Table(title=f"Matches for '{query}'")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Id", justify="right")
    for entry in results:
        table.add_row(entry.name, str(entry.type or ""), entry.id)
    console.print(table)
    return 0
