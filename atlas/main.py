"""Main application entry point."""

import argparse
import logging
import sys


def setup_logging(verbose: bool = False):
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )


def cmd_load(args):
    """Handle load subcommand - load all map data headlessly and print a summary."""
    setup_logging(args.verbose)
    from atlas.cli import run_load

    return run_load(args.config)


def cmd_search(args):
    """Handle search subcommand - load map data and search the corpus."""
    setup_logging(args.verbose)
    from atlas.cli import run_search

    return run_search(args.query, args.config, limit=args.limit)


def launch_gui(config_file: str | None = None):
    """
    Launch the GUI application.

    Args:
        config_file: Optional path to settings file to load on startup
    """
    import signal

    import yaml
    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication

    from atlas.cli import load_settings
    from atlas.gui.main_window import MainWindow

    setup_logging()

    try:
        settings = load_settings(config_file)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logging.error(f"Cannot start: {e}")
        sys.exit(1)

    app = QApplication(sys.argv)
    _set_app_metadata(app)

    # Set up Ctrl+C handling
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    # Let Python process signals while Qt's event loop runs
    timer = QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(500)

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


def cmd_open(args):
    """Handle open subcommand - launch GUI with settings file loaded."""
    launch_gui(config_file=args.config)


def cmd_list_categories(args):
    """Handle list-categories subcommand."""
    from atlas.core.config import CATEGORIES, ICON_BASE_URL

    print("Map categories:")
    print()

    for key, category in CATEGORIES.items():
        print(f"  {key.value:9} - {category.display_name}")
        print(f"              Icon: {category.icon_url(ICON_BASE_URL) or '(polygons)'}")
        print(f"              Visible on startup: {'yes' if category.default_visible else 'no'}")
        print()

    return 0


def _set_app_metadata(app):
    """
    Set organization and application metadata.

    Args:
        app: QApplication instance
    """
    app.setOrganizationName("atlas-viewer")
    app.setApplicationName("atlas-viewer")


def main():
    """Main application entry point."""
    parser = argparse.ArgumentParser(
        description="Atlas Viewer - browse kingdoms and locations on an interactive map",
        epilog="Run without arguments to launch GUI mode.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Open subcommand (launch GUI with settings)
    open_parser = subparsers.add_parser("open", help="Open the viewer with a settings file")
    open_parser.add_argument("config", help="YAML settings file")
    open_parser.set_defaults(func=cmd_open)

    # Load subcommand
    load_parser = subparsers.add_parser("load", help="Load all map data headlessly and print a summary")
    load_parser.add_argument("-c", "--config", help="YAML settings file")
    load_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    load_parser.set_defaults(func=cmd_load)

    # Search subcommand
    search_parser = subparsers.add_parser("search", help="Search locations and kingdoms by name")
    search_parser.add_argument("query", help="Name to search for")
    search_parser.add_argument("-c", "--config", help="YAML settings file")
    search_parser.add_argument("-n", "--limit", type=int, default=10, help="Maximum number of results")
    search_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    search_parser.set_defaults(func=cmd_search)

    # List categories subcommand
    list_parser = subparsers.add_parser("list-categories", help="List map categories")
    list_parser.set_defaults(func=cmd_list_categories)

    args = parser.parse_args()

    # If no subcommand provided, launch GUI
    if args.command is None:
        launch_gui()
    else:
        return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
