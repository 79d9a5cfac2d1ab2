"""Entry point: python -m filekeeper

Opens the registry and runs the interactive menu. Takes no arguments.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from filekeeper.config import FileKeeperConfig, load_config
from filekeeper.errors import FileKeeperError


def _setup_logging(config: FileKeeperConfig) -> None:
    handlers: list[logging.Handler] = [
        RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    ]
    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def main() -> None:
    if len(sys.argv) > 1:
        print("Usage: python -m filekeeper")
        print("  Interactive file registry (takes no arguments)")
        sys.exit(1)

    config = load_config()
    _setup_logging(config)

    from filekeeper.registry.store import Registry
    from filekeeper.service import FileService
    from filekeeper.ui.console import ConsoleView
    from filekeeper.ui.menu import MainMenu

    view = ConsoleView()
    try:
        registry = Registry.open(config.registry_dir)
    except FileKeeperError as e:
        view.error(f"Failed to initialise the application: {e.message}")
        sys.exit(1)

    MainMenu(FileService(registry), view).run()


if __name__ == "__main__":
    main()
