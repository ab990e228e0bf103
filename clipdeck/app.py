"""QApplication setup and data endpoint runner."""

from __future__ import annotations

import logging
import sys

from clipdeck.yaml_config import CatalogConfig

logger = logging.getLogger(__name__)


def run_gui(config: CatalogConfig | None = None) -> int:
    """Launch the clip browser and start loading the catalog."""
    from PySide6.QtWidgets import QApplication

    from clipdeck.config import Preferences
    from clipdeck.ui.main_window import MainWindow

    config = config or CatalogConfig()

    app = QApplication(sys.argv)
    app.setApplicationName("ClipDeck")
    app.setOrganizationName("ClipDeck")

    window = MainWindow(
        endpoint=config.api_endpoint,
        preferences=Preferences.load(),
        timeout=config.api_timeout,
    )
    window.show()
    window.load_clips()

    return app.exec()


def run_server(config: CatalogConfig | None = None) -> int:
    """Serve the read-only clip endpoint until interrupted.

    SQLite databases get their clip table created on startup; other
    databases are expected to have it already.

    Returns 0 on clean shutdown, 1 if the database cannot be opened.
    """
    import uvicorn
    from sqlalchemy.exc import SQLAlchemyError

    from clipdeck.api.server import create_app
    from clipdeck.api.store import ClipStore

    config = config or CatalogConfig()

    try:
        store = ClipStore.from_url(config.database_url, config.table)
        if store.engine.dialect.name == "sqlite":
            store.create_schema()
    except SQLAlchemyError as e:
        print(f"Error: cannot open database {config.database_url}: {e}", file=sys.stderr)
        return 1

    logger.info("Summoner Highlights API ready on http://%s:%d", config.host, config.port)
    uvicorn.run(create_app(store), host=config.host, port=config.port)
    return 0
