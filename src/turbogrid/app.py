"""High-level application facade."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from PySide6.QtCore import QCoreApplication

from .domain.grid_source import GridSource
from .gui.viewmodels.fetch_dispatcher import QtFetchDispatcher
from .gui.viewmodels.viewport_controller import ViewportController
from .infrastructure.demo_grid_source import DemoGridSource
from .settings.manager import SettingsManager
from .settings.schema import merge_with_defaults
from .utils.logging import get_logger

LOGGER = get_logger()


@dataclass
class GridSession:
    """A controller wired to its source and a Qt dispatcher."""

    source: GridSource
    dispatcher: QtFetchDispatcher
    controller: ViewportController

    def settle(self, timeout_ms: int = 5000) -> bool:
        """Block until all outstanding fetches have been delivered."""
        return self.dispatcher.wait_for_idle(timeout_ms)

    def close(self) -> None:
        self.controller.dispose()
        self.dispatcher.wait_for_idle(1000)


def ensure_core_application() -> QCoreApplication:
    """Return the running Qt application, creating a headless one if needed."""

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the settings file at *path*, or at the platform default location.

    A missing file is created with the defaults, as :class:`SettingsManager`
    does for the desktop app.
    """

    manager = SettingsManager(path=path)
    manager.load()
    LOGGER.debug("Loaded settings from %s", manager.path)
    return {
        "viewport": manager.get("viewport"),
        "demo": manager.get("demo"),
    }


def open_session(
    source: GridSource,
    *,
    settings: Optional[Dict[str, Any]] = None,
    **overrides: int,
) -> GridSession:
    """Create a started session over *source*.

    Viewport settings come from *settings* (see :mod:`turbogrid.settings`)
    and may be overridden per keyword (``rows_per_page``, ``visible_cols``,
    ``drag_threshold``).
    """

    ensure_core_application()
    viewport = dict(merge_with_defaults(settings)["viewport"])
    viewport.update({key: value for key, value in overrides.items() if value is not None})
    dispatcher = QtFetchDispatcher()
    controller = ViewportController(
        source,
        dispatcher,
        rows_per_page=viewport["rows_per_page"],
        visible_cols=viewport["visible_cols"],
        drag_threshold=viewport["drag_threshold"],
    )
    dims = controller.dimensions
    LOGGER.info(
        "Opened %d x %d grid (%d rows per page, %d columns visible)",
        dims.total_rows,
        dims.total_cols,
        controller.rows_per_page,
        controller.window_width,
    )
    controller.start()
    return GridSession(source=source, dispatcher=dispatcher, controller=controller)


def open_demo_session(
    *,
    settings: Optional[Dict[str, Any]] = None,
    total_rows: Optional[int] = None,
    total_cols: Optional[int] = None,
    latency: Optional[float] = None,
    **overrides: int,
) -> GridSession:
    """Open a session over the synthetic :class:`DemoGridSource`."""

    merged = merge_with_defaults(settings)
    demo = merged["demo"]
    source = DemoGridSource(
        demo["total_rows"] if total_rows is None else total_rows,
        demo["total_cols"] if total_cols is None else total_cols,
        latency=demo["latency_ms"] / 1000.0 if latency is None else latency,
    )
    return open_session(source, settings=merged, **overrides)


__all__ = [
    "GridSession",
    "ensure_core_application",
    "load_settings",
    "open_demo_session",
    "open_session",
]
