"""View models driving the grid viewport.

``fetch_dispatcher`` is the only module here that imports Qt; the rest are
plain Python so they can be exercised without a Qt installation.
"""

from .column_window import ColumnWindow
from .page_cache import PageCache
from .signal import ObservableProperty, Signal
from .viewport_controller import ViewportController

__all__ = [
    "ColumnWindow",
    "ObservableProperty",
    "PageCache",
    "Signal",
    "ViewportController",
]
