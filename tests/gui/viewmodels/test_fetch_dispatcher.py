import threading

import pytest

pytest.importorskip("PySide6.QtCore", reason="PySide6 is required for dispatcher tests", exc_type=ImportError)

from turbogrid.gui.viewmodels.fetch_dispatcher import QtFetchDispatcher
from turbogrid.gui.viewmodels.viewport_controller import ViewportController
from turbogrid.infrastructure.demo_grid_source import DemoGridSource


def test_success_is_delivered_on_owner_thread(qapp):
    dispatcher = QtFetchDispatcher()
    owner = threading.get_ident()
    job_threads = []
    results = []

    def job():
        job_threads.append(threading.get_ident())
        return 7

    dispatcher.submit(
        job,
        lambda value: results.append((value, threading.get_ident())),
        lambda error: results.append(("error", error)),
    )

    assert dispatcher.wait_for_idle(5000)
    assert results == [(7, owner)]
    assert job_threads and job_threads[0] != owner
    assert dispatcher.pending_count == 0


def test_failure_is_delivered_as_exception(qapp):
    dispatcher = QtFetchDispatcher()
    errors = []

    def job():
        raise LookupError("missing")

    dispatcher.submit(job, lambda value: errors.append("unexpected"), errors.append)

    assert dispatcher.wait_for_idle(5000)
    assert len(errors) == 1
    assert isinstance(errors[0], LookupError)


def test_controller_over_qt_dispatcher_loads_rows(qapp):
    dispatcher = QtFetchDispatcher()
    controller = ViewportController(
        DemoGridSource(1_000_000_000, 1_000_000_000),
        dispatcher,
        rows_per_page=60,
        visible_cols=6,
    )
    controller.start()
    controller.jump_to_column(1_000_000_000)
    controller.on_rows_visible(0, 99)

    assert dispatcher.wait_for_idle(5000)

    assert controller.headers.value.col_start == 1_000_000_000 - 6
    assert controller.resident_count == 120
    assert controller.loading_pages == frozenset()
    assert controller.row(99).contents[0].endswith(",99")
