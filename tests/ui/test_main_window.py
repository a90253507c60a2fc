import pytest

from pagescrub_project.src.ui.main_window import MainWindow


@pytest.fixture
def window(qtbot, settings_path):
    win = MainWindow()
    qtbot.addWidget(win)
    return win


def test_empty_viewer_scrubber(window):
    assert window.scrubber.snapshot.is_empty
    assert window.scrubber._indicator.text() == "– / 0"


def test_open_pdf_wires_scrubber(window, fixture_pdf_file):
    assert window.open_pdf(fixture_pdf_file)
    snap = window.scrubber.snapshot
    assert snap.total_pages == 5
    assert snap.current_page == 1
    assert 1 in snap.cached_pages  # first page rendered on open


def test_scrubber_selection_navigates(window, fixture_pdf_file):
    window.open_pdf(fixture_pdf_file)
    window.scrubber.pageSelected.emit(4)
    assert window.navigation.current_page == 4
    assert window.scrubber.snapshot.current_page == 4
    assert 4 in window.scrubber.snapshot.cached_pages


def test_nav_buttons_drive_service(window, fixture_pdf_file):
    window.open_pdf(fixture_pdf_file)
    window.scrubber._btn_last.click()
    assert window.navigation.current_page == 5
    window.scrubber._btn_prev.click()
    assert window.navigation.current_page == 4


def test_resize_switches_compact_mode(qtbot, window):
    window.show()
    qtbot.waitExposed(window)
    window.resize(500, 700)
    qtbot.waitUntil(lambda: window.scrubber.scrubber_style.is_compact_mode)
    window.resize(1200, 700)
    qtbot.waitUntil(lambda: not window.scrubber.scrubber_style.is_compact_mode)
