import pytest

from pagescrub_project.src.services.page_navigation_service import PageNavigationService


@pytest.fixture
def nav(qtbot):
    svc = PageNavigationService(max_cached_pages=3)
    svc.set_page_count(10)
    return svc


def test_set_page_count_resets_to_first_page(qtbot):
    svc = PageNavigationService()
    with qtbot.waitSignal(svc.documentLoaded) as blocker:
        svc.set_page_count(7)
    assert blocker.args == [7]
    assert svc.current_page == 1
    assert svc.snapshot().total_pages == 7


def test_go_to_page_emits_and_validates(qtbot, nav):
    with qtbot.waitSignal(nav.currentPageChanged) as blocker:
        assert nav.go_to_page(4)
    assert blocker.args == [4]

    assert not nav.go_to_page(0)
    assert not nav.go_to_page(11)
    assert nav.current_page == 4


def test_relative_navigation_respects_bounds(nav):
    assert not nav.previous_page()
    assert nav.next_page() and nav.current_page == 2
    assert nav.last_page() and nav.current_page == 10
    assert not nav.next_page()
    assert nav.first_page() and nav.current_page == 1


def test_empty_document_rejects_navigation(qtbot):
    svc = PageNavigationService()
    svc.set_page_count(0)
    assert svc.current_page == 0
    assert not svc.go_to_page(1)


def test_cached_pages_bookkeeping(qtbot, nav):
    with qtbot.waitSignal(nav.cachedPagesChanged):
        nav.mark_cached(3)
    nav.mark_cached(99)  # out of range – ignored
    assert nav.cached_pages == frozenset({3})

    nav.evict(3)
    assert nav.cached_pages == frozenset()


def test_load_pdf_and_render_fills_cache(qtbot, fixture_pdf_file):
    svc = PageNavigationService(max_cached_pages=2)
    doc = svc.load_pdf(fixture_pdf_file)
    assert doc is not None
    assert svc.total_pages == 5
    assert svc.current_page == 1

    for page in (1, 2, 3):
        pix = svc.render_page(page, 100)
        assert pix is not None and not pix.isNull()

    # LRU keeps two entries and never drops the current page
    assert len(svc.cached_pages) == 2
    assert 1 in svc.cached_pages
    assert svc.render_page(9, 100) is None


def test_reload_closes_previous_document(qtbot, fixture_pdf_file):
    svc = PageNavigationService()
    first = svc.load_pdf(fixture_pdf_file)
    second = svc.load_pdf(fixture_pdf_file)

    assert first is not None and second is not None
    assert not first.is_loaded
    assert first.page_count == 0
    assert second.is_loaded
    assert svc.document is second


def test_load_missing_pdf_keeps_state(qtbot, nav, tmp_path):
    assert nav.load_pdf(tmp_path / "missing.pdf") is None
    assert nav.total_pages == 10
