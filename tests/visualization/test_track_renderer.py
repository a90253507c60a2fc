import pytest
from PySide6.QtGui import QColor, QImage, QPainter

from pagescrub_project.src.models.page_state import PageSnapshot, ScrubberStyle
from pagescrub_project.src.visualization.track_renderer import (
    PrimitiveKind,
    TrackPaintKey,
    TrackRenderer,
)


def _kinds(prims, kind):
    return [p for p in prims if p.kind is kind]


def test_plan_draws_layers_back_to_front():
    renderer = TrackRenderer(PageSnapshot.create(3, 10, {2}), ScrubberStyle())
    order = [p.kind for p in renderer.plan(200.0, 8.0)]
    first_index = {kind: order.index(kind) for kind in set(order)}
    assert (
        first_index[PrimitiveKind.BACKGROUND]
        < first_index[PrimitiveKind.CACHED]
        < first_index[PrimitiveKind.PROGRESS]
        < first_index[PrimitiveKind.GLOW]
        < first_index[PrimitiveKind.CURRENT]
        < first_index[PrimitiveKind.MARKER]
    )


def test_only_in_range_cached_pages_are_highlighted():
    """Pages 0 and 11 slipped into the set must not produce highlights."""
    snap = PageSnapshot(current_page=1, total_pages=10, cached_pages=frozenset({0, 2, 5, 9, 11}))
    cached = _kinds(TrackRenderer(snap).plan(200.0, 8.0), PrimitiveKind.CACHED)
    assert [p.page for p in cached] == [2, 5, 9]
    assert all(p.x + p.width <= 200.0 for p in cached)


def test_progress_fill_tracks_current_page():
    prims = TrackRenderer(PageSnapshot.create(6, 11)).plan(300.0, 8.0)
    (progress,) = _kinds(prims, PrimitiveKind.PROGRESS)
    assert progress.x == 0.0
    assert progress.width == pytest.approx(150.0)


def test_current_segment_has_glow_in_regular_mode():
    prims = TrackRenderer(PageSnapshot.create(4, 10)).plan(200.0, 8.0)
    (glow,) = _kinds(prims, PrimitiveKind.GLOW)
    (current,) = _kinds(prims, PrimitiveKind.CURRENT)
    assert glow.page == current.page == 4
    assert glow.height > current.height
    assert glow.opacity < current.opacity


def test_glow_skipped_for_narrow_compact_segments():
    style = ScrubberStyle(is_compact_mode=True)
    narrow = TrackRenderer(PageSnapshot.create(4, 100), style).plan(300.0, 6.0)
    wide = TrackRenderer(PageSnapshot.create(4, 10), style).plan(300.0, 6.0)
    assert _kinds(narrow, PrimitiveKind.GLOW) == []
    assert len(_kinds(wide, PrimitiveKind.GLOW)) == 1


def test_markers_hidden_for_long_documents():
    few = TrackRenderer(PageSnapshot.create(1, 10)).plan(200.0, 8.0)
    many = TrackRenderer(PageSnapshot.create(1, 51)).plan(200.0, 8.0)
    assert len(_kinds(few, PrimitiveKind.MARKER)) == 10
    assert _kinds(many, PrimitiveKind.MARKER) == []


def test_single_page_document_draws_background_only():
    prims = TrackRenderer(PageSnapshot.create(1, 1, {1})).plan(200.0, 8.0)
    assert [p.kind for p in prims] == [PrimitiveKind.BACKGROUND]


@pytest.mark.parametrize("size", [(0.0, 8.0), (200.0, 0.0), (-1.0, -1.0)])
def test_degenerate_size_plans_nothing(size):
    assert TrackRenderer(PageSnapshot.create(3, 10)).plan(*size) == []


def test_repaint_only_when_significant_fields_change():
    snap = PageSnapshot.create(3, 10, {2, 5})
    renderer = TrackRenderer(snap, ScrubberStyle())

    assert not renderer.update(PageSnapshot.create(3, 10, [5, 2]))
    assert not renderer.update(snap, ScrubberStyle(primary_color="#ff0000"))
    assert renderer.update(PageSnapshot.create(4, 10, {2, 5}))
    assert renderer.update(PageSnapshot.create(4, 12, {2, 5}))
    assert renderer.update(PageSnapshot.create(4, 12, {2}))
    assert renderer.update(PageSnapshot.create(4, 12, {2}), ScrubberStyle(is_compact_mode=True))


def test_paint_key_equality_is_pure():
    a = TrackPaintKey(1, 5, frozenset({1, 2}), False)
    b = TrackPaintKey(1, 5, frozenset({2, 1}), False)
    assert a == b
    assert TrackRenderer(PageSnapshot.create(1, 5, {1, 2})).should_repaint(a) is False


def test_paint_fills_progress_with_primary_colour(qtbot):
    style = ScrubberStyle(primary_color="#ff0000", background_color="#0000ff")
    renderer = TrackRenderer(PageSnapshot.create(10, 10), style)

    image = QImage(200, 8, QImage.Format.Format_ARGB32)
    image.fill(0)
    painter = QPainter(image)
    renderer.paint(painter, 200.0, 8.0)
    painter.end()

    assert QColor(image.pixel(100, 4)).red() > 200
