import math

import pytest

from pagescrub_project.src.core.errors import DegenerateLayoutError, OutOfRangeIndexError
from pagescrub_project.src.core.layout_calculator import (
    COMPACT_METRICS,
    REGULAR_METRICS,
    is_compact_width,
    marker_positions,
    preview_box_geometry,
    progress_extent,
    scrubber_height,
    segment_bounds,
    show_markers,
    thumb_geometry,
)


# ---------------------------------------------------------------------------
# Thumb
# ---------------------------------------------------------------------------

def test_thumb_grows_while_dragging():
    idle = thumb_geometry(200.0, 10, 1, is_dragging=False, is_compact=False)
    drag = thumb_geometry(200.0, 10, 1, is_dragging=True, is_compact=False)
    assert idle.size == REGULAR_METRICS.thumb_size
    assert drag.size == REGULAR_METRICS.thumb_size + REGULAR_METRICS.thumb_drag_increment


def test_thumb_compact_is_smaller():
    compact = thumb_geometry(200.0, 10, 1, False, True)
    assert compact.size == COMPACT_METRICS.thumb_size < REGULAR_METRICS.thumb_size


def test_thumb_positions_at_ends():
    first = thumb_geometry(200.0, 10, 1, False, False)
    last = thumb_geometry(200.0, 10, 10, False, False)
    assert first.x == 0.0
    assert last.x == pytest.approx(200.0 - last.size)


def test_thumb_single_page_stays_at_origin():
    assert thumb_geometry(200.0, 1, 1, True, False).x == 0.0


def test_thumb_never_negative_on_narrow_track():
    thumb = thumb_geometry(10.0, 10, 10, False, False)
    assert thumb.x == 0.0


@pytest.mark.parametrize("width,total", [(0.0, 10), (-5.0, 10), (float("inf"), 10), (200.0, 0)])
def test_thumb_degenerate_layout_returns_none(width, total):
    assert thumb_geometry(width, total, 1, False, False) is None


# ---------------------------------------------------------------------------
# Preview bubble
# ---------------------------------------------------------------------------

def test_preview_box_centred_on_thumb():
    thumb = thumb_geometry(400.0, 11, 6, True, False)
    box = preview_box_geometry(400.0, thumb, False)
    assert box.left + box.width / 2 == pytest.approx(thumb.center_x)
    assert box.bottom_offset == REGULAR_METRICS.preview_bottom_offset


def test_preview_box_clamped_to_track():
    width = 300.0
    left = preview_box_geometry(width, thumb_geometry(width, 10, 1, True, True), True)
    right = preview_box_geometry(width, thumb_geometry(width, 10, 10, True, True), True)
    assert left.left == 0.0
    assert right.left + right.width == pytest.approx(width)


def test_preview_box_without_thumb():
    assert preview_box_geometry(200.0, None, False) is None


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------

def test_segment_bounds_simple():
    seg = segment_bounds(3, 10, 200.0)
    assert seg.x == pytest.approx(40.0)
    assert seg.width == pytest.approx(20.0)


@pytest.mark.parametrize("width", [1.0, 199.7, 333.0, 1024.0])
def test_segment_right_edge_never_exceeds_track(width):
    for total in list(range(1, 200)) + [997, 4096, 10000]:
        for page in {1, total // 2 or 1, total - 1 or 1, total}:
            seg = segment_bounds(page, total, width)
            assert seg.x >= 0.0
            assert seg.width >= 0.0
            assert seg.right <= width + 1e-9


def test_segment_bounds_rejects_bad_input():
    with pytest.raises(OutOfRangeIndexError):
        segment_bounds(0, 10, 200.0)
    with pytest.raises(OutOfRangeIndexError):
        segment_bounds(11, 10, 200.0)
    with pytest.raises(DegenerateLayoutError):
        segment_bounds(1, 0, 200.0)
    with pytest.raises(DegenerateLayoutError):
        segment_bounds(1, 10, 0.0)


# ---------------------------------------------------------------------------
# Progress / markers / sizing
# ---------------------------------------------------------------------------

def test_progress_extent():
    assert progress_extent(1, 10, 200.0) == 0.0
    assert progress_extent(10, 10, 200.0) == pytest.approx(200.0)
    assert progress_extent(1, 1, 200.0) is None
    assert progress_extent(11, 10, 200.0) is None


def test_marker_thresholds_depend_on_mode():
    assert show_markers(20, is_compact=True)
    assert not show_markers(21, is_compact=True)
    assert show_markers(50, is_compact=False)
    assert not show_markers(51, is_compact=False)
    assert not show_markers(1, is_compact=False)


def test_marker_positions_span_track():
    xs = marker_positions(5, 100.0)
    assert xs == [0.0, 25.0, 50.0, 75.0, 100.0]
    assert marker_positions(1, 100.0) == []
    assert all(math.isfinite(x) for x in marker_positions(50, 333.0))


def test_compact_breakpoint_and_height():
    assert is_compact_width(767)
    assert not is_compact_width(768)
    assert is_compact_width(900, breakpoint=1000)
    assert scrubber_height(True, True) == 48.0
    assert scrubber_height(True, False) == 60.0
    assert scrubber_height(False, True) == 60.0
