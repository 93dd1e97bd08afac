import gc

from PySide6.QtWidgets import QLabel

from plotview.widgets.virtual_list import VirtualList
from plotview.widgets.virtual_window import VirtualLayout, compute_window

LAYOUT = VirtualLayout(row_height=50, overscan=2)


def make_list(qapp, count=1000, height=400):
    calls = []

    def render_row(item, index):
        calls.append(index)
        return QLabel(f"plot {item}")

    view = VirtualList(render_row, layout=LAYOUT, items=list(range(count)))
    view.resize(300, height)
    view.show()
    qapp.processEvents()
    return view, calls


def expected_window(view):
    return compute_window(
        view.verticalScrollBar().value(), view.viewport().height(),
        view.item_count(), LAYOUT.row_height, LAYOUT.overscan)


def test_renders_only_window_rows(qapp):
    view, calls = make_list(qapp)

    window = view.current_window()
    assert window == expected_window(view)
    assert window.start_index == 0
    assert view.rendered_indices() == list(window.indices())
    assert len(view.rendered_indices()) < 20
    assert view.row_widget(window.end_index) is None
    assert view.canvas_height() == 1000 * 50


def test_scroll_moves_block_to_leading_spacer(qapp):
    view, calls = make_list(qapp)
    assert view.verticalScrollBar().maximum() >= 2500

    view.verticalScrollBar().setValue(2500)

    window = view.current_window()
    assert window.start_index == 48
    assert window == expected_window(view)
    assert view.rendered_indices() == list(window.indices())
    block = view.row_widget(48).parentWidget()
    assert block.y() == 2400
    assert block.height() == window.row_count * 50
    assert view.row_widget(48).text() == "plot 48"


def test_rows_still_in_window_are_reused(qapp):
    view, calls = make_list(qapp)
    view.verticalScrollBar().setValue(2500)
    kept = view.row_widget(55)
    calls.clear()

    view.verticalScrollBar().setValue(2550)

    assert view.row_widget(55) is kept
    assert calls == [view.current_window().end_index - 1]
    assert view.row_widget(48) is None


def test_small_scroll_inside_a_row_renders_nothing(qapp):
    view, calls = make_list(qapp)
    view.verticalScrollBar().setValue(2500)
    calls.clear()

    view.verticalScrollBar().setValue(2520)

    assert calls == []


def test_set_items_rerenders_and_handles_shrink(qapp):
    view, calls = make_list(qapp)
    view.verticalScrollBar().setValue(2500)
    calls.clear()

    view.set_items([f"new {i}" for i in range(10)])
    qapp.processEvents()

    assert view.canvas_height() == 500
    window = view.current_window()
    assert window == expected_window(view)
    assert window.end_index == 10
    assert view.rendered_indices() == list(window.indices())
    assert set(calls) >= set(window.indices())
    assert view.row_widget(window.start_index).text().startswith("plot new")


def test_empty_items_render_nothing(qapp):
    view, calls = make_list(qapp, count=0)

    assert view.rendered_indices() == []
    assert view.canvas_height() == 0
    assert view.current_window().row_count == 0


def test_set_layout_rebuilds_rows(qapp):
    view, calls = make_list(qapp)

    view.set_layout(VirtualLayout(row_height=100, overscan=0))

    assert view.canvas_height() == 100000
    assert view.row_widget(0).height() == 100


def test_scroll_to_index(qapp):
    view, calls = make_list(qapp)

    view.scroll_to_index(200)

    assert view.verticalScrollBar().value() == 10000
    assert view.current_window().start_index == 198


def test_detached_list_ignores_scrolling(qapp):
    view, calls = make_list(qapp)
    view.detach()
    calls.clear()

    view.verticalScrollBar().setValue(2500)

    assert calls == []
    assert view.current_window().start_index == 0


def test_undetached_lists_are_torn_down_cleanly(qapp):
    for _ in range(20):
        view, calls = make_list(qapp, count=200)
        view.verticalScrollBar().setValue(1000)
        assert view._tracker.parent() is view
        del view, calls
        gc.collect()
    qapp.processEvents()
