"""Virtualized list that overlays the visible rows on a full-height canvas."""

from typing import Callable, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QScrollArea, QVBoxLayout, QWidget

from plotview.widgets.virtual_window import (EMPTY_WINDOW, VirtualLayout,
                                             VirtualWindow, offset_for_index)
from plotview.widgets.virtual_window_tracker import VirtualWindowTracker


class VirtualList(QScrollArea):
    """
    Scroll area that only builds row widgets for the current window.

    The canvas is always `item_count * row_height` tall so the scroll bar
    keeps its real geometry. Rendered rows sit in a block moved down by the
    leading spacer size. Rows outside the window do not exist as widgets.
    """

    def __init__(
        self,
        render_row: Callable[[object, int], QWidget],
        layout: VirtualLayout | None = None,
        items: Sequence = (),
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._render_row = render_row
        self._virtual_layout = layout or VirtualLayout.from_settings('list')
        self._items = items
        self._rows: dict[int, QWidget] = {}
        self._window = EMPTY_WINDOW
        self._rebuild_pending = True

        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setWidgetResizable(True)

        self._canvas = QWidget()
        self._canvas.setObjectName('virtualListCanvas')
        self._block = QWidget(self._canvas)
        self._block.setObjectName('virtualListBlock')
        self._block_layout = QVBoxLayout(self._block)
        self._block_layout.setContentsMargins(0, 0, 0, 0)
        self._block_layout.setSpacing(0)
        self.setWidget(self._canvas)

        self._tracker = VirtualWindowTracker(
            self, self._virtual_layout, self.item_count, self._apply_window, parent=self)
        self._update_canvas_height()
        self._tracker.attach()

    # Public API -----------------------------------------------------
    def item_count(self) -> int:
        return len(self._items)

    def items(self) -> Sequence:
        return self._items

    def set_items(self, items: Sequence):
        """Replace the item list and re-render every row in the window."""
        self._items = items
        self._rebuild_pending = True
        self._update_canvas_height()
        self._tracker.refresh(force=True)

    def virtual_layout(self) -> VirtualLayout:
        return self._virtual_layout

    def set_layout(self, layout: VirtualLayout):
        self._virtual_layout = layout
        self._tracker.set_layout(layout)
        self._rebuild_pending = True
        self._update_canvas_height()
        self._tracker.refresh(force=True)

    def current_window(self) -> VirtualWindow:
        return self._window

    def rendered_indices(self) -> list[int]:
        return sorted(self._rows)

    def row_widget(self, index: int) -> QWidget | None:
        return self._rows.get(index)

    def canvas_height(self) -> int:
        return self._canvas.minimumHeight()

    def scroll_to_index(self, index: int):
        self.verticalScrollBar().setValue(
            int(offset_for_index(index, self._virtual_layout.row_height)))

    def detach(self):
        """Stop following scroll/resize signals."""
        self._tracker.detach()

    # Internal -------------------------------------------------------
    def _row_height(self) -> int:
        return int(round(self._virtual_layout.row_height))

    def _update_canvas_height(self):
        self._canvas.setFixedHeight(int(round(self.item_count() * self._virtual_layout.row_height)))

    def _drop_row(self, index: int):
        row = self._rows.pop(index)
        self._block_layout.removeWidget(row)
        row.setParent(None)
        row.deleteLater()

    def _apply_window(self, window: VirtualWindow):
        if self._rebuild_pending:
            for index in list(self._rows):
                self._drop_row(index)
            self._rebuild_pending = False
        else:
            for index in [i for i in self._rows if i not in window]:
                self._drop_row(index)

        row_height = self._row_height()
        for index in window.indices():
            if index in self._rows:
                continue
            row = self._render_row(self._items[index], index)
            row.setParent(self._block)
            row.setFixedHeight(row_height)
            self._rows[index] = row

        # Re-add in index order; the layout owns only the stacking.
        for row in self._rows.values():
            self._block_layout.removeWidget(row)
        for index in sorted(self._rows):
            self._block_layout.addWidget(self._rows[index])
            self._rows[index].show()

        self._window = window
        self._place_block()

    def _place_block(self):
        self._block.setGeometry(
            0,
            int(round(self._window.leading_spacer_size)),
            self.viewport().width(),
            self._window.row_count * self._row_height(),
        )

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._place_block()
