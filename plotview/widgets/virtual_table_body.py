"""Virtualized table body that pads the window rows with spacer rows."""

from typing import Callable, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (QAbstractItemView, QFrame, QScrollArea,
                               QTableWidget, QTableWidgetItem)

from plotview.widgets.virtual_window import (EMPTY_WINDOW, VirtualLayout,
                                             VirtualWindow)
from plotview.widgets.virtual_window_tracker import VirtualWindowTracker

LEADING = 'leading'
TRAILING = 'trailing'


class VirtualTableBody(QTableWidget):
    """Table whose rows are only the current window plus its spacer rows.

    The table is placed inside `scroll_area` at its full content height and
    never scrolls itself; the scroll area's offset drives the window. The
    leading and trailing spacers span every column and are sized so the
    table keeps the height of a fully materialized one. A spacer taller than
    the header's maximum section size is split over several rows; a spacer
    of size zero is left out.
    """

    def __init__(
        self,
        scroll_area: QScrollArea,
        render_row: Callable[[object, int], Sequence],
        column_count: int = 1,
        headers: Sequence[str] | None = None,
        layout: VirtualLayout | None = None,
        items: Sequence = (),
    ):
        super().__init__(0, max(1, column_count))
        self._render_row = render_row
        self._virtual_layout = layout or VirtualLayout.from_settings('table')
        self._items = items
        self._window = EMPTY_WINDOW
        self._spacer_rows: list[tuple[str, int, int]] = []
        self._window_row_offset = 0

        if headers:
            self.setHorizontalHeaderLabels(list(headers))
        else:
            self.horizontalHeader().hide()
        self.verticalHeader().hide()
        self.horizontalHeader().setStretchLastSection(True)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.setAutoScroll(False)

        self._tracker = VirtualWindowTracker(
            scroll_area, self._virtual_layout, self.item_count, self._apply_window, parent=self)
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self)
        self._update_body_height()
        self._tracker.attach()

    # Public API -----------------------------------------------------
    def item_count(self) -> int:
        return len(self._items)

    def items(self) -> Sequence:
        return self._items

    def set_items(self, items: Sequence):
        self._items = items
        self._update_body_height()
        self._tracker.refresh(force=True)

    def virtual_layout(self) -> VirtualLayout:
        return self._virtual_layout

    def set_layout(self, layout: VirtualLayout):
        self._virtual_layout = layout
        self._tracker.set_layout(layout)
        self._update_body_height()
        self._tracker.refresh(force=True)

    def current_window(self) -> VirtualWindow:
        return self._window

    def rendered_indices(self) -> list[int]:
        return list(self._window.indices())

    def spacer_rows(self) -> list[tuple[str, int, int]]:
        """(kind, table row, height) for each spacer row, in table order."""
        return list(self._spacer_rows)

    def table_row_for_index(self, index: int) -> int | None:
        if index not in self._window:
            return None
        return self._window_row_offset + index - self._window.start_index

    def header_height(self) -> int:
        header = self.horizontalHeader()
        if header.isHidden():
            return 0
        return header.sizeHint().height()

    def detach(self):
        self._tracker.detach()

    def showEvent(self, event):
        super().showEvent(event)
        # Header height is only final once the table is shown.
        self._update_body_height()
        self._tracker.refresh()

    # Internal -------------------------------------------------------
    def _row_height(self) -> int:
        return int(round(self._virtual_layout.row_height))

    def _update_body_height(self):
        header_height = self.header_height()
        self._tracker.origin = header_height
        total = int(round(self.item_count() * self._virtual_layout.row_height))
        self.setFixedHeight(header_height + total)

    def _spacer_item(self) -> QTableWidgetItem:
        item = QTableWidgetItem()
        item.setFlags(Qt.ItemFlag.NoItemFlags)
        return item

    def _spacer_sections(self, size: float) -> list[int]:
        """Split a spacer into near-equal sections the header will accept."""
        height = int(round(size))
        if height <= 0:
            return []
        max_section = self.verticalHeader().maximumSectionSize()
        count = -(-height // max_section)
        base, extra = divmod(height, count)
        return [base + 1] * extra + [base] * (count - extra)

    def _add_spacer(self, kind: str, row: int, sections: list[int]) -> int:
        for height in sections:
            self.setItem(row, 0, self._spacer_item())
            if self.columnCount() > 1:
                self.setSpan(row, 0, 1, self.columnCount())
            self.setRowHeight(row, height)
            self._spacer_rows.append((kind, row, height))
            row += 1
        return row

    def _cell_item(self, value) -> QTableWidgetItem:
        if isinstance(value, QTableWidgetItem):
            return value
        return QTableWidgetItem('' if value is None else str(value))

    def _apply_window(self, window: VirtualWindow):
        leading = self._spacer_sections(window.leading_spacer_size)
        trailing = self._spacer_sections(window.trailing_spacer_size)

        self.clearSpans()
        self.clearContents()
        self._spacer_rows = []
        self.setRowCount(len(leading) + window.row_count + len(trailing))

        row = self._add_spacer(LEADING, 0, leading)
        self._window_row_offset = row

        row_height = self._row_height()
        column_count = self.columnCount()
        for index in window.indices():
            cells = self._render_row(self._items[index], index)
            for column, value in enumerate(list(cells)[:column_count]):
                self.setItem(row, column, self._cell_item(value))
            self.setRowHeight(row, row_height)
            row += 1

        self._add_spacer(TRAILING, row, trailing)
        self._window = window
