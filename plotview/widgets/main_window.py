from PySide6.QtCore import Slot
from PySide6.QtWidgets import (QApplication, QLabel, QLineEdit, QMainWindow,
                               QScrollArea, QTabWidget, QVBoxLayout, QWidget)

from plotview.models.record_list_model import RecordListModel
from plotview.widgets.virtual_list import VirtualList
from plotview.widgets.virtual_table_body import VirtualTableBody
from plotview.widgets.virtual_window import VirtualLayout

EMPLOYEE_COLUMNS = ('Name', 'Position', 'Email')
TASK_COLUMNS = ('Title', 'Priority', 'Status', 'Due')


def render_plot_row(plot: dict, index: int) -> QLabel:
    label = QLabel(
        f"{index + 1:>6}  {plot.get('section', '')} · Row {plot.get('row_number', '?')}"
        f" · Plot {plot.get('plot_number', '?')}   {plot.get('status', '')}"
        f"   {plot.get('owner_name') or plot.get('family_name') or ''}")
    label.setObjectName('plotRow')
    label.setContentsMargins(8, 0, 8, 0)
    return label


def render_employee_row(employee: dict, index: int) -> list:
    name = f"{employee.get('first_name', '')} {employee.get('last_name', '')}".strip()
    return [name, employee.get('position', ''), employee.get('email', '')]


def render_task_row(task: dict, index: int) -> list:
    return [task.get('title', ''), task.get('priority', ''), task.get('status', ''),
            task.get('due_date', '')]


def plot_matches(plot: dict, text: str) -> bool:
    text = text.lower()
    return any(text in str(plot.get(key, '')).lower()
               for key in ('section', 'status', 'owner_name', 'family_name'))


class MainWindow(QMainWindow):
    def __init__(self, app: QApplication, records: dict[str, list]):
        super().__init__()
        self.app = app
        self.setWindowTitle('Plot records')

        self.plot_model = RecordListModel('plots', records.get('plots', []))
        self.employee_model = RecordListModel('employees', records.get('employees', []))
        self.task_model = RecordListModel('tasks', records.get('tasks', []))

        tabs = QTabWidget()
        tabs.addTab(self._build_plot_tab(), 'Plots')

        self.employee_scroll_area = QScrollArea()
        self.employee_table = VirtualTableBody(
            self.employee_scroll_area, render_employee_row,
            column_count=len(EMPLOYEE_COLUMNS), headers=EMPLOYEE_COLUMNS,
            layout=VirtualLayout.from_settings('table'),
            items=self.employee_model.items())
        self.employee_model.items_changed.connect(self.employee_table.set_items)
        tabs.addTab(self.employee_scroll_area, 'Employees')

        self.task_scroll_area = QScrollArea()
        self.task_table = VirtualTableBody(
            self.task_scroll_area, render_task_row,
            column_count=len(TASK_COLUMNS), headers=TASK_COLUMNS,
            layout=VirtualLayout.from_settings('table'),
            items=self.task_model.items())
        self.task_model.items_changed.connect(self.task_table.set_items)
        tabs.addTab(self.task_scroll_area, 'Tasks')

        self.setCentralWidget(tabs)
        self.resize(960, 720)

    def _build_plot_tab(self) -> QWidget:
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(4, 4, 4, 4)

        self.plot_filter = QLineEdit()
        self.plot_filter.setPlaceholderText('Filter by section, status or owner')
        self.plot_filter.textChanged.connect(self.filter_plots)
        layout.addWidget(self.plot_filter)

        self.plot_list = VirtualList(
            render_plot_row, layout=VirtualLayout.from_settings('list'),
            items=self.plot_model.items())
        layout.addWidget(self.plot_list)
        self.plot_model.items_changed.connect(
            lambda items: self.filter_plots(self.plot_filter.text()))
        return container

    @Slot(str)
    def filter_plots(self, text: str):
        plots = self.plot_model.items()
        if text:
            plots = [plot for plot in plots if plot_matches(plot, text)]
        self.plot_list.set_items(plots)
        # The list may have shrunk below the old scroll position.
        self.plot_list.scroll_to_index(0)

    def closeEvent(self, event):
        self.plot_list.detach()
        self.employee_table.detach()
        self.task_table.detach()
        super().closeEvent(event)
