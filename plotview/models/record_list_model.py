"""
Ordered record lists for the virtualized views.

Records are plain dicts. The model never inspects them; views decide how a
record becomes a row.
"""

import json
import random
from pathlib import Path
from typing import Sequence

from PySide6.QtCore import QObject, Signal

RECORD_KINDS = ('plots', 'employees', 'tasks')

PLOT_STATUSES = ('Available', 'Reserved', 'Occupied', 'Pending Reservation', 'Unavailable')
TASK_STATUSES = ('To Do', 'In Progress', 'Completed')
TASK_PRIORITIES = ('Low', 'Medium', 'High')
EMPLOYEE_POSITIONS = ('Groundskeeper', 'Sexton', 'Office Manager', 'Caretaker', 'Administrator')
FIRST_NAMES = ('Ada', 'Bram', 'Clara', 'Dmitri', 'Elena', 'Felix', 'Grace', 'Hugo', 'Ines', 'Jonah')
LAST_NAMES = ('Abbott', 'Brennan', 'Castillo', 'Dunbar', 'Ellison', 'Foster', 'Garza', 'Holt')


class RecordsFileError(ValueError):
    """Raised when a records file cannot be read as a records document."""


class RecordListModel(QObject):
    """Owns one ordered record list and announces when it is replaced."""

    items_changed = Signal(list)

    def __init__(self, kind: str, items: Sequence | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self.kind = kind
        self._items = list(items or [])

    def items(self) -> list:
        return self._items

    def count(self) -> int:
        return len(self._items)

    def __len__(self):
        return len(self._items)

    def set_items(self, items: Sequence):
        self._items = list(items)
        self.items_changed.emit(self._items)


def load_records(path: Path | str) -> dict[str, list]:
    """Load `{"plots": [...], "employees": [...], "tasks": [...]}` from JSON.

    Missing kinds come back as empty lists.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordsFileError(f"{path}: not valid JSON ({e})") from e
    if not isinstance(data, dict):
        raise RecordsFileError(f"{path}: expected an object with {', '.join(RECORD_KINDS)}")

    records = {}
    for kind in RECORD_KINDS:
        value = data.get(kind, [])
        if not isinstance(value, list):
            raise RecordsFileError(f"{path}: '{kind}' must be a list")
        records[kind] = value
    return records


def _person_name(rng: random.Random) -> tuple[str, str]:
    return rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)


def sample_records(kind: str, count: int, seed: int = 0) -> list[dict]:
    """Deterministic placeholder records for trying out the views."""
    if kind not in RECORD_KINDS:
        raise ValueError(f"Unknown record kind: {kind!r}")
    rng = random.Random(seed)
    records = []
    for i in range(count):
        if kind == 'plots':
            first_name, last_name = _person_name(rng)
            records.append({
                'id': f'plot-{i}',
                'section': f'Section {i // 500 + 1}',
                'row_number': (i // 25) % 20 + 1,
                'plot_number': i % 25 + 1,
                'status': rng.choice(PLOT_STATUSES),
                'family_name': last_name,
                'owner_name': f'{first_name} {last_name}',
            })
        elif kind == 'employees':
            first_name, last_name = _person_name(rng)
            records.append({
                'id': f'employee-{i}',
                'first_name': first_name,
                'last_name': last_name,
                'position': rng.choice(EMPLOYEE_POSITIONS),
                'email': f'{first_name}.{last_name}{i}@example.org'.lower(),
            })
        else:
            records.append({
                'id': f'task-{i}',
                'title': f'Inspect plot {i % 25 + 1}, row {(i // 25) % 20 + 1}',
                'priority': rng.choice(TASK_PRIORITIES),
                'status': rng.choice(TASK_STATUSES),
                'due_date': f'2026-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}',
            })
    return records
