import json

import pytest

from plotview.models.record_list_model import (RECORD_KINDS, RecordListModel,
                                               RecordsFileError, load_records,
                                               sample_records)


def test_set_items_announces_new_list():
    model = RecordListModel("plots", [{"id": 1}])
    received = []
    model.items_changed.connect(received.append)

    model.set_items([{"id": 2}, {"id": 3}])

    assert received == [[{"id": 2}, {"id": 3}]]
    assert model.count() == 2
    assert len(model) == 2


def test_model_copies_the_initial_sequence():
    source = [{"id": 1}]
    model = RecordListModel("tasks", source)
    source.append({"id": 2})

    assert model.count() == 1


def test_load_records_fills_missing_kinds(tmp_path):
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"plots": [{"plot_number": 4, "status": "Available"}]}), encoding="utf-8")

    records = load_records(path)

    assert set(records) == set(RECORD_KINDS)
    assert records["plots"][0]["plot_number"] == 4
    assert records["employees"] == []


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"plots": {"a": 1}}'])
def test_load_records_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "records.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(RecordsFileError):
        load_records(path)


def test_sample_records_are_deterministic():
    first = sample_records("plots", 50, seed=3)
    second = sample_records("plots", 50, seed=3)

    assert first == second
    assert len(first) == 50
    assert first[30]["plot_number"] == 6


def test_sample_records_kinds():
    assert set(sample_records("employees", 1)[0]) >= {"first_name", "last_name", "position"}
    assert set(sample_records("tasks", 1)[0]) >= {"title", "priority", "status", "due_date"}
    with pytest.raises(ValueError):
        sample_records("invoices", 1)
