import json

from plotview import run_gui as run_gui_module
from plotview.run_gui import parse_args, resolve_records


class FakeSettings:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def value(self, key, defaultValue=None, type=None):
        return self.values.get(key, defaultValue)

    def setValue(self, key, value):
        self.values[key] = value


def test_resolve_records_prefers_given_file(tmp_path, monkeypatch):
    fake = FakeSettings()
    monkeypatch.setattr(run_gui_module, "settings", fake)
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"tasks": [{"title": "Mow section 3"}]}), encoding="utf-8")

    records = resolve_records(parse_args([str(path)]))

    assert records["tasks"] == [{"title": "Mow section 3"}]
    assert fake.values["records_file_path"] == str(path)


def test_resolve_records_falls_back_to_samples(monkeypatch):
    monkeypatch.setattr(run_gui_module, "settings", FakeSettings())

    records = resolve_records(parse_args(["--sample-count", "12"]))

    assert {kind: len(items) for kind, items in records.items()} == {
        "plots": 12, "employees": 12, "tasks": 12}


def test_sample_count_defaults_to_setting(monkeypatch):
    monkeypatch.setattr(run_gui_module, "settings", FakeSettings())
    monkeypatch.setattr(run_gui_module, "get_int_setting", lambda key: 5)

    records = resolve_records(parse_args([]))

    assert len(records["plots"]) == 5
