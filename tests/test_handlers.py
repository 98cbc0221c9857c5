from __future__ import annotations

import io
import json

import pytest

from json_keyvalue.handlers import (
    build_label_table,
    export_panels_handler,
    extract_field_keys,
    labels_from_table,
    load_json_upload,
    parse_list_option,
    preview_panels_handler,
)

DATA = [
    {"id": 1, "user": {"first_name": "Ada"}, "password": "x"},
    {"id": 2, "user": {"first_name": "Grace", "age": 40}},
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("FLATTEN_SINGLE_ARRAYS", "MAX_ARRAY_SIZE", "SKIP_ARRAY_INDICES", "ARRAY_INDEX_FORMAT"):
        monkeypatch.delenv(f"JSON_KEYVALUE__{name}", raising=False)


def test_parse_list_option():
    assert parse_list_option(" a, b,,c ") == ["a", "b", "c"]
    assert parse_list_option(None) == []


def test_extract_field_keys_first_seen_order():
    assert extract_field_keys(DATA, ".") == ["id", "user.first_name", "password", "user.age"]


def test_label_table_round_trip():
    table = build_label_table(["user.first_name"], ".")
    assert table == [["user.first_name", "User.First Name"]]
    assert labels_from_table(table) == {"user.first_name": "User.First Name"}


def test_load_json_upload_from_file_object():
    data, table, status = load_json_upload(io.StringIO(json.dumps(DATA)), ".")
    assert data == DATA
    assert [row[0] for row in table] == ["id", "user.first_name", "password", "user.age"]
    assert "2 item(s)" in status


def test_load_json_upload_reports_bad_json():
    data, table, status = load_json_upload(io.StringIO("{oops"), ".")
    assert data is None
    assert table == []
    assert status.startswith("Error parsing JSON")


def test_preview_applies_options():
    rows, status = preview_panels_handler(
        DATA, "User", "password", "_error", "", ".", "", [["id", "ID"]],
    )
    assert status == "2 panel(s)."
    assert rows[0] == {"label": "User #1", "values": {"ID": 1, "User.First Name": "Ada"}}
    assert rows[1]["values"] == {"ID": 2, "User.First Name": "Grace", "User.Age": 40}


def test_preview_without_data():
    assert preview_panels_handler(None, "User", "", "", "", ".", "", None) == (None, "No data loaded.")


def test_preview_reports_max_size_placeholder():
    rows, _ = preview_panels_handler(DATA, "User", "", "", "", ".", "", None, True, False, 1)
    assert rows == [{"label": "User", "message": "Array too large to display (2 items)"}]


def test_export_writes_json(tmp_path, monkeypatch):
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))
    path, status = export_panels_handler(
        DATA, "User", "password", "", "", ".", "Person", None, True, True, 0, "people",
    )
    assert path.endswith("people.json")
    with open(path, encoding="utf-8") as f:
        rows = json.load(f)
    assert [r["label"] for r in rows] == ["Person", "Person"]
    assert "Export successful" in status
