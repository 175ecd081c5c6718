import json
from pathlib import Path

import pytest

from utils.fields import extract_context
from utils.records import RecordStore


def test_read_csv_records(tmp_path: Path):
    path = tmp_path / "outreach.csv"
    path.write_text(
        "id,Name,Organization,Email,Google Drive Folder URL,Title\n"
        "rec1,Jane Doe,Acme Foods,jane@x.com,https://drive/a,\n"
        "rec2,John Roe,,,https://drive/b,CEO\n",
        encoding="utf-8",
    )

    store = RecordStore.from_file(str(path))

    assert len(store) == 2
    jane = store.get("rec1")
    assert jane.name == "Jane Doe"
    assert jane.get_field("Title") is None
    assert extract_context(jane).company_name == "Acme Foods"
    assert store.get("rec2").summary()["organization"] == "No Organization"


def test_read_json_records_with_linked_entities(tmp_path: Path):
    path = tmp_path / "outreach.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "recA",
                    "fields": {
                        "Name": "Jane Doe",
                        "Organization": [{"id": "org1", "name": "Acme Foods"}],
                        "Google Drive Folder URL": ["https://drive/a"],
                    },
                }
            ]
        ),
        encoding="utf-8",
    )

    store = RecordStore.from_file(str(path))
    record = store.get("recA")

    assert record.summary() == {"id": "recA", "name": "Jane Doe", "organization": "Acme Foods"}
    assert extract_context(record).drive_folder_url == "https://drive/a"


def test_unknown_record_id():
    store = RecordStore()

    assert store.get("missing") is None
    assert store.get(None) is None
    assert "missing" not in store


def test_json_entry_that_is_not_an_object(tmp_path: Path):
    path = tmp_path / "outreach.json"
    path.write_text(json.dumps([{"id": "recA", "fields": {}}, "recB"]), encoding="utf-8")

    with pytest.raises(ValueError, match="JSON record 2 must be an object"):
        RecordStore.from_file(str(path))
