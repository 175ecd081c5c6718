"""Local record source standing in for the host platform's Outreach table."""

import json
import logging
from typing import Any, Dict, List, Optional
import pandas as pd
from .fields import CONTACT_NAME_FIELD, ORGANIZATION_FIELD, normalize_field

# Configure logger
logger = logging.getLogger(__name__)


class Record:
    """Read-only row with named fields."""

    def __init__(self, record_id: str, fields: Dict[str, Any]):
        self.id = record_id
        self._fields = dict(fields)

    @property
    def name(self) -> str:
        """Primary field display value, falling back to the record id."""
        return normalize_field(self.get_field(CONTACT_NAME_FIELD)) or self.id

    def get_field(self, name: str) -> Any:
        return self._fields.get(name)

    def summary(self) -> Dict[str, str]:
        organization = normalize_field(self.get_field(ORGANIZATION_FIELD))
        return {
            "id": self.id,
            "name": self.name,
            "organization": organization or "No Organization",
        }


class RecordStore:
    """Records of one table, loaded from a CSV or JSON export."""

    def __init__(self, records: Optional[List[Record]] = None, table_name: str = "Outreach"):
        self.table_name = table_name
        self._records: Dict[str, Record] = {}
        for record in records or []:
            self._records[record.id] = record

    @classmethod
    def from_file(cls, path: str, table_name: str = "Outreach") -> "RecordStore":
        """Load records from a file, choosing the reader by extension."""
        try:
            if path.endswith(".json"):
                records = cls._read_json_file(path)
            else:
                records = cls._read_csv_file(path)

            logger.info(f"Loaded {len(records)} records for table '{table_name}' from {path}")
            return cls(records, table_name=table_name)

        except Exception as e:
            logger.error(f"Error reading records from {path}: {e}")
            raise

    @staticmethod
    def _read_csv_file(path: str) -> List[Record]:
        """Read records from CSV; an ``id`` column is used when present."""
        df = pd.read_csv(path, encoding="utf-8", dtype=str)

        records = []
        for index, row in df.iterrows():
            fields = {
                column: (None if pd.isna(value) else value)
                for column, value in row.items()
            }
            record_id = fields.pop("id", None) or f"row{index + 1}"
            records.append(Record(str(record_id), fields))

        return records

    @staticmethod
    def _read_json_file(path: str) -> List[Record]:
        """Read records from a JSON list of ``{"id": ..., "fields": {...}}`` objects."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError("JSON record file must contain a list of records")

        records = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise ValueError(f"JSON record {index + 1} must be an object")
            fields = item.get("fields", {k: v for k, v in item.items() if k != "id"})
            record_id = item.get("id") or f"row{index + 1}"
            records.append(Record(str(record_id), fields))

        return records

    def get(self, record_id: Optional[str]) -> Optional[Record]:
        if record_id is None:
            return None
        return self._records.get(record_id)

    def all(self) -> List[Record]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records

