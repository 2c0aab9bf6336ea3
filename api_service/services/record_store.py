"""
Record Store
Immutable record list loaded once per process
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import ValidationError

from shared.schemas.record import Record, RecordList, RecordPayloadError, dump_records
from api_service.utils.config import get_api_config

logger = logging.getLogger(__name__)

DEFAULT_RECORDS = (
    Record(name="apples", value=5, img="/content/apple.svg"),
    Record(name="oranges", value=10, img="/content/orange.svg"),
    Record(name="pears", value=7, img="/content/pear.svg"),
)


class RecordStore:
    """Fixed record list and its serialized JSON body"""

    def __init__(self, records: Tuple[Record, ...] = DEFAULT_RECORDS):
        self._records = tuple(records)
        self._payload = dump_records(self._records)

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def payload(self) -> bytes:
        """JSON array body, identical for every request"""
        return self._payload

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def from_file(cls, path: str) -> "RecordStore":
        """
        Load records from a YAML or JSON file

        Raises:
            RecordPayloadError: If the file does not hold a valid record list
        """
        file_path = Path(path)
        try:
            with open(file_path, 'r') as f:
                if file_path.suffix in ('.yaml', '.yml'):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise RecordPayloadError(f"Cannot read records file {path}: {e}") from e

        try:
            records = RecordList.validate_python(data)
        except ValidationError as e:
            raise RecordPayloadError(f"Invalid records in {path}: {e.error_count()} error(s)") from e

        return cls(tuple(records))


_record_store: Optional[RecordStore] = None


def get_record_store() -> RecordStore:
    """Get the process-wide record store, loading it on first use"""
    global _record_store
    if _record_store is None:
        config = get_api_config()
        if config.records_file:
            _record_store = RecordStore.from_file(config.records_file)
        else:
            _record_store = RecordStore()
        logger.info(f"Loaded {len(_record_store)} records")
    return _record_store
