"""
Record data schemas

Pydantic models for the record list exchanged between the API service,
the render service and the browser script.
"""

from typing import List, Sequence, Union

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError


class RecordPayloadError(ValueError):
    """Raised when a payload cannot be read as a record list"""


class Record(BaseModel):
    """A single showcase record"""

    model_config = ConfigDict(frozen=True, strict=True)

    name: str
    value: int
    img: str


RecordList = TypeAdapter(List[Record])


def parse_records(payload: Union[bytes, str]) -> List[Record]:
    """
    Validate a JSON document as a record list

    Args:
        payload: Raw JSON body

    Returns:
        Records in document order

    Raises:
        RecordPayloadError: If the body is not JSON or not a list of records
    """
    try:
        return RecordList.validate_json(payload)
    except ValidationError as e:
        raise RecordPayloadError(f"Invalid record payload: {e.error_count()} error(s)") from e


def dump_records(records: Sequence[Record]) -> bytes:
    """Serialize records to a JSON array, keeping their order"""
    return RecordList.dump_json(list(records))
