from __future__ import annotations

from datetime import tzinfo
from typing import List, Optional, Sequence, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .models import CountdownRecord

_RECORDS = TypeAdapter(List[CountdownRecord])


class CountdownError(Exception):
    """Base class for countdown core errors."""


class DecodeFailure(CountdownError):
    """The persisted blob is present but does not match the record schema."""


class EncodeFailure(CountdownError):
    """The in-memory collection could not be serialized."""


# PUBLIC_INTERFACE
def encode_records(records: Sequence[CountdownRecord]) -> bytes:
    """
    Serialize records to the shared JSON blob format.

    The blob is a JSON array of {"id", "title", "date", "notes"} objects with
    'id' as a UUID string and 'date' as an ISO8601 calendar day. Order is
    preserved as given; the repository always passes canonical order.
    """
    try:
        return _RECORDS.dump_json(list(records))
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise EncodeFailure(f"Could not encode {len(records)} countdowns: {e}") from e


# PUBLIC_INTERFACE
def decode_records(blob: Union[bytes, str], tz: Optional[tzinfo] = None) -> List[CountdownRecord]:
    """
    Parse a shared JSON blob into records, preserving stored order.

    Datetime and epoch dates are reduced to calendar days in tz, or in the
    system zone when tz is None.

    Raises DecodeFailure for malformed JSON or schema mismatches.
    """
    try:
        return _RECORDS.validate_json(blob, context={"tz": tz})
    except (ValidationError, ValueError, TypeError) as e:
        raise DecodeFailure(f"Could not decode countdowns: {e}") from e

