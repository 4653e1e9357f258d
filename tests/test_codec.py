import json
from datetime import date
from uuid import UUID
from zoneinfo import ZoneInfo

import pytest

from countdown.codec import DecodeFailure, EncodeFailure, decode_records, encode_records
from countdown.models import CountdownRecord, display_sort


def sample_collection():
    return display_sort(
        [
            CountdownRecord(title="Wedding", date=date(2024, 9, 14), notes="Suit fitting"),
            CountdownRecord(title="dentist", date=date(2024, 5, 2)),
            CountdownRecord(title="Exam", date=date(2024, 5, 2), notes=""),
            CountdownRecord(title="Moved out", date=date(2023, 12, 31), notes="ünïcode ✓"),
        ]
    )


class TestRoundTrip:
    def test_decode_encode_preserves_collection_and_order(self):
        collection = sample_collection()
        assert decode_records(encode_records(collection)) == collection

    def test_empty_collection(self):
        assert encode_records([]) == b"[]"
        assert decode_records(b"[]") == []

    def test_blob_shape(self):
        record = CountdownRecord(
            id=UUID("6f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11"),
            title="Launch",
            date=date(2024, 5, 20),
            notes="press kit",
        )
        payload = json.loads(encode_records([record]))
        assert payload == [
            {
                "id": "6f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11",
                "title": "Launch",
                "date": "2024-05-20",
                "notes": "press kit",
            }
        ]

    def test_decodes_str_blobs_and_alternate_date_forms(self):
        blob = json.dumps(
            [
                {"id": "6f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11", "title": "a", "date": "2024-05-20T00:00:00", "notes": ""},
                {"id": "7f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11", "title": "b", "date": "2024-05-21"},
            ]
        )
        records = decode_records(blob)
        assert [r.date for r in records] == [date(2024, 5, 20), date(2024, 5, 21)]
        assert records[1].notes == ""

    def test_decode_reduces_instants_in_given_zone(self):
        blob = json.dumps([{"title": "a", "date": "2024-05-01T23:00:00Z"}])
        assert decode_records(blob, tz=ZoneInfo("Europe/Berlin"))[0].date == date(2024, 5, 2)
        assert decode_records(blob, tz=ZoneInfo("America/New_York"))[0].date == date(2024, 5, 1)


class TestFailures:
    @pytest.mark.parametrize(
        "blob",
        [
            b"",
            b"not json",
            b"{\"title\": \"x\"}",
            b"[{\"id\": \"nope\", \"title\": \"x\", \"date\": \"2024-05-01\"}]",
            b"[{\"id\": \"6f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11\", \"date\": \"2024-05-01\"}]",
            b"[{\"id\": \"6f1c1b8e-4c1e-4b8a-9a57-3d1d2c0f9e11\", \"title\": \"x\", \"date\": \"someday\"}]",
            b"\xff\xfe\x00",
        ],
    )
    def test_corrupt_blobs_raise_decode_failure(self, blob):
        with pytest.raises(DecodeFailure):
            decode_records(blob)

    def test_encode_failure_wraps_serializer_errors(self):
        with pytest.raises(EncodeFailure):
            encode_records([object()])  # type: ignore[list-item]
