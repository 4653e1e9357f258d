from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from countdown.datemath import (
    DETAIL,
    LABEL,
    RELATIVE,
    Status,
    StatusKind,
    as_local_instant,
    day_offset,
    format_status,
    local_day,
    start_of_day,
    status_for,
)

NEW_YORK = ZoneInfo("America/New_York")
SAO_PAULO = ZoneInfo("America/Sao_Paulo")


class TestDayOffset:
    def test_invariant_to_time_of_day(self):
        target_times = [datetime(2024, 5, 10, h, m) for h, m in [(0, 0), (8, 15), (12, 0), (23, 59)]]
        reference_times = [datetime(2024, 5, 1, h, m) for h, m in [(0, 0), (6, 30), (18, 45), (23, 59)]]
        offsets = {day_offset(ref, tgt) for ref in reference_times for tgt in target_times}
        assert offsets == {9}

    def test_same_day_is_zero(self):
        assert day_offset(datetime(2024, 5, 1, 0, 1), date(2024, 5, 1)) == 0
        assert day_offset(datetime(2024, 5, 1, 23, 59), date(2024, 5, 1)) == 0

    def test_past_is_negative(self):
        assert day_offset(date(2024, 5, 10), date(2024, 5, 1)) == -9

    def test_leap_day_counted(self):
        assert day_offset(date(2024, 2, 28), date(2024, 3, 1)) == 2
        assert day_offset(date(2023, 2, 28), date(2023, 3, 1)) == 1

    def test_across_dst_spring_forward(self):
        # 2024-03-10 is only 23 hours long in New York
        reference = datetime(2024, 3, 9, 23, 30, tzinfo=NEW_YORK)
        target = datetime(2024, 3, 11, 0, 15, tzinfo=NEW_YORK)
        assert day_offset(reference, target, NEW_YORK) == 2

    def test_across_dst_fall_back(self):
        # 2024-11-03 is 25 hours long in New York
        reference = datetime(2024, 11, 3, 0, 0, tzinfo=NEW_YORK)
        target = datetime(2024, 11, 3, 23, 59, tzinfo=NEW_YORK)
        assert day_offset(reference, target, NEW_YORK) == 0

    def test_aware_instant_uses_local_calendar(self):
        # 03:00 UTC on the 10th is still the evening of the 9th in New York
        reference = datetime(2024, 6, 10, 3, 0, tzinfo=timezone.utc)
        assert local_day(reference, NEW_YORK) == date(2024, 6, 9)
        assert day_offset(reference, date(2024, 6, 10), NEW_YORK) == 1


class TestStartOfDay:
    def test_plain_midnight(self):
        start = start_of_day(date(2024, 3, 10), NEW_YORK)
        assert start == datetime(2024, 3, 10, 0, 0, tzinfo=NEW_YORK)
        assert start.utcoffset() is not None

    def test_skipped_midnight_resolves_to_first_existing_instant(self):
        # Brazil moved clocks from 00:00 to 01:00 on 2018-11-04
        start = start_of_day(date(2018, 11, 4), SAO_PAULO)
        assert local_day(start, SAO_PAULO) == date(2018, 11, 4)
        assert (start.hour, start.minute) == (1, 0)

    def test_system_zone_result_is_aware(self):
        start = start_of_day(date(2024, 5, 1))
        assert start.tzinfo is not None
        assert local_day(start) == date(2024, 5, 1)

    def test_as_local_instant_attaches_zone(self):
        value = as_local_instant(datetime(2024, 5, 1, 10, 0), NEW_YORK)
        assert value.tzinfo is NEW_YORK
        assert value.hour == 10


class TestStatus:
    def test_status_table(self):
        assert status_for(-5) == Status(StatusKind.DAYS_AGO, 5)
        assert status_for(-2) == Status(StatusKind.DAYS_AGO, 2)
        assert status_for(-1) == Status(StatusKind.YESTERDAY, 1)
        assert status_for(0) == Status(StatusKind.TODAY, 0)
        assert status_for(1) == Status(StatusKind.TOMORROW, 1)
        assert status_for(2) == Status(StatusKind.IN_DAYS, 2)

    def test_relative_text(self):
        assert format_status(status_for(-3)) == "3 days ago"
        assert format_status(status_for(-1)) == "yesterday"
        assert format_status(status_for(0)) == "today"
        assert format_status(status_for(1)) == "tomorrow"
        assert format_status(status_for(12), RELATIVE) == "in 12 days"

    def test_label_and_detail_catalogs(self):
        assert format_status(status_for(4), LABEL) == "4 days"
        assert format_status(status_for(0), LABEL) == "Today"
        assert format_status(status_for(4), DETAIL) == "4 days left"
        assert format_status(status_for(-1), DETAIL) == "Completed 1 day ago"
        assert format_status(status_for(-7), DETAIL) == "Completed 7 days ago"

    def test_singular_noun_only_for_magnitude_one(self):
        catalog = dict(RELATIVE)
        catalog[StatusKind.YESTERDAY] = "{n} {days} ago"
        catalog[StatusKind.TOMORROW] = "in {n} {days}"
        assert format_status(status_for(-1), catalog) == "1 day ago"
        assert format_status(status_for(1), catalog) == "in 1 day"
        assert format_status(status_for(2), catalog) == "in 2 days"

    def test_custom_catalog_localizes(self):
        german = {
            StatusKind.DAYS_AGO: "vor {n} Tagen",
            StatusKind.YESTERDAY: "gestern",
            StatusKind.TODAY: "heute",
            StatusKind.TOMORROW: "morgen",
            StatusKind.IN_DAYS: "in {n} Tagen",
        }
        assert format_status(status_for(3), german) == "in 3 Tagen"
        assert format_status(status_for(0), german) == "heute"
