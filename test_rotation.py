# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the rotation resolver and the duty queries — pure functions only.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from hausmeister.core.exceptions import InvalidRecurrence, MalformedRecord
from hausmeister.models.domain import RawRecurrenceRecord, ResolvedOccurrence
from hausmeister.services.dates import add_weeks, between, ceil_div, noon, WEEK
from hausmeister.services.duty_query import (
    current_holder,
    is_self_current,
    status,
    status_sentence,
    weeks_until_self,
)
from hausmeister.services.rotation import (
    normalize_window,
    resolve,
    resolve_all,
    rounds_to_add,
)

UTC = timezone.utc
BERLIN = ZoneInfo("Europe/Berlin")


def record(start, end, interval=6, attendee="Ignacio Alejandro García Nunez", uid="uid-1"):
    return RawRecurrenceRecord(
        uid=uid,
        start_date=start,
        end_date=end,
        interval_weeks=interval,
        attendee_name=attendee,
    )


def occ(attendee, start, end=None):
    return ResolvedOccurrence(
        attendee=attendee,
        start_date=start,
        end_date=end or start + timedelta(days=6),
    )


JAN_15 = record(datetime(2024, 1, 15, tzinfo=UTC), datetime(2024, 1, 22, tzinfo=UTC))


# ============================================
# Date helpers
# ============================================
class TestDates:
    def test_noon_keeps_day(self):
        value = datetime(2024, 1, 15, 23, 59, 59, 999, tzinfo=UTC)
        assert noon(value) == datetime(2024, 1, 15, 12, tzinfo=UTC)

    def test_add_weeks_keeps_wall_clock_across_dst(self):
        value = datetime(2024, 3, 25, 12, tzinfo=BERLIN)
        shifted = add_weeks(value, 1)
        assert shifted.hour == 12
        assert shifted.day == 1 and shifted.month == 4

    def test_between_compares_instants(self):
        a = datetime(2024, 1, 1, 12, tzinfo=UTC)
        b = datetime(2024, 1, 1, 13, tzinfo=BERLIN)
        assert between(a, b) == timedelta(0)

    def test_ceil_div_exact_multiple(self):
        assert ceil_div(timedelta(days=14), WEEK) == 2

    def test_ceil_div_rounds_up(self):
        assert ceil_div(timedelta(days=14, seconds=1), WEEK) == 3

    def test_ceil_div_negative(self):
        assert ceil_div(timedelta(days=-3), WEEK) == 0
        assert ceil_div(timedelta(days=-10), WEEK) == -1


# ============================================
# Rotation resolver
# ============================================
class TestNormalization:
    def test_start_moves_forward_end_moves_back(self):
        start, end = normalize_window(
            datetime(2024, 1, 15, tzinfo=UTC), datetime(2024, 1, 22, tzinfo=UTC)
        )
        assert start == datetime(2024, 1, 15, 12, tzinfo=UTC)
        # 3 hours before midnight is the previous day
        assert end == datetime(2024, 1, 21, 12, tzinfo=UTC)

    def test_late_start_snaps_to_next_day(self):
        start, _ = normalize_window(
            datetime(2024, 1, 14, 22, tzinfo=UTC), datetime(2024, 1, 22, tzinfo=UTC)
        )
        assert start == datetime(2024, 1, 15, 12, tzinfo=UTC)


class TestResolve:
    def test_documented_example(self):
        now = datetime(2024, 3, 15, 12, tzinfo=UTC)
        _, normalized_end = normalize_window(JAN_15.start_date, JAN_15.end_date)
        assert rounds_to_add(normalized_end, 6, now) == 2

        resolved = resolve(JAN_15, now)
        assert resolved.start_date == datetime(2024, 4, 8, 12, tzinfo=UTC)
        assert resolved.end_date == datetime(2024, 4, 14, 12, tzinfo=UTC)

    def test_documented_example_in_local_time(self):
        rec = record(datetime(2024, 1, 15, tzinfo=BERLIN), datetime(2024, 1, 22, tzinfo=BERLIN))
        resolved = resolve(rec, datetime(2024, 3, 15, 12, tzinfo=BERLIN))
        # Lands after the switch to summer time, still at local noon
        assert resolved.start_date == datetime(2024, 4, 8, 12, tzinfo=BERLIN)
        assert resolved.end_date == datetime(2024, 4, 14, 12, tzinfo=BERLIN)
        assert resolved.start_date.hour == 12

    def test_attendee_passed_through(self):
        resolved = resolve(JAN_15, datetime(2024, 3, 15, 12, tzinfo=UTC))
        assert resolved.attendee == "Ignacio Alejandro García Nunez"

    def test_quotes_stripped(self):
        rec = record(
            datetime(2024, 2, 12, tzinfo=UTC),
            datetime(2024, 2, 19, tzinfo=UTC),
            attendee='"Magnus Kühne"',
        )
        resolved = resolve(rec, datetime(2024, 3, 15, 12, tzinfo=UTC))
        assert resolved.attendee == "Magnus Kühne"
        assert '"' not in resolved.attendee

    @pytest.mark.parametrize("days", [0, 1, 20, 41, 42, 43, 100, 365, 1000])
    def test_rounds_never_negative_and_whole_cycles(self, days):
        now = datetime(2024, 1, 22, 12, tzinfo=UTC) + timedelta(days=days)
        base_start, base_end = normalize_window(JAN_15.start_date, JAN_15.end_date)
        resolved = resolve(JAN_15, now)

        shift = resolved.start_date - base_start
        assert shift >= timedelta(0)
        assert shift % timedelta(weeks=6) == timedelta(0)
        assert resolved.end_date - base_end == shift

    def test_far_future_lands_within_one_cycle(self):
        now = datetime(2026, 10, 17, 12, tzinfo=UTC)
        resolved = resolve(JAN_15, now)
        assert timedelta(0) <= resolved.end_date - now <= timedelta(weeks=6)

    def test_idempotent_inside_resolved_window(self):
        first = resolve(JAN_15, datetime(2024, 3, 15, 12, tzinfo=UTC))
        for probe in (
            first.start_date,
            first.start_date + timedelta(days=2, hours=3),
            first.end_date,
        ):
            again = resolve(JAN_15, probe)
            assert again.start_date == first.start_date
            assert again.end_date == first.end_date

    def test_running_first_occurrence_not_moved(self):
        rec = record(datetime(2024, 3, 11, tzinfo=UTC), datetime(2024, 3, 18, tzinfo=UTC))
        resolved = resolve(rec, datetime(2024, 3, 15, 12, tzinfo=UTC))
        assert resolved.start_date == datetime(2024, 3, 11, 12, tzinfo=UTC)
        assert resolved.end_date == datetime(2024, 3, 17, 12, tzinfo=UTC)

    def test_future_first_occurrence_not_moved(self):
        rec = record(datetime(2024, 5, 6, tzinfo=UTC), datetime(2024, 5, 13, tzinfo=UTC))
        resolved = resolve(rec, datetime(2024, 3, 15, 12, tzinfo=UTC))
        assert resolved.start_date == datetime(2024, 5, 6, 12, tzinfo=UTC)

    @pytest.mark.parametrize("interval", [0, -1, -6])
    def test_non_positive_interval_rejected(self, interval):
        rec = record(
            datetime(2024, 1, 15, tzinfo=UTC), datetime(2024, 1, 22, tzinfo=UTC),
            interval=interval, uid="bad-interval",
        )
        with pytest.raises(InvalidRecurrence) as exc_info:
            resolve(rec, datetime(2024, 3, 15, tzinfo=UTC))
        assert exc_info.value.uid == "bad-interval"

    def test_rounds_to_add_rejects_zero_interval(self):
        with pytest.raises(InvalidRecurrence):
            rounds_to_add(datetime(2024, 1, 21, 12, tzinfo=UTC), 0, datetime(2024, 3, 15, tzinfo=UTC))

    @pytest.mark.parametrize(
        "missing", ["start_date", "end_date", "interval_weeks", "attendee_name"]
    )
    def test_missing_field_rejected(self, missing):
        fields = JAN_15.model_dump()
        fields[missing] = None
        rec = RawRecurrenceRecord(**fields)
        with pytest.raises(MalformedRecord) as exc_info:
            resolve(rec, datetime(2024, 3, 15, tzinfo=UTC))
        assert missing in str(exc_info.value)
        assert exc_info.value.uid == "uid-1"

    def test_malformed_record_is_value_error(self):
        with pytest.raises(ValueError):
            resolve(RawRecurrenceRecord(uid="empty"), datetime(2024, 3, 15, tzinfo=UTC))


class TestResolveAll:
    def _records(self):
        return [
            JAN_15,
            RawRecurrenceRecord(uid="broken"),
            record(
                datetime(2024, 1, 22, tzinfo=UTC), datetime(2024, 1, 29, tzinfo=UTC),
                attendee="Benjamin Sebastian Schmitz", uid="uid-2",
            ),
        ]

    def test_aborts_on_first_failure(self):
        with pytest.raises(MalformedRecord):
            resolve_all(self._records(), datetime(2024, 3, 15, tzinfo=UTC))

    def test_skip_keeps_order_and_reports_errors(self):
        resolved, errors = resolve_all(
            self._records(), datetime(2024, 3, 15, tzinfo=UTC), skip_malformed=True
        )
        assert [o.attendee for o in resolved] == [
            "Ignacio Alejandro García Nunez",
            "Benjamin Sebastian Schmitz",
        ]
        assert len(errors) == 1
        assert errors[0].uid == "broken"

    def test_empty_input(self):
        assert resolve_all([], datetime(2024, 3, 15, tzinfo=UTC)) == ((), [])

    def test_preserves_input_order_not_chronology(self):
        later = record(
            datetime(2024, 1, 29, tzinfo=UTC), datetime(2024, 2, 5, tzinfo=UTC),
            attendee="Robert Jandow",
        )
        resolved, _ = resolve_all([later, JAN_15], datetime(2024, 3, 15, 12, tzinfo=UTC))
        assert [o.attendee for o in resolved] == ["Robert Jandow", "Ignacio Alejandro García Nunez"]


# ============================================
# Duty queries
# ============================================
NOW = datetime(2024, 4, 10, 12, tzinfo=UTC)

ROTATION = (
    occ("Ignacio Alejandro García Nunez", datetime(2024, 4, 8, 12, tzinfo=UTC)),
    occ("Benjamin Sebastian Schmitz", datetime(2024, 4, 15, 12, tzinfo=UTC)),
    occ("Robert Jandow", datetime(2024, 4, 22, 12, tzinfo=UTC)),
    occ("Colin Wilk", datetime(2024, 4, 29, 12, tzinfo=UTC)),
    occ("Magnus Kühne", datetime(2024, 5, 6, 12, tzinfo=UTC)),
    occ("Timor Morrien", datetime(2024, 5, 13, 12, tzinfo=UTC)),
)

HOLDER = "Ignacio Alejandro García Nunez is on duty this cycle."


class TestCurrentHolder:
    def test_first_started_event(self):
        assert current_holder(ROTATION, NOW) == "Ignacio Alejandro García Nunez"

    def test_empty_sequence(self):
        assert current_holder((), NOW) is None

    def test_nothing_started_yet(self):
        assert current_holder(ROTATION[1:], NOW) is None

    def test_first_in_order_wins_over_earliest(self):
        events = (
            occ("Second Started", datetime(2024, 4, 1, 12, tzinfo=UTC)),
            occ("First Started", datetime(2024, 3, 25, 12, tzinfo=UTC)),
        )
        assert current_holder(events, NOW) == "Second Started"
        assert current_holder(tuple(reversed(events)), NOW) == "First Started"

    def test_same_day_counts_regardless_of_time(self):
        events = (occ("Evening Start", datetime(2024, 4, 10, 18, tzinfo=UTC)),)
        morning = datetime(2024, 4, 10, 8, tzinfo=UTC)
        assert current_holder(events, morning) == "Evening Start"

    def test_naive_now_with_zone_aware_events(self):
        naive_now = datetime(2024, 4, 10, 12)
        assert current_holder(ROTATION, naive_now) == "Ignacio Alejandro García Nunez"
        assert current_holder(ROTATION[1:], naive_now) is None

    def test_events_and_now_in_different_zones(self):
        events = (occ("Berlin Slot", datetime(2024, 4, 8, 12, tzinfo=BERLIN)),)
        assert current_holder(events, NOW) == "Berlin Slot"

    def test_naive_now_through_all_queries(self):
        naive_now = datetime(2024, 4, 10, 12)
        assert is_self_current(ROTATION, "Ignacio", naive_now) is True
        result = status(ROTATION, "Ben", naive_now)
        assert result.current_holder == "Ignacio Alejandro García Nunez"
        assert result.weeks_until_self == 1
        assert result.sentence == f"{HOLDER}\nYou are on duty next cycle."


class TestIsSelfCurrent:
    def test_full_name(self):
        assert is_self_current(ROTATION, "Ignacio Alejandro García Nunez", NOW) is True

    def test_substring(self):
        assert is_self_current(ROTATION, "García", NOW) is True

    def test_other_person(self):
        assert is_self_current(ROTATION, "Ben", NOW) is False

    def test_no_holder(self):
        assert is_self_current((), "Ben", NOW) is False

    @pytest.mark.parametrize("name", [None, ""])
    def test_unset_self(self, name):
        assert is_self_current(ROTATION, name, NOW) is False


class TestWeeksUntilSelf:
    def test_substring_match_is_non_negative(self):
        assert weeks_until_self(ROTATION, "Ben", NOW) == 1

    def test_no_match_is_sentinel(self):
        assert weeks_until_self(ROTATION, "Zoe", NOW) == -1

    def test_empty_sequence(self):
        assert weeks_until_self((), "Ben", NOW) == -1

    def test_unset_self(self):
        assert weeks_until_self(ROTATION, None, NOW) == -1

    def test_rounds_up(self):
        assert weeks_until_self(ROTATION, "Robert", NOW) == 2
        assert weeks_until_self(ROTATION, "Timor", NOW) == 5

    def test_current_holder_is_zero(self):
        assert weeks_until_self(ROTATION, "Ignacio", NOW) == 0

    def test_already_started_not_clamped(self):
        events = (occ("Ben Early", datetime(2024, 3, 25, 12, tzinfo=UTC)),)
        assert weeks_until_self(events, "Ben", NOW) == -2

    def test_first_match_in_order(self):
        events = (
            occ("Ben Later", datetime(2024, 5, 13, 12, tzinfo=UTC)),
            occ("Ben Sooner", datetime(2024, 4, 15, 12, tzinfo=UTC)),
        )
        assert weeks_until_self(events, "Ben", NOW) == 5


class TestStatusSentence:
    def test_not_scheduled(self):
        assert status_sentence(ROTATION, "Zoe", NOW) == (
            f"{HOLDER}\nYou are not scheduled to be on duty in the near future."
        )

    def test_this_cycle(self):
        assert status_sentence(ROTATION, "Ignacio", NOW) == "You are on duty this cycle."

    def test_next_cycle(self):
        assert status_sentence(ROTATION, "Ben", NOW) == f"{HOLDER}\nYou are on duty next cycle."

    def test_in_five_cycles(self):
        assert status_sentence(ROTATION, "Timor", NOW) == (
            f"{HOLDER}\nIn 5 cycles it is your turn again."
        )

    def test_no_holder_phrase(self):
        assert status_sentence(ROTATION[1:], "Zoe", NOW) == (
            "There is no one on duty this cycle.\n"
            "You are not scheduled to be on duty in the near future."
        )

    def test_no_holder_next_cycle(self):
        assert status_sentence(ROTATION[1:], "Ben", NOW) == (
            "There is no one on duty this cycle.\nYou are on duty next cycle."
        )

    def test_already_started_counts_as_this_cycle(self):
        events = (occ("Ben Early", datetime(2024, 3, 25, 12, tzinfo=UTC)),)
        assert status_sentence(events, "Ben", NOW) == "You are on duty this cycle."

    def test_empty_sequence(self):
        assert status_sentence((), "Ben", NOW) == (
            "There is no one on duty this cycle.\n"
            "You are not scheduled to be on duty in the near future."
        )


class TestStatus:
    def test_bundles_all_queries(self):
        result = status(ROTATION, "Ben", NOW)
        assert result.current_holder == "Ignacio Alejandro García Nunez"
        assert result.is_self_current is False
        assert result.weeks_until_self == 1
        assert result.sentence == f"{HOLDER}\nYou are on duty next cycle."

    def test_resolved_pipeline(self):
        records = [
            record(datetime(2024, 1, 15, tzinfo=UTC), datetime(2024, 1, 22, tzinfo=UTC),
                   attendee='"Ignacio Alejandro García Nunez"'),
            record(datetime(2024, 1, 22, tzinfo=UTC), datetime(2024, 1, 29, tzinfo=UTC),
                   attendee="Benjamin Sebastian Schmitz"),
        ]
        resolved, _ = resolve_all(records, NOW)
        result = status(resolved, "Benjamin", NOW)
        assert result.current_holder == "Ignacio Alejandro García Nunez"
        assert result.weeks_until_self == 1
