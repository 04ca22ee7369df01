"""Unit tests for the booking service (schedule, update, delete).

Tests the fail-fast check order, conflict reporting, self-exclusion on edit
and the events emitted for the notification dispatcher.
"""

import threading
from datetime import date, time, timedelta, timezone

import pytest

from docket.core.case import CaseStatus
from docket.core.errors import (
    CaseClosedError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.unit
class TestScheduleHearing:
    """Test booking new hearings."""

    def test_schedule_returns_persisted_hearing(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing(
            "CASE-A", "C1", hearing_day, time(10, 0), notes="Preliminary"
        )
        assert hearing.hearing_id.startswith("HRG-")
        assert hearing.duration_minutes == 60
        assert hearing.notes == "Preliminary"
        assert docket.booking.get_hearing(hearing.hearing_id) == hearing

    def test_judge_defaults_to_assigned_judge(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(9, 0))
        assert hearing.judge_id == "J001"

    def test_conflict_identifies_existing_hearing(self, docket, hearing_day):
        first = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0))
        with pytest.raises(ConflictError) as exc:
            docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 0))

        assert exc.value.conflicting.hearing_id == first.hearing_id
        payload = exc.value.to_dict()
        assert payload["error"] == "Conflict"
        assert payload["conflicting_hearing"]["case_id"] == "CASE-A"
        assert "10:00-11:00" in payload["detail"]

    @pytest.mark.failure
    def test_closed_case_leaves_store_unchanged(self, docket, hearing_day):
        with pytest.raises(CaseClosedError):
            docket.booking.schedule_hearing("CASE-Z", "C1", hearing_day, time(10, 0))
        assert len(docket.hearings) == 0

    @pytest.mark.failure
    def test_case_check_precedes_court_check(self, docket, hearing_day):
        with pytest.raises(CaseClosedError):
            docket.booking.schedule_hearing("CASE-Z", "C404", hearing_day, time(10, 0))

    @pytest.mark.failure
    def test_unknown_case(self, docket, hearing_day):
        with pytest.raises(NotFoundError):
            docket.booking.schedule_hearing("CASE-404", "C1", hearing_day, time(10, 0))

    @pytest.mark.failure
    def test_unknown_court(self, docket, hearing_day):
        with pytest.raises(NotFoundError):
            docket.booking.schedule_hearing("CASE-A", "C404", hearing_day, time(10, 0))

    @pytest.mark.failure
    @pytest.mark.parametrize("start", [time(8, 0), time(11, 30), time(12, 0), time(17, 0)])
    def test_outside_operating_hours(self, docket, hearing_day, start):
        with pytest.raises(ValidationError):
            docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, start)

    @pytest.mark.failure
    def test_off_grid_time(self, docket, hearing_day):
        with pytest.raises(ValidationError) as exc:
            docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 15))
        assert "slot grid" in str(exc.value)

    @pytest.mark.failure
    @pytest.mark.parametrize("tz", [timezone.utc, timezone(timedelta(hours=2))])
    def test_time_with_utc_offset_rejected(self, docket, hearing_day, tz):
        with pytest.raises(ValidationError) as exc:
            docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0, tzinfo=tz))
        assert "UTC offset" in str(exc.value)
        assert len(docket.hearings) == 0

    @pytest.mark.failure
    def test_validation_precedes_conflict(self, docket, hearing_day):
        docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0))
        with pytest.raises(ValidationError):
            docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 30))

    @pytest.mark.edge_case
    def test_back_to_back_allowed_under_strict(self, docket, hearing_day):
        docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 0))
        assert len(docket.hearings) == 2

    @pytest.mark.edge_case
    def test_back_to_back_rejected_under_inclusive(self, inclusive_docket, hearing_day):
        first = inclusive_docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        with pytest.raises(ConflictError) as exc:
            inclusive_docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 0))
        assert exc.value.conflicting == first


@pytest.mark.unit
class TestUpdateHearing:
    """Test editing hearings."""

    def test_move_to_free_slot(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        moved = docket.booking.update_hearing(hearing.hearing_id, start_time=time(11, 0))

        assert moved.hearing_id == hearing.hearing_id
        assert moved.start_time == time(11, 0)
        assert moved.updated_at is not None
        assert docket.availability.get_available_slots("C1", hearing_day) == [
            time(9, 0), time(10, 0),
        ]

    def test_same_slot_is_not_a_self_conflict(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0))
        updated = docket.booking.update_hearing(
            hearing.hearing_id, court_id="C1", hearing_date=hearing_day,
            start_time=time(10, 0), notes="Adjourned to same slot",
        )
        assert updated.start_time == time(10, 0)
        assert updated.notes == "Adjourned to same slot"

    def test_move_onto_other_hearing_conflicts(self, docket, hearing_day):
        a = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        b = docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 0))
        with pytest.raises(ConflictError) as exc:
            docket.booking.update_hearing(a.hearing_id, start_time=time(10, 0))
        assert exc.value.conflicting.hearing_id == b.hearing_id
        assert docket.booking.get_hearing(a.hearing_id).start_time == time(9, 0)

    def test_move_to_other_court_uses_its_slot_duration(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        moved = docket.booking.update_hearing(hearing.hearing_id, court_id="C2",
                                              hearing_date=date(2025, 3, 5),
                                              start_time=time(15, 30))
        assert moved.court_id == "C2"
        assert moved.duration_minutes == 30
        assert docket.booking.hearings_for_court("C1", hearing_day) == []

    def test_omitted_fields_are_kept(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0),
                                                  notes="keep me")
        updated = docket.booking.update_hearing(hearing.hearing_id)
        assert (updated.court_id, updated.hearing_date, updated.start_time, updated.notes) == (
            "C1", hearing_day, time(9, 0), "keep me",
        )

    @pytest.mark.concurrency
    def test_concurrent_edits_both_survive(self, docket, hearing_day, monkeypatch):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        read = docket.hearings.get
        mover = threading.Thread(
            target=docket.booking.update_hearing,
            args=(hearing.hearing_id,),
            kwargs={"start_time": time(11, 0)},
        )

        def read_then_race(hearing_id):
            current = read(hearing_id)
            if mover.ident is None:
                # Let the other editor run between this read and the commit
                mover.start()
                mover.join(timeout=0.2)
            return current

        monkeypatch.setattr(docket.hearings, "get", read_then_race)
        docket.booking.update_hearing(hearing.hearing_id, notes="adjourned part-heard")
        mover.join()

        final = read(hearing.hearing_id)
        assert final.start_time == time(11, 0)
        assert final.notes == "adjourned part-heard"

    @pytest.mark.failure
    def test_update_to_time_with_utc_offset(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        with pytest.raises(ValidationError):
            docket.booking.update_hearing(
                hearing.hearing_id, start_time=time(11, 0, tzinfo=timezone.utc))
        assert docket.booking.get_hearing(hearing.hearing_id).start_time == time(9, 0)

    @pytest.mark.failure
    def test_update_unknown_hearing(self, docket):
        with pytest.raises(NotFoundError):
            docket.booking.update_hearing("HRG-404", start_time=time(9, 0))

    @pytest.mark.failure
    def test_update_to_unknown_court(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        with pytest.raises(NotFoundError):
            docket.booking.update_hearing(hearing.hearing_id, court_id="C404")

    @pytest.mark.failure
    def test_update_outside_hours(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        with pytest.raises(ValidationError):
            docket.booking.update_hearing(hearing.hearing_id, start_time=time(13, 0))

    @pytest.mark.failure
    def test_update_after_case_closed(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        docket.case_admin.change_status("CASE-A", CaseStatus.CLOSED)
        with pytest.raises(CaseClosedError):
            docket.booking.update_hearing(hearing.hearing_id, start_time=time(11, 0))
        assert docket.booking.get_hearing(hearing.hearing_id).start_time == time(9, 0)


@pytest.mark.unit
class TestDeleteHearing:
    """Test cancelling hearings."""

    def test_delete_frees_slot(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0))
        docket.booking.delete_hearing(hearing.hearing_id)

        assert time(10, 0) in docket.availability.get_available_slots("C1", hearing_day)
        with pytest.raises(NotFoundError):
            docket.booking.get_hearing(hearing.hearing_id)
        docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(10, 0))

    @pytest.mark.failure
    def test_delete_unknown(self, docket):
        with pytest.raises(NotFoundError):
            docket.booking.delete_hearing("HRG-404")

    @pytest.mark.failure
    def test_delete_after_case_closed(self, docket, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(10, 0))
        docket.case_admin.change_status("CASE-A", CaseStatus.CLOSED)
        with pytest.raises(CaseClosedError):
            docket.booking.delete_hearing(hearing.hearing_id)
        assert len(docket.hearings) == 1


@pytest.mark.unit
class TestHearingQueries:
    """Test read helpers."""

    def test_hearings_for_case_ordered(self, docket, hearing_day):
        later = docket.booking.schedule_hearing("CASE-A", "C1", date(2025, 3, 10), time(9, 0))
        earlier = docket.booking.schedule_hearing("CASE-A", "C2", hearing_day, time(9, 0))
        docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(9, 0))
        assert docket.booking.hearings_for_case("CASE-A") == [earlier, later]

    @pytest.mark.failure
    def test_hearings_for_unknown_case(self, docket):
        with pytest.raises(NotFoundError):
            docket.booking.hearings_for_case("CASE-404")

    def test_hearings_for_judge_ordered_across_courts(self, docket, hearing_day):
        later = docket.booking.schedule_hearing("CASE-B", "C1", date(2025, 3, 10), time(9, 0))
        afternoon = docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(11, 0))
        morning = docket.booking.schedule_hearing("CASE-A", "C2", hearing_day, time(9, 30),
                                                  judge_id="J001")
        docket.booking.schedule_hearing("CASE-A", "C2", hearing_day, time(10, 0))
        assert docket.booking.hearings_for_judge("J001") == [morning, afternoon, later]

    @pytest.mark.edge_case
    def test_hearings_for_unassigned_judge(self, docket, hearing_day):
        docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(9, 0))
        assert docket.booking.hearings_for_judge("J999") == []


@pytest.mark.unit
class TestBookingEvents:
    """Test events handed to the notification dispatcher."""

    def test_one_event_per_mutation(self, docket, recorder, hearing_day):
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        docket.booking.update_hearing(hearing.hearing_id, start_time=time(10, 0))
        docket.booking.delete_hearing(hearing.hearing_id)

        assert [e.type for e in recorder.events] == ["scheduled", "updated", "deleted"]
        updated = recorder.of_type("updated")[0]
        assert updated.previous.start_time == time(9, 0)
        assert updated.hearing.start_time == time(10, 0)

    def test_rejections_emit_nothing(self, docket, recorder, hearing_day):
        docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        with pytest.raises(ConflictError):
            docket.booking.schedule_hearing("CASE-B", "C1", hearing_day, time(9, 0))
        with pytest.raises(CaseClosedError):
            docket.booking.schedule_hearing("CASE-Z", "C1", hearing_day, time(10, 0))
        assert len(recorder.events) == 1

    def test_failing_listener_does_not_fail_booking(self, docket, hearing_day):
        def broken(event):
            raise RuntimeError("mail server down")

        docket.booking.add_listener(broken)
        hearing = docket.booking.schedule_hearing("CASE-A", "C1", hearing_day, time(9, 0))
        assert docket.booking.get_hearing(hearing.hearing_id) == hearing
