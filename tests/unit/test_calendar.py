"""
Tests for daily and weekly notes (adapters/calendar.py, tools/calendar.py).
"""

from datetime import date

import pytest

from adapters import calendar
from models import ApiFailure
from tests.fake_api import FakeSidvy
from tests.helpers import assert_error
from tools import dispatch


class TestPeriods:

    def test_today_is_iso_date(self) -> None:
        assert date.fromisoformat(calendar.today())

    def test_current_iso_week_matches_today(self) -> None:
        week, year = calendar.current_iso_week()
        iso = date.fromisoformat(calendar.today()).isocalendar()
        assert (week, year) == (iso[1], iso[0])


class TestDaily:

    def test_created_from_template_on_first_read(self, fake_api: FakeSidvy) -> None:
        note = calendar.get_daily_note("2026-03-14", "ws_1").data

        assert note.name == "2026-03-14"
        assert note.content == "# 2026-03-14"
        assert fake_api.calls[-1].params == {"date": "2026-03-14", "workspaceId": "ws_1"}

    def test_same_note_on_second_read(self, fake_api: FakeSidvy) -> None:
        first = calendar.get_daily_note("2026-03-14", "ws_1").data
        second = calendar.get_daily_note("2026-03-14", "ws_1").data
        assert first.id == second.id

    def test_default_is_today(self, fake_api: FakeSidvy) -> None:
        note = calendar.get_daily_note(workspace_id="ws_1").data

        assert note.name == calendar.today()
        assert "date" not in fake_api.calls[-1].params

    def test_update_replaces(self, fake_api: FakeSidvy) -> None:
        note = calendar.update_daily_note("fresh", "2026-03-14", "ws_1").data

        assert note.content == "fresh"
        assert fake_api.writes()[-1].body == {"content": "fresh", "workspaceId": "ws_1", "date": "2026-03-14"}

    def test_append_after_template(self, fake_api: FakeSidvy) -> None:
        note = calendar.append_to_daily_note("- standup", "2026-03-14", "ws_1").data
        assert note.content == "# 2026-03-14\n\n- standup"

    def test_append_stops_on_read_failure(self, fake_api: FakeSidvy) -> None:
        fake_api.fail("GET", "/daily", status=500, code="INTERNAL_ERROR", message="template broke")

        result = calendar.append_to_daily_note("x", "2026-03-14", "ws_1")

        assert isinstance(result, ApiFailure)
        assert fake_api.writes() == []


class TestWeekly:

    def test_week_without_year_rejected_locally(self, fake_api: FakeSidvy) -> None:
        result = calendar.get_weekly_note(week=11)

        assert isinstance(result, ApiFailure)
        assert result.code == "VALIDATION_ERROR"
        assert fake_api.calls == []

    def test_year_without_week_rejected_for_update(self, fake_api: FakeSidvy) -> None:
        result = calendar.update_weekly_note("x", year=2026)

        assert isinstance(result, ApiFailure)
        assert fake_api.calls == []

    def test_specific_week(self, fake_api: FakeSidvy) -> None:
        note = calendar.get_weekly_note(11, 2026, "ws_1").data

        assert note.name == "2026-W11"
        assert note.content == "# Week 11, 2026"

    def test_append(self, fake_api: FakeSidvy) -> None:
        note = calendar.append_to_weekly_note("- review", 11, 2026, "ws_1").data

        assert note.content == "# Week 11, 2026\n\n- review"
        assert fake_api.writes()[-1].body["week"] == 11
        assert fake_api.writes()[-1].body["year"] == 2026


# ============================================================================
# TOOLS
# ============================================================================


class TestCalendarTools:

    def test_daily_echoes_today(self, fake_api: FakeSidvy) -> None:
        result = dispatch("get_daily_note", {})

        assert result["date"] == calendar.today()
        assert result["message"] == "Daily note for today retrieved successfully"
        assert result["note"]["workspace_id"] == "ws_1"

    def test_daily_specific_date(self, fake_api: FakeSidvy) -> None:
        result = dispatch("append_to_daily_note", {"content": "hi", "date": "2026-03-14"})

        assert result["date"] == "2026-03-14"
        assert result["message"] == "Content appended to daily note for 2026-03-14"

    @pytest.mark.parametrize("bad", ["14/03/2026", "2026-3-14", "tomorrow"])
    def test_daily_date_format(self, fake_api: FakeSidvy, bad: str) -> None:
        assert_error(dispatch("get_daily_note", {"date": bad}), "VALIDATION_ERROR", "date")

    def test_weekly_defaults_to_current_week(self, fake_api: FakeSidvy) -> None:
        week, year = calendar.current_iso_week()

        result = dispatch("get_weekly_note", {})

        assert (result["week"], result["year"]) == (week, year)
        assert result["note"]["content"] == f"# Week {week}, {year}"

    def test_weekly_pairing_enforced(self, fake_api: FakeSidvy) -> None:
        assert_error(dispatch("get_weekly_note", {"week": 3}), "VALIDATION_ERROR", "week and year")
        assert fake_api.calls == []

    def test_weekly_range(self, fake_api: FakeSidvy) -> None:
        assert_error(dispatch("get_weekly_note", {"week": 54, "year": 2026}), "VALIDATION_ERROR", "week")

    def test_update_weekly(self, fake_api: FakeSidvy) -> None:
        result = dispatch("update_weekly_note", {"content": "plan", "week": 2, "year": 2026})

        assert result["note"]["content"] == "plan"
        assert result["message"] == "Weekly note updated successfully"
