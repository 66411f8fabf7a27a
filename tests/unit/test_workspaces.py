"""
Tests for the workspaces adapter and workspace tools, against the fake service.
"""

from adapters import workspaces
from models import ApiFailure, ApiSuccess
from tests.fake_api import FakeSidvy
from tests.helpers import assert_error
from tools import dispatch


class TestGuardedCreate:

    def test_creates_under_limit(self, fake_api: FakeSidvy) -> None:
        result = workspaces.create_workspace_if_possible("Work")

        assert isinstance(result, ApiSuccess)
        assert result.data.name == "Work"
        assert result.data.is_default is False

    def test_limit_is_forbidden_without_post(self, fake_api: FakeSidvy) -> None:
        fake_api.add_workspace("Work")

        result = workspaces.create_workspace_if_possible("Third")

        assert isinstance(result, ApiFailure)
        assert result.code == "FORBIDDEN"
        assert fake_api.count("POST", "/workspace") == 0

    def test_duplicate_name_case_insensitive(self, fake_api: FakeSidvy) -> None:
        result = workspaces.create_workspace_if_possible("PERSONAL")

        assert isinstance(result, ApiFailure)
        assert result.code == "VALIDATION_ERROR"
        assert "already exists" in result.message
        assert fake_api.count("POST", "/workspace") == 0

    def test_listing_failure_surfaces(self, fake_api: FakeSidvy) -> None:
        fake_api.fail("GET", "/workspace", status=401, code="UNAUTHORIZED", message="expired")

        result = workspaces.create_workspace_if_possible("Work")

        assert isinstance(result, ApiFailure)
        assert result.code == "UNAUTHORIZED"


class TestGuardedDelete:

    def test_requires_confirmation(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")

        result = workspaces.delete_workspace_with_confirmation(work, confirm_delete=False)

        assert isinstance(result, ApiFailure)
        assert result.code == "VALIDATION_ERROR"
        assert fake_api.calls == []

    def test_default_is_forbidden(self, fake_api: FakeSidvy) -> None:
        result = workspaces.delete_workspace_with_confirmation("ws_1", confirm_delete=True)

        assert isinstance(result, ApiFailure)
        assert result.code == "FORBIDDEN"
        assert fake_api.writes() == []

    def test_unknown_is_not_found(self, fake_api: FakeSidvy) -> None:
        result = workspaces.delete_workspace_with_confirmation("ws_404", confirm_delete=True)

        assert isinstance(result, ApiFailure)
        assert result.code == "NOT_FOUND"

    def test_deletes_with_counts(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")
        note = fake_api.add_note("Plan", workspace_id=work)
        fake_api.add_group("Projects", workspace_id=work)
        fake_api.add_todo("Do it", note)

        result = workspaces.delete_workspace_with_confirmation(work, confirm_delete=True)

        assert result.data.deleted is True
        assert result.data.deleted_content.to_dict() == {"notes": 1, "groups": 1, "todos": 1}
        assert work not in fake_api.workspaces


class TestLookups:

    def test_default_workspace(self, fake_api: FakeSidvy) -> None:
        fake_api.add_workspace("Work")
        assert workspaces.get_default_workspace().data.id == "ws_1"

    def test_by_name_ignores_case(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")
        assert workspaces.get_workspace_by_name("wORK").data.id == work

    def test_by_id_soft_miss(self, fake_api: FakeSidvy) -> None:
        assert workspaces.get_workspace_by_id("nope") == ApiSuccess(data=None)

    def test_switch_makes_no_remote_change(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")

        result = workspaces.switch_workspace(work)

        assert result.data.id == work
        assert fake_api.writes() == []

    def test_can_create(self, fake_api: FakeSidvy) -> None:
        assert workspaces.can_create_workspace() is True
        fake_api.add_workspace("Work")
        assert workspaces.can_create_workspace() is False

    def test_stats_default_workspace(self, fake_api: FakeSidvy) -> None:
        fake_api.add_note("A")
        fake_api.add_note("B")
        fake_api.add_group("G")

        stats = workspaces.get_workspace_stats().data

        assert stats.id == "ws_1"
        assert stats.content_counts.notes == 2
        assert stats.content_counts.groups == 1
        assert stats.content_counts.total == 3


# ============================================================================
# TOOLS
# ============================================================================


class TestWorkspaceTools:

    def test_list_workspaces(self, fake_api: FakeSidvy) -> None:
        result = dispatch("list_workspaces", {})

        assert result["count"] == 1
        assert result["default_workspace"] == "ws_1"
        assert result["max_workspaces"] == 2
        assert result["can_create_more"] is True
        assert "content_counts" in result["workspaces"][0]

    def test_list_workspaces_without_stats(self, fake_api: FakeSidvy) -> None:
        result = dispatch("list_workspaces", {"include_stats": False})
        assert "content_counts" not in result["workspaces"][0]

    def test_create_at_limit(self, fake_api: FakeSidvy) -> None:
        fake_api.add_workspace("Work")
        assert_error(dispatch("create_workspace", {"name": "Third"}), "FORBIDDEN", "Maximum number")

    def test_delete_requires_confirm_argument(self, fake_api: FakeSidvy) -> None:
        assert_error(dispatch("delete_workspace", {"workspace_id": "ws_1"}), "VALIDATION_ERROR", "confirm_delete")

    def test_delete_message(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")
        fake_api.add_note("Plan", workspace_id=work)

        result = dispatch("delete_workspace", {"workspace_id": work, "confirm_delete": True})

        assert result["message"] == "Workspace deleted successfully. Deleted 1 notes, 0 groups, and 0 todos."

    def test_get_workspace_not_found(self, fake_api: FakeSidvy) -> None:
        assert_error(dispatch("get_workspace", {"workspace_id": "nope"}), "NOT_FOUND", "Workspace not found")

    def test_can_create_workspace(self, fake_api: FakeSidvy) -> None:
        result = dispatch("can_create_workspace", {})

        assert result == {
            "success": True,
            "can_create": True,
            "current_count": 1,
            "max_allowed": 2,
            "remaining_slots": 1,
        }

    def test_rename(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")

        result = dispatch("rename_workspace", {"workspace_id": work, "new_name": "Office"})

        assert result["new_name"] == "Office"
        assert fake_api.workspaces[work]["name"] == "Office"

    def test_get_workspace_stats_message(self, fake_api: FakeSidvy) -> None:
        fake_api.add_note("A")

        result = dispatch("get_workspace_stats", {})

        assert result["total_content"] == 1
        assert result["message"] == 'Workspace "Personal" contains 1 notes, 0 groups, and 0 todos'

    def test_all_workspace_stats(self, fake_api: FakeSidvy) -> None:
        work = fake_api.add_workspace("Work")
        fake_api.add_note("Plan", workspace_id=work)

        stats = {s.name: s.content_counts.notes for s in workspaces.get_all_workspace_stats()}

        assert stats == {"Personal": 0, "Work": 1}
