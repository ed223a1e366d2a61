"""Tests for the 'tasks' command group."""

from __future__ import annotations

import json

from focusnote.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND


class TestAdd:
    def test_add_prints_success(self, invoke):
        result = invoke("tasks", "add", "Buy milk")

        assert result.exit_code == 0
        assert "Created task" in result.stdout
        assert "Buy milk" in result.stdout

    def test_add_json(self, add_task):
        task = add_task("Plan sprint", "--priority", "high", "--tag", "work", "--note", "n1")

        assert task["title"] == "Plan sprint"
        assert task["priority"] == "high"
        assert task["tags"] == ["work"]
        assert task["note_id"] == "n1"
        assert task["status"] == "todo"

    def test_invalid_priority(self, invoke):
        result = invoke("tasks", "add", "Plan", "--priority", "urgent")
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_invalid_due_date(self, invoke):
        result = invoke("tasks", "add", "Plan", "--due", "next tuesday")
        assert result.exit_code == ERROR_INVALID_ARGS


class TestListAndShow:
    def test_list_empty(self, invoke):
        result = invoke("tasks", "list")
        assert result.exit_code == 0
        assert "No items found" in result.stdout

    def test_list_json_filters(self, invoke, add_task):
        add_task("A", "--note", "n1")
        add_task("B", "--note", "n2")

        result = invoke("tasks", "list", "--note", "n1", "--output", "json")

        assert result.exit_code == 0
        assert [t["title"] for t in json.loads(result.stdout)] == ["A"]

    def test_list_status_filter(self, invoke, add_task):
        add_task("A")
        done = add_task("B")
        invoke("tasks", "done", done["id"])

        result = invoke("tasks", "list", "--status", "done", "--output", "json")

        assert result.exit_code == 0
        assert [t["title"] for t in json.loads(result.stdout)] == ["B"]

    def test_list_unknown_status(self, invoke):
        result = invoke("tasks", "list", "--status", "finished")
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_list_table(self, invoke, add_task):
        task = add_task("Write report")

        result = invoke("tasks", "list")

        assert result.exit_code == 0
        assert task["id"][:8] in result.stdout

    def test_show_by_prefix(self, invoke, add_task):
        task = add_task("Write report")

        result = invoke("tasks", "show", task["id"][:8], "--output", "json")

        assert result.exit_code == 0
        assert json.loads(result.stdout)["id"] == task["id"]

    def test_show_unknown(self, invoke):
        result = invoke("tasks", "show", "deadbeef")
        assert result.exit_code == ERROR_NOT_FOUND
        assert "not found" in result.stdout


class TestMutations:
    def test_update(self, invoke, add_task):
        task = add_task("Draft")

        result = invoke(
            "tasks", "update", task["id"], "--title", "Final", "--status", "in_progress",
            "--output", "json",
        )

        assert result.exit_code == 0
        updated = json.loads(result.stdout)
        assert updated["title"] == "Final"
        assert updated["status"] == "in_progress"

    def test_update_without_changes(self, invoke, add_task):
        task = add_task("Draft")
        result = invoke("tasks", "update", task["id"])
        assert result.exit_code == 0
        assert "Nothing to update" in result.stdout

    def test_done_sets_completed_at(self, invoke, add_task):
        task = add_task("Ship")

        result = invoke("tasks", "done", task["id"])
        shown = json.loads(invoke("tasks", "show", task["id"], "--output", "json").stdout)

        assert result.exit_code == 0
        assert "Completed" in result.stdout
        assert shown["status"] == "done"
        assert shown["completed_at"] is not None

    def test_delete_with_confirmation(self, invoke, add_task):
        task = add_task("Old")

        declined = invoke("tasks", "delete", task["id"], input="n\n")
        assert declined.exit_code == 0
        assert invoke("tasks", "show", task["id"]).exit_code == 0

        accepted = invoke("tasks", "delete", task["id"], "--yes")
        assert accepted.exit_code == 0
        assert invoke("tasks", "show", task["id"]).exit_code == ERROR_NOT_FOUND


class TestImport:
    def test_import_from_stdin(self, invoke):
        result = invoke(
            "tasks", "import", "-", "--note", "n1", "--output", "json",
            input="Buy milk\n  Call Bob  \n\n",
        )

        assert result.exit_code == 0
        created = json.loads(result.stdout)
        assert [t["title"] for t in created] == ["Buy milk", "Call Bob"]
        assert all(t["note_id"] == "n1" for t in created)

    def test_import_from_file(self, invoke, tmp_path):
        source = tmp_path / "titles.txt"
        source.write_text("One\nTwo\n", encoding="utf-8")

        result = invoke("tasks", "import", str(source))

        assert result.exit_code == 0
        assert "Imported 2 task(s)" in result.stdout
