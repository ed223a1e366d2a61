"""Tests for the 'timer' and 'sessions' command groups."""

from __future__ import annotations

import json

from focusnote.utils.exit_codes import ERROR_INVALID_STATE, ERROR_NOT_FOUND


class TestTimerCommands:
    def test_status_when_idle(self, invoke):
        result = invoke("timer", "status")
        assert result.exit_code == 0
        assert "No session is running" in result.stdout

    def test_start_detached_then_stop(self, invoke, add_task):
        task = add_task("Write report")

        started = invoke("timer", "start", task["id"][:8], "--detach")
        assert started.exit_code == 0
        assert "Started 25 min session" in started.stdout

        status = invoke("timer", "status", "--output", "json")
        data = json.loads(status.stdout)
        assert data["task_id"] == task["id"]
        assert data["phase"] == "running"

        stopped = invoke("timer", "stop", "--achievement", "Outline", "--pending", "Review")
        assert stopped.exit_code == 0
        assert "Stopped session" in stopped.stdout

        shown = json.loads(invoke("tasks", "show", task["id"], "--output", "json").stdout)
        assert shown["status"] == "in_progress"
        assert shown["actual_minutes"] == 0

        sessions = json.loads(
            invoke("sessions", "list", task["id"], "--output", "json").stdout
        )
        assert len(sessions) == 1
        assert sessions[0]["achievement"] == "Outline"
        assert sessions[0]["pending"] == "Review"
        assert sessions[0]["completed"] is False
        assert sessions[0]["ended_at"] is not None

    def test_second_start_conflicts(self, invoke, add_task):
        first = add_task("A")
        second = add_task("B")
        invoke("timer", "start", first["id"], "--detach")

        result = invoke("timer", "start", second["id"], "--detach")

        assert result.exit_code == ERROR_INVALID_STATE
        assert "Error" in result.stdout

    def test_start_unknown_task(self, invoke):
        result = invoke("timer", "start", "deadbeef", "--detach")
        assert result.exit_code == ERROR_NOT_FOUND

    def test_stop_when_idle(self, invoke):
        result = invoke("timer", "stop")
        assert result.exit_code == 0
        assert "No session is running" in result.stdout

    def test_resume_when_idle(self, invoke):
        result = invoke("timer", "resume")
        assert result.exit_code == 0
        assert "No session is running" in result.stdout


class TestSessionsCommand:
    def test_list_empty(self, invoke, add_task):
        task = add_task("A")
        result = invoke("sessions", "list", task["id"])
        assert result.exit_code == 0
        assert "No items found" in result.stdout

    def test_list_sessions_of_deleted_task(self, invoke, add_task):
        task = add_task("A")
        invoke("timer", "start", task["id"], "--detach")
        invoke("timer", "stop")
        invoke("tasks", "delete", task["id"], "--yes")

        result = invoke("sessions", "list", task["id"], "--output", "json")

        assert result.exit_code == 0
        assert len(json.loads(result.stdout)) == 1

    def test_list_unknown_task(self, invoke):
        result = invoke("sessions", "list", "deadbeef")
        assert result.exit_code == ERROR_NOT_FOUND
