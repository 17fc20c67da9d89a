"""Unit tests for mdtodo data models."""

import pytest

from mdtodo.models import (
    ALL_STATUSES,
    SECTIONS,
    STATUS_FOR_SECTION,
    Task,
    TaskStatus,
)


class TestTaskStatus:
    """Test cases for TaskStatus."""

    def test_sections_follow_document_order(self):
        """Test that statuses map onto the fixed section order."""
        assert SECTIONS == ("SELECTED", "INCOMPLETE", "COMPLETE")
        assert ALL_STATUSES == (TaskStatus.SELECTED, TaskStatus.INCOMPLETE, TaskStatus.COMPLETE)
        assert [status.section for status in ALL_STATUSES] == list(SECTIONS)
        assert all(STATUS_FOR_SECTION[s.section] is s for s in ALL_STATUSES)

    def test_only_complete_is_checked(self):
        assert TaskStatus.COMPLETE.checked
        assert not TaskStatus.INCOMPLETE.checked
        assert not TaskStatus.SELECTED.checked

    @pytest.mark.parametrize("value", ["selected", "SELECTED", " Selected ", TaskStatus.SELECTED])
    def test_parse_accepts_names_in_any_case(self, value):
        assert TaskStatus.parse(value) is TaskStatus.SELECTED

    def test_parse_rejects_unknown_status(self):
        with pytest.raises(ValueError, match="Invalid status"):
            TaskStatus.parse("blocked")


class TestTask:
    """Test cases for Task."""

    def test_task_defaults_to_incomplete(self):
        task = Task(id=0, text="buy milk")

        assert task.status is TaskStatus.INCOMPLETE
        assert task.section == "INCOMPLETE"
        assert task.completed is False

    def test_to_dict(self):
        """Test converting a task to a dictionary."""
        task = Task(id=3, text="ship it", status=TaskStatus.COMPLETE)

        assert task.to_dict() == {
            "id": 3,
            "text": "ship it",
            "status": "complete",
            "completed": True,
        }

    def test_from_dict(self):
        """Test creating a task from a dictionary."""
        task = Task.from_dict({"id": "7", "text": "review", "status": "selected"})

        assert task == Task(id=7, text="review", status=TaskStatus.SELECTED)

    def test_from_dict_defaults(self):
        task = Task.from_dict({"id": 1})

        assert task.text == ""
        assert task.status is TaskStatus.INCOMPLETE

    def test_validate_valid_task(self):
        assert Task(id=0, text="").validate() == []

    def test_validate_invalid_task(self):
        """Test validation reports every problem."""
        task = Task(id=-1, text="two\nlines")

        issues = task.validate()

        assert len(issues) == 2
        assert any("non-negative" in issue for issue in issues)
        assert any("single line" in issue for issue in issues)
