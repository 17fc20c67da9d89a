"""
Integration tests for the task lifecycle.

Runs the create / add / select / check / uncheck scenario end to end, once
through the TaskBook engine and once through the MCP tool functions, and
checks the persisted document after every step.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path so main.py is importable
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mdtodo import TaskBook, TaskStatus
from mdtodo.errors import AlreadyInTargetState, AlreadyExists, TaskNotFound
from main import (
    add_task,
    check_task,
    create_task_list,
    deselect_task,
    list_tasks,
    resource_tasks,
    select_task,
    task_summary,
    uncheck_task,
)


def section_ids(book, status):
    return [task.id for task in book.list_tasks([status])]


class TestTaskLifecycleIntegration:
    """Integration tests through the engine."""

    @pytest.fixture
    def book(self, tmp_path):
        book = TaskBook(tmp_path / "TODO.md")
        book.create()
        return book

    def test_scenario(self, book):
        """
        Given: a freshly created document
        When: tasks are added, selected, checked and unchecked
        Then: each task sits at the top of the section it last moved into
        """
        assert book.add("buy milk") == 0
        assert section_ids(book, TaskStatus.INCOMPLETE) == [0]

        assert book.add("buy eggs") == 1
        assert section_ids(book, TaskStatus.INCOMPLETE) == [1, 0]

        book.select(0)
        assert section_ids(book, TaskStatus.SELECTED) == [0]
        assert section_ids(book, TaskStatus.INCOMPLETE) == [1]

        book.check(0)
        assert section_ids(book, TaskStatus.SELECTED) == []
        assert section_ids(book, TaskStatus.COMPLETE) == [0]

        before = book.path.read_text(encoding="utf-8")
        with pytest.raises(AlreadyInTargetState):
            book.check(0)
        assert book.path.read_text(encoding="utf-8") == before

        book.uncheck(0)
        assert section_ids(book, TaskStatus.INCOMPLETE) == [0, 1]
        assert section_ids(book, TaskStatus.COMPLETE) == []

        assert book.path.read_text(encoding="utf-8") == (
            "### SELECTED\n"
            "\n"
            "---\n"
            "\n"
            "### INCOMPLETE\n"
            "\n"
            "- [ ] **0**: buy milk\n"
            "- [ ] **1**: buy eggs\n"
            "\n"
            "---\n"
            "\n"
            "### COMPLETE\n"
            "\n"
            "---\n"
        )

    def test_ids_stay_unique_and_sections_partition(self, book):
        for index in range(6):
            book.add(f"task {index}")
        book.select(1)
        book.select(4)
        book.check(4)
        book.check(2)
        book.uncheck(2, select=True)
        book.deselect(1)

        tasks = book.list_tasks()
        all_ids = [task.id for task in tasks]
        assert sorted(all_ids) == list(range(6))

        content = book.path.read_text(encoding="utf-8")
        for task_id in range(6):
            assert content.count(f"**{task_id}**") == 1

        assert section_ids(book, TaskStatus.SELECTED) == [2]
        assert section_ids(book, TaskStatus.INCOMPLETE) == [1, 5, 3, 0]
        assert section_ids(book, TaskStatus.COMPLETE) == [4]

    def test_hand_edited_document_is_normalized(self, book):
        """A document saved without spacers keeps its tasks and order."""
        book.path.write_text(
            "### SELECTED\n---\n"
            "### INCOMPLETE\n- [ ] **3**: c\n- [ ] **1**: a\n---\n"
            "### COMPLETE\n- [x] **2**: b\n---\n",
            encoding="utf-8",
        )
        before = [(t.id, t.text, t.status) for t in book.list_tasks()]

        book.save(book.load())

        assert [(t.id, t.text, t.status) for t in book.list_tasks()] == before
        assert book.load().render() == book.path.read_text(encoding="utf-8").splitlines()


class TestMcpToolsIntegration:
    """Integration tests through the MCP tool functions."""

    @pytest.fixture
    def path(self, tmp_path):
        return str(tmp_path / "TODO.md")

    def test_tool_workflow(self, path):
        created = create_task_list(path=path)
        assert created["path"] == str(Path(path).resolve())

        added = add_task("buy milk", path=path)
        assert added["task"] == {"id": 0, "text": "buy milk", "status": "incomplete", "completed": False}
        assert added["remaining"] == 1

        add_task("buy eggs", path=path)
        assert select_task(0, path=path)["task"]["status"] == "selected"

        checked = check_task(0, path=path)
        assert checked["task"]["completed"] is True
        assert checked["remaining"] == 1

        reopened = uncheck_task(0, select=True, path=path)
        assert reopened["task"]["status"] == "selected"

        assert deselect_task(0, path=path)["task"]["status"] == "incomplete"

        listed = list_tasks(path=path)
        assert [task["id"] for task in listed["tasks"]] == [0, 1]
        assert listed["count"] == 2

        summary = task_summary(path=path)
        assert summary["counts"] == {"selected": 0, "incomplete": 2, "complete": 0}
        assert summary["next_id"] == 2

    def test_tool_filters(self, path):
        create_task_list(path=path)
        add_task("a", path=path)
        add_task("b", status="complete", path=path)

        listed = list_tasks(statuses=["complete"], path=path)

        assert [task["text"] for task in listed["tasks"]] == ["b"]

    def test_empty_filter_matches_nothing(self, path):
        create_task_list(path=path)
        add_task("a", path=path)

        assert list_tasks(statuses=[], path=path)["count"] == 0
        assert list_tasks(path=path)["count"] == 1

    def test_tool_errors_propagate(self, path):
        create_task_list(path=path)

        with pytest.raises(AlreadyExists):
            create_task_list(path=path)
        with pytest.raises(TaskNotFound):
            check_task(3, path=path)

    def test_default_path_from_environment(self, path, monkeypatch):
        monkeypatch.setenv("MDTODO_FILE", path)

        assert "No task document" in resource_tasks()

        create_task_list()
        assert "has no tasks yet" in resource_tasks()

        add_task("buy milk")
        text = resource_tasks()
        assert "INCOMPLETE" in text
        assert "- [ ] **0**: buy milk" in text
