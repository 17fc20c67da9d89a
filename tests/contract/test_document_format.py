"""
Contract tests for the on-disk document format.

The task document must stay bit-exact so that it can be edited by hand and
read by other tools: three sections in fixed order, each closed by "---",
canonical "- [ ] **<id>**: <text>" task lines and a blank spacer after a
non-empty task block.
"""

import pytest

from mdtodo import TaskBook, TaskStatus

EMPTY_DOCUMENT = """\
### SELECTED

---

### INCOMPLETE

---

### COMPLETE

---
"""


class TestDocumentFormatContract:
    """Contract tests pinning the exact bytes written to disk."""

    @pytest.fixture
    def book(self, tmp_path):
        book = TaskBook(tmp_path / "TODO.md")
        book.create()
        return book

    def test_empty_document(self, book):
        assert book.path.read_text(encoding="utf-8") == EMPTY_DOCUMENT

    def test_one_task_per_section(self, book):
        book.add("pick me", TaskStatus.SELECTED)
        book.add("later")
        book.add("done", TaskStatus.COMPLETE)

        assert book.path.read_text(encoding="utf-8") == (
            "### SELECTED\n"
            "\n"
            "- [ ] **0**: pick me\n"
            "\n"
            "---\n"
            "\n"
            "### INCOMPLETE\n"
            "\n"
            "- [ ] **1**: later\n"
            "\n"
            "---\n"
            "\n"
            "### COMPLETE\n"
            "\n"
            "- [x] **2**: done\n"
            "\n"
            "---\n"
        )

    def test_emptied_section_returns_to_canonical_form(self, book):
        book.add("only")
        book.check(0)
        book.uncheck(0)
        book.check(0)

        content = book.path.read_text(encoding="utf-8")

        assert content.startswith("### SELECTED\n\n---\n\n### INCOMPLETE\n\n---\n\n")
        assert content.endswith("### COMPLETE\n\n- [x] **0**: only\n\n---\n")

    def test_unchanged_canonical_document_is_stable(self, book):
        book.add("a")
        book.add("b", TaskStatus.SELECTED)
        before = book.path.read_text(encoding="utf-8")

        book.save(book.load())

        assert book.path.read_text(encoding="utf-8") == before
