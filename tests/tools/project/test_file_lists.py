#!/usr/bin/env python3
"""
Тесты для file_lists.py на реальном git репозитории
"""

import pytest

from gjp_mcp.models.project import TagType


def _write(path, text="content\n"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestChangedFileListTracker:
    """Тесты для ChangedFileListTracker"""

    @pytest.fixture
    def tracker(self, project):
        return project.file_lists

    def test_lists_files_changed_since_tag(self, project, tracker):
        _write(project.full_path / "kit" / "ant" / "bin" / "ant")
        _write(project.full_path / "kit" / "junit.jar")
        _write(project.full_path / "src" / "foo" / "A.java")
        project.ledger.take_snapshot("changes")

        result = tracker.update_changed_file_list("kit", "kit", TagType.GATHERING_STARTED)

        assert result == ["ant/bin/ant", "junit.jar"]
        assert (project.full_path / "file_lists" / "kit").read_text() == "ant/bin/ant\njunit.jar\n"

    def test_merges_with_persisted_list(self, project, tracker):
        _write(project.full_path / "file_lists" / "kit", "zeta.jar\nalpha.jar\n")
        _write(project.full_path / "kit" / "alpha.jar")
        _write(project.full_path / "kit" / "beta.jar")
        project.ledger.take_snapshot("changes")

        result = tracker.update_changed_file_list("kit", "kit", TagType.GATHERING_STARTED)

        assert result == ["alpha.jar", "beta.jar", "zeta.jar"]

    def test_is_idempotent(self, project, tracker):
        """Тест: повторный вызов без изменений дает тот же файл"""
        _write(project.full_path / "src" / "foo" / "A.java")
        _write(project.full_path / "src" / "foo" / "pkg" / "B.java")
        project.ledger.take_snapshot("changes")

        tracker.update_changed_file_list("src/foo", "foo_input", TagType.GATHERING_STARTED)
        first = (project.full_path / "file_lists" / "foo_input").read_bytes()
        tracker.update_changed_file_list("src/foo", "foo_input", TagType.GATHERING_STARTED)
        second = (project.full_path / "file_lists" / "foo_input").read_bytes()

        assert first == second == b"A.java\npkg/B.java\n"

    def test_directory_prefix_respects_boundaries(self, project, tracker):
        _write(project.full_path / "src" / "foo" / "A.java")
        _write(project.full_path / "src" / "foobar" / "B.java")
        project.ledger.take_snapshot("changes")

        assert tracker.update_changed_file_list("src/foo", "foo_input", TagType.GATHERING_STARTED) == ["A.java"]

    def test_deleted_files_are_not_listed(self, project, tracker):
        _write(project.full_path / "kit" / "old.jar")
        project.ledger.take_snapshot("add old", TagType.DRY_RUN_STARTED)
        (project.full_path / "kit" / "old.jar").unlink()
        _write(project.full_path / "kit" / "new.jar")
        project.ledger.take_snapshot("replace")

        assert tracker.update_changed_file_list("kit", "kit", TagType.DRY_RUN_STARTED) == ["new.jar"]

    def test_missing_tag_treats_everything_as_new(self, project, tracker):
        _write(project.full_path / "kit" / "lib.jar")
        project.ledger.take_snapshot("changes")

        result = tracker.update_changed_file_list("kit", "kit", TagType.DRY_RUN_STARTED)

        assert result == ["README", "lib.jar"]

    def test_one_list_per_source_package(self, project, tracker):
        _write(project.full_path / "src" / "foo" / "A.java")
        _write(project.full_path / "src" / "bar" / "build.xml")
        project.ledger.take_snapshot("changes")

        results = tracker.update_changed_src_file_list("input", TagType.GATHERING_STARTED)

        assert results == {"bar_input": ["build.xml"], "foo_input": ["A.java"]}
        assert (project.full_path / "file_lists" / "bar_input").read_text() == "build.xml\n"
        assert (project.full_path / "file_lists" / "foo_input").read_text() == "A.java\n"

    def test_unchanged_package_gets_empty_list(self, project, tracker):
        _write(project.full_path / "src" / "foo" / "A.java")
        project.ledger.take_snapshot("foo", TagType.DRY_RUN_STARTED)

        results = tracker.update_changed_src_file_list("output", TagType.DRY_RUN_STARTED)

        assert results == {"foo_output": []}
        assert (project.full_path / "file_lists" / "foo_output").read_text() == ""

    def test_paths_with_surrounding_spaces_are_kept(self, project, tracker):
        """Тест: пробелы в начале и конце имени файла сохраняются"""
        _write(project.full_path / "file_lists" / "kit", " leading.jar\ntrailing.jar \n")
        _write(project.full_path / "kit" / "lib.jar")
        project.ledger.take_snapshot("changes")

        result = tracker.update_changed_file_list("kit", "kit", TagType.GATHERING_STARTED)

        assert result == [" leading.jar", "lib.jar", "trailing.jar "]
        assert tracker.read_list("kit") == result
