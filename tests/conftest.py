"""
Общие фикстуры для тестов
"""

import pytest

from gjp_mcp.tools.project.project import Project


@pytest.fixture(autouse=True)
def git_identity(monkeypatch, tmp_path_factory):
    """Изолирует git от глобальной конфигурации и задает автора коммитов"""
    global_config = tmp_path_factory.mktemp("gitconfig") / "config"
    global_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "gjp tests")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "gjp-tests@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "gjp tests")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "gjp-tests@example.com")


@pytest.fixture
def project_dir(tmp_path):
    """Пустая директория для будущего проекта"""
    directory = tmp_path / "project"
    directory.mkdir()
    return directory


@pytest.fixture
def project(project_dir):
    """Инициализированный проект в фазе gathering"""
    return Project.init(project_dir)
