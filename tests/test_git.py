import os

from mikroscli import git


def test_outside_repository(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    repo = git.load_from_cwd()
    assert repo.is_valid_repository() is False
    assert repo.root_path == ""


def test_init_creates_repository(tmp_path, monkeypatch):
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    repo = git.init()
    assert repo.is_valid_repository() is True
    assert os.path.realpath(repo.root_path) == os.path.realpath(project)
    assert repo.name == "project"


def test_load_from_subdirectory(tmp_path, monkeypatch):
    project = tmp_path / "project"
    sub = project / "a" / "b"
    sub.mkdir(parents=True)
    monkeypatch.chdir(project)
    git.init()
    monkeypatch.chdir(sub)
    repo = git.load_from_cwd()
    assert repo.is_valid_repository() is True
    assert os.path.realpath(repo.root_path) == os.path.realpath(project)
    assert repo.name == "project"