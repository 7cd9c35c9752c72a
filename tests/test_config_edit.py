import copy
import io
import os

import pytest

from mikroscli import config_edit, settings
from mikroscli.settings import Profile
from mikroscli.ui import Prompter


def _prompter(text: str) -> tuple[Prompter, io.StringIO]:
    out = io.StringIO()
    return Prompter(input=io.StringIO(text), output=out), out


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def cfg(home):
    value = settings.new_default()
    value.profile = {}
    return value


def _filled_profile(cfg):
    profile = copy.deepcopy(cfg.app)
    profile.project.protobuf_monorepo.repository_name = "repo"
    profile.project.protobuf_monorepo.project_name = "proj"
    profile.project.protobuf_monorepo.vcs_path = "vcs/prefix"
    profile.project.templates.protobuf.custom_auth_name = "auth"
    return profile


def test_profile_entries_with_menu(cfg):
    cfg.profile = {"alpha": Profile()}
    entries = config_edit.profile_entries(cfg, True)
    assert entries[0] == ("alpha", "alpha")
    assert [value for _, value in entries[1:]] == ["add", "remove", "back"]


def test_profile_entries_without_menu(cfg):
    cfg.profile = {"alpha": Profile(), "beta": Profile()}
    assert config_edit.profile_entries(cfg, False) == [("alpha", "alpha"), ("beta", "beta")]


def test_add_profile(cfg):
    prompter, _ = _prompter("work\n")
    assert config_edit.add_profile(cfg, prompter) == "work"
    assert list(cfg.profile) == ["work"]


def test_add_profile_rejects_empty_name(cfg):
    prompter, out = _prompter("\nwork\n")
    config_edit.add_profile(cfg, prompter)
    assert "profile name cannot be empty" in out.getvalue()
    assert "work" in cfg.profile


def test_add_existing_profile_alerts(cfg):
    cfg.profile = {"work": _filled_profile(cfg)}
    prompter, out = _prompter("work\n\n")
    config_edit.add_profile(cfg, prompter)
    assert "profile 'work' already exists" in out.getvalue()
    assert list(cfg.profile) == ["work"]


def test_remove_profile(cfg):
    cfg.profile = {"a": Profile(), "b": Profile()}
    prompter, _ = _prompter("a\n")
    assert config_edit.remove_profile(cfg, prompter) == ["a"]
    assert list(cfg.profile) == ["b"]


def test_edit_profile_rename_keeps_values(cfg):
    original = _filled_profile(cfg)
    cfg.profile = {"old": copy.deepcopy(original)}
    prompter, _ = _prompter("new\n\n\n\n\n")
    assert config_edit.edit_profile(cfg, "old", prompter) == "new"
    assert list(cfg.profile) == ["new"]
    assert cfg.profile["new"] == original


def test_edit_profile_changes_values(cfg):
    cfg.profile = {"work": _filled_profile(cfg)}
    prompter, _ = _prompter("\nother-repo\n\n\n\n")
    config_edit.edit_profile(cfg, "work", prompter)
    assert cfg.profile["work"].project.protobuf_monorepo.repository_name == "other-repo"
    assert cfg.profile["work"].project.protobuf_monorepo.project_name == "proj"


def test_settings_form(cfg):
    prompter, _ = _prompter("/feat\n/svc\ny\n2\n")
    config_edit.settings_form(cfg, prompter)
    assert cfg.paths.plugins.features == "/feat"
    assert cfg.paths.plugins.services == "/svc"
    assert cfg.ui.accessible is True
    assert cfg.ui.theme == "charm"


def test_run_menu_adds_profile(cfg):
    prompter, _ = _prompter("2\n1\nwork\n3\n3\n")
    config_edit.run_menu(cfg, prompter)
    assert "work" in cfg.profile


def test_profiles_form_back_changes_nothing(cfg):
    before = cfg.hash()
    prompter, _ = _prompter("3\n")
    config_edit.profiles_form(cfg, prompter)
    assert cfg.hash() == before


def test_edit_without_changes_does_not_save(home):
    prompter, _ = _prompter("3\n")
    assert config_edit.edit(prompter) is False
    assert not os.path.exists(settings.settings_path())


def test_edit_saves_when_confirmed(home):
    prompter, _ = _prompter("1\n\n\ny\n\n3\ny\n")
    assert config_edit.edit(prompter) is True
    assert os.path.exists(settings.settings_path())
    assert settings.load().ui.accessible is True


def test_edit_declined_does_not_save(home):
    prompter, _ = _prompter("1\n\n\ny\n\n3\nn\n")
    assert config_edit.edit(prompter) is False
    assert not os.path.exists(settings.settings_path())