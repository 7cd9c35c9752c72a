"""The CLI settings file and its defaults."""

from __future__ import annotations

import hashlib
import os
import re
import tomllib
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any

import tomli_w

from mikroscli import fs

_SETTINGS_FILENAME = "$HOME/.mikros/config.toml"
_THEMES = ("charm", "dracula", "catppuccin", "base16")
_ENV_VAR = re.compile(r"\$\{([^}]*)\}|\$([A-Za-z0-9_]+)")


def _expand_env(text: str) -> str:
    """Replace $VAR and ${VAR} with their values, unset ones with ''."""
    return _ENV_VAR.sub(
        lambda m: os.environ.get(m.group(1) or m.group(2), ""), text
    )


@dataclass
class Plugins:
    services: str = ""
    features: str = ""


@dataclass
class Paths:
    plugins: Plugins = field(default_factory=Plugins)


@dataclass
class ProtobufMonorepo:
    repository_name: str = ""
    project_name: str = ""
    vcs_path: str = ""


@dataclass
class ProtobufTemplates:
    custom_auth_name: str = ""


@dataclass
class Templates:
    protobuf: ProtobufTemplates = field(default_factory=ProtobufTemplates)


@dataclass
class Project:
    protobuf_monorepo: ProtobufMonorepo = field(default_factory=ProtobufMonorepo)
    templates: Templates = field(default_factory=Templates)


@dataclass
class Profile:
    project: Project = field(default_factory=Project)


@dataclass
class UI:
    theme: str = ""
    accessible: bool = False


@dataclass
class Settings:
    """The whole settings file. A bare instance holds empty values."""

    paths: Paths = field(default_factory=Paths)
    ui: UI = field(default_factory=UI)
    app: Profile = field(default_factory=Profile)
    profile: dict[str, Profile] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as a TOML-ready dictionary."""
        return asdict(self)

    def write(self) -> str:
        """Save the settings to the settings file and return its path."""
        path = settings_path()
        fs.create_path(os.path.dirname(path))
        with open(path, "wb") as fp:
            tomli_w.dump(self.to_dict(), fp)
        return path

    def theme(self) -> str:
        """Return the UI theme to use, 'base' when none matches."""
        name = self.ui.theme.lower()
        return name if name in _THEMES else "base"

    def hash(self) -> str:
        """Return the SHA-256 hex digest of the TOML form of the settings."""
        data = tomli_w.dumps(self.to_dict()).encode()
        return hashlib.sha256(data).hexdigest()


def settings_path() -> str:
    """Return the expanded path of the settings file."""
    return _expand_env(_SETTINGS_FILENAME)


def new_default() -> Settings:
    """Return settings holding every default value."""
    cfg = Settings()
    cfg.paths.plugins.services = _expand_env("$HOME/.mikros/plugins/services")
    cfg.paths.plugins.features = _expand_env("$HOME/.mikros/plugins/features")

    monorepo = cfg.app.project.protobuf_monorepo
    monorepo.repository_name = "protobuf-workspace"
    monorepo.project_name = "services"
    monorepo.vcs_path = "github.com/your-organization"
    cfg.app.project.templates.protobuf.custom_auth_name = "scopes"
    return cfg


def file_exists() -> str | None:
    """Return the settings file path if the file exists, else None."""
    name = settings_path()
    return name if fs.find_path(name) else None


def _overlay(obj: Any, data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"settings: '{where}' must be a table")

    for f in fields(obj):
        if f.name not in data:
            continue
        value = data[f.name]
        key = f"{where}.{f.name}" if where else f.name
        current = getattr(obj, f.name)

        if is_dataclass(current):
            _overlay(current, value, key)
        elif isinstance(current, dict):
            if not isinstance(value, dict):
                raise ValueError(f"settings: '{key}' must be a table")
            for name, entry in value.items():
                current[name] = _overlay(Profile(), entry, f"{key}.{name}")
        else:
            if type(value) is not type(current):
                raise ValueError(
                    f"settings: '{key}' must be of type {type(current).__name__}"
                )
            setattr(obj, f.name, value)

    return obj


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build settings from a decoded TOML table, on top of the defaults.

    Profile entries start out empty; keys not found keep their value.
    """
    return _overlay(new_default(), data, "")


def load() -> Settings:
    """Return the defaults, overridden by the settings file if there is one."""
    name = file_exists()
    if name is None:
        return new_default()

    with open(name, "rb") as fp:
        data = tomllib.load(fp)
    return settings_from_dict(data)


def create_default_settings() -> None:
    """Write a settings file with default values unless one already exists."""
    if file_exists() is not None:
        print("settings file already exists")
        return

    new_default().write()