"""Editing the CLI settings file interactively."""

from __future__ import annotations

import copy

from mikroscli import settings
from mikroscli.settings import Profile, Settings
from mikroscli.ui import Prompter, alert, is_empty

_THEMES = ("base16", "charm", "dracula", "catppuccin", "default")

_MAIN_MENU = [
    ("Adjust settings", "settings"),
    ("Profiles", "profiles"),
    ("Quit", "quit"),
]

_PROFILE_MENU = [
    ("Add new Profile", "add"),
    ("Remove Profile", "remove"),
    ("Back", "back"),
]


def _prompter(prompter: Prompter | None) -> Prompter:
    return prompter if prompter is not None else Prompter()


def _profiles(cfg: Settings) -> dict[str, Profile]:
    if cfg.profile is None:
        cfg.profile = {}
    return cfg.profile


def profile_entries(cfg: Settings, with_main_menu: bool) -> list[tuple[str, str]]:
    """Return the profile names as (label, value) options, plus menu actions."""
    entries = [(name, name) for name in _profiles(cfg)]
    if with_main_menu:
        entries.extend(_PROFILE_MENU)
    return entries


def add_profile(cfg: Settings, prompter: Prompter | None = None) -> str:
    """Ask for a new profile name and add an empty profile with it."""
    prompter = _prompter(prompter)
    name = prompter.ask(
        "Profile name. Enter the new profile name:",
        validate=is_empty("profile name cannot be empty"),
    )

    profiles = _profiles(cfg)
    if name in profiles:
        alert(f"profile '{name}' already exists", prompter)

    profiles[name] = Profile()
    return name


def remove_profile(cfg: Settings, prompter: Prompter | None = None) -> list[str]:
    """Ask which profiles to remove, remove them and return their names."""
    prompter = _prompter(prompter)
    names = prompter.choose_many("Select profiles to remove", profile_entries(cfg, False))

    profiles = _profiles(cfg)
    for name in names:
        profiles.pop(name, None)
    return names


def edit_profile(cfg: Settings, name: str, prompter: Prompter | None = None) -> str:
    """Ask for new values of a profile, possibly renaming it; return its name."""
    prompter = _prompter(prompter)
    profiles = _profiles(cfg)
    profile = copy.deepcopy(profiles.get(name, Profile()))
    monorepo = profile.project.protobuf_monorepo
    templates = profile.project.templates.protobuf

    new_name = prompter.ask(
        "Profile name. Enter the profile name:",
        name,
        is_empty("profile name cannot be empty"),
    )
    monorepo.repository_name = prompter.ask(
        "Repository name. Enter the name of the repository to create:",
        monorepo.repository_name,
        is_empty("repository name cannot be empty"),
    )
    monorepo.project_name = prompter.ask(
        "Project name. Enter your protobuf project name:",
        monorepo.project_name,
        is_empty("project name cannot be empty"),
    )
    monorepo.vcs_path = prompter.ask(
        "VCS path prefix. Enter your VCS path prefix to use for the project:",
        monorepo.vcs_path,
        is_empty("VCS path prefix cannot be empty"),
    )
    templates.custom_auth_name = prompter.ask(
        "Auth scopes. Enter the authentication scopes key for HTTP services:",
        templates.custom_auth_name,
        is_empty("custom auth scopes key cannot be empty"),
    )

    if new_name != name:
        profiles.pop(name, None)
    profiles[new_name] = profile
    return new_name


def settings_form(cfg: Settings, prompter: Prompter | None = None) -> None:
    """Ask for the plugin paths and the UI preferences."""
    prompter = _prompter(prompter)
    plugins = cfg.paths.plugins

    prompter.show("Paths", "Configure paths for plugins\n")
    plugins.features = prompter.ask("Feature plugins:", plugins.features)
    plugins.services = prompter.ask("Service plugins:", plugins.services)

    prompter.show("UI", "")
    cfg.ui.accessible = prompter.confirm("Enable accessibility?", cfg.ui.accessible)
    cfg.ui.theme = prompter.choose(
        "Select the color theme to use:", _THEMES, cfg.ui.theme or None
    )


def profiles_form(cfg: Settings, prompter: Prompter | None = None) -> None:
    """Show the profile menu until the user goes back."""
    prompter = _prompter(prompter)
    while True:
        choice = prompter.choose("Choose the profile action", profile_entries(cfg, True))
        if choice == "back":
            return
        if choice == "add":
            add_profile(cfg, prompter)
        elif choice == "remove":
            remove_profile(cfg, prompter)
        else:
            edit_profile(cfg, choice, prompter)


def run_menu(cfg: Settings, prompter: Prompter | None = None) -> None:
    """Show the main settings menu until the user quits."""
    prompter = _prompter(prompter)
    while True:
        choice = prompter.choose("Choose the settings file section", _MAIN_MENU)
        if choice == "quit":
            return
        if choice == "settings":
            settings_form(cfg, prompter)
        elif choice == "profiles":
            profiles_form(cfg, prompter)


def _confirm_save(cfg: Settings, prompter: Prompter) -> bool:
    confirmed = prompter.confirm(
        "Confirm saving the settings file?\n"
        "ATTENTION! All settings will be overwritten."
    )
    if confirmed:
        cfg.write()
    return confirmed


def edit(prompter: Prompter | None = None) -> bool:
    """Edit the settings file; return True if changes were saved."""
    prompter = _prompter(prompter)
    cfg = settings.load()
    before = cfg.hash()

    run_menu(cfg, prompter)

    if cfg.hash() == before:
        return False
    return _confirm_save(cfg, prompter)