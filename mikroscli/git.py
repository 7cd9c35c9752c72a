"""Locating and creating Git repositories."""

from __future__ import annotations

import os
from dataclasses import dataclass

from mikroscli import process


@dataclass
class Git:
    """A Git repository with basic metadata."""

    name: str = ""
    root_path: str = ""
    _valid: bool = False

    def is_valid_repository(self) -> bool:
        """Return True if this object stands for a real repository."""
        return self._valid


def load_from_cwd() -> Git:
    """Describe the repository holding the current directory, if any."""
    try:
        out = process.run("git", "rev-parse", "--git-dir")
    except process.CommandError:
        return Git(_valid=False)

    git_dir = out.decode().removesuffix("\n")
    root_path = os.path.dirname(git_dir)
    if git_dir == ".git":
        root_path = os.getcwd()

    return Git(name=os.path.basename(root_path), root_path=root_path, _valid=True)


def init() -> Git:
    """Initialise a repository in the current directory and describe it."""
    process.run("git", "init")
    return load_from_cwd()