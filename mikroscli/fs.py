"""Filesystem helpers used while scaffolding projects."""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Iterator
from contextlib import contextmanager


def create_path(name: str) -> str:
    """Create a directory (and its parents) and return its absolute path.

    A relative name is created inside the current working directory. An
    already existing directory is not an error.
    """
    if not os.path.isabs(name):
        name = os.path.join(os.getcwd(), name)

    if not find_path(name):
        os.makedirs(name, exist_ok=True)

    return name


def find_path(p: str) -> bool:
    """Return True unless the path is known not to exist."""
    try:
        os.stat(p)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def change_dir(path: str) -> str:
    """Change the working directory to path and return the previous one."""
    cwd = os.getcwd()
    os.chdir(path)
    return cwd


@contextmanager
def working_directory(path: str) -> Iterator[str]:
    """Run the enclosed block inside path, restoring the old directory after."""
    previous = change_dir(path)
    try:
        yield previous
    finally:
        os.chdir(previous)


def is_executable(path: str) -> bool:
    """Return True if path is a regular file with any executable bit set."""
    try:
        info = os.stat(path)
    except OSError:
        return False

    if not stat.S_ISREG(info.st_mode):
        return False

    return bool(stat.S_IMODE(info.st_mode) & 0o111)


def set_executable_path(path: str) -> None:
    """Give path full read, write and execute permissions."""
    os.chmod(path, 0o777)


def find_binary(name: str) -> str:
    """Return the full path of an executable found in PATH.

    Raises FileNotFoundError when it cannot be found.
    """
    found = shutil.which(name)
    if found is None:
        raise FileNotFoundError(f"executable file not found in $PATH: {name}")
    return found