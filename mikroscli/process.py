"""Running external programs."""

from __future__ import annotations

import os
import subprocess


class CommandError(Exception):
    """An external program could not be started or exited with failure."""

    def __init__(self, message: str, *, returncode: int = -1, output: bytes = b"") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


def run(*args: str) -> bytes:
    """Run a program and return its combined stdout and stderr."""
    if not args:
        raise ValueError("can't execute an empty command")

    try:
        completed = subprocess.run(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        raise CommandError(f"{args[0]}: {exc.strerror or exc}") from exc

    if completed.returncode != 0:
        raise CommandError(
            f"{args[0]}: exit status {completed.returncode}",
            returncode=completed.returncode,
            output=completed.stdout,
        )

    return completed.stdout


def run_with_pty(*args: str) -> bytes:
    """Run a program attached to a pseudo-terminal and return its output.

    A failing program raises CommandError carrying its exit code and output.
    """
    if not args:
        raise ValueError("can't execute an empty command")

    import pty

    master, slave = pty.openpty()
    try:
        proc = subprocess.Popen(
            list(args),
            stdin=slave,
            stdout=slave,
            stderr=slave,
            close_fds=True,
        )
    except OSError as exc:
        os.close(master)
        os.close(slave)
        raise CommandError(f"{args[0]}: {exc.strerror or exc}") from exc

    os.close(slave)
    chunks: list[bytes] = []
    try:
        while True:
            try:
                data = os.read(master, 4096)
            except OSError:
                break
            if not data:
                break
            chunks.append(data)
    finally:
        os.close(master)

    code = proc.wait()
    output = b"".join(chunks)
    if code != 0:
        returncode = code if code >= 0 else -1
        raise CommandError(
            f"{args[0]}: exit status {code}", returncode=returncode, output=output
        )

    return output