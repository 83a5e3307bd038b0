"""Subprocess helpers for the external tools (bower, psc, node, ...)."""

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .faults import CommandError
from .log import get_logger

logger = get_logger(__name__)


def which(executable: str) -> str:
    """Resolve an executable on PATH or fail with a CommandError."""
    path = shutil.which(executable)
    if path is None:
        raise CommandError(f"`{executable}` executable not found.")
    return path


def _environment(env: Optional[Mapping[str, str]]) -> Optional[dict]:
    if not env:
        return None
    return {**os.environ, **env}


def spawn(executable: str,
          arguments: Sequence[str] = (),
          *,
          cwd: Optional[Path] = None,
          env: Optional[Mapping[str, str]] = None,
          stdout=None) -> subprocess.CompletedProcess:
    """Run a tool to completion, inheriting stdin/stderr.

    Raises CommandError when the tool is missing or exits non-zero.
    """
    command = [which(executable), *map(str, arguments)]
    logger.debug(f"Running {shlex.join([executable, *command[1:]])}")
    try:
        completed = subprocess.run(command, cwd=cwd, env=_environment(env), stdout=stdout, check=False)
    except OSError as e:
        raise CommandError(f"Unable to run `{executable}`: {e.strerror}.") from e
    if completed.returncode != 0:
        raise CommandError(f"Subprocess exited with code {completed.returncode}.")
    return completed


def capture(executable: str,
            arguments: Sequence[str] = (),
            *,
            cwd: Optional[Path] = None,
            env: Optional[Mapping[str, str]] = None) -> str:
    """Run a tool and return its standard output as text."""
    completed = spawn(executable, arguments, cwd=cwd, env=env, stdout=subprocess.PIPE)
    return completed.stdout.decode("utf-8")


def shell(line: str, *, cwd: Optional[Path] = None) -> None:
    """Run a command line through the system shell (the `--then` hook)."""
    logger.info(f"Running `{line}`")
    try:
        completed = subprocess.run(line, shell=True, cwd=cwd, check=False)
    except OSError as e:
        raise CommandError(f"Unable to run `{line}`: {e.strerror}.") from e
    if completed.returncode != 0:
        raise CommandError(f"`{line}` exited with code {completed.returncode}.")


__all__ = (
    "which",
    "spawn",
    "capture",
    "shell",
)
