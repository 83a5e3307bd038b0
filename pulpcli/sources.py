"""Source tree helpers shared by the compiling commands.

Directories come from the resolved path options (src, test, includes) plus the
`purescript-*/src` folders of installed dependencies.
"""

import re
from pathlib import Path
from typing import Iterable, List

from .faults import CommandError
from .project import Project


def directories(project: Project, options, *, tests: bool = False, dependencies: bool = True) -> List[Path]:
    """Source directories of the project, in compiler order."""
    found = [project.resolve(options["src_path"])]
    if tests:
        found.append(project.resolve(options["test_path"]))
    found.extend(project.resolve(path) for path in options.get("include_paths") or ())
    if dependencies:
        found.extend(sorted(project.resolve(options["dependency_path"]).glob("purescript-*/src")))
    return found


def files(roots: Iterable[Path], suffix: str = ".purs") -> List[Path]:
    """All files under `roots` with the given suffix, sorted."""
    return sorted(path for root in roots if root.is_dir() for path in root.rglob("*" + suffix) if path.is_file())


def globs(roots: Iterable[Path], suffix: str = ".purs") -> List[str]:
    """Compiler-style globs (`dir/**/*.purs`) for each root."""
    return [str(root / "**" / ("*" + suffix)) for root in roots]


def modules(paths: Iterable[Path]) -> List[str]:
    """Module names declared by PureScript source files."""
    names = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CommandError(f"Unable to read {path}: {e.strerror}.") from e
        except UnicodeDecodeError as e:
            raise CommandError(f"{path} is not valid UTF-8: {e.reason}.") from e
        match = re.search(r"^\s*module\s+([A-Z][\w']*(?:\.[A-Z][\w']*)*)", text, re.MULTILINE)
        if match and match.group(1) not in names:
            names.append(match.group(1))
    return names


def newest(paths: Iterable[Path]) -> float:
    """Most recent modification time among `paths` (0 when empty)."""
    return max((path.stat().st_mtime for path in paths), default=0.0)


def stale(project: Project, options, roots: Iterable[Path]) -> bool:
    """Whether any source is newer than the compiler output."""
    output = project.resolve(options["build_path"])
    if not output.is_dir():
        return True
    built = newest(path for path in output.rglob("*") if path.is_file())
    roots = list(roots)
    return newest([*files(roots), *files(roots, ".js")]) > built


__all__ = (
    "directories",
    "files",
    "globs",
    "modules",
    "newest",
    "stale",
)
