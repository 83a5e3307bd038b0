"""Project detection: find the bower.json a command operates on."""

from pathlib import Path
from typing import Optional

from .config import BowerManifest, read_manifest
from .faults import CommandError
from .log import get_logger

logger = get_logger(__name__)


class Project:
    """A PureScript project rooted at the directory of its bower.json."""

    def __init__(self, path: Path, manifest: BowerManifest):
        self.path = Path(path).resolve()
        self.root = self.path.parent
        self.manifest = manifest

    @property
    def name(self) -> str:
        return self.manifest.name

    def resolve(self, path) -> Path:
        """Resolve a path option relative to the project root."""
        return (self.root / path).resolve()

    @classmethod
    def locate(cls, bower_file: Optional[str] = None, cwd: Optional[Path] = None) -> "Project":
        """Use `bower_file` when given, otherwise search upwards from cwd."""
        cwd = Path(cwd or Path.cwd()).resolve()

        if bower_file:
            path = (cwd / bower_file).resolve()
            if not path.is_file():
                raise CommandError(f"{bower_file} does not exist.")
        else:
            for directory in (cwd, *cwd.parents):
                if (path := directory / "bower.json").is_file():
                    break
            else:
                raise CommandError(
                    "No bower.json found in current or parent directories. "
                    "Use `pulp init` to create a new project."
                )

        project = cls(path, read_manifest(path))
        logger.debug(f"Project {project.name} at {project.root}")
        return project

    def __repr__(self):
        return f"Project({self.name!r}, {str(self.root)!r})"


__all__ = (
    "Project",
)
