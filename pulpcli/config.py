"""Pydantic models for the Bower files a PureScript project carries.

- BowerConfig mirrors `.bowerrc`; only `directory` matters to pulp (it becomes the
  default of --dependency-path).
- BowerManifest mirrors `bower.json`; pulp needs the project name, the rest is kept
  as extra fields.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .faults import CommandError
from .log import get_logger

DEFAULT_DEPENDENCY_PATH = "bower_components"

logger = get_logger(__name__)


class FlexibleModel(BaseModel):
    """Base model that keeps unknown keys, as Bower files carry many pulp ignores."""

    model_config = ConfigDict(
        extra="allow", populate_by_name=True, str_strip_whitespace=True
    )


class BowerConfig(FlexibleModel):
    """Contents of a `.bowerrc` file."""

    directory: str = Field(
        default=DEFAULT_DEPENDENCY_PATH,
        description="Directory Bower installs packages into",
    )

    @field_validator("directory", mode="before")
    @classmethod
    def default_when_empty(cls, v):
        return v or DEFAULT_DEPENDENCY_PATH


class BowerManifest(FlexibleModel):
    """Contents of a `bower.json` file."""

    name: str = Field(description="Package name")
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="devDependencies"
    )


def _read_json(path: Path):
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def read_bowerrc(cwd: Optional[Path] = None) -> BowerConfig:
    """Read `.bowerrc` from cwd; missing or broken files yield the defaults."""
    path = Path(cwd or Path.cwd()) / ".bowerrc"
    if not path.is_file():
        return BowerConfig()
    try:
        return BowerConfig.model_validate(_read_json(path))
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable {path}: {e}")
        return BowerConfig()


def read_manifest(path: Path) -> BowerManifest:
    """Read and validate a `bower.json` file."""
    try:
        return BowerManifest.model_validate(_read_json(path))
    except OSError as e:
        raise CommandError(f"Unable to read {path}: {e.strerror}.") from e
    except ValidationError as e:
        raise CommandError(f"Invalid {path}: {e.errors()[0]['msg']}.") from e
    except ValueError as e:
        raise CommandError(f"Invalid JSON in {path}: {e}.") from e


__all__ = (
    "DEFAULT_DEPENDENCY_PATH",
    "BowerConfig",
    "BowerManifest",
    "read_bowerrc",
    "read_manifest",
)
