"""`pulp run`: build, then run the entry module with the configured engine."""

import json
import tempfile
from pathlib import Path
from typing import Sequence

from .. import process
from ..log import get_logger
from . import build

logger = get_logger(__name__)


def execute(project, options, main: str, executable: str, arguments: Sequence[str] = ()) -> None:
    """Call `main` of a compiled module through a small entry script.

    The build directory goes on NODE_PATH so `require(main)` resolves against it.
    """
    output = project.resolve(options["build_path"])
    with tempfile.TemporaryDirectory(prefix="pulp-") as directory:
        entry = Path(directory) / "run.js"
        entry.write_text(f"require({json.dumps(main)}).main();\n", encoding="utf-8")
        logger.debug(f"Entry script {entry} calls {main}.main")
        process.spawn(executable, [str(entry), *arguments], cwd=project.root, env={"NODE_PATH": str(output)})


def action(project, options) -> None:
    build.action(project, options)
    execute(project, options, options["main"], options["engine"], options.get("remainder", ()))


__all__ = (
    "execute",
    "action",
)
