"""`pulp test`: build sources and tests, then run the test entry point."""

import tempfile
from pathlib import Path

from .. import process
from ..log import get_logger
from . import build, run

logger = get_logger(__name__)


def action(project, options) -> None:
    build.compile(project, options, tests=True)

    if runtime := options.get("test_runtime"):
        # A custom runtime gets a self-contained bundle instead of node's module lookup.
        with tempfile.TemporaryDirectory(prefix="pulp-") as directory:
            bundled = Path(directory) / "test.js"
            build.bundle(project, options, main=options["main"], to=bundled)
            logger.info("Running tests...")
            process.spawn(runtime, [str(bundled), *options.get("remainder", ())], cwd=project.root)
    else:
        logger.info("Running tests...")
        run.execute(project, options, options["main"], options["engine"], options.get("remainder", ()))

    logger.info("Tests OK.")


__all__ = (
    "action",
)
