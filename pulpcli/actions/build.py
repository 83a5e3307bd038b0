"""`pulp build`: compile with psc, optionally bundle with psc-bundle."""

from pathlib import Path
from typing import Optional

from .. import process, sources
from ..log import get_logger

logger = get_logger(__name__)


def compile(project, options, *, tests: bool = False) -> None:
    """Run psc over the project sources unless the output is up to date."""
    roots = sources.directories(project, options, tests=tests)
    output = project.resolve(options["build_path"])

    if not options.get("force") and not sources.stale(project, options, roots):
        logger.info("Project unchanged; skipping build step.")
        return

    arguments = sources.globs(roots)
    for pattern in sources.globs(roots, ".js"):
        arguments += ["--ffi", pattern]
    arguments += ["--output", str(output)]

    logger.info("Compiling...")
    process.spawn("psc", arguments, cwd=project.root)
    logger.info("Build successful.")


def bundle(project, options, *, main: Optional[str] = None, to: Optional[Path] = None) -> None:
    """Link the compiled modules into one file with psc-bundle.

    `main` adds the entry point call; without `to` the bundle goes to stdout.
    """
    output = project.resolve(options["build_path"])
    module = options.get("main", "Main")

    arguments = [str(output / "*" / "*.js"), "--module", module]
    for extra in (options.get("modules") or "").split(","):
        if extra := extra.strip():
            arguments += ["--module", extra]
    if main:
        arguments += ["--main", main]
    if to is not None:
        arguments += ["--output", str(to)]

    logger.info("Bundling JavaScript...")
    process.spawn("psc-bundle", arguments, cwd=project.root)
    logger.info("Bundled.")


def action(project, options) -> None:
    compile(project, options)
    if options.get("to") or options.get("optimise"):
        to = options.get("to")
        bundle(project, options, main=options.get("main", "Main"), to=project.resolve(to) if to else None)


__all__ = (
    "compile",
    "bundle",
    "action",
)
