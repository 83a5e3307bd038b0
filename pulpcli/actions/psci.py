"""`pulp psci`: write a .psci file loading the project, then start the REPL."""

from .. import process, sources
from ..log import get_logger

logger = get_logger(__name__)


def script(project, options) -> str:
    """The .psci contents: `:load` every source, `:foreign` every FFI module."""
    roots = sources.directories(project, options, tests=True)
    lines = [f":load {path}" for path in sources.files(roots)]
    lines += [f":foreign {path}" for path in sources.files(roots, ".js")]
    return "\n".join(lines) + "\n"


def action(project, options) -> None:
    path = project.root / ".psci"
    path.write_text(script(project, options), encoding="utf-8")
    logger.debug(f"Wrote {path}")
    process.spawn("psci", [], cwd=project.root)


__all__ = (
    "script",
    "action",
)
