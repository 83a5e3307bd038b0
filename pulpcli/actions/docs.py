"""`pulp docs`: generate Markdown docs for every project module with psc-docs."""

from .. import process, sources
from ..faults import CommandError
from ..log import get_logger

logger = get_logger(__name__)


def action(project, options) -> None:
    tests = options.get("with_tests", False)
    documented = sources.directories(project, options, tests=tests, dependencies=options.get("with_deps", False))

    names = sources.modules(sources.files(documented))
    if not names:
        raise CommandError("No PureScript modules found to document.")

    # psc-docs still needs every module in scope, documented or not.
    roots = sources.directories(project, options, tests=tests)
    arguments = sources.globs(roots)
    for pattern in sources.globs(roots, ".js"):
        arguments += ["--ffi", pattern]
    for name in names:
        arguments += ["--docgen", f"{name}:docs/{name.replace('.', '/')}.md"]

    (project.root / "docs").mkdir(exist_ok=True)
    logger.info("Generating documentation in docs/")
    process.spawn("psc-docs", arguments, cwd=project.root)
    logger.info("Documentation generated.")


__all__ = (
    "action",
)
