"""
pulp dispatch driver.

main(argv) wires the pieces together:
- read .bowerrc and build the registry (its dependency directory is the
  default of --dependency-path),
- parse; help, version and parse errors are reported here with their exit codes,
- configure logging from the resolved options,
- locate the project unless the command works without one,
- run the action (repeatedly under --watch), then the --then hook.
"""
import sys
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from . import __version__, registry, watch
from .actions import dep
from .config import read_bowerrc
from .faults import CommandError
from .helper import help
from .log import configure, get_logger
from .parsing import is_error, parse
from .process import shell
from .project import Project

logger = get_logger(__name__)

# Failures an action may raise that end in an "ERROR:" log line, not a traceback.
FAILURES = (CommandError, OSError, UnicodeError)


def _describe(error):
    if isinstance(error, CommandError):
        return error.message
    if isinstance(error, OSError) and error.strerror:
        return f"{error.strerror}: {error.filename}" if error.filename else error.strerror
    return str(error)


def _report(error, globals, commands, colorful):
    """Print a parse outcome that is not a success; return its exit code."""
    if error.version:
        print(__version__)
        return error.exit_code

    console = Console(file=sys.stderr, no_color=not colorful, highlight=False)
    if not error.help:
        console.print(error.render(colorful=colorful))
        console.print()
    help(globals, commands, error.context, sys.stderr, colorful=colorful)
    if error.help and error.context == "dep":
        console.print()
        console.print(Text(dep.NOTE))
        console.print()
        try:
            dep.usage()
        except CommandError as e:
            logger.warning(e.message)
    return error.exit_code


def _sequence(command, project, options):
    """The action, then the --then hook once it succeeded."""
    command.action(project, options)
    if line := options.get("then"):
        shell(line, cwd=project.root if project is not None else None)


def _guarded(command, project, options):
    """Watch-mode step: failures are logged and the watch carries on."""
    try:
        _sequence(command, project, options)
    except FAILURES as e:
        logger.error(f"ERROR: {_describe(e)}")


def main(argv=None):
    """Run pulp with `argv` (defaults to sys.argv[1:]); return the exit code."""
    argv = sys.argv[1:] if argv is None else list(argv)

    globals, commands = registry.create(read_bowerrc().directory)
    result = parse(globals, commands, argv)

    if is_error(result):
        colorful = "--monochrome" not in argv and sys.stderr.isatty()
        return _report(result, globals, commands, colorful)

    command = result.command
    options = MappingProxyType({**result.resolved, "remainder": result.remainder})
    configure(monochrome=options["monochrome"])

    try:
        project = Project.locate(options.get("bower_file")) if command.project else None
        if options["watch"] and project is not None:
            directories = [
                project.resolve(options.get("src_path", "src")),
                project.resolve(options.get("test_path", "test")),
                *(project.resolve(path) for path in options.get("include_paths") or ()),
            ]
            watch.watch(directories, lambda: _guarded(command, project, options))
        else:
            _sequence(command, project, options)
    except FAILURES as e:
        logger.error(f"ERROR: {_describe(e)}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    return 0


__all__ = (
    "main",
)
