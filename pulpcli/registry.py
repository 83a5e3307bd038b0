"""
pulp's command line registry.

The tables are immutable and built once per process by create(). Shared option
groups are plain tuples; each command's option set is their concatenation.
Actions are function values bound here, so dispatch never imports anything by name.
"""
import os

from .actions import browserify, build, dep, docs, init, psci, run, server, test
from .arguments import Command, Option
from .coercers import Coercer
from .config import DEFAULT_DEPENDENCY_PATH


def _globals():
    return (
        Option(
            "bower_file", "--bower-file", "-b", coercer=Coercer.FILE,
            descr="Read this bower.json file instead of autodetecting it.",
        ),
        Option(
            "watch", "--watch", "-w", coercer=Coercer.FLAG,
            descr="Watch source directories and re-run command if something changes.",
        ),
        Option(
            "monochrome", "--monochrome", coercer=Coercer.FLAG,
            descr="Don't colourise log output.",
        ),
        Option(
            "then", "--then", coercer=Coercer.STRING,
            descr="Run a shell command after the operation finishes. Useful with `--watch`.",
        ),
    )


def _paths(dependency_path):
    return (
        Option(
            "include_paths", "--include", "-I", coercer=Coercer.DIRECTORIES,
            descr="Additional source directories, separated by `%s`." % os.pathsep,
        ),
        Option(
            "src_path", "--src-path", coercer=Coercer.DIRECTORY,
            descr="Directory for PureScript source files.", default="src",
        ),
        Option(
            "test_path", "--test-path", coercer=Coercer.DIRECTORY,
            descr="Directory for PureScript test files.", default="test",
        ),
        Option(
            "dependency_path", "--dependency-path", coercer=Coercer.DIRECTORY,
            descr="Directory for PureScript dependency files.", default=dependency_path,
        ),
    )


def _buildish(paths):
    return paths + (
        Option(
            "build_path", "--build-path", "-o", coercer=Coercer.STRING,
            descr="Path for compiler output.", default="./output",
        ),
        Option(
            "optimise", "--optimise", "-O", coercer=Coercer.FLAG,
            descr="Perform dead code elimination.",
        ),
        Option(
            "force", "--force", coercer=Coercer.FLAG,
            descr="Force a build even if no source files have changed.",
        ),
    )


def _entry(descr="Application's entry point.", default="Main"):
    return Option("main", "--main", "-m", coercer=Coercer.STRING, descr=descr, default=default)


def _to():
    return Option("to", "--to", "-t", coercer=Coercer.STRING, descr="Output file name (stdout if not specified).")


def _engine():
    return Option(
        "engine", "--engine", coercer=Coercer.STRING,
        descr="Use the specified command to run compiled code.", default="node",
    )


def create(dependency_path=DEFAULT_DEPENDENCY_PATH):
    """
    Build the global option set and the command set.

    Parameters
    - dependency_path: default of --dependency-path, normally read from the
      project's .bowerrc by the caller.

    Returns
    - (globals, commands): tuples of Option and Command.
    """
    paths = _paths(dependency_path)
    buildish = _buildish(paths)
    builds = buildish + (
        _entry(),
        _to(),
        Option(
            "modules", "--modules", coercer=Coercer.STRING,
            descr="Additional modules to be included in the output bundle (comma-separated list).",
        ),
    )

    commands = (
        Command(
            "init", "Generate an example PureScript project.", init.action, (
                Option(
                    "force", "--force", coercer=Coercer.FLAG,
                    descr="Overwrite any project found in the current directory.",
                ),
            ),
            project=False,
        ),
        Command("dep", "Invoke Bower for package management.", dep.action, passthrough=True),
        Command("build", "Build the project.", build.action, builds),
        Command(
            "test", "Run project tests.", test.action, (
                _entry("Test entry point.", "Test.Main"),
                Option(
                    "test_runtime", "--runtime", "-r", coercer=Coercer.STRING,
                    descr="Run test script using this command instead of Node.",
                ),
                _engine(),
            ) + buildish,
        ),
        Command(
            "browserify", "Produce a deployable bundle using Browserify.", browserify.action, buildish + (
                _to(),
                _entry(),
                Option("transform", "--transform", coercer=Coercer.STRING, descr="Apply a Browserify transform."),
                Option("source_map", "--source-map", coercer=Coercer.STRING, descr="Generate source maps."),
                Option(
                    "skip_entry_point", "--skip-entry-point", coercer=Coercer.FLAG,
                    descr="Don't add code to automatically invoke Main.",
                ),
            ),
        ),
        Command("run", "Compile and run the project.", run.action, (_engine(),) + builds),
        Command(
            "docs", "Generate project documentation.", docs.action, paths + (
                Option("with_tests", "--with-tests", "-t", coercer=Coercer.FLAG, descr="Include tests."),
                Option("with_deps", "--with-deps", "-d", coercer=Coercer.FLAG, descr="Include external dependencies."),
            ),
        ),
        Command("psci", "Launch a PureScript REPL configured for the project.", psci.action, paths),
        Command(
            "server", "Launch a Webpack development server.", server.action, buildish + (
                _entry(),
                Option("config", "--config", "-c", coercer=Coercer.FILE, descr="Override the default Webpack config."),
                Option("port", "--port", "-p", coercer=Coercer.INT, descr="Port number to listen on.", default=1337),
                Option("host", "--host", coercer=Coercer.STRING, descr="IP address to bind the server to.", default="localhost"),
                Option(
                    "no_info", "--no-info", coercer=Coercer.FLAG,
                    descr="Display no info to the console, only warnings and errors.",
                ),
                Option("quiet", "--quiet", "-q", coercer=Coercer.FLAG, descr="Display nothing to the console when rebuilding."),
            ),
        ),
    )

    return _globals(), commands


__all__ = (
    "DEFAULT_DEPENDENCY_PATH",
    "create",
)
