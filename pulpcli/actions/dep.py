"""`pulp dep`: forward everything after the command word to Bower."""

from .. import process

NOTE = (
    "Dependency Management with Bower\n\n"
    "The `pulp dep` command invokes the Bower package manager.\n"
    "Run Bower commands like eg. `pulp dep install` instead of `bower install`.\n\n"
    "Consult Bower's help page (`bower help`) for the available commands."
)


def usage() -> None:
    """Show Bower's own command list after pulp's note."""
    process.spawn("bower", ["help"])


def action(project, options) -> None:
    process.spawn("bower", options.get("remainder", ()), cwd=project.root)


__all__ = (
    "NOTE",
    "usage",
    "action",
)
