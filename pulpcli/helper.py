"""
pulpcli help renderer.

Overview
- help(globals, commands, context=None, stream=None) appends usage text to a stream.
  • Without a context (or with an unknown one): usage, the command list, the global options.
  • With a known command: usage, the command summary, the global options, then
    the command's own options, defaults shown where declared.

Layout
- Entries use a hanging indent: names on the left, descriptions wrapped at a
  fixed column, continuation lines aligned under it. Flag spellings are never
  truncated; a long names column pushes the description to the next line.
- Spellings are listed shorts first, then longs, each sorted by length, joined
  with " | ", followed by the value placeholder.
"""
import os
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .coercers import Coercer
from .utils import Unset

# Reserved switches are recognised by the parser, not declared as options.
_RESERVED_ROWS = (
    (("-h", "--help"), None, "Show this help message.", Unset),
    (("-v", "--version"), None, "Show the version number.", Unset),
)


def _names(flags):
    shorts = sorted((flag for flag in flags if not flag.startswith("--")), key=len)
    longs = sorted((flag for flag in flags if flag.startswith("--")), key=len)
    return [*shorts, *longs]


def _default(option):
    if option.coercer is Coercer.FLAG or option.default is Unset:
        return Unset
    if option.coercer is Coercer.DIRECTORIES:
        return os.pathsep.join(option.default)
    return str(option.default)


def _rows(options):
    for option in options:
        yield option.flags, option.metavar, option.descr, _default(option)


def help(globals, commands, context=None, stream=None, /, *, prog="pulp", colorful=False):
    """
    Render usage text for the whole program or for one command.

    Parameters
    - globals: iterable of global Option.
    - commands: iterable of Command.
    - context: command name to document, or None for the summary. Unknown
      names fall back to the summary.
    - stream: text stream to append to (defaults to sys.stderr).
    - prog: program name shown in the usage line.
    - colorful: apply styles (left plain otherwise).

    Raises
    - whatever the stream raises on write (e.g. ValueError once it is closed);
      the tables themselves never fail to render.
    """
    console = Console(
        file=stream if stream is not None else sys.stderr,
        no_color=not colorful,
        highlight=False,
        emoji=False,
        markup=False,
    )
    width = max(console.width, 40)

    styles = defaultdict(str, {
        "usage-label": "bold #E6E6F0",
        "usage": "#C8C8D0",
        "group-label": "bold #FF4DA6",
        "command": "bold #00E5FF",
        "names": "#00E5FF",
        "metavar": "italic #9CE19C",
        "description": "#C8C8D0",
        "default": "dim",
        "summary": "italic #E6E6F0",
    })

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        return Text(str(fragment), styler(style))

    commands = tuple(commands)
    command = next((command for command in commands if command.name == context), None)

    def entry(names, descr, padding, indent, suffix=None):
        """Stitch a names column and a wrapped description with a hanging indent."""
        section = Text(" " * padding).append(names)
        if not descr:
            return section
        if len(section) >= indent - 1:
            section.append("\n").append(" " * indent)
        else:
            section.append(" " * (indent - len(section)))
        wrapped = descr.wrap(console, width - indent)
        # Defaults stay in one piece: on the last line if they fit, else on their own.
        if suffix:
            if wrapped and len(wrapped[-1]) + 1 + len(suffix) <= width - indent:
                wrapped[-1].append(" ").append(suffix)
            else:
                wrapped.append(suffix)
        for index, line in enumerate(wrapped):
            if index:
                section.append("\n").append(" " * indent)
            section.append(line)
        return section

    def group(label, rows):
        padding = 2   # Leading spaces before the names column
        indent = 24   # Column for description wrap/hanging indent
        block = Text()
        block.append(text(label, "group-label")).append(":\n")
        for flags, metavar, descr, default in rows:
            names = Text(" | ").join(text(name, "names") for name in _names(flags))
            if metavar:
                names.append(" ").append(text(metavar, "metavar"))
            suffix = None if default is Unset else text("(default: %s)" % default, "default")
            block.append(entry(names, text(descr, "description"), padding, indent, suffix)).append("\n")
        return block

    renders = []

    if command is None:
        renders.append(Text.assemble(
            text("usage: ", "usage-label"),
            text(f"{prog} [global-options] <command> [command-options]", "usage"),
            "\n",
        ))
        listing = Text()
        listing.append(text("commands", "group-label")).append(":\n")
        for each in commands:
            listing.append(entry(text(each.name, "command"), text(each.descr, "description"), 2, 15)).append("\n")
        renders.append(listing)
        renders.append(group("global options", (*_rows(globals), *_RESERVED_ROWS)))
        renders.append(Text.assemble(
            text(f"run '{prog} <command> --help' for the options of a command", "summary"),
            "\n",
        ))
    else:
        arguments = "[arguments...]" if command.passthrough else "[command-options] [-- arguments...]"
        renders.append(Text.assemble(
            text("usage: ", "usage-label"),
            text(f"{prog} [global-options] {command.name} {arguments}", "usage"),
            "\n",
        ))
        renders.append(Text.assemble(text(command.descr, "summary"), "\n"))
        renders.append(group("global options", (*_rows(globals), *_RESERVED_ROWS)))
        if command.options:
            renders.append(group("command options", _rows(command.options)))

    for index, render in enumerate(renders):
        if index:
            console.print()
        console.print(render, end="", soft_wrap=True)


__all__ = (
    "help",
)
