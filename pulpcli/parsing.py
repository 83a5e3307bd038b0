"""
pulpcli two-phase command line parser.

Scope
- parse(globals, commands, argv) → Success | ParseError. User mistakes are returned
  as ParseError values; registry mistakes (duplicate spellings or command names)
  raise ValueError/TypeError because they are programming errors.

Algorithm
- Tokens are consumed left to right.
- Before the command word only the global switches are known. The first token
  that is not flag-shaped must name a command exactly.
- After the command word the command's switches are consulted first, then the
  global ones (command-local spellings shadow global spellings).
- Non-flag tokens after the command word, and every token after a literal "--",
  are collected into the remainder in order.
- -h/--help and -v/--version stop parsing immediately, recording the command
  context identified so far.
- Options without a value take their declared default; options without a default
  stay absent. Flags are monotonic; other options keep their last value.

Notes
- Inline values ("--port=8080") are accepted for value-bearing options.
- A lone "-" is not flag-shaped (conventional stand-in for stdin/stdout).
"""
import difflib
from collections import deque
from types import MappingProxyType
from typing import final

from .arguments import DescriptorType, RESERVED, switchboard
from .coercers import CoercionError
from .faults import FaultCode, ParseError
from .utils import Unset, ordinal


@final
class Success(metaclass=DescriptorType):
    """
    Successful parse result.

    Properties
    - global_options: read-only mapping of global option values (defaults applied).
    - command_options: read-only mapping of command option values (defaults applied).
    - command: the selected Command descriptor.
    - remainder: tuple of forwarded tokens.
    - resolved: merged mapping; command-local values win on a name clash.
    """

    __introspectable__ = (
        "global_options",
        "command_options",
        "command",
        "remainder",
    )

    def __new__(cls, global_options, command_options, command, remainder):
        self = super().__new__(cls)
        self._global_options = MappingProxyType(dict(global_options))
        self._command_options = MappingProxyType(dict(command_options))
        self._command = command
        self._remainder = tuple(remainder)
        return self

    @property
    def global_options(self):
        return self._global_options

    @property
    def command_options(self):
        return self._command_options

    @property
    def resolved(self):
        return MappingProxyType({**self._global_options, **self._command_options})


def is_error(result, /):
    """Whether a parse result is the error variant."""
    return isinstance(result, ParseError)


def _flagged(token):
    return token.startswith("-") and token not in ("-", "--")


def _materialize(default):
    # Tuples frozen at declaration become fresh lists on every parse.
    return list(default) if isinstance(default, tuple) else default


class _Parser:
    """
    Single-use parse state. Faults are raised as ParseError internally and
    returned by parse().
    """

    def __init__(self, globals, commands, argv, prog):
        self._globals, self._switches = switchboard(globals, owner="global option set")
        self._commands = {}
        for command in commands:
            if command.name in self._commands:
                raise ValueError(f"command name {command.name!r} is already in use")
            self._commands[command.name] = command
        self._prog = prog
        self._tokens = deque(argv)
        self._index = 0
        self._command = None
        self._global_values = {}
        self._command_values = {}
        self._remainder = []

    def _route(self):
        return self._prog if self._command is None else f"{self._prog} {self._command.name}"

    def _fault(self, message, kind, **options):
        return ParseError(
            message,
            kind=kind,
            context=self._command.name if self._command is not None else None,
            **options,
        )

    def _next(self):
        self._index += 1
        return self._tokens.popleft()

    def parse(self):
        while self._tokens:
            token = self._next()

            if token == "--":
                if self._command is None:
                    raise self._fault(
                        "missing command before '--' at %s position" % ordinal(self._index),
                        FaultCode.MISSING_COMMAND,
                        token=token,
                        hint="try '%s --help' to see all available commands" % self._prog,
                    )
                # A passthrough command's tool sees the separator itself.
                if self._command.passthrough:
                    self._remainder.append(token)
                while self._tokens:
                    self._remainder.append(self._next())
                break

            if _flagged(token):
                self._switch(token)
            elif self._command is None:
                self._select(token)
            else:
                self._remainder.append(token)

        if self._command is None:
            raise self._fault(
                "no command given",
                FaultCode.MISSING_COMMAND,
                hint="try '%s --help' to see all available commands" % self._prog,
            )

        for option in self._globals:
            if option.name not in self._global_values and option.default is not Unset:
                self._global_values[option.name] = _materialize(option.default)
        for option in self._command.options:
            if option.name not in self._command_values and option.default is not Unset:
                self._command_values[option.name] = _materialize(option.default)

        return Success(self._global_values, self._command_values, self._command, self._remainder)

    def _select(self, token):
        try:
            self._command = self._commands[token]
        except KeyError:
            suggestions = difflib.get_close_matches(token, self._commands.keys(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all commands" % (suggestions[0], self._prog)
            except IndexError:
                hint = "try '%s --help' to see all available commands" % self._prog
            raise self._fault(
                "unknown command %r at %s position" % (token, ordinal(self._index)),
                FaultCode.UNKNOWN_COMMAND,
                token=token,
                hint=hint,
            ) from None

    def _switch(self, token):
        input, inline, value = token.partition("=")
        start = self._index

        match RESERVED.get(input):
            case "help":
                raise self._fault("help requested", FaultCode.HELP_REQUESTED, token=token)
            case "version":
                raise self._fault("version requested", FaultCode.VERSION_REQUESTED, token=token)

        if self._command is not None and input in self._command.switches:
            option, values = self._command.switches[input], self._command_values
        elif input in self._switches:
            option, values = self._switches[input], self._global_values
        elif self._command is not None and self._command.passthrough:
            self._remainder.append(token)
            return
        else:
            raise self._fault(
                "unknown flag %r at %s position" % (input, ordinal(start)),
                FaultCode.UNKNOWN_FLAG,
                token=input,
                hint=self._suggest(input),
            )

        if not option.coercer.arity:
            if inline:
                raise self._fault(
                    "flag %r at %s position cannot take a value" % (input, ordinal(start)),
                    FaultCode.TYPE_COERCION_FAILED,
                    token=token,
                    hint="drop '=%s' or run '%s --help' to see the option forms" % (value, self._route()),
                )
            values[option.name] = option.coercer()
            return

        if not inline:
            if not self._tokens:
                raise self._fault(
                    "option %r at %s position requires a value" % (input, ordinal(start)),
                    FaultCode.MISSING_VALUE,
                    token=input,
                    hint="try '%s %s %s'" % (self._route(), input, option.metavar),
                )
            value = self._next()

        try:
            values[option.name] = option.coercer(value)
        except CoercionError as error:
            raise self._fault(
                "value %r of option %r at %s position %s" % (value, input, ordinal(start), error),
                FaultCode.TYPE_COERCION_FAILED,
                token=value,
                hint="run '%s --help' to see the expected value of %r" % (self._route(), input),
            ) from None

    def _suggest(self, input):
        if self._command is None:
            owners = [command.name for command in self._commands.values() if input in command.switches]
            if owners:
                return "%r is an option of %s; put it after the command name (e.g., '%s %s %s')" % (
                    input, ", ".join(map(repr, owners)), self._prog, owners[0], input
                )
            known = self._switches.keys()
        else:
            known = self._command.switches.keys() | self._switches.keys()

        suggestions = difflib.get_close_matches(input, sorted(known), 5)
        try:
            return "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self._route())
        except IndexError:
            return "try '%s --help' to see all available options" % self._route()


def parse(globals, commands, argv, /, *, prog="pulp"):
    """
    Parse an argument vector against a global option set and a command set.

    Parameters
    - globals: iterable of Option available everywhere.
    - commands: iterable of Command.
    - argv: sequence of str, without the program name.
    - prog: program name used in hints.

    Returns
    - Success on a well-formed command line.
    - ParseError for help/version requests and for any user input fault.

    Raises
    - ValueError/TypeError when the registry itself is inconsistent.
    """
    parser = _Parser(globals, commands, list(argv), prog)
    try:
        return parser.parse()
    except ParseError as error:
        return error


__all__ = (
    "Success",
    "parse",
    "is_error",
)
