"""
pulpcli faults (parse errors, command failures) and their rendering.

Scope
- FaultCode: stable numeric identifiers for every parse outcome other than success.
  Help and version requests are control-flow signals and carry exit code 0.
- ParseError: the error variant of a parse. Carries a ready-to-display message,
  the command context (if one was identified), the offending token and a hint.
  It is returned by the parser, never raised to the caller.
- CommandError: failures of the runtime collaborators (project lookup, spawned
  tools, file generation). Raised by actions and caught once by the driver.

UX goals
- Position-first messages (“unknown flag '--bogus' at second position”) that name
  the offending token verbatim.
- A single hint line with the closest spelling or the help command to try.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import coalesce, Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - signals (100xx): HELP_REQUESTED, VERSION_REQUESTED
    - routing (111xx): MISSING_COMMAND, UNKNOWN_COMMAND
    - switches (111xx): UNKNOWN_FLAG, MISSING_VALUE, TYPE_COERCION_FAILED
    """
    # --- signals ---
    HELP_REQUESTED       = 10001
    VERSION_REQUESTED    = 10002

    # --- routing errors ---
    MISSING_COMMAND      = 11100
    UNKNOWN_COMMAND      = 11101

    # --- switch errors ---
    UNKNOWN_FLAG         = 11112
    MISSING_VALUE        = 11117
    TYPE_COERCION_FAILED = 11124

    @property
    def exit_code(self):
        return 0 if self in (FaultCode.HELP_REQUESTED, FaultCode.VERSION_REQUESTED) else 1


class ParseError(Exception):
    """
    Error variant of a parse result.

    Options
    - kind: FaultCode of the outcome.
    - context: name of the command identified before the fault, or None.
    - token: the offending argv token verbatim, or None.
    - hint: one-line suggestion, or None.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        assert isinstance(options.get("kind"), FaultCode)
        super().__init__(coalesce(message, ""))
        self.message = coalesce(message, "")
        self.options = MappingProxyType(options)

    @property
    def kind(self):
        return self.options["kind"]

    @property
    def context(self):
        return self.options.get("context")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def exit_code(self):
        return self.kind.exit_code

    @property
    def help(self):
        return self.kind is FaultCode.HELP_REQUESTED

    @property
    def version(self):
        return self.kind is FaultCode.VERSION_REQUESTED

    def render(self, *, colorful=False):
        """
        Build the displayable form: a red "Error:" lead, the message and the hint.
        """
        styles = defaultdict(str, {
            "error-label": "bold red",
            "error-message": "",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), style)

        message = Text.assemble(text("Error:", styler("error-label")), " ", text(self.message, styler("error-message")))
        if not self.hint:
            return message
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint")))
        return Group(message, hint)

    def __repr__(self):
        return f"parse-error(kind={self.kind.name}, message={self.message!r}, context={self.context!r})"


class CommandError(Exception):
    """
    Failure of a command action or of one of its collaborators.

    The message is a complete sentence suitable for the log; the driver maps
    any CommandError to exit code 1.
    """

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message


__all__ = (
    "FaultCode",
    "ParseError",
    "CommandError",
)
