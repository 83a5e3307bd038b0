"""
pulpcli type coercers.

Scope
- A closed set of conversions from a raw argv token to a typed option value.
- Each member knows its arity (tokens consumed after the flag), the metavar shown
  in help, and which declared defaults it accepts.

Overview
- FLAG         → True (consumes nothing; absence is False through the default).
- STRING       → the token verbatim (empty allowed).
- INT          → base-10 integer literal, optionally signed.
- FILE         → non-empty path string (no filesystem checks).
- DIRECTORY    → non-empty path string (no filesystem checks).
- DIRECTORIES  → list of non-empty path strings split on the path-list delimiter.

Failures raise CoercionError; the parser turns it into a type-coercion fault.
"""
import os
import re
from collections.abc import Sequence
from enum import Enum

from .utils import Unset


class CoercionError(ValueError):
    """
    Raised when a token cannot be converted by a coercer.

    The message is a short lowercase reason, meant to be embedded in a
    position-first parse error ("... at third position must be an integer").
    """


class Coercer(Enum):
    FLAG = "flag"
    STRING = "string"
    INT = "int"
    FILE = "file"
    DIRECTORY = "directory"
    DIRECTORIES = "directories"

    @property
    def arity(self):
        """Number of argv tokens consumed after the flag spelling."""
        return 0 if self is Coercer.FLAG else 1

    @property
    def metavar(self):
        """Placeholder shown in help next to the flag spellings (None for FLAG)."""
        return {
            Coercer.FLAG: None,
            Coercer.STRING: "STRING",
            Coercer.INT: "INT",
            Coercer.FILE: "FILE",
            Coercer.DIRECTORY: "DIR",
            Coercer.DIRECTORIES: "DIRS",
        }[self]

    def accepts(self, default, /):
        """
        Whether `default` has the shape this coercer produces.

        Used at declaration time so a mismatched default is a programming error
        caught at startup, never something the parser has to deal with.
        """
        match self:
            case Coercer.FLAG:
                return isinstance(default, bool)
            case Coercer.STRING:
                return isinstance(default, str)
            case Coercer.INT:
                return isinstance(default, int) and not isinstance(default, bool)
            case Coercer.FILE | Coercer.DIRECTORY:
                return isinstance(default, str) and bool(default)
            case Coercer.DIRECTORIES:
                return (
                    isinstance(default, Sequence)
                    and not isinstance(default, str)
                    and all(isinstance(item, str) and item for item in default)
                )

    def __call__(self, token=Unset, /, *, delimiter=os.pathsep):
        """
        Convert a raw token into a typed value.

        FLAG takes no token and always yields True. Every other member requires
        exactly one string token.
        """
        if self is Coercer.FLAG:
            if token is not Unset:
                raise CoercionError("flag cannot take a value")
            return True

        if not isinstance(token, str):
            raise TypeError(f"{self.value} coercer requires a string token")

        match self:
            case Coercer.STRING:
                return token
            case Coercer.INT:
                if not re.fullmatch(r"[+-]?[0-9]+", token):
                    raise CoercionError("must be an integer")
                return int(token)
            case Coercer.FILE | Coercer.DIRECTORY:
                if not token:
                    raise CoercionError(f"must be a non-empty {self.value} path")
                return token
            case Coercer.DIRECTORIES:
                directories = [segment for segment in token.split(delimiter) if segment]
                if not directories:
                    raise CoercionError("must name at least one directory (separated by %r)" % delimiter)
                return directories


__all__ = (
    "Coercer",
    "CoercionError",
)
