r"""
pulpcli option and command descriptors.

Overview
- Option: one named, typed setting with its flag spellings, help text and optional default.
- Command: one subcommand with its help text, action and composed option set.
- switchboard(): index an option set by flag spelling, validating collisions.

Introspection & representation
- DescriptorType provides stable __repr__/__rich_repr__ and exposes the fields
  listed in __introspectable__ as read-only properties (via mirror()).
- Descriptor classes are sealed; instances are immutable after construction.

Validation highlights (programming errors, raised at construction time)
- Flag spellings must match r"--?[^\W\d_](-?[^\W_]+)*" and be unique within an option.
- The reserved spellings -h, --help, -v and --version cannot be declared.
- A declared default must match the coercer's output shape (TypeError otherwise).
- Options composed into one set may repeat only when name and flags are identical;
  any other name or spelling collision is a ValueError.

Quick example:
    >>> from pulpcli.arguments import Option, Command
    >>> from pulpcli.coercers import Coercer
    >>> port = Option("port", "--port", "-p", coercer=Coercer.INT, descr="Port number.", default=1337)
    >>> server = Command("server", "Launch a server.", serve, (port,))
"""
import functools
import operator
import re
from collections.abc import Callable, Iterable
from types import MappingProxyType

from .coercers import Coercer
from .utils import *

RESERVED = MappingProxyType({
    "-h": "help",
    "--help": "help",
    "-v": "version",
    "--version": "version",
})


class DescriptorType(type):
    """
    Metaclass for the immutable descriptors of the registry.

    Responsibilities
    - Derive __typename__ from the class name (camel case split with hyphens),
      used in every construction error message.
    - Publish read-only properties for the names in __introspectable__ that the
      class body does not define itself.
    - Provide compact __repr__/__rich_repr__ implementations.
    - Seal the resulting class against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_identity(cls, metadata, /):
    """
    Internal: validate the 'name' and 'descr' fields shared by all descriptors.

    Options are keyed by Python identifiers (they become result keys), commands by
    lowercase words that may contain single hyphens (they are typed on the command line).
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif cls is Option and not name.isidentifier():
        raise ValueError(f"{cls.__typename__} 'name' must be a valid identifier")
    elif cls is Command and not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a valid command word")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = descr


def _sanitize_flags(cls, metadata, /):
    """
    Internal: validate an option's flag spellings and its coercer/default pair.

    Spellings keep their declared order (the first long form is the canonical one
    used in messages); help rendering sorts them on its own.
    """
    flags = []
    if not metadata["flags"]:
        raise TypeError(f"{cls.__typename__} must specify at least one flag")

    for flag in metadata["flags"]:
        if not isinstance(flag, str):
            raise TypeError(f"{cls.__typename__} flags must be strings")
        elif not (flag := flag.strip()):
            raise ValueError(f"{cls.__typename__} flags cannot be empty-strings")
        elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", flag):
            raise ValueError(f"{cls.__typename__} flags must be valid shell-style option names (unicodes are allowed)")
        elif flag in RESERVED:
            raise ValueError(f"{cls.__typename__} flag {flag!r} is reserved for {RESERVED[flag]}")
        elif flag in flags:
            raise ValueError(f"{cls.__typename__} flags cannot contain duplicates")
        flags.append(flag)
    metadata["flags"] = tuple(flags)

    if not isinstance(coercer := metadata["coercer"], Coercer):
        raise TypeError(f"{cls.__typename__} 'coercer' must be a coercer")

    default = metadata["default"]
    if coercer is Coercer.FLAG:
        # Flags are monotonic, so the only meaningful default is False.
        if default is not Unset and not isinstance(default, bool):
            raise TypeError(f"{cls.__typename__} {flags[0]!r} default must be a boolean")
        elif default is True:
            raise ValueError(f"{cls.__typename__} {flags[0]!r} cannot default to true")
        metadata["default"] = False
    elif default is not Unset:
        if not coercer.accepts(default):
            raise TypeError(f"{cls.__typename__} {flags[0]!r} default {default!r} does not match its {coercer.value} coercer")
        if coercer is Coercer.DIRECTORIES:
            metadata["default"] = tuple(default)


def switchboard(options, /, *, owner="option set"):
    """
    Index an option set by flag spelling.

    Identical options (same name and same flags) may appear several times, as
    happens when shared groups are concatenated; only the first is kept. Any
    other collision on a name or a spelling raises ValueError.

    Returns
    - (options, switches): the de-duplicated options tuple and a read-only
      mapping from each spelling to its Option.
    """
    kept = []
    names = {}
    switches = {}

    for option in options:
        if not isinstance(option, Option):
            raise TypeError(f"{owner} options must be options")
        if (known := names.get(option.name)) is not None:
            if known.flags != option.flags:
                raise ValueError(f"{owner} declares option name {option.name!r} twice with different flags")
            continue
        for flag in option.flags:
            if flag in switches:
                raise ValueError(f"{owner} flag {flag!r} is declared by both {switches[flag].name!r} and {option.name!r}")
            switches[flag] = option
        names[option.name] = option
        kept.append(option)

    return tuple(kept), MappingProxyType(switches)


class Option(metaclass=DescriptorType):
    """
    Named, typed option of the command line.

    Properties
    - name: result key (a Python identifier).
    - flags: ordered spellings such as ("--port", "-p").
    - coercer: the Coercer converting the following token, if any.
    - descr: help text.
    - default: declared default or Unset (options without one stay absent
      from parse results). Flag options always default to False.
    """

    __introspectable__ = (
        "name",
        "flags",
        "coercer",
        "descr",
        "default",
    )

    def __new__(cls, name, /, *flags, coercer=Coercer.STRING, descr, default=Unset):
        metadata = {
            "name": name,
            "flags": flags,
            "coercer": coercer,
            "descr": descr,
            "default": default,
        }
        _sanitize_identity(cls, metadata)
        _sanitize_flags(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def metavar(self):
        return self._coercer.metavar

    @property
    def canonical(self):
        """The first long spelling, or the first spelling when there is no long one."""
        return next((flag for flag in self._flags if flag.startswith("--")), self._flags[0])


class Command(metaclass=DescriptorType):
    """
    Subcommand of the command line.

    Properties
    - name: the command word (dispatch key and help context).
    - descr: summary shown in help.
    - action: function value invoked by the driver as action(project, options).
    - options: de-duplicated, ordered option set.
    - passthrough: unknown flags after the command word are forwarded into the
      remainder instead of failing.
    - project: whether the driver must locate a project before running the action.
    - switches: read-only mapping from flag spelling to Option.
    """

    __introspectable__ = (
        "name",
        "descr",
        "options",
        "passthrough",
        "project",
    )

    def __new__(cls, name, descr, action, options=(), /, *, passthrough=False, project=True):
        metadata = {
            "name": name,
            "descr": descr,
        }
        _sanitize_identity(cls, metadata)

        if not isinstance(action, Callable):
            raise TypeError(f"{cls.__typename__} 'action' must be callable")
        if not isinstance(options, Iterable):
            raise TypeError(f"{cls.__typename__} 'options' must be iterable")

        self = super().__new__(cls)
        self._name = metadata["name"]
        self._descr = metadata["descr"]
        self._action = action
        self._options, self._switches = switchboard(options, owner=f"{cls.__typename__} {self._name!r}")
        self._passthrough = bool(passthrough)
        self._project = bool(project)
        return self

    @property
    def action(self):
        return self._action

    @property
    def switches(self):
        return self._switches


__all__ = (
    "RESERVED",
    "DescriptorType",
    "Option",
    "Command",
    "switchboard",
)
