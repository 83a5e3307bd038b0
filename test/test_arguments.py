# python
"""
Descriptor behavioral tests.

Scope
- Validate Option construction: names, flag spellings, reserved switches, defaults.
- Validate Command construction: composition of shared groups, collisions, switches.
- Validate immutability and representation provided by the metaclass.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from pulpcli import Coercer, Command, Option, switchboard
from pulpcli.utils import Unset


def noop(project, options):
    pass


class TestOption(TestCase):
    def testFieldsAreExposed(self):
        o = Option("port", "--port", "-p", coercer=Coercer.INT, descr="Port number.", default=1337)
        self.assertEqual(o.name, "port")
        self.assertEqual(o.flags, ("--port", "-p"))
        self.assertIs(o.coercer, Coercer.INT)
        self.assertEqual(o.descr, "Port number.")
        self.assertEqual(o.default, 1337)
        self.assertEqual(o.metavar, "INT")

    def testCanonicalPrefersLongSpelling(self):
        o = Option("to", "-t", "--to", descr="Output.")
        self.assertEqual(o.canonical, "--to")

    def testDefaultIsUnsetWhenOmitted(self):
        o = Option("to", "--to", descr="Output.")
        self.assertIs(o.default, Unset)

    def testFlagDefaultsToFalse(self):
        o = Option("watch", "--watch", coercer=Coercer.FLAG, descr="Watch.")
        self.assertIs(o.default, False)

    def testFlagCannotDefaultToTrue(self):
        with self.assertRaises(ValueError):
            Option("watch", "--watch", coercer=Coercer.FLAG, descr="Watch.", default=True)

    def testMismatchedDefaultRejected(self):
        with self.assertRaises(TypeError):
            Option("port", "--port", coercer=Coercer.INT, descr="Port.", default="1337")

    def testDirectoriesDefaultIsFrozen(self):
        o = Option("includes", "--include", coercer=Coercer.DIRECTORIES, descr="Includes.", default=["a", "b"])
        self.assertEqual(o.default, ("a", "b"))

    def testNameMustBeIdentifier(self):
        with self.assertRaises(ValueError):
            Option("src-path", "--src-path", descr="Sources.")

    def testDescrRequired(self):
        with self.assertRaises(ValueError):
            Option("to", "--to", descr="   ")

    def testAtLeastOneFlag(self):
        with self.assertRaises(TypeError):
            Option("to", descr="Output.")

    def testInvalidSpellingRejected(self):
        for flag in ("to", "---to", "--to_file", "-1", "--"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    Option("to", flag, descr="Output.")

    def testDuplicateSpellingRejected(self):
        with self.assertRaises(ValueError):
            Option("to", "--to", "--to", descr="Output.")

    def testReservedSpellingsRejected(self):
        for flag in ("-h", "--help", "-v", "--version"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    Option("x", flag, descr="Nope.")

    def testCoercerMustBeCoercer(self):
        with self.assertRaises(TypeError):
            Option("port", "--port", coercer=int, descr="Port.")

    def testPropertiesAreReadOnly(self):
        o = Option("to", "--to", descr="Output.")
        with self.assertRaises(AttributeError):
            o.name = "other"  # type: ignore[misc]

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Sub(Option):  # NOQA: F-841
                pass

    def testRepr(self):
        o = Option("to", "--to", descr="Output.")
        self.assertTrue(repr(o).startswith("option(name='to'"))


class TestCommand(TestCase):
    def setUp(self):
        self.src = Option("src_path", "--src-path", coercer=Coercer.DIRECTORY, descr="Sources.", default="src")
        self.force = Option("force", "--force", coercer=Coercer.FLAG, descr="Force.")

    def testFieldsAreExposed(self):
        c = Command("build", "Build the project.", noop, (self.src,))
        self.assertEqual(c.name, "build")
        self.assertEqual(c.descr, "Build the project.")
        self.assertIs(c.action, noop)
        self.assertEqual(c.options, (self.src,))
        self.assertFalse(c.passthrough)
        self.assertTrue(c.project)

    def testSwitchesIndexEverySpelling(self):
        to = Option("to", "--to", "-t", descr="Output.")
        c = Command("build", "Build.", noop, (to,))
        self.assertIs(c.switches["--to"], to)
        self.assertIs(c.switches["-t"], to)

    def testSwitchesAreReadOnly(self):
        c = Command("build", "Build.", noop, (self.src,))
        with self.assertRaises(TypeError):
            c.switches["--x"] = self.src  # type: ignore[index]

    def testIdenticalOptionsCollapse(self):
        c = Command("build", "Build.", noop, (self.src, self.force) + (self.src,))
        self.assertEqual(c.options, (self.src, self.force))

    def testEquivalentOptionsCollapse(self):
        twin = Option("src_path", "--src-path", coercer=Coercer.DIRECTORY, descr="Sources again.", default="src")
        c = Command("build", "Build.", noop, (self.src, twin))
        self.assertEqual(len(c.options), 1)

    def testNameClashWithDifferentFlagsRejected(self):
        other = Option("src_path", "--source", descr="Sources.")
        with self.assertRaises(ValueError):
            Command("build", "Build.", noop, (self.src, other))

    def testFlagClashRejected(self):
        other = Option("source", "--src-path", descr="Sources.")
        with self.assertRaises(ValueError):
            Command("build", "Build.", noop, (self.src, other))

    def testActionMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("build", "Build.", "build")

    def testCommandWordValidated(self):
        with self.assertRaises(ValueError):
            Command("--build", "Build.", noop)

    def testFlags(self):
        c = Command("init", "Init.", noop, passthrough=True, project=False)
        self.assertTrue(c.passthrough)
        self.assertFalse(c.project)

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Sub(Command):  # NOQA: F-841
                pass


class TestSwitchboard(TestCase):
    def testReturnsOrderedOptionsAndMapping(self):
        a = Option("a", "--alpha", "-a", descr="A.")
        b = Option("b", "--beta", descr="B.")
        options, switches = switchboard((a, b))
        self.assertEqual(options, (a, b))
        self.assertEqual(set(switches), {"--alpha", "-a", "--beta"})

    def testRejectsNonOptions(self):
        with self.assertRaises(TypeError):
            switchboard(("--alpha",))


if __name__ == "__main__":
    unittest.main()
