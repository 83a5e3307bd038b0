# python
"""
Runtime plumbing tests: subprocess helpers, logging setup, the watch filter.

Conventions
- Test method names follow CamelCase per project convention.
- subprocess and shutil.which are mocked; nothing external runs.
"""

from __future__ import annotations

import io
import logging
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import TestCase, mock

from rich.logging import RichHandler
from watchfiles import Change

from pulpcli import CommandError
from pulpcli import log, process
from pulpcli.watch import SourcesFilter, watch


class TestProcess(TestCase):
    def testMissingExecutable(self):
        with mock.patch("shutil.which", return_value=None):
            with self.assertRaises(CommandError) as context:
                process.spawn("psc", ["src"])
        self.assertIn("`psc` executable not found", context.exception.message)

    def testNonZeroExit(self):
        completed = subprocess.CompletedProcess(["/bin/psc"], 2)
        with mock.patch("shutil.which", return_value="/bin/psc"), \
                mock.patch("subprocess.run", return_value=completed) as run:
            with self.assertRaises(CommandError) as context:
                process.spawn("psc", ["src"], env={"NODE_PATH": "output"})
        self.assertEqual(context.exception.message, "Subprocess exited with code 2.")
        self.assertEqual(run.call_args.args[0], ["/bin/psc", "src"])
        self.assertEqual(run.call_args.kwargs["env"]["NODE_PATH"], "output")

    def testCapture(self):
        completed = subprocess.CompletedProcess(["/bin/browserify"], 0, stdout=b"bundle")
        with mock.patch("shutil.which", return_value="/bin/browserify"), \
                mock.patch("subprocess.run", return_value=completed) as run:
            self.assertEqual(process.capture("browserify", ["index.js"]), "bundle")
        self.assertEqual(run.call_args.kwargs["stdout"], subprocess.PIPE)

    def testShellFailure(self):
        completed = subprocess.CompletedProcess("false", 1)
        with mock.patch("subprocess.run", return_value=completed) as run:
            with self.assertRaises(CommandError):
                process.shell("false")
        self.assertTrue(run.call_args.kwargs["shell"])


class TestLog(TestCase):
    def tearDown(self):
        logger = logging.getLogger(log.ROOT)
        for handler in list(logger.handlers):
            if isinstance(handler, RichHandler):
                logger.removeHandler(handler)

    def testNamespace(self):
        self.assertEqual(log.get_logger("build").name, "pulpcli.build")
        self.assertEqual(log.get_logger("pulpcli.watch").name, "pulpcli.watch")
        self.assertEqual(log.get_logger().name, "pulpcli")

    def testSingleHandler(self):
        log.configure(stream=io.StringIO())
        logger = log.configure(monochrome=True, stream=io.StringIO())
        handlers = [handler for handler in logger.handlers if isinstance(handler, RichHandler)]
        self.assertEqual(len(handlers), 1)
        self.assertTrue(handlers[0].console.no_color)

    def testInfoReachesStream(self):
        stream = io.StringIO()
        log.configure(monochrome=True, stream=stream)
        log.get_logger("build").info("Build successful.")
        log.get_logger("build").debug("hidden")
        self.assertIn("Build successful.", stream.getvalue())
        self.assertNotIn("hidden", stream.getvalue())


class TestWatch(TestCase):
    def testFilter(self):
        accepted = SourcesFilter()
        self.assertTrue(accepted(Change.modified, "/p/src/Main.purs"))
        self.assertTrue(accepted(Change.added, "/p/src/Main.js"))
        self.assertFalse(accepted(Change.modified, "/p/src/notes.txt"))
        self.assertFalse(accepted(Change.modified, "/p/.git/Main.purs"))

    def testNothingToWatch(self):
        callback = mock.Mock()
        with self.assertRaises(CommandError):
            watch([Path("/nonexistent/src")], callback)
        callback.assert_not_called()

    def testRunsOnEveryChange(self):
        callback = mock.Mock()
        batches = [{(Change.modified, "/p/src/Main.purs")}, {(Change.added, "/p/src/Util.purs")}]
        with tempfile.TemporaryDirectory() as directory, \
                mock.patch("pulpcli.watch.watch_changes", return_value=iter(batches)) as changes:
            watch([Path(directory)], callback, debounce=50)
        self.assertEqual(callback.call_count, 3)
        self.assertEqual(changes.call_args.kwargs["debounce"], 50)


if __name__ == "__main__":
    unittest.main()
