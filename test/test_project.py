# python
"""
Configuration and project detection tests.

Scope
- .bowerrc reading (defaults, directory key, broken files).
- bower.json validation.
- Project.locate: explicit file, upward search, missing project.

Conventions
- Test method names follow CamelCase per project convention.
- Every test works inside its own temporary directory.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import TestCase

from pulpcli import CommandError
from pulpcli.config import BowerConfig, read_bowerrc, read_manifest
from pulpcli.project import Project


class TemporaryCase(TestCase):
    def setUp(self):
        directory = tempfile.TemporaryDirectory()
        self.addCleanup(directory.cleanup)
        self.root = Path(directory.name).resolve()

    def write(self, relative, content):
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
        return path


class TestBowerrc(TemporaryCase):
    def testMissingFileGivesDefaults(self):
        self.assertEqual(read_bowerrc(self.root).directory, "bower_components")

    def testDirectoryKey(self):
        self.write(".bowerrc", {"directory": "vendor", "registry": "https://example.org"})
        config = read_bowerrc(self.root)
        self.assertEqual(config.directory, "vendor")

    def testEmptyDirectoryFallsBack(self):
        self.write(".bowerrc", {"directory": ""})
        self.assertEqual(read_bowerrc(self.root).directory, "bower_components")

    def testBrokenFileGivesDefaults(self):
        self.write(".bowerrc", "{ not json")
        with self.assertLogs("pulpcli", level="WARNING"):
            self.assertEqual(read_bowerrc(self.root).directory, "bower_components")

    def testExtraKeysKept(self):
        config = BowerConfig.model_validate({"directory": "lib", "analytics": False})
        self.assertEqual(config.directory, "lib")


class TestManifest(TemporaryCase):
    def testValid(self):
        path = self.write("bower.json", {"name": "demo", "devDependencies": {"purescript-console": "^0.1.0"}})
        manifest = read_manifest(path)
        self.assertEqual(manifest.name, "demo")
        self.assertEqual(manifest.dev_dependencies, {"purescript-console": "^0.1.0"})

    def testMissingName(self):
        path = self.write("bower.json", {"version": "1.0.0"})
        with self.assertRaises(CommandError):
            read_manifest(path)

    def testInvalidJson(self):
        path = self.write("bower.json", "{")
        with self.assertRaises(CommandError):
            read_manifest(path)


class TestLocate(TemporaryCase):
    def testFindsInCurrentDirectory(self):
        self.write("bower.json", {"name": "demo"})
        project = Project.locate(cwd=self.root)
        self.assertEqual(project.root, self.root)
        self.assertEqual(project.name, "demo")

    def testSearchesUpwards(self):
        self.write("bower.json", {"name": "demo"})
        nested = self.root / "src" / "Deep"
        nested.mkdir(parents=True)
        project = Project.locate(cwd=nested)
        self.assertEqual(project.root, self.root)

    def testExplicitFile(self):
        self.write("other/custom.json", {"name": "custom"})
        project = Project.locate("other/custom.json", cwd=self.root)
        self.assertEqual(project.name, "custom")
        self.assertEqual(project.root, self.root / "other")

    def testExplicitFileMissing(self):
        with self.assertRaises(CommandError):
            Project.locate("nope.json", cwd=self.root)

    def testNoProject(self):
        # Guard against a stray bower.json above the temporary directory.
        if any((parent / "bower.json").is_file() for parent in self.root.parents):
            self.skipTest("bower.json present above the temporary directory")
        with self.assertRaises(CommandError) as context:
            Project.locate(cwd=self.root)
        self.assertIn("pulp init", context.exception.message)

    def testResolveIsRelativeToRoot(self):
        self.write("bower.json", {"name": "demo"})
        project = Project.locate(cwd=self.root)
        self.assertEqual(project.resolve("src"), self.root / "src")


if __name__ == "__main__":
    unittest.main()
