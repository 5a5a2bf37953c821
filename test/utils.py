# python
"""
Internal helpers and packaging metadata tests.

Scope
- Validate the Unset marker, nullify() and the rename() decorator.
- Validate that pyproject.toml only references files shipped with the project.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import tomllib
import unittest
from pathlib import Path
from unittest import TestCase

from optswitch.utils import UnsetType, Unset, nullify, rename

ROOT = Path(__file__).resolve().parent.parent


class TestUnset(TestCase):
    """Behavioral tests for the Unset marker."""

    def testFalsyAndDistinctFromNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsInstance(Unset, UnsetType)

    def testNoInstanceAttributes(self):
        with self.assertRaises(AttributeError):
            Unset.value = 1

    def testNullify(self):
        self.assertIsNone(nullify(Unset))
        self.assertEqual(nullify(Unset, 7), 7)
        self.assertIsNone(nullify(None, 7))
        self.assertEqual(nullify(0, 7), 0)


class TestRename(TestCase):
    """Behavioral tests for the rename() decorator."""

    def testSetsBothNames(self):
        @rename("reqd")
        def wrapper(callback):
            return callback

        self.assertEqual(wrapper.__name__, "reqd")
        self.assertEqual(wrapper.__qualname__, "reqd")

    def testRejectsNonStringNames(self):
        with self.assertRaises(TypeError):
            rename(None)

    def testParserWrappersAreNamed(self):
        from optswitch import OptionParser

        cli = OptionParser()
        self.assertEqual(cli.flag("-a", "").__name__, "flag")
        self.assertEqual(cli.args().__qualname__, "args")


class TestPackaging(TestCase):
    """Behavioral tests for the project metadata."""

    def testReferencedFilesExist(self):
        with open(ROOT / "pyproject.toml", "rb") as file:
            project = tomllib.load(file)["project"]
        readme = project.get("readme")
        if isinstance(readme, dict):
            readme = readme.get("file")
        if readme is not None:
            self.assertTrue((ROOT / readme).is_file(), readme)
        self.assertNotEqual(readme, "DESIGN.md")


if __name__ == "__main__":
    unittest.main()
