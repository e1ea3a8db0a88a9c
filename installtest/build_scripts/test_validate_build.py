#!/usr/bin/env python3
"""
Tests for archive linkage validation.

Run with: python3 -m pytest installtest/build_scripts/test_validate_build.py
"""

import tempfile
import unittest
from pathlib import Path

from installtest.build_scripts.validate_build import find_embedded_frameworks, validate_build
from installtest.utils.errors import LinkageError


class TestValidateBuild(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.archive = Path(self.tmp.name) / "out.xcarchive"
        self.app = self.archive / "Products" / "Applications" / "App.app"
        self.app.mkdir(parents=True)

    def tearDown(self):
        self.tmp.cleanup()

    def embed(self, *names, app=None):
        frameworks = (app or self.app) / "Frameworks"
        for name in names:
            (frameworks / f"{name}.framework").mkdir(parents=True)

    def test_dynamic_with_frameworks_passes(self):
        self.embed("Realm", "RealmSwift")
        frameworks = validate_build(self.archive, static=False)
        self.assertEqual([f.name for f in frameworks], ["Realm.framework", "RealmSwift.framework"])

    def test_dynamic_without_frameworks_fails(self):
        with self.assertRaises(LinkageError) as ctx:
            validate_build(self.archive, static=False)
        self.assertIn("missing embedded frameworks", str(ctx.exception))

    def test_static_without_frameworks_passes(self):
        # other bundle contents do not count as embedded frameworks
        (self.app / "Frameworks").mkdir()
        (self.app / "Frameworks" / "libswiftCore.dylib").write_text("")
        self.assertEqual(validate_build(self.archive, static=True), [])

    def test_static_with_frameworks_fails(self):
        self.embed("Realm")
        with self.assertRaises(LinkageError) as ctx:
            validate_build(self.archive, static=True)
        self.assertIn("Realm.framework", str(ctx.exception))

    def test_nested_app_frameworks_are_found(self):
        watch_app = self.app / "Watch" / "WatchApp.app"
        self.embed("RealmSwift", app=watch_app)
        self.assertEqual(len(find_embedded_frameworks(self.archive)), 1)

    def test_missing_archive(self):
        self.assertEqual(find_embedded_frameworks(Path(self.tmp.name) / "missing"), [])
        with self.assertRaises(LinkageError):
            validate_build(Path(self.tmp.name) / "missing", static=False)


if __name__ == "__main__":
    unittest.main()
