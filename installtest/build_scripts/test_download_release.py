#!/usr/bin/env python3
"""
Tests for release download and installation.

Run with: python3 -m pytest installtest/build_scripts/test_download_release.py
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from installtest.build_scripts.download_release import (
    download_file,
    download_release,
    release_archive_name,
)
from installtest.utils.errors import DownloadError, InstallTestError, MissingBuildError
from installtest.utils.testing import FakeRunner, make_settings

VERSION = "10.44.0"


def make_framework(path: Path):
    path.mkdir(parents=True)
    (path / "Info.plist").write_text("<plist/>")
    (path / "ios-arm64").mkdir()
    os.symlink("Info.plist", path / "Current.plist")


class ReleaseTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = make_settings(self.tmp.name)
        self.work_dir = self.settings.example_dir
        self.runner = FakeRunner(hooks={"unzip": self.fake_unzip})
        patcher = patch(
            "installtest.build_scripts.download_release.download_file",
            side_effect=self.fake_download,
        )
        self.mock_download = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self):
        self.tmp.cleanup()

    def fake_download(self, url, dst_path):
        Path(dst_path).write_bytes(b"PK\x05\x06" + b"\x00" * 18)

    def fake_unzip(self, command, cwd):
        archive = Path(cwd) / command[-1]
        self.assertTrue(archive.is_file())
        package = Path(cwd) / archive.stem
        if archive.stem.startswith("realm-swift"):
            for name in ["Realm", "RealmSwift"]:
                make_framework(package / "15.2" / f"{name}.xcframework")
                make_framework(package / "14.3.1" / f"{name}.xcframework")
        else:
            make_framework(package / "ios-static" / "Realm.xcframework")


class TestSwiftRelease(ReleaseTestCase):
    def test_download_unpack_and_install(self):
        installed = download_release(self.settings, self.runner, VERSION, "swift")

        self.mock_download.assert_called_once()
        url = self.mock_download.call_args[0][0]
        self.assertEqual(
            url,
            "https://github.com/realm/realm-swift/releases/download/v10.44.0/realm-swift-10.44.0.zip",
        )
        self.assertEqual(self.runner.commands, [["unzip", "-q", "realm-swift-10.44.0.zip"]])
        self.assertFalse((self.work_dir / "realm-swift-10.44.0.zip").exists())

        build_dir = self.settings.build_dir
        self.assertEqual(
            installed,
            [build_dir / "Realm.xcframework", build_dir / "RealmSwift.xcframework"],
        )
        for framework in installed:
            self.assertTrue((framework / "Info.plist").is_file())
            self.assertTrue((framework / "Current.plist").is_symlink())

    def test_stale_frameworks_are_replaced(self):
        stale = self.settings.build_dir / "Realm.xcframework"
        stale.mkdir(parents=True)
        (stale / "stale.txt").write_text("old build")

        download_release(self.settings, self.runner, VERSION, "swift")

        self.assertFalse((stale / "stale.txt").exists())
        self.assertTrue((stale / "Info.plist").is_file())
        self.assertTrue((self.settings.build_dir / "RealmSwift.xcframework").is_dir())

    def test_existing_zip_is_not_downloaded(self):
        self.fake_download(None, self.work_dir / "realm-swift-10.44.0.zip")
        download_release(self.settings, self.runner, VERSION, "swift")
        self.mock_download.assert_not_called()
        self.assertEqual(self.runner.programs(), ["unzip"])

    def test_unpacked_package_is_reused(self):
        self.fake_download(None, self.work_dir / "realm-swift-10.44.0.zip")
        self.fake_unzip(["unzip", "-q", "realm-swift-10.44.0.zip"], self.work_dir)
        download_release(self.settings, self.runner, VERSION, "swift")
        self.mock_download.assert_not_called()
        self.assertEqual(self.runner.calls, [])

    def test_missing_xcode_version(self):
        settings = make_settings(self.tmp.name, xcode_version="16.0")
        with self.assertRaises(MissingBuildError) as ctx:
            download_release(settings, self.runner, VERSION, "swift")
        self.assertIn("16.0", str(ctx.exception))
        self.assertIn(VERSION, str(ctx.exception))


class TestObjcRelease(ReleaseTestCase):
    def test_static_framework_is_installed(self):
        # objc packages are not split per Xcode version
        settings = make_settings(self.tmp.name, xcode_version="16.0")
        installed = download_release(settings, self.runner, VERSION, "objc")

        self.assertEqual(
            installed, [settings.build_dir / "ios-static" / "Realm.xcframework"]
        )
        self.assertTrue((installed[0] / "Info.plist").is_file())
        self.assertEqual(self.runner.commands, [["unzip", "-q", "realm-objc-10.44.0.zip"]])

    def test_unknown_language(self):
        with self.assertRaises(InstallTestError):
            download_release(self.settings, self.runner, VERSION, "kotlin")
        self.assertEqual(self.runner.calls, [])


class TestDownloadFile(unittest.TestCase):
    def make_response(self, chunks):
        response = MagicMock()
        response.__enter__.return_value = response
        response.iter_content.return_value = chunks
        return response

    @patch("installtest.build_scripts.download_release.requests.get")
    def test_streams_to_file(self, mock_get):
        mock_get.return_value = self.make_response([b"abc", b"def"])
        with tempfile.TemporaryDirectory() as td:
            dst = os.path.join(td, "release.zip")
            download_file("https://example.com/release.zip", dst)
            with open(dst, "rb") as f:
                self.assertEqual(f.read(), b"abcdef")
            self.assertFalse(os.path.exists(dst + ".part"))

    @patch("installtest.build_scripts.download_release.requests.get")
    def test_http_error(self, mock_get):
        response = self.make_response([])
        response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        mock_get.return_value = response
        with tempfile.TemporaryDirectory() as td:
            dst = os.path.join(td, "release.zip")
            with self.assertRaises(DownloadError):
                download_file("https://example.com/release.zip", dst)
            self.assertEqual(os.listdir(td), [])


class TestReleaseArchiveName(unittest.TestCase):
    def test_name_from_url_template(self):
        self.assertEqual(
            release_archive_name(
                "https://example.com/download/v{version}/lib-{language}-{version}.zip",
                "1.2.3",
                "objc",
            ),
            "lib-objc-1.2.3.zip",
        )


if __name__ == "__main__":
    unittest.main()
