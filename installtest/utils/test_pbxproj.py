#!/usr/bin/env python3
"""
Tests for Swift package requirement pinning.

Run with: python3 -m pytest installtest/utils/test_pbxproj.py
"""

import os
import tempfile
import unittest

from installtest.utils.pbxproj import pin_requirement, pin_requirement_in_file

PROJECT = """// !$*UTF8*$!
{
	archiveVersion = 1;
	objectVersion = 56;
	objects = {
/* Begin XCBuildConfiguration section */
		3F1A2B3C /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				MARKETING_VERSION = 1.0;
				kind = unrelated;
			};
		};
/* End XCBuildConfiguration section */

/* Begin XCRemoteSwiftPackageReference section */
		3F5F7E1D /* XCRemoteSwiftPackageReference "realm-swift" */ = {
			isa = XCRemoteSwiftPackageReference;
			repositoryURL = "https://github.com/realm/realm-swift";
			requirement = {
				branch = master;
				kind = branch;
			};
		};
/* End XCRemoteSwiftPackageReference section */
	};
}
"""

RANGE_PROJECT = """		3F5F7E1D /* XCRemoteSwiftPackageReference "realm-swift" */ = {
			isa = XCRemoteSwiftPackageReference;
			repositoryURL = "https://github.com/realm/realm-swift";
			requirement = {
				kind = upToNextMajorVersion;
				minimumVersion = 10.0.0;
			};
		};
"""


class TestPinRequirement(unittest.TestCase):
    def test_pin_release(self):
        result = pin_requirement(PROJECT, version="10.44.0")
        self.assertIn("\t\t\t\tversion = 10.44.0;\n\t\t\t\tkind = exactVersion;\n", result)
        self.assertNotIn("branch = master;", result)

    def test_pin_branch(self):
        result = pin_requirement(PROJECT, branch="release/10.x")
        self.assertIn("branch = release/10.x;", result)
        self.assertIn("kind = branch;", result)

    def test_release_takes_precedence_over_branch(self):
        result = pin_requirement(PROJECT, version="10.44.0", branch="master")
        self.assertIn("version = 10.44.0;", result)
        self.assertIn("kind = exactVersion;", result)

    def test_other_objects_are_untouched(self):
        result = pin_requirement(PROJECT, version="10.44.0")
        self.assertIn("kind = unrelated;", result)
        self.assertIn("MARKETING_VERSION = 1.0;", result)
        self.assertIn("objectVersion = 56;", result)

    def test_nothing_to_pin(self):
        self.assertEqual(pin_requirement(PROJECT), PROJECT)

    def test_version_range_becomes_exact(self):
        result = pin_requirement(RANGE_PROJECT, version="10.44.0")
        self.assertNotIn("minimumVersion", result)
        self.assertIn(
            "\t\t\t\tkind = exactVersion;\n\t\t\t\tversion = 10.44.0;\n\t\t\t};", result
        )

    def test_repinning_is_stable(self):
        once = pin_requirement(PROJECT, version="10.44.0")
        self.assertEqual(pin_requirement(once, version="10.44.0"), once)


class TestPinRequirementInFile(unittest.TestCase):
    def test_rewrites_through_symlink(self):
        with tempfile.TemporaryDirectory() as td:
            real = os.path.join(td, "real.pbxproj")
            link = os.path.join(td, "project.pbxproj")
            with open(real, "w") as f:
                f.write(PROJECT)
            os.symlink(real, link)

            self.assertTrue(pin_requirement_in_file(link, branch="develop"))
            self.assertTrue(os.path.islink(link))
            with open(real) as f:
                self.assertIn("branch = develop;", f.read())
            self.assertFalse(pin_requirement_in_file(link, branch="develop"))


if __name__ == "__main__":
    unittest.main()
