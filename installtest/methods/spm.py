#
# Copyright 2024 zhlinh and installtest Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

from pathlib import Path

from installtest.methods.base import InstallMethod
from installtest.utils.pbxproj import pin_requirement_in_file

SPM_PROJECT = "SwiftPackageManager.xcodeproj"
# The real project is stored under a name carthage does not scan, otherwise
# it would fetch the example's package dependencies while building the repo
SPM_HIDDEN_PROJECT = "SwiftPackageManager.notxcodeproj"


def ensure_project_link(example_dir) -> Path:
    """Point SPM_PROJECT/project.pbxproj at the hidden project; idempotent"""
    link = Path(example_dir) / SPM_PROJECT / "project.pbxproj"
    if not link.is_symlink():
        link.parent.mkdir(parents=True, exist_ok=True)
        link.symlink_to(Path("..") / SPM_HIDDEN_PROJECT / "project.pbxproj")
    return link


class SwiftPackageManagerMethod(InstallMethod):
    name = "spm"

    def fetch(self, platform: str, static: bool):
        project_file = ensure_project_link(self.settings.example_dir)

        if self.settings.test_release or self.settings.test_branch:
            pin_requirement_in_file(
                project_file,
                version=self.settings.test_release,
                branch=self.settings.test_branch,
            )

        self.run(["xcodebuild", "-project", SPM_PROJECT, "-resolvePackageDependencies"])

    def project_args(self, static: bool) -> list:
        return ["-project", SPM_PROJECT, "-scheme", "App"]
