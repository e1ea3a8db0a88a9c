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

from installtest.methods.base import InstallMethod
from installtest.utils.errors import UsageError

CARTHAGE_PLATFORM_NAMES = {
    "ios": "iOS",
    "osx": "Mac",
    "tvos": "tvOS",
    "watchos": "watchOS",
}


class CarthageMethod(InstallMethod):
    name = "carthage"

    @property
    def cartfile_path(self):
        return self.settings.example_dir / "Cartfile"

    def cartfile_contents(self) -> str:
        if self.settings.test_release:
            version = f" == {self.settings.test_release}"
        elif self.settings.test_branch:
            version = f' "{self.settings.test_branch}"'
        else:
            version = ""
        return f'github "{self.settings.repo}"{version}\n'

    def fetch(self, platform: str, static: bool):
        platform_name = CARTHAGE_PLATFORM_NAMES.get(platform)
        if platform_name is None:
            raise UsageError(f"carthage does not support platform '{platform}'")

        self.cartfile_path.write_text(self.cartfile_contents())

        # Carthage requires that a simulator exist, but `xcodebuild -list` is
        # very slow when many simulators exist, so keep one per platform
        reset_simulators = self.settings.root_dir / "scripts" / "reset-simulators.rb"
        self.run([str(reset_simulators), "-firstOnly"])

        self.run(
            ["carthage", "update", "--use-xcframeworks", "--platform", platform_name]
        )

    def project_args(self, static: bool) -> list:
        return ["-project", "Carthage.xcodeproj", "-scheme", "App"]
