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

from typing import Optional

from installtest.build_scripts.download_release import download_release
from installtest.methods.base import InstallMethod
from installtest.utils.errors import MissingArtifactError


class XCFrameworkMethod(InstallMethod):
    name = "xcframework"

    def target_version(self) -> Optional[str]:
        """
        Release to download, if any.

        A branch build tests the version recorded in dependencies.list
        rather than REALM_TEST_RELEASE.
        """
        if self.settings.test_branch:
            return self.settings.dependencies.get("VERSION")
        return self.settings.test_release

    def fetch(self, platform: str, static: bool):
        version = self.target_version()
        if version:
            download_release(
                self.settings, self.runner, version, "objc" if static else "swift"
            )
            return

        framework = self.settings.build_dir / f"{self.settings.frameworks[0]}.xcframework"
        if not framework.is_dir():
            raise MissingArtifactError(
                f"Missing XCFramework to test in {self.settings.build_dir}"
            )
        print(f"   ⚠️  No release selected, testing existing {framework}")

    def project_args(self, static: bool) -> list:
        if static:
            return ["-project", "Static/StaticExample.xcodeproj", "-scheme", "StaticExample"]
        return ["-project", "XCFramework.xcodeproj", "-scheme", "App"]
