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
from installtest.utils.config.settings import ENV_PLATFORM


class CocoaPodsMethod(InstallMethod):
    name = "cocoapods"

    def fetch(self, platform: str, static: bool):
        # The Podfile reads the environment to pick the platform and linkage
        self.run(["pod", "install"], **{ENV_PLATFORM: platform})

    def project_args(self, static: bool) -> list:
        return ["-workspace", "CocoaPods.xcworkspace", "-scheme", "App"]
