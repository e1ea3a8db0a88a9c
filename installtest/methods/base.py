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

from installtest.utils.config.settings import Settings


class InstallMethod:
    """One way of pulling the library into the example app"""

    name = ""

    def __init__(self, settings: Settings, runner):
        self.settings = settings
        self.runner = runner

    def fetch(self, platform: str, static: bool):
        """Acquire the library in the form this method needs"""
        raise NotImplementedError

    def project_args(self, static: bool) -> list:
        """xcodebuild arguments selecting the project and scheme"""
        raise NotImplementedError

    def run(self, command, **extra_env):
        self.runner.run(
            command,
            cwd=self.settings.example_dir,
            env=self.settings.child_env(**extra_env),
        )
