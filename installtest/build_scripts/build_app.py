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

"""
Archive the example app with xcodebuild.

The destination is chosen by platform, the project/workspace and scheme by
install method. Code signing is disabled so the archive can be produced on
CI machines without certificates.
"""

import shutil
from pathlib import Path

from installtest.utils.errors import UsageError

PLATFORM_BUILD_ARGS = {
    "ios": ["-sdk", "iphoneos", "-destination", "generic/platform=iphoneos"],
    "tvos": ["-sdk", "appletvos", "-destination", "generic/platform=appletvos"],
    "watchos": ["-sdk", "watchos", "-destination", "generic/platform=watchos"],
    "osx": ["-sdk", "macosx", "-destination", "generic/platform=macOS"],
    "catalyst": ["-destination", "generic/platform=macOS,variant=Mac Catalyst"],
    "visionos": ["-sdk", "xros", "-destination", "generic/platform=visionOS"],
}

CODE_SIGNING_ARGS = [
    "CODE_SIGN_IDENTITY=",
    "CODE_SIGNING_REQUIRED=NO",
    "AD_HOC_CODE_SIGNING_ALLOWED=YES",
]


def get_build_args(platform, archive_path) -> list:
    if platform not in PLATFORM_BUILD_ARGS:
        raise UsageError(f"Unknown platform: {platform}")
    return (
        ["clean", "archive", "-archivePath", str(archive_path)]
        + PLATFORM_BUILD_ARGS[platform]
        + CODE_SIGNING_ARGS
    )


def build_app(settings, runner, method, platform) -> Path:
    """
    Build a fresh archive of the example app.

    Args:
        settings: Resolved run settings, linkage included
        runner: Command runner
        method: InstallMethod providing the project and scheme
        platform: Target platform

    Returns:
        Path of the produced archive
    """
    archive_path = settings.archive_path
    shutil.rmtree(archive_path, ignore_errors=True)

    command = (
        ["xcodebuild"]
        + method.project_args(settings.build_static)
        + get_build_args(platform, archive_path)
    )
    runner.run(command, cwd=settings.example_dir, env=settings.child_env())
    return archive_path
