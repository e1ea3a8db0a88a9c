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
Exception types raised by installtest.

Every failure is fatal to the run; the CLI prints the message and exits 1.
"""


class InstallTestError(Exception):
    """Base class for all installtest errors"""
    pass


class UsageError(InstallTestError):
    """Invalid invocation; the CLI prints the help text"""
    pass


class SettingsError(InstallTestError):
    """Toolchain or release settings could not be resolved"""
    pass


class CommandError(InstallTestError):
    """An external command failed, timed out or could not be started"""

    def __init__(self, command, returncode, message=None):
        self.command = list(command)
        self.returncode = returncode
        if message is None:
            message = f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        super().__init__(message)


class DownloadError(InstallTestError):
    """A release archive could not be downloaded"""
    pass


class PreconditionError(InstallTestError):
    """A required artifact or build result is not what the run expects"""
    pass


class MissingBuildError(PreconditionError):
    """The release package has no build for the selected Xcode version"""
    pass


class MissingArtifactError(PreconditionError):
    """There is no XCFramework available to test"""
    pass


class LinkageError(PreconditionError):
    """The archive's embedded frameworks do not match the requested linkage"""
    pass
