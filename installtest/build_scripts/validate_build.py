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

from installtest.utils.errors import LinkageError

EMBEDDED_FRAMEWORKS_GLOB = "Products/Applications/**/Frameworks/*.framework"


def find_embedded_frameworks(archive_path) -> list:
    return sorted(Path(archive_path).glob(EMBEDDED_FRAMEWORKS_GLOB))


def validate_build(archive_path, static: bool) -> list:
    """Check the archive's embedded frameworks against the requested linkage"""
    frameworks = find_embedded_frameworks(archive_path)
    if frameworks and static:
        names = ", ".join(f.name for f in frameworks)
        raise LinkageError(
            f"Static build configuration has embedded frameworks: {names}"
        )
    elif not frameworks and not static:
        raise LinkageError("Dynamic build configuration is missing embedded frameworks")
    return frameworks
