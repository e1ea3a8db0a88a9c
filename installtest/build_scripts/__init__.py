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

"""Build, validation and release helpers."""

__all__ = [
    "build_app",
    "download_release",
    "pipeline",
    "validate_build",
]
