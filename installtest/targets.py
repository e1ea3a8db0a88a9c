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

"""Platforms, install methods and linkages understood by installtest."""

PLATFORMS = ["ios", "osx", "tvos", "watchos", "visionos", "catalyst"]

METHODS = ["cocoapods", "carthage", "spm", "xcframework"]

LINKAGE_STATIC = "static"
LINKAGE_DYNAMIC = "dynamic"
LINKAGES = [LINKAGE_STATIC, LINKAGE_DYNAMIC]

TEST_ALL = "test-all"
