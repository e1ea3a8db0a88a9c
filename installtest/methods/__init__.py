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

"""Dependency acquisition strategies, one per install method."""

from installtest.methods.base import InstallMethod
from installtest.methods.carthage import CarthageMethod
from installtest.methods.cocoapods import CocoaPodsMethod
from installtest.methods.spm import SwiftPackageManagerMethod
from installtest.methods.xcframework import XCFrameworkMethod
from installtest.utils.errors import UsageError

METHOD_CLASSES = {
    CocoaPodsMethod.name: CocoaPodsMethod,
    CarthageMethod.name: CarthageMethod,
    SwiftPackageManagerMethod.name: SwiftPackageManagerMethod,
    XCFrameworkMethod.name: XCFrameworkMethod,
}


def get_method(name, settings, runner) -> InstallMethod:
    klass = METHOD_CLASSES.get(name)
    if klass is None:
        raise UsageError(f"Unknown method: {name}")
    return klass(settings, runner)


__all__ = [
    "InstallMethod",
    "CarthageMethod",
    "CocoaPodsMethod",
    "SwiftPackageManagerMethod",
    "XCFrameworkMethod",
    "METHOD_CLASSES",
    "get_method",
]
