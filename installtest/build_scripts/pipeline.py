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
Fetch, build and validate pipeline for one or all combinations.

Each step returns a CliResult; the first failing step ends the
combination and the first failing combination ends the matrix.
"""

import time

from installtest.build_scripts.build_app import build_app
from installtest.build_scripts.validate_build import validate_build
from installtest.methods import get_method
from installtest.targets import LINKAGE_DYNAMIC, LINKAGE_STATIC
from installtest.utils.context.result import CliResult
from installtest.utils.errors import InstallTestError, PreconditionError

MATRIX_PLATFORMS = ["ios", "osx", "tvos", "watchos", "catalyst"]
MATRIX_METHODS = ["cocoapods", "carthage", "spm", "xcframework"]
# visionOS builds need the Xcode 15 SDKs
VISIONOS_XCODE_MAJOR_VERSION = "15"


def run_step(func, *args) -> CliResult:
    try:
        return CliResult(value=func(*args))
    except InstallTestError as e:
        return CliResult(error=e)
    except OSError as e:
        # filesystem failures in the working tree end the run like any other step
        error = PreconditionError(f"{type(e).__name__}: {e}")
        error.__cause__ = e
        return CliResult(error=error)


def is_static_build(method, linkage) -> bool:
    # The SPM example has a single target, so Xcode links the package statically
    return linkage == LINKAGE_STATIC or method == "spm"


def run_combination(settings, runner, platform, method, linkage=LINKAGE_DYNAMIC) -> CliResult:
    """Run fetch, build and validate for a single combination"""
    static = is_static_build(method, linkage)
    settings = settings.with_linkage(static)

    print(f"Testing {method} for {platform}", flush=True)

    result = run_step(get_method, method, settings, runner)
    if result.is_failure():
        return result
    install_method = result.get_value()

    steps = [
        (install_method.fetch, platform, static),
        (build_app, settings, runner, install_method, platform),
        (validate_build, settings.archive_path, static),
    ]
    for func, *args in steps:
        result = run_step(func, *args)
        if result.is_failure():
            return result
    return CliResult(value=(platform, method, linkage))


def iter_matrix(xcode_major_version):
    """Yield every (platform, method, linkage) that test-all runs, in order"""
    platforms = list(MATRIX_PLATFORMS)
    if xcode_major_version == VISIONOS_XCODE_MAJOR_VERSION:
        platforms.append("visionos")

    for platform in platforms:
        for method in MATRIX_METHODS:
            if platform == "catalyst" and method == "carthage":
                continue
            if platform == "visionos" and method != "spm":
                continue
            yield platform, method, LINKAGE_DYNAMIC

        if platform != "visionos":
            yield platform, "cocoapods", LINKAGE_STATIC

    yield "ios", "xcframework", LINKAGE_STATIC


def run_matrix(settings, runner) -> CliResult:
    """
    Run every combination of the test matrix.

    Returns:
        CliResult whose value is the list of passed combinations, or whose
        error is the first failure
    """
    before_time = time.time()
    passed = []
    for platform, method, linkage in iter_matrix(settings.xcode_major_version):
        print(f"\n{'=' * 80}")
        print(f"{platform} / {method} / {linkage}")
        print(f"{'=' * 80}\n")

        result = run_combination(settings, runner, platform, method, linkage)
        if result.is_failure():
            print(f"\n❌ {method} for {platform} ({linkage}) FAILED")
            return result
        print(f"\n✅ {method} for {platform} ({linkage}) SUCCEEDED")
        passed.append(result.get_value())

    after_time = time.time()
    print(f"\n✅ All {len(passed)} combinations passed")
    print(f"use time: {int(after_time - before_time)} s")
    return CliResult(value=passed)
