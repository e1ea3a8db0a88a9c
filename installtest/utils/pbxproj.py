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
Edits to the Swift package requirement of an Xcode project.pbxproj.

Only the bodies of `requirement = { ... };` blocks are touched, so other
objects in the project that happen to have a `kind` or `version` key
keep their values.
"""

import re

REQUIREMENT_BLOCK_PATTERN = re.compile(r"(requirement = \{)(.*?)(\};)", re.DOTALL)
PIN_PATTERN = re.compile(r"\b(branch|version) = [^;]*;")
KIND_PATTERN = re.compile(r"(\s*)\bkind = [^;]*;")
RANGE_PATTERN = re.compile(r"\s*\b(minimum|maximum)Version = [^;]*;")


def pin_requirement(contents: str, version: str = None, branch: str = None) -> str:
    """
    Pin every package requirement to an exact version or to a branch.

    Args:
        contents: Text of project.pbxproj
        version: Exact release to pin, takes precedence over branch
        branch: Branch to pin

    Returns:
        The rewritten text; unchanged when neither is given
    """
    if version:
        pin, kind = f"version = {version};", "kind = exactVersion;"
    elif branch:
        pin, kind = f"branch = {branch};", "kind = branch;"
    else:
        return contents

    def rewrite(match):
        body = match.group(2)
        if PIN_PATTERN.search(body):
            body = PIN_PATTERN.sub(lambda _: pin, body)
            body = KIND_PATTERN.sub(lambda m: m.group(1) + kind, body)
        else:
            # version range requirement: drop the bounds, add the pin after kind
            body = RANGE_PATTERN.sub("", body)
            body = KIND_PATTERN.sub(lambda m: m.group(1) + kind + m.group(1) + pin, body)
        return match.group(1) + body + match.group(3)

    return REQUIREMENT_BLOCK_PATTERN.sub(rewrite, contents)


def pin_requirement_in_file(filepath, version: str = None, branch: str = None) -> bool:
    """Rewrite a project.pbxproj in place; returns True if it changed"""
    with open(filepath, "r") as f:
        contents = f.read()
    updated = pin_requirement(contents, version=version, branch=branch)
    if updated == contents:
        return False
    with open(filepath, "w") as f:
        f.write(updated)
    return True
