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
Run settings for installtest.

Settings are resolved once per invocation from three sources:
- installtest.toml in the example directory (library, endpoints, paths)
- the repository's swift-version.sh helper (DEVELOPER_DIR, Xcode version)
- the process environment (Xcode override, release, branch)

The result is an immutable Settings object passed to every step; child
processes get an environment derived from it.
"""

import copy
import os
import re
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import requests

if sys.version_info >= (3, 11, 0, "alpha", 7):
    import tomllib
else:
    import tomli as tomllib

from installtest.utils.errors import SettingsError

CONFIG_FILE_NAME = "installtest.toml"

ENV_XCODE_VERSION = "REALM_XCODE_VERSION"
ENV_TEST_RELEASE = "REALM_TEST_RELEASE"
ENV_TEST_BRANCH = "REALM_TEST_BRANCH"
ENV_DEVELOPER_DIR = "DEVELOPER_DIR"
ENV_BUILD_STATIC = "REALM_BUILD_STATIC"
ENV_PLATFORM = "REALM_PLATFORM"

LATEST_RELEASE = "latest"

# 10.42.1, 10.0.0-beta.3
RELEASE_VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.]+)?$")

LATEST_VERSION_TIMEOUT_SECOND = 30

DEFAULT_CONFIG = {
    "library": {
        "repo": "realm/realm-swift",
        "frameworks": ["Realm", "RealmSwift"],
        "objc_framework": "Realm",
    },
    "endpoints": {
        "latest_version_url": "https://static.realm.io/update/cocoa",
        "release_url": "https://github.com/realm/realm-swift/releases/download/v{version}/realm-{language}-{version}.zip",
    },
    "paths": {
        "root_dir": "../..",
    },
    "commands": {
        "timeout_second": 3 * 3600,
    },
}


def load_config(config_file) -> Dict[str, Any]:
    """
    Load installtest.toml and merge it over the default configuration.

    Falls back to the defaults when the file does not exist.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.isfile(config_file):
        print(f"   ⚠️  Warning: {CONFIG_FILE_NAME} not found at {config_file}")
        print("   ⚠️  Using default configuration values")
        return config

    try:
        with open(config_file, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Failed to parse {config_file}: {e}") from e

    for section, values in toml_data.items():
        if section not in config or not isinstance(values, dict):
            print(f"   ⚠️  Warning: ignoring unknown section [{section}] in {config_file}")
            continue
        config[section].update(values)
    return config


def read_dependencies_list(path) -> Dict[str, str]:
    """Parse the KEY=VALUE dependency manifest; a missing file yields {}"""
    dependencies = {}
    if not os.path.isfile(path):
        return dependencies
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            dependencies[key.strip()] = value.strip()
    return dependencies


def read_setting(runner, root_dir, name, env, cwd=None) -> str:
    """Ask scripts/swift-version.sh for the value of a single variable"""
    script = Path(root_dir) / "scripts" / "swift-version.sh"
    return runner.output(
        [
            "sh",
            "-c",
            f'. "{script}"; set_xcode_and_swift_versions; echo "${name}"',
        ],
        cwd=cwd,
        env=env,
    )


def resolve_latest_release(url, timeout=LATEST_VERSION_TIMEOUT_SECOND) -> str:
    """
    Fetch the newest published version string.

    The endpoint serves plain text, so the body is checked against
    RELEASE_VERSION_PATTERN before it is used in paths and URLs.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SettingsError(f"Failed to fetch latest release from {url}: {e}") from e

    version = response.text.strip()
    if not RELEASE_VERSION_PATTERN.match(version):
        raise SettingsError(
            f"Unexpected latest release response from {url}: {version[:80]!r}"
        )
    return version


@dataclass(frozen=True)
class Settings:
    example_dir: Path
    root_dir: Path
    developer_dir: str
    xcode_version: str
    test_release: Optional[str] = None
    test_branch: Optional[str] = None
    build_static: bool = False
    dependencies: Dict[str, str] = field(default_factory=dict)
    repo: str = DEFAULT_CONFIG["library"]["repo"]
    frameworks: Tuple[str, ...] = tuple(DEFAULT_CONFIG["library"]["frameworks"])
    objc_framework: str = DEFAULT_CONFIG["library"]["objc_framework"]
    release_url: str = DEFAULT_CONFIG["endpoints"]["release_url"]
    timeout_second: int = DEFAULT_CONFIG["commands"]["timeout_second"]
    base_environ: Dict[str, str] = field(default_factory=dict)

    @property
    def build_dir(self) -> Path:
        return self.root_dir / "build"

    @property
    def archive_path(self) -> Path:
        return self.example_dir / "out.xcarchive"

    @property
    def xcode_major_version(self) -> str:
        return self.xcode_version.split(".")[0]

    def with_linkage(self, static: bool) -> "Settings":
        return replace(self, build_static=static)

    def child_env(self, **extra) -> Dict[str, str]:
        """Environment for external tools, derived from these settings"""
        env = dict(self.base_environ)
        env[ENV_DEVELOPER_DIR] = self.developer_dir
        env[ENV_XCODE_VERSION] = self.xcode_version
        if self.test_release:
            env[ENV_TEST_RELEASE] = self.test_release
        if self.build_static:
            env[ENV_BUILD_STATIC] = "1"
        else:
            env.pop(ENV_BUILD_STATIC, None)
        env.update(extra)
        return env

    def describe(self) -> list:
        return [
            f"Example dir: {self.example_dir}",
            f"Root dir: {self.root_dir}",
            f"{ENV_DEVELOPER_DIR}: {self.developer_dir}",
            f"{ENV_XCODE_VERSION}: {self.xcode_version}",
            f"{ENV_TEST_RELEASE}: {self.test_release or '(not set)'}",
            f"{ENV_TEST_BRANCH}: {self.test_branch or '(not set)'}",
        ]


def resolve_settings(example_dir, runner, environ=None, config_file=None) -> Settings:
    """
    Resolve the settings for one invocation.

    DEVELOPER_DIR always comes from the helper script. The Xcode version
    comes from the helper only when REALM_XCODE_VERSION is not already in
    the environment. REALM_TEST_RELEASE=latest is replaced by the newest
    published version.
    """
    example_dir = Path(example_dir).resolve()
    env = dict(os.environ if environ is None else environ)
    config = load_config(config_file or example_dir / CONFIG_FILE_NAME)
    root_dir = (example_dir / config["paths"]["root_dir"]).resolve()

    developer_dir = read_setting(runner, root_dir, ENV_DEVELOPER_DIR, env, cwd=example_dir)
    env[ENV_DEVELOPER_DIR] = developer_dir

    if ENV_XCODE_VERSION in env:
        xcode_version = env[ENV_XCODE_VERSION]
    else:
        xcode_version = read_setting(runner, root_dir, ENV_XCODE_VERSION, env, cwd=example_dir)
    if not xcode_version:
        raise SettingsError(f"Could not determine {ENV_XCODE_VERSION}")

    test_release = env.get(ENV_TEST_RELEASE) or None
    if test_release == LATEST_RELEASE:
        test_release = resolve_latest_release(config["endpoints"]["latest_version_url"])
        print(f"   🔍 Latest release: {test_release}")

    library = config["library"]
    return Settings(
        example_dir=example_dir,
        root_dir=root_dir,
        developer_dir=developer_dir,
        xcode_version=xcode_version,
        test_release=test_release,
        test_branch=env.get(ENV_TEST_BRANCH) or None,
        dependencies=read_dependencies_list(root_dir / "dependencies.list"),
        repo=library["repo"],
        frameworks=tuple(library["frameworks"]),
        objc_framework=library["objc_framework"],
        release_url=config["endpoints"]["release_url"],
        timeout_second=int(config["commands"]["timeout_second"]),
        base_environ=env,
    )
