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
Download and install a published release of the library.

The release zip is fetched into the example directory and unpacked there;
the XCFramework bundles for the selected language variant are then copied
into the repository's build/ directory, where the XCFramework example
projects expect them:

- swift: build/{Framework}.xcframework for every configured framework,
  taken from the per-Xcode-version folder of the package
- objc: build/ios-static/{Framework}.xcframework
"""

import os
import posixpath
import shutil
from pathlib import Path
from urllib.parse import urlparse

import requests

from installtest.utils.errors import DownloadError, InstallTestError, MissingBuildError

RELEASE_LANGUAGES = ["swift", "objc"]

DOWNLOAD_TIMEOUT_SECOND = 60
DOWNLOAD_CHUNK_SIZE = 1024 * 1024


def release_archive_name(release_url, version, language) -> str:
    """File name of the release zip, e.g. realm-swift-10.42.0.zip"""
    return posixpath.basename(urlparse(release_url).path).format(
        version=version, language=language
    )


def download_file(url, dst_path, timeout=DOWNLOAD_TIMEOUT_SECOND):
    """Stream url to dst_path; a partial download never keeps the final name"""
    tmp_path = f"{dst_path}.part"
    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()
            with open(tmp_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
    except requests.RequestException as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise DownloadError(f"Failed to download {url}: {e}") from e
    os.replace(tmp_path, dst_path)


def copy_framework(src_framework: Path, dst_dir: Path) -> Path:
    """Copy an .xcframework bundle into dst_dir, keeping its symlinks"""
    dst_framework = dst_dir / src_framework.name
    if dst_framework.exists():
        shutil.rmtree(dst_framework)
    shutil.copytree(src_framework, dst_framework, symlinks=True)
    return dst_framework


def unpack_release(settings, runner, version, language) -> Path:
    """
    Make sure the unpacked release package exists in the example directory.

    Skips the download when the zip is already there and skips both when
    the package was already unpacked. The zip is removed after unpacking.
    """
    work_dir = settings.example_dir
    archive_name = release_archive_name(settings.release_url, version, language)
    package_dir = work_dir / Path(archive_name).stem
    if package_dir.is_dir():
        print(f"   📦 Using unpacked release {package_dir.name}")
        return package_dir

    archive_path = work_dir / archive_name
    if not archive_path.is_file():
        url = settings.release_url.format(version=version, language=language)
        print(f"   📦 Downloading {url}")
        download_file(url, archive_path)

    runner.run(["unzip", "-q", archive_name], cwd=work_dir)
    archive_path.unlink()
    return package_dir


def download_release(settings, runner, version, language):
    """
    Install the release's XCFrameworks into the build directory.

    Args:
        settings: Resolved run settings
        runner: Command runner used for unzip
        version: Release version, e.g. 10.42.0
        language: 'swift' (dynamic frameworks) or 'objc' (static framework)

    Returns:
        List of installed framework paths
    """
    if language not in RELEASE_LANGUAGES:
        raise InstallTestError(f"Unknown language {language}")

    package_dir = unpack_release(settings, runner, version, language)

    if language == "swift":
        source_dir = package_dir / settings.xcode_version
        if not source_dir.is_dir():
            raise MissingBuildError(
                f"No build for Xcode version {settings.xcode_version} "
                f"found in {version} release package"
            )
    else:
        source_dir = package_dir / "ios-static"

    build_dir = settings.build_dir
    for framework in settings.frameworks:
        shutil.rmtree(build_dir / f"{framework}.xcframework", ignore_errors=True)
    build_dir.mkdir(parents=True, exist_ok=True)

    if language == "swift":
        names = list(settings.frameworks)
        dst_dir = build_dir
    else:
        names = [settings.objc_framework]
        dst_dir = build_dir / "ios-static"
        dst_dir.mkdir(parents=True, exist_ok=True)

    installed = []
    for name in names:
        src_framework = source_dir / f"{name}.xcframework"
        if not src_framework.is_dir():
            raise MissingBuildError(
                f"{src_framework.relative_to(package_dir.parent)} not found in {version} release package"
            )
        installed.append(copy_framework(src_framework, dst_dir))
        print(f"   ✅ Installed {installed[-1]}")
    return installed
