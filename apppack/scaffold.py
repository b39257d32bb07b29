from __future__ import annotations

import json
import logging

from .archive import ArchiveFolder, ArchiveHandle
from .constants import (
    ANDROID_GITIGNORE,
    ANDROID_GRADLE_PROPERTIES,
    ASSET_CATALOG_MARKER,
    IOS_APP_ICON_CONTENTS,
    IOS_GITIGNORE,
    XCODE_VERSION,
)
from .models import get_platform

log = logging.getLogger(__name__)


def _scaffold_ios(root: ArchiveFolder) -> None:
    root.add_file_if_absent(".gitignore", IOS_GITIGNORE)
    root.add_file_if_absent(".xcode-version", XCODE_VERSION)

    # Checked across the whole archive, not only under the root folder.
    if not any(ASSET_CATALOG_MARKER in p for p in root.handle.paths()):
        icons = root.folder(f"{ASSET_CATALOG_MARKER}/AppIcon.appiconset")
        icons.add_file("Contents.json", json.dumps(IOS_APP_ICON_CONTENTS, indent=2))


def _scaffold_android(root: ArchiveFolder) -> None:
    root.add_file_if_absent(".gitignore", ANDROID_GITIGNORE)
    root.folder(".idea")
    root.add_file_if_absent("gradle.properties", ANDROID_GRADLE_PROPERTIES)


_SCAFFOLDERS = {
    "ios": _scaffold_ios,
    "android": _scaffold_android,
}


def scaffold(handle: ArchiveHandle, platform: str, app_name: str) -> None:
    """
    Add platform project files to the `<app_name>-<platform>` root folder.

    Existing files are never overwritten. A missing root folder makes this a
    no-op.
    """
    profile = get_platform(platform)
    root = handle.get_folder(profile.root_folder(app_name))
    if root is None:
        log.debug("No %s/ folder in archive; skipping scaffold", profile.root_folder(app_name))
        return
    before = len(handle.paths())
    _SCAFFOLDERS[profile.name](root)
    log.debug("scaffold added %d %s entries", len(handle.paths()) - before, profile.name)
