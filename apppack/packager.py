"""
Packaging workflows: annotated text in, zip archive out.

`package_project` builds a plain archive; `package_enhanced_project` also adds
platform scaffolding. Both log the platform/app context of a failure and
re-raise it unchanged.
"""

from __future__ import annotations

import logging

from .archive import ArchiveHandle
from .assembler import assemble
from .constants import FALLBACK_README_TEMPLATE
from .extractor import extract_files
from .file_utils import compact_app_name
from .models import FileMap, get_platform
from .persist import Sink
from .scaffold import scaffold

log = logging.getLogger(__name__)


def _build_archive(
    code: str, app_name: str, platform: str, handle: ArchiveHandle | None = None
) -> ArchiveHandle:
    profile = get_platform(platform)
    compact = compact_app_name(app_name)
    file_map = extract_files(code)
    if not file_map:
        log.info("No file markers recognised; packaging the whole text as one file")
        file_map = {f"{compact}App.{profile.source_ext}": code}
    return assemble(file_map, profile.root_folder(compact), handle)


def _build_enhanced_archive(
    code: str, app_name: str, platform: str, handle: ArchiveHandle | None = None
) -> ArchiveHandle:
    profile = get_platform(platform)
    compact = compact_app_name(app_name)
    file_map: FileMap = extract_files(code)
    if not file_map:
        log.info("No file markers recognised; packaging the whole text as App.%s", profile.source_ext)
        file_map = {
            f"App.{profile.source_ext}": code,
            "README.md": FALLBACK_README_TEMPLATE.format(
                app_name=compact,
                platform_upper=profile.name.upper(),
                ide=profile.ide,
            ),
        }
    handle = assemble(file_map, profile.root_folder(compact), handle)
    scaffold(handle, profile.name, compact)
    return handle


def build_project_archive(code: str, app_name: str, platform: str, enhanced: bool = False) -> ArchiveHandle:
    """Extract and assemble (and scaffold when `enhanced`) without serializing."""
    if enhanced:
        return _build_enhanced_archive(code, app_name, platform)
    return _build_archive(code, app_name, platform)


async def generate_project_zip(
    code: str, app_name: str, platform: str, handle: ArchiveHandle | None = None
) -> bytes:
    """Build the plain archive and return the zip bytes without persisting."""
    handle = _build_archive(code, app_name, platform, handle)
    return await handle.serialize()


async def package_project(
    code: str, app_name: str, platform: str, sink: Sink, handle: ArchiveHandle | None = None
) -> bool:
    """
    Package `code` and persist `<App>-<platform>.zip` through `sink`.

    Pass an empty `handle` to inspect the built archive afterwards.
    """
    try:
        blob = await generate_project_zip(code, app_name, platform, handle)
        file_name = get_platform(platform).archive_name(compact_app_name(app_name))
        await sink.save(blob, file_name)
    except Exception as exc:
        log.error("Error creating project zip for %s (app %r): %s", platform, app_name, exc)
        raise
    log.info("Successfully packaged %s project: %s", platform, file_name)
    return True


async def package_enhanced_project(
    code: str, app_name: str, platform: str, sink: Sink, handle: ArchiveHandle | None = None
) -> bool:
    try:
        handle = _build_enhanced_archive(code, app_name, platform, handle)
        blob = await handle.serialize()
        file_name = get_platform(platform).archive_name(compact_app_name(app_name))
        await sink.save(blob, file_name)
    except Exception as exc:
        log.error(
            "Error creating enhanced project zip for %s (app %r): %s", platform, app_name, exc
        )
        raise
    log.info("Successfully packaged enhanced %s project: %s", platform, file_name)
    return True
