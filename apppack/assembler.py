from __future__ import annotations

import logging
from typing import Iterable

from .archive import ArchiveHandle
from .constants import README_TEMPLATE
from .file_utils import is_usable_path, sanitize_path
from .models import FileMap

log = logging.getLogger(__name__)


def has_readme(paths: Iterable[str]) -> bool:
    return any("readme" in p.lower() for p in paths)


def assemble(
    file_map: FileMap,
    root_folder_name: str,
    handle: ArchiveHandle | None = None,
) -> ArchiveHandle:
    """
    Place every file of `file_map` under `root_folder_name` inside the archive.

    Parent folders are created before each file, in map order. A README.md is
    synthesized at the root folder when no placed path mentions "readme".
    Raises StructureError if the root folder cannot be created.
    """
    handle = handle if handle is not None else ArchiveHandle()
    root = handle.folder(root_folder_name)

    placed: list[str] = []
    for path, content in file_map.items():
        sanitized = sanitize_path(path)
        if not is_usable_path(sanitized.clean_path):
            log.warning("Skipping block with unusable path %r", path)
            continue
        if sanitized.parent_folders:
            root.folder(sanitized.parent_folders)
        root.add_file(sanitized.clean_path, content)
        placed.append(sanitized.clean_path)

    if not has_readme(placed):
        root.add_file("README.md", README_TEMPLATE.format(root=root_folder_name))

    log.debug("assembled %d file(s) under %s/", len(placed), root_folder_name)
    return handle
