from __future__ import annotations

from dataclasses import dataclass

# Ordered path -> content mapping produced by the extractor.
FileMap = dict[str, str]


@dataclass(frozen=True)
class ExtractedFile:
    path: str
    content: str


@dataclass(frozen=True)
class SanitizedPath:
    clean_path: str
    parent_folders: str


@dataclass(frozen=True)
class PlatformProfile:
    name: str
    source_ext: str
    ide: str

    def root_folder(self, compact_name: str) -> str:
        return f"{compact_name}-{self.name}"

    def archive_name(self, compact_name: str) -> str:
        return f"{self.root_folder(compact_name)}.zip"


PLATFORMS: dict[str, PlatformProfile] = {
    "ios": PlatformProfile(name="ios", source_ext="swift", ide="Xcode"),
    "android": PlatformProfile(name="android", source_ext="kt", ide="Android Studio"),
}


def get_platform(name: str) -> PlatformProfile:
    try:
        return PLATFORMS[name]
    except KeyError:
        raise ValueError(
            f"unknown platform {name!r} (expected one of: {', '.join(PLATFORMS)})"
        ) from None
