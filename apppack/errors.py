class PackagingError(Exception):
    """Base class for failures surfaced by the packaging pipeline."""


class StructureError(PackagingError):
    """The archive refused to create a folder (usually the root folder)."""


class SerializationError(PackagingError):
    """Writing the archive to a zip blob failed."""


class PersistenceError(PackagingError):
    """The persistence sink could not store the blob."""
