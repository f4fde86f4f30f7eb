"""Exception hierarchy for package generation.

Every failure of a build call surfaces as one of these, raised synchronously
from the public build functions.  Nothing here is retried: package
construction is deterministic, so the same input fails the same way.
"""


class OfficePackError(Exception):
    """Base class for all package generation errors."""


class DuplicatePartError(OfficePackError):
    """Two parts were registered at the same partname."""

    def __init__(self, partname: str) -> None:
        super().__init__(f"Part already exists in package: {partname!r}")
        self.partname = partname


class PackagingError(OfficePackError):
    """The archive could not be written, or it references a missing part."""


class EncodingError(OfficePackError):
    """Input text is not valid UTF-8 or cannot be represented in XML."""
