"""Custom exception hierarchy."""


class FinddupsError(Exception):
    """Base exception for all finddups errors."""


class DetectionError(FinddupsError):
    """Error during duplicate detection."""


class ComparisonError(DetectionError):
    """A file could not be accessed while comparing contents.

    Any of these aborts the whole resolution pass.
    """

    operation = "access"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Error {self.operation} {path}")


class FileOpenError(ComparisonError):
    """Opening a file for comparison failed."""

    operation = "opening"


class FileSeekError(ComparisonError):
    """Seeking past an inferred common prefix failed."""

    operation = "seeking in"


class FileReadError(ComparisonError):
    """Reading a chunk during comparison failed."""

    operation = "reading"


class ConfigError(FinddupsError):
    """Configuration error."""
