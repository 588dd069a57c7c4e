"""
Error types raised by Revival Scout.
"""


class RevivalScoutError(Exception):
    """Base class for all Revival Scout errors."""


class DataUnavailable(RevivalScoutError):
    """A data source (issues, commits, repository) could not be fetched."""

    def __init__(self, source: str, reason: str | Exception):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch {source}: {reason}")


class ComputationFault(RevivalScoutError):
    """A calculator failed against unexpected input during full analysis."""


class MalformedTimestamp(RevivalScoutError, ValueError):
    """A required timestamp was missing or could not be parsed."""

    def __init__(self, value: object, field: str | None = None):
        self.value = value
        self.field = field
        label = f" for {field}" if field else ""
        super().__init__(f"Malformed timestamp{label}: {value!r}")
