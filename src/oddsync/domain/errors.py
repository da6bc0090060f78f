"""Error taxonomy for the ingestion pipeline."""

from __future__ import annotations


class IngestionError(RuntimeError):
    """Base class for every failure raised by the ingestion pipeline."""


class FetchError(IngestionError):
    """Raised when the odds feed cannot be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(IngestionError):
    """Raised when the feed document is not well-formed XML."""


class SchemaError(IngestionError):
    """Raised when the parsed feed lacks the expected container structure."""


class NumericCoercionError(IngestionError, ValueError):
    """Raised when a single candidate value is not a usable number."""

    def __init__(self, key: str, value: object) -> None:
        super().__init__(f"Cannot coerce value for {key!r} to a probability: {value!r}")
        self.key = key
        self.value = value


class StorageError(IngestionError):
    """Raised when reading from or writing to the candidate store fails."""


class DuplicateCandidateError(StorageError):
    """Raised when an insert collides with an existing row for the same key."""

    def __init__(self, last_name: str) -> None:
        super().__init__(f"Candidate {last_name!r} already exists")
        self.last_name = last_name
