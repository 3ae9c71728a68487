# Path: core/errors.py
# Purpose: Exception taxonomy for precondition violations and fatal operation failures.
# Layer: core.
# Details: Upstream service failures are not exceptions; see core/models/outcome.py.


class PhotoQueryError(Exception):
    """Base class for errors surfaced to callers of the core services."""


class EmptyQueryError(PhotoQueryError, ValueError):
    """Raised when a search is requested without query text."""


class DimensionMismatchError(PhotoQueryError, ValueError):
    """Raised when two vectors from different embedding spaces are compared."""


class ZeroVectorError(PhotoQueryError, ValueError):
    """Raised when cosine similarity is requested for an all-zero vector."""


class EnumerationError(PhotoQueryError):
    """Raised when the set of uploaded images cannot be listed."""


class IngestionInProgressError(PhotoQueryError):
    """Raised when an ingestion run is started while another one is active."""
