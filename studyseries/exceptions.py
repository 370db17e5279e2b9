"""Application-level exceptions that carry their own HTTP status."""

from starlette import status


class StudySeriesError(Exception):
    """Base exception for errors raised outside the domain layer."""

    def __init__(
        self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class StorageConflictError(StudySeriesError):
    """
    The stored series changed between load and save.

    Raised by the repository when a compare-and-swap write matches no row.
    Mutations are retried on it; once retries run out it reaches the client
    as a transient 503.
    """

    def __init__(self, series_id: int) -> None:
        """Initialize with the id of the contended series."""
        self.series_id = series_id
        super().__init__(
            "The series was modified concurrently. Please retry.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
