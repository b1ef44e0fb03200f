"""S3-compatible error definitions for versionkeeper.

Every failure the versioning engine reports to its caller is one of the
``S3Error`` variants below. Callers branch on the variant (``except
NoSuchKey``), never on ad hoc flags.
"""


class S3Error(Exception):
    """An S3-compatible error with code, message, and HTTP status.

    Attributes:
        code: The S3 error code string (e.g. "NoSuchKey", "InvalidArgument").
        message: Human-readable error description.
        http_status: The HTTP status code the request handler should return.
        extra_fields: Additional key-value pairs for the error response.
    """

    def __init__(
        self,
        code: str,
        message: str,
        http_status: int = 400,
        extra_fields: dict[str, str] | None = None,
    ) -> None:
        """Initialize the S3 error.

        Args:
            code: S3 error code.
            message: Error description.
            http_status: HTTP status code (default 400).
            extra_fields: Optional extra response fields.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra_fields = extra_fields or {}

    @property
    def is_client_error(self) -> bool:
        """True for 4xx-class errors, False for server-side failures."""
        return 400 <= self.http_status < 500


class NoSuchKey(S3Error):
    """The specified key (or key version) does not exist."""

    def __init__(self, key: str = "") -> None:
        super().__init__(
            code="NoSuchKey",
            message="The specified key does not exist.",
            http_status=404,
            extra_fields={"Key": key} if key else {},
        )


class InvalidArgument(S3Error):
    """An invalid argument was provided."""

    def __init__(self, message: str = "Invalid Argument") -> None:
        super().__init__(code="InvalidArgument", message=message, http_status=400)


class InternalError(S3Error):
    """An internal server error occurred."""

    def __init__(self, message: str = "We encountered an internal error. Please try again.") -> None:
        super().__init__(code="InternalError", message=message, http_status=500)
