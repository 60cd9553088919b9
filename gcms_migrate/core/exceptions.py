"""Exceptions raised by the migration builder and its transports."""


class MigrationError(Exception):
    """Base exception for all migration operations.

    This is the parent class for all migration-related errors,
    allowing callers to catch every failure with a single except clause.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize migration error.

        Args:
            message: Human-readable error description
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.cause = cause


class MigrationValidationError(MigrationError):
    """Arguments of a builder operation are invalid.

    Raised when:
    - Remote field headers are not a key-value mapping
    - A union field targets no models
    - An enumerable field is created without an enumeration
    - Arguments do not match the expected structure
    - A migration with no effective changes is run
    """

    pass


class UnsupportedOperationError(MigrationError):
    """The requested operation is not defined for the given field type.

    Raised when validations are requested for a non-scalar simple field.
    """

    pass


class MigrationAlreadyRunError(MigrationError):
    """A migration session was submitted more than once."""

    pass


class PlanLoadError(MigrationValidationError):
    """A migration plan file could not be turned into a migration."""

    pass


class TransportError(MigrationError):
    """Base exception for failures talking to the backend."""

    pass


class TransportConnectionError(TransportError):
    """Error connecting to or communicating with the backend.

    Raised when:
    - The HTTP request cannot be sent or times out
    - The backend answers with a non-success HTTP status
    """

    pass


class TransportResponseError(TransportError):
    """The backend answered, but with GraphQL errors or an unexpected shape."""

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause)
        self.errors = errors or []


class TransportTimeoutError(TransportError):
    """A submitted migration did not finish within the allowed time."""

    pass


class TransportConfigurationError(TransportError):
    """Error in transport configuration.

    Raised when:
    - Unsupported transport type specified
    - Endpoint, token or environment are missing for a real backend
    """

    pass
