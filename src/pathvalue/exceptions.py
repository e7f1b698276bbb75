class PathValueError(Exception):
    """Base exception for all library-specific errors."""

    pass


# --- 1. Errors related to loading library settings ---
class ConfigurationError(PathValueError):
    """Base class for errors encountered while reading settings from the environment."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when settings fail structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors raised by the path algebra ---
class InvalidInputError(PathValueError, TypeError):
    """Raised when a path is built from an unsupported value or a non-file URL."""

    pass


class InvalidSuffixError(PathValueError, ValueError):
    """Raised when a basename suffix is not a bare trailing segment."""

    pass


class NotAFilePathError(PathValueError):
    """Raised when a path written as a directory reference is used as a file."""

    pass


class UnsupportedFormatError(PathValueError, ValueError):
    """Raised when a structured data format is not known."""

    pass


# --- 3. Errors related to filesystem operations ---
class ProtocolError(PathValueError, ValueError):
    """Raised when a filesystem backend is requested for an unknown protocol."""

    pass


class WrongTypeError(PathValueError):
    """Raised when a path exists but is not of the expected kind."""

    def __init__(self, path: str, expected: str):
        super().__init__(f"Path exists but is not a {expected}: {path}")
        self.path = path
        self.expected = expected


class PathNotFoundError(PathValueError, FileNotFoundError):
    """Raised when an operation requiring presence targets an absent path."""

    pass
