"""Custom exceptions used throughout the lifesim package."""

from typing import Any, Optional


class LifeSimError(Exception):
    """Base exception for all lifesim errors.

    All lifesim-specific exceptions should inherit from this class.
    This allows catching all simulation errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(LifeSimError):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Invalid engine parameters (worker or chunk counts)
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class MalformedSeedError(LifeSimError):
    """Raised when a seed cannot be turned into a grid.

    Examples:
    - Rows of different lengths
    - Characters other than '.' and 'O'
    - Dimensions that differ from the requested width/height
    - A header line whose width/height disagree with the request
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.reason = message
        if line is not None:
            details = details or {}
            details["line"] = line
            message = f"{message} (line {line})"

        super().__init__(message=message, details=details)
        self.line = line


class OutOfBoundsError(LifeSimError):
    """Raised when a cell coordinate falls outside the grid.

    Valid construction never produces one; callers treat it as a
    programming error rather than a recoverable condition.
    """

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Cell ({x}, {y}) is outside the {width}x{height} grid"
        details = details or {}
        details.update({"x": x, "y": y, "width": width, "height": height})
        super().__init__(message=message, details=details)
        self.x = x
        self.y = y


class ComputeFailureError(LifeSimError):
    """Raised when a parallel worker fails during a generation step.

    The whole step is aborted; no partial grid is ever returned.
    """

    def __init__(
        self,
        message: str,
        rows: Optional[tuple[int, int]] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if rows is not None:
            details = details or {}
            details["rows"] = f"{rows[0]}:{rows[1]}"

        super().__init__(message=message, details=details)
        self.rows = rows
