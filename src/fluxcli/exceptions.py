"""Custom exceptions for fluxcli.

This module defines the exception hierarchy used throughout the package
so callers get structured failures instead of bare exit codes.
"""


class FluxError(Exception):
    """Base exception for all fluxcli errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all fluxcli errors with a single
    except clause if desired.
    """

    pass


class UnsupportedPlatformError(FluxError):
    """Raised when no packaged flux binary matches the current platform.

    fluxcli supports:
    - Operating systems: Linux, macOS (osx), Windows
    - CPU architectures: x64, arm64
    """

    def __init__(self, message: str, platform_key: tuple | None = None) -> None:
        super().__init__(message)
        self.platform_key = platform_key


class BinaryNotFoundError(FluxError):
    """Raised when the flux binary is missing from the installation directory.

    This usually points at a packaging problem: the platform is supported
    but the matching executable was not shipped alongside the application.
    """

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} not found.")
        self.path = path


class InvalidArgumentError(FluxError, ValueError):
    """Raised when an operation receives a malformed argument.

    Raised while building the argument vector, so no process is ever
    spawned for a call that fails this way.
    """

    def __init__(self, argument: str, message: str) -> None:
        super().__init__(f"Invalid {argument}: {message}")
        self.argument = argument


class OperationFailedError(FluxError):
    """Raised when the flux process exits with a non-zero code.

    Attributes:
        operation: Name of the failed operation (e.g. ``reconcile``).
        exit_code: Exit code returned by the flux process.
        output: Combined stdout and stderr captured from the process.

    """

    def __init__(self, operation: str, description: str, exit_code: int, output: str) -> None:
        super().__init__(f"Failed to {description}: {output}")
        self.operation = operation
        self.exit_code = exit_code
        self.output = output


class OperationCancelledError(FluxError):
    """Raised when a caller's cancel event stops a running flux process.

    Cancelling the awaiting task raises ``asyncio.CancelledError`` instead.
    """

    def __init__(self, binary: str) -> None:
        super().__init__(f"{binary} was cancelled before it exited")
        self.binary = binary
