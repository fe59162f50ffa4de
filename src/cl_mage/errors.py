from typing import override


class MageError(Exception):
    """
    Base class for lifecycle violations raised by cl_mage.
    Decode and engine failures are reported as booleans, never through these.
    """

    def __init__(self, message: str = "An unknown image handle error occurred."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{type(self).__name__}: {self.message}"


class HandleDestroyedError(MageError):
    """Raised when an ImageHandle is used after destroy() or export_blob()."""

    def __init__(self, message: str = "Image handle has already been destroyed."):
        super().__init__(message)


class EnvironmentNotInitializedError(MageError):
    """Raised when a handle is created or used outside the init/term window."""

    def __init__(
        self,
        message: str = "Image environment is not initialized. Call init_environment() first.",
    ):
        super().__init__(message)


class MageEnvironmentError(MageError):
    """Raised on a second init_environment() or a term_environment() without init."""
