"""Domain errors raised by the service layer and translated to HTTP by the routers."""


class BoardApiError(Exception):
    """Base class for service-layer errors; carries a client-safe message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsernameAlreadyExistsError(BoardApiError):
    """Raised when signup uses a username that is already taken."""


class BoardNotFoundError(BoardApiError):
    """Raised when a board does not exist or does not belong to the caller."""


class AttachmentNotFoundError(BoardApiError):
    """Raised when a board has no attachment or its bytes cannot be located."""


class AttachmentTooLargeError(BoardApiError):
    """Raised when an upload exceeds MAX_UPLOAD_FILE_BYTES."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(f"File size must not exceed {max_bytes} bytes.")
