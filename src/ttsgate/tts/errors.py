"""Custom TTS exceptions."""


class TTSError(Exception):
    """Base exception for synthesis-related errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class ValidationError(TTSError):
    """Exception raised for malformed or missing request input.

    This typically occurs when:
    - Text is missing, empty or whitespace only
    - A webhook payload has the wrong message type
    - A requested sample rate is not the supported one
    """

    pass


class UpstreamError(TTSError):
    """Exception raised when the speech backend fails.

    This typically occurs when:
    - The backend call raises (network, quota, auth)
    - The response carries no inline audio data
    - The audio payload cannot be decoded
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class UnauthorizedError(TTSError):
    """Exception raised when a webhook shared secret does not match."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)
