from typing import Any


class CryptanalysisError(Exception):
    """Base exception for all cryptanalysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CryptanalysisError):
    """Raised when input validation fails."""

    pass


class CiphertextTooLongError(ValidationError):
    """Raised when ciphertext exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Ciphertext length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class KeyLengthTooLargeError(ValidationError):
    """Raised when a search asks for a key length or period above the limit."""

    def __init__(self, field: str, value: int, max_value: int):
        super().__init__(
            f"{field} {value} exceeds maximum {max_value}",
            {"field": field, "value": value, "max_value": max_value},
        )


class InvalidKeyError(ValidationError):
    """Raised when a key does not fit the cipher family."""

    pass


class SearchError(CryptanalysisError):
    """Base exception for key-space search errors."""

    pass


class SearchCancelledError(SearchError):
    """Raised when a running search is cancelled by its caller."""

    def __init__(self, keys_tried: int):
        super().__init__(
            f"Search cancelled after {keys_tried} keys",
            {"keys_tried": keys_tried},
        )


class SearchTimeoutError(SearchError):
    """Raised when a search runs past its deadline."""

    def __init__(self, timeout: float, keys_tried: int):
        super().__init__(
            f"Search timed out after {timeout}s ({keys_tried} keys tried)",
            {"timeout": timeout, "keys_tried": keys_tried},
        )


class SearchAbortedError(SearchError):
    """Raised when a search thread ended without delivering a result."""

    pass


class JobNotFoundError(SearchError):
    """Raised when a search job id is unknown."""

    def __init__(self, job_id: str):
        super().__init__(
            f"Search job '{job_id}' not found",
            {"job_id": job_id},
        )
