from cryptsearch.core.config import Settings
from cryptsearch.core.exceptions import CiphertextTooLongError, KeyLengthTooLargeError
from cryptsearch.models.schemas import SearchConfiguration


def check_ciphertext_length(text: str, settings: Settings) -> None:
    """
    Reject ciphertext above the configured size.

    Raises:
        CiphertextTooLongError: If the text is too long
    """
    if len(text) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(text), settings.max_ciphertext_length)


def check_search_limits(config: SearchConfiguration, settings: Settings) -> None:
    """
    Reject key lengths and periods above the configured bound.

    Both fields are checked whatever the family, so the key count of a
    request can always be computed cheaply.

    Raises:
        KeyLengthTooLargeError: If either field exceeds the bound
    """
    limit = settings.max_search_key_length
    if config.max_key_length > limit:
        raise KeyLengthTooLargeError("max_key_length", config.max_key_length, limit)
    if config.period > limit:
        raise KeyLengthTooLargeError("period", config.period, limit)
