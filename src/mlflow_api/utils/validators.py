"""Client-side validation for values that must be rejected before any request is sent."""

from pydantic import AnyUrl, TypeAdapter, ValidationError

__all__ = ["is_valid_uri", "validate_key", "validate_uri"]

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_uri(uri: str) -> None:
    """Validate that a string is an absolute URI.

    The string is only checked, never normalized: callers keep the value
    they passed in.

    Args:
        uri: Base URI of a tracking server

    Raises:
        ValueError: If the string is not an absolute URI with a scheme

    Examples:
        >>> validate_uri("http://localhost:5000")  # OK
        >>> validate_uri("not-a-url")  # Raises ValueError
    """
    if not isinstance(uri, str) or not uri.strip():
        raise ValueError("URI cannot be empty")
    try:
        _URL_ADAPTER.validate_python(uri)
    except ValidationError as e:
        raise ValueError(f"Invalid URI: '{uri}'") from e


def is_valid_uri(uri: str) -> bool:
    """Return True if ``validate_uri`` accepts the string."""
    try:
        validate_uri(uri)
    except ValueError:
        return False
    return True


def validate_key(key: str, key_type: str = "key") -> None:
    """Validate a metric, param or tag key.

    Args:
        key: Key from user input
        key_type: Type of key (for error messages), e.g. "metric key"

    Raises:
        ValueError: If key is empty or only whitespace
    """
    if not key or not key.strip():
        raise ValueError(f"Invalid {key_type}: cannot be empty")
