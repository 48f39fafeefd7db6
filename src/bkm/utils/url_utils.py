"""URL validation and parsing utilities."""

from urllib.parse import urlparse

ALLOWED_SCHEMES = ("http", "https")


class URLValidationError(ValueError):
    """URL validation error."""

    pass


def validate_url(url: str) -> str:
    """Validate an absolute http(s) URL.

    Args:
        url: URL to validate, already trimmed

    Returns:
        The URL unchanged

    Raises:
        URLValidationError: If the URL is malformed or its scheme is not allowed
    """
    if any(ch.isspace() for ch in url):
        raise URLValidationError(f"Invalid URL format: {url}")

    try:
        parsed = urlparse(url)
        # Accessing port validates it
        parsed.port
    except ValueError as e:
        raise URLValidationError(f"Invalid URL format: {url}") from e

    if not parsed.scheme:
        raise URLValidationError(f"Invalid URL format: {url}")

    validate_url_scheme(parsed.scheme)

    if not parsed.hostname:
        raise URLValidationError(f"Invalid URL format: {url}")

    return url


def validate_url_scheme(scheme: str) -> None:
    """Validate URL scheme is http or https.

    Raises:
        URLValidationError: If the scheme is not allowed
    """
    if scheme.lower() not in ALLOWED_SCHEMES:
        raise URLValidationError(
            f"Invalid protocol: {scheme}:. Only http and https are allowed"
        )
