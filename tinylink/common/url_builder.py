"""Building public short URLs for display."""

from typing import Mapping, Optional


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
) -> str:
    """Pick the public base URL for short links.

    X-Forwarded-Proto plus X-Forwarded-Host (set by a reverse proxy) win over
    the configured base URL.

    Args:
        headers: Request headers
        fallback_base_url: Base URL from configuration

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    headers_lower = {k.lower(): v for k, v in headers.items()}
    proto: Optional[str] = headers_lower.get("x-forwarded-proto")
    host: Optional[str] = headers_lower.get("x-forwarded-host")

    if proto and host:
        return f"{proto}://{host}"

    return fallback_base_url.rstrip("/")


def build_short_url(
    code: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        code: The short code
        base_url: Base URL (e.g., https://example.com)
        path_prefix: Optional path prefix (e.g., /s)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{code}"
    return f"{base}/{code}"
