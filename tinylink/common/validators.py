"""Validation utilities for submitted destination URLs."""

import asyncio
import logging
import re
import socket
from typing import Awaitable, Callable, Optional, Tuple
from urllib.parse import quote, urlsplit

from ..errors import InvalidUrl

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:(?P<rest>.*)$", re.DOTALL)
# "host:8080/path" is a bare host with a port, not a scheme
_PORT_SUFFIX = re.compile(r"^\d+(?:[/?#]|$)")
_HOSTNAME_CHARS = re.compile(r"^[A-Za-z0-9.\-]+$")

# Characters left untouched when re-serializing path/query/fragment
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"

Resolver = Callable[[str], Awaitable[object]]


async def resolve_host(hostname: str) -> object:
    """Resolve a hostname with the event loop's resolver."""
    loop = asyncio.get_running_loop()
    return await loop.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)


def is_valid_hostname(hostname: Optional[str]) -> Tuple[bool, str]:
    """Check that a hostname looks like a public internet host.

    Args:
        hostname: Hostname without port or credentials

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not hostname:
        return False, "URL must have a hostname"

    if "." not in hostname:
        return False, "Hostname must contain a dot"

    if hostname.endswith("."):
        return False, "Hostname must not end with a dot"

    if not _HOSTNAME_CHARS.match(hostname):
        return False, "Hostname may only contain letters, digits, hyphens and dots"

    for label in hostname.split("."):
        if not label:
            return False, "Hostname must not contain empty labels"
        if label.startswith("-") or label.endswith("-"):
            return False, "Hostname labels must not start or end with a hyphen"

    return True, ""


def has_scheme(candidate: str) -> bool:
    """Whether ``candidate`` starts with ``scheme:`` rather than ``host:port``."""
    match = _SCHEME_PREFIX.match(candidate)
    if not match:
        return False
    rest = match.group("rest")
    return rest.startswith("//") or not _PORT_SUFFIX.match(rest)


def to_ascii_hostname(hostname: Optional[str]) -> Optional[str]:
    """Punycode-encode an internationalized hostname.

    Raises:
        InvalidUrl: If the hostname cannot be IDNA-encoded
    """
    if not hostname or hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise InvalidUrl(f"Invalid URL: hostname '{hostname}' is not a valid domain") from e


def normalize_url(raw: str) -> Tuple[str, str]:
    """Turn raw user input into a canonical absolute URL, without DNS.

    Args:
        raw: URL as typed by the user

    Returns:
        Tuple of (canonical_url, hostname)

    Raises:
        InvalidUrl: If the URL cannot be parsed or fails syntax checks
    """
    candidate = (raw or "").strip()
    if not candidate:
        raise InvalidUrl("Invalid URL: empty")

    if not has_scheme(candidate):
        candidate = "https://" + candidate

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as e:
        raise InvalidUrl(f"Invalid URL: {e}") from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidUrl("Invalid URL: must use http or https")

    hostname = to_ascii_hostname(parts.hostname)
    valid, error = is_valid_hostname(hostname)
    if not valid:
        raise InvalidUrl(f"Invalid URL: {error}")

    netloc = hostname
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo += ":" + parts.password
        netloc = f"{userinfo}@{netloc}"
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"

    url = f"{scheme}://{netloc}{quote(parts.path or '/', safe=_PATH_SAFE)}"
    if parts.query:
        url += "?" + quote(parts.query, safe=_QUERY_SAFE)
    if parts.fragment:
        url += "#" + quote(parts.fragment, safe=_QUERY_SAFE)

    return url, hostname


class URLValidator:
    """Normalize submitted URLs and confirm their host resolves."""

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        timeout_seconds: float = 5.0,
        check_dns: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize URL validator.

        Args:
            resolver: Async callable resolving a hostname (raises on failure)
            timeout_seconds: Upper bound for a single DNS lookup
            check_dns: Whether to perform the DNS lookup at all
            logger: Optional logger
        """
        self.resolver = resolver or resolve_host
        self.timeout_seconds = timeout_seconds
        self.check_dns = check_dns
        self.logger = logger or logging.getLogger(__name__)

    async def normalize_and_validate(self, raw: str) -> str:
        """Return the canonical form of ``raw`` once its host has resolved.

        Raises:
            InvalidUrl: On any syntax, scheme, hostname or DNS failure
        """
        url, hostname = normalize_url(raw)

        if self.check_dns:
            try:
                await asyncio.wait_for(self.resolver(hostname), timeout=self.timeout_seconds)
            except asyncio.TimeoutError as e:
                self.logger.warning(f"DNS lookup timed out for {hostname}")
                raise InvalidUrl(f"Invalid URL: lookup of '{hostname}' timed out") from e
            except (OSError, UnicodeError) as e:
                self.logger.info(f"DNS lookup failed for {hostname}: {e}")
                raise InvalidUrl(f"Invalid URL: host '{hostname}' does not resolve") from e

        return url
