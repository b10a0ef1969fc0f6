"""Exceptions raised by the link engine."""


class ShortenError(ValueError):
    """Base class for errors the user can fix by changing the request."""


class MissingUrl(ShortenError):
    """No URL was submitted."""

    def __init__(self, message: str = "URL required"):
        super().__init__(message)


class InvalidUrl(ShortenError):
    """URL is malformed, uses an unsupported scheme, or its host does not resolve."""


class BadCodeFormat(ShortenError):
    """Custom code does not match [A-Za-z0-9]{3,8}."""

    def __init__(self, message: str = "Code must be 3-8 letters/digits"):
        super().__init__(message)


class CodeTaken(ShortenError):
    """Custom code is already assigned (live or deleted) or reserved."""

    def __init__(self, code: str):
        super().__init__(f"Custom code '{code}' already exists")
        self.code = code


class ExhaustedRetries(ShortenError):
    """Every generated candidate collided with an existing code."""

    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate a unique code after {attempts} attempts")
        self.attempts = attempts


class NotFound(LookupError):
    """No live link exists for the code."""

    def __init__(self, code: str):
        super().__init__(f"Code '{code}' not found")
        self.code = code


class DuplicateCode(Exception):
    """Store rejected an insert because the code already exists."""

    def __init__(self, code: str):
        super().__init__(f"Code '{code}' already exists")
        self.code = code


class StorageError(RuntimeError):
    """Unexpected failure in the backing store."""
