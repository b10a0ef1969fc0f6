"""Short code generation utilities."""

import re
import secrets
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate and validate short codes."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    CUSTOM_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{3,8}")

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        self.default_length = default_length

    def random_code(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each position is an independent uniform draw from the 62-character
        alphabet. Collisions are the caller's problem.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(secrets.choice(self.BASE62_CHARS) for _ in range(length))

    def fallback_code(self) -> str:
        """Generate a last-resort code: 5 random characters plus a 0-999 suffix.

        The result is 6 to 8 characters long, so it still satisfies the
        custom code format.
        """
        return f"{self.random_code(length=5)}{secrets.randbelow(1000)}"

    @classmethod
    def validate_custom(cls, code: str) -> bool:
        """Check if a user-supplied code matches [A-Za-z0-9]{3,8} exactly.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        if not isinstance(code, str):
            return False
        return cls.CUSTOM_CODE_PATTERN.fullmatch(code) is not None
