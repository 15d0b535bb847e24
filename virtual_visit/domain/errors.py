"""
Decode error taxonomy.

Only required fields produce errors. Optional fields degrade silently to None
and never surface here.
"""


class DecodeError(Exception):
    """Base class for a failed visit summary decode."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class MissingFieldError(DecodeError):
    """A mandatory field is absent or has the wrong shape."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Missing or malformed required field '{field}'")


class InvalidEnumValueError(DecodeError):
    """A mandatory enumerated field carries an unrecognized wire string."""

    def __init__(self, field: str, raw_value: str, replacement: str | None = None) -> None:
        message = f"Invalid value {raw_value!r} for field '{field}'"
        if replacement is not None:
            message += f" (deprecated spelling, renamed to {replacement!r})"
        super().__init__(field, message)
        self.raw_value = raw_value
        self.replacement = replacement
