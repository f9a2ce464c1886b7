"""Exceptions for the JSON codec."""

from typing import Optional, Union

PathElement = Union[str, int]


class CodecError(Exception):
    """Base class for every codec failure."""


class SplitterError(CodecError):
    """The input could not be split into fields."""


class MalformedObjectError(SplitterError):
    """The input is not a well-formed JSON object."""


class UnknownFieldError(SplitterError):
    """The input object holds a key the schema does not declare."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"unknown field {field!r}")


class InvalidEncodingError(CodecError):
    """A value does not match the JSON shape of its type.

    ``path`` lists the keys and indices leading from the decoded root to the
    offending value.
    """

    def __init__(self, message: str, path: tuple[PathElement, ...] = ()):
        self.message = message
        self.path = path
        super().__init__(self.render())

    def render(self, skip: int = 0) -> str:
        """Render the message with its path, leaving out the first ``skip`` path elements."""
        path = self.path[skip:]
        if not path:
            return self.message
        return ".".join(str(p) for p in path) + ": " + self.message

    def within(self, key: PathElement) -> "InvalidEncodingError":
        """Return a copy of this error located one level deeper, under ``key``."""
        return type(self)(self.message, (key,) + self.path)


class MissingValueError(InvalidEncodingError):
    """A value is null or absent where one is required."""

    def __init__(self, message: str = "value missing", path: tuple[PathElement, ...] = ()):
        super().__init__(message, path)


class GraffitiError(CodecError):
    """The graffiti field is not a quoted 0x-prefixed 32-byte hex string."""


class InvalidPrefixError(GraffitiError):
    def __init__(self):
        super().__init__("invalid prefix")


class InvalidSuffixError(GraffitiError):
    def __init__(self):
        super().__init__("invalid suffix")


class InvalidLengthError(GraffitiError):
    def __init__(self):
        super().__init__("incorrect length")


class InvalidHexError(GraffitiError):
    def __init__(self, detail: str = "invalid hex"):
        super().__init__(detail)


class FieldDecodeError(CodecError):
    """A record field failed to decode.

    Carries the field name, the list index for list fields and the underlying
    failure, so callers can branch on exactly what went wrong.
    """

    def __init__(
        self,
        field: str,
        cause: Optional[Exception] = None,
        index: Optional[int] = None,
    ):
        self.field = field
        self.cause = cause
        self.index = index
        super().__init__(self._render())
        if cause is not None:
            self.__cause__ = cause

    def _render(self) -> str:
        if self.index is None:
            return f"{self.field}: {self.cause}"
        cause = self.cause
        # The index is already shown next to the field name.
        if isinstance(cause, InvalidEncodingError) and cause.path[:1] == (self.index,):
            cause = cause.render(skip=1)
        return f"{self.field}[{self.index}]: {cause}"


class MissingListEntryError(FieldDecodeError):
    """A list entry is null where an object is required."""

    def __init__(self, field: str, index: int):
        super().__init__(field, None, index)

    def _render(self) -> str:
        return f"{self.field}: entry {self.index} missing"


__all__ = [
    "CodecError",
    "SplitterError",
    "MalformedObjectError",
    "UnknownFieldError",
    "InvalidEncodingError",
    "MissingValueError",
    "GraffitiError",
    "InvalidPrefixError",
    "InvalidSuffixError",
    "InvalidLengthError",
    "InvalidHexError",
    "FieldDecodeError",
    "MissingListEntryError",
]
