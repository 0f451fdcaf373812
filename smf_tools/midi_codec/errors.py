"""Exceptions raised by the SMF reader and writer."""
from __future__ import annotations


class SmfError(ValueError):
    """Base class for codec failures, carrying the stream offset when known."""

    def __init__(self, message: str, offset: int | None = None):
        self.detail = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at {offset})"
        super().__init__(message)


class SmfParserError(SmfError):
    """Raised when a byte stream is not a well-formed Standard MIDI File."""


class MalformedMagicError(SmfParserError):
    """A chunk did not start with the expected four-byte tag."""


class UnexpectedHeaderSizeError(SmfParserError):
    """The ``MThd`` chunk declared a length other than 6."""


class MalformedLengthError(SmfParserError):
    """A variable-length quantity needed more than four bytes."""


class TruncatedStreamError(SmfParserError):
    """The stream ended in the middle of a field."""


class SizeMismatchError(SmfParserError):
    """A track chunk's declared length differs from the bytes its messages used."""


class InvariantViolationError(SmfError):
    """The writer was handed an event it cannot encode as a fixed-size message."""


__all__ = [
    "InvariantViolationError",
    "MalformedLengthError",
    "MalformedMagicError",
    "SizeMismatchError",
    "SmfError",
    "SmfParserError",
    "TruncatedStreamError",
    "UnexpectedHeaderSizeError",
]
