class BitmatchError(ValueError):
    """Base class for user-facing bitmatch errors."""


class InvalidArgumentError(BitmatchError):
    """Raised when the pattern or its bit count cannot be used.

    Covers a malformed bit count, a non-hexadecimal digit, too few digits
    for the requested bit count and bit counts whose size arithmetic
    would overflow.
    """


class InputTooLargeError(BitmatchError):
    """Raised when the input bit length exceeds the addressable range."""
