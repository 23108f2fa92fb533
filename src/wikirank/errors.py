"""Exception types raised by the wikirank codecs and containers."""


class DecodeError(ValueError):
    """Raised when a byte stream is truncated or malformed."""


class RangeError(IndexError):
    """Raised when a slice range is inverted or falls outside the list."""


class InvalidVariantError(ValueError):
    """Raised when a node variant tag is not one of the known types."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"unrecognized node variant tag: {tag!r}")
        self.tag = tag
