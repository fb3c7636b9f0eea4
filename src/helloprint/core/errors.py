"""Exception types raised while parsing handshake messages."""

from __future__ import annotations


class HandshakeError(Exception):
    """Base class for all handshake parsing errors."""


class TruncatedMessage(HandshakeError):
    """A read ran past the end of the supplied buffer.

    Attributes:
        offset: Absolute buffer offset where the read started.
        needed: Number of bytes the read required.
        available: Number of bytes actually left in the buffer.
    """

    def __init__(self, offset: int, needed: int, available: int) -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"truncated message at offset {offset}: need {needed} bytes, {available} available"
        )


class MalformedLength(HandshakeError):
    """A nested length field claims more bytes than its enclosing block holds."""

    def __init__(self, offset: int, declared: int, bound: int) -> None:
        self.offset = offset
        self.declared = declared
        self.bound = bound
        super().__init__(
            f"length {declared} at offset {offset} exceeds enclosing block of {bound} bytes"
        )


class NotAHelloMessage(HandshakeError):
    """The buffer does not start with a hello message of the expected role."""


class UnsupportedVersion(HandshakeError):
    """The protocol version is recognized but its hello layout is not decoded."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"unsupported handshake version 0x{version:04x}")


class MalformedHandshake(HandshakeError):
    """A structurally required section of the hello could not be parsed."""
