"""Client Hello and Server Hello field extraction."""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..core.cursor import ByteCursor
from ..core.errors import (
    HandshakeError,
    MalformedHandshake,
    MalformedLength,
    NotAHelloMessage,
    TruncatedMessage,
    UnsupportedVersion,
)
from ..core.tables import (
    DTLS_RECORD_HEADER_LEN,
    EXT_ALPN,
    EXT_EC_POINT_FORMATS,
    EXT_SERVER_NAME,
    EXT_SIGNATURE_ALGORITHMS,
    EXT_SUPPORTED_GROUPS,
    EXT_SUPPORTED_VERSIONS,
    HANDSHAKE_CLIENT_HELLO,
    HANDSHAKE_SERVER_HELLO,
    HELLO_RANDOM_LEN,
    RECORD_TYPE_HANDSHAKE,
    SNI_HOST_NAME,
    SSL2_CLIENT_HELLO,
    SSL2_LENGTH_MASK,
    SSL2_RECORD_FLAG,
    UNSUPPORTED_VERSIONS,
)
from ..core.types import Extension, FieldSet, HandshakeRole, TransportMode
from ..utils.grease import filter_grease

logger = logging.getLogger(__name__)

# Decoders take the extension payload and return FieldSet updates
ExtensionDecoder = Callable[[ByteCursor, HandshakeRole], dict[str, Any]]

_HELLO_TYPES = {
    HandshakeRole.CLIENT: HANDSHAKE_CLIENT_HELLO,
    HandshakeRole.SERVER: HANDSHAKE_SERVER_HELLO,
}


def _read_u16_list(cur: ByteCursor, what: str) -> tuple[int, ...]:
    if cur.remaining % 2:
        raise MalformedHandshake(f"{what} list has odd length {cur.remaining}")
    return tuple(cur.read_u16() for _ in range(cur.remaining // 2))


def _decode_server_name(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    # Servers acknowledge SNI with an empty payload
    if role is HandshakeRole.SERVER or cur.at_end:
        return {}
    names = cur.read_vector(2)
    while not names.at_end:
        name_type = names.read_u8()
        name = names.read_vector(2).rest()
        if name_type == SNI_HOST_NAME:
            return {"sni": name.decode("ascii", errors="replace")}
    return {}


def _decode_supported_groups(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    return {"supported_groups": _read_u16_list(cur.read_vector(2), "supported group")}


def _decode_ec_point_formats(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    formats = cur.read_vector(1)
    return {"ec_point_formats": tuple(formats.rest())}


def _decode_signature_algorithms(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    return {"signature_algorithms": _read_u16_list(cur.read_vector(2), "signature algorithm")}


def _decode_alpn(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    protocols = cur.read_vector(2)
    names = []
    while not protocols.at_end:
        names.append(protocols.read_vector(1).rest())
    return {"alpn": tuple(names)}


def _decode_supported_versions(cur: ByteCursor, role: HandshakeRole) -> dict[str, Any]:
    if role is HandshakeRole.SERVER:
        return {"supported_versions": (cur.read_u16(),)}
    return {"supported_versions": _read_u16_list(cur.read_vector(1), "supported version")}


EXTENSION_DECODERS: dict[int, ExtensionDecoder] = {
    EXT_SERVER_NAME: _decode_server_name,
    EXT_SUPPORTED_GROUPS: _decode_supported_groups,
    EXT_EC_POINT_FORMATS: _decode_ec_point_formats,
    EXT_SIGNATURE_ALGORITHMS: _decode_signature_algorithms,
    EXT_ALPN: _decode_alpn,
    EXT_SUPPORTED_VERSIONS: _decode_supported_versions,
}


def _version_rank(version: int) -> int:
    # DTLS counts down from 0xfeff
    if version >> 8 == 0xFE:
        return 0xFFFF - version
    return version


def highest_version(versions: tuple[int, ...]) -> int | None:
    """Return the newest non-GREASE version in a supported_versions list."""
    candidates = filter_grease(versions)
    if not candidates:
        return None
    return max(candidates, key=_version_rank)


def _open_record(root: ByteCursor, mode: TransportMode) -> ByteCursor:
    """Strip an optional record header and return a cursor over the message."""
    if root.peek_u8() != RECORD_TYPE_HANDSHAKE:
        return root
    if mode is TransportMode.DATAGRAM:
        # type, version, epoch, sequence number
        root.skip(DTLS_RECORD_HEADER_LEN - 2)
    else:
        # type, version
        root.skip(3)
    return root.read_vector(2)


def _is_ssl2_record(root: ByteCursor, role: HandshakeRole, mode: TransportMode) -> bool:
    if role is not HandshakeRole.CLIENT or mode is TransportMode.DATAGRAM:
        return False
    return bool(root.peek_u8() & SSL2_RECORD_FLAG)


def _open_ssl2_hello(root: ByteCursor) -> int:
    """Read an SSL 2.0 framed CLIENT-HELLO and return its version field.

    The record header is two bytes with the high bit set; the remaining
    fifteen bits give the message length.
    """
    message = root.sub_cursor(root.read_u16() & SSL2_LENGTH_MASK)
    msg_type = message.read_u8()
    if msg_type != SSL2_CLIENT_HELLO:
        raise NotAHelloMessage(f"SSL 2.0 message type {msg_type} is not a client hello")
    return message.read_u16()


def _unsupported_hello(role: HandshakeRole, mode: TransportMode, version: int, strict: bool) -> FieldSet:
    error = UnsupportedVersion(version)
    if strict:
        raise error
    logger.debug(f"Returning partial {role.value} hello: {error}")
    return FieldSet(
        role=role,
        mode=mode,
        legacy_version=version,
        version=version,
        degraded=True,
        issues=(str(error),),
    )


def _open_message(root: ByteCursor, role: HandshakeRole, mode: TransportMode) -> ByteCursor:
    """Read the handshake header and return a cursor over the hello body."""
    message = _open_record(root, mode)
    msg_type = message.read_u8()
    expected = _HELLO_TYPES[role]
    if msg_type != expected:
        if msg_type in _HELLO_TYPES.values():
            raise NotAHelloMessage(
                f"expected {role.value} hello, got handshake type {msg_type}"
            )
        raise NotAHelloMessage(f"handshake type {msg_type} is not a hello")

    length = message.read_u24()
    if mode is not TransportMode.DATAGRAM:
        return message.sub_cursor(length)

    message.skip(2)  # message_seq
    fragment_offset = message.read_u24()
    fragment_length = message.read_u24()
    if fragment_offset != 0:
        raise NotAHelloMessage(f"DTLS fragment at offset {fragment_offset} does not start a hello")
    if fragment_length > length:
        raise MalformedLength(message.offset, fragment_length, length)
    body = message.sub_cursor(fragment_length)
    if fragment_length < length:
        raise TruncatedMessage(body.offset, length, fragment_length)
    return body


def _parse_extensions(
    block: ByteCursor,
    role: HandshakeRole,
    found: dict[str, Any],
    issues: list[str],
) -> list[Extension]:
    extensions: list[Extension] = []
    while not block.at_end:
        if block.remaining < 4:
            raise MalformedHandshake(f"{block.remaining} stray bytes at end of extension block")
        code = block.read_u16()
        payload = block.read_vector(2)
        decoder = EXTENSION_DECODERS.get(code)
        if decoder is None:
            extensions.append(Extension(code, payload.remaining))
            continue

        raw = payload.peek_rest()
        extensions.append(Extension(code, len(raw), raw))
        try:
            found.update(decoder(payload, role))
        except HandshakeError as e:
            logger.debug(f"Dropping undecodable extension 0x{code:04x}: {e}")
            issues.append(f"extension 0x{code:04x} payload not decodable: {e}")
    return extensions


def _parse_client_body(body: ByteCursor, mode: TransportMode, found: dict[str, Any]) -> None:
    body.skip(HELLO_RANDOM_LEN)
    found["session_id_length"] = body.read_vector(1).remaining
    if mode is TransportMode.DATAGRAM:
        body.read_vector(1)  # cookie
    found["ciphers"] = _read_u16_list(body.read_vector(2), "cipher suite")
    found["compression_methods"] = tuple(body.read_vector(1).rest())


def _parse_server_body(body: ByteCursor, found: dict[str, Any]) -> None:
    body.skip(HELLO_RANDOM_LEN)
    found["session_id_length"] = body.read_vector(1).remaining
    found["ciphers"] = (body.read_u16(),)
    found["compression_methods"] = (body.read_u8(),)


def parse_hello(
    data: bytes | bytearray | memoryview,
    role: HandshakeRole | str,
    mode: TransportMode | str = TransportMode.STREAM,
    *,
    strict: bool = False,
) -> FieldSet:
    """Parse a Client Hello or Server Hello into a FieldSet.

    The buffer holds exactly one hello message, either bare (starting with
    the handshake header) or wrapped in a single TLS or DTLS record. A
    client hello in SSL 2.0 record framing is recognised but only its
    version is read, so it comes back degraded.

    Args:
        data: Raw message bytes.
        role: Role of the sender; selects the client or server layout.
        mode: Transport the hello was carried on. Datagram mode expects the
            DTLS handshake header and the client cookie field.
        strict: Raise UnsupportedVersion instead of returning a degraded
            FieldSet for versions whose layout is not decoded.

    Returns:
        Immutable FieldSet. ``degraded`` is set if the version is not
        decodable or an optional extension payload was malformed.

    Raises:
        TruncatedMessage: The buffer ends inside a declared field.
        MalformedLength: A nested length overruns its enclosing block.
        NotAHelloMessage: The message is not a hello of the given role.
        MalformedHandshake: A required section is structurally invalid.
        UnsupportedVersion: Only when ``strict`` is set.
    """
    role = HandshakeRole(role)
    mode = TransportMode(mode)

    root = ByteCursor(data)
    # SSL 2.0 framing is not decoded past the version, whatever it announces
    if _is_ssl2_record(root, role, mode):
        return _unsupported_hello(role, mode, _open_ssl2_hello(root), strict)

    body = _open_message(root, role, mode)
    legacy_version = body.read_u16()
    if legacy_version in UNSUPPORTED_VERSIONS:
        return _unsupported_hello(role, mode, legacy_version, strict)

    found: dict[str, Any] = {}
    issues: list[str] = []
    if role is HandshakeRole.CLIENT:
        _parse_client_body(body, mode, found)
    else:
        _parse_server_body(body, found)

    # Pre-extension hellos end here; anything after the block is padding
    extensions: list[Extension] = []
    if not body.at_end:
        extensions = _parse_extensions(body.read_vector(2), role, found, issues)

    version = highest_version(found.get("supported_versions", ()))
    if version is None:
        version = legacy_version

    return FieldSet(
        role=role,
        mode=mode,
        legacy_version=legacy_version,
        version=version,
        extensions=tuple(extensions),
        degraded=bool(issues),
        issues=tuple(issues),
        **found,
    )
