"""Constant tables used by the parser and the fingerprint canonicalizer.

Every token, cap, separator and sentinel that appears in a fingerprint is
defined here so the canonicalization rules can be audited in one place.
"""

from __future__ import annotations

# Record layer
RECORD_TYPE_HANDSHAKE = 22
TLS_RECORD_HEADER_LEN = 5
DTLS_RECORD_HEADER_LEN = 13

# SSL 2.0 record header: high bit of the first byte set, 15-bit length
SSL2_RECORD_FLAG = 0x80
SSL2_LENGTH_MASK = 0x7FFF
SSL2_CLIENT_HELLO = 1

# Handshake message types
HANDSHAKE_CLIENT_HELLO = 1
HANDSHAKE_SERVER_HELLO = 2

HELLO_RANDOM_LEN = 32

# Extension types
EXT_SERVER_NAME = 0x0000
EXT_SUPPORTED_GROUPS = 0x000A
EXT_EC_POINT_FORMATS = 0x000B
EXT_SIGNATURE_ALGORITHMS = 0x000D
EXT_ALPN = 0x0010
EXT_SUPPORTED_VERSIONS = 0x002B

# server_name entry type for DNS host names
SNI_HOST_NAME = 0

# Extensions tracked by the prefix but left out of the sorted extension hash
PREFIX_ONLY_EXTENSIONS = frozenset({EXT_SERVER_NAME, EXT_ALPN})

# Protocol version codes
VERSION_SSL2 = 0x0002
VERSION_SSL2_ALT = 0x0200
VERSION_SSL3 = 0x0300
VERSION_TLS10 = 0x0301
VERSION_TLS11 = 0x0302
VERSION_TLS12 = 0x0303
VERSION_TLS13 = 0x0304
VERSION_DTLS10 = 0xFEFF
VERSION_DTLS12 = 0xFEFD
VERSION_DTLS13 = 0xFEFC

VERSION_TOKENS: dict[int, str] = {
    VERSION_TLS13: "13",
    VERSION_TLS12: "12",
    VERSION_TLS11: "11",
    VERSION_TLS10: "10",
    VERSION_SSL3: "s3",
    VERSION_SSL2_ALT: "s2",
    VERSION_SSL2: "s2",
    VERSION_DTLS10: "d1",
    VERSION_DTLS12: "d2",
    VERSION_DTLS13: "d3",
}
VERSION_FALLBACK_TOKEN = "00"

# Versions we can name but whose hello layout is not decoded
UNSUPPORTED_VERSIONS = frozenset({VERSION_SSL2, VERSION_SSL2_ALT})

VERSION_NAMES: dict[int, str] = {
    VERSION_SSL2: "SSL 2.0",
    VERSION_SSL2_ALT: "SSL 2.0",
    VERSION_SSL3: "SSL 3.0",
    VERSION_TLS10: "TLS 1.0",
    VERSION_TLS11: "TLS 1.1",
    VERSION_TLS12: "TLS 1.2",
    VERSION_TLS13: "TLS 1.3",
    VERSION_DTLS10: "DTLS 1.0",
    VERSION_DTLS12: "DTLS 1.2",
    VERSION_DTLS13: "DTLS 1.3",
}

# Transport mode -> leading prefix character
TRANSPORT_TOKENS: dict[str, str] = {
    "stream": "t",
    "datagram": "d",
    "quic": "q",
}

# SNI presence token
SNI_PRESENT_TOKEN = "d"
SNI_ABSENT_TOKEN = "i"

# Two-digit counts
COUNT_CAP = 99
COUNT_WIDTH = 2

# ALPN token
ALPN_FALLBACK_TOKEN = "00"

# Hash segments
HASH_LENGTH = 12
EMPTY_HASH = "0" * HASH_LENGTH

# Server cipher segment when no cipher was decoded
EMPTY_CIPHER_TOKEN = "0000"

# Separators
SEGMENT_SEPARATOR = "_"
VALUE_SEPARATOR = ","

# Fingerprint widths
CLIENT_PREFIX_LEN = 10
SERVER_PREFIX_LEN = 7

# Reserved GREASE codes (RFC 8701)
GREASE_VALUES = frozenset(0x0A0A + 0x1010 * i for i in range(16))
