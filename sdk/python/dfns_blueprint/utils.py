from __future__ import annotations

import base64
from typing import Iterable


def utf8_encode(s: str) -> bytes:
    return s.encode("utf-8")


def uint16_be(n: int) -> bytes:
    if n < 0:
        raise ValueError("uint16_be: n must be non-negative")
    if n > 0xFFFF:
        raise ValueError("uint16_be: n exceeds uint16")
    return int(n).to_bytes(2, byteorder="big", signed=False)


def uint64_be(n: int) -> bytes:
    if n < 0:
        raise ValueError("uint64_be: n must be non-negative")
    if n > 0xFFFFFFFFFFFFFFFF:
        raise ValueError("uint64_be: n exceeds uint64")
    return int(n).to_bytes(8, byteorder="big", signed=False)


def concat_bytes(parts: Iterable[bytes]) -> bytes:
    return b"".join(parts)


def to_hex(b: bytes) -> str:
    return b.hex()


def b64url_encode(data: bytes) -> str:
    """
    Base64url encoding (RFC 4648 section 5) with no padding.
    """
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(s: str) -> bytes:
    """
    Base64url decoding (RFC 4648 section 5) accepting missing padding.
    """
    pad = (-len(s)) % 4
    return base64.urlsafe_b64decode((s + ("=" * pad)).encode("ascii"))
