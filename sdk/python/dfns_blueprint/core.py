from __future__ import annotations

import hashlib
import logging
from typing import Any, Tuple

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives import serialization

from eth_utils import keccak, to_checksum_address

import rfc8785  # JCS canonicalization

from .utils import (
    utf8_encode,
    uint16_be,
    uint64_be,
    concat_bytes,
    to_hex,
)

logger = logging.getLogger(__name__)

ADDRESS_LENGTH = 20
RAW_PUBLIC_KEY_LENGTH = 64
COMPRESSED_PUBLIC_KEY_LENGTH = 33
UNCOMPRESSED_PUBLIC_KEY_LENGTH = 65

KEYGEN_JOB_ID = 0
KEY_REFRESH_JOB_ID = 1
SIGN_JOB_ID = 2

META_SALT = "dfns"
KEYGEN_SALT = "dfns-keygen"
KEY_REFRESH_SALT = "dfns-key-refresh"
SIGNING_SALT = "dfns-signing"


# ─────────────────────────────────────────────
# Hash primitives
# ─────────────────────────────────────────────

def keccak256(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"keccak256 expects bytes, got {type(data).__name__}")
    try:
        return keccak(bytes(data))
    except ImportError:
        # eth-hash raises this when no backend can be loaded
        logger.critical("Keccak-256 backend unavailable; install eth-hash[pycryptodome]")
        raise


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def canonicalize_json(obj: Any) -> bytes:
    """
    RFC 8785 JCS canonicalization
    """
    canonical = rfc8785.dumps(obj)
    if isinstance(canonical, bytes):
        return canonical
    return utf8_encode(canonical)


# ─────────────────────────────────────────────
# Operator identity
# ─────────────────────────────────────────────

def derive_operator_address(public_key: bytes) -> bytes:
    """
    Map a public key to its 20-byte operator address.

    The address is the low-order 160 bits of keccak256(public_key), i.e. the
    last 20 bytes of the big-endian digest. The key is hashed as given: no
    length or curve check happens here, so an empty or malformed key still
    yields a deterministic (meaningless) address.
    """
    digest = keccak256(public_key)
    return digest[-ADDRESS_LENGTH:]


def operator_address_hex(public_key: bytes) -> str:
    """
    EIP-55 checksummed form of derive_operator_address.
    """
    return to_checksum_address(derive_operator_address(public_key))


# ─────────────────────────────────────────────
# secp256k1 keys
# ─────────────────────────────────────────────

def _raw_public_bytes(public_key: ec.EllipticCurvePublicKey) -> bytes:
    uncompressed = public_key.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    # drop the 0x04 SEC1 tag, leaving X || Y
    return uncompressed[1:]


def generate_keypair() -> Tuple[bytes, bytes]:
    """
    Returns (private_key_32_bytes, public_key_64_bytes) on secp256k1.
    """
    private_key = ec.generate_private_key(ec.SECP256K1())
    private_bytes = private_key.private_numbers().private_value.to_bytes(32, byteorder="big")
    return private_bytes, _raw_public_bytes(private_key.public_key())


def public_key_from_private(private_key_bytes: bytes) -> bytes:
    if len(private_key_bytes) != 32:
        raise ValueError("Private key must be 32 bytes")

    private_value = int.from_bytes(private_key_bytes, byteorder="big")
    private_key = ec.derive_private_key(private_value, ec.SECP256K1())
    return _raw_public_bytes(private_key.public_key())


def decompress_public_key(compressed: bytes) -> bytes:
    """
    Expand a 33-byte SEC1 compressed secp256k1 key to its 64-byte X || Y form.

    Raises ValueError if the bytes are not a point on the curve.
    """
    if len(compressed) != COMPRESSED_PUBLIC_KEY_LENGTH:
        raise ValueError(f"Compressed public key must be 33 bytes, got {len(compressed)}")

    public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), compressed)
    return _raw_public_bytes(public_key)


# ─────────────────────────────────────────────
# Deterministic job hashes
# ─────────────────────────────────────────────

def compute_deterministic_hashes(
    n: int,
    blueprint_id: int,
    call_id: int,
) -> Tuple[bytes, bytes]:
    """
    Returns (meta_hash, deterministic_hash) for a keygen run.

    meta_hash identifies the keygen output in the local store; every party
    of the same (n, blueprint, call) derives the same value. The keygen
    execution id is hashed from it with a separate salt.
    """
    meta_hash = sha256(concat_bytes([
        uint16_be(n),
        uint64_be(blueprint_id),
        uint64_be(call_id),
        utf8_encode(META_SALT),
    ]))

    deterministic_hash = sha256(concat_bytes([
        meta_hash,
        utf8_encode(KEYGEN_SALT),
    ]))

    return meta_hash, deterministic_hash


def key_refresh_execution_hash(deterministic_hash: bytes, call_id: int) -> bytes:
    return sha256(concat_bytes([
        sha256(deterministic_hash),
        uint64_be(call_id),
        utf8_encode(KEY_REFRESH_SALT),
    ]))


def signing_execution_hash(deterministic_hash: bytes, call_id: int) -> bytes:
    # the keygen hash locates the stored share; call_id keeps each signing
    # run's execution id unique
    return sha256(concat_bytes([
        deterministic_hash,
        uint64_be(call_id),
        utf8_encode(SIGNING_SALT),
    ]))


def store_key(meta_hash: bytes) -> str:
    return to_hex(meta_hash)
