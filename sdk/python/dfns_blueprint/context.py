from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from .config import BlueprintConfig
from .core import (
    COMPRESSED_PUBLIC_KEY_LENGTH,
    RAW_PUBLIC_KEY_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_LENGTH,
    decompress_public_key,
    derive_operator_address,
)
from .exceptions import ContextError, KeyFormatError
from .store import LocalDatabase
from .utils import to_hex

logger = logging.getLogger(__name__)

NETWORK_PROTOCOL = "/dfns/cggmp21/1.0.0"
KEYSTORE_FILE = "dfns.json"


def raw_operator_key(public_key: bytes) -> bytes:
    """
    Normalize a registry-supplied secp256k1 key to its 64-byte X || Y form.

    Accepts 33-byte compressed, 65-byte 0x04-prefixed, or raw 64-byte keys.
    """
    length = len(public_key)
    if length == RAW_PUBLIC_KEY_LENGTH:
        return bytes(public_key)
    if length == UNCOMPRESSED_PUBLIC_KEY_LENGTH and public_key[0] == 0x04:
        return bytes(public_key[1:])
    if length == COMPRESSED_PUBLIC_KEY_LENGTH:
        try:
            return decompress_public_key(public_key)
        except ValueError as e:
            raise KeyFormatError(f"Operator key is not a secp256k1 point: {to_hex(public_key)}") from e
    raise KeyFormatError(
        f"Unsupported operator key length: {length}",
        hint="Expected 33 (compressed), 64 (raw) or 65 (uncompressed) bytes",
    )


class DfnsContext:
    """
    Per-node service context: configuration, the local keystore, and
    operator-set resolution.
    """

    def __init__(self, config: BlueprintConfig, store: Optional[LocalDatabase] = None) -> None:
        self.config = config
        if store is None:
            store = LocalDatabase(config.keystore_uri / KEYSTORE_FILE)
        self.store = store

    @property
    def network_protocol(self) -> str:
        return NETWORK_PROTOCOL

    def blueprint_id(self) -> int:
        return self.config.blueprint_id

    def current_call_id(self) -> int:
        if self.config.call_id is None:
            raise ContextError("Call ID not found in configuration", hint="Set CALL_ID for job execution")
        return self.config.call_id

    def operators_by_address(self, operator_keys: Iterable[bytes]) -> Dict[bytes, bytes]:
        """Map each operator's derived address to its raw key, ordered by address."""
        pairs = []
        for key in operator_keys:
            raw = raw_operator_key(key)
            pairs.append((derive_operator_address(raw), raw))
        return dict(sorted(pairs))

    def party_index_and_operators(
        self,
        my_public_key: bytes,
        operator_keys: Iterable[bytes],
    ) -> Tuple[int, Dict[bytes, bytes]]:
        operators = self.operators_by_address(operator_keys)
        my_address = derive_operator_address(raw_operator_key(my_public_key))

        logger.debug(
            "Looking for %s in parties: %s",
            to_hex(my_address),
            [to_hex(addr) for addr in operators],
        )

        for index, address in enumerate(operators):
            if address == my_address:
                return index, operators

        raise ContextError(f"Party {to_hex(my_address)} not found in operator list")
